"""Tests for chapter extraction."""
import pytest

from exceptions import ContentNotFoundError, ParseError
from extractor import ChapterExtractor, UNKNOWN_TITLE, extract_chapter
from heuristics import JUNK_PHRASES


def test_paragraphs_joined_with_blank_line(config):
    html = '<div id="content"><p>Hello</p><p>World</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/1", config)

    assert chapter.content == "Hello\n\nWorld"


def test_missing_selector_raises(config):
    with pytest.raises(ContentNotFoundError) as excinfo:
        extract_chapter("<div><p>text</p></div>", "#missing", "https://example.com/1", config)

    assert "#missing" in str(excinfo.value)
    assert "https://example.com/1" in str(excinfo.value)
    assert excinfo.value.selector == "#missing"


def test_invalid_selector_is_content_not_found(config):
    with pytest.raises(ContentNotFoundError):
        extract_chapter("<div><p>text</p></div>", "div[", "https://example.com/1", config)


def test_blank_document_is_parse_error(config):
    with pytest.raises(ParseError):
        extract_chapter("   ", "#content", "https://example.com/1", config)


def test_br_fallback_splits_paragraphs(config):
    html = '<div id="content"><div>Hello<br>World</div></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/1", config)

    assert chapter.content.split("\n\n") == ["Hello", "World"]


def test_fallback_suppresses_consecutive_duplicates(config):
    html = '<div id="content">Same line<br>Same line<br>Another line</div>'

    chapter = extract_chapter(html, "#content", "https://example.com/1", config)

    assert chapter.content == "Same line\n\nAnother line"


def test_full_page(chapter_page, chapter_url, config):
    chapter = ChapterExtractor(config).extract(chapter_page, "#content", chapter_url)

    assert chapter.title == "Chapter 7: The Mountain Gate"
    assert chapter.chapter_number == 7
    assert chapter.next_url == "https://example-novels.com/novel/8.html"
    assert chapter.prev_url == "https://example-novels.com/novel/6.html"
    assert chapter.content.split("\n\n") == [
        "The wind howled across the mountain pass as Lin Feng climbed.",
        "He had walked for three days without rest, and his legs ached.",
        "At last the gate of the sect appeared through the mist.",
        "An old man in grey robes waited beside the stone lion.",
        '"You are late," the old man said without turning around.',
    ]


def test_junk_never_reaches_content(chapter_page, chapter_url, config):
    chapter = extract_chapter(chapter_page, "#content", chapter_url, config)

    for phrase in JUNK_PHRASES:
        assert phrase.lower() not in chapter.content.lower()
    assert "premium coins" not in chapter.content
    assert "tracker" not in chapter.content
    assert "<" not in chapter.content


def test_extract_is_idempotent(chapter_page, chapter_url, config):
    first = extract_chapter(chapter_page, "#content", chapter_url, config)
    second = extract_chapter(chapter_page, "#content", chapter_url, config)

    assert first == second


def test_empty_content_uses_placeholder(config):
    html = '<html><body><div id="content"><script>load()</script></div></body></html>'

    chapter = extract_chapter(html, "#content", "https://example.com/c/3", config)

    assert chapter.content
    assert "#content" in chapter.content
    assert "https://example.com/c/3" in chapter.content


def test_title_number_beats_url_number(config):
    html = '<h1>Chapter 42</h1><div id="content"><p>Text</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/book/17.html", config)

    assert chapter.chapter_number == 42


def test_url_number_when_title_has_none(config):
    html = '<div id="content"><p>Text</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/book/17.html", config)

    assert chapter.title == UNKNOWN_TITLE
    assert chapter.chapter_number == 17


def test_url_chapter_slug(config):
    html = '<div id="content"><p>Text</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/novel/chapter-88", config)

    assert chapter.chapter_number == 88


def test_no_number_anywhere(config):
    html = '<div id="content"><p>Chapter text with 1000 soldiers.</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/read/latest", config)

    assert chapter.chapter_number is None


def test_chinese_title_and_links(config):
    html = """
    <html><body>
      <div class="bookname"><h1>第12章 归来</h1></div>
      <div id="content">　　他回来了。<br>　　请在本站阅读最新章节<br>　　天色已晚。</div>
      <div class="bottem"><a href="11.html">上一章</a><a href="13.html">下一章</a></div>
    </body></html>
    """

    chapter = extract_chapter(html, "#content", "https://www.example.cn/book/12.html", config)

    assert chapter.title == "第12章 归来"
    assert chapter.chapter_number == 12
    assert chapter.content == "他回来了。\n\n天色已晚。"
    assert chapter.prev_url == "https://www.example.cn/book/11.html"
    assert chapter.next_url == "https://www.example.cn/book/13.html"


def test_korean_title(config):
    html = '<div class="toon-title">15화</div><div id="content"><p>본문</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.kr/view", config)

    assert chapter.title == "15화"
    assert chapter.chapter_number == 15


def test_title_from_content_heading(config):
    html = '<div id="content"><h3>The Long Road</h3><p>Text</p></div>'

    chapter = extract_chapter(html, "#content", "https://example.com/read", config)

    assert chapter.title == "The Long Road"


def test_chapter_word_in_link_is_not_title(config):
    html = """
    <a href="/c/2">Chapter 2</a>
    <h2>The Quiet Valley</h2>
    <div id="content"><p>Text</p></div>
    """

    chapter = extract_chapter(html, "#content", "https://example.com/c/1", config)

    assert chapter.title == "The Quiet Valley"


def test_rel_next_link(config):
    html = """
    <html><head><link rel="next" href="/c/3"><link rel="prev" href="/c/1"></head>
    <body><div id="content"><p>Text</p></div></body></html>
    """

    chapter = extract_chapter(html, "#content", "https://example.com/c/2", config)

    assert chapter.next_url == "https://example.com/c/3"
    assert chapter.prev_url == "https://example.com/c/1"


def test_unresolvable_link_is_absent(config):
    html = """
    <div id="content"><p>Text</p></div>
    <a href="javascript:void(0)">Next Chapter</a>
    """

    chapter = extract_chapter(html, "#content", "https://example.com/c/2", config)

    assert chapter.next_url is None
    assert chapter.prev_url is None


def test_protocol_relative_link(config):
    html = '<div id="content"><p>Text</p></div><a href="//cdn.example.com/c/3">Next</a>'

    chapter = extract_chapter(html, "#content", "https://example.com/c/2", config)

    assert chapter.next_url == "https://cdn.example.com/c/3"


def test_serialises_with_camel_case_keys(chapter_page, chapter_url, config):
    chapter = extract_chapter(chapter_page, "#content", chapter_url, config)

    data = chapter.model_dump(by_alias=True)

    assert set(data) == {"title", "chapterNumber", "content", "nextUrl", "prevUrl"}


def test_chapter_mention_in_prose_is_not_title(config):
    html = """
    <html><body>
      <h1>The Mountain Gate</h1>
      <div id="content">
        <p>He opened the manual at chapter 3 and read.</p>
        <p>The wind rose over the pass.</p>
      </div>
    </body></html>
    """

    chapter = extract_chapter(html, "#content", "https://example-novels.com/novel/7.html", config)

    assert chapter.title == "The Mountain Gate"
    assert chapter.chapter_number == 7
