"""
Heuristic tables shared by the selector suggester and the chapter extractor.

Everything here is plain data: site conventions are added by extending a
table, never by touching the extraction logic.
"""
import re

# Elements the suggester considers as possible content containers.
CANDIDATE_TAGS = ("div", "article", "section", "main", "p")

# Page chrome. A candidate inside (or equal to) one of these is never content.
FORBIDDEN_TAGS = frozenset({
    "nav", "header", "footer", "aside", "script", "style", "form", "button",
    "a", "ul", "ol", "li", "iframe", "figure", "figcaption",
    "input", "textarea", "select", "option",
})

# Substrings of id/class attributes.
CONTENT_HINTS = (
    "content", "article", "chapter", "entry", "main-text",
    "chapter-body", "article-body",
)
CHROME_HINTS = ("sidebar", "comment")

STRONG_CONTENT_IDS = frozenset({
    "novel_content", "content", "chapter-content", "article", "main-content",
})

# Conventional layouts, suggested after the scored candidates.
FALLBACK_SELECTORS = (
    "#content",
    "#novel_content",
    ".entry-content",
    "#main-content",
    ".chapter-content",
    "article",
    ".article-body",
    ".content",
    ".main-text",
)

# Boilerplate text. Matched case-insensitively against text nodes.
JUNK_PHRASES = (
    "请在",
    "最新章节",
    "本站域名",
    "章节报错",
    "请收藏",
    "Advertisement",
    "Please support our website",
    "Share this chapter",
    "광고",
    "무단 전재",
)

# Boilerplate that is only junk in context, as regular expressions.
# "read at" counts only when a site name follows it.
JUNK_PATTERNS = (
    r"\bread (?:more |it )?at\s+(?:www\.)?[\w-]+(?:\.[\w-]+)+",
)

JUNK_SELECTORS = (
    "script",
    "style",
    "iframe",
    "noscript",
    ".ads",
    "#ads",
    "[class*='advert']",
    "[id*='advert']",
    ".ad",
    ".advertisement",
    "#ad-container",
    "#comments",
    ".comment-section",
    ".post-comments",
)

# Title rules, ranked. Strings are CSS selectors searched over the whole
# document; compiled patterns are searched in visible text nodes.
TITLE_RULES = (
    ".chapter-title",
    "#chapter-title",
    re.compile(r"分卷阅读\s*\d+"),
    re.compile(r"\bchapter\s*[-_:]?\s*\d+", re.IGNORECASE),
    re.compile(r"第\s*[\d一二三四五六七八九十百千零〇两]+\s*[章話话篇回]"),
    re.compile(r"\d+\s*화"),
    ".content-title",
    ".entry-title",
    "h1",
    "h2",
    ".toon-title",
)

# Headings looked up inside the content selector after the global rules.
CONTENT_TITLE_TAGS = ("h1", "h2", "h3")

# Text-pattern title rules ignore text inside these.
TITLE_EXCLUDED_TAGS = frozenset({
    "a", "nav", "select", "option", "script", "style", "noscript", "title",
    "button", "textarea",
})

MAX_TITLE_LENGTH = 200

NEXT_LINK_SELECTORS = (
    "a:-soup-contains('Next Chapter')",
    "a:-soup-contains('next chapter')",
    "a:-soup-contains('Next')",
    "a:-soup-contains('next')",
    "a[rel~='next']",
    "link[rel~='next']",
    "a.next-page",
    "a.nav-next",
    "a#next_chap",
    "a.btn-next",
    "a:-soup-contains('下一章')",
    "a:-soup-contains('下章')",
    "a:-soup-contains('다음화')",
    "a:-soup-contains('다음 편')",
    "#goNextBtn",
)

PREV_LINK_SELECTORS = (
    "a:-soup-contains('Previous Chapter')",
    "a:-soup-contains('previous chapter')",
    "a:-soup-contains('Previous')",
    "a:-soup-contains('previous')",
    "a[rel~='prev']",
    "link[rel~='prev']",
    "a.prev-page",
    "a.nav-previous",
    "a#prev_chap",
    "a.btn-prev",
    "a:-soup-contains('上一章')",
    "a:-soup-contains('上章')",
    "a:-soup-contains('이전화')",
    "a:-soup-contains('이전 편')",
    "#goPrevBtn",
)

# Chapter-number patterns; group 1 holds the digits.
TITLE_NUMBER_PATTERNS = (
    re.compile(r"chapter[_-]?\s*(\d+)", re.IGNORECASE),
    re.compile(r"第\s*(\d+)\s*[章話篇]"),
    re.compile(r"(\d+)\s*화"),
    re.compile(r"分卷阅读\s*(\d+)"),
)

URL_NUMBER_PATTERNS = (
    re.compile(r"/(\d+)\.html?(?:[?#]|$)", re.IGNORECASE),
    re.compile(r"/(\d+)/?(?:[?#]|$)"),
    re.compile(r"/novel/(\d+)", re.IGNORECASE),
    re.compile(r"view_?num=(\d+)", re.IGNORECASE),
)
