"""Extract a structured chapter from a page and a content selector."""
import logging
import re
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from config import Settings, settings as default_settings
from dom import has_ancestor, is_text_node, is_valid_selector, normalize_space, parse_html, safe_select
from exceptions import ContentNotFoundError
from heuristics import (
    CONTENT_TITLE_TAGS, MAX_TITLE_LENGTH, NEXT_LINK_SELECTORS, PREV_LINK_SELECTORS,
    TITLE_EXCLUDED_TAGS, TITLE_NUMBER_PATTERNS, TITLE_RULES, URL_NUMBER_PATTERNS,
)
from normalizer import INLINE_TAGS, ContentCleaner, join_paragraphs
from schemas import ScrapedChapter
from urls import resolve_url

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown Chapter"


def _excluded_from_title(element: Tag) -> bool:
    return element.name in TITLE_EXCLUDED_TAGS


class ChapterExtractor:
    """
    Turn a chapter page into a ScrapedChapter.

    Only a selector that matches nothing is fatal. Title, chapter number and
    pagination links fall back to defaults when they cannot be found.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self.cleaner = ContentCleaner(self.config)

    def extract(self, html, selector: str, source_url: str) -> ScrapedChapter:
        """
        Extract a chapter.

        Args:
            html: Raw page HTML
            selector: CSS selector of the content container
            source_url: URL the page was fetched from

        Returns:
            ScrapedChapter

        Raises:
            ParseError: HTML cannot be parsed
            ContentNotFoundError: selector matches no element
        """
        soup = parse_html(html, source_url)

        selector = (selector or '').strip()
        if not selector:
            raise ContentNotFoundError(selector, source_url, reason="is empty")
        if not is_valid_selector(selector):
            raise ContentNotFoundError(selector, source_url, reason="is not a valid CSS selector")

        matches = safe_select(soup, selector)
        if not matches:
            raise ContentNotFoundError(selector, source_url)
        roots = self._outermost(matches)

        for root in roots:
            self.cleaner.remove_junk(root)
        content = join_paragraphs(self.cleaner.assemble(roots))

        title = self.find_title(soup, roots)
        next_url = self.find_link(soup, NEXT_LINK_SELECTORS, source_url)
        prev_url = self.find_link(soup, PREV_LINK_SELECTORS, source_url)
        chapter_number = self.chapter_number(title, source_url)
        logger.info(f"Extracted Chapter Number: {chapter_number}")

        if not content:
            logger.warning(f"No paragraphs left for selector {selector!r} on {source_url}")
            content = (
                f'Content not found with selector ("{selector}") on {source_url} '
                f'or was empty after cleaning.'
            )

        return ScrapedChapter(
            title=title,
            chapter_number=chapter_number,
            content=content,
            next_url=next_url,
            prev_url=prev_url,
        )

    @staticmethod
    def _outermost(matches: List[Tag]) -> List[Tag]:
        """Drop matches nested inside another match."""
        match_ids = {id(match) for match in matches}
        return [
            match for match in matches
            if not any(id(parent) in match_ids for parent in match.parents)
        ]

    # ------------------------------------------------------------------
    # Title
    # ------------------------------------------------------------------

    def find_title(self, soup: BeautifulSoup, roots: Sequence[Tag]) -> str:
        """Apply the ranked title rules; ``UNKNOWN_TITLE`` when none match."""
        search_root = soup.body or soup

        for rule in TITLE_RULES:
            if isinstance(rule, re.Pattern):
                title = self._title_from_pattern(search_root, rule, roots)
            else:
                title = self._title_from_selector(search_root, rule)
            if title:
                return title

        for tag in CONTENT_TITLE_TAGS:
            for root in roots:
                heading = root.find(tag)
                if heading is not None:
                    title = normalize_space(heading.get_text())
                    if title:
                        return title

        return UNKNOWN_TITLE

    @staticmethod
    def _title_from_selector(search_root: Tag, selector: str) -> Optional[str]:
        for element in safe_select(search_root, selector):
            title = normalize_space(element.get_text())
            if title:
                return title
        return None

    @staticmethod
    def _title_from_pattern(search_root: Tag, pattern: re.Pattern, roots: Sequence[Tag] = ()) -> Optional[str]:
        """First chapter-marker text found outside the content roots."""
        root_ids = {id(root) for root in roots}
        for text_node in search_root.find_all(string=pattern):
            if not is_text_node(text_node) or text_node.parent is None:
                continue
            element = text_node.parent
            if has_ancestor(element, _excluded_from_title) or has_ancestor(element, lambda node: id(node) in root_ids):
                continue
            while element.name in INLINE_TAGS and isinstance(element.parent, Tag) and element.parent is not search_root:
                element = element.parent
            title = normalize_space(element.get_text())
            if title and len(title) <= MAX_TITLE_LENGTH:
                return title
        return None

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    @staticmethod
    def find_link(soup: BeautifulSoup, selectors: Sequence[str], source_url: str) -> Optional[str]:
        """
        Resolve the first pagination link found by the ranked selectors.

        The whole document is searched since navigation usually sits outside
        the content container.
        """
        for selector in selectors:
            for element in safe_select(soup, selector):
                href = element.get('href')
                if href is None:
                    continue
                return resolve_url(source_url, href)
        return None

    # ------------------------------------------------------------------
    # Chapter number
    # ------------------------------------------------------------------

    @staticmethod
    def chapter_number(title: str, source_url: str) -> Optional[int]:
        """
        Infer the chapter number from the title, then from the URL.

        The chapter body is never consulted.
        """
        candidates = (
            (title, TITLE_NUMBER_PATTERNS),
            (source_url, TITLE_NUMBER_PATTERNS + URL_NUMBER_PATTERNS),
        )
        for text, patterns in candidates:
            if not text:
                continue
            for pattern in patterns:
                match = pattern.search(text)
                if match and int(match.group(1)) > 0:
                    return int(match.group(1))
        return None


def extract_chapter(html, selector: str, source_url: str, config: Optional[Settings] = None) -> ScrapedChapter:
    """Extract a chapter from ``html`` using ``selector``."""
    return ChapterExtractor(config).extract(html, selector, source_url)
