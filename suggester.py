"""Suggest CSS selectors for the main chapter content of a page."""
import logging
from typing import Dict, List, Optional

from bs4.element import Tag

from config import Settings, settings as default_settings
from dom import css_identifier, direct_text, has_ancestor, parse_html, safe_select
from heuristics import (
    CANDIDATE_TAGS, CHROME_HINTS, CONTENT_HINTS,
    FALLBACK_SELECTORS, FORBIDDEN_TAGS, STRONG_CONTENT_IDS,
)

logger = logging.getLogger(__name__)


def _is_forbidden(element: Tag) -> bool:
    return element.name in FORBIDDEN_TAGS


class SelectorSuggester:
    """
    Rank DOM elements by how much they look like chapter prose.

    Each call parses the document afresh; scores live only for that call.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    def suggest(self, html, url: Optional[str] = None) -> List[str]:
        """
        Suggest content selectors for a page.

        Args:
            html: Raw page HTML
            url: Page URL, used for logging and error messages

        Returns:
            Selectors, most likely first, capped at ``suggest_max_results``

        Raises:
            ParseError: if the HTML cannot be parsed
        """
        soup = parse_html(html, url)
        root = soup.body or soup

        scores: Dict[str, float] = {}
        for element in root.find_all(list(CANDIDATE_TAGS)):
            if has_ancestor(element, _is_forbidden):
                continue

            score = self.score(element)
            if score is None or score <= self.config.suggest_score_threshold:
                continue

            selector = self.selector_for(soup, element, score)
            if not selector:
                continue

            if len(safe_select(soup, selector)) == 1:
                score += 100
            if score > scores.get(selector, float('-inf')):
                scores[selector] = score

        kept = self._drop_broad(soup, scores)
        ranked = sorted(kept, key=kept.get, reverse=True)

        suggestions = list(dict.fromkeys([*ranked, *FALLBACK_SELECTORS]))
        result = suggestions[:self.config.suggest_max_results]

        logger.info(f"Suggested {len(result)} selectors ({len(ranked)} scored) for {url or 'document'}")
        return result

    def score(self, element: Tag) -> Optional[float]:
        """
        Heuristic content score of a candidate element.

        Returns None for elements that carry too little text to be
        considered at all.
        """
        element_id = (element.get('id') or '').lower()
        class_name = ' '.join(element.get('class') or []).lower()

        likely_container = any(hint in element_id or hint in class_name for hint in CONTENT_HINTS)
        direct_text_length = len(direct_text(element).strip())
        p_count = len(element.find_all('p'))
        direct_p_count = len(element.find_all('p', recursive=False))

        if direct_text_length < self.config.suggest_min_direct_text and p_count < 1 and not likely_container:
            return None

        link_count = len(element.find_all('a'))
        child_count = len(element.find_all(True, recursive=False))

        score = direct_text_length * 0.5 + p_count * 30 - link_count * 10 - child_count * 0.1
        # Paragraphs held directly outrank the same paragraphs seen through a wrapper.
        score += direct_p_count * 5

        if element_id in STRONG_CONTENT_IDS:
            score += 10000
        if likely_container:
            score += 500
        if p_count > 5:
            score += p_count * 15
        if element_id and any(hint in element_id for hint in CHROME_HINTS):
            score -= 5000
        if class_name and any(hint in class_name for hint in CHROME_HINTS):
            score -= 5000

        return score

    def selector_for(self, soup, element: Tag, score: float) -> Optional[str]:
        """
        Derive a minimal selector for an element.

        Prefers a unique ``#id``; falls back to the first usable class token
        when it matches only a handful of elements, one of them this one.
        Returns None when no safe selector can be built.
        """
        raw_id = element.get('id')
        element_id = css_identifier(raw_id if isinstance(raw_id, str) else None, kind='id')
        if element_id and not has_ancestor(element, lambda node: node.get('id') == raw_id, include_self=False):
            selector = f"#{element_id}"
            if len(safe_select(soup, selector)) == 1:
                return selector

        p_count = len(element.find_all('p'))
        direct_text_length = len(direct_text(element).strip())
        if not (score > 300 or p_count > 3 or direct_text_length > 500):
            return None

        for token in element.get('class') or []:
            class_name = css_identifier(token, kind='class')
            if not class_name or len(token) <= 2:
                continue
            selector = f".{class_name}"
            matches = safe_select(soup, selector)
            ancestors = {id(parent) for parent in element.parents}
            if 1 <= len(matches) <= self.config.suggest_class_max_matches and any(
                match is element or id(match) in ancestors for match in matches
            ):
                return selector
            return None
        return None

    def _drop_broad(self, soup, scores: Dict[str, float]) -> Dict[str, float]:
        """Drop selectors that match too many elements to isolate the content."""
        kept = {}
        for selector, score in scores.items():
            count = len(safe_select(soup, selector))
            if count <= self.config.suggest_broad_selector_limit or (
                score > self.config.suggest_strong_score and count <= self.config.suggest_strong_selector_limit
            ):
                kept[selector] = score
            else:
                logger.debug(f"Filtering out broad selector: {selector} (matches {count})")
        return kept


def suggest_selectors(html, url: Optional[str] = None, config: Optional[Settings] = None) -> List[str]:
    """Suggest content selectors for ``html``."""
    return SelectorSuggester(config).suggest(html, url)
