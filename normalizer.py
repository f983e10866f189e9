"""Content cleaning and paragraph assembly for scraped chapters."""
import re
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from bs4.element import Tag

from config import Settings, settings as default_settings
from dom import is_text_node, normalize_space, safe_select
from heuristics import JUNK_PATTERNS, JUNK_PHRASES, JUNK_SELECTORS

logger = logging.getLogger(__name__)

# Tags that start a new paragraph when walking text.
BLOCK_TAGS = frozenset({
    "address", "article", "blockquote", "dd", "div", "dl", "dt", "h1", "h2",
    "h3", "h4", "h5", "h6", "hr", "li", "main", "ol", "p", "pre", "section",
    "table", "tr", "ul",
})

INLINE_TAGS = frozenset({
    "a", "b", "big", "em", "font", "i", "mark", "small", "span", "strong", "u",
})

Strategy = Tuple[str, Optional[Callable[[Sequence[Tag]], bool]], Callable[[Sequence[Tag]], List[str]]]


class ContentCleaner:
    """
    Clean a selected content subtree and turn it into prose paragraphs.

    Removes ads, scripts, comment blocks and boilerplate phrases in place,
    then assembles paragraphs with a ranked list of strategies.
    """

    JUNK_SELECTORS = JUNK_SELECTORS

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        phrases = [p for p in (*JUNK_PHRASES, *self.config.extra_junk_phrases) if p]
        self.junk_phrases = tuple(phrases)
        alternatives = [re.escape(p) for p in phrases] + list(JUNK_PATTERNS)
        self.junk_pattern = re.compile('|'.join(alternatives), re.IGNORECASE)

    def is_junk(self, text: str) -> bool:
        """Check whether text contains a known boilerplate phrase."""
        return bool(text) and self.junk_pattern.search(text) is not None

    # ------------------------------------------------------------------
    # Junk removal
    # ------------------------------------------------------------------

    def remove_junk(self, root: Tag) -> int:
        """
        Remove junk from the subtree under ``root``, in place.

        Args:
            root: Selected content element (kept itself)

        Returns:
            Number of nodes removed
        """
        removed = 0

        for element in safe_select(root, ', '.join(self.JUNK_SELECTORS)):
            if element.decomposed:
                continue
            element.decompose()
            removed += 1

        for text_node in root.find_all(string=self.junk_pattern):
            if text_node.decomposed or not is_text_node(text_node) or text_node.parent is None:
                continue
            element = text_node.parent
            while (element is not root and element.name in INLINE_TAGS
                   and element.parent is not root and not self._is_container(element.parent)):
                element = element.parent
            if element is root or self._is_container(element):
                text_node.extract()
            else:
                element.decompose()
            removed += 1

        if removed:
            logger.debug(f"Removed {removed} junk nodes")
        return removed

    @staticmethod
    def _is_container(element: Tag) -> bool:
        """Element holds more than one paragraph, so only the junk text goes."""
        return element.find(['br', *BLOCK_TAGS]) is not None

    # ------------------------------------------------------------------
    # Paragraph assembly
    # ------------------------------------------------------------------

    def strategies(self) -> Tuple[Strategy, ...]:
        """Paragraph strategies in order of preference: (name, gate, extract)."""
        return (
            ("paragraph_tags", self._has_paragraph_structure, self._paragraph_tags),
            ("child_blocks", None, self._child_blocks),
        )

    def assemble(self, roots: Sequence[Tag]) -> List[str]:
        """
        Build the paragraph list for the given content roots.

        The first strategy whose gate passes and that yields enough
        paragraphs wins. Otherwise the strategy with the most paragraphs is
        used, earlier strategies winning ties.
        """
        attempts = []
        for name, gate, extract in self.strategies():
            paragraphs = self._accept(extract(roots))
            if (gate is None or gate(roots)) and len(paragraphs) >= self.config.extract_min_paragraphs:
                logger.info(f"Paragraph strategy '{name}' produced {len(paragraphs)} paragraphs")
                return paragraphs
            attempts.append((name, paragraphs))

        name, paragraphs = max(attempts, key=lambda attempt: len(attempt[1]))
        logger.info(f"Using fallback text extraction '{name}' with {len(paragraphs)} paragraphs")
        return paragraphs

    def _accept(self, paragraphs: List[str]) -> List[str]:
        min_chars = self.config.extract_min_paragraph_chars
        return [p for p in paragraphs if len(p) >= max(min_chars, 1) and not self.is_junk(p)]

    def _has_paragraph_structure(self, roots: Sequence[Tag]) -> bool:
        p_count = sum(len(root.find_all('p')) for root in roots)
        text_length = sum(len(root.get_text().strip()) for root in roots)
        return p_count > self.config.extract_min_p_tags and text_length >= self.config.extract_min_text_length

    def _paragraph_tags(self, roots: Sequence[Tag]) -> List[str]:
        """One paragraph per <p> element."""
        paragraphs = []
        for root in roots:
            for p in root.find_all('p'):
                lines = self._lines(p)
                if lines:
                    paragraphs.append('\n'.join(lines))
        return paragraphs

    def _child_blocks(self, roots: Sequence[Tag]) -> List[str]:
        """Paragraphs from block children, text runs and <br> breaks."""
        paragraphs: List[str] = []
        for root in roots:
            for line in self._lines(root):
                if paragraphs and paragraphs[-1] == line:
                    continue
                paragraphs.append(line)
        return paragraphs

    def _lines(self, element: Tag) -> List[str]:
        lines: List[str] = []
        buffer: List[str] = []
        self._collect(element, lines, buffer)
        self._flush(buffer, lines)
        return lines

    def _collect(self, element: Tag, lines: List[str], buffer: List[str]) -> None:
        for child in element.children:
            if isinstance(child, Tag):
                if child.name == 'br':
                    self._flush(buffer, lines)
                elif child.name in BLOCK_TAGS:
                    self._flush(buffer, lines)
                    self._collect(child, lines, buffer)
                    self._flush(buffer, lines)
                else:
                    self._collect(child, lines, buffer)
            elif is_text_node(child):
                buffer.append(str(child))

    @staticmethod
    def _flush(buffer: List[str], lines: List[str]) -> None:
        text = normalize_space(''.join(buffer))
        buffer.clear()
        if text:
            lines.append(text)


def join_paragraphs(paragraphs: Sequence[str]) -> str:
    """Join paragraphs with a blank line between them."""
    return '\n\n'.join(p.strip() for p in paragraphs if p.strip())
