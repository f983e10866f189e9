"""DOM helpers on top of BeautifulSoup and soupsieve."""
import logging
import re
from typing import Callable, List, Optional, Union

import soupsieve
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag

from exceptions import ParseError

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_CLASS_RE = re.compile(r"^[A-Za-z_-][A-Za-z0-9_-]*$")
_SPACE_RE = re.compile(r"\s+")


def parse_html(html, url: Optional[str] = None) -> BeautifulSoup:
    """
    Parse raw HTML with the lxml parser.

    Args:
        html: Raw HTML (str or bytes)
        url: Page URL, only used in error messages

    Returns:
        Parsed document

    Raises:
        ParseError: input is missing, blank, or rejected by the parser
    """
    if not isinstance(html, (str, bytes)):
        raise ParseError(url, f"expected HTML text, got {type(html).__name__}")
    if not html.strip():
        raise ParseError(url, "document is empty")

    try:
        soup = BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(url, str(e)) from e

    if soup.find(True) is None:
        raise ParseError(url, "document contains no elements")
    return soup


def is_text_node(node) -> bool:
    """True for visible text nodes (not comments, doctypes or CDATA)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def direct_text(element: Tag) -> str:
    """Text of the element's immediate text-node children only."""
    return "".join(str(child) for child in element.children if is_text_node(child))


def normalize_space(text: str) -> str:
    return _SPACE_RE.sub(" ", text).strip()


def find_ancestor(
    element,
    test: Union[str, Callable[[Tag], bool]],
    include_self: bool = True,
    stop: Optional[Tag] = None,
) -> Optional[Tag]:
    """
    Walk up from ``element`` and return the first node passing ``test``.

    ``test`` is a CSS selector or a predicate. The walk ends at the document
    root, or just below ``stop`` when given.
    """
    if isinstance(test, str):
        pattern = soupsieve.compile(test)
        test = pattern.match

    node = element if include_self else element.parent
    while node is not None and not isinstance(node, BeautifulSoup) and node is not stop:
        if isinstance(node, Tag) and test(node):
            return node
        node = node.parent
    return None


def has_ancestor(element, test, include_self: bool = True, stop: Optional[Tag] = None) -> bool:
    return find_ancestor(element, test, include_self=include_self, stop=stop) is not None


def css_identifier(value: Optional[str], kind: str = "id") -> Optional[str]:
    """
    Validate and escape an id or class token for use in a selector.

    Returns None when the token cannot safely become a selector.
    """
    if not value:
        return None
    value = value.strip()
    pattern = _ID_RE if kind == "id" else _CLASS_RE
    if not pattern.match(value):
        return None
    try:
        return soupsieve.escape(value)
    except (TypeError, ValueError):
        return None


def safe_select(root: Tag, selector: str) -> List[Tag]:
    """``root.select`` that treats a malformed selector as matching nothing."""
    try:
        return root.select(selector)
    except (soupsieve.SelectorSyntaxError, NotImplementedError) as e:
        logger.debug(f"Invalid selector {selector!r}: {e}")
        return []


def is_valid_selector(selector: str) -> bool:
    try:
        soupsieve.compile(selector)
    except (soupsieve.SelectorSyntaxError, NotImplementedError):
        return False
    return True
