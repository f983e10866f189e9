"""URL resolution for pagination links."""
import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

from exceptions import ResolutionWarning

logger = logging.getLogger(__name__)

_UNRESOLVABLE_SCHEMES = ("javascript:", "mailto:", "tel:", "data:")


def _require_absolute(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ResolutionWarning(f"not an absolute http(s) URL: {url!r}")
    return url


def _resolve(base_url: str, href: str) -> str:
    href = href.strip()
    if not href or href.startswith("#"):
        raise ResolutionWarning(f"href {href!r} does not point to another page")
    if href.lower().startswith(_UNRESOLVABLE_SCHEMES):
        raise ResolutionWarning(f"href {href!r} is not a navigable link")

    if href.startswith(("http://", "https://")):
        return _require_absolute(href)

    base = urlparse(base_url)
    if href.startswith("//"):
        if not base.scheme:
            raise ResolutionWarning(f"base URL {base_url!r} has no scheme for {href!r}")
        return _require_absolute(f"{base.scheme}:{href}")

    _require_absolute(base_url)
    return _require_absolute(urljoin(base_url, href))


def resolve_url(base_url: str, href: Optional[str]) -> Optional[str]:
    """
    Resolve a link target against the page it was found on.

    Args:
        base_url: Absolute URL of the page
        href: Raw href attribute value

    Returns:
        Absolute URL, or None when the href is missing or unresolvable
    """
    if href is None:
        return None
    try:
        return _resolve(base_url, href)
    except (ResolutionWarning, ValueError) as e:
        logger.warning(f"Invalid URL resolution: base='{base_url}', relative='{href}', Error: {e}")
        return None
