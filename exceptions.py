"""Errors raised by the scraping core and the fetch layer."""
from typing import Optional


class ScraperError(Exception):
    """Base class for errors that abort a suggest or scrape request."""


class ParseError(ScraperError):
    """HTML could not be turned into a DOM."""

    def __init__(self, url: Optional[str] = None, reason: str = "document could not be parsed"):
        self.url = url
        self.reason = reason
        where = f" from {url}" if url else ""
        super().__init__(f"Failed to parse HTML{where}: {reason}")


class ContentNotFoundError(ScraperError):
    """Selector matched zero elements on the page."""

    def __init__(self, selector: str, url: Optional[str] = None, reason: Optional[str] = None):
        self.selector = selector
        self.url = url
        detail = reason or "did not match any elements"
        super().__init__(
            f'Content not found. The selector "{selector}" {detail} on the page {url}. '
            f'Try using the "Suggest" button.'
        )


class FetchError(ScraperError):
    """Page could not be downloaded."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status = status
        parts = [str(part) for part in (status, reason) if part]
        super().__init__(f"Failed to fetch: {' '.join(parts) or 'no response'} from {url}")


class ResolutionWarning(Exception):
    """A pagination href could not be resolved to an absolute URL.

    Never leaves the extractor: it is logged and the link is treated as absent.
    """
