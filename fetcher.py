"""HTTP fetching of chapter pages with retries."""
import asyncio
import logging
from typing import Optional

import httpx

from config import Settings, settings as default_settings
from exceptions import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Download raw HTML for a URL.

    Retries with exponential backoff on transport errors and on the
    configured retryable status codes.
    """

    def __init__(self, config: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or default_settings
        self.transport = transport
        self.backoff = 1.0

    @property
    def headers(self) -> dict:
        return {
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self.config.accept_language,
            "User-Agent": self.config.user_agent,
        }

    async def fetch(self, url: str) -> str:
        """
        Fetch a page.

        Args:
            url: Absolute http(s) URL

        Returns:
            Decoded response body

        Raises:
            FetchError: after the last attempt fails
        """
        max_retries = max(self.config.fetch_retries, 0)
        last_error: Optional[FetchError] = None

        async with httpx.AsyncClient(
            headers=self.headers,
            timeout=self.config.fetch_timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            for attempt in range(max_retries + 1):
                if attempt:
                    delay = self.backoff * (2 ** (attempt - 1))
                    logger.warning(f"Retrying {url} (attempt {attempt}/{max_retries}) in {delay:.1f}s")
                    await asyncio.sleep(delay)

                try:
                    response = await client.get(url)
                except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
                    raise FetchError(url, reason=f"invalid URL ({e})") from e
                except httpx.HTTPError as e:
                    logger.error(f"Request exception: {e}")
                    last_error = FetchError(url, reason=type(e).__name__)
                    continue

                if response.status_code in self.config.retry_http_codes:
                    last_error = FetchError(url, response.status_code, response.reason_phrase)
                    continue

                if response.is_error:
                    logger.error(f"Fetch failed: Status {response.status_code}, Body: {response.text[:500]}")
                    raise FetchError(url, response.status_code, response.reason_phrase)

                logger.info(f"Fetched {url} ({len(response.content)} bytes)")
                return response.text

        logger.error(f"Max retries reached for {url}")
        raise last_error or FetchError(url)
