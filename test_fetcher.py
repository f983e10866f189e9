"""Tests for the page fetcher."""
import asyncio

import httpx
import pytest

from config import Settings
from exceptions import FetchError
from fetcher import PageFetcher


def _fetcher(handler, **overrides):
    config = Settings(_env_file=None, fetch_retries=2, **overrides)
    fetcher = PageFetcher(config, transport=httpx.MockTransport(handler))
    fetcher.backoff = 0
    return fetcher


def test_fetch_returns_body_and_sends_browser_headers():
    seen = {}

    def handler(request):
        seen["user_agent"] = request.headers["user-agent"]
        return httpx.Response(200, text="<html><body>ok</body></html>")

    html = asyncio.run(_fetcher(handler).fetch("https://example.com/c/1"))

    assert html == "<html><body>ok</body></html>"
    assert "Mozilla" in seen["user_agent"]


def test_fetch_retries_retryable_status():
    calls = []

    def handler(request):
        calls.append(request.url)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, text="finally")

    html = asyncio.run(_fetcher(handler).fetch("https://example.com/c/1"))

    assert html == "finally"
    assert len(calls) == 3


def test_fetch_gives_up_after_retries():
    calls = []

    def handler(request):
        calls.append(request.url)
        return httpx.Response(429)

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(_fetcher(handler).fetch("https://example.com/c/1"))

    assert excinfo.value.status == 429
    assert len(calls) == 3


def test_fetch_does_not_retry_client_errors():
    calls = []

    def handler(request):
        calls.append(request.url)
        return httpx.Response(404)

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(_fetcher(handler).fetch("https://example.com/c/1"))

    assert excinfo.value.status == 404
    assert "https://example.com/c/1" in str(excinfo.value)
    assert len(calls) == 1


def test_fetch_retries_transport_errors():
    calls = []

    def handler(request):
        calls.append(request.url)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, text="recovered")

    assert asyncio.run(_fetcher(handler).fetch("https://example.com/c/1")) == "recovered"
