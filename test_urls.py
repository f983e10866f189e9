"""Tests for pagination URL resolution."""
from urllib.parse import urlparse

import pytest

from urls import resolve_url

BASE = "https://novels.example.com/book/42/chapter-7.html"


@pytest.mark.parametrize("href, expected", [
    ("chapter-8.html", "https://novels.example.com/book/42/chapter-8.html"),
    ("/book/42/chapter-8.html", "https://novels.example.com/book/42/chapter-8.html"),
    ("../43/chapter-1.html", "https://novels.example.com/book/43/chapter-1.html"),
    ("?page=2", "https://novels.example.com/book/42/chapter-7.html?page=2"),
    ("  chapter-8.html  ", "https://novels.example.com/book/42/chapter-8.html"),
])
def test_relative_links_keep_base_origin(href, expected):
    resolved = resolve_url(BASE, href)

    assert resolved == expected
    assert urlparse(resolved).netloc == urlparse(BASE).netloc
    assert urlparse(resolved).scheme == urlparse(BASE).scheme


def test_absolute_link_passes_through():
    assert resolve_url(BASE, "http://mirror.example.org/c/8") == "http://mirror.example.org/c/8"


def test_protocol_relative_link_uses_base_scheme():
    assert resolve_url(BASE, "//cdn.example.com/c/8") == "https://cdn.example.com/c/8"
    assert resolve_url("http://a.example.com/x", "//b.example.com/y") == "http://b.example.com/y"


@pytest.mark.parametrize("href", [
    None,
    "",
    "#",
    "#comments",
    "javascript:void(0)",
    "JavaScript:next()",
    "mailto:author@example.com",
    "https://",
])
def test_unresolvable_links_are_absent(href):
    assert resolve_url(BASE, href) is None


def test_relative_link_without_usable_base():
    assert resolve_url("not a url", "chapter-8.html") is None


def test_resolution_failure_is_logged(caplog):
    with caplog.at_level("WARNING"):
        resolve_url(BASE, "javascript:void(0)")

    assert "Invalid URL resolution" in caplog.text
