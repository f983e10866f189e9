"""Shared pytest fixtures."""
import pytest

from config import Settings


CHAPTER_URL = "https://example-novels.com/novel/7.html"

CHAPTER_PAGE = """
<html>
<head>
  <title>Chapter 7 - Example Novel</title>
  <link rel="next" href="/novel/8.html">
</head>
<body>
  <header><nav><a href="/">Home</a><a href="/novel/">Index</a></nav></header>
  <h1 class="chapter-title">Chapter 7: The Mountain Gate</h1>
  <div id="content">
    <p>The wind howled across the mountain pass as Lin Feng climbed.</p>
    <p>Advertisement</p>
    <p>He had walked for three days without rest, and his legs ached.</p>
    <div class="ads">Buy premium coins now!</div>
    <p>At last the gate of the sect appeared through the mist.</p>
    <script>var tracker = 1;</script>
    <p>Please support our website by bookmarking example-novels.com</p>
    <p>An old man in grey robes waited beside the stone lion.</p>
    <p>"You are late," the old man said without turning around.</p>
  </div>
  <div class="nav-links">
    <a href="/novel/6.html">Previous Chapter</a>
    <a href="/novel/">Index</a>
    <a href="/novel/8.html">Next Chapter</a>
  </div>
  <aside id="sidebar"><a href="/popular">Popular</a></aside>
</body>
</html>
"""


@pytest.fixture
def chapter_page():
    return CHAPTER_PAGE


@pytest.fixture
def chapter_url():
    return CHAPTER_URL


@pytest.fixture
def config():
    """Default settings, independent of any local .env file."""
    return Settings(_env_file=None)
