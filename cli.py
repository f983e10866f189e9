"""
CLI utility for the novel reader backend.

Usage:
    python cli.py suggest <url>                          # Suggest content selectors
    python cli.py suggest <url> --html-file page.html    # ...for a saved page
    python cli.py scrape <url> --selector "#content"     # Scrape a chapter
    python cli.py scrape --novel novel.json               # Use a saved novel config
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from config import settings
from exceptions import ScraperError
from extractor import ChapterExtractor
from fetcher import PageFetcher
from schemas import NovelConfig
from suggester import SelectorSuggester

logger = logging.getLogger(__name__)


def load_html(url, html_file=None):
    """Read HTML from a file, or fetch it from the URL."""
    if html_file:
        return Path(html_file).read_text(encoding="utf-8", errors="replace")
    return asyncio.run(PageFetcher(settings).fetch(url))


def cmd_suggest(args):
    """Print selector suggestions for a page."""
    html = load_html(args.url, args.html_file)
    suggestions = SelectorSuggester(settings).suggest(html, args.url)

    print(f"\n{'#':<4} {'Selector':<50}")
    print("-" * 54)
    for rank, selector in enumerate(suggestions, start=1):
        print(f"{rank:<4} {selector:<50}")

    print(f"\nTotal: {len(suggestions)} suggestions")


def cmd_scrape(args):
    """Scrape a chapter and print it."""
    url, selector = args.url, args.selector
    if args.novel:
        novel = NovelConfig.model_validate_json(Path(args.novel).read_text(encoding="utf-8"))
        url = url or novel.url
        selector = selector or novel.selector

    if not url or not selector:
        print("Error: a URL and a selector are required (directly or via --novel)")
        sys.exit(1)

    html = load_html(url, args.html_file)
    chapter = ChapterExtractor(settings).extract(html, selector, url)

    if args.json:
        print(json.dumps(chapter.model_dump(by_alias=True), ensure_ascii=False, indent=2))
        return

    number = chapter.chapter_number if chapter.chapter_number is not None else "-"
    print(f"\nTitle:    {chapter.title}")
    print(f"Chapter:  {number}")
    print(f"Previous: {chapter.prev_url or '-'}")
    print(f"Next:     {chapter.next_url or '-'}")
    print("-" * 60)
    print(chapter.content)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Novel Reader Backend CLI"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Suggest command
    suggest_parser = subparsers.add_parser("suggest", help="Suggest content selectors for a page")
    suggest_parser.add_argument("url", help="Chapter page URL")
    suggest_parser.add_argument(
        "--html-file",
        help="Read the page from this file instead of fetching it"
    )
    suggest_parser.set_defaults(func=cmd_suggest)

    # Scrape command
    scrape_parser = subparsers.add_parser("scrape", help="Scrape a chapter")
    scrape_parser.add_argument("url", nargs="?", help="Chapter page URL")
    scrape_parser.add_argument("--selector", help="CSS selector of the content container")
    scrape_parser.add_argument(
        "--novel",
        help="JSON file with a saved novel configuration (url, selector, ...)"
    )
    scrape_parser.add_argument(
        "--html-file",
        help="Read the page from this file instead of fetching it"
    )
    scrape_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the chapter as JSON"
    )
    scrape_parser.set_defaults(func=cmd_scrape)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except ScraperError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
