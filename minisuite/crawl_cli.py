"""Command line front end that crawls URLs and saves the pages to disk."""

from __future__ import annotations

import hashlib
import sys
from pathlib import Path
from typing import Optional, Sequence

from .crawler import Crawler

PROG = "crawler"
OUTPUT_DIR = "crawled_pages"


def page_filename(url: str) -> str:
    """A stable file name for the page fetched from ``url``."""
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:20]
    return f"{digest}.html"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Crawl the URLs given as arguments; returns the exit status."""
    urls = list(sys.argv[1:] if argv is None else argv)
    if not urls:
        print(f"Usage: {PROG} [URLs...]", file=sys.stderr)
        print(f"Example: {PROG} http://example.com http://example.org", file=sys.stderr)
        return 1

    crawler = Crawler(4, 100)
    for url in urls:
        print(f"Adding URL to crawl: {url}")
        crawler.add_url(url)

    output = Path(OUTPUT_DIR)
    output.mkdir(parents=True, exist_ok=True)

    def save(url: str, content: bytes) -> None:
        print(f"Crawled: {url} (size: {len(content)} bytes)")
        path = output / page_filename(url)
        try:
            path.write_bytes(content)
        except OSError:
            print(f"Failed to save: {path}", file=sys.stderr)
            return
        print(f"Saved to: {path}")

    crawler.start(save)
    crawler.wait()

    print(f"Crawling completed. Crawled {crawler.crawled_count()} pages.")
    return 0