"""A concurrent crawler that fetches queued URLs on a thread pool."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque, Optional, Set

from .http_client import HttpClient, HttpError, HttpResponse
from .thread_pool import ThreadPool

logger = logging.getLogger(__name__)

PageCallback = Callable[[str, bytes], object]
Fetcher = Callable[[str], HttpResponse]


class Crawler:
    """Fetches each queued URL once, handing successful pages to a callback.

    ``fetch`` takes a URL and returns an HttpResponse, raising HttpError on
    failure; by default an HttpClient with a 30 second timeout is used.
    Only responses with status 200 count as crawled pages.
    """

    def __init__(
        self,
        num_threads: int = 4,
        max_pages: int = 100,
        fetch: Optional[Fetcher] = None,
    ) -> None:
        self._pool = ThreadPool(num_threads)
        self._max_pages = max_pages
        self._fetch: Fetcher = fetch if fetch is not None else HttpClient(30).get
        self._queue: Deque[str] = deque()
        self._visited: Set[str] = set()
        self._condition = threading.Condition()
        self._stopped = False
        self._crawled = 0
        self._active = 0

    def add_url(self, url: str) -> None:
        """Put ``url`` on the crawl queue."""
        with self._condition:
            self._queue.append(url)

    def start(self, callback: PageCallback) -> None:
        """Crawl the queued URLs and block until every started fetch is done."""
        with self._condition:
            self._stopped = False

        while True:
            with self._condition:
                if self._stopped or self._crawled >= self._max_pages or not self._queue:
                    break
                url = self._queue.popleft()
                if url in self._visited:
                    continue
                self._visited.add(url)
                self._active += 1
            self._pool.enqueue(lambda url=url: self._crawl(url, callback))

        with self._condition:
            self._condition.wait_for(lambda: self._stopped or self._active == 0)

    def stop(self) -> None:
        """Stop crawling and wake anyone waiting."""
        with self._condition:
            self._stopped = True
            self._condition.notify_all()

    def wait(self) -> None:
        """Block until crawling is stopped or there is nothing left to do."""
        with self._condition:
            self._condition.wait_for(self._finished)

    def crawled_count(self) -> int:
        """Number of pages crawled successfully so far."""
        with self._condition:
            return self._crawled

    def _finished(self) -> bool:
        if self._stopped:
            return True
        if self._active:
            return False
        return not self._queue or self._crawled >= self._max_pages

    def _crawl(self, url: str, callback: PageCallback) -> None:
        try:
            with self._condition:
                if self._stopped or self._crawled >= self._max_pages:
                    return
            try:
                response = self._fetch(url)
            except HttpError as exc:
                logger.warning("Failed to crawl URL: %s (%s)", url, exc)
                return
            if response.status_code == 200:
                callback(url, response.body)
                with self._condition:
                    self._crawled += 1
            else:
                logger.warning(
                    "Failed to crawl URL: %s (status code %d)", url, response.status_code
                )
        finally:
            with self._condition:
                self._active -= 1
                self._condition.notify_all()