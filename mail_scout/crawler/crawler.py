# === FILE: mail_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
import time
from typing import AsyncIterator, List, Optional, Sequence

from aiohttp import ClientSession

from mail_scout.aggregator import CrawlReport, aggregate_results
from mail_scout.config import CrawlOptions
from mail_scout.crawler.events import (
    CompositeObserver,
    CrawlEvent,
    CrawlObserver,
    LoggingObserver,
    QueueObserver,
)
from mail_scout.crawler.fetcher import Fetcher, open_session
from mail_scout.crawler.frontier import Frontier
from mail_scout.crawler.models import PageData
from mail_scout.crawler.urls import (
    is_asset,
    normalize_link,
    normalize_seed,
    same_scope,
    url_depth,
)
from mail_scout.extractor import find_emails
from mail_scout.logger import LOGGER_NAME
from mail_scout.sink import ResultSink
from mail_scout.utils import read_seed_file, remove_duplicates

__all__ = ("EmailCrawler",)


class EmailCrawler:
    """
    Асинхронный краулер адресов: три стратегии обхода поверх общего
    Frontier, ResultSink и счётчиков.

    * :meth:`crawl_recursive` – последовательный обход в глубину;
    * :meth:`crawl_recursive_parallel` – задача на каждую ссылку,
      одновременные загрузки ограничены семафором;
    * :meth:`crawl_batch` – пул воркеров по списку URL, одна страница на URL.
    """

    def __init__(self, options: CrawlOptions, observer: Optional[CrawlObserver] = None) -> None:
        self.options = options
        self.observer: CrawlObserver = observer or LoggingObserver()
        self.logger = logging.getLogger(LOGGER_NAME)
        self.frontier = Frontier()
        # batch mode ignores URL and email limits
        self.sink = ResultSink(
            options.out, limit=None if options.crawl_from_file else options.limit_emails
        )
        self.pages_crawled = 0
        self.pages_with_emails = 0
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self._stats_lock = threading.Lock()
        self._limit_reason: Optional[str] = None

    async def __aenter__(self) -> EmailCrawler:
        self.session = open_session(self.options)
        self.fetcher = Fetcher(self.session, self.options)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # Entry point                                                        #
    # ------------------------------------------------------------------ #

    async def run(self) -> CrawlReport:
        """Select the strategy from the options, crawl and build the report."""
        start = time.monotonic()
        if self.options.crawl_from_file:
            urls = read_seed_file(self.options.url_file)
            self.logger.info("Crawling %d URLs from %s", len(urls), self.options.url_file)
            if self.options.parallel:
                await self.crawl_batch(urls)
            else:
                await self.crawl_sequential_batch(urls)
        else:
            self.logger.info("Crawling %s", self.options.url)
            if self.options.parallel:
                await self.crawl_recursive_parallel(self.options.url)
            else:
                await self.crawl_recursive(self.options.url)
        return self.report(time.monotonic() - start)

    def report(self, duration: float = 0.0) -> CrawlReport:
        return aggregate_results(
            self.sink.emails,
            pages_crawled=self.pages_crawled,
            pages_with_emails=self.pages_with_emails,
            output=str(self.options.out) if self.options.out else None,
            duration=duration,
        )

    # ------------------------------------------------------------------ #
    # Strategies                                                         #
    # ------------------------------------------------------------------ #

    async def crawl_recursive(self, url: str) -> None:
        """Depth-first: each accepted link is fully explored before its next sibling."""
        url = normalize_seed(url, ignore_queries=self.options.ignore_queries)
        self.frontier.claim(url)
        stack = [iter(await self.process_page(url))]
        while stack:
            link = next(stack[-1], None)
            if link is None:
                stack.pop()
                continue
            if self._limit_hit():
                break
            if not self.frontier.claim(link, self.options.limit_urls):
                continue
            stack.append(iter(await self.process_page(link)))

    async def crawl_recursive_parallel(self, url: str) -> None:
        """Fan out one task per accepted link and wait for every descendant."""
        url = normalize_seed(url, ignore_queries=self.options.ignore_queries)
        self.frontier.claim(url)
        semaphore = asyncio.Semaphore(self.options.concurrency)
        await self._expand(url, semaphore)

    async def _expand(self, url: str, semaphore: asyncio.Semaphore) -> None:
        async with semaphore:
            links = await self.process_page(url)
        children = []
        for link in links:
            if self._limit_hit():
                break
            if not self.frontier.claim(link, self.options.limit_urls):
                continue
            children.append(asyncio.create_task(self._expand(link, semaphore)))
        if children:
            await asyncio.gather(*children)

    async def crawl_batch(self, urls: Sequence[str]) -> None:
        """A fixed pool of workers drains the seed list; one page per seed."""
        queue: asyncio.Queue[str] = asyncio.Queue()
        for url in urls:
            queue.put_nowait(url)
        size = max(1, min(self.options.max_workers, len(urls)))
        workers = [asyncio.create_task(self._batch_worker(queue)) for _ in range(size)]
        await asyncio.gather(*workers)

    async def _batch_worker(self, queue: asyncio.Queue[str]) -> None:
        while True:
            try:
                url = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            if not self.frontier.claim(url):
                continue
            # a private session per request, closed before the next seed
            async with open_session(self.options) as session:
                await self.process_page(url, Fetcher(session, self.options))

    async def crawl_sequential_batch(self, urls: Sequence[str]) -> None:
        for url in urls:
            if self.frontier.claim(url):
                await self.process_page(url)

    async def stream(self, url: Optional[str] = None) -> AsyncIterator[CrawlEvent]:
        """
        Run the sequential crawl in the background and yield its events.
        Closing the generator cancels the crawl.
        """
        queue: asyncio.Queue[CrawlEvent] = asyncio.Queue()
        previous = self.observer
        self.observer = CompositeObserver(previous, QueueObserver(queue))
        task = asyncio.create_task(self.crawl_recursive(url or self.options.url))
        getter: Optional[asyncio.Future[CrawlEvent]] = None
        try:
            while True:
                getter = asyncio.ensure_future(queue.get())
                done, _ = await asyncio.wait({getter, task}, return_when=asyncio.FIRST_COMPLETED)
                if getter in done:
                    yield getter.result()
                    continue
                getter.cancel()
                break
            while not queue.empty():
                yield queue.get_nowait()
            await task
        finally:
            if getter is not None and not getter.done():
                getter.cancel()
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                self.logger.info("Event stream closed, crawl cancelled")
            self.observer = previous

    # ------------------------------------------------------------------ #
    # Per-page procedure                                                 #
    # ------------------------------------------------------------------ #

    async def process_page(self, url: str, fetcher: Optional[Fetcher] = None) -> List[str]:
        """
        Visit *url*: probe, fetch, collect emails and return the outbound
        links accepted by scope and depth rules (empty in batch mode).
        """
        fetcher = fetcher or self.fetcher
        if fetcher is None:
            raise RuntimeError("Session not initialized")
        if is_asset(url):
            self.observer.on_skip(url, "asset")
            return []

        self.observer.on_visit(url)
        await fetcher.wait()
        probe = await fetcher.probe(url)
        if probe is None:
            self.observer.on_skip(url, "unreachable")
            return []
        if not probe.is_html:
            self.observer.on_skip(url, f"content-type {probe.content_type!r}")
            return []
        page = await fetcher.fetch(url)
        if page is None:
            self.observer.on_skip(url, "fetch failed")
            return []

        with self._stats_lock:
            self.pages_crawled += 1
        self.observer.on_page(url, page.status)

        emails = find_emails(page.content)
        if emails:
            with self._stats_lock:
                self.pages_with_emails += 1
            self.observer.on_emails(url, emails)
            self.sink.add(emails, url)

        if self.options.crawl_from_file:
            return []
        return self._accepted_links(page)

    def _accepted_links(self, page: PageData) -> List[str]:
        seed = self.options.url
        depth_limit = self.options.depth
        links: List[str] = []
        for href in page.links:
            link = normalize_link(href, page.url, ignore_queries=self.options.ignore_queries)
            if link is None or is_asset(link) or not same_scope(seed, link):
                continue
            if depth_limit != -1:
                depth = url_depth(link, seed)
                if depth <= 0 or depth > depth_limit:
                    continue
            links.append(link)
        return remove_duplicates(links)

    def _limit_hit(self) -> bool:
        if self.options.crawl_from_file:
            return False
        reason = None
        if self.sink.is_full():
            reason = f"{self.options.limit_emails} emails"
        elif self.frontier.is_full(self.options.limit_urls):
            reason = f"{self.options.limit_urls} urls"
        if reason is None:
            return False
        with self._stats_lock:
            first = self._limit_reason is None
            self._limit_reason = reason
        if first:
            self.observer.on_limit(reason)
        return True
