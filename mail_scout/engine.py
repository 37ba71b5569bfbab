# File: mail_scout/engine.py
"""mail_scout.engine: Orchestration layer для запуска обхода и получения отчёта."""

from __future__ import annotations

from typing import AsyncIterator, Optional

from mail_scout.aggregator import CrawlReport
from mail_scout.config import CrawlOptions
from mail_scout.crawler.crawler import EmailCrawler
from mail_scout.crawler.events import CrawlEvent, CrawlObserver

__all__ = ["start_crawl", "stream_crawl"]


async def start_crawl(options: CrawlOptions, observer: Optional[CrawlObserver] = None) -> CrawlReport:
    """Открывает сессию, запускает выбранную стратегию и возвращает отчёт."""
    async with EmailCrawler(options, observer) as crawler:
        return await crawler.run()


async def stream_crawl(
    options: CrawlOptions, observer: Optional[CrawlObserver] = None
) -> AsyncIterator[CrawlEvent]:
    """Последовательный обход с выдачей событий по мере их появления."""
    async with EmailCrawler(options, observer) as crawler:
        async for event in crawler.stream():
            yield event
