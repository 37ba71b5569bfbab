# mail_scout/crawler/fetcher.py
"""
Fetcher module: HEAD probe and GET retrieval with timeout and a
pre-request delay. Failures are reported as None, never retried.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from mail_scout.config import CrawlOptions
from mail_scout.crawler.link_extractor import extract_hrefs
from mail_scout.crawler.models import PageData, ProbeResult
from mail_scout.logger import LOGGER_NAME

__all__ = ("Fetcher", "open_session")

_FETCH_ERRORS = (ClientError, asyncio.TimeoutError, UnicodeDecodeError, ValueError)


def open_session(options: CrawlOptions) -> ClientSession:
    """Create a client session carrying the configured timeout and User-Agent."""
    return ClientSession(
        timeout=ClientTimeout(total=options.timeout_seconds),
        headers={"User-Agent": options.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Probes and fetches pages over an existing :class:`ClientSession`."""

    def __init__(self, session: ClientSession, options: CrawlOptions) -> None:
        self.session = session
        self.options = options
        self.logger = logging.getLogger(LOGGER_NAME)

    async def wait(self) -> None:
        """Sleep the configured delay before a page's requests."""
        if self.options.sleep > 0:
            self.logger.debug("Sleeping %d ms before request", self.options.sleep)
            await asyncio.sleep(self.options.sleep_seconds)

    async def probe(self, url: str) -> Optional[ProbeResult]:
        """HEAD *url*; None on network or protocol failure."""
        try:
            async with self.session.head(url, allow_redirects=True) as resp:
                return ProbeResult(resp.status, resp.headers.get("Content-Type", ""))
        except _FETCH_ERRORS as exc:
            self.logger.debug("HEAD %s failed: %r", url, exc)
            return None

    async def fetch(self, url: str) -> Optional[PageData]:
        """GET *url* and collect its anchors; None on failure."""
        try:
            async with self.session.get(url) as resp:
                text = await resp.text(errors="replace")
                status = resp.status
        except _FETCH_ERRORS as exc:
            self.logger.debug("GET %s failed: %r", url, exc)
            return None
        return PageData(url=url, status=status, content=text, links=extract_hrefs(text))
