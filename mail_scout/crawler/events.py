# mail_scout/crawler/events.py
"""
Crawl events and observers.

The crawler reports what happens through a :class:`CrawlObserver` instead
of printing; the CLI, the logger and the event feed are just observers.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from mail_scout.logger import LOGGER_NAME

__all__ = (
    "SPLIT_DELIMITER",
    "CrawlEvent",
    "CrawlObserver",
    "CompositeObserver",
    "LoggingObserver",
    "QueueObserver",
)

SPLIT_DELIMITER = "_SPLIT_DELIMITER_"
STATUS = "status"


@dataclass(frozen=True, slots=True)
class CrawlEvent:
    """
    One feed entry. *kind* is ``"status"`` (payload: URL being visited) or
    an email address (payload: the URL it was found on).
    """

    kind: str
    payload: str

    def to_line(self) -> str:
        return f"{self.kind}{SPLIT_DELIMITER}{self.payload}"


class CrawlObserver:
    """Base observer: every hook is a no-op."""

    def on_visit(self, url: str) -> None:
        pass

    def on_page(self, url: str, status: int) -> None:
        pass

    def on_emails(self, url: str, emails: List[str]) -> None:
        pass

    def on_skip(self, url: str, reason: str) -> None:
        pass

    def on_limit(self, reason: str) -> None:
        pass


class LoggingObserver(CrawlObserver):
    """Narrates the crawl through the project logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def on_page(self, url: str, status: int) -> None:
        level = logging.WARNING if status >= 400 else logging.INFO
        self.logger.log(level, "Crawling %d %s", status, url)

    def on_emails(self, url: str, emails: List[str]) -> None:
        self.logger.info("Emails (%d) %s: %s", len(emails), url, ", ".join(emails))

    def on_skip(self, url: str, reason: str) -> None:
        self.logger.debug("Skipped %s (%s)", url, reason)

    def on_limit(self, reason: str) -> None:
        self.logger.info("Limit reached: %s", reason)


class QueueObserver(CrawlObserver):
    """Pushes :class:`CrawlEvent` objects onto an asyncio queue."""

    def __init__(self, queue: "asyncio.Queue[CrawlEvent]") -> None:
        self.queue = queue

    def on_visit(self, url: str) -> None:
        self.queue.put_nowait(CrawlEvent(STATUS, url))

    def on_emails(self, url: str, emails: List[str]) -> None:
        for email in emails:
            self.queue.put_nowait(CrawlEvent(email, url))


class CompositeObserver(CrawlObserver):
    """Forwards every hook to each wrapped observer in turn."""

    def __init__(self, *observers: CrawlObserver) -> None:
        self.observers = observers

    def on_visit(self, url: str) -> None:
        for obs in self.observers:
            obs.on_visit(url)

    def on_page(self, url: str, status: int) -> None:
        for obs in self.observers:
            obs.on_page(url, status)

    def on_emails(self, url: str, emails: List[str]) -> None:
        for obs in self.observers:
            obs.on_emails(url, emails)

    def on_skip(self, url: str, reason: str) -> None:
        for obs in self.observers:
            obs.on_skip(url, reason)

    def on_limit(self, reason: str) -> None:
        for obs in self.observers:
            obs.on_limit(reason)
