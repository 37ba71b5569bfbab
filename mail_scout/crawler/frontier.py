# mail_scout/crawler/frontier.py
"""
Frontier: the session-wide store of URLs already visited or queued.
"""
from __future__ import annotations

import threading
from typing import Dict, Iterator, Optional


class Frontier:
    """
    Insertion-ordered set of normalized URLs.

    :meth:`claim` is the only way the crawler enters a URL: the membership
    test, the optional size limit and the insertion happen under one lock,
    so two concurrent units can never both claim the same URL.
    """

    def __init__(self) -> None:
        self._urls: Dict[str, None] = {}
        self._lock = threading.Lock()

    def has(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def add(self, url: str) -> None:
        with self._lock:
            self._urls.setdefault(url, None)

    def claim(self, url: str, limit: Optional[int] = None) -> bool:
        """Add *url* unless it is known or *limit* entries are already held."""
        with self._lock:
            if url in self._urls:
                return False
            if limit is not None and len(self._urls) >= limit:
                return False
            self._urls[url] = None
            return True

    def is_full(self, limit: Optional[int]) -> bool:
        with self._lock:
            return limit is not None and len(self._urls) >= limit

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.has(url)

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._urls))
