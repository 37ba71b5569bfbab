# mail_scout/sink.py
"""
Result sink: the session-wide email collection with real-time persistence.

Each page's new addresses are appended to the output file as soon as they
are found, so a crash mid-run keeps everything discovered so far.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from mail_scout.logger import logger

__all__ = ["ResultSink"]


class ResultSink:
    """
    Deduplicating, optionally capped email collection.

    With a *limit*, addresses beyond it are neither kept nor written.
    Without one (batch mode) every new address is accepted.
    """

    def __init__(self, out: Union[str, Path, None] = None, limit: Optional[int] = None) -> None:
        self.out = Path(out) if out is not None else None
        self.limit = limit
        self._emails: Dict[str, None] = {}
        self._lock = threading.Lock()

    def add(self, emails: Iterable[str], source_url: str = "") -> List[str]:
        """Record *emails* found on *source_url*; return the newly accepted ones."""
        with self._lock:
            accepted: List[str] = []
            for email in emails:
                if email in self._emails:
                    continue
                if self.limit is not None and len(self._emails) >= self.limit:
                    break
                self._emails[email] = None
                accepted.append(email)
        # one write per page keeps the page's lines together; the lock only
        # guards the in-memory set
        if accepted and self.out is not None:
            self._append(accepted, source_url)
        return accepted

    def _append(self, emails: List[str], source_url: str) -> None:
        try:
            with self.out.open("a", encoding="utf-8") as fh:
                fh.write("".join(f"{e}\n" for e in emails))
        except OSError as exc:
            logger.error("Error writing emails from %s to %s: %s", source_url or "?", self.out, exc)

    @property
    def emails(self) -> List[str]:
        with self._lock:
            return list(self._emails)

    def is_full(self) -> bool:
        with self._lock:
            return self.limit is not None and len(self._emails) >= self.limit

    def __len__(self) -> int:
        with self._lock:
            return len(self._emails)
