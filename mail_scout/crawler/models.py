# mail_scout/crawler/models.py
"""
Data models for the MailScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class ProbeResult:
    """Outcome of a HEAD request: status and declared content type."""

    status: int
    content_type: str

    @property
    def is_html(self) -> bool:
        return self.content_type.lower().startswith("text/html")


@dataclass(slots=True)
class PageData:
    """A fetched HTML page with the raw hrefs of its anchors."""

    url: str
    status: int
    content: str
    links: List[str] = field(default_factory=list)
