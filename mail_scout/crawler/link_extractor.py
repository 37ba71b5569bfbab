# mail_scout/crawler/link_extractor.py
"""
Anchor extraction for fetched pages.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag


def extract_hrefs(html: str) -> List[str]:
    """
    Return the raw ``href`` of every ``<a>`` tag in document order.

    Values are stripped but not resolved: scoping and normalization are
    the crawler's job.
    """
    soup = BeautifulSoup(html, "html.parser")
    hrefs: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if raw:
            hrefs.append(raw)
    return hrefs
