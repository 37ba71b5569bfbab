# File: mail_scout/aggregator.py
"""mail_scout.aggregator: Итоговый отчёт обхода и подсчёт адресов по доменам."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional

from mail_scout.extractor import email_domain
from mail_scout.utils import remove_duplicates


def count_per_domain(emails: Iterable[str]) -> Dict[str, int]:
    """Считает адреса по домену (часть после @); сортировка по убыванию, затем по имени."""
    counts = Counter(d for d in map(email_domain, emails) if d)
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода: счётчики, уникальные адреса и их домены."""

    pages_crawled: int = 0
    pages_with_emails: int = 0
    emails: List[str] = field(default_factory=list)
    domains: Dict[str, int] = field(default_factory=dict)
    output: Optional[str] = None
    duration: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Доля страниц с адресами, в процентах."""
        if not self.pages_crawled:
            return 0.0
        return self.pages_with_emails / self.pages_crawled * 100

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        output = asdict(self)
        output["hit_rate"] = round(self.hit_rate, 2)
        return json.dumps(output, ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    emails: Iterable[str],
    *,
    pages_crawled: int,
    pages_with_emails: int,
    output: Optional[str] = None,
    duration: float = 0.0,
) -> CrawlReport:
    """Собирает CrawlReport: финальная дедупликация и подсчёт доменов."""
    unique = remove_duplicates(list(emails))
    return CrawlReport(
        pages_crawled=pages_crawled,
        pages_with_emails=pages_with_emails,
        emails=unique,
        domains=count_per_domain(unique),
        output=output,
        duration=duration,
    )
