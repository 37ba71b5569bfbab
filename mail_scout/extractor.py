# mail_scout/extractor.py
"""
Email extraction from page text.

Plain addresses and bracket-obfuscated ones (``user(at)example(dot)com``,
``user[at]example{dot}com``…) are matched by one pattern; obfuscated
tokens are rewritten to ``@`` / ``.`` afterwards. Everything here is pure.
"""
from __future__ import annotations

import re
from typing import Iterable, List

__all__ = (
    "EMAIL_RE",
    "extract_emails",
    "filter_false_positives",
    "unique",
    "find_emails",
    "email_domain",
)

_OPEN = r"[(\[{<]"
_CLOSE = r"[)\]}>]"

EMAIL_RE = re.compile(
    r"[a-zA-Z0-9._%+-]+"
    rf"(?:@|{_OPEN}at{_CLOSE})"
    r"[a-zA-Z0-9.-]+"
    rf"(?:\.|{_OPEN}dot{_CLOSE})"
    r"[a-zA-Z]{2,}"
)
_AT_RE = re.compile(rf"{_OPEN}at{_CLOSE}")
_DOT_RE = re.compile(rf"{_OPEN}dot{_CLOSE}")

# filenames such as "logo@2x.png" look like addresses
_FALSE_POSITIVE_SUFFIXES = (
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".css", ".js", ".ico", ".pdf",
)


def _deobfuscate(match: str) -> str:
    return _DOT_RE.sub(".", _AT_RE.sub("@", match))


def extract_emails(text: str) -> List[str]:
    """Return every address found in *text*, in order, de-obfuscated."""
    return [_deobfuscate(m.group(0)) for m in EMAIL_RE.finditer(text)]


def filter_false_positives(emails: Iterable[str]) -> List[str]:
    """Drop matches that are really asset filenames (``icon@2x.png``)."""
    return [e for e in emails if not e.lower().endswith(_FALSE_POSITIVE_SUFFIXES)]


def unique(emails: Iterable[str]) -> List[str]:
    """Order-preserving dedup, first occurrence wins."""
    return list(dict.fromkeys(emails))


def find_emails(text: str) -> List[str]:
    """Per-page pipeline: extract → filter → dedup."""
    return unique(filter_false_positives(extract_emails(text)))


def email_domain(email: str) -> str:
    """Substring after the ``@``; empty for malformed input."""
    local, sep, domain = email.partition("@")
    return domain if sep and local and "@" not in domain else ""
