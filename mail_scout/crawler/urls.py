# mail_scout/crawler/urls.py
"""
URL scoping and normalization helpers: link resolution, query/fragment
stripping, same-host checks and path depth relative to the seed URL.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlparse, urlsplit

__all__ = (
    "ASSET_EXTENSIONS",
    "ensure_scheme",
    "resolve",
    "base_url",
    "strip_query",
    "strip_fragment",
    "same_scope",
    "url_depth",
    "is_asset",
    "normalize_link",
    "normalize_seed",
)

ASSET_EXTENSIONS = (".pdf", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".css", ".js", ".ico")


def ensure_scheme(url: str) -> str:
    """Prepend ``https://`` when *url* does not start with ``http``."""
    return url if url.startswith("http") else f"https://{url}"


def base_url(url: str) -> str:
    """Return ``scheme://host`` of *url*, or ``""`` if it cannot be parsed."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve(href: str, current_url: str = "", base: str = "") -> Optional[str]:
    """
    Turn *href* into an absolute URL.

    Links already starting with ``http`` are returned unchanged. Relative
    references are resolved against *current_url*, or against *base* when
    no current page is known. Returns None when parsing fails.
    """
    href = href.strip()
    if href.startswith("http"):
        return href
    try:
        ref = urlparse(href)
        if ref.scheme:
            return ref.geturl()
        anchor = current_url or base
        if not anchor:
            return None
        return urljoin(anchor, href)
    except ValueError:
        return None


def strip_query(url: str) -> str:
    return url.split("?", 1)[0]


def strip_fragment(url: str) -> str:
    return url.split("#", 1)[0]


def _host(url: str) -> Optional[str]:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def same_scope(seed_url: str, candidate_url: str) -> bool:
    """Host-only comparison: scheme and port are deliberately ignored."""
    seed_host = _host(seed_url)
    return seed_host is not None and seed_host == _host(candidate_url)


def url_depth(candidate_url: str, seed_url: str) -> int:
    """
    Number of path levels *candidate_url* lies below *seed_url*.

    ``-1`` when the candidate is outside the seed's subtree (or either URL
    cannot be parsed), ``0`` when both paths are equal.
    """
    try:
        seed_path = urlparse(seed_url).path.rstrip("/")
        path = urlparse(candidate_url).path.rstrip("/")
    except ValueError:
        return -1

    # plain prefix match: "/blogger/x" sits one level below "/blog"
    if not path.startswith(seed_path):
        return -1
    rest = path[len(seed_path):]
    if not rest:
        return 0
    return rest.count("/")


def is_asset(url: str) -> bool:
    """True for URLs whose path ends with a known non-HTML extension."""
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        return False
    return path.endswith(ASSET_EXTENSIONS)


def normalize_link(href: str, page_url: str, *, ignore_queries: bool = True) -> Optional[str]:
    """
    Resolve an anchor *href* found on *page_url* into the form stored in the
    frontier: absolute, fragment-free and, with *ignore_queries*, query-free.
    Non-HTTP(S) links (``mailto:``, ``javascript:``, ``tel:``…) yield None.
    """
    url = resolve(href, page_url, base_url(page_url))
    if not url:
        return None
    if ignore_queries:
        url = strip_query(url)
    url = strip_fragment(url)
    if not url.startswith(("http://", "https://")):
        return None
    return _with_root_path(url)


def _with_root_path(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.path:
        return url
    return parts._replace(path="/").geturl()


def normalize_seed(url: str, *, ignore_queries: bool = True) -> str:
    """
    Bring a seed URL into the same form as discovered links, so that
    ``https://example.com`` and a link to ``/`` share one frontier entry.
    """
    return normalize_link(url, url, ignore_queries=ignore_queries) or url
