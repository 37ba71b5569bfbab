# File: tests/conftest.py
from __future__ import annotations

from collections import Counter
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Dict, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web

from mail_scout.config import CrawlOptions

#: path -> HTML body, or (body, content_type)
PageMap = Dict[str, Union[str, Tuple[str, str]]]


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


class SiteServer:
    """Static test site: serves *pages* and counts GET requests per path."""

    def __init__(self, pages: PageMap) -> None:
        self.pages = pages
        self.hits: Counter[str] = Counter()
        self.base = ""

    def url(self, path: str = "/") -> str:
        return f"{self.base}{path}"

    def app(self) -> web.Application:
        app = web.Application()

        async def handle(request: web.Request) -> web.Response:
            entry = self.pages.get(request.path)
            if entry is None:
                return web.Response(status=404, text="not found", content_type="text/html")
            body, ctype = entry if isinstance(entry, tuple) else (entry, "text/html")
            if request.method == "GET":
                self.hits[request.path] += 1
            return web.Response(text=body, content_type=ctype)

        app.router.add_get("/{tail:.*}", handle)
        return app


@pytest.fixture()
def make_site(unused_tcp_port_factory) -> Callable[[PageMap], AsyncIterator[SiteServer]]:
    """Return an async context factory running a :class:`SiteServer`."""

    async def _make(pages: PageMap) -> AsyncIterator[SiteServer]:
        server = SiteServer(pages)
        async for base in _serve_app(server.app(), unused_tcp_port_factory()):
            server.base = base
            yield server

    return _make


@pytest.fixture()
def serve_app(unused_tcp_port_factory) -> Callable[[web.Application], AsyncIterator[str]]:
    """Return an async context factory serving an arbitrary *app*; yields its base URL."""

    def _serve(app: web.Application) -> AsyncIterator[str]:
        return _serve_app(app, unused_tcp_port_factory())

    return _serve


@pytest_asyncio.fixture
async def contact_site(make_site) -> AsyncIterator[SiteServer]:
    """
    Small site: root links to /about and /blog; /blog links deeper; one
    external link, one asset and one mailto link on the root page.
    """
    pages: PageMap = {
        "/": (
            '<a href="/about">About</a>'
            '<a href="/blog">Blog</a>'
            '<a href="http://external.test/x">Ext</a>'
            '<a href="/logo.png">Logo</a>'
            '<a href="mailto:hello@example.com">Mail</a>'
            "<p>hello@example.com</p>"
        ),
        "/about": "<p>team(at)example(dot)com and hello@example.com</p>",
        "/blog": '<a href="/blog/post">Post</a>',
        "/blog/post": '<a href="/blog/post/deep">Deep</a><p>writer@blog.test</p>',
        "/blog/post/deep": "<p>deep@blog.test</p>",
        "/logo.png": ("binary", "image/png"),
    }
    async for server in make_site(pages):
        yield server


@pytest.fixture()
def options_for(tmp_path: Path) -> Callable[..., CrawlOptions]:
    """Build CrawlOptions with fast timeouts and output into tmp_path."""

    def _build(**kwargs) -> CrawlOptions:
        kwargs.setdefault("timeout", 2000)
        kwargs.setdefault("out", tmp_path / "emails.txt")
        return CrawlOptions(**kwargs)

    return _build
