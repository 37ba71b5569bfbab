# File: tests/test_frontier.py
import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from mail_scout.crawler.frontier import Frontier


def test_claim_is_once_only():
    frontier = Frontier()
    assert frontier.claim("https://s.com/a")
    assert not frontier.claim("https://s.com/a")
    assert frontier.has("https://s.com/a")
    assert "https://s.com/a" in frontier
    assert len(frontier) == 1


def test_claim_respects_limit_and_keeps_order():
    frontier = Frontier()
    urls = [f"https://s.com/{i}" for i in range(5)]
    claimed = [u for u in urls if frontier.claim(u, limit=3)]
    assert claimed == urls[:3]
    assert list(frontier) == urls[:3]
    assert frontier.is_full(3)
    assert not frontier.is_full(None)


def test_add_is_idempotent():
    frontier = Frontier()
    frontier.add("https://s.com/")
    frontier.add("https://s.com/")
    assert list(frontier) == ["https://s.com/"]


def test_concurrent_threads_claim_each_url_once():
    frontier = Frontier()
    urls = [f"https://s.com/{i % 50}" for i in range(2000)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(frontier.claim, urls))
    assert sum(results) == 50
    assert len(frontier) == 50


@pytest.mark.asyncio()
async def test_concurrent_tasks_claim_each_url_once():
    frontier = Frontier()
    claimed = []

    async def unit(url):
        await asyncio.sleep(0)
        if frontier.claim(url):
            await asyncio.sleep(0)
            claimed.append(url)

    await asyncio.gather(*(unit(f"https://s.com/{i % 10}") for i in range(200)))
    assert sorted(claimed) == sorted(set(claimed))
    assert len(claimed) == 10
