# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from mail_scout.config import CrawlOptions, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("url: https://example.com\ndepth: 2", ".yaml", None),
        (json.dumps({"url": "https://example.com", "depth": 2}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlOptions)
        assert cfg.url == "https://example.com"
        assert cfg.depth == 2


def test_defaults():
    cfg = CrawlOptions(url="example.com")
    assert cfg.url == "https://example.com"
    assert cfg.depth == -1
    assert cfg.timeout == 10000 and cfg.timeout_seconds == 10.0
    assert cfg.sleep == 0
    assert cfg.limit_urls == 1000 and cfg.limit_emails == 1000
    assert cfg.max_workers == 50
    assert cfg.ignore_queries and cfg.parallel
    assert cfg.out == Path("emails.txt")
    assert not cfg.crawl_from_file


def test_overrides_win_and_none_is_skipped(tmp_path):
    cfg_path = write_file(tmp_path, "url: a.com\nsleep: 100\ndepth: 3", ".yaml")
    cfg = load_config(cfg_path, sleep=250, depth=None, out="")
    assert cfg.sleep == 250 and cfg.sleep_seconds == 0.25
    assert cfg.depth == 3
    assert cfg.out is None


def test_options_are_frozen():
    cfg = CrawlOptions(url="https://example.com")
    with pytest.raises(ValidationError):
        cfg.depth = 5


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"url": "https://a.com", "url_file": "seeds.txt"},
        {"url": "https://a.com", "depth": -2},
        {"url": "https://a.com", "timeout": 0},
        {"url": "https://a.com", "max_workers": 0},
        {"url": "https://a.com", "unknown": 1},
    ],
)
def test_invalid_options(kwargs):
    with pytest.raises(ValidationError):
        CrawlOptions(**kwargs)


def test_batch_mode_flag():
    cfg = CrawlOptions(url_file="seeds.txt")
    assert cfg.crawl_from_file
    assert cfg.url is None


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
