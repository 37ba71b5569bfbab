# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

import pytest

from mail_scout.logger import LOGGER_NAME, configure


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure()


def test_reconfigure_replaces_handlers():
    configure(level="DEBUG")
    lg = configure(level="WARNING")

    assert lg is logging.getLogger(LOGGER_NAME)
    assert lg.level == logging.WARNING
    assert len(lg.handlers) == 1
    assert not lg.propagate


def test_log_file_gets_messages(tmp_path):
    log_file = tmp_path / "crawl.log"
    lg = configure(level="INFO", log_file=log_file)

    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    lg.info("Crawling %s", "https://example.com/")
    for handler in lg.handlers:
        handler.flush()
    assert "Crawling https://example.com/" in log_file.read_text(encoding="utf-8")
