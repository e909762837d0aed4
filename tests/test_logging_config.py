"""Tests for logging setup."""

import logging
from contextlib import contextmanager

from ppa_deals_api.app.core.logging_config import setup_logging


@contextmanager
def bare_root_logger():
    """Temporarily strip the root logger of its handlers (pytest adds its own)."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_configures_once() -> None:
    with bare_root_logger() as root:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        setup_logging("error")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("uvicorn.access").level == logging.DEBUG


def test_file_handler(tmp_path) -> None:
    logfile = tmp_path / "api.log"
    with bare_root_logger() as root:
        setup_logging("INFO", str(logfile))
        logging.getLogger("ppa_deals_api.test").info("hello")
        for handler in root.handlers:
            handler.flush()
    assert "hello" in logfile.read_text(encoding="utf-8")
