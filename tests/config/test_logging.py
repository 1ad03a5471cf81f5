"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from blogctl.config.logging import build_formatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    blog = logging.getLogger("blogctl")
    blog_level = blog.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    blog.setLevel(blog_level)


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("blogctl.test", logging.WARNING, __file__, 1, msg, (), None)


class TestConfigureLogging:
    def test_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger("blogctl").level == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("blogctl").level == logging.DEBUG

    def test_quiet_raises_threshold(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("blogctl").level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("blogctl").level == logging.DEBUG

    def test_single_root_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_formatter_attached(self) -> None:
        configure_logging(log_json=True)
        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)


class TestBuildFormatter:
    def test_json_lines(self) -> None:
        line = build_formatter(log_json=True).format(_record("Skipping post"))
        data = json.loads(line)
        assert data["event"] == "Skipping post"
        assert data["level"] == "warning"
        assert data["logger"] == "blogctl.test"

    def test_console(self) -> None:
        line = build_formatter(log_json=False).format(_record("Skipping post"))
        assert "Skipping post" in line
