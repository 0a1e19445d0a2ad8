"""Tests for splice.logging module."""

from __future__ import annotations

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from splice.logging import configure_logging, logger


def rich_handlers() -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, RichHandler)]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_quiet_by_default(self) -> None:
        configure_logging()
        assert logger.level == logging.WARNING

    def test_repeated_calls_keep_one_handler(self) -> None:
        configure_logging()
        configure_logging(verbose=True)
        assert len(rich_handlers()) == 1

    def test_writes_to_given_console(self) -> None:
        buffer = io.StringIO()
        configure_logging(verbose=True, console=Console(file=buffer, width=120))
        logger.debug("assembling timeline-demo")
        assert "assembling timeline-demo" in buffer.getvalue()
