"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from paramatrix.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ours = logging.getLogger("paramatrix")
    our_level = ours.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ours.setLevel(our_level)
    structlog.contextvars.clear_contextvars()


class TestLevels:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("paramatrix").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("paramatrix").level == logging.WARNING

    def test_quiet_is_error(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("paramatrix").level == logging.ERROR

    def test_verbose_beats_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("paramatrix").level == logging.DEBUG

    def test_repeated_calls_keep_one_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1


class TestJsonOutput:
    def test_structlog_event(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("paramatrix.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "paramatrix.test"
        assert "timestamp" in parsed

    def test_stdlib_record_carries_bound_context(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        with structlog.contextvars.bound_contextvars(subject="Adder", declaration="Adder.ops"):
            logging.getLogger("paramatrix.services.engine").debug("Planned")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Planned"
        assert parsed["subject"] == "Adder"
        assert parsed["declaration"] == "Adder.ops"

    def test_other_libraries_stay_at_warning(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("pluggy").debug("noise")
        assert capfd.readouterr().err == ""

    def test_quiet_suppresses_warnings(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(quiet=True, log_json=True)
        logging.getLogger("paramatrix.services.discovery").warning("rejected")
        assert capfd.readouterr().err == ""
