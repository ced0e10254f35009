"""Shared pytest fixtures and test helpers for paramatrix tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from paramatrix.config.models import EngineConfig
from paramatrix.plugins.manager import PluginManager
from paramatrix.services.engine import Engine
from paramatrix.services.telemetry import _active, _enabled


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def plugins() -> PluginManager:
    """An empty plugin manager (no entry points loaded)."""
    return PluginManager()


@pytest.fixture
def engine(plugins: PluginManager) -> Engine:
    """Engine with default conventions and no plugins."""
    return Engine(EngineConfig(), plugins)


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no paramatrix config in scope."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PARAMATRIX_CONFIG", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    _enabled.set(False)
    _active.set(None)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None]:
    """CLI invocations reconfigure logging; put the root logger back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("paramatrix").setLevel(logging.NOTSET)
