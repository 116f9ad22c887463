"""Shared pytest fixtures for cadence tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from cadence.config.settings import CadenceSettings
from cadence.services.schedule import ScheduleService
from cadence.services.telemetry import disable_telemetry

# Tuesday, 4 March 2025, 10:15:30 local wall-clock time.
FIXED_NOW = datetime(2025, 3, 4, 10, 15, 30)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no cadence env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` so config
    discovery never picks up a ``cadence.toml`` from the developer's tree.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CADENCE_CONFIG", raising=False)
    monkeypatch.delenv("CADENCE_SCHEDULE__UPCOMING_COUNT", raising=False)
    monkeypatch.delenv("CADENCE_SCHEDULE__HORIZON_MINUTES", raising=False)


@pytest.fixture
def settings(tmp_path: Path, _isolated_cwd: None) -> CadenceSettings:
    """Default settings, discovered from an empty temp directory."""
    return CadenceSettings.from_cli(start=tmp_path)


@pytest.fixture
def service(settings: CadenceSettings) -> ScheduleService:
    """ScheduleService whose clock is pinned to FIXED_NOW."""
    return ScheduleService(settings, clock=lambda: FIXED_NOW)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("cadence").setLevel(logging.NOTSET)
