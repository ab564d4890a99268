from __future__ import annotations

from pathlib import Path

import pytest

import src.runtime_logging as runtime_logging
from src.root_solver import SolverSettings, solve


@pytest.fixture
def default_settings() -> SolverSettings:
    return SolverSettings()


@pytest.fixture
def short_budget_settings() -> SolverSettings:
    return SolverSettings(max_steps=3)


@pytest.fixture
def solved_a1():
    return solve("1")


@pytest.fixture
def isolated_runtime_log(tmp_path, monkeypatch) -> Path:
    log_file = Path(tmp_path) / "runtime_events.jsonl"
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", log_file)
    return log_file
