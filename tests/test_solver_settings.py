from __future__ import annotations

import pytest

from src.defaults import DEFAULTS
from src.root_solver import MAX_SCAN_WINDOWS, SolveFailure, SolverSettings, solve
from src.schema import normalize_solver_settings, settings_to_dict


def test_empty_overrides_yield_default_settings():
    settings, warnings = normalize_solver_settings({})
    assert settings == SolverSettings()
    assert warnings == []


def test_default_settings_match_documented_constants():
    settings = SolverSettings()
    assert settings.precision == 0.001
    assert settings.max_steps == 5000
    assert settings.epsilon == 1e-5
    assert settings.scan_step == 1.0
    assert settings.search_limit == 100.0


def test_valid_overrides_are_kept():
    settings, warnings = normalize_solver_settings({"precision": "1e-6", "max_steps": 20.0, "search_limit": 50})
    assert warnings == []
    assert settings.precision == 1e-6
    assert settings.max_steps == 20
    assert settings.search_limit == 50.0


def test_invalid_overrides_fall_back_with_warnings():
    settings, warnings = normalize_solver_settings(
        {"precision": -1, "epsilon": "tiny", "scan_step": float("nan"), "max_steps": 0, "colour": "blue"}
    )
    assert settings.precision == DEFAULTS["precision"]
    assert settings.epsilon == DEFAULTS["epsilon"]
    assert settings.scan_step == DEFAULTS["scan_step"]
    assert settings.max_steps == 1
    assert len(warnings) == 5
    assert any("colour" in w for w in warnings)


def test_search_limit_must_exceed_scan_step():
    settings, warnings = normalize_solver_settings({"scan_step": 5.0, "search_limit": 2.0})
    assert settings.search_limit == 100.0
    assert any("search_limit" in w for w in warnings)


def test_settings_to_dict_round_trips_through_normalization():
    settings = SolverSettings(precision=0.01, max_steps=42)
    again, warnings = normalize_solver_settings(settings_to_dict(settings))
    assert again == settings
    assert warnings == []


def test_search_limit_is_clamped_to_scan_window_ceiling():
    settings, warnings = normalize_solver_settings({"scan_step": 0.001, "search_limit": 1e12})
    assert settings.search_limit == pytest.approx(1e-5 + 0.001 * MAX_SCAN_WINDOWS)
    assert (settings.search_limit - settings.epsilon) / settings.scan_step <= MAX_SCAN_WINDOWS * (1 + 1e-9)
    assert any("clamped" in w for w in warnings)


def test_clamped_settings_let_solve_terminate():
    settings, _ = normalize_solver_settings({"scan_step": 10.0, "search_limit": 1e300})
    result = solve("1e12", settings)
    assert isinstance(result, SolveFailure)
    assert result.reason == "no_bracket_found"
