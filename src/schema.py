"""Solver settings validation and normalization."""

from __future__ import annotations

import math
from typing import Any

from src.defaults import DEFAULTS, SOLVER_SETTING_KEYS
from src.root_solver import MAX_SCAN_WINDOWS, SolverSettings


MAX_STEPS_CEILING = 1_000_000


def _coerce_float(raw: dict[str, Any], key: str, warnings: list[str]) -> float:
    default = float(DEFAULTS[key])
    value = raw.get(key, default)
    try:
        out = float(value)
    except (TypeError, ValueError):
        warnings.append(f"{key}={value!r} is not numeric; using default {default:g}.")
        return default
    if not math.isfinite(out) or out <= 0:
        warnings.append(f"{key}={value!r} must be a positive finite number; using default {default:g}.")
        return default
    return out


def _coerce_steps(raw: dict[str, Any], warnings: list[str]) -> int:
    default = int(DEFAULTS["max_steps"])
    value = raw.get("max_steps", default)
    try:
        steps = int(value)
    except (TypeError, ValueError, OverflowError):
        warnings.append(f"max_steps={value!r} is not an integer; using default {default}.")
        return default
    if steps < 1:
        warnings.append(f"max_steps={steps} is below 1; clamped to 1.")
        return 1
    if steps > MAX_STEPS_CEILING:
        warnings.append(f"max_steps={steps} exceeds {MAX_STEPS_CEILING}; clamped.")
        return MAX_STEPS_CEILING
    return steps


def normalize_solver_settings(raw: dict[str, Any] | None) -> tuple[SolverSettings, list[str]]:
    """Return validated solver settings plus warnings for any repaired values."""
    raw = dict(raw or {})
    warnings: list[str] = []
    unknown = sorted(k for k in raw if k not in SOLVER_SETTING_KEYS)
    for key in unknown:
        warnings.append(f"Ignoring unknown solver setting: {key}")

    precision = _coerce_float(raw, "precision", warnings)
    epsilon = _coerce_float(raw, "epsilon", warnings)
    scan_step = _coerce_float(raw, "scan_step", warnings)
    search_limit = _coerce_float(raw, "search_limit", warnings)
    max_steps = _coerce_steps(raw, warnings)

    if search_limit <= scan_step:
        default_limit = float(DEFAULTS["search_limit"])
        warnings.append(
            f"search_limit={search_limit:g} must exceed scan_step={scan_step:g}; using default {default_limit:g}."
        )
        search_limit = max(default_limit, scan_step * 2)

    if (search_limit - epsilon) / scan_step > MAX_SCAN_WINDOWS:
        clamped = epsilon + scan_step * MAX_SCAN_WINDOWS
        warnings.append(
            f"search_limit={search_limit:g} needs more than {MAX_SCAN_WINDOWS} scan windows of {scan_step:g}; "
            f"clamped to {clamped:g}."
        )
        search_limit = clamped

    settings = SolverSettings(
        precision=precision,
        max_steps=max_steps,
        epsilon=epsilon,
        scan_step=scan_step,
        search_limit=search_limit,
    )
    return settings, warnings


def settings_to_dict(settings: SolverSettings) -> dict[str, Any]:
    return {key: getattr(settings, key) for key in SOLVER_SETTING_KEYS}
