"""Input guidance metadata and advisory range checks."""

from __future__ import annotations

from typing import Any


INPUT_GUIDANCE: dict[str, dict[str, Any]] = {
    "parameter_a": {
        "min": -300.0,
        "max": 1e9,
        "note": "Below about -316 the first scan window no longer changes sign; "
        "for -0.63 < a < 0 the fixed-point map oscillates instead of converging.",
    },
    "precision": {"min": 1e-8, "max": 0.1, "note": "Absolute difference between consecutive iterates that stops refinement."},
    "max_steps": {"min": 10, "max": 100000, "note": "Upper bound on fixed-point iterations before reporting no convergence."},
    "epsilon": {"min": 1e-9, "max": 0.01, "note": "Offset that keeps the first scan point inside the square-root domain and away from zero."},
    "scan_step": {"min": 0.01, "max": 10.0, "note": "Width of the sliding bracket window."},
    "search_limit": {"min": 10.0, "max": 10000.0, "note": "Right end of the bracket search horizon."},
}


def _fmt(v: float) -> str:
    if abs(v - round(v)) < 1e-9:
        return f"{int(round(v))}"
    if abs(v) < 1e-3:
        return f"{v:g}"
    return f"{v:.3f}".rstrip("0").rstrip(".")


def help_with_guidance(key: str, base_help: str) -> str:
    g = INPUT_GUIDANCE.get(key)
    if not g:
        return base_help
    return f"{base_help} Reasonable range: {_fmt(g['min'])} to {_fmt(g['max'])}. {g['note']}"


def advisory_warnings(inputs: dict) -> list[str]:
    warnings: list[str] = []
    for key, g in INPUT_GUIDANCE.items():
        if key not in inputs:
            continue
        try:
            v = float(inputs[key])
        except (TypeError, ValueError):
            continue
        if v < g["min"] or v > g["max"]:
            warnings.append(
                f"{key}={_fmt(v)} is outside the recommended range [{_fmt(g['min'])}, {_fmt(g['max'])}]."
            )
    return warnings
