"""Default solver constants and initial widget values."""

from __future__ import annotations


DEFAULTS = {
    "parameter_text": "1.0",
    "precision": 0.001,
    "max_steps": 5000,
    "epsilon": 1e-5,
    "scan_step": 1.0,
    "search_limit": 100.0,
}

SOLVER_SETTING_KEYS = ("precision", "max_steps", "epsilon", "scan_step", "search_limit")
