"""Pure evaluation of f(x, a) = sqrt(x + a) - 1/x and its fixed-point map."""

from __future__ import annotations

import math


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def evaluate_function(x: float, a: float) -> float | None:
    """Return sqrt(x + a) - 1/x, or None where the expression has no real value."""
    try:
        x = float(x)
        a = float(a)
        if not (math.isfinite(x) and math.isfinite(a)):
            return None
        if x + a < 0 or x == 0:
            return None
        return _finite_or_none(math.sqrt(x + a) - 1.0 / x)
    except (ArithmeticError, ValueError, TypeError):
        return None


def evaluate_iteration_map(x: float, a: float) -> float | None:
    """Fixed-point map g used to refine a root estimate.

    a >= 0 uses g(x) = 1/sqrt(x + a); a < 0 uses g(x) = 1/x**2 - a.
    Both branches are defined only for x > 0 and x + a >= 0.
    """
    try:
        x = float(x)
        a = float(a)
        if not (math.isfinite(x) and math.isfinite(a)):
            return None
        if x <= 0 or x + a < 0:
            return None
        if a >= 0:
            return _finite_or_none(1.0 / math.sqrt(x + a))
        return _finite_or_none(1.0 / (x * x) - a)
    except (ArithmeticError, ValueError, TypeError):
        return None


def iteration_map_label(a: float) -> str:
    if a >= 0:
        return "g(x) = 1/√(x + a)"
    return "g(x) = 1/x² − a"
