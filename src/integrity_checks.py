"""Post-solve invariant checks for a located root."""

from __future__ import annotations

from typing import Any

import numpy as np

from src.evaluator import evaluate_function, evaluate_iteration_map
from src.root_solver import DEFAULT_SETTINGS, SolutionResult, SolverSettings


def _finding(check: str, value: float, limit: float, detail: str) -> dict[str, Any]:
    return {
        "Check": check,
        "Value": float(value),
        "Limit": float(limit),
        "Detail": detail,
    }


def run_solution_checks(result: SolutionResult, settings: SolverSettings = DEFAULT_SETTINGS) -> list[dict[str, Any]]:
    """Return solution findings (empty list means all checks passed)."""
    findings: list[dict[str, Any]] = []
    a = result.parameter
    root = result.root_value

    if root + a < 0 or root == 0:
        findings.append(_finding("Root in domain", root + a, 0.0, f"x={root:.6g} is outside x + a >= 0, x != 0."))

    g_root = evaluate_iteration_map(root, a)
    if g_root is None:
        findings.append(_finding("Fixed-point tolerance", np.nan, settings.precision, "Iteration map undefined at the root."))
    else:
        gap = abs(g_root - root)
        if gap >= settings.precision:
            findings.append(
                _finding("Fixed-point tolerance", gap, settings.precision, f"|g(x) - x| = {gap:.3g} at x={root:.6g}.")
            )

    if not 0 <= result.steps < settings.max_steps:
        findings.append(_finding("Step budget", result.steps, settings.max_steps, "Step count outside [0, max_steps)."))

    bracket = result.bracket
    f1 = evaluate_function(bracket.x1, a)
    f2 = evaluate_function(bracket.x2, a)
    if f1 is None or f2 is None or np.sign(f1) == np.sign(f2):
        findings.append(
            _finding(
                "Bracket sign change",
                bracket.x2 - bracket.x1,
                0.0,
                f"f({bracket.x1:.4f})={f1}, f({bracket.x2:.4f})={f2}.",
            )
        )

    delta = abs(result.initial_approximation - bracket.midpoint)
    if not np.isclose(delta, 0.0):
        findings.append(_finding("Initial approximation", delta, 0.0, "Seed is not the bracket midpoint."))

    return findings
