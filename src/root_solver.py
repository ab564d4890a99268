"""Bracket search and fixed-point refinement for sqrt(x + a) = 1/x."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

from src.defaults import DEFAULTS
from src.evaluator import evaluate_function, evaluate_iteration_map


PARSE_ERROR = "parse_error"
NO_BRACKET_FOUND = "no_bracket_found"
NO_CONVERGENCE = "no_convergence"

MAX_SCAN_WINDOWS = 1_000_000

Evaluator = Callable[[float, float], "float | None"]


@dataclass(frozen=True)
class SolverSettings:
    precision: float = float(DEFAULTS["precision"])
    max_steps: int = int(DEFAULTS["max_steps"])
    epsilon: float = float(DEFAULTS["epsilon"])
    scan_step: float = float(DEFAULTS["scan_step"])
    search_limit: float = float(DEFAULTS["search_limit"])


DEFAULT_SETTINGS = SolverSettings()


@dataclass(frozen=True)
class Bracket:
    x1: float
    x2: float

    @property
    def midpoint(self) -> float:
        return (self.x1 + self.x2) / 2


@dataclass(frozen=True)
class RefinementOutcome:
    converged: bool
    estimate: float
    steps: int
    left_domain: bool = False


@dataclass(frozen=True)
class SolutionResult:
    root_value: float
    steps: int
    initial_approximation: float
    function_value: float
    parameter: float
    bracket: Bracket
    lower_bound: float


@dataclass(frozen=True)
class SolveFailure:
    reason: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class ParameterParseError(ValueError):
    """Raised when the parameter text is not a real number."""


def parse_parameter(text: str) -> float:
    """Parse the parameter text, accepting a decimal comma."""
    normalized = str(text).strip().replace(",", ".")
    if "_" in normalized or not normalized.isascii():
        raise ParameterParseError(f"could not convert string to float: {text!r}")
    try:
        value = float(normalized)
    except ValueError as exc:
        raise ParameterParseError(str(exc)) from exc
    if not math.isfinite(value):
        raise ParameterParseError(f"parameter must be a finite number: {text!r}")
    return value


def lower_bound(a: float, settings: SolverSettings = DEFAULT_SETTINGS) -> float:
    return max(0.0, -a) + settings.epsilon


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def find_bracket(
    low: float,
    a: float,
    settings: SolverSettings = DEFAULT_SETTINGS,
    evaluate: Evaluator = evaluate_function,
) -> Bracket | None:
    """Slide a fixed-width window right from the lower bound until f changes sign.

    Returns None when an endpoint leaves the domain or the window reaches the
    search limit first, or when the window stops advancing or exceeds
    MAX_SCAN_WINDOWS slides. A root where f touches zero without crossing is missed.
    """
    x1 = abs(a) + settings.epsilon if a < 0 else low
    x2 = x1 + settings.scan_step
    f1 = evaluate(x1, a)
    f2 = evaluate(x2, a)
    windows = 0

    while f1 is not None and f2 is not None and _sign(f1) == _sign(f2) and x2 < settings.search_limit:
        if windows >= MAX_SCAN_WINDOWS or x2 + settings.scan_step == x2:
            return None
        windows += 1
        x1 = x2
        x2 += settings.scan_step
        f1 = f2
        f2 = evaluate(x2, a)

    if f1 is None or f2 is None or _sign(f1) == _sign(f2):
        return None
    return Bracket(x1, x2)


def refine_with_trace(
    x0: float,
    a: float,
    settings: SolverSettings = DEFAULT_SETTINGS,
    iterate: Evaluator = evaluate_iteration_map,
) -> RefinementOutcome:
    """Iterate x <- g(x) until consecutive estimates differ by less than the precision."""
    current = x0
    count = 0
    while count < settings.max_steps:
        nxt = iterate(current, a)
        if nxt is None:
            return RefinementOutcome(False, current, count, left_domain=True)
        if abs(nxt - current) < settings.precision:
            return RefinementOutcome(True, nxt, count)
        current = nxt
        count += 1
    return RefinementOutcome(False, current, count)


def refine(
    x0: float,
    a: float,
    settings: SolverSettings = DEFAULT_SETTINGS,
    iterate: Evaluator = evaluate_iteration_map,
) -> tuple[float, int] | None:
    outcome = refine_with_trace(x0, a, settings, iterate)
    if not outcome.converged:
        return None
    return outcome.estimate, outcome.steps


def solve(
    parameter_text: str,
    settings: SolverSettings | None = None,
    evaluate: Evaluator = evaluate_function,
    iterate: Evaluator = evaluate_iteration_map,
) -> SolutionResult | SolveFailure:
    """Locate a root of sqrt(x + a) - 1/x for the parameter given as text."""
    settings = settings or DEFAULT_SETTINGS
    try:
        a = parse_parameter(parameter_text)
    except ParameterParseError as exc:
        return SolveFailure(PARSE_ERROR, f"Error: {exc}", {"parameter_text": str(parameter_text)})

    low = lower_bound(a, settings)
    bracket = find_bracket(low, a, settings, evaluate)
    if bracket is None:
        return SolveFailure(
            NO_BRACKET_FOUND,
            f"No solution found in the interval [{low:.2f}, {settings.search_limit:g}]",
            {"parameter": a, "lower_bound": low, "search_limit": settings.search_limit},
        )

    initial = bracket.midpoint
    outcome = refine_with_trace(initial, a, settings, iterate)
    if not outcome.converged:
        if outcome.left_domain:
            detail = f"iteration left the domain at {outcome.estimate:.4f} after {outcome.steps} steps"
        else:
            detail = f"last estimate {outcome.estimate:.4f} after {outcome.steps} steps"
        return SolveFailure(
            NO_CONVERGENCE,
            f"Could not find a solution for the initial value {initial:.4f} ({detail})",
            {
                "parameter": a,
                "initial_approximation": initial,
                "last_estimate": outcome.estimate,
                "steps": outcome.steps,
                "left_domain": outcome.left_domain,
                "bracket": (bracket.x1, bracket.x2),
            },
        )

    f_value = evaluate(outcome.estimate, a)
    return SolutionResult(
        root_value=outcome.estimate,
        steps=outcome.steps,
        initial_approximation=initial,
        function_value=f_value if f_value is not None else 0.0,
        parameter=a,
        bracket=bracket,
        lower_bound=low,
    )
