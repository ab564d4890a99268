from __future__ import annotations

import math

import pytest

from src.evaluator import evaluate_function, evaluate_iteration_map, iteration_map_label


@pytest.mark.parametrize("x, a", [(3.0, 1.0), (0.25, 0.0), (7.5, -2.0), (1e-3, 50.0)])
def test_function_matches_closed_form_inside_domain(x, a):
    assert evaluate_function(x, a) == pytest.approx(math.sqrt(x + a) - 1.0 / x)


@pytest.mark.parametrize("x, a", [(-2.0, 1.0), (0.0, 5.0), (0.0, 0.0), (0.5, -1.0)])
def test_function_undefined_outside_domain(x, a):
    assert evaluate_function(x, a) is None


def test_function_is_defined_on_domain_boundary():
    # x + a == 0 is inside the square-root domain.
    assert evaluate_function(2.0, -2.0) == pytest.approx(-0.5)


@pytest.mark.parametrize(
    "x, a",
    [(math.inf, 1.0), (math.nan, 1.0), (1.0, math.inf), (1e308, 1e308), ("abc", 1.0)],
)
def test_function_degenerate_inputs_resolve_to_undefined(x, a):
    assert evaluate_function(x, a) is None


def test_iteration_map_branches_on_sign_of_parameter():
    assert evaluate_iteration_map(4.0, 0.0) == pytest.approx(0.5)
    assert evaluate_iteration_map(3.0, 1.0) == pytest.approx(0.5)
    assert evaluate_iteration_map(2.0, -1.0) == pytest.approx(1.25)


@pytest.mark.parametrize("x, a", [(0.0, 1.0), (-1.0, 5.0), (0.5, -1.0), (-3.0, -1.0)])
def test_iteration_map_undefined_outside_domain(x, a):
    assert evaluate_iteration_map(x, a) is None


def test_iteration_map_underflow_resolves_to_undefined():
    assert evaluate_iteration_map(1e-200, -1e-300) is None


def test_iteration_map_label_follows_branch():
    assert "√" in iteration_map_label(0.0)
    assert "x²" in iteration_map_label(-0.1)
