from __future__ import annotations

import pytest

from src.charts import (
    build_solution_figure,
    detail_range,
    equation_title,
    overview_range,
    sample_function,
    y_axis_range,
)
from src.root_solver import solve


def test_sample_function_drops_undefined_points():
    df = sample_function(-1.0, 1.0, 0.0)
    assert list(df.columns) == ["x", "y"]
    assert 400 <= len(df) <= 401
    assert (df["x"] > 0).all()


def test_sample_function_covers_whole_interval_inside_domain():
    df = sample_function(1.0, 2.0, 0.0, points=10)
    assert len(df) == 11
    assert df["x"].iloc[0] == pytest.approx(1.0)
    assert df["x"].iloc[-1] == pytest.approx(2.0)


def test_y_axis_range_defaults_without_data():
    assert y_axis_range([], [], zoomed=False) == (-1.0, 1.0)


def test_overview_y_axis_is_symmetric():
    assert y_axis_range([-3.0, 2.0], [], zoomed=False) == (-3.0, 3.0)
    assert y_axis_range([0.01, 0.02], [], zoomed=False) == (-0.1, 0.1)


def test_zoomed_y_axis_filters_outliers_and_pads():
    y_min, y_max = y_axis_range([-2000.0, -1.0, 1.0], [0.5], zoomed=True)
    assert y_min == pytest.approx(-1.3)
    assert y_max == pytest.approx(1.3)


def test_zoomed_y_axis_includes_special_points():
    y_min, y_max = y_axis_range([0.0, 1.0], [-2.0, None], zoomed=True)
    assert y_min == pytest.approx(-2.45)
    assert y_max == pytest.approx(1.45)


def test_view_ranges_follow_solution(solved_a1):
    assert overview_range(solved_a1) == (-10.0, 10.0)
    start, end = detail_range(solved_a1)
    assert start == pytest.approx(solved_a1.root_value - 0.5)
    assert end == pytest.approx(solved_a1.root_value + 0.5)


def test_detail_range_never_starts_below_lower_bound():
    result = solve("1000")
    start, _ = detail_range(result)
    assert start == pytest.approx(result.lower_bound)


def test_equation_title_marks_detailed_view():
    assert equation_title(1.5, zoomed=False) == "√(x + 1.5) = 1/x"
    assert equation_title(1.5, zoomed=True).endswith("(detailed view)")


@pytest.mark.parametrize("zoomed", [True, False])
def test_solution_figure_has_curve_and_markers(solved_a1, zoomed):
    fig = build_solution_figure(solved_a1, zoomed=zoomed)
    names = [trace.name for trace in fig.data]
    assert names == ["f(x)", "Initial approximation", "Root"]
    assert fig.data[2].x[0] == pytest.approx(solved_a1.root_value)
    expected = detail_range(solved_a1) if zoomed else overview_range(solved_a1)
    assert list(fig.layout.xaxis.range) == pytest.approx(list(expected))
    # Two dashed axes plus the two bracket endpoints.
    assert len(fig.layout.shapes) == 4
