"""Plot data and Plotly figures for the located root."""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from src.evaluator import evaluate_function
from src.root_solver import SolutionResult


SAMPLE_POINTS = 800
DETAIL_MARGIN = 0.5
OUTLIER_LIMIT = 1000.0
MIN_Y_SPAN = 0.1

LINE_COLOR = "#1E88E5"
AXIS_COLOR = "#78909C"
BRACKET_COLOR = "#FF9800"
INITIAL_COLOR = "#7CB342"
ROOT_COLOR = "#D81B60"


def equation_title(a: float, zoomed: bool) -> str:
    title = f"√(x + {a:g}) = 1/x"
    return f"{title} (detailed view)" if zoomed else title


def sample_function(x_start: float, x_end: float, a: float, points: int = SAMPLE_POINTS) -> pd.DataFrame:
    """Evaluate f on points + 1 evenly spaced x values, dropping undefined ones."""
    xs = np.linspace(float(x_start), float(x_end), int(points) + 1)
    rows = []
    for x in xs:
        y = evaluate_function(float(x), a)
        if y is not None:
            rows.append({"x": float(x), "y": y})
    return pd.DataFrame(rows, columns=["x", "y"])


def y_axis_range(y_values, special_values, zoomed: bool) -> tuple[float, float]:
    y = np.asarray(list(y_values), dtype=float)
    if y.size == 0:
        return -1.0, 1.0

    y_min = float(y.min())
    y_max = float(y.max())

    if zoomed:
        filtered = y[np.abs(y) < OUTLIER_LIMIT]
        if filtered.size:
            y_min = float(filtered.min())
            y_max = float(filtered.max())
        special = [float(v) for v in special_values if v is not None]
        if special:
            y_min = min(y_min, min(special))
            y_max = max(y_max, max(special))
        padding = max(0.1, (y_max - y_min) * 0.15)
        y_min -= padding
        y_max += padding
    else:
        half = max(abs(y_min), abs(y_max), MIN_Y_SPAN)
        y_min, y_max = -half, half

    if abs(y_max - y_min) < MIN_Y_SPAN:
        center = (y_min + y_max) / 2
        y_min = center - MIN_Y_SPAN / 2
        y_max = center + MIN_Y_SPAN / 2
    return y_min, y_max


def overview_range(result: SolutionResult) -> tuple[float, float]:
    half = max(abs(result.root_value) * 1.5, abs(result.initial_approximation) * 1.5, 10.0)
    return -half, half


def detail_range(result: SolutionResult) -> tuple[float, float]:
    start = max(result.lower_bound, result.root_value - DETAIL_MARGIN)
    return start, result.root_value + DETAIL_MARGIN


def build_solution_figure(result: SolutionResult, zoomed: bool) -> go.Figure:
    """Function curve with bracket endpoints, the initial approximation and the root."""
    a = result.parameter
    x_start, x_end = detail_range(result) if zoomed else overview_range(result)
    curve = sample_function(x_start, x_end, a)

    markers = [
        ("Initial approximation", result.initial_approximation, INITIAL_COLOR),
        ("Root", result.root_value, ROOT_COLOR),
    ]
    marker_values = [evaluate_function(x, a) for _, x, _ in markers]
    y_min, y_max = y_axis_range(curve["y"], marker_values, zoomed)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=curve["x"], y=curve["y"], mode="lines", name="f(x)", line=dict(color=LINE_COLOR, width=2))
    )
    fig.add_hline(y=0.0, line_dash="dash", line_color=AXIS_COLOR)
    fig.add_vline(x=0.0, line_dash="dash", line_color=AXIS_COLOR)
    for x in (result.bracket.x1, result.bracket.x2):
        fig.add_vline(x=x, line_color=BRACKET_COLOR, opacity=0.7)

    for (name, x, color), y in zip(markers, marker_values):
        if y is None:
            continue
        fig.add_trace(
            go.Scatter(x=[x], y=[y], mode="markers", name=name, marker=dict(color=color, size=11, opacity=0.9))
        )

    fig.update_layout(
        title=equation_title(a, zoomed),
        xaxis=dict(title="x", range=[x_start, x_end]),
        yaxis=dict(title="f(x)", range=[y_min, y_max]),
        legend_title_text="Points",
    )
    return fig
