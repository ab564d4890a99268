import pandas as pd
import streamlit as st

from src.charts import build_solution_figure
from src.defaults import DEFAULTS, SOLVER_SETTING_KEYS
from src.evaluator import iteration_map_label
from src.input_metadata import advisory_warnings, help_with_guidance
from src.integrity_checks import run_solution_checks
from src.root_solver import SolutionResult, SolveFailure, parse_parameter, solve
from src.runtime_logging import (
    append_runtime_event,
    install_global_exception_logging,
    log_solve_outcome,
    read_runtime_events,
    read_solve_history,
    runtime_log_path,
)
from src.schema import normalize_solver_settings, settings_to_dict


install_global_exception_logging()


UI_DEFAULTS = {
    "parameter_text": DEFAULTS["parameter_text"],
    "show_detail": True,
    "solve_outcome": None,
    "solve_result": None,
    "solve_settings_warnings": [],
    "solution_findings": [],
    **{f"setting_{key}": DEFAULTS[key] for key in SOLVER_SETTING_KEYS},
}

SETTING_WIDGETS = {
    "precision": {
        "label": "Precision",
        "help": "Stop when consecutive iterates differ by less than this value.",
        "kwargs": {"min_value": 1e-9, "step": 0.0001, "format": "%.6f"},
    },
    "max_steps": {
        "label": "Max Steps",
        "help": "Maximum number of fixed-point iterations.",
        "kwargs": {"min_value": 1, "step": 100},
    },
    "epsilon": {
        "label": "Domain Offset",
        "help": "Offset added to the lower scan bound.",
        "kwargs": {"min_value": 1e-12, "step": 1e-6, "format": "%.1e"},
    },
    "scan_step": {
        "label": "Scan Step",
        "help": "Width of each bracket search window.",
        "kwargs": {"min_value": 0.001, "step": 0.5},
    },
    "search_limit": {
        "label": "Search Limit",
        "help": "The bracket search stops once the window passes this x value.",
        "kwargs": {"min_value": 1.0, "max_value": 1e6, "step": 10.0},
    },
}


def _init_session_state() -> None:
    for key, value in UI_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _reset_solver_settings() -> None:
    for key in SOLVER_SETTING_KEYS:
        st.session_state[f"setting_{key}"] = DEFAULTS[key]


def _settings_from_state() -> dict:
    return {key: st.session_state[f"setting_{key}"] for key in SOLVER_SETTING_KEYS}


def _outcome_summary(outcome: SolutionResult | SolveFailure) -> dict:
    if isinstance(outcome, SolveFailure):
        return {"status": "failed", "reason": outcome.reason, "message": outcome.message}
    return {
        "status": "solved",
        "root_value": outcome.root_value,
        "steps": outcome.steps,
        "initial_approximation": outcome.initial_approximation,
        "function_value": outcome.function_value,
        "parameter": outcome.parameter,
    }


def _details_frame(result: SolutionResult) -> pd.DataFrame:
    rows = [
        ("Root", f"{result.root_value:.5f}"),
        ("Function value", f"{result.function_value:.7f}"),
        ("Steps", str(result.steps)),
        ("Initial approximation", f"{result.initial_approximation:.5f}"),
        ("Search interval", f"[{result.bracket.x1:.5f}, {result.bracket.x2:.5f}]"),
        ("Iteration map", iteration_map_label(result.parameter)),
    ]
    return pd.DataFrame(rows, columns=["Quantity", "Value"])


def _run_solve() -> None:
    parameter_text = st.session_state["parameter_text"]
    settings, settings_warnings = normalize_solver_settings(_settings_from_state())
    if settings_warnings:
        append_runtime_event(
            level="WARNING",
            event="solver_settings_adjusted",
            message=f"{len(settings_warnings)} solver setting(s) repaired before solving.",
            context={"warnings": settings_warnings, "settings": settings_to_dict(settings)},
        )

    outcome = solve(parameter_text, settings)
    log_solve_outcome(parameter_text, outcome)

    findings = []
    if isinstance(outcome, SolutionResult):
        findings = run_solution_checks(outcome, settings)
        if findings:
            append_runtime_event(
                level="ERROR",
                event="solution_checks_failed",
                message=f"{len(findings)} solution check(s) failed.",
                context={"findings": findings, "parameter_text": parameter_text},
            )

    st.session_state["solve_outcome"] = outcome
    st.session_state["solve_result"] = _outcome_summary(outcome)
    st.session_state["solve_settings_warnings"] = settings_warnings
    st.session_state["solution_findings"] = findings


st.set_page_config(page_title="Nonlinear Equation Solver", layout="centered")
_init_session_state()

st.title("Solving √(x + a) = 1/x")
st.caption(f"Bracket search followed by fixed-point iteration. Precision: {st.session_state['setting_precision']:g}")

input_col, button_col = st.columns([4, 1], vertical_alignment="bottom")
with input_col:
    st.text_input(
        "Parameter a",
        key="parameter_text",
        help=help_with_guidance("parameter_a", "Real value of a; either '.' or ',' works as the decimal separator."),
    )
with button_col:
    st.button("Solve", type="primary", on_click=_run_solve, help="Locate a root for the entered parameter.")

with st.expander("Solver Settings", expanded=False):
    for key, widget in SETTING_WIDGETS.items():
        st.number_input(widget["label"], key=f"setting_{key}", help=help_with_guidance(key, widget["help"]), **widget["kwargs"])
    st.button("Reset Solver Settings", on_click=_reset_solver_settings, help="Restore the default solver constants.")

advisory_inputs = _settings_from_state()
try:
    advisory_inputs["parameter_a"] = parse_parameter(st.session_state["parameter_text"])
except ValueError:
    pass
for warning in advisory_warnings(advisory_inputs):
    st.info(warning)

for warning in st.session_state["solve_settings_warnings"]:
    st.warning(warning)

outcome = st.session_state["solve_outcome"]
if isinstance(outcome, SolveFailure):
    st.error(outcome.message)
elif isinstance(outcome, SolutionResult):
    show_detail = st.toggle("Detailed view", key="show_detail", help="Switch between the zoomed view around the root and the overview.")
    st.plotly_chart(build_solution_figure(outcome, zoomed=show_detail), width="stretch")

    st.subheader("Results")
    st.dataframe(_details_frame(outcome), hide_index=True, width="stretch")

    findings = st.session_state["solution_findings"]
    if findings:
        with st.expander(f"[!] Solution Checks ({len(findings)})", expanded=True):
            st.dataframe(pd.DataFrame(findings), hide_index=True, width="stretch")
else:
    st.info("Enter a parameter and press Solve.")

with st.expander("Runtime Diagnostics", expanded=False):
    st.caption(f"Log file: {runtime_log_path()}")
    history = read_solve_history(limit=50)
    if not history.empty:
        st.markdown("**Solve history**")
        st.dataframe(history.drop(columns=["message"]), hide_index=True, width="stretch")
    events = read_runtime_events(limit=50)
    if events:
        st.dataframe(
            pd.DataFrame(events).reindex(columns=["timestamp_utc", "level", "event", "message"]).iloc[::-1],
            hide_index=True,
            width="stretch",
        )
    else:
        st.write("No runtime events recorded.")
