"""Runtime diagnostics logging for solve requests."""

from __future__ import annotations

import json
import os
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
import streamlit as st
from streamlit.runtime.scriptrunner import get_script_run_ctx

from src.root_solver import SolutionResult, SolveFailure


LOG_DIR = Path(".local_store")
RUNTIME_EVENTS_LOG_FILE = LOG_DIR / "runtime_events.jsonl"

_DEFAULT_LOG_DIR = Path(".local_store")
_STORAGE_ENV_VAR = "ROOTFINDER_STORAGE_ROOT"

_EXCEPTION_HOOK_INSTALLED = False

SOLVE_EVENTS = {"solve_succeeded", "solve_failed"}
SOLVE_HISTORY_COLUMNS = ["timestamp_utc", "parameter_text", "status", "reason", "root_value", "steps", "message"]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _safe_json_default(value: Any):
    if isinstance(value, (set, tuple)):
        return list(value)
    return str(value)


def _expand_log_root(path_value: str | Path | None) -> Path:
    if path_value is None:
        return _DEFAULT_LOG_DIR
    text = str(path_value).strip()
    if not text:
        return _DEFAULT_LOG_DIR
    return Path(os.path.expandvars(os.path.expanduser(text)))


def configure_log_root(path_value: str | Path | None) -> Path:
    global LOG_DIR, RUNTIME_EVENTS_LOG_FILE
    LOG_DIR = _expand_log_root(path_value)
    RUNTIME_EVENTS_LOG_FILE = LOG_DIR / "runtime_events.jsonl"
    return LOG_DIR


def runtime_log_path() -> str:
    return str(RUNTIME_EVENTS_LOG_FILE.resolve())


def append_runtime_event(
    level: str,
    event: str,
    message: str,
    context: dict[str, Any] | None = None,
    exc: BaseException | None = None,
) -> None:
    """Append a structured runtime event record to disk."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        record: dict[str, Any] = {
            "timestamp_utc": _now_iso(),
            "level": str(level).upper(),
            "event": str(event),
            "message": str(message),
            "context": context or {},
        }
        if exc is not None:
            record["exception_type"] = type(exc).__name__
            record["exception_message"] = str(exc)
            record["traceback"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        with RUNTIME_EVENTS_LOG_FILE.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, default=_safe_json_default, ensure_ascii=False) + "\n")
    except Exception:
        # Diagnostics should never crash the app.
        pass


def log_solve_outcome(parameter_text: str, outcome: SolutionResult | SolveFailure) -> None:
    if isinstance(outcome, SolveFailure):
        append_runtime_event(
            level="WARNING",
            event="solve_failed",
            message=outcome.message,
            context={"parameter_text": parameter_text, "reason": outcome.reason, **outcome.context},
        )
        return
    append_runtime_event(
        level="INFO",
        event="solve_succeeded",
        message=f"Root {outcome.root_value:.5f} found in {outcome.steps} steps.",
        context={
            "parameter_text": parameter_text,
            "parameter": outcome.parameter,
            "root_value": outcome.root_value,
            "steps": outcome.steps,
            "initial_approximation": outcome.initial_approximation,
            "bracket": (outcome.bracket.x1, outcome.bracket.x2),
        },
    )


def read_runtime_events(limit: int = 200, events: set[str] | None = None) -> list[dict[str, Any]]:
    """Return the most recent records, optionally only those whose event name is in events."""
    if limit <= 0 or not RUNTIME_EVENTS_LOG_FILE.exists():
        return []
    try:
        lines = RUNTIME_EVENTS_LOG_FILE.read_text(encoding="utf-8").splitlines()
    except OSError:
        return []
    out: list[dict[str, Any]] = []
    for line in lines[-int(limit) :]:
        try:
            out.append(json.loads(line))
        except json.JSONDecodeError:
            out.append(
                {
                    "timestamp_utc": _now_iso(),
                    "level": "ERROR",
                    "event": "log_parse_error",
                    "message": "Malformed log line encountered.",
                    "context": {"line": line},
                }
            )
    if events is not None:
        out = [record for record in out if record.get("event") in events]
    return out


def read_solve_history(limit: int = 200) -> pd.DataFrame:
    """Tabulate logged solve requests, newest first."""
    rows = []
    for record in read_runtime_events(limit, events=SOLVE_EVENTS):
        context = record.get("context") or {}
        rows.append(
            {
                "timestamp_utc": record.get("timestamp_utc"),
                "parameter_text": context.get("parameter_text"),
                "status": "solved" if record.get("event") == "solve_succeeded" else "failed",
                "reason": context.get("reason", ""),
                "root_value": context.get("root_value"),
                "steps": context.get("steps"),
                "message": record.get("message"),
            }
        )
    return pd.DataFrame(rows, columns=SOLVE_HISTORY_COLUMNS).iloc[::-1].reset_index(drop=True)


def _active_solve_context() -> dict[str, Any]:
    state = st.session_state
    context: dict[str, Any] = {"parameter_text": state.get("parameter_text")}
    last = state.get("solve_result") or {}
    if last:
        context["last_status"] = last.get("status")
        context["last_reason"] = last.get("reason", "")
    return context


def install_global_exception_logging() -> None:
    """Capture uncaught exceptions raised inside a Streamlit script run."""
    global _EXCEPTION_HOOK_INSTALLED
    if _EXCEPTION_HOOK_INSTALLED:
        return
    old_hook = sys.excepthook

    def _hook(exc_type, exc, exc_tb):
        try:
            if get_script_run_ctx() is None:
                old_hook(exc_type, exc, exc_tb)
                return
            append_runtime_event(
                level="ERROR",
                event="uncaught_exception",
                message=str(exc),
                context=_active_solve_context(),
                exc=exc,
            )
        except Exception:
            pass
        old_hook(exc_type, exc, exc_tb)

    sys.excepthook = _hook
    _EXCEPTION_HOOK_INSTALLED = True


configure_log_root(os.getenv(_STORAGE_ENV_VAR, ""))
