"""Status-line rendering for the monitoring supervisor."""

from __future__ import annotations

from svccheck.models.enums import Severity
from svccheck.models.runtime import MetricResult, Outcome


def format_number(value: float) -> str:
    """Render at most two decimals and drop a trailing ``.0``."""
    text = f"{round(float(value), 2):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_metric(result: MetricResult) -> str:
    """``<key>=<used>;<warn>;<critical>``"""
    return (
        f"{result.metric.value}="
        f"{format_number(result.value)};"
        f"{format_number(result.warn)};"
        f"{format_number(result.critical)}"
    )


def format_perfdata(outcome: Outcome) -> str:
    return f"{format_metric(outcome.memory)} {format_metric(outcome.cpu)}"


def _plain_text(text: str) -> str:
    """Human text must not contain the perf-data separator or line breaks."""
    return " ".join(text.replace("|", "/").split())


def format_status_line(outcome: Outcome) -> str:
    """``<SEVERITY> - <summary> | mem=...;...;... cpu=...;...;...``"""
    summary = _plain_text(outcome.summary)
    return f"{outcome.severity.value} - {summary} | {format_perfdata(outcome)}"


def format_unknown(message: str) -> str:
    return f"{Severity.UNKNOWN.value} - {_plain_text(message)}"
