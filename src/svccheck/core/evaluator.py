"""Threshold evaluation: two aggregates plus four levels -> one severity."""

from __future__ import annotations

import logging

from svccheck.core.report import format_number
from svccheck.errors import NoMetricSelectedError
from svccheck.models.enums import Metric, Severity
from svccheck.models.runtime import MetricResult, Outcome, Thresholds

logger = logging.getLogger("svccheck.evaluator")


def classify(value: float, warn: float, critical: float) -> Severity:
    """Critical-then-warning ladder. Both comparisons are inclusive."""
    if value >= critical:
        return Severity.CRITICAL
    if value >= warn:
        return Severity.WARNING
    return Severity.OK


def worst(*severities: Severity) -> Severity:
    return max(severities, key=lambda s: s.rank)


def _describe(result: MetricResult, severity: Severity, unit: str) -> str:
    label = "Memory" if result.metric is Metric.MEMORY else "CPU"
    text = f"{label} usage {format_number(result.value)}{unit}"
    if severity is Severity.CRITICAL:
        text += f" (>= {format_number(result.critical)}{unit})"
    elif severity is Severity.WARNING:
        text += f" (>= {format_number(result.warn)}{unit})"
    return text


def evaluate(
    memory_mb: float,
    cpu_percent: float,
    mem_enabled: bool,
    cpu_enabled: bool,
    thresholds: Thresholds,
) -> Outcome:
    """Judge the aggregates against the thresholds of the enabled metrics.

    With both metrics enabled the overall severity is the worse of the two.
    Disabled metrics are reported as zeros.
    """
    if not mem_enabled and not cpu_enabled:
        raise NoMetricSelectedError()

    memory = MetricResult.disabled(Metric.MEMORY)
    cpu = MetricResult.disabled(Metric.CPU)
    parts: list[str] = []
    severities: list[Severity] = []

    if mem_enabled:
        memory = MetricResult(
            metric=Metric.MEMORY,
            value=memory_mb,
            warn=thresholds.mem_warn,
            critical=thresholds.mem_critical,
        )
        mem_severity = classify(memory_mb, thresholds.mem_warn, thresholds.mem_critical)
        severities.append(mem_severity)
        parts.append(_describe(memory, mem_severity, "MB"))

    if cpu_enabled:
        cpu = MetricResult(
            metric=Metric.CPU,
            value=cpu_percent,
            warn=thresholds.cpu_warn,
            critical=thresholds.cpu_critical,
        )
        cpu_severity = classify(cpu_percent, thresholds.cpu_warn, thresholds.cpu_critical)
        severities.append(cpu_severity)
        parts.append(_describe(cpu, cpu_severity, "%"))

    severity = worst(*severities)
    logger.info(
        "Evaluated mem=%s cpu=%s -> %s",
        format_number(memory.value),
        format_number(cpu.value),
        severity.value,
    )
    return Outcome(severity=severity, summary=", ".join(parts), memory=memory, cpu=cpu)
