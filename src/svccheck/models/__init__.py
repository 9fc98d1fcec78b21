"""svccheck data models."""

from svccheck.models.enums import Metric, Severity
from svccheck.models.runtime import (
    Aggregate,
    MetricResult,
    Outcome,
    PerformanceSample,
    ProcessRecord,
    ServiceRecord,
    Thresholds,
)

__all__ = [
    "Severity",
    "Metric",
    "ServiceRecord",
    "ProcessRecord",
    "PerformanceSample",
    "Thresholds",
    "Aggregate",
    "MetricResult",
    "Outcome",
]
