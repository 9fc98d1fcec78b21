"""Frozen dataclass models for process snapshots and check results."""

from __future__ import annotations

from dataclasses import dataclass

from svccheck.errors import InvalidThresholdError
from svccheck.models.enums import Metric, Severity

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True, slots=True)
class ServiceRecord:
    """An OS service and the pid of its main process (0 when stopped)."""

    name: str
    pid: int


@dataclass(frozen=True, slots=True)
class ProcessRecord:
    """A running process and its parent."""

    pid: int
    ppid: int


@dataclass(frozen=True, slots=True)
class PerformanceSample:
    """Point-in-time resource usage of one process."""

    pid: int
    working_set_bytes: int
    cpu_percent: int

    @property
    def memory_mb(self) -> float:
        return self.working_set_bytes / BYTES_PER_MB


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Warning/critical levels: memory in megabytes, CPU in percent."""

    mem_warn: int = 0
    mem_critical: int = 0
    cpu_warn: int = 0
    cpu_critical: int = 0

    def validate(self, mem_enabled: bool = True, cpu_enabled: bool = True) -> None:
        """Reject negative or inverted levels for the enabled metrics."""
        checks = []
        if mem_enabled:
            checks.append(("mem", self.mem_warn, self.mem_critical))
        if cpu_enabled:
            checks.append(("cpu", self.cpu_warn, self.cpu_critical))

        for name, warn, critical in checks:
            if warn < 0:
                raise InvalidThresholdError(f"{name}_warn", warn, "must not be negative")
            if critical < 0:
                raise InvalidThresholdError(f"{name}_critical", critical, "must not be negative")
            if warn > critical:
                raise InvalidThresholdError(
                    f"{name}_warn", warn, f"must not exceed {name}_critical ({critical})"
                )


@dataclass(frozen=True, slots=True)
class Aggregate:
    """Summed usage over a set of processes."""

    memory_mb: float = 0.0
    cpu_percent: float = 0.0
    sample_count: int = 0


@dataclass(frozen=True, slots=True)
class MetricResult:
    """One performance-data entry: value plus the levels it was judged against."""

    metric: Metric
    value: float
    warn: float
    critical: float

    @classmethod
    def disabled(cls, metric: Metric) -> MetricResult:
        return cls(metric=metric, value=0, warn=0, critical=0)


@dataclass(frozen=True, slots=True)
class Outcome:
    """Terminal result of a check run."""

    severity: Severity
    summary: str
    memory: MetricResult
    cpu: MetricResult

    @property
    def memory_mb(self) -> float:
        return self.memory.value

    @property
    def cpu_percent(self) -> float:
        return self.cpu.value

    @property
    def exit_code(self) -> int:
        return self.severity.exit_code
