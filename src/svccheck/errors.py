"""Exceptions raised by the check pipeline.

Every failure ends the run with an UNKNOWN status; the subclasses only tell
the log which stage gave up.
"""

from typing import Any


class CheckError(Exception):
    """Base exception for all svccheck failures."""


class AcquisitionError(CheckError):
    """Raised when the OS snapshot (services or processes) is unavailable or empty."""


class ServiceNotFoundError(CheckError):
    """Raised when no service matches the requested pattern."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"No service matching '{pattern}' found")
        self.pattern = pattern


class NoChildrenError(CheckError):
    """Raised when the matched services have no child processes."""

    def __init__(self, pattern: str, service_pids: list[int]) -> None:
        pids = ", ".join(str(p) for p in service_pids) or "none"
        super().__init__(
            f"No child processes found for service '{pattern}' (service pids: {pids})"
        )
        self.pattern = pattern
        self.service_pids = service_pids


class NoPerformanceDataError(CheckError):
    """Raised when none of the child processes has a performance sample."""

    def __init__(self, pids: set[int]) -> None:
        listed = ", ".join(str(p) for p in sorted(pids))
        super().__init__(f"No performance data available for child processes ({listed})")
        self.pids = pids


class NoMetricSelectedError(CheckError):
    """Raised when neither memory nor CPU checking was requested."""

    def __init__(self) -> None:
        super().__init__("No metric selected: enable --mem and/or --cpu")


class InvalidThresholdError(CheckError):
    """Raised when a threshold is negative or a warning level exceeds its critical level."""

    def __init__(self, param_name: str, value: Any, constraint: str) -> None:
        super().__init__(f"Invalid threshold '{param_name}' = {value}: {constraint}")
        self.param_name = param_name
        self.value = value
        self.constraint = constraint


class ConfigError(CheckError):
    """Raised when config.toml, an SVCCHECK_* variable or the log destination is unusable."""
