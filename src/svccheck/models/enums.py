"""Enumerations for svccheck models."""

from enum import Enum


class Severity(str, Enum):
    """Check outcome as understood by the monitoring supervisor."""

    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]

    @property
    def rank(self) -> int:
        """Ordering used when combining threshold results (OK < WARNING < CRITICAL)."""
        return _RANKS[self]


_EXIT_CODES: dict[Severity, int] = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
    Severity.UNKNOWN: 3,
}

_RANKS: dict[Severity, int] = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.CRITICAL: 2,
    Severity.UNKNOWN: 3,
}


class Metric(str, Enum):
    """Performance-data keys, in output order."""

    MEMORY = "mem"
    CPU = "cpu"
