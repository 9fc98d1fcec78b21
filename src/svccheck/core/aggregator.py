"""Summing memory and CPU samples over a process set."""

from __future__ import annotations

from collections.abc import Iterable

from svccheck.errors import NoPerformanceDataError
from svccheck.models.runtime import BYTES_PER_MB, Aggregate, PerformanceSample


def aggregate(pids: set[int], samples: Iterable[PerformanceSample]) -> Aggregate:
    """Sum working-set MB and CPU percent of every sample belonging to *pids*.

    Samples are not de-duplicated: a pid reported twice is counted twice.
    """
    # Integer totals keep the result independent of sample order.
    total_bytes = 0
    total_cpu = 0
    count = 0

    for sample in samples:
        if sample.pid not in pids:
            continue
        total_bytes += sample.working_set_bytes
        total_cpu += sample.cpu_percent
        count += 1

    if count == 0:
        raise NoPerformanceDataError(pids)

    return Aggregate(
        memory_mb=total_bytes / BYTES_PER_MB,
        cpu_percent=float(total_cpu),
        sample_count=count,
    )
