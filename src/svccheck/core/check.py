"""Check orchestration: snapshot -> resolve -> aggregate -> evaluate."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from svccheck.core.aggregator import aggregate
from svccheck.core.evaluator import evaluate
from svccheck.core.resolver import resolve_tree
from svccheck.core.source import SnapshotSource
from svccheck.errors import AcquisitionError, NoMetricSelectedError
from svccheck.models.runtime import (
    Aggregate,
    Outcome,
    PerformanceSample,
    ServiceRecord,
    Thresholds,
)

logger = logging.getLogger("svccheck.check")


@dataclass(frozen=True, slots=True)
class CheckRequest:
    """One invocation's parameters."""

    service: str
    process: str | None = None
    mem_enabled: bool = False
    cpu_enabled: bool = False
    thresholds: Thresholds = field(default_factory=Thresholds)

    def validate(self) -> None:
        if not self.mem_enabled and not self.cpu_enabled:
            raise NoMetricSelectedError()
        self.thresholds.validate(mem_enabled=self.mem_enabled, cpu_enabled=self.cpu_enabled)


@dataclass(frozen=True, slots=True)
class CheckReport:
    """Outcome plus the intermediate values it was computed from."""

    outcome: Outcome
    services: tuple[ServiceRecord, ...]
    child_pids: frozenset[int]
    samples: tuple[PerformanceSample, ...]
    totals: Aggregate


def run_check(request: CheckRequest, source: SnapshotSource) -> CheckReport:
    """Run one check. Any failure raises a CheckError subclass."""
    request.validate()
    if request.process:
        logger.info("Process filter '%s' given; it does not affect the check", request.process)

    services = source.list_services()
    if not services:
        raise AcquisitionError("Unable to enumerate services")
    processes = source.list_processes()
    if not processes:
        raise AcquisitionError("Unable to enumerate processes")

    matched, pids = resolve_tree(request.service, services, processes)

    samples = [s for s in source.list_performance_samples(pids) if s.pid in pids]
    totals = aggregate(pids, samples)
    logger.info(
        "Aggregated %d sample(s): %.2f MB, %d%% CPU",
        totals.sample_count,
        totals.memory_mb,
        totals.cpu_percent,
    )

    outcome = evaluate(
        totals.memory_mb,
        totals.cpu_percent,
        request.mem_enabled,
        request.cpu_enabled,
        request.thresholds,
    )
    outcome = dataclasses.replace(
        outcome, summary=f"Service '{request.service}': {outcome.summary}"
    )
    return CheckReport(
        outcome=outcome,
        services=tuple(matched),
        child_pids=frozenset(pids),
        samples=tuple(samples),
        totals=totals,
    )
