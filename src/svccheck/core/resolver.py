"""Service matching and child-process resolution."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from svccheck.errors import NoChildrenError, ServiceNotFoundError
from svccheck.models.runtime import ProcessRecord, ServiceRecord

logger = logging.getLogger("svccheck.resolver")


def _compile(pattern: str) -> re.Pattern[str]:
    """Compile a service pattern; invalid regexes are matched literally."""
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        logger.debug("Pattern %r is not a valid regex, matching literally", pattern)
        return re.compile(re.escape(pattern), re.IGNORECASE)


def match_services(pattern: str, services: Iterable[ServiceRecord]) -> list[ServiceRecord]:
    """Return every service whose name contains a match for *pattern*."""
    regex = _compile(pattern)
    matched = [s for s in services if regex.search(s.name)]
    if not matched:
        raise ServiceNotFoundError(pattern)
    logger.info(
        "Pattern '%s' matched %d service(s): %s",
        pattern,
        len(matched),
        ", ".join(f"{s.name}({s.pid})" for s in matched),
    )
    return matched


def children_of(service_pids: Iterable[int], processes: Iterable[ProcessRecord]) -> set[int]:
    """Direct children of the given pids. Grandchildren are not followed."""
    parents = {pid for pid in service_pids if pid > 0}
    return {p.pid for p in processes if p.ppid in parents}


def resolve_tree(
    pattern: str,
    services: Iterable[ServiceRecord],
    processes: Iterable[ProcessRecord],
) -> tuple[list[ServiceRecord], set[int]]:
    """Matched services and the pids of their direct children."""
    matched = match_services(pattern, services)
    service_pids = [s.pid for s in matched]

    pids = children_of(service_pids, processes)
    if not pids:
        raise NoChildrenError(pattern, service_pids)

    logger.info("Resolved %d child process(es): %s", len(pids), sorted(pids))
    return matched, pids


def resolve_children(
    pattern: str,
    services: Iterable[ServiceRecord],
    processes: Iterable[ProcessRecord],
) -> set[int]:
    """Resolve a service pattern to the pids of its worker processes.

    The service processes themselves are excluded; only their direct
    children are monitored.
    """
    return resolve_tree(pattern, services, processes)[1]
