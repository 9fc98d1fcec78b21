"""OS snapshot: services, process parentage and per-process usage via psutil."""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections.abc import Iterable
from typing import Protocol

import psutil

from svccheck.errors import AcquisitionError
from svccheck.models.runtime import PerformanceSample, ProcessRecord, ServiceRecord

logger = logging.getLogger("svccheck.source")

_SYSTEMCTL = "systemctl"


class SnapshotSource(Protocol):
    """Read-only view of the host consumed by the check pipeline."""

    def list_services(self) -> list[ServiceRecord]: ...

    def list_processes(self) -> list[ProcessRecord]: ...

    def list_performance_samples(
        self, pids: Iterable[int] | None = None
    ) -> list[PerformanceSample]: ...


def _run_systemctl(*args: str) -> str:
    cmd = [_SYSTEMCTL, *args, "--no-pager"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as exc:
        raise AcquisitionError("systemctl not found") from exc
    except subprocess.CalledProcessError as exc:
        # list-units exits non-zero for some unit states; keep what it printed
        if exc.stdout:
            return exc.stdout
        raise AcquisitionError(
            f"systemctl {args[0]} failed: {(exc.stderr or '').strip() or exc.returncode}"
        ) from exc
    return result.stdout


def _parse_unit_names(output: str) -> list[str]:
    """Unit names from ``systemctl list-units --plain --no-legend`` output."""
    names = []
    for line in output.splitlines():
        fields = line.split()
        if fields and fields[0] == "●":
            fields = fields[1:]
        if fields and fields[0].endswith(".service"):
            names.append(fields[0])
    return names


def _parse_show_blocks(output: str) -> list[ServiceRecord]:
    """Records from ``systemctl show -p Id -p MainPID`` (blank-line separated blocks)."""
    records = []
    for block in output.strip().split("\n\n"):
        props = {}
        for line in block.splitlines():
            key, sep, value = line.partition("=")
            if sep:
                props[key.strip()] = value.strip()
        name = props.get("Id")
        if not name:
            continue
        try:
            pid = int(props.get("MainPID", "0") or 0)
        except ValueError:
            pid = 0
        records.append(ServiceRecord(name=name, pid=pid))
    return records


def _systemd_services() -> list[ServiceRecord]:
    units = _parse_unit_names(
        _run_systemctl("list-units", "--type=service", "--all", "--plain", "--no-legend")
    )
    if not units:
        return []
    return _parse_show_blocks(_run_systemctl("show", "-p", "Id", "-p", "MainPID", *units))


def _windows_services() -> list[ServiceRecord]:
    records = []
    for svc in psutil.win_service_iter():
        try:
            records.append(ServiceRecord(name=svc.name(), pid=svc.pid() or 0))
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            logger.debug("Skipping unreadable service %s", svc)
    return records


class PsutilSnapshotSource:
    """Snapshot source backed by psutil, with systemd as the service registry off Windows."""

    def __init__(self, cpu_interval: float = 0.5) -> None:
        self._cpu_interval = cpu_interval

    def list_services(self) -> list[ServiceRecord]:
        if psutil.WINDOWS:
            services = _windows_services()
        elif shutil.which(_SYSTEMCTL):
            services = _systemd_services()
        else:
            raise AcquisitionError("No service manager available (need Windows SCM or systemd)")
        logger.debug("Enumerated %d services", len(services))
        return services

    def list_processes(self) -> list[ProcessRecord]:
        records = []
        for proc in psutil.process_iter(["pid", "ppid"]):
            info = proc.info
            ppid = info.get("ppid")
            if ppid is None:
                continue
            records.append(ProcessRecord(pid=info["pid"], ppid=ppid))
        logger.debug("Enumerated %d processes", len(records))
        return records

    def list_performance_samples(
        self, pids: Iterable[int] | None = None
    ) -> list[PerformanceSample]:
        """Sample working set and CPU for *pids* (all processes when None).

        CPU percent needs two readings, so the call blocks for the configured
        interval once regardless of how many processes are sampled.
        """
        if pids is None:
            procs = list(psutil.process_iter())
        else:
            procs = []
            for pid in pids:
                try:
                    procs.append(psutil.Process(pid))
                except psutil.NoSuchProcess:
                    logger.warning("Process %d exited before sampling", pid)

        primed = []
        for proc in procs:
            try:
                proc.cpu_percent(None)
                primed.append(proc)
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                logger.warning("Cannot read counters for process %d", proc.pid)

        if primed and self._cpu_interval > 0:
            time.sleep(self._cpu_interval)

        samples = []
        for proc in primed:
            try:
                with proc.oneshot():
                    cpu = proc.cpu_percent(None)
                    rss = proc.memory_info().rss
            except psutil.ZombieProcess:
                logger.warning("Zombie process %d has no counters", proc.pid)
                continue
            except psutil.NoSuchProcess:
                logger.warning("Process %d exited while sampling", proc.pid)
                continue
            except psutil.AccessDenied:
                logger.warning("Access denied reading process %d", proc.pid)
                continue
            samples.append(
                PerformanceSample(pid=proc.pid, working_set_bytes=rss, cpu_percent=round(cpu))
            )
        return samples
