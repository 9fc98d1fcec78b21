"""Typer CLI for svccheck."""

from __future__ import annotations

import logging
import sys
from typing import Annotated, Optional

import click
import typer
from rich.console import Console

from svccheck.config import SvccheckConfig
from svccheck.core.check import CheckReport, CheckRequest, run_check
from svccheck.core.report import format_number, format_status_line, format_unknown
from svccheck.core.source import PsutilSnapshotSource, SnapshotSource
from svccheck.errors import CheckError, ConfigError
from svccheck.logging_setup import setup_logging
from svccheck.models.enums import Severity
from svccheck.models.runtime import Thresholds

app = typer.Typer(
    name="svccheck",
    help="Service process-tree memory/CPU check for monitoring supervisors.",
    no_args_is_help=True,
)
console = Console(stderr=True)
logger = logging.getLogger("svccheck.cli")


def _config() -> SvccheckConfig:
    config = SvccheckConfig.load()
    try:
        setup_logging(config.log.file, config.log.level)
    except OSError as exc:
        raise ConfigError(f"Cannot open log file {config.log.file}: {exc}") from exc
    return config


def _source(config: SvccheckConfig) -> SnapshotSource:
    return PsutilSnapshotSource(cpu_interval=config.sampling.cpu_sample_interval)


def _emit(line: str, severity: Severity) -> None:
    typer.echo(line, nl=False)
    raise typer.Exit(severity.exit_code)


def _print_breakdown(report: CheckReport) -> None:
    from rich.table import Table

    table = Table(title="Child processes")
    table.add_column("PID", justify="right")
    table.add_column("Memory (MB)", justify="right")
    table.add_column("CPU %", justify="right")

    for sample in sorted(report.samples, key=lambda s: s.pid):
        table.add_row(
            str(sample.pid),
            format_number(sample.memory_mb),
            str(sample.cpu_percent),
        )
    table.add_row(
        "[bold]total[/bold]",
        format_number(report.totals.memory_mb),
        format_number(report.totals.cpu_percent),
    )
    console.print(table)


@app.command()
def check(
    service: Annotated[str, typer.Option("--service", "-s", help="Service name or regex")],
    process: Annotated[
        Optional[str], typer.Option("--process", "-p", help="Process name (informational)")
    ] = None,
    mem: Annotated[bool, typer.Option("--mem", help="Check memory usage")] = False,
    mem_warn: Annotated[
        Optional[int], typer.Option("--mem-warn", help="Memory warning level (MB)")
    ] = None,
    mem_critical: Annotated[
        Optional[int], typer.Option("--mem-critical", help="Memory critical level (MB)")
    ] = None,
    cpu: Annotated[bool, typer.Option("--cpu", help="Check CPU usage")] = False,
    cpu_warn: Annotated[
        Optional[int], typer.Option("--cpu-warn", help="CPU warning level (%)")
    ] = None,
    cpu_critical: Annotated[
        Optional[int], typer.Option("--cpu-critical", help="CPU critical level (%)")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print per-process breakdown to stderr")
    ] = False,
) -> None:
    """Check memory/CPU of a service's child processes."""
    try:
        config = _config()
        defaults = config.thresholds
        thresholds = Thresholds(
            mem_warn=defaults.mem_warn if mem_warn is None else mem_warn,
            mem_critical=defaults.mem_critical if mem_critical is None else mem_critical,
            cpu_warn=defaults.cpu_warn if cpu_warn is None else cpu_warn,
            cpu_critical=defaults.cpu_critical if cpu_critical is None else cpu_critical,
        )
        request = CheckRequest(
            service=service,
            process=process,
            mem_enabled=mem,
            cpu_enabled=cpu,
            thresholds=thresholds,
        )
        logger.info("Checking service '%s' (mem=%s, cpu=%s)", service, mem, cpu)
        report = run_check(request, _source(config))
    except CheckError as exc:
        setup_logging()
        logger.error("%s", exc)
        _emit(format_unknown(str(exc)), Severity.UNKNOWN)

    outcome = report.outcome
    if outcome.severity is Severity.OK:
        logger.info("%s", outcome.summary)
    else:
        logger.warning("%s: %s", outcome.severity.value, outcome.summary)

    if verbose:
        _print_breakdown(report)
    _emit(format_status_line(outcome), outcome.severity)


@app.command()
def services(
    pattern: Annotated[Optional[str], typer.Argument(help="Name or regex filter")] = None,
) -> None:
    """List OS services and their main process ids."""
    from svccheck.core.resolver import match_services

    try:
        config = _config()
        svcs = _source(config).list_services()
        if pattern:
            svcs = match_services(pattern, svcs)
    except CheckError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if not svcs:
        console.print("[dim]No services found.[/dim]")
        return

    from rich.table import Table

    table = Table(title="Services")
    table.add_column("Name", style="bold")
    table.add_column("PID", justify="right")

    for s in sorted(svcs, key=lambda s: s.name):
        table.add_row(s.name, str(s.pid) if s.pid else "-")
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the svccheck CLI.

    Usage errors are reported as UNKNOWN (exit 3) like every other failure,
    not with click's usage exit code.
    """
    try:
        code = app(args=argv, prog_name="svccheck", standalone_mode=False)
    except click.UsageError as exc:
        typer.echo(format_unknown(exc.format_message()), nl=False)
        sys.exit(Severity.UNKNOWN.exit_code)
    sys.exit(code or 0)


if __name__ == "__main__":
    main()
