"""Layered configuration: .svccheck/config.toml -> SVCCHECK_* env vars -> defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib  # 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from svccheck.errors import ConfigError
from svccheck.models.runtime import Thresholds


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Diagnostic log settings. No file means no log on disk."""

    file: Path | None = None
    level: str = "INFO"


@dataclass(frozen=True, slots=True)
class SamplingConfig:
    """Performance sampling settings."""

    cpu_sample_interval: float = 0.5


@dataclass(frozen=True, slots=True)
class SvccheckConfig:
    """Top-level configuration container."""

    project_path: Path = field(default_factory=Path.cwd)
    log: LogConfig = field(default_factory=LogConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    thresholds: Thresholds = field(default_factory=Thresholds)

    @property
    def svccheck_dir(self) -> Path:
        return self.project_path / ".svccheck"

    @classmethod
    def load(cls, project_path: Path | None = None) -> SvccheckConfig:
        """Load config with layering: TOML file -> env vars -> defaults.

        Unreadable files and malformed values raise ConfigError.
        """
        try:
            return cls._load(project_path)
        except (tomllib.TOMLDecodeError, OSError, ValueError, TypeError) as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def _load(cls, project_path: Path | None) -> SvccheckConfig:
        project = Path(project_path) if project_path else Path.cwd()
        toml_path = project / ".svccheck" / "config.toml"

        toml_data: dict = {}
        if toml_path.is_file():
            with open(toml_path, "rb") as f:
                toml_data = tomllib.load(f)

        log_data = toml_data.get("log", {})
        sampling_data = toml_data.get("sampling", {})
        threshold_data = toml_data.get("thresholds", {})

        _log_defaults = LogConfig()
        _sampling_defaults = SamplingConfig()
        _threshold_defaults = Thresholds()

        log_file = os.environ.get("SVCCHECK_LOG_FILE", log_data.get("file"))
        log = LogConfig(
            file=Path(log_file) if log_file else _log_defaults.file,
            level=str(
                os.environ.get("SVCCHECK_LOG_LEVEL", log_data.get("level", _log_defaults.level))
            ).upper(),
        )
        if not isinstance(logging.getLevelName(log.level), int):
            raise ValueError(f"unknown log level '{log.level}'")

        sampling = SamplingConfig(
            cpu_sample_interval=float(
                os.environ.get(
                    "SVCCHECK_CPU_SAMPLE_INTERVAL",
                    sampling_data.get(
                        "cpu_sample_interval", _sampling_defaults.cpu_sample_interval
                    ),
                )
            ),
        )

        def _threshold(name: str) -> int:
            return int(
                os.environ.get(
                    f"SVCCHECK_{name.upper()}",
                    threshold_data.get(name, getattr(_threshold_defaults, name)),
                )
            )

        thresholds = Thresholds(
            mem_warn=_threshold("mem_warn"),
            mem_critical=_threshold("mem_critical"),
            cpu_warn=_threshold("cpu_warn"),
            cpu_critical=_threshold("cpu_critical"),
        )

        return cls(
            project_path=project,
            log=log,
            sampling=sampling,
            thresholds=thresholds,
        )
