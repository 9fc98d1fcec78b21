"""Idempotent diagnostic-log setup.

stdout carries the status line, so records only ever go to an appended file.
"""

from __future__ import annotations

import logging
from pathlib import Path

_CONFIGURED = False

_LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "ERROR"}


class _DiagnosticFormatter(logging.Formatter):
    """Reports levels as INFO / WARN / ERROR."""

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        record.levelname = _LEVEL_NAMES.get(original, original)
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(log_file: Path | None = None, level: int | str = logging.INFO) -> None:
    """Configure svccheck logging to *log_file*. Safe to call multiple times."""
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return

    logger = logging.getLogger("svccheck")
    logger.setLevel(level)
    logger.propagate = False

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        handler.setFormatter(
            _DiagnosticFormatter("%(asctime)s [%(levelname)s] %(message)s")
        )
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)

    _CONFIGURED = True
