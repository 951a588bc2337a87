"""Event sinks backed by the standard logging module."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Protocol

from tracing_perf.config import Level

REPORT_TARGET = "tracing-perf"
REPORT_SCOPE = "time-report"

logging.addLevelName(Level.TRACE, "TRACE")


class EventSink(Protocol):
    """Receiver of finished time reports."""

    def emit(self, scope_label: str, target: str, level: Level, message: str) -> None:
        ...


class LoggingSink:
    """Forward reports to the logger named after the event target.

    The scope label is attached to the record as ``record.span``.
    """

    def emit(self, scope_label: str, target: str, level: Level, message: str) -> None:
        logger = logging.getLogger(target)
        logger.log(int(level), message, extra={"span": scope_label})


def setup_report_logger(
    log_path: Optional[Path] = None, level: Level = Level.INFO
) -> logging.Logger:
    """Configure the report logger to write to ``log_path`` or stderr."""

    logger = logging.getLogger(REPORT_TARGET)
    logger.setLevel(int(level))
    logger.handlers.clear()
    if log_path is None:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.FileHandler(log_path, mode="w")
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(span)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
