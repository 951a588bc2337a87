"""Per-activity time reports for a single unit of work."""

from importlib import metadata

from tracing_perf.config import Level, PrintOrder, ReporterConfig, load_config
from tracing_perf.reporter import (
    ReporterFinishedError,
    TimeReporter,
    TimeReporterBuilder,
)
from tracing_perf.utils.logging import EventSink, LoggingSink


def get_version() -> str:
    """Return package version if available, else placeholder."""
    try:
        return metadata.version("tracing-perf")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = [
    "EventSink",
    "Level",
    "LoggingSink",
    "PrintOrder",
    "ReporterConfig",
    "ReporterFinishedError",
    "TimeReporter",
    "TimeReporterBuilder",
    "get_version",
    "load_config",
]
