"""Collect and report total time spent on a set of activities.

A ``TimeReporter`` keeps one open interval at a time. ``start(key)`` closes
the previous interval, adds its length to that key's total and opens a new
one. When the reporter finishes it folds any open interval and emits a single
report through its event sink::

    with TimeReporter("ingest") as timer:
        timer.start("parse")
        parse()
        timer.start("validate")
        validate()

The report is emitted exactly once: by ``finish()``, by leaving the ``with``
block, or, as a fallback, when the reporter is garbage-collected.
"""

from __future__ import annotations

import weakref
from dataclasses import replace
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, TypeVar

from tracing_perf.config import (
    Level,
    PrintOrder,
    ReporterConfig,
    check_clock,
    check_count,
    parse_level,
    parse_print_order,
)
from tracing_perf.report import nanos_to_secs, ordered_times, render_report
from tracing_perf.utils.logging import (
    REPORT_SCOPE,
    REPORT_TARGET,
    EventSink,
    LoggingSink,
)
from tracing_perf.utils.timer import Clock, get_clock, monotonic_clock

R = TypeVar("R")


class ReporterFinishedError(RuntimeError):
    """Raised when a finished reporter is asked to keep timing."""


class _ReportState:
    """Mutable timing state, kept apart so the finalizer never holds the reporter."""

    def __init__(
        self,
        name: str,
        level: Level,
        print_order: PrintOrder,
        width: int,
        precision: int,
        clock: Clock,
        sink: EventSink,
    ) -> None:
        self.name = name
        self.level = level
        self.print_order = print_order
        self.width = width
        self.precision = precision
        self.clock = clock
        self.sink = sink
        self.times: Dict[Hashable, int] = {}
        self.current: Optional[Tuple[Hashable, int]] = None
        self.finished = False

    def save_current(self, now: int) -> None:
        if self.current is None:
            return
        key, started = self.current
        self.current = None
        # Totals never decrease.
        self.times[key] = self.times.get(key, 0) + max(0, now - started)

    def render(self) -> str:
        entries = ordered_times(self.times, self.print_order)
        return render_report(self.name, entries, self.width, self.precision)


def _emit_report(state: _ReportState) -> None:
    state.save_current(state.clock())
    state.finished = True
    state.sink.emit(REPORT_SCOPE, REPORT_TARGET, state.level, state.render())


class TimeReporter:
    """Accumulate time per activity and report it once when done."""

    def __init__(
        self,
        name: str,
        level: Level = Level.INFO,
        print_order: PrintOrder = PrintOrder.DEC_DURATION,
        width: int = 11,
        precision: int = 9,
        clock: Optional[Clock] = None,
        sink: Optional[EventSink] = None,
    ) -> None:
        config = ReporterConfig(
            level=level, print_order=print_order, width=width, precision=precision
        )
        self._state = _ReportState(
            name=str(name),
            level=config.level,
            print_order=config.print_order,
            width=config.width,
            precision=config.precision,
            clock=monotonic_clock if clock is None else clock,
            sink=LoggingSink() if sink is None else sink,
        )
        self._finalizer = weakref.finalize(self, _emit_report, self._state)

    @classmethod
    def new_with_level(cls, name: str, level: Level) -> "TimeReporter":
        """Create a reporter that emits at ``level``."""
        return TimeReporterBuilder(name).level(level).build()

    @property
    def name(self) -> str:
        return self._state.name

    @property
    def level(self) -> Level:
        return self._state.level

    @property
    def print_order(self) -> PrintOrder:
        return self._state.print_order

    @property
    def times(self) -> Dict[Hashable, float]:
        """Accumulated seconds per key, excluding the open interval."""
        return {k: nanos_to_secs(v) for k, v in self._state.times.items()}

    @property
    def current_key(self) -> Optional[Hashable]:
        current = self._state.current
        return None if current is None else current[0]

    @property
    def is_finished(self) -> bool:
        return self._state.finished

    def _check_open(self) -> None:
        if self._state.finished:
            raise ReporterFinishedError(
                f"time reporter {self._state.name!r} has already been finished"
            )

    def start(self, key: Hashable) -> None:
        """Start counting time for ``key``.

        If another key was being timed, its interval ends at the same instant
        the new one begins.
        """

        self._check_open()
        now = self._state.clock()
        self._state.save_current(now)
        self._state.current = (key, now)

    def start_with(self, key: Hashable, f: Callable[[], R]) -> R:
        """Start counting time for ``key`` and return ``f()``.

        Handy inside ``if``/``while`` conditions where a standalone
        ``start`` call would be awkward.
        """

        self.start(key)
        return f()

    def stop(self) -> None:
        """Stop counting time. Does nothing when no interval is open."""
        self._check_open()
        self._state.save_current(self._state.clock())

    def finish(self) -> None:
        """Fold the open interval and emit the report. Later calls do nothing."""
        self._finalizer()

    def __enter__(self) -> "TimeReporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: D401
        self.finish()

    def __str__(self) -> str:
        return self._state.render()

    def __repr__(self) -> str:
        return (
            f"TimeReporter(name={self._state.name!r}, level={self._state.level.name}, "
            f"print_order={self._state.print_order.name}, finished={self._state.finished})"
        )


class TimeReporterBuilder:
    """A configurable builder for ``TimeReporter``.

    Setters return the builder so calls can be chained. ``build`` may be
    called repeatedly; every reporter it returns is independent.
    """

    def __init__(self, name: str) -> None:
        self._name = str(name)
        self._config = ReporterConfig()
        self._clock: Clock = get_clock(self._config.clock)
        self._sink: Optional[EventSink] = None

    @classmethod
    def from_config(cls, name: str, config: ReporterConfig) -> "TimeReporterBuilder":
        """Seed a builder with the options in ``config``."""
        builder = cls(name)
        builder.level(config.level)
        builder.print_order(config.print_order)
        builder.width(config.width)
        builder.precision(config.precision)
        builder.clock(config.clock)
        return builder

    def build(self) -> TimeReporter:
        return TimeReporter(
            self._name,
            level=self._config.level,
            print_order=self._config.print_order,
            width=self._config.width,
            precision=self._config.precision,
            clock=self._clock,
            sink=self._sink,
        )

    def level(self, level: Any) -> "TimeReporterBuilder":
        """Set the logging level."""
        self._config.level = parse_level(level)
        return self

    def print_order(self, print_order: Any) -> "TimeReporterBuilder":
        """Set the printing order of the total times."""
        self._config.print_order = parse_print_order(print_order)
        return self

    def width(self, width: int) -> "TimeReporterBuilder":
        """Set the minimum formatting width of the total times.

        Should be at least ``precision + 2`` (one leading digit, the decimal
        point and the fraction) or it has no effect. Fill and alignment are
        fixed to space and left-align.
        """

        self._config.width = check_count("width", width)
        return self

    def precision(self, precision: int) -> "TimeReporterBuilder":
        """Set the number of digits printed after the decimal point."""
        self._config.precision = check_count("precision", precision)
        return self

    def clock(self, clock: Any) -> "TimeReporterBuilder":
        """Use a named clock (``"monotonic"``, ``"perf_counter"``) or a callable
        returning monotonic nanoseconds."""
        clock = check_clock(clock)
        self._clock = get_clock(clock) if isinstance(clock, str) else clock
        self._config.clock = clock
        return self

    def sink(self, sink: EventSink) -> "TimeReporterBuilder":
        """Send reports to ``sink`` instead of the logging sink."""
        self._sink = sink
        return self

    @property
    def config(self) -> ReporterConfig:
        return replace(self._config)
