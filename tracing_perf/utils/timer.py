"""Monotonic clock sources."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def monotonic_clock() -> int:
    """Nanoseconds from the system monotonic clock."""
    return time.monotonic_ns()


def perf_counter_clock() -> int:
    """Nanoseconds from the highest-resolution monotonic counter."""
    return time.perf_counter_ns()


_CLOCKS = {
    "monotonic": monotonic_clock,
    "perf_counter": perf_counter_clock,
}


def get_clock(name: str) -> Clock:
    """Return the clock registered under ``name``."""

    try:
        return _CLOCKS[name]
    except KeyError:
        raise ValueError(
            f"Unknown clock {name!r}; expected one of {sorted(_CLOCKS)}"
        ) from None
