"""Ordering and rendering of accumulated times."""

from __future__ import annotations

from typing import Hashable, Iterable, List, Mapping, Tuple

from tracing_perf.config import PrintOrder

NANOS_PER_SEC = 1_000_000_000


def ordered_times(
    times: Mapping[Hashable, int], print_order: PrintOrder
) -> List[Tuple[Hashable, int]]:
    """Return ``(key, nanoseconds)`` pairs in the requested print order.

    ``times`` is expected to iterate in first-started order. Duration
    orders are stable over that order, so ties keep start order.
    """

    stats = list(times.items())
    if print_order is PrintOrder.START:
        pass
    elif print_order is PrintOrder.REV_START:
        stats.reverse()
    elif print_order is PrintOrder.KEY:
        stats.sort(key=lambda s: s[0])
    elif print_order is PrintOrder.REV_KEY:
        stats.sort(key=lambda s: s[0], reverse=True)
    elif print_order is PrintOrder.INC_DURATION:
        stats.sort(key=lambda s: s[1])
    elif print_order is PrintOrder.DEC_DURATION:
        stats.sort(key=lambda s: s[1], reverse=True)
    else:
        raise ValueError(f"Unsupported print order: {print_order!r}")
    return stats


def nanos_to_secs(nanos: int) -> float:
    secs, subsec = divmod(nanos, NANOS_PER_SEC)
    return secs + subsec / NANOS_PER_SEC


def format_secs(secs: float, width: int, precision: int) -> str:
    """Left-aligned fixed-point seconds, padded to at least ``width``."""
    return format(secs, f"<{width}.{precision}f")


def render_report(
    name: str,
    entries: Iterable[Tuple[Hashable, int]],
    width: int = 11,
    precision: int = 9,
) -> str:
    """Render ``name: <name>, <key>: <secs>, ...``."""

    parts = [f"name: {name}"]
    for key, nanos in entries:
        parts.append(f"{key}: {format_secs(nanos_to_secs(nanos), width, precision)}")
    return ", ".join(parts)
