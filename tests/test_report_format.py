import pytest

from tracing_perf.config import PrintOrder
from tracing_perf.report import (
    format_secs,
    nanos_to_secs,
    ordered_times,
    render_report,
)

SEC = 1_000_000_000
TIMES = {"a": 2 * SEC, "b": 5 * SEC, "c": 1 * SEC}


def _keys(order):
    return [key for key, _ in ordered_times(TIMES, order)]


@pytest.mark.parametrize(
    "order, expected",
    [
        (PrintOrder.DEC_DURATION, ["b", "a", "c"]),
        (PrintOrder.INC_DURATION, ["c", "a", "b"]),
        (PrintOrder.KEY, ["a", "b", "c"]),
        (PrintOrder.REV_KEY, ["c", "b", "a"]),
        (PrintOrder.START, ["a", "b", "c"]),
        (PrintOrder.REV_START, ["c", "b", "a"]),
    ],
)
def test_print_orders(order, expected):
    assert _keys(order) == expected


def test_start_order_follows_insertion():
    times = {"z": 1, "x": 3, "y": 2}
    assert [k for k, _ in ordered_times(times, PrintOrder.START)] == ["z", "x", "y"]
    assert [k for k, _ in ordered_times(times, PrintOrder.REV_START)] == ["y", "x", "z"]


def test_ordering_does_not_mutate_input():
    times = dict(TIMES)
    ordered_times(times, PrintOrder.KEY)
    assert list(times) == ["a", "b", "c"]


def test_one_and_a_half_seconds_with_precision_three():
    assert format_secs(1.5, 0, 3) == "1.500"
    assert format_secs(1.5, 11, 3) == "1.500      "


def test_width_smaller_than_value_has_no_effect():
    assert format_secs(1.5, 2, 3) == "1.500"


def test_nanos_to_secs_keeps_subsecond_part():
    assert nanos_to_secs(1_500_000_000) == 1.5
    assert nanos_to_secs(0) == 0.0
    assert nanos_to_secs(3 * SEC + 250_000_000) == 3.25


def test_render_report_layout():
    entries = [("parse", SEC // 2), ("load", 2 * SEC)]
    assert render_report("job", entries, width=0, precision=2) == (
        "name: job, parse: 0.50, load: 2.00"
    )


def test_render_report_without_entries():
    assert render_report("empty", []) == "name: empty"
