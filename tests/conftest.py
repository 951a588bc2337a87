from typing import List, Tuple

import pytest

from tracing_perf.config import Level


class RecordingSink:
    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Level, str]] = []

    def emit(self, scope_label: str, target: str, level: Level, message: str) -> None:
        self.events.append((scope_label, target, level, message))

    @property
    def messages(self) -> List[str]:
        return [event[3] for event in self.events]


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(round(seconds * 1_000_000_000))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
