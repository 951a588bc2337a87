"""Configuration dataclasses for time reports."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Type, TypeVar, Union

import yaml

E = TypeVar("E", bound=enum.Enum)


class Level(enum.IntEnum):
    """Severity of the final report, aligned with ``logging`` levels."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40


class PrintOrder(enum.Enum):
    """Order in which accumulated times are printed."""

    START = "start"
    REV_START = "rev_start"
    KEY = "key"
    REV_KEY = "rev_key"
    INC_DURATION = "inc_duration"
    DEC_DURATION = "dec_duration"


CLOCKS = ("monotonic", "perf_counter")


def _normalize(name: str) -> str:
    # "DecDuration", "dec-duration" and "DEC_DURATION" all map to "dec_duration"
    name = name.strip()
    out = []
    for i, ch in enumerate(name):
        if ch in "- ":
            ch = "_"
        if ch.isupper() and i > 0 and name[i - 1].islower():
            out.append("_")
        out.append(ch.lower())
    return "".join(out)


def _parse_enum(enum_cls: Type[E], value: Any) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = _normalize(value)
        if enum_cls is Level and wanted == "warning":
            wanted = "warn"
        for member in enum_cls:
            if member.name.lower() == wanted:
                return member
    elif enum_cls is Level and isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise ValueError(f"Unknown {enum_cls.__name__} value: {value!r}")


def parse_level(value: Any) -> Level:
    """Return a ``Level`` from a member, a ``logging`` number or a name."""
    return _parse_enum(Level, value)


def parse_print_order(value: Any) -> PrintOrder:
    """Return a ``PrintOrder`` from a member or a case-insensitive name."""
    return _parse_enum(PrintOrder, value)


def check_count(option: str, value: Any) -> int:
    """Return ``value`` if it is a non-negative int, else raise ``ValueError``."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{option} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{option} must be non-negative, got {value}")
    return value


def check_clock(value: Any) -> Union[str, Callable[[], int]]:
    """Return a clock name from ``CLOCKS`` or a callable clock."""
    if isinstance(value, str):
        if value not in CLOCKS:
            raise ValueError(f"Unknown clock {value!r}; expected one of {CLOCKS}")
        return value
    if not callable(value):
        raise ValueError(f"clock must be a name or a callable, got {value!r}")
    return value


@dataclass
class ReporterConfig:
    """Settings shared by every reporter built from the same builder."""

    level: Level = Level.INFO
    print_order: PrintOrder = PrintOrder.DEC_DURATION
    # Minimum field width; has no visible effect below precision + 2.
    width: int = 11
    precision: int = 9
    # A name from CLOCKS or a callable returning monotonic nanoseconds.
    clock: Union[str, Callable[[], int]] = "monotonic"

    def __post_init__(self) -> None:
        self.level = parse_level(self.level)
        self.print_order = parse_print_order(self.print_order)
        self.width = check_count("width", self.width)
        self.precision = check_count("precision", self.precision)
        self.clock = check_clock(self.clock)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReporterConfig":
        """Build a config from plain values, ignoring missing keys."""
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected a mapping of time report options, got {data!r}"
            )
        unknown = set(data) - {"level", "print_order", "width", "precision", "clock"}
        if unknown:
            raise ValueError(f"Unknown time report options: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the config to a plain dict. Callable clocks show as ``"custom"``."""
        return {
            "level": self.level.name,
            "print_order": self.print_order.value,
            "width": self.width,
            "precision": self.precision,
            "clock": self.clock if isinstance(self.clock, str) else "custom",
        }


def load_config(path: Path) -> ReporterConfig:
    """Read a ``ReporterConfig`` from a YAML file.

    The options may sit at the top level or under a ``time_report`` key.
    An empty file yields the defaults.
    """

    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    if "time_report" in data:
        data = data["time_report"] or {}
    return ReporterConfig.from_dict(data)
