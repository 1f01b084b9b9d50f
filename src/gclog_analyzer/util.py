"""Shared constants, streaming aggregators and unit helpers.

Every measured quantity in the event model starts out as an explicit UNKNOWN
sentinel rather than ``None`` or ``0`` so that arithmetic never has to branch
on presence and a missing value can never be confused with a measured zero.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import TypeAlias

# ============================================================
# CONSTANTS
# ============================================================

UNKNOWN_INT: int = -(1 << 31)
UNKNOWN_DOUBLE: float = -1e30
EPS: float = 1e-6

KB_PER_MB: int = 1024
MS_PER_SECOND: int = 1000

# Uptime-relative logs that begin less than a minute into the JVM lifetime are
# reported as starting at zero.
START_TIME_ZERO_THRESHOLD: float = 60_000

# A millisecond decoration this large cannot be an uptime.
WALL_CLOCK_MS_THRESHOLD: float = 365 * 24 * 3600 * 1000

KilobytesValue: TypeAlias = int
MillisValue: TypeAlias = float


def is_known(value: float) -> bool:
    """True unless ``value`` is one of the UNKNOWN sentinels."""
    return value != UNKNOWN_DOUBLE and value != UNKNOWN_INT


def zero_if_unknown(value: float) -> float:
    return value if is_known(value) else 0


# ============================================================
# AGGREGATORS
# ============================================================


class DoubleData:
    """Streaming count/sum/min/max/mean over float samples.

    ``sum``/``min``/``max``/``average`` return ``UNKNOWN_DOUBLE`` until a
    sample has been added; ``count`` is zero. UNKNOWN samples are ignored.
    """

    __slots__ = ("_n", "_sum", "_min", "_max", "_values")

    def __init__(self, keep_values: bool = False) -> None:
        self._n = 0
        self._sum = 0.0
        self._min = math.inf
        self._max = -math.inf
        self._values: list[float] | None = [] if keep_values else None

    def add(self, x: float) -> None:
        if not is_known(x):
            return
        self._n += 1
        self._sum += x
        if x < self._min:
            self._min = x
        if x > self._max:
            self._max = x
        if self._values is not None:
            self._values.append(x)

    def count(self) -> int:
        return self._n

    def sum(self) -> float:
        return self._sum if self._n else UNKNOWN_DOUBLE

    def min(self) -> float:
        return self._min if self._n else UNKNOWN_DOUBLE

    def max(self) -> float:
        return self._max if self._n else UNKNOWN_DOUBLE

    def average(self) -> float:
        return self._sum / self._n if self._n else UNKNOWN_DOUBLE

    def median(self) -> float:
        """Median of the retained samples; only available with ``keep_values``."""
        if not self._values:
            return UNKNOWN_DOUBLE
        ordered = sorted(self._values)
        mid = len(ordered) // 2
        if len(ordered) % 2:
            return ordered[mid]
        return (ordered[mid - 1] + ordered[mid]) / 2

    def __repr__(self) -> str:
        return f"DoubleData(n={self._n}, sum={self.sum()}, min={self.min()}, max={self.max()})"


class IntData:
    """Integer counterpart of :class:`DoubleData`."""

    __slots__ = ("_n", "_sum", "_min", "_max")

    def __init__(self) -> None:
        self._n = 0
        self._sum = 0
        self._min = 0
        self._max = 0

    def add(self, x: int) -> None:
        if x == UNKNOWN_INT:
            return
        if self._n == 0:
            self._min = self._max = x
        else:
            self._min = min(self._min, x)
            self._max = max(self._max, x)
        self._n += 1
        self._sum += x

    def count(self) -> int:
        return self._n

    def sum(self) -> int:
        return self._sum if self._n else UNKNOWN_INT

    def min(self) -> int:
        return self._min if self._n else UNKNOWN_INT

    def max(self) -> int:
        return self._max if self._n else UNKNOWN_INT

    def average(self) -> float:
        return self._sum / self._n if self._n else UNKNOWN_DOUBLE

    def __repr__(self) -> str:
        return f"IntData(n={self._n}, sum={self.sum()}, min={self.min()}, max={self.max()})"


# ============================================================
# UNIT HELPERS
# ============================================================

SIZE_TOKEN_PATTERN: re.Pattern[str] = re.compile(r"(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[BKMG])")


def parse_size_to_kb(size_text: str) -> int:
    """Parse a JVM size token like '1024K', '1.5M', '0.0B' into KB."""
    match = SIZE_TOKEN_PATTERN.fullmatch(size_text.strip())
    if not match:
        raise ValueError(f"Unrecognized size token: {size_text}")
    value = float(match.group("value"))
    unit = match.group("unit")
    if unit == "B":
        return int(value / 1024)
    if unit == "K":
        return int(value)
    if unit == "M":
        return int(value * 1024)
    if unit == "G":
        return int(value * 1024 * 1024)
    raise ValueError(f"Unsupported size unit: {unit}")


def parse_jvm_size_to_bytes(value: str, unit: str | None) -> int:
    """Convert JVM flag size notation (``512m``, ``2g``, ``1048576``) to bytes."""
    num = int(value)
    if unit is None:
        return num

    unit_lower = unit.lower()
    if unit_lower == "k":
        return num * 1024
    elif unit_lower == "m":
        return num * 1024 * 1024
    elif unit_lower == "g":
        return num * 1024 * 1024 * 1024
    elif unit_lower == "t":
        return num * 1024 * 1024 * 1024 * 1024
    return num


def parse_datestamp_ms(text: str) -> float:
    """``2021-05-06T11:25:16.508+0800`` -> epoch milliseconds."""
    return round(datetime.strptime(text, "%Y-%m-%dT%H:%M:%S.%f%z").timestamp() * 1000)


def kb_to_mb(kb: int) -> float:
    return kb / KB_PER_MB if is_known(kb) else UNKNOWN_DOUBLE


def format_ms(value: float) -> str:
    if not is_known(value):
        return "N/A"
    if value >= 10 * MS_PER_SECOND:
        return f"{value / MS_PER_SECOND:.3f}s"
    return f"{value:.3f}ms"


def format_kb(value: int) -> str:
    """Render a KB quantity the way the JVM prints it (K/M/G)."""
    if not is_known(value):
        return "N/A"
    if value >= 1024 * 1024:
        return f"{value / (1024 * 1024):.1f}G"
    if value >= 1024:
        return f"{value / 1024:.1f}M"
    return f"{value}K"


def format_percentage(value: float) -> str:
    return f"{value * 100:.2f}%" if is_known(value) else "N/A"
