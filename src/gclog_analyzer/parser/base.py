"""Shared parser machinery: the parse loop, the time base and common log fragments.

Every concrete parser feeds one :class:`GCModel`. Lines are offered one at a
time; a line that looks like a known fragment but fails to convert is skipped
and logged, it never aborts the parse.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Protocol

from gclog_analyzer.event import (
    CpuTime,
    GCCollectorType,
    GCEvent,
    GCEventType,
    GCLogStyle,
    GCMemoryItem,
    GCSpecialSituation,
    MemoryArea,
    Safepoint,
)
from gclog_analyzer.log import get_logger
from gclog_analyzer.model import GCModel
from gclog_analyzer.util import (
    KB_PER_MB,
    MS_PER_SECOND,
    UNKNOWN_DOUBLE,
    is_known,
    parse_size_to_kb,
)
from gclog_analyzer.vm_options import parse_vm_options

_logger = get_logger("parser")

PROGRESS_STEP = 1000

# ============================================================
# PROGRESS
# ============================================================


class ProgressListener(Protocol):
    """Receives progress ticks while a log is parsed. Must never block."""

    def begin_task(self, name: str, total: int) -> None: ...

    def worked(self, amount: int) -> None: ...

    def sub_task(self, name: str) -> None: ...


class NullProgressListener:
    """Discards all progress."""

    def begin_task(self, name: str, total: int) -> None:
        return None

    def worked(self, amount: int) -> None:
        return None

    def sub_task(self, name: str) -> None:
        return None


# ============================================================
# COMMON FRAGMENTS
# ============================================================

SIZE = r"\d+(?:\.\d+)?[BKMG]"

MEMORY_CHANGE_PATTERN: re.Pattern[str] = re.compile(
    rf"(?P<pre>{SIZE})(?:\((?P<pre_total>{SIZE})\))?->(?P<post>{SIZE})(?:\((?P<total>{SIZE})\))?"
)
# "1880341K(4019584K)": occupancy without a before/after pair
OCCUPANCY_PATTERN: re.Pattern[str] = re.compile(rf"(?P<used>{SIZE})\((?P<total>{SIZE})\)")

SAFEPOINT_PATTERN: re.Pattern[str] = re.compile(
    r"Total time for which application threads were stopped: (?P<stopped>[\d.]+) seconds, "
    r"Stopping threads took: (?P<enter>[\d.]+) seconds"
)

DURATION_SECS_PATTERN: re.Pattern[str] = re.compile(r"(?P<secs>\d+\.\d+) secs")

# generation names as the collectors print them
GENERATION_AREAS: dict[str, MemoryArea] = {
    "DefNew": MemoryArea.YOUNG,
    "ParNew": MemoryArea.YOUNG,
    "ASParNew": MemoryArea.YOUNG,
    "PSYoungGen": MemoryArea.YOUNG,
    "Tenured": MemoryArea.OLD,
    "CMS": MemoryArea.OLD,
    "ASCMS": MemoryArea.OLD,
    "ParOldGen": MemoryArea.OLD,
    "PSOldGen": MemoryArea.OLD,
    "Old": MemoryArea.OLD,
    "Metaspace": MemoryArea.METASPACE,
    "PSPermGen": MemoryArea.METASPACE,
    "Perm": MemoryArea.METASPACE,
    "CMS Perm": MemoryArea.METASPACE,
}

SPECIAL_SITUATION_MARKERS: tuple[tuple[str, GCSpecialSituation], ...] = (
    ("to-space exhausted", GCSpecialSituation.TO_SPACE_EXHAUSTED),
    ("to-space overflow", GCSpecialSituation.TO_SPACE_EXHAUSTED),
    ("evacuation failure", GCSpecialSituation.TO_SPACE_EXHAUSTED),
    ("promotion failed", GCSpecialSituation.PROMOTION_FAILED),
    ("concurrent mode failure", GCSpecialSituation.CONCURRENT_MODE_FAILURE),
    ("concurrent mode interrupted", GCSpecialSituation.CONCURRENT_MODE_INTERRUPTED),
)


def extract_memory(text: str, area: MemoryArea) -> GCMemoryItem | None:
    """First ``pre(cap)->post(cap)`` change in ``text`` as a memory item of ``area``."""
    match = MEMORY_CHANGE_PATTERN.search(text)
    if match is None:
        return None
    total_text = match.group("total") or match.group("pre_total")
    return GCMemoryItem(
        area=area,
        pre_used=parse_size_to_kb(match.group("pre")),
        post_used=parse_size_to_kb(match.group("post")),
        total=parse_size_to_kb(total_text) if total_text else GCMemoryItem.unknown(area).total,
    )


def extract_occupancy(text: str, area: MemoryArea) -> GCMemoryItem | None:
    """``used(capacity)`` without a transition, as printed by CMS initial mark and remark."""
    if "->" in text:
        return None
    match = OCCUPANCY_PATTERN.search(text)
    if match is None:
        return None
    return GCMemoryItem(
        area=area,
        pre_used=parse_size_to_kb(match.group("used")),
        total=parse_size_to_kb(match.group("total")),
    )


def extract_duration_secs(text: str) -> float:
    """Last ``N.NNN secs`` in ``text`` in milliseconds, UNKNOWN if absent."""
    matches = DURATION_SECS_PATTERN.findall(text)
    if not matches:
        return UNKNOWN_DOUBLE
    return float(matches[-1]) * MS_PER_SECOND


def detect_special_situations(text: str) -> list[GCSpecialSituation]:
    lowered = text.lower()
    situations: list[GCSpecialSituation] = []
    for marker, situation in SPECIAL_SITUATION_MARKERS:
        if marker in lowered and situation not in situations:
            situations.append(situation)
    return situations


def cpu_time_from_seconds(user: str, sys: str, real: str) -> CpuTime:
    return CpuTime(
        user=float(user) * MS_PER_SECOND,
        sys=float(sys) * MS_PER_SECOND,
        real=float(real) * MS_PER_SECOND,
    )


def region_size_for(heap_used_kb: int, regions: int) -> int:
    """Region size in KB: used heap per region, rounded to a power-of-two megabyte."""
    if regions <= 0 or heap_used_kb <= 0:
        return 0
    megabytes = heap_used_kb / regions / KB_PER_MB
    return int(2 ** round(math.log2(megabytes))) * KB_PER_MB if megabytes >= 1 else KB_PER_MB


# ============================================================
# TIME BASE
# ============================================================


class TimeBase:
    """Turns decorations into milliseconds relative to the log start.

    The first wall-clock time seen fixes ``reference_timestamp`` so that
    ``reference_timestamp + time == wall clock``. Whenever a line also carries
    an uptime, the uptime is used as is and wall clock times are never
    re-derived.
    """

    def __init__(self) -> None:
        self.reference_timestamp = UNKNOWN_DOUBLE
        self.last_time = UNKNOWN_DOUBLE

    def resolve(self, uptime: float = UNKNOWN_DOUBLE, wall_clock: float = UNKNOWN_DOUBLE) -> float:
        """Time of a line, or the time of the last timed line when it has none."""
        if is_known(wall_clock) and not is_known(self.reference_timestamp):
            self.reference_timestamp = wall_clock - uptime if is_known(uptime) else wall_clock
        if is_known(uptime):
            time = uptime
        elif is_known(wall_clock):
            time = wall_clock - self.reference_timestamp
        else:
            return self.last_time
        self.last_time = time
        return time


# ============================================================
# PARSER BASE
# ============================================================


class GCLogParser:
    """Base of all parsers: one instance per (collector, log style) pair."""

    log_style: GCLogStyle = GCLogStyle.UNIFIED

    def __init__(
        self,
        collector_type: GCCollectorType,
        progress: ProgressListener | None = None,
    ) -> None:
        self.collector_type = collector_type
        self.progress: ProgressListener = progress or NullProgressListener()
        self.model = GCModel(collector_type)
        self.time_base = TimeBase()

    def parse(self, source: str | Iterable[str]) -> GCModel:
        """Parse a whole log and return the populated, not yet derived, model."""
        if isinstance(source, str):
            lines = source.splitlines()
        else:
            lines = [line.rstrip("\r\n") for line in source]

        self.model = GCModel(self.collector_type)
        self.model.log_style = self.log_style
        self.model.vm_options = parse_vm_options(lines)
        self.time_base = TimeBase()
        self._reset()

        self.progress.begin_task("Parsing GC log", len(lines))
        skipped = 0
        for index, line in enumerate(lines, start=1):
            try:
                self._parse_line(line)
            except ValueError:
                skipped += 1
                _logger.debug("unsupported_line_skipped", line_number=index, exc_info=True)
            if index % PROGRESS_STEP == 0:
                self.progress.worked(PROGRESS_STEP)
        self._end_parsing()
        self.progress.worked(len(lines) % PROGRESS_STEP)

        self.model.reference_timestamp = self.time_base.reference_timestamp
        _logger.info(
            "parse_finished",
            collector=str(self.collector_type),
            style=str(self.log_style),
            lines=len(lines),
            events=len(self.model.gc_events),
            skipped=skipped,
        )
        return self.model

    # hooks -------------------------------------------------------------

    def _reset(self) -> None:
        """Clear per-parse state; called before every :meth:`parse`."""

    def _parse_line(self, line: str) -> None:
        raise NotImplementedError

    def _end_parsing(self) -> None:
        """Flush whatever the last lines left pending."""

    # shared helpers ----------------------------------------------------

    def _add_safepoint(self, match: re.Match[str], time: float) -> None:
        duration = float(match.group("stopped")) * MS_PER_SECOND
        self.model.add_safepoint(
            Safepoint(
                start_time=time - duration,
                duration=duration,
                time_to_enter=float(match.group("enter")) * MS_PER_SECOND,
            )
        )

    def _add_phase(
        self,
        parent: GCEvent,
        event_type: GCEventType,
        start_time: float,
        duration: float = UNKNOWN_DOUBLE,
    ) -> GCEvent:
        phase = GCEvent(event_type=event_type, gcid=parent.gcid, start_time=start_time, duration=duration)
        self.model.add_phase(parent, phase)
        return phase

    def _end_phase(
        self, parent: GCEvent, event_type: GCEventType, end_time: float, duration: float
    ) -> GCEvent:
        """Close the last still-open phase of ``event_type``, opening one if the start was never logged."""
        phase = parent.get_last_phase_of_type(event_type)
        if phase is None or is_known(phase.duration):
            start = end_time - duration if is_known(duration) else end_time
            return self._add_phase(parent, event_type, start, duration)
        if not is_known(duration):
            duration = max(0.0, end_time - phase.start_time)
        phase.duration = duration
        return phase
