"""Parsers for unified JVM logging (``-Xlog:gc*``, JDK 9 and later).

A unified line is a run of ``[..]`` decorations, an optional ``GC(n)`` id and
a message. Lines of one collection share a gcid; the first line of a pause
carries its title only and the last repeats the title with memory and a
duration::

    [1.000s][info][gc,start] GC(0) Pause Young (Normal) (G1 Evacuation Pause)
    [1.010s][info][gc      ] GC(0) Pause Young (Normal) (G1 Evacuation Pause) 19M->4M(64M) 7.312ms
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import NamedTuple

from gclog_analyzer.event import (
    GCCollectorType,
    GCEvent,
    GCEventType,
    GCLogStyle,
    GCMemoryItem,
    MemoryArea,
    OutOfMemory,
)
from gclog_analyzer.model import ZStatistics, ZStatisticsItem
from gclog_analyzer.parser.base import (
    GENERATION_AREAS,
    SAFEPOINT_PATTERN,
    GCLogParser,
    ProgressListener,
    cpu_time_from_seconds,
    detect_special_situations,
    extract_memory,
    region_size_for,
)
from gclog_analyzer.util import (
    UNKNOWN_DOUBLE,
    UNKNOWN_INT,
    WALL_CLOCK_MS_THRESHOLD,
    is_known,
    parse_datestamp_ms,
    parse_size_to_kb,
)

# ============================================================
# LINE DECODING
# ============================================================

DECORATION_PATTERN: re.Pattern[str] = re.compile(r"\[(?P<value>[^\[\]]*)\]")
UPTIME_SECONDS_PATTERN: re.Pattern[str] = re.compile(r"(?P<value>\d+(?:[.,]\d+)?)s")
UPTIME_MILLIS_PATTERN: re.Pattern[str] = re.compile(r"(?P<value>\d+)ms")
UPTIME_NANOS_PATTERN: re.Pattern[str] = re.compile(r"(?P<value>\d+)ns")
DATESTAMP_PATTERN: re.Pattern[str] = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{4}")
GCID_PATTERN: re.Pattern[str] = re.compile(r"GC\((?P<gcid>\d+)\)\s*")

# "(Normal) (G1 Evacuation Pause) 19M->4M(64M) 7.312ms", everything after a title
TITLE_TAIL_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<details>(?:\s*\([^()]*\))*)\s*(?P<memory>\S+->\S+)?\s*(?:(?P<duration>\d+(?:\.\d+)?)ms)?"
)
DETAIL_PATTERN: re.Pattern[str] = re.compile(r"\(([^()]*)\)")

CPU_PATTERN: re.Pattern[str] = re.compile(r"User=(?P<user>[\d.]+)s Sys=(?P<sys>[\d.]+)s Real=(?P<real>[\d.]+)s")
WORKERS_PATTERN: re.Pattern[str] = re.compile(
    r"Using (?P<used>\d+) workers of (?P<total>\d+) for (?P<purpose>evacuation|marking|full compaction)"
)
MEMORY_LINE_PATTERN: re.Pattern[str] = re.compile(r"(?P<name>[A-Za-z][A-Za-z ]*?): (?P<change>\S+->\S+)")

# pause kinds printed next to the cause, e.g. "Pause Young (Normal) (...)"
PAUSE_KINDS = frozenset({"Normal", "Concurrent Start", "Prepare Mixed", "Mixed", "Young"})


class UnifiedLine(NamedTuple):
    time: float
    gcid: int
    message: str


class TitledMessage(NamedTuple):
    title: str
    details: list[str]
    memory: str | None
    duration: float

    @property
    def is_end(self) -> bool:
        return is_known(self.duration) or self.memory is not None


def split_title(message: str, titles: Iterable[str]) -> TitledMessage | None:
    """Match ``message`` against the first fitting title; ``titles`` must be longest first."""
    for title in titles:
        if not message.startswith(title):
            continue
        rest = message[len(title):]
        if rest and not (rest[0].isspace() or rest[0] == "(" or title.endswith(":")):
            continue
        match = TITLE_TAIL_PATTERN.fullmatch(rest.strip())
        if match is None:
            continue
        duration = match.group("duration")
        return TitledMessage(
            title=title,
            details=DETAIL_PATTERN.findall(match.group("details")),
            memory=match.group("memory"),
            duration=float(duration) if duration else UNKNOWN_DOUBLE,
        )
    return None


def cause_of(details: list[str]) -> str | None:
    """Last parenthesized text that is not a pause kind."""
    causes = [detail for detail in details if detail not in PAUSE_KINDS]
    return causes[-1] if causes else None


def longest_first(*tables: dict[str, GCEventType]) -> tuple[str, ...]:
    return tuple(sorted({title for table in tables for title in table}, key=len, reverse=True))


# ============================================================
# SHARED UNIFIED PARSER
# ============================================================


class UnifiedGCLogParser(GCLogParser):
    """Line decoding and gcid bookkeeping shared by all unified parsers."""

    log_style = GCLogStyle.UNIFIED

    def _reset(self) -> None:
        self._events: dict[int, GCEvent] = {}
        self._aliases: dict[int, int] = {}
        self._pending_memory: dict[int, dict[MemoryArea, GCMemoryItem]] = {}
        self._cpu_targets: dict[int, GCEvent] = {}

    def _decode(self, line: str) -> UnifiedLine | None:
        position = 0
        uptime = wall_clock = UNKNOWN_DOUBLE
        while match := DECORATION_PATTERN.match(line, position):
            value = match.group("value").strip()
            if seconds := UPTIME_SECONDS_PATTERN.fullmatch(value):
                uptime = float(seconds.group("value").replace(",", ".")) * 1000
            elif millis := UPTIME_MILLIS_PATTERN.fullmatch(value):
                # -Xlog decorations "timemillis" and "uptimemillis" share the unit
                if float(millis.group("value")) >= WALL_CLOCK_MS_THRESHOLD:
                    wall_clock = float(millis.group("value"))
                else:
                    uptime = float(millis.group("value"))
            elif nanos := UPTIME_NANOS_PATTERN.fullmatch(value):
                uptime = float(nanos.group("value")) / 1_000_000
            elif DATESTAMP_PATTERN.fullmatch(value):
                wall_clock = parse_datestamp_ms(value)
            position = match.end()
        if position == 0:
            return None

        rest = line[position:].strip()
        gcid = UNKNOWN_INT
        if match := GCID_PATTERN.match(rest):
            gcid = int(match.group("gcid"))
            rest = rest[match.end():]
        time = self.time_base.resolve(uptime, wall_clock)
        if not is_known(time):
            return None
        return UnifiedLine(time=time, gcid=gcid, message=rest.strip())

    def _parse_line(self, line: str) -> None:
        info = self._decode(line)
        if info is None or not info.message:
            return
        message = info.message
        if "Total time for which" in message and (match := SAFEPOINT_PATTERN.search(message)):
            self._add_safepoint(match, info.time)
            return
        if message.startswith("Using ") and (match := WORKERS_PATTERN.match(message)):
            if match.group("purpose") == "marking":
                self.model.concurrent_thread = int(match.group("total"))
            else:
                self.model.parallel_thread = int(match.group("total"))
            return
        if "User=" in message and (match := CPU_PATTERN.search(message)):
            target = self._cpu_targets.get(info.gcid)
            if target is not None:
                target.cpu_time = cpu_time_from_seconds(match.group("user"), match.group("sys"), match.group("real"))
            return
        self._parse_message(info)

    def _parse_message(self, info: UnifiedLine) -> None:
        raise NotImplementedError

    # gcid bookkeeping --------------------------------------------------

    def _event(self, gcid: int) -> GCEvent | None:
        return self._events.get(self._aliases.get(gcid, gcid))

    def _open_event(
        self,
        info: UnifiedLine,
        event_type: GCEventType,
        cause: str | None = None,
        start_time: float | None = None,
    ) -> GCEvent:
        event = GCEvent(
            event_type=event_type,
            gcid=info.gcid,
            start_time=info.time if start_time is None else start_time,
            cause=cause,
        )
        self.model.put_event(event)
        self._events[info.gcid] = event
        for item in self._pending_memory.pop(info.gcid, {}).values():
            event.set_memory_item(item)
        return event

    def _handle_pause(self, info: UnifiedLine, titled: TitledMessage, event_type: GCEventType) -> GCEvent:
        """Open the pause on its first line, close it on the line carrying the duration."""
        event = self._event(info.gcid)
        if not titled.is_end:
            if event is None or event.event_type is not event_type:
                event = self._open_event(info, event_type, cause_of(titled.details))
            return event
        if event is None:
            start = info.time - titled.duration if is_known(titled.duration) else info.time
            event = self._open_event(info, event_type, cause_of(titled.details), start_time=start)
        self._finish(event, info, titled)
        return event

    def _finish(self, event: GCEvent, info: UnifiedLine, titled: TitledMessage) -> None:
        if is_known(titled.duration):
            event.duration = titled.duration
        elif is_known(event.start_time):
            event.duration = info.time - event.start_time
        if titled.memory and (item := extract_memory(titled.memory, MemoryArea.TOTAL)):
            event.set_memory_item(item)
        self._cpu_targets[info.gcid] = event

    def _handle_phase(
        self, parent: GCEvent, info: UnifiedLine, titled: TitledMessage, event_type: GCEventType
    ) -> GCEvent:
        if not titled.is_end:
            return self._add_phase(parent, event_type, info.time)
        phase = self._end_phase(parent, event_type, info.time, titled.duration)
        if titled.memory and (item := extract_memory(titled.memory, MemoryArea.TOTAL)):
            phase.set_memory_item(item)
        self._cpu_targets[info.gcid] = phase
        return phase

    def _memory_target(self, gcid: int) -> GCEvent | None:
        return self._event(gcid)

    def _parse_memory_line(self, info: UnifiedLine) -> bool:
        """``Metaspace: 20679K->20679K(45056K)`` and generation lines like ``DefNew: ...``."""
        match = MEMORY_LINE_PATTERN.match(info.message)
        if match is None or (area := GENERATION_AREAS.get(match.group("name"))) is None:
            return False
        item = extract_memory(match.group("change"), area)
        if item is None:
            return False
        target = self._memory_target(info.gcid)
        if target is None:
            self._pending_memory.setdefault(info.gcid, {})[area] = item
        else:
            target.set_memory_item(item)
        return True

    def _parse_special_situation(self, info: UnifiedLine) -> None:
        event = self._event(info.gcid)
        if event is None:
            return
        for situation in detect_special_situations(info.message):
            event.add_special_situation(situation)


# ============================================================
# G1
# ============================================================


class UnifiedG1GCLogParser(UnifiedGCLogParser):
    """G1 with ``-Xlog:gc*``: young, mixed and full pauses plus the concurrent cycle."""

    PAUSES: dict[str, GCEventType] = {
        "Pause Young": GCEventType.YOUNG_GC,
        "Pause Full": GCEventType.FULL_GC,
    }
    CYCLE_TITLES = ("Concurrent Cycle", "Concurrent Undo Cycle")
    CYCLE_PHASES: dict[str, GCEventType] = {
        "Concurrent Clear Claimed Marks": GCEventType.G1_CONCURRENT_CLEAR_CLAIMED_MARKS,
        "Concurrent Scan Root Regions": GCEventType.G1_CONCURRENT_SCAN_ROOT_REGIONS,
        "Concurrent Mark": GCEventType.G1_CONCURRENT_MARK,
        "Concurrent Mark From Roots": GCEventType.G1_CONCURRENT_MARK_FROM_ROOTS,
        "Concurrent Preclean": GCEventType.G1_CONCURRENT_PRECLEAN,
        "Concurrent Mark Abort": GCEventType.G1_CONCURRENT_MARK_ABORT,
        "Concurrent Mark Reset For Overflow": GCEventType.G1_CONCURRENT_MARK_RESET_FOR_OVERFLOW,
        "Pause Remark": GCEventType.G1_REMARK,
        "Concurrent Rebuild Remembered Sets": GCEventType.G1_CONCURRENT_REBUILD_REMEMBERED_SETS,
        "Pause Cleanup": GCEventType.G1_PAUSE_CLEANUP,
        "Concurrent Cleanup for Next Mark": GCEventType.G1_CONCURRENT_CLEANUP_FOR_NEXT_MARK,
        "Concurrent Cleanup For Next Mark": GCEventType.G1_CONCURRENT_CLEANUP_FOR_NEXT_MARK,
    }
    FULL_PHASES: dict[str, GCEventType] = {
        "Phase 1: Mark live objects": GCEventType.G1_MARK_LIVE_OBJECTS,
        "Phase 2: Prepare for compaction": GCEventType.G1_PREPARE_FOR_COMPACTION,
        "Phase 2: Prepare Compaction": GCEventType.G1_PREPARE_FOR_COMPACTION,
        "Phase 3: Adjust pointers": GCEventType.G1_ADJUST_POINTERS,
        "Phase 3: Update References": GCEventType.G1_ADJUST_POINTERS,
        "Phase 4: Compact heap": GCEventType.G1_COMPACT_HEAP,
        "Phase 4: Compact Heap": GCEventType.G1_COMPACT_HEAP,
    }
    # "Pre Evacuate Collection Set: 0.0ms"
    YOUNG_PHASES: dict[str, GCEventType] = {
        "Pre Evacuate Collection Set:": GCEventType.G1_COLLECT_PRE_EVACUATION,
        "Evacuate Collection Set:": GCEventType.G1_COLLECT_EVACUATION,
        "Post Evacuate Collection Set:": GCEventType.G1_COLLECT_POST_EVACUATION,
        "Other:": GCEventType.G1_COLLECT_OTHER,
    }
    TITLES = longest_first(
        PAUSES, dict.fromkeys(CYCLE_TITLES, GCEventType.G1_CONCURRENT_CYCLE), CYCLE_PHASES, FULL_PHASES, YOUNG_PHASES
    )

    REGION_PATTERN: re.Pattern[str] = re.compile(
        r"(?P<name>Eden|Survivor|Old|Humongous) regions: (?P<pre>\d+)->(?P<post>\d+)(?:\((?P<total>\d+)\))?"
    )
    REGION_AREAS: dict[str, MemoryArea] = {
        "Eden": MemoryArea.EDEN,
        "Survivor": MemoryArea.SURVIVOR,
        "Old": MemoryArea.OLD,
        "Humongous": MemoryArea.HUMONGOUS,
    }
    REGION_SIZE_PATTERN: re.Pattern[str] = re.compile(r"Heap [Rr]egion [Ss]ize: (?P<size>\d+[BKMG])")

    def __init__(self, progress: ProgressListener | None = None) -> None:
        super().__init__(GCCollectorType.G1, progress)

    def _reset(self) -> None:
        super()._reset()
        self._regions: dict[int, dict[str, tuple[int, int, int]]] = {}

    def _parse_message(self, info: UnifiedLine) -> None:
        message = info.message
        if message.startswith("Heap ") and (match := self.REGION_SIZE_PATTERN.match(message)):
            self.model.heap_region_size = parse_size_to_kb(match.group("size"))
            return
        if "regions:" in message and (match := self.REGION_PATTERN.fullmatch(message)):
            total = match.group("total")
            self._regions.setdefault(info.gcid, {})[match.group("name")] = (
                int(match.group("pre")),
                int(match.group("post")),
                int(total) if total else UNKNOWN_INT,
            )
            return

        titled = split_title(message, self.TITLES)
        if titled is None:
            if not self._parse_memory_line(info):
                self._parse_special_situation(info)
            return

        if titled.title in self.PAUSES:
            event_type = self.PAUSES[titled.title]
            if event_type is GCEventType.YOUNG_GC and "Mixed" in titled.details:
                event_type = GCEventType.G1_MIXED_GC
            event = self._handle_pause(info, titled, event_type)
            if titled.is_end:
                self._apply_regions(event, info.gcid)
        elif titled.title in self.CYCLE_TITLES:
            self._handle_cycle(info, titled)
        elif titled.title in self.CYCLE_PHASES:
            self._handle_phase(self._cycle_of(info, titled), info, titled, self.CYCLE_PHASES[titled.title])
        elif titled.title in self.FULL_PHASES:
            if (event := self._event(info.gcid)) is not None:
                self._handle_phase(event, info, titled, self.FULL_PHASES[titled.title])
        elif titled.title in self.YOUNG_PHASES:
            self._add_young_phase(info, titled, self.YOUNG_PHASES[titled.title])

    def _handle_cycle(self, info: UnifiedLine, titled: TitledMessage) -> None:
        cycle = self._event(info.gcid)
        if not titled.is_end:
            if cycle is None or cycle.event_type is not GCEventType.G1_CONCURRENT_CYCLE:
                self._open_event(info, GCEventType.G1_CONCURRENT_CYCLE)
            return
        self._finish(self._cycle_of(info, titled), info, titled)

    def _cycle_of(self, info: UnifiedLine, titled: TitledMessage) -> GCEvent:
        cycle = self._event(info.gcid)
        if cycle is None or cycle.event_type is not GCEventType.G1_CONCURRENT_CYCLE:
            start = info.time - titled.duration if is_known(titled.duration) else info.time
            cycle = self._open_event(info, GCEventType.G1_CONCURRENT_CYCLE, start_time=start)
        return cycle

    def _add_young_phase(self, info: UnifiedLine, titled: TitledMessage, event_type: GCEventType) -> None:
        event = self._event(info.gcid)
        if event is None or not is_known(titled.duration):
            return
        # printed with durations only; lay them out back to back from the pause start
        start = event.start_time
        if event.phases and is_known(event.phases[-1].end_time):
            start = event.phases[-1].end_time
        self._add_phase(event, event_type, start, titled.duration)

    def _apply_regions(self, event: GCEvent, gcid: int) -> None:
        """Convert region counts printed before the end line into memory items."""
        counts = self._regions.pop(gcid, None)
        if not counts:
            return
        region_size = self.model.heap_region_size
        if not is_known(region_size):
            heap = event.get_memory_item(MemoryArea.TOTAL)
            region_size = region_size_for(heap.pre_used, sum(pre for pre, _, _ in counts.values()))
            if region_size <= 0:
                return
            self.model.heap_region_size = region_size

        for name, (pre, post, total) in counts.items():
            event.set_memory_item(
                GCMemoryItem(
                    area=self.REGION_AREAS[name],
                    pre_used=pre * region_size,
                    post_used=post * region_size,
                    total=total * region_size if is_known(total) else UNKNOWN_INT,
                )
            )

        heap_total = event.get_memory_item(MemoryArea.TOTAL).total
        young_total = [event.get_memory_item(area).total for area in (MemoryArea.EDEN, MemoryArea.SURVIVOR)]
        if is_known(heap_total) and all(is_known(total) for total in young_total):
            old = event.get_memory_item(MemoryArea.OLD)
            event.set_memory_item(old.model_copy(update={"total": heap_total - sum(young_total)}))


# ============================================================
# SERIAL / PARALLEL / CMS
# ============================================================


class UnifiedGenerationalGCLogParser(UnifiedGCLogParser):
    """Serial, Parallel and CMS with ``-Xlog:gc*``."""

    PAUSES: dict[str, GCEventType] = {
        "Pause Young": GCEventType.YOUNG_GC,
        "Pause Full": GCEventType.FULL_GC,
    }
    CMS_PHASES: dict[str, GCEventType] = {
        "Pause Initial Mark": GCEventType.CMS_INITIAL_MARK,
        "Concurrent Mark": GCEventType.CMS_CONCURRENT_MARK,
        "Concurrent Preclean": GCEventType.CMS_CONCURRENT_PRECLEAN,
        "Concurrent Abortable Preclean": GCEventType.CMS_CONCURRENT_ABORTABLE_PRECLEAN,
        "Pause Remark": GCEventType.CMS_FINAL_REMARK,
        "Concurrent Sweep": GCEventType.CMS_CONCURRENT_SWEEP,
        "Concurrent Reset": GCEventType.CMS_CONCURRENT_RESET,
    }
    FULL_PHASES: dict[str, GCEventType] = {
        "Phase 1: Mark live objects": GCEventType.SERIAL_MARK_LIFE_OBJECTS,
        "Phase 2: Compute new object addresses": GCEventType.SERIAL_COMPUTE_NEW_OBJECT_ADDRESSES,
        "Phase 3: Adjust pointers": GCEventType.SERIAL_ADJUST_POINTERS,
        "Phase 4: Move objects": GCEventType.SERIAL_MOVE_OBJECTS,
        "Marking Phase": GCEventType.PARALLEL_PHASE_MARKING,
        "Summary Phase": GCEventType.PARALLEL_PHASE_SUMMARY,
        "Adjust Roots": GCEventType.PARALLEL_PHASE_ADJUST_ROOTS,
        "Compaction Phase": GCEventType.PARALLEL_PHASE_COMPACTION,
        "Post Compact": GCEventType.PARALLEL_PHASE_POST_COMPACT,
    }
    TITLES = longest_first(PAUSES, CMS_PHASES, FULL_PHASES)

    def _parse_message(self, info: UnifiedLine) -> None:
        titled = split_title(info.message, self.TITLES)
        if titled is None:
            if not self._parse_memory_line(info):
                self._parse_special_situation(info)
            return

        if titled.title == "Pause Full" and not titled.is_end and self._merge_into_running_young(info, titled):
            return
        if titled.title in self.PAUSES:
            self._handle_pause(info, titled, self.PAUSES[titled.title])
        elif titled.title in self.CMS_PHASES:
            self._handle_cms_phase(info, titled, self.CMS_PHASES[titled.title])
        elif titled.title in self.FULL_PHASES:
            if (event := self._event(info.gcid)) is not None:
                self._handle_phase(event, info, titled, self.FULL_PHASES[titled.title])

    def _merge_into_running_young(self, info: UnifiedLine, titled: TitledMessage) -> bool:
        """A full GC started inside a still running young GC takes it over.

        Serial and CMS log the fallback as a new gcid; its lines are routed to
        the young event, which becomes the full GC.
        """
        young = self._events.get(info.gcid - 1)
        if young is None or young.event_type is not GCEventType.YOUNG_GC or is_known(young.duration):
            return False
        young.event_type = GCEventType.FULL_GC
        young.cause = cause_of(titled.details) or young.cause
        self._aliases[info.gcid] = info.gcid - 1
        return True

    def _handle_cms_phase(self, info: UnifiedLine, titled: TitledMessage, event_type: GCEventType) -> None:
        cycle = self._event(info.gcid)
        if cycle is None or cycle.event_type is not GCEventType.CMS_CONCURRENT_MARK_SWEPT:
            start = info.time - titled.duration if is_known(titled.duration) else info.time
            cycle = self._open_event(info, GCEventType.CMS_CONCURRENT_MARK_SWEPT, start_time=start)
        phase = self._handle_phase(cycle, info, titled, event_type)
        if event_type is GCEventType.CMS_CONCURRENT_RESET and titled.is_end:
            cycle.duration = phase.end_time - cycle.start_time

    def _memory_target(self, gcid: int) -> GCEvent | None:
        event = self._event(gcid)
        if event is not None and event.event_type is GCEventType.CMS_CONCURRENT_MARK_SWEPT:
            # "Old: ..." printed after the sweep describes what the sweep freed
            return event.get_last_phase_of_type(GCEventType.CMS_CONCURRENT_SWEEP) or event
        return event


# ============================================================
# ZGC
# ============================================================


class UnifiedZGCLogParser(UnifiedGCLogParser):
    """ZGC: collection cycles, the heap table, statistics, stalls and OOMs.

    ZGC prints each phase once, after it finished; the line time is the
    phase end.
    """

    PHASES: dict[str, GCEventType] = {
        "Pause Mark Start": GCEventType.ZGC_PAUSE_MARK_START,
        "Concurrent Mark": GCEventType.ZGC_CONCURRENT_MARK,
        "Concurrent Mark Continue": GCEventType.ZGC_CONCURRENT_MARK_CONTINUE,
        "Pause Mark End": GCEventType.ZGC_PAUSE_MARK_END,
        "Concurrent Process Non-Strong References": GCEventType.ZGC_CONCURRENT_NONREF,
        "Concurrent Reset Relocation Set": GCEventType.ZGC_CONCURRENT_RESET_RELOC_SET,
        "Concurrent Destroy Detached Pages": GCEventType.ZGC_CONCURRENT_DETATCHED_PAGES,
        "Concurrent Select Relocation Set": GCEventType.ZGC_CONCURRENT_SELECT_RELOC_SET,
        "Concurrent Prepare Relocation Set": GCEventType.ZGC_CONCURRENT_PREPARE_RELOC_SET,
        "Pause Relocate Start": GCEventType.ZGC_PAUSE_RELOCATE_START,
        "Concurrent Relocate": GCEventType.ZGC_CONCURRENT_RELOCATE,
    }
    GARBAGE_COLLECTION = "Garbage Collection"
    ALLOCATION_STALL = "Allocation Stall"
    OUT_OF_MEMORY = "Out Of Memory"
    TITLES = longest_first(PHASES, dict.fromkeys((GARBAGE_COLLECTION, ALLOCATION_STALL, OUT_OF_MEMORY)))

    ZGC_MEMORY_PATTERN: re.Pattern[str] = re.compile(r"(?P<pre>\d+[BKMG])\(\d+%\)->(?P<post>\d+[BKMG])\(\d+%\)")
    METASPACE_PATTERN: re.Pattern[str] = re.compile(
        r"Metaspace: (?P<used>\d+[BKMG]) used, (?P<capacity>\d+[BKMG]) capacity, "
        r"(?P<committed>\d+[BKMG]) committed, (?P<reserved>\d+[BKMG]) reserved"
    )
    HEAP_ROW_PATTERN: re.Pattern[str] = re.compile(
        r"(?P<name>Capacity|Reserve|Free|Used|Live|Allocated|Garbage|Reclaimed):\s+(?P<cells>.+)"
    )
    HEAP_CELL_PATTERN: re.Pattern[str] = re.compile(r"(?P<size>\d+[BKMG])\s*\(\s*\d+%\)|(?<!\S)-(?!\S)")
    # columns: Mark Start, Mark End, Relocate Start, Relocate End, High, Low
    MARK_START_COLUMN = 0
    RELOCATE_END_COLUMN = 3

    STATISTICS_BEGIN = "=== Garbage Collection Statistics"
    STATISTICS_ROW_PATTERN: re.Pattern[str] = re.compile(
        r"(?P<section>[A-Za-z ]+): (?P<name>.+?)\s+"
        r"(?P<avg10s>[\d.]+) / (?P<max10s>[\d.]+)\s+"
        r"(?P<avg10m>[\d.]+) / (?P<max10m>[\d.]+)\s+"
        r"(?P<avg10h>[\d.]+) / (?P<max10h>[\d.]+)\s+"
        r"(?P<avg_total>[\d.]+) / (?P<max_total>[\d.]+)\s+"
        r"(?P<unit>\S+)"
    )

    def __init__(self, progress: ProgressListener | None = None) -> None:
        super().__init__(GCCollectorType.ZGC, progress)

    def _reset(self) -> None:
        super()._reset()
        self._heap_table: dict[int, dict[str, list[int]]] = {}
        self._statistics: ZStatistics | None = None

    def _parse_message(self, info: UnifiedLine) -> None:
        message = info.message
        if self._statistics is not None:
            self._parse_statistics_row(message)
            return
        if message.startswith(self.STATISTICS_BEGIN):
            self._statistics = ZStatistics(start_time=info.time)
            self.model.add_statistics(self._statistics)
            return
        if message.startswith("Metaspace:"):
            self._parse_metaspace(info)
            return
        if ":" in message and (match := self.HEAP_ROW_PATTERN.fullmatch(message)):
            cells = [
                parse_size_to_kb(cell.group("size")) if cell.group("size") else UNKNOWN_INT
                for cell in self.HEAP_CELL_PATTERN.finditer(match.group("cells"))
            ]
            self._heap_table.setdefault(info.gcid, {})[match.group("name")] = cells
            return

        titled = split_title(message, self.TITLES)
        if titled is None:
            return
        if titled.title == self.GARBAGE_COLLECTION:
            self._handle_collection(info, titled)
        elif titled.title == self.ALLOCATION_STALL:
            self._add_allocation_stall(info, titled)
        elif titled.title == self.OUT_OF_MEMORY:
            thread_name = titled.details[0] if titled.details else ""
            self.model.add_out_of_memory(OutOfMemory(start_time=info.time, thread_name=thread_name))
        elif (event := self._event(info.gcid)) is not None and is_known(titled.duration):
            phase = self._add_phase(event, self.PHASES[titled.title], info.time - titled.duration, titled.duration)
            self._cpu_targets[info.gcid] = phase

    def _handle_collection(self, info: UnifiedLine, titled: TitledMessage) -> None:
        event = self._event(info.gcid)
        if not titled.is_end:
            if event is None:
                self._open_event(info, GCEventType.ZGC_GARBAGE_COLLECTION, cause_of(titled.details))
            return
        if event is None:
            return
        event.duration = info.time - event.start_time
        self._cpu_targets[info.gcid] = event

        table = self._heap_table.pop(info.gcid, {})
        pre = post = total = UNKNOWN_INT
        if titled.memory and (match := self.ZGC_MEMORY_PATTERN.fullmatch(titled.memory)):
            pre = parse_size_to_kb(match.group("pre"))
            post = parse_size_to_kb(match.group("post"))
        used = table.get("Used", [])
        if len(used) > self.RELOCATE_END_COLUMN:
            pre, post = used[self.MARK_START_COLUMN], used[self.RELOCATE_END_COLUMN]
        if len(capacity := table.get("Capacity", [])) > self.RELOCATE_END_COLUMN:
            total = capacity[self.RELOCATE_END_COLUMN]
        event.set_memory_item(GCMemoryItem(area=MemoryArea.TOTAL, pre_used=pre, post_used=post, total=total))
        if len(allocated := table.get("Allocated", [])) > self.RELOCATE_END_COLUMN:
            event.allocation = allocated[self.RELOCATE_END_COLUMN]
        if len(reclaimed := table.get("Reclaimed", [])) > self.RELOCATE_END_COLUMN:
            event.reclamation = reclaimed[self.RELOCATE_END_COLUMN]

    def _parse_metaspace(self, info: UnifiedLine) -> None:
        event = self._event(info.gcid)
        match = self.METASPACE_PATTERN.match(info.message)
        if event is None or match is None:
            return
        event.set_memory_item(
            GCMemoryItem(
                area=MemoryArea.METASPACE,
                post_used=parse_size_to_kb(match.group("used")),
                total=parse_size_to_kb(match.group("committed")),
            )
        )

    def _add_allocation_stall(self, info: UnifiedLine, titled: TitledMessage) -> None:
        if not is_known(titled.duration):
            return
        stall = GCEvent(
            event_type=GCEventType.ZGC_ALLOCATION_STALL,
            gcid=info.gcid,
            start_time=info.time - titled.duration,
            duration=titled.duration,
            thread_name=titled.details[0] if titled.details else None,
        )
        self.model.add_allocation_stall(stall)

    def _parse_statistics_row(self, message: str) -> None:
        if message.startswith("="):
            self._statistics = None
            return
        match = self.STATISTICS_ROW_PATTERN.fullmatch(message)
        if match is None or self._statistics is None:
            return
        key = f"{match.group('section').strip()}: {match.group('name')} {match.group('unit')}"
        self._statistics.put(
            key,
            ZStatisticsItem(
                avg10s=float(match.group("avg10s")),
                max10s=float(match.group("max10s")),
                avg10m=float(match.group("avg10m")),
                max10m=float(match.group("max10m")),
                avg10h=float(match.group("avg10h")),
                max10h=float(match.group("max10h")),
                avg_total=float(match.group("avg_total")),
                max_total=float(match.group("max_total")),
            ),
        )
