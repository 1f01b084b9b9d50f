"""Parsers for pre-unified logs (``-XX:+PrintGCDetails``, JDK 8 and earlier).

A legacy record is a tree of ``[...]`` groups, each optionally preceded by
date stamps and uptimes::

    813.396: [GC (Allocation Failure) 813.396: [ParNew: 69952K->8704K(78656K), 0.0104509 secs]
        69952K->11354K(253440K), 0.0105137 secs] [Times: user=0.04 sys=0.01, real=0.01 secs]

Records may span several physical lines; lines are joined until the brackets
balance and the joined text is split into groups before interpretation.
"""

from __future__ import annotations

import re

from gclog_analyzer.event import (
    LEGACY_SYSTEM_GC_CAUSE,
    GCCollectorType,
    GCEvent,
    GCEventType,
    GCLogStyle,
    GCSpecialSituation,
    MemoryArea,
    ReferenceGC,
)
from gclog_analyzer.parser.base import (
    GENERATION_AREAS,
    SAFEPOINT_PATTERN,
    GCLogParser,
    ProgressListener,
    cpu_time_from_seconds,
    detect_special_situations,
    extract_duration_secs,
    extract_memory,
    extract_occupancy,
)
from gclog_analyzer.util import (
    MS_PER_SECOND,
    UNKNOWN_DOUBLE,
    is_known,
    parse_datestamp_ms,
)

MAX_BUFFERED_LINES = 1000

# ============================================================
# BRACKET GROUPS
# ============================================================

BRACKET_PATTERN: re.Pattern[str] = re.compile(r"[\[\]]")
DATESTAMP_PATTERN: re.Pattern[str] = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{4}(?=:)")
UPTIME_PATTERN: re.Pattern[str] = re.compile(r"(?<![\d.])(?P<uptime>\d+\.\d+):(?=\s|$)")


class BracketGroup:
    """One ``[...]`` with the text printed right before it.

    ``text`` is the group's own text with its children cut out, ``raw`` the
    full text between the brackets.
    """

    __slots__ = ("prefix", "text", "raw", "children")

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self.text = ""
        self.raw = ""
        self.children: list[BracketGroup] = []

    def __repr__(self) -> str:
        return f"BracketGroup({self.text.strip()!r}, children={len(self.children)})"


def parse_groups(text: str) -> list[BracketGroup]:
    """Split ``text`` into its top-level bracket groups. Unclosed groups end at the text end."""
    root = BracketGroup("")
    stack: list[tuple[BracketGroup, int, list[str]]] = [(root, 0, [])]
    cursor = 0
    for match in BRACKET_PATTERN.finditer(text):
        group, raw_start, segments = stack[-1]
        segment = text[cursor:match.start()]
        segments.append(segment)
        if match.group() == "[":
            child = BracketGroup(prefix=segment)
            group.children.append(child)
            stack.append((child, match.end(), []))
        elif len(stack) > 1:
            stack.pop()
            group.text = "".join(segments)
            group.raw = text[raw_start:match.start()]
        cursor = match.end()

    stack[-1][2].append(text[cursor:])
    while len(stack) > 1:
        group, raw_start, segments = stack.pop()
        group.text = "".join(segments)
        group.raw = text[raw_start:]
    return root.children


def bracket_depth(line: str) -> int:
    return line.count("[") - line.count("]")


# ============================================================
# SHARED LEGACY PARSER
# ============================================================

CPU_PATTERN: re.Pattern[str] = re.compile(
    r"Times: user=(?P<user>[\d.]+) sys=(?P<sys>[\d.]+), real=(?P<real>[\d.]+) secs"
)
CAUSE_PATTERN: re.Pattern[str] = re.compile(r"\((?P<cause>[^()]*(?:\(\))?)\)")
GENERATION_PATTERN: re.Pattern[str] = re.compile(r"(?P<name>[A-Za-z][A-Za-z ]*?)(?=\s*(?:\(|:|\d|$))")
REFERENCE_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<kind>SoftReference|WeakReference|FinalReference|PhantomReference|JNI Weak Reference)"
    r"(?:, (?P<count>\d+) refs)?(?:, (?P<freed>\d+) refs)?, (?P<secs>[\d.]+) secs"
)
REFERENCE_FIELDS: dict[str, str] = {
    "SoftReference": "soft_reference",
    "WeakReference": "weak_reference",
    "FinalReference": "final_reference",
    "PhantomReference": "phantom_reference",
    "JNI Weak Reference": "jni_weak_reference",
}


class LegacyGCLogParser(GCLogParser):
    """Record assembly, time stamps and the pieces every legacy collector prints."""

    log_style = GCLogStyle.PRE_UNIFIED

    def _reset(self) -> None:
        self._buffer: list[str] = []
        self._depth = 0
        self._cpu_target: GCEvent | None = None

    def _parse_line(self, line: str) -> None:
        if self._buffer:
            self._buffer.append(line)
            self._depth += bracket_depth(line)
            if self._depth <= 0 or len(self._buffer) >= MAX_BUFFERED_LINES:
                self._flush()
            return
        depth = bracket_depth(line)
        if depth > 0:
            self._buffer.append(line)
            self._depth = depth
            return
        self._parse_record(line)

    def _end_parsing(self) -> None:
        if self._buffer:
            self._flush()

    def _flush(self) -> None:
        record = " ".join(self._buffer)
        self._buffer = []
        self._depth = 0
        self._parse_record(record)

    def _parse_record(self, record: str) -> None:
        if "[" not in record:
            if "Total time for which" in record and (match := SAFEPOINT_PATTERN.search(record)):
                time = self._time_of(record[:match.start()], UNKNOWN_DOUBLE)
                if is_known(time):
                    self._add_safepoint(match, time)
            return
        for group in parse_groups(record):
            time = self._time_of(group.prefix, self.time_base.last_time)
            self._parse_group(group, time)

    def _parse_group(self, group: BracketGroup, time: float) -> None:
        raise NotImplementedError

    def _time_of(self, prefix: str, default: float) -> float:
        """Time stamp printed in ``prefix``; the last one wins when several are printed."""
        dates = DATESTAMP_PATTERN.findall(prefix)
        uptimes = UPTIME_PATTERN.findall(prefix)
        if not dates and not uptimes:
            return default
        return self.time_base.resolve(
            float(uptimes[-1]) * MS_PER_SECOND if uptimes else UNKNOWN_DOUBLE,
            parse_datestamp_ms(dates[-1]) if dates else UNKNOWN_DOUBLE,
        )

    # shared group handlers ---------------------------------------------

    def _set_cpu_time(self, text: str) -> bool:
        match = CPU_PATTERN.search(text)
        if match is None:
            return False
        if self._cpu_target is not None:
            self._cpu_target.cpu_time = cpu_time_from_seconds(
                match.group("user"), match.group("sys"), match.group("real")
            )
        return True

    def _set_reference(self, event: GCEvent, text: str, time: float) -> bool:
        match = REFERENCE_PATTERN.match(text)
        if match is None:
            return False
        if event.reference_gc is None:
            event.reference_gc = ReferenceGC()
        field = REFERENCE_FIELDS[match.group("kind")]
        setattr(event.reference_gc, f"{field}_start_time", time)
        setattr(event.reference_gc, f"{field}_pause_time", float(match.group("secs")) * MS_PER_SECOND)
        if match.group("count") and field != "jni_weak_reference":
            setattr(event.reference_gc, f"{field}_count", int(match.group("count")))
        if match.group("freed") and field == "phantom_reference":
            event.reference_gc.phantom_reference_freed_count = int(match.group("freed"))
        return True

    def _set_generation(self, event: GCEvent, group: BracketGroup) -> MemoryArea | None:
        """``ParNew: 1922432K->174720K(1922432K), 0.16 secs`` style groups."""
        match = GENERATION_PATTERN.match(group.text.strip())
        if match is None or (area := GENERATION_AREAS.get(match.group("name").strip())) is None:
            return None
        item = extract_memory(group.text, area)
        if item is not None:
            event.set_memory_item(item)
        return area

    @staticmethod
    def _cause_of(rest: str) -> str | None:
        """Cause printed right after the collection name, e.g. ``(Allocation Failure)``."""
        match = CAUSE_PATTERN.match(rest.lstrip())
        if match is None:
            return None
        cause = match.group("cause")
        # JDK 7 and earlier print "System" for System.gc()
        return LEGACY_SYSTEM_GC_CAUSE + "()" if cause == "System" else cause

    @staticmethod
    def _add_special_situations(event: GCEvent, group: BracketGroup) -> None:
        for situation in detect_special_situations(group.raw):
            event.add_special_situation(situation)


# ============================================================
# SERIAL / PARALLEL / CMS
# ============================================================


class LegacyGenerationalGCLogParser(LegacyGCLogParser):
    """Serial, Parallel and CMS with ``-XX:+PrintGCDetails``."""

    COLLECTION_PATTERN: re.Pattern[str] = re.compile(r"(?P<full>Full )?GC(?P<failed>--)?(?=[\s(]|$)")
    CMS_CONCURRENT_PATTERN: re.Pattern[str] = re.compile(
        r"CMS-concurrent-(?P<name>[a-z-]+?)(?:-(?P<start>start)|: (?P<cpu>[\d.]+)/(?P<wall>[\d.]+) secs)"
    )
    CMS_CONCURRENT_PHASES: dict[str, GCEventType] = {
        "mark": GCEventType.CMS_CONCURRENT_MARK,
        "preclean": GCEventType.CMS_CONCURRENT_PRECLEAN,
        "abortable-preclean": GCEventType.CMS_CONCURRENT_ABORTABLE_PRECLEAN,
        "sweep": GCEventType.CMS_CONCURRENT_SWEEP,
        "reset": GCEventType.CMS_CONCURRENT_RESET,
    }
    # sub-steps printed inside a CMS remark or a foreground collection
    NESTED_PHASES: dict[str, GCEventType] = {
        "Rescan": GCEventType.CMS_RESCAN,
        "weak refs processing": GCEventType.WEAK_REFS_PROCESSING,
        "class unloading": GCEventType.CLASS_UNLOADING,
        "scrub symbol table": GCEventType.SCRUB_SYMBOL_TABLE,
        "scrub string table": GCEventType.SCRUB_STRING_TABLE,
    }
    CMS_OCCUPANCY_PATTERN: re.Pattern[str] = re.compile(r"\d+ CMS-(?:initial-mark|remark):")

    def _reset(self) -> None:
        super()._reset()
        self._cms_cycle: GCEvent | None = None

    def _parse_group(self, group: BracketGroup, time: float) -> None:
        text = group.text.strip()
        if text.startswith("Times:"):
            self._set_cpu_time(text)
        elif text.startswith("CMS-concurrent-"):
            self._parse_cms_concurrent(text, time)
        elif "CMS Initial Mark" in text:
            self._parse_initial_mark(group, time)
        elif "CMS Final Remark" in text:
            self._parse_final_remark(group, time)
        elif match := self.COLLECTION_PATTERN.match(text):
            self._parse_collection(group, time, match)

    def _parse_collection(self, group: BracketGroup, time: float, match: re.Match[str]) -> None:
        event_type = GCEventType.FULL_GC if match.group("full") else GCEventType.YOUNG_GC
        event = GCEvent(
            event_type=event_type,
            start_time=time,
            duration=extract_duration_secs(group.text),
            cause=self._cause_of(group.text[match.end():]),
        )
        if (heap := extract_memory(group.text, MemoryArea.TOTAL)) is not None:
            event.set_memory_item(heap)
        self.model.put_event(event)
        self._cpu_target = event

        self._parse_children(event, group, time)
        if event_type is GCEventType.YOUNG_GC and event.event_type is GCEventType.FULL_GC:
            # the young generation is emptied by the full collection that took over
            young = event.get_memory_item(MemoryArea.YOUNG)
            if not young.is_empty():
                event.set_memory_item(young.model_copy(update={"post_used": 0}))

        self._add_special_situations(event, group)
        if match.group("failed"):
            event.add_special_situation(GCSpecialSituation.PROMOTION_FAILED)
        self._cpu_target = event

    def _parse_children(self, event: GCEvent, group: BracketGroup, time: float) -> None:
        for child in group.children:
            child_time = self._time_of(child.prefix, time)
            text = child.text.strip()
            if text.startswith("Times:"):
                self._set_cpu_time(text)
            elif text.startswith("CMS-concurrent-"):
                # a background cycle finishing inside a foreground collection
                self._parse_cms_concurrent(text, child_time)
            elif REFERENCE_PATTERN.match(text):
                self._set_reference(event, text, child_time)
            elif (phase_type := self._nested_phase_type(text)) is not None:
                self._add_phase(event, phase_type, child_time, extract_duration_secs(child.text))
            elif (area := self._set_generation(event, child)) is not None:
                if area is MemoryArea.OLD and event.event_type is GCEventType.YOUNG_GC:
                    event.event_type = GCEventType.FULL_GC
                self._parse_children(event, child, child_time)

    def _nested_phase_type(self, text: str) -> GCEventType | None:
        for name, event_type in self.NESTED_PHASES.items():
            if text.startswith(name):
                return event_type
        return None

    def _cycle(self, time: float) -> GCEvent:
        if self._cms_cycle is None:
            self._cms_cycle = GCEvent(event_type=GCEventType.CMS_CONCURRENT_MARK_SWEPT, start_time=time)
            self.model.put_event(self._cms_cycle)
        return self._cms_cycle

    def _parse_initial_mark(self, group: BracketGroup, time: float) -> None:
        self._cms_cycle = None
        cycle = self._cycle(time)
        phase = self._add_phase(cycle, GCEventType.CMS_INITIAL_MARK, time, extract_duration_secs(group.text))
        self._set_cms_occupancy(phase, group)
        self._cpu_target = phase

    def _parse_final_remark(self, group: BracketGroup, time: float) -> None:
        cycle = self._cycle(time)
        remark = self._add_phase(cycle, GCEventType.CMS_FINAL_REMARK, time, extract_duration_secs(group.text))
        for child in group.children:
            text = child.text.strip()
            if (phase_type := self._nested_phase_type(text)) is not None:
                self._add_phase(
                    cycle, phase_type, self._time_of(child.prefix, time), extract_duration_secs(child.text)
                )
        self._set_cms_occupancy(remark, group)
        self._cpu_target = remark

    def _set_cms_occupancy(self, phase: GCEvent, group: BracketGroup) -> None:
        """``[1 CMS-initial-mark: 1683347K(2097152K)] 1880341K(4019584K)``."""
        if (heap := extract_occupancy(group.text, MemoryArea.TOTAL)) is not None:
            phase.set_memory_item(heap)
        for child in group.children:
            if self.CMS_OCCUPANCY_PATTERN.match(child.text.strip()):
                if (old := extract_occupancy(child.text, MemoryArea.OLD)) is not None:
                    phase.set_memory_item(old)

    def _parse_cms_concurrent(self, text: str, time: float) -> None:
        match = self.CMS_CONCURRENT_PATTERN.match(text)
        if match is None or (phase_type := self.CMS_CONCURRENT_PHASES.get(match.group("name"))) is None:
            return
        cycle = self._cycle(time)
        if match.group("start"):
            self._add_phase(cycle, phase_type, time)
            return
        phase = self._end_phase(cycle, phase_type, time, float(match.group("wall")) * MS_PER_SECOND)
        self._cpu_target = phase
        if phase_type is GCEventType.CMS_CONCURRENT_RESET:
            cycle.duration = phase.end_time - cycle.start_time
            self._cms_cycle = None


# ============================================================
# G1
# ============================================================


class LegacyG1GCLogParser(LegacyGCLogParser):
    """G1 with ``-XX:+PrintGCDetails``.

    Pause details follow the pause record as separate top-level groups and
    belong to the last pause seen.
    """

    CONCURRENT_PATTERN: re.Pattern[str] = re.compile(
        r"GC concurrent-(?P<name>[a-z-]+?)(?P<suffix>-start|-end)?(?:, (?P<secs>[\d.]+) secs)?"
    )
    CONCURRENT_PHASES: dict[str, GCEventType] = {
        "root-region-scan": GCEventType.G1_CONCURRENT_SCAN_ROOT_REGIONS,
        "clear-claimed-marks": GCEventType.G1_CONCURRENT_CLEAR_CLAIMED_MARKS,
        "mark": GCEventType.G1_CONCURRENT_MARK,
        "mark-reset-for-overflow": GCEventType.G1_CONCURRENT_MARK_RESET_FOR_OVERFLOW,
        "mark-abort": GCEventType.G1_CONCURRENT_MARK_ABORT,
        "cleanup": GCEventType.G1_CONCURRENT_CLEANUP,
    }
    REMARK_PHASES: dict[str, GCEventType] = {
        "Finalize Marking": GCEventType.G1_FINALIZE_MARKING,
        "GC ref-proc": GCEventType.G1_GC_REFPROC,
        "Unloading": GCEventType.G1_UNLOADING,
    }
    DETAIL_PHASES: dict[str, GCEventType] = {
        "Ext Root Scanning": GCEventType.G1_EXT_ROOT_SCANNING,
        "Update RS": GCEventType.G1_UPDATE_RS,
        "Scan RS": GCEventType.G1_SCAN_RS,
        "Code Root Scanning": GCEventType.G1_CODE_ROOT_SCANNING,
        "Object Copy": GCEventType.G1_OBJECT_COPY,
        "Termination": GCEventType.G1_TERMINATION,
        "Code Root Fixup": GCEventType.G1_CODE_ROOT_FIXUP,
        "Code Root Purge": GCEventType.G1_CODE_ROOT_PURGE,
        "Clear CT": GCEventType.G1_CLEAR_CT,
        "Other": GCEventType.G1_COLLECT_OTHER,
        "Choose CSet": GCEventType.G1_CHOOSE_CSET,
        "Ref Proc": GCEventType.G1_GC_REFPROC,
        "Ref Enq": GCEventType.G1_REF_ENQ,
        "Redirty Cards": GCEventType.G1_REDIRTY_CARDS,
        "Humongous Register": GCEventType.G1_HUMONGOUS_REGISTER,
        "Humongous Reclaim": GCEventType.G1_HUMONGOUS_RECLAIM,
        "Free CSet": GCEventType.G1_FREE_CSET,
    }
    PARALLEL_TIME_PATTERN: re.Pattern[str] = re.compile(r"Parallel Time: [\d.]+ ms, GC Workers: (?P<workers>\d+)")
    # "[Object Copy (ms): Min: 18.1, Avg: 26.2, ...]" and "[Clear CT: 0.2 ms]"
    WORKER_ROW_PATTERN: re.Pattern[str] = re.compile(r"(?P<name>[A-Za-z ]+?) \(ms\):.*?Avg:\s*(?P<value>[\d.]+)")
    TIME_ROW_PATTERN: re.Pattern[str] = re.compile(r"(?P<name>[A-Za-z ]+?):\s*(?P<value>[\d.]+) ms")
    HEAP_SUMMARY_PATTERN: re.Pattern[str] = re.compile(r"(?P<name>Eden|Survivors|Heap): (?P<change>\S+)")
    HEAP_SUMMARY_AREAS: dict[str, MemoryArea] = {
        "Eden": MemoryArea.EDEN,
        "Survivors": MemoryArea.SURVIVOR,
        "Heap": MemoryArea.TOTAL,
    }

    def __init__(self, progress: ProgressListener | None = None) -> None:
        super().__init__(GCCollectorType.G1, progress)

    def _reset(self) -> None:
        super()._reset()
        self._pause: GCEvent | None = None
        self._cycle: GCEvent | None = None

    def _parse_group(self, group: BracketGroup, time: float) -> None:
        text = group.text.strip()
        if text.startswith("Times:"):
            self._set_cpu_time(text)
        elif text.startswith("GC pause"):
            self._parse_pause(group, time)
        elif text.startswith("Full GC"):
            self._parse_full(group, time)
        elif text.startswith("GC remark"):
            self._parse_remark(group, time)
        elif text.startswith("GC cleanup"):
            self._parse_cleanup(group, time)
        elif text.startswith("GC concurrent-"):
            self._parse_concurrent(text, time)
        elif self._pause is not None:
            self._parse_detail(self._pause, group)

    def _parse_pause(self, group: BracketGroup, time: float) -> None:
        text = group.text
        event_type = GCEventType.G1_MIXED_GC if "(mixed)" in text else GCEventType.YOUNG_GC
        event = GCEvent(
            event_type=event_type,
            start_time=time,
            duration=extract_duration_secs(text),
            cause=self._cause_of(text.strip()[len("GC pause"):]),
        )
        if (heap := extract_memory(text, MemoryArea.TOTAL)) is not None:
            event.set_memory_item(heap)
        for child in group.children:
            self._set_reference(event, child.text.strip(), self._time_of(child.prefix, time))
        self._add_special_situations(event, group)
        self.model.put_event(event)
        self._pause = event
        self._cpu_target = event

    def _parse_full(self, group: BracketGroup, time: float) -> None:
        event = GCEvent(
            event_type=GCEventType.FULL_GC,
            start_time=time,
            duration=extract_duration_secs(group.text),
            cause=self._cause_of(group.text.strip()[len("Full GC"):]),
        )
        if (heap := extract_memory(group.text, MemoryArea.TOTAL)) is not None:
            event.set_memory_item(heap)
        for child in group.children:
            self._set_generation(event, child)
        self.model.put_event(event)
        self._pause = event
        self._cpu_target = event

    def _parse_detail(self, event: GCEvent, group: BracketGroup) -> None:
        text = group.text.strip()
        if match := self.PARALLEL_TIME_PATTERN.match(text):
            self.model.parallel_thread = int(match.group("workers"))
        elif text.startswith("Eden:"):
            for match in self.HEAP_SUMMARY_PATTERN.finditer(text):
                item = extract_memory(match.group("change"), self.HEAP_SUMMARY_AREAS[match.group("name")])
                if item is not None:
                    event.set_memory_item(item)
        elif self._set_generation(event, group) is not None:
            return
        elif (match := self.WORKER_ROW_PATTERN.match(text) or self.TIME_ROW_PATTERN.fullmatch(text)) and (
            phase_type := self.DETAIL_PHASES.get(match.group("name"))
        ) is not None:
            self._add_phase(event, phase_type, event.start_time, float(match.group("value")))

    def _concurrent_cycle(self, time: float) -> GCEvent:
        if self._cycle is None:
            self._cycle = GCEvent(event_type=GCEventType.G1_CONCURRENT_CYCLE, start_time=time)
            self.model.put_event(self._cycle)
        return self._cycle

    def _parse_remark(self, group: BracketGroup, time: float) -> None:
        cycle = self._concurrent_cycle(time)
        remark = self._add_phase(cycle, GCEventType.G1_REMARK, time, extract_duration_secs(group.text))
        for child in group.children:
            text = child.text.strip()
            for name, phase_type in self.REMARK_PHASES.items():
                if text.startswith(name):
                    self._add_phase(
                        cycle, phase_type, self._time_of(child.prefix, time), extract_duration_secs(child.text)
                    )
                    break
        self._cpu_target = remark

    def _parse_cleanup(self, group: BracketGroup, time: float) -> None:
        cycle = self._concurrent_cycle(time)
        cleanup = self._add_phase(cycle, GCEventType.G1_PAUSE_CLEANUP, time, extract_duration_secs(group.text))
        if (heap := extract_memory(group.text, MemoryArea.TOTAL)) is not None:
            cleanup.set_memory_item(heap)
        self._cpu_target = cleanup

    def _parse_concurrent(self, text: str, time: float) -> None:
        match = self.CONCURRENT_PATTERN.fullmatch(text)
        if match is None or (phase_type := self.CONCURRENT_PHASES.get(match.group("name"))) is None:
            return
        cycle = self._concurrent_cycle(time)
        if match.group("suffix") != "-end":
            self._add_phase(cycle, phase_type, time)
            if phase_type is GCEventType.G1_CONCURRENT_MARK_ABORT:
                self._close_cycle(cycle, time)
            return
        secs = match.group("secs")
        duration = float(secs) * MS_PER_SECOND if secs else UNKNOWN_DOUBLE
        phase = self._end_phase(cycle, phase_type, time, duration)
        self._cpu_target = phase
        if phase_type is GCEventType.G1_CONCURRENT_CLEANUP:
            self._close_cycle(cycle, phase.end_time)

    def _close_cycle(self, cycle: GCEvent, end_time: float) -> None:
        if is_known(end_time):
            cycle.duration = end_time - cycle.start_time
        self._cycle = None
