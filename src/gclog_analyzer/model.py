"""Whole-log GC model and its derived-information pipeline.

A parser fills a :class:`GCModel` with events; :meth:`GCModel.calculate_derived_info`
then runs once to produce intervals, memory reconciliation, cause and phase
tables, KPIs, basic info and the diagnosis. After that the model is read-only.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from gclog_analyzer.config import AnalysisConfig
from gclog_analyzer.errors import ModelStateError, UnsupportedCollectorError
from gclog_analyzer.event import (
    LEGACY_SYSTEM_GC_CAUSE,
    GCCause,
    GCCollectorType,
    GCEvent,
    GCEventLevel,
    GCEventType,
    GCLogStyle,
    GCMemoryItem,
    GCPause,
    GCSpecialSituation,
    MemoryArea,
    OutOfMemory,
    Safepoint,
)
from gclog_analyzer.log import get_logger
from gclog_analyzer.util import (
    EPS,
    KB_PER_MB,
    MS_PER_SECOND,
    START_TIME_ZERO_THRESHOLD,
    UNKNOWN_DOUBLE,
    UNKNOWN_INT,
    DoubleData,
    IntData,
    is_known,
    zero_if_unknown,
)
from gclog_analyzer.vm_options import VmOptions

if TYPE_CHECKING:
    from gclog_analyzer.graph import TimeLineChartView

_logger = get_logger("model")

NA = "N/A"

# ============================================================
# COLLECTOR CAPABILITIES
# ============================================================


class CollectorCapabilities(BaseModel):
    """What a collector family reports and which statistics make sense for it."""

    model_config = ConfigDict(frozen=True)

    collector: GCCollectorType
    generational: bool = True
    pauseless: bool = False
    region_based: bool = False
    # parent types first, then phases, in display order
    event_types: tuple[GCEventType, ...] = ()

    @property
    def parent_event_types(self) -> list[GCEventType]:
        return [t for t in self.event_types if t.level is GCEventLevel.EVENT]

    @property
    def pause_event_types(self) -> list[GCEventType]:
        """Stop-the-world types shown in pause charts: pause parents and top pause phases."""
        return [t for t in self.event_types if t.pause is GCPause.PAUSE and not t.nested]


_E = GCEventType

_G1_TYPES = (
    _E.YOUNG_GC,
    _E.G1_MIXED_GC,
    _E.FULL_GC,
    _E.G1_CONCURRENT_CYCLE,
    _E.G1_COLLECT_PRE_EVACUATION,
    _E.G1_COLLECT_EVACUATION,
    _E.G1_COLLECT_POST_EVACUATION,
    _E.G1_COLLECT_OTHER,
    _E.G1_CONCURRENT_CLEAR_CLAIMED_MARKS,
    _E.G1_CONCURRENT_SCAN_ROOT_REGIONS,
    _E.G1_CONCURRENT_MARK,
    _E.G1_CONCURRENT_MARK_FROM_ROOTS,
    _E.G1_CONCURRENT_PRECLEAN,
    _E.G1_CONCURRENT_MARK_ABORT,
    _E.G1_CONCURRENT_MARK_RESET_FOR_OVERFLOW,
    _E.G1_REMARK,
    _E.G1_FINALIZE_MARKING,
    _E.G1_GC_REFPROC,
    _E.G1_UNLOADING,
    _E.G1_CONCURRENT_REBUILD_REMEMBERED_SETS,
    _E.G1_PAUSE_CLEANUP,
    _E.G1_CONCURRENT_CLEANUP_FOR_NEXT_MARK,
    _E.G1_CONCURRENT_CLEANUP,
    _E.G1_MARK_LIVE_OBJECTS,
    _E.G1_PREPARE_FOR_COMPACTION,
    _E.G1_ADJUST_POINTERS,
    _E.G1_COMPACT_HEAP,
)

_SERIAL_FULL_PHASES = (
    _E.SERIAL_MARK_LIFE_OBJECTS,
    _E.SERIAL_COMPUTE_NEW_OBJECT_ADDRESSES,
    _E.SERIAL_ADJUST_POINTERS,
    _E.SERIAL_MOVE_OBJECTS,
)

_CMS_TYPES = (
    _E.YOUNG_GC,
    _E.FULL_GC,
    _E.CMS_CONCURRENT_MARK_SWEPT,
    _E.CMS_INITIAL_MARK,
    _E.CMS_CONCURRENT_MARK,
    _E.CMS_CONCURRENT_PRECLEAN,
    _E.CMS_CONCURRENT_ABORTABLE_PRECLEAN,
    _E.CMS_FINAL_REMARK,
    _E.CMS_RESCAN,
    _E.CMS_CONCURRENT_SWEEP,
    _E.CMS_CONCURRENT_RESET,
    _E.WEAK_REFS_PROCESSING,
    _E.CLASS_UNLOADING,
    _E.SCRUB_SYMBOL_TABLE,
    _E.SCRUB_STRING_TABLE,
    *_SERIAL_FULL_PHASES,
)

_PARALLEL_TYPES = (
    _E.YOUNG_GC,
    _E.FULL_GC,
    _E.PARALLEL_PHASE_MARKING,
    _E.PARALLEL_PHASE_SUMMARY,
    _E.PARALLEL_PHASE_ADJUST_ROOTS,
    _E.PARALLEL_PHASE_COMPACTION,
    _E.PARALLEL_PHASE_POST_COMPACT,
)

_SERIAL_TYPES = (_E.YOUNG_GC, _E.FULL_GC, *_SERIAL_FULL_PHASES)

_ZGC_TYPES = (
    _E.ZGC_GARBAGE_COLLECTION,
    _E.ZGC_PAUSE_MARK_START,
    _E.ZGC_CONCURRENT_MARK,
    _E.ZGC_CONCURRENT_MARK_CONTINUE,
    _E.ZGC_PAUSE_MARK_END,
    _E.ZGC_CONCURRENT_NONREF,
    _E.ZGC_CONCURRENT_RESET_RELOC_SET,
    _E.ZGC_CONCURRENT_DETATCHED_PAGES,
    _E.ZGC_CONCURRENT_SELECT_RELOC_SET,
    _E.ZGC_CONCURRENT_PREPARE_RELOC_SET,
    _E.ZGC_PAUSE_RELOCATE_START,
    _E.ZGC_CONCURRENT_RELOCATE,
)

COLLECTOR_CAPABILITIES: dict[GCCollectorType, CollectorCapabilities] = {
    GCCollectorType.G1: CollectorCapabilities(
        collector=GCCollectorType.G1, region_based=True, event_types=_G1_TYPES
    ),
    GCCollectorType.CMS: CollectorCapabilities(collector=GCCollectorType.CMS, event_types=_CMS_TYPES),
    GCCollectorType.PARALLEL: CollectorCapabilities(
        collector=GCCollectorType.PARALLEL, event_types=_PARALLEL_TYPES
    ),
    GCCollectorType.SERIAL: CollectorCapabilities(collector=GCCollectorType.SERIAL, event_types=_SERIAL_TYPES),
    GCCollectorType.ZGC: CollectorCapabilities(
        collector=GCCollectorType.ZGC, generational=False, pauseless=True, region_based=True, event_types=_ZGC_TYPES
    ),
    # a log whose collector could not be told apart still gets the common types
    GCCollectorType.UNKNOWN: CollectorCapabilities(
        collector=GCCollectorType.UNKNOWN, event_types=(_E.YOUNG_GC, _E.FULL_GC)
    ),
}

# ============================================================
# RESULT RECORDS
# ============================================================


class KPIType(StrEnum):
    THROUGHPUT = "throughput"
    MAX_PAUSE = "maxPause"
    YOUNG_GC_INTERVAL_AVG = "youngGCIntervalAvg"
    YOUNG_GC_INTERVAL_MIN = "youngGCIntervalMin"
    YOUNG_GC_PAUSE_AVG = "youngGCPauseAvg"
    YOUNG_GC_PAUSE_MAX = "youngGCPauseMax"
    OLD_GC_INTERVAL_AVG = "oldGCIntervalAvg"
    OLD_GC_INTERVAL_MIN = "oldGCIntervalMin"
    FULL_GC_INTERVAL_AVG = "fullGCIntervalAvg"
    FULL_GC_INTERVAL_MIN = "fullGCIntervalMin"
    FULL_GC_PAUSE_AVG = "fullGCPauseAvg"
    FULL_GC_PAUSE_MAX = "fullGCPauseMax"
    PROMOTION_SPEED = "promotionSpeed"
    PROMOTION_AVG = "promotionAvg"
    PROMOTION_MAX = "promotionMax"
    OBJECT_CREATION_SPEED = "objectCreationSpeed"
    GC_DURATION_PERCENTAGE = "gcDurationPercentage"


_GENERATIONAL_KPIS = (
    KPIType.YOUNG_GC_INTERVAL_AVG,
    KPIType.YOUNG_GC_INTERVAL_MIN,
    KPIType.YOUNG_GC_PAUSE_AVG,
    KPIType.YOUNG_GC_PAUSE_MAX,
    KPIType.OLD_GC_INTERVAL_AVG,
    KPIType.OLD_GC_INTERVAL_MIN,
    KPIType.PROMOTION_SPEED,
    KPIType.PROMOTION_AVG,
    KPIType.PROMOTION_MAX,
)


def applicable_kpis(capabilities: CollectorCapabilities) -> list[KPIType]:
    """KPIs reported for a collector, all starting out UNKNOWN."""
    kpis = [KPIType.MAX_PAUSE]
    if not capabilities.pauseless:
        kpis.append(KPIType.THROUGHPUT)
    if capabilities.generational:
        kpis.extend(_GENERATIONAL_KPIS)
    kpis.extend(
        [
            KPIType.FULL_GC_INTERVAL_AVG,
            KPIType.FULL_GC_INTERVAL_MIN,
            KPIType.FULL_GC_PAUSE_AVG,
            KPIType.FULL_GC_PAUSE_MAX,
            KPIType.OBJECT_CREATION_SPEED,
        ]
    )
    if capabilities.pauseless:
        kpis.append(KPIType.GC_DURATION_PERCENTAGE)
    return kpis


class KPIItem(BaseModel):
    value: float = UNKNOWN_DOUBLE
    # set by diagnosis when the value is outside a healthy range
    bad: bool = False


class GCCauseInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    cause: str
    count: int
    avg_pause: float
    max_pause: float
    total_pause: float


class GCPhaseInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    count: int
    avg_time: float
    max_time: float
    total_time: float
    avg_interval: float
    stw: bool


class BasicInfo(BaseModel):
    """Summary of the JVM and heap shown above every report. Sizes in KB."""

    vm_options: str = NA
    collector: str = NA
    duration: float = UNKNOWN_DOUBLE
    young_gen_size: int = UNKNOWN_INT
    old_gen_size: int = UNKNOWN_INT
    heap_size: int = UNKNOWN_INT
    metaspace_size: int = UNKNOWN_INT
    parallel_gc_thread: int = UNKNOWN_INT
    concurrent_gc_thread: int = UNKNOWN_INT


class ProblemAndSuggestion(BaseModel):
    problem: str
    suggestions: list[str] = Field(default_factory=list)


class GCLogDetailMetadata(BaseModel):
    """Values a detail-view client needs to build its filter widgets."""

    event_types: list[str]
    causes: list[str]
    start_time: float
    end_time: float
    timestamp: float
    collector: str


class GCDetailFilter(BaseModel):
    """Keep events matching every given criterion; ``None`` matches anything."""

    event_type: str | None = None
    gc_cause: str | None = None
    log_time_low: float | None = None
    log_time_high: float | None = None
    pause_time_low: float | None = None

    def matches(self, event: GCEvent) -> bool:
        if self.event_type is not None and self.event_type != event.event_type.label:
            return False
        if self.gc_cause is not None and self.gc_cause != event.cause:
            return False
        end = event.end_time
        if self.log_time_low is not None and end < self.log_time_low:
            return False
        if self.log_time_high is not None and end > self.log_time_high:
            return False
        if self.pause_time_low is not None and event.pause < self.pause_time_low:
            return False
        return True


class GCDetailPage(BaseModel):
    page: int
    page_size: int
    total: int
    items: list[str]


# ============================================================
# ZGC STATISTICS
# ============================================================

ZGC_ALLOCATION_RATE = "Memory: Allocation Rate MB/s"
ZGC_CYCLE_TIME = "Collector: Garbage Collection Cycle ms"


class ZStatisticsItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg10s: float
    max10s: float
    avg10m: float
    max10m: float
    avg10h: float
    max10h: float
    avg_total: float
    max_total: float


class ZStatistics(BaseModel):
    """One ``Garbage Collection Statistics`` table printed by ZGC.

    Keys join section, name and unit, e.g. ``Memory: Allocation Rate MB/s``,
    so that rows with the same name in different units stay apart.
    """

    start_time: float
    items: dict[str, ZStatisticsItem] = Field(default_factory=dict)

    def get(self, key: str) -> ZStatisticsItem | None:
        return self.items.get(key)

    def put(self, key: str, item: ZStatisticsItem) -> None:
        self.items[key] = item


# ============================================================
# PIPELINE STAGES
# ============================================================


def filter_invalid_events(gc_events: list[GCEvent]) -> list[GCEvent]:
    """Drop a trailing top-level event the log was cut off in the middle of."""
    if gc_events and not is_known(gc_events[-1].end_time):
        return gc_events[:-1]
    return gc_events


def decide_start_end_time(gc_events: list[GCEvent]) -> tuple[float, float]:
    """Model start/end time from ``gc_events``, which must already be sorted."""
    if not gc_events:
        return UNKNOWN_DOUBLE, UNKNOWN_DOUBLE
    start = gc_events[0].end_time
    if start < START_TIME_ZERO_THRESHOLD:
        start = 0.0
    last = gc_events[-1]
    end = last.end_time
    if last.has_phases:
        end = max(end, last.phases[-1].end_time)
    return start, end


def fix_event_info(gc_events: Iterable[GCEvent]) -> None:
    for event in gc_events:
        if event.cause == LEGACY_SYSTEM_GC_CAUSE:
            event.cause = GCCause.SYSTEM_GC.value
        phases = event.phases
        for index, phase in enumerate(phases):
            if is_known(phase.duration):
                continue
            if index + 1 < len(phases) and is_known(phases[index + 1].start_time):
                phase.duration = max(0.0, phases[index + 1].start_time - phase.start_time)
            elif is_known(event.end_time):
                phase.duration = max(0.0, event.end_time - phase.start_time)
        if not is_known(event.duration) and phases and is_known(phases[-1].end_time):
            event.duration = phases[-1].end_time - event.start_time


def assign_timestamps(events: Iterable[GCEvent], reference_timestamp: float) -> None:
    if not is_known(reference_timestamp):
        return
    for event in events:
        if is_known(event.start_time):
            event.timestamp = reference_timestamp + event.start_time
        for phase in event.phases:
            if is_known(phase.start_time):
                phase.timestamp = reference_timestamp + phase.start_time


def compute_intervals(gc_events: Iterable[GCEvent]) -> None:
    """Gap since the previous event of the same type; young variants share one series.

    Events are measured end-to-start, phases start-to-start.
    """
    last_time: dict[GCEventType, float] = {}
    for event in gc_events:
        event_type = event.event_type.interval_type
        if event_type in last_time and is_known(event.start_time):
            event.interval = max(0.0, event.start_time - last_time[event_type])
        if is_known(event.end_time):
            last_time[event_type] = event.end_time
        for phase in event.phases:
            if phase.event_type in last_time and is_known(phase.start_time):
                phase.interval = phase.start_time - last_time[phase.event_type]
            if is_known(phase.start_time):
                last_time[phase.event_type] = phase.start_time


def aggregate_collection(event: GCEvent) -> dict[MemoryArea, GCMemoryItem]:
    """Reconcile the memory items of one event into YOUNG/OLD/HUMONGOUS/METASPACE/TOTAL.

    Every area is present in the result; inference only fills fields that are
    still unknown, so applying it again changes nothing.
    """
    memory = event.memory
    agg = {area: memory[area] for area in _AGG_AREAS}
    if agg[MemoryArea.YOUNG].is_empty():
        eden, survivor = memory[MemoryArea.EDEN], memory[MemoryArea.SURVIVOR]
        young = survivor if eden.is_empty() else eden.merge_if_present(survivor)
        agg[MemoryArea.YOUNG] = young.with_area(MemoryArea.YOUNG)
    infer_remaining(agg)
    return agg


_AGG_AREAS = (MemoryArea.YOUNG, MemoryArea.OLD, MemoryArea.HUMONGOUS, MemoryArea.METASPACE, MemoryArea.TOTAL)


def infer_remaining(agg: dict[MemoryArea, GCMemoryItem]) -> None:
    young, old, humongous = agg[MemoryArea.YOUNG], agg[MemoryArea.OLD], agg[MemoryArea.HUMONGOUS]
    total = young.merge(old).merge_if_present(humongous).with_area(MemoryArea.TOTAL)
    agg[MemoryArea.TOTAL] = agg[MemoryArea.TOTAL].update_if_absent(total)

    young = agg[MemoryArea.TOTAL].subtract(old).subtract_if_present(humongous).with_area(MemoryArea.YOUNG)
    agg[MemoryArea.YOUNG] = agg[MemoryArea.YOUNG].update_if_absent(young)

    old = (
        agg[MemoryArea.TOTAL]
        .subtract(agg[MemoryArea.YOUNG])
        .subtract_if_present(humongous)
        .with_area(MemoryArea.OLD)
    )
    agg[MemoryArea.OLD] = agg[MemoryArea.OLD].update_if_absent(old)


def collect_collection_events(gc_events: Iterable[GCEvent]) -> list[GCEvent]:
    """Aggregate memory bottom-up and return every event or phase carrying memory, by start time."""
    collected: list[GCEvent] = []

    def visit(event: GCEvent) -> None:
        for phase in event.phases:
            visit(phase)
        if not event.has_memory_info():
            return
        event.collection_agg = aggregate_collection(event)
        collected.append(event)

    for event in gc_events:
        visit(event)
    collected.sort(key=lambda e: e.start_time)
    return collected


def compute_memory_derived(collection_events: Iterable[GCEvent]) -> None:
    """Reclamation, promotion and allocation per collection event."""
    last_total_post = 0
    for event in collection_events:
        total = event.get_collection_agg(MemoryArea.TOTAL)
        young = event.get_collection_agg(MemoryArea.YOUNG)
        humongous = event.get_collection_agg(MemoryArea.HUMONGOUS)
        if not is_known(event.reclamation):
            event.reclamation = total.memory_reduction()
        if not is_known(event.promotion) and event.event_type.has_promotion:
            young_reduction = young.memory_reduction()
            total_reduction = total.memory_reduction()
            if is_known(young_reduction) and is_known(total_reduction):
                promotion = young_reduction - total_reduction
                humongous_reduction = humongous.memory_reduction()
                if is_known(humongous_reduction):
                    promotion -= humongous_reduction
                event.promotion = promotion
        if is_known(total.pre_used):
            # a concurrent collector may already know what was allocated during the event
            event.allocation = int(zero_if_unknown(event.allocation)) + total.pre_used - last_total_post
        if is_known(total.post_used):
            last_total_post = total.post_used


def build_cause_table(gc_events: Iterable[GCEvent]) -> list[GCCauseInfo]:
    pauses: dict[str, DoubleData] = {}
    for event in gc_events:
        pause = event.pause
        if not is_known(pause):
            continue
        if event.cause is not None:
            pauses.setdefault(f"{_cause_prefix(event)} - {event.cause}", DoubleData()).add(pause)
        for situation in event.special_situations:
            if situation in (GCSpecialSituation.PROMOTION_FAILED, GCSpecialSituation.TO_SPACE_EXHAUSTED):
                pauses.setdefault(situation.value, DoubleData()).add(pause)
    infos = [
        GCCauseInfo(
            cause=cause,
            count=data.count(),
            avg_pause=data.average(),
            max_pause=data.max(),
            total_pause=data.sum(),
        )
        for cause, data in pauses.items()
    ]
    infos.sort(key=lambda info: info.total_pause, reverse=True)
    return infos


def _cause_prefix(event: GCEvent) -> str:
    if event.is_young:
        return GCEventType.YOUNG_GC.label
    return event.event_type.label


class _PhaseStats:
    __slots__ = ("durations", "intervals", "pauses")

    def __init__(self) -> None:
        self.durations = DoubleData()
        self.intervals = DoubleData()
        self.pauses = DoubleData()

    def add(self, event: GCEvent) -> None:
        self.durations.add(event.duration)
        self.intervals.add(event.interval)
        self.pauses.add(event.pause)


def build_phase_table(
    gc_events: Iterable[GCEvent],
    capabilities: CollectorCapabilities,
    duration: float,
    kpi: dict[str, KPIItem],
) -> list[GCPhaseInfo]:
    """Duration/interval/pause statistics per event type.

    Interval and pause KPIs are filled in from the same pass.
    """
    supported = set(capabilities.event_types)
    stats: dict[GCEventType, _PhaseStats] = {}
    young = _PhaseStats()
    for event in gc_events:
        stats.setdefault(event.event_type, _PhaseStats()).add(event)
        if event.is_young:
            young.add(event)
        for phase in event.phases:
            if phase.event_type in supported:
                stats.setdefault(phase.event_type, _PhaseStats()).add(phase)

    infos: list[GCPhaseInfo] = []
    for event_type in capabilities.event_types:
        data = stats.get(event_type)
        if data is None:
            continue
        infos.append(
            GCPhaseInfo(
                name=event_type.label,
                count=data.durations.count(),
                avg_time=data.durations.average(),
                max_time=data.durations.max(),
                total_time=data.durations.sum(),
                avg_interval=data.intervals.average(),
                stw=event_type.pause is GCPause.PAUSE,
            )
        )
        if event_type.is_full:
            _set_kpi(kpi, KPIType.FULL_GC_INTERVAL_AVG, data.intervals.average())
            _set_kpi(kpi, KPIType.FULL_GC_INTERVAL_MIN, data.intervals.min())
            _set_kpi(kpi, KPIType.FULL_GC_PAUSE_AVG, data.pauses.average())
            _set_kpi(kpi, KPIType.FULL_GC_PAUSE_MAX, data.pauses.max())
            if capabilities.pauseless:
                percentage = UNKNOWN_DOUBLE
                if data.durations.count() > 0 and is_known(duration) and duration > EPS:
                    percentage = min(1.0, data.durations.sum() / duration)
                _set_kpi(kpi, KPIType.GC_DURATION_PERCENTAGE, percentage)
        elif event_type.is_old and capabilities.generational:
            _set_kpi(kpi, KPIType.OLD_GC_INTERVAL_AVG, data.intervals.average())
            _set_kpi(kpi, KPIType.OLD_GC_INTERVAL_MIN, data.intervals.min())

    if capabilities.generational and young.durations.count():
        _set_kpi(kpi, KPIType.YOUNG_GC_INTERVAL_AVG, young.intervals.average())
        _set_kpi(kpi, KPIType.YOUNG_GC_INTERVAL_MIN, young.intervals.min())
        _set_kpi(kpi, KPIType.YOUNG_GC_PAUSE_AVG, young.pauses.average())
        _set_kpi(kpi, KPIType.YOUNG_GC_PAUSE_MAX, young.pauses.max())
    return infos


def _set_kpi(kpi: dict[str, KPIItem], kpi_type: KPIType, value: float) -> None:
    kpi[kpi_type.value] = KPIItem(value=value)


# ============================================================
# MODEL
# ============================================================


class GCModel:
    """Parsed events of one GC log plus everything derived from them.

    Parsers append with :meth:`put_event` and :meth:`add_phase`.
    :meth:`calculate_derived_info` must be called exactly once afterwards;
    aggregation tables would be counted twice otherwise, so a second call
    raises :class:`ModelStateError`.
    """

    SUPPORTED_COLLECTORS = frozenset(COLLECTOR_CAPABILITIES)

    def __init__(self, collector_type: GCCollectorType = GCCollectorType.UNKNOWN) -> None:
        self.collector_type = collector_type
        self.log_style: GCLogStyle | None = None
        self.vm_options: VmOptions | None = None
        self.reference_timestamp: float = UNKNOWN_DOUBLE
        self.start_time: float = UNKNOWN_DOUBLE
        self.end_time: float = UNKNOWN_DOUBLE
        self.parallel_thread: int = UNKNOWN_INT
        self.concurrent_thread: int = UNKNOWN_INT
        self.heap_region_size: int = UNKNOWN_INT

        self.all_events: list[GCEvent] = []
        self.gc_events: list[GCEvent] = []
        self.gc_collection_events: list[GCEvent] = []
        self.safepoints: list[Safepoint] = []

        # ZGC only
        self.statistics: list[ZStatistics] = []
        self.allocation_stalls: list[GCEvent] = []
        self.out_of_memories: list[OutOfMemory] = []

        self.config = AnalysisConfig()
        self.gc_cause_infos: list[GCCauseInfo] = []
        self.gc_phase_infos: list[GCPhaseInfo] = []
        self.kpi: dict[str, KPIItem] = {}
        self.basic_info = BasicInfo()
        self.problem_and_suggestion: list[ProblemAndSuggestion] = []
        self.diagnosis = None
        self._detail_cache: list[str] = []
        self._recommend_max_heap_size: int | None = None
        self._derived = False

    # ------------------------------------------------------------------
    # population
    # ------------------------------------------------------------------

    def put_event(self, event: GCEvent) -> None:
        self.gc_events.append(event)
        self.all_events.append(event)

    def add_phase(self, parent: GCEvent, phase: GCEvent) -> None:
        self.all_events.append(phase)
        parent.add_phase(phase)

    def add_safepoint(self, safepoint: Safepoint) -> None:
        self.safepoints.append(safepoint)

    def add_allocation_stall(self, stall: GCEvent) -> None:
        self.allocation_stalls.append(stall)

    def add_out_of_memory(self, oom: OutOfMemory) -> None:
        self.out_of_memories.append(oom)

    def add_statistics(self, statistics: ZStatistics) -> None:
        self.statistics.append(statistics)

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------

    @property
    def capabilities(self) -> CollectorCapabilities:
        return COLLECTOR_CAPABILITIES[self.collector_type]

    @property
    def is_generational(self) -> bool:
        return self.capabilities.generational

    @property
    def is_pauseless(self) -> bool:
        return self.capabilities.pauseless

    @property
    def duration(self) -> float:
        if is_known(self.start_time) and is_known(self.end_time):
            return self.end_time - self.start_time
        return UNKNOWN_DOUBLE

    def duration_not_zero(self) -> bool:
        return is_known(self.duration) and self.duration > EPS

    def is_empty(self) -> bool:
        return not self.gc_events

    def get_last_event_with_condition(self, condition: Callable[[GCEvent], bool]) -> GCEvent | None:
        for event in reversed(self.all_events):
            if condition(event):
                return event
        return None

    def get_last_event_of_type(self, *types: GCEventType) -> GCEvent | None:
        return self.get_last_event_with_condition(lambda event: event.event_type in types)

    def get_last_event_of_gcid(self, gcid: int) -> GCEvent | None:
        return self.get_last_event_with_condition(
            lambda event: event.level is GCEventLevel.EVENT and event.gcid == gcid
        )

    def get_kpi_value(self, kpi_type: KPIType) -> float:
        item = self.kpi.get(kpi_type.value)
        return item.value if item is not None else UNKNOWN_DOUBLE

    # ------------------------------------------------------------------
    # derived info
    # ------------------------------------------------------------------

    def calculate_derived_info(self, config: AnalysisConfig | None = None) -> None:
        if self._derived:
            raise ModelStateError("derived info has already been calculated for this model")
        if self.collector_type not in self.SUPPORTED_COLLECTORS:
            raise UnsupportedCollectorError(f"Collector not supported: {self.collector_type}")
        self._derived = True
        if config is not None:
            self.config = config

        self.gc_events = filter_invalid_events(self.gc_events)
        self.gc_events.sort(key=lambda event: event.start_time)
        if not is_known(self.end_time):
            start, end = decide_start_end_time(self.gc_events)
            if is_known(start):
                self.start_time = start
            self.end_time = end
        fix_event_info(self.gc_events)

        _PRE_PASSES.get(self.collector_type, _no_pre_pass)(self)

        assign_timestamps(self.gc_events, self.reference_timestamp)
        compute_intervals(self.gc_events)
        self.gc_collection_events = collect_collection_events(self.gc_events)
        compute_memory_derived(self.gc_collection_events)

        # events must not change after this line
        self.gc_cause_infos = build_cause_table(self.gc_events)
        self.kpi = {kpi.value: KPIItem() for kpi in applicable_kpis(self.capabilities)}
        self.gc_phase_infos = build_phase_table(self.gc_events, self.capabilities, self.duration, self.kpi)
        self._detail_cache = [event.render() for event in self.gc_events]
        self._calculate_basic_info()
        self._calculate_kpi()
        self._diagnose()
        _logger.debug(
            "derived_info_calculated",
            collector=str(self.collector_type),
            events=len(self.gc_events),
            problems=len(self.problem_and_suggestion),
        )

    def _calculate_basic_info(self) -> None:
        info = BasicInfo(
            vm_options=str(self.vm_options) if self.vm_options is not None else NA,
            collector=str(self.collector_type),
            duration=self.duration,
        )
        parallel, concurrent = self.parallel_thread, self.concurrent_thread
        if self.vm_options is not None:
            if not is_known(parallel):
                parallel = self.vm_options.get_int_option("ParallelGCThreads") or UNKNOWN_INT
            if not is_known(concurrent):
                concurrent = self.vm_options.get_int_option("ConcGCThreads") or UNKNOWN_INT
            max_metaspace = self.vm_options.get_int_option("MaxMetaspaceSize")
            # metaspace capacity in events is reserved size and says little
            if max_metaspace is not None:
                info.metaspace_size = max_metaspace // 1024
        info.parallel_gc_thread = parallel
        info.concurrent_gc_thread = concurrent

        young, old, total = IntData(), IntData(), IntData()
        for event in self.gc_collection_events:
            young.add(event.get_collection_agg(MemoryArea.YOUNG).total)
            old.add(event.get_collection_agg(MemoryArea.OLD).total)
            total.add(event.get_collection_agg(MemoryArea.TOTAL).total)
        # generation sizes of region based heaps change all the time
        if not self.capabilities.region_based:
            if young.count():
                info.young_gen_size = int(young.average())
            if old.count():
                info.old_gen_size = int(old.average())
        if total.count():
            info.heap_size = int(total.average())
        self.basic_info = info

    def _calculate_kpi(self) -> None:
        pause = DoubleData()
        promotions = IntData()
        allocations = IntData()
        for event in self.gc_events:
            kind = event.event_type.pause
            if kind is GCPause.PAUSE:
                pause.add(event.pause)
            elif kind is GCPause.PARTIAL:
                for phase in event.phases:
                    if phase.event_type.pause is GCPause.PAUSE and not phase.event_type.nested:
                        pause.add(phase.duration)
            promotions.add(event.promotion)
        for event in self.gc_collection_events:
            allocations.add(event.allocation)

        if not self.is_pauseless:
            throughput = UNKNOWN_DOUBLE
            if pause.count() and self.duration_not_zero():
                throughput = max(0.0, 1 - pause.sum() / self.duration)
            _set_kpi(self.kpi, KPIType.THROUGHPUT, throughput)
        _set_kpi(self.kpi, KPIType.MAX_PAUSE, pause.max())

        if self.is_generational:
            speed = UNKNOWN_DOUBLE
            if promotions.count() and self.duration_not_zero():
                speed = MS_PER_SECOND * promotions.sum() / self.duration
            _set_kpi(self.kpi, KPIType.PROMOTION_SPEED, speed)
            _set_kpi(self.kpi, KPIType.PROMOTION_AVG, promotions.average())
            _set_kpi(self.kpi, KPIType.PROMOTION_MAX, promotions.max() if promotions.count() else UNKNOWN_DOUBLE)

        creation = UNKNOWN_DOUBLE
        rate = self.statistics[-1].get(ZGC_ALLOCATION_RATE) if self.statistics else None
        if rate is not None:
            creation = rate.avg_total * KB_PER_MB
        elif allocations.count() and self.duration_not_zero():
            creation = MS_PER_SECOND * allocations.sum() / self.duration
        _set_kpi(self.kpi, KPIType.OBJECT_CREATION_SPEED, creation)

    def _diagnose(self) -> None:
        from gclog_analyzer.diagnoser import GlobalDiagnoser

        try:
            self.diagnosis = GlobalDiagnoser(self, self.config).diagnose()
        except Exception:
            _logger.warning("diagnosis_failed", exc_info=True)
            self.diagnosis = None
            self.problem_and_suggestion = []
            return
        self.problem_and_suggestion = self.diagnosis.problem_and_suggestions()

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------

    def get_gc_details(
        self, page: int = 1, page_size: int = 20, detail_filter: GCDetailFilter | None = None
    ) -> GCDetailPage:
        """One page (1-based) of the cached event renderings that pass ``detail_filter``."""
        if page < 1 or page_size < 1:
            raise ValueError(f"invalid page request: page={page}, page_size={page_size}")
        if detail_filter is None:
            filtered = self._detail_cache
        else:
            filtered = [
                text
                for event, text in zip(self.gc_events, self._detail_cache)
                if detail_filter.matches(event)
            ]
        first = (page - 1) * page_size
        return GCDetailPage(
            page=page,
            page_size=page_size,
            total=len(filtered),
            items=filtered[first : first + page_size],
        )

    def get_gc_detail_metadata(self) -> GCLogDetailMetadata:
        causes = sorted({event.cause for event in self.gc_events if event.cause is not None})
        return GCLogDetailMetadata(
            event_types=[t.label for t in self.capabilities.parent_event_types],
            causes=causes,
            start_time=self.start_time,
            end_time=self.end_time,
            timestamp=self.reference_timestamp,
            collector=str(self.collector_type),
        )

    def get_graph_view(self, view_type: str, time_span: float, time_point: float) -> TimeLineChartView:
        from gclog_analyzer.graph import get_graph_view

        return get_graph_view(self, view_type, time_span, time_point)

    def get_recommend_max_heap_size(self) -> int:
        """ZGC: heap needed to keep allocating while one cycle runs, in KB."""
        if self._recommend_max_heap_size is not None:
            return self._recommend_max_heap_size
        recommended = UNKNOWN_INT
        index = 0
        for collection in self.gc_events:
            if collection.event_type is not GCEventType.ZGC_GARBAGE_COLLECTION:
                continue
            pre_used = collection.get_memory_item(MemoryArea.TOTAL).pre_used
            if not is_known(pre_used):
                continue
            while index < len(self.statistics) and self.statistics[index].start_time < collection.end_time:
                index += 1
            if index >= len(self.statistics):
                break
            cycle = self.statistics[index].get(ZGC_CYCLE_TIME)
            rate = self.statistics[index].get(ZGC_ALLOCATION_RATE)
            if cycle is None or rate is None:
                continue
            size = pre_used + (cycle.max10s / MS_PER_SECOND) * (rate.max10s * KB_PER_MB)
            recommended = max(recommended, int(size))
        self._recommend_max_heap_size = recommended
        return recommended

    def to_debug_string(self) -> str:
        lines: list[str] = []
        for event in self.gc_events:
            lines.append(str(event))
            lines.extend(f"         {phase}" for phase in event.phases)
        return "\n".join(lines)


def _no_pre_pass(model: GCModel) -> None:
    return None


def _zgc_pre_pass(model: GCModel) -> None:
    model.statistics.sort(key=lambda s: s.start_time)
    model.allocation_stalls.sort(key=lambda s: s.start_time)
    model.out_of_memories.sort(key=lambda o: o.start_time)


_PRE_PASSES: dict[GCCollectorType, Callable[[GCModel], None]] = {
    GCCollectorType.ZGC: _zgc_pre_pass,
}
