"""GC event model: event types, causes, memory items and the event tree."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict, Field

from gclog_analyzer.util import (
    UNKNOWN_DOUBLE,
    UNKNOWN_INT,
    format_kb,
    format_ms,
    is_known,
)

# ============================================================
# COLLECTORS
# ============================================================


class GCCollectorType(StrEnum):
    G1 = "G1"
    CMS = "CMS"
    PARALLEL = "Parallel"
    SERIAL = "Serial"
    ZGC = "ZGC"
    UNKNOWN = "Unknown"


class GCLogStyle(StrEnum):
    """JDK8 ``-XX:+PrintGCDetails`` text vs JDK9+ unified ``-Xlog`` text."""

    PRE_UNIFIED = "pre-unified"
    UNIFIED = "unified"


# ============================================================
# EVENT TYPES
# ============================================================


class GCPause(StrEnum):
    """How much of an event is stop-the-world."""

    PAUSE = "pause"
    CONCURRENT = "concurrent"
    PARTIAL = "partial"


class GCEventLevel(StrEnum):
    EVENT = "event"
    PHASE = "phase"


class GCEventType(Enum):
    """Every pause, cycle and phase kind the parsers can produce.

    Each member carries its display label, its pause kind and its level.
    ``nested`` marks sub-steps reported inside another pause phase; their
    time is already part of the enclosing pause and must not be counted
    twice.
    """

    # top level
    YOUNG_GC = ("Young GC", GCPause.PAUSE, GCEventLevel.EVENT)
    G1_MIXED_GC = ("Mixed GC", GCPause.PAUSE, GCEventLevel.EVENT)
    FULL_GC = ("Full GC", GCPause.PAUSE, GCEventLevel.EVENT)
    G1_CONCURRENT_CYCLE = ("Concurrent Mark Cycle", GCPause.PARTIAL, GCEventLevel.EVENT)
    CMS_CONCURRENT_MARK_SWEPT = ("CMS", GCPause.PARTIAL, GCEventLevel.EVENT)
    ZGC_GARBAGE_COLLECTION = ("ZGC Garbage Collection", GCPause.PARTIAL, GCEventLevel.EVENT)
    ZGC_ALLOCATION_STALL = ("Allocation Stall", GCPause.PAUSE, GCEventLevel.EVENT)
    SAFEPOINT = ("Safepoint", GCPause.PAUSE, GCEventLevel.EVENT)

    # G1 unified young/mixed phases
    G1_COLLECT_PRE_EVACUATION = ("Pre Evacuate Collection Set", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_COLLECT_EVACUATION = ("Evacuate Collection Set", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_COLLECT_POST_EVACUATION = ("Post Evacuate Collection Set", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_COLLECT_OTHER = ("Other", GCPause.PAUSE, GCEventLevel.PHASE)

    # G1 legacy young/mixed phases
    G1_EXT_ROOT_SCANNING = ("Ext Root Scanning", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_UPDATE_RS = ("Update RS", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_SCAN_RS = ("Scan RS", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_CODE_ROOT_SCANNING = ("Code Root Scanning", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_OBJECT_COPY = ("Object Copy", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_TERMINATION = ("Termination", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_CODE_ROOT_FIXUP = ("Code Root Fixup", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_CODE_ROOT_PURGE = ("Code Root Purge", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_CLEAR_CT = ("Clear CT", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_CHOOSE_CSET = ("Choose CSet", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_REF_ENQ = ("Ref Enq", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_REDIRTY_CARDS = ("Redirty Cards", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_HUMONGOUS_REGISTER = ("Humongous Register", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_HUMONGOUS_RECLAIM = ("Humongous Reclaim", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_FREE_CSET = ("Free CSet", GCPause.PAUSE, GCEventLevel.PHASE)

    # G1 concurrent cycle
    G1_CONCURRENT_CLEAR_CLAIMED_MARKS = ("Concurrent Clear Claimed Marks", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_SCAN_ROOT_REGIONS = ("Concurrent Scan Root Regions", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_MARK = ("Concurrent Mark", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_MARK_FROM_ROOTS = ("Concurrent Mark From Roots", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_PRECLEAN = ("Concurrent Preclean", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_MARK_ABORT = ("Concurrent Mark Abort", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_MARK_RESET_FOR_OVERFLOW = ("Concurrent Mark Reset For Overflow", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_REMARK = ("Pause Remark", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_FINALIZE_MARKING = ("Finalize Marking", GCPause.PAUSE, GCEventLevel.PHASE, True)
    G1_GC_REFPROC = ("Reference Processing", GCPause.PAUSE, GCEventLevel.PHASE, True)
    G1_UNLOADING = ("Unloading", GCPause.PAUSE, GCEventLevel.PHASE, True)
    G1_CONCURRENT_REBUILD_REMEMBERED_SETS = ("Concurrent Rebuild Remembered Sets", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_PAUSE_CLEANUP = ("Pause Cleanup", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_CONCURRENT_CLEANUP_FOR_NEXT_MARK = ("Concurrent Cleanup For Next Mark", GCPause.CONCURRENT, GCEventLevel.PHASE)
    G1_CONCURRENT_CLEANUP = ("Concurrent Cleanup", GCPause.CONCURRENT, GCEventLevel.PHASE)

    # G1 full
    G1_MARK_LIVE_OBJECTS = ("Mark Live Objects", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_PREPARE_FOR_COMPACTION = ("Prepare For Compaction", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_ADJUST_POINTERS = ("Adjust Pointers", GCPause.PAUSE, GCEventLevel.PHASE)
    G1_COMPACT_HEAP = ("Compact Heap", GCPause.PAUSE, GCEventLevel.PHASE)

    # serial full, also used by CMS foreground collections
    SERIAL_MARK_LIFE_OBJECTS = ("Serial Mark Live Objects", GCPause.PAUSE, GCEventLevel.PHASE)
    SERIAL_COMPUTE_NEW_OBJECT_ADDRESSES = ("Compute New Object Addresses", GCPause.PAUSE, GCEventLevel.PHASE)
    SERIAL_ADJUST_POINTERS = ("Serial Adjust Pointers", GCPause.PAUSE, GCEventLevel.PHASE)
    SERIAL_MOVE_OBJECTS = ("Move Objects", GCPause.PAUSE, GCEventLevel.PHASE)

    # parallel full
    PARALLEL_PHASE_MARKING = ("Marking Phase", GCPause.PAUSE, GCEventLevel.PHASE)
    PARALLEL_PHASE_SUMMARY = ("Summary Phase", GCPause.PAUSE, GCEventLevel.PHASE)
    PARALLEL_PHASE_ADJUST_ROOTS = ("Adjust Roots", GCPause.PAUSE, GCEventLevel.PHASE)
    PARALLEL_PHASE_COMPACTION = ("Compaction Phase", GCPause.PAUSE, GCEventLevel.PHASE)
    PARALLEL_PHASE_POST_COMPACT = ("Post Compact", GCPause.PAUSE, GCEventLevel.PHASE)

    # CMS cycle
    CMS_INITIAL_MARK = ("Initial Mark", GCPause.PAUSE, GCEventLevel.PHASE)
    CMS_CONCURRENT_MARK = ("CMS Concurrent Mark", GCPause.CONCURRENT, GCEventLevel.PHASE)
    CMS_CONCURRENT_PRECLEAN = ("CMS Concurrent Preclean", GCPause.CONCURRENT, GCEventLevel.PHASE)
    CMS_CONCURRENT_ABORTABLE_PRECLEAN = ("CMS Concurrent Abortable Preclean", GCPause.CONCURRENT, GCEventLevel.PHASE)
    CMS_FINAL_REMARK = ("Final Remark", GCPause.PAUSE, GCEventLevel.PHASE)
    CMS_RESCAN = ("Rescan", GCPause.PAUSE, GCEventLevel.PHASE, True)
    WEAK_REFS_PROCESSING = ("Weak Refs Processing", GCPause.PAUSE, GCEventLevel.PHASE, True)
    CLASS_UNLOADING = ("Class Unloading", GCPause.PAUSE, GCEventLevel.PHASE, True)
    SCRUB_SYMBOL_TABLE = ("Scrub Symbol Table", GCPause.PAUSE, GCEventLevel.PHASE, True)
    SCRUB_STRING_TABLE = ("Scrub String Table", GCPause.PAUSE, GCEventLevel.PHASE, True)
    CMS_CONCURRENT_SWEEP = ("CMS Concurrent Sweep", GCPause.CONCURRENT, GCEventLevel.PHASE)
    CMS_CONCURRENT_RESET = ("CMS Concurrent Reset", GCPause.CONCURRENT, GCEventLevel.PHASE)

    # ZGC cycle
    ZGC_PAUSE_MARK_START = ("Pause Mark Start", GCPause.PAUSE, GCEventLevel.PHASE)
    ZGC_CONCURRENT_MARK = ("ZGC Concurrent Mark", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_CONCURRENT_MARK_CONTINUE = ("Concurrent Mark Continue", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_PAUSE_MARK_END = ("Pause Mark End", GCPause.PAUSE, GCEventLevel.PHASE)
    ZGC_CONCURRENT_NONREF = ("Concurrent Process Non-Strong References", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_CONCURRENT_RESET_RELOC_SET = ("Concurrent Reset Relocation Set", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_CONCURRENT_DETATCHED_PAGES = ("Concurrent Destroy Detached Pages", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_CONCURRENT_SELECT_RELOC_SET = ("Concurrent Select Relocation Set", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_CONCURRENT_PREPARE_RELOC_SET = ("Concurrent Prepare Relocation Set", GCPause.CONCURRENT, GCEventLevel.PHASE)
    ZGC_PAUSE_RELOCATE_START = ("Pause Relocate Start", GCPause.PAUSE, GCEventLevel.PHASE)
    ZGC_CONCURRENT_RELOCATE = ("Concurrent Relocate", GCPause.CONCURRENT, GCEventLevel.PHASE)

    def __init__(
        self, label: str, pause: GCPause, level: GCEventLevel, nested: bool = False
    ) -> None:
        self.label = label
        self.pause = pause
        self.level = level
        self.nested = nested

    @property
    def is_young(self) -> bool:
        return self in (GCEventType.YOUNG_GC, GCEventType.G1_MIXED_GC)

    @property
    def is_full(self) -> bool:
        return self in (GCEventType.FULL_GC, GCEventType.ZGC_GARBAGE_COLLECTION)

    @property
    def is_old(self) -> bool:
        return self in (GCEventType.G1_CONCURRENT_CYCLE, GCEventType.CMS_CONCURRENT_MARK_SWEPT)

    @property
    def has_promotion(self) -> bool:
        return self is GCEventType.YOUNG_GC

    @property
    def interval_type(self) -> GCEventType:
        """Young GC variants share one interval series."""
        return GCEventType.YOUNG_GC if self.is_young else self

    def __str__(self) -> str:
        return self.label


# ============================================================
# CAUSES AND SPECIAL SITUATIONS
# ============================================================


class GCCause(StrEnum):
    """Causes as the JVM spells them. Parsers store the raw string."""

    ALLOCATION_FAILURE = "Allocation Failure"
    METADATA_GENERATION_THRESHOLD = "Metadata GC Threshold"
    METADATA_CLEAR_SOFT_REFERENCES = "Metadata GC Clear Soft References"
    LAST_DITCH_COLLECTION = "Last ditch collection"
    G1_EVACUATION_PAUSE = "G1 Evacuation Pause"
    G1_HUMONGOUS_ALLOCATION = "G1 Humongous Allocation"
    G1_PERIODIC_COLLECTION = "G1 Periodic Collection"
    G1_PREVENTIVE_COLLECTION = "G1 Preventive Collection"
    ERGONOMICS = "Ergonomics"
    SYSTEM_GC = "System.gc()"
    HEAP_DUMP = "Heap Dump Initiated GC"
    HEAP_INSPECTION = "Heap Inspection Initiated GC"
    GC_LOCKER = "GCLocker Initiated GC"
    JVMTI_FORCE_GC = "JvmtiEnv ForceGarbageCollection"
    PROMOTION_FAILED = "Promotion Failed"
    CMS_INITIAL_MARK = "CMS Initial Mark"
    CMS_FINAL_REMARK = "CMS Final Remark"
    PROACTIVE = "Proactive"
    WARMUP = "Warmup"
    TIMER = "Timer"
    ALLOCATION_RATE = "Allocation Rate"
    ALLOCATION_STALL = "Allocation Stall"
    HIGH_USAGE = "High Usage"


LEGACY_SYSTEM_GC_CAUSE = "System.gc"

METASPACE_FULL_GC_CAUSES: frozenset[str] = frozenset(
    {
        GCCause.METADATA_GENERATION_THRESHOLD,
        GCCause.METADATA_CLEAR_SOFT_REFERENCES,
        GCCause.LAST_DITCH_COLLECTION,
    }
)

HEAP_MEMORY_TRIGGERED_FULL_GC_CAUSES: frozenset[str] = frozenset(
    {
        GCCause.ALLOCATION_FAILURE,
        GCCause.G1_EVACUATION_PAUSE,
        GCCause.G1_HUMONGOUS_ALLOCATION,
        GCCause.G1_PREVENTIVE_COLLECTION,
        GCCause.ERGONOMICS,
        GCCause.GC_LOCKER,
        GCCause.PROMOTION_FAILED,
        GCCause.ALLOCATION_RATE,
        GCCause.ALLOCATION_STALL,
        GCCause.HIGH_USAGE,
    }
)


class GCSpecialSituation(StrEnum):
    """Abnormal conditions reported alongside a pause, never its cause."""

    TO_SPACE_EXHAUSTED = "To-space Exhausted"
    PROMOTION_FAILED = "Promotion Failed"
    CONCURRENT_MODE_FAILURE = "Concurrent Mode Failure"
    CONCURRENT_MODE_INTERRUPTED = "Concurrent Mode Interrupted"


# ============================================================
# MEMORY
# ============================================================


class MemoryArea(StrEnum):
    YOUNG = "young"
    EDEN = "eden"
    SURVIVOR = "survivor"
    OLD = "old"
    HUMONGOUS = "humongous"
    METASPACE = "metaspace"
    TOTAL = "total"


def _add(a: int, b: int) -> int:
    return a + b if is_known(a) and is_known(b) else UNKNOWN_INT


def _sub(a: int, b: int) -> int:
    return a - b if is_known(a) and is_known(b) else UNKNOWN_INT


class GCMemoryItem(BaseModel):
    """Usage of one memory area around a collection, in KB.

    Any field may be UNKNOWN. Arithmetic is fieldwise: a field of the result
    is known only when both operands know it.
    """

    model_config = ConfigDict(frozen=True)

    area: MemoryArea
    pre_used: int = UNKNOWN_INT
    post_used: int = UNKNOWN_INT
    total: int = UNKNOWN_INT

    @classmethod
    def unknown(cls, area: MemoryArea) -> GCMemoryItem:
        return cls(area=area)

    def is_empty(self) -> bool:
        return not (is_known(self.pre_used) or is_known(self.post_used) or is_known(self.total))

    def merge(self, other: GCMemoryItem) -> GCMemoryItem:
        return GCMemoryItem(
            area=self.area,
            pre_used=_add(self.pre_used, other.pre_used),
            post_used=_add(self.post_used, other.post_used),
            total=_add(self.total, other.total),
        )

    def merge_if_present(self, other: GCMemoryItem) -> GCMemoryItem:
        return self if other.is_empty() else self.merge(other)

    def subtract(self, other: GCMemoryItem) -> GCMemoryItem:
        return GCMemoryItem(
            area=self.area,
            pre_used=_sub(self.pre_used, other.pre_used),
            post_used=_sub(self.post_used, other.post_used),
            total=_sub(self.total, other.total),
        )

    def subtract_if_present(self, other: GCMemoryItem) -> GCMemoryItem:
        return self if other.is_empty() else self.subtract(other)

    def update_if_absent(self, other: GCMemoryItem) -> GCMemoryItem:
        """Fill this item's unknown fields from ``other``; known fields stay."""
        return GCMemoryItem(
            area=self.area,
            pre_used=self.pre_used if is_known(self.pre_used) else other.pre_used,
            post_used=self.post_used if is_known(self.post_used) else other.post_used,
            total=self.total if is_known(self.total) else other.total,
        )

    def with_area(self, area: MemoryArea) -> GCMemoryItem:
        return self.model_copy(update={"area": area})

    def memory_reduction(self) -> int:
        return _sub(self.pre_used, self.post_used)

    def __str__(self) -> str:
        return (
            f"{self.area.capitalize()}: {format_kb(self.pre_used)}->"
            f"{format_kb(self.post_used)}({format_kb(self.total)})"
        )


class CpuTime(BaseModel):
    """User/sys/real CPU time in milliseconds."""

    model_config = ConfigDict(frozen=True)

    user: float
    sys: float
    real: float

    def __str__(self) -> str:
        return f"User={self.user / 1000:.2f}s Sys={self.sys / 1000:.2f}s Real={self.real / 1000:.2f}s"


class ReferenceGC(BaseModel):
    """Reference processing reported by -XX:+PrintReferenceGC."""

    soft_reference_start_time: float = UNKNOWN_DOUBLE
    soft_reference_pause_time: float = UNKNOWN_DOUBLE
    soft_reference_count: int = UNKNOWN_INT
    weak_reference_start_time: float = UNKNOWN_DOUBLE
    weak_reference_pause_time: float = UNKNOWN_DOUBLE
    weak_reference_count: int = UNKNOWN_INT
    final_reference_start_time: float = UNKNOWN_DOUBLE
    final_reference_pause_time: float = UNKNOWN_DOUBLE
    final_reference_count: int = UNKNOWN_INT
    phantom_reference_start_time: float = UNKNOWN_DOUBLE
    phantom_reference_pause_time: float = UNKNOWN_DOUBLE
    phantom_reference_count: int = UNKNOWN_INT
    phantom_reference_freed_count: int = UNKNOWN_INT
    jni_weak_reference_start_time: float = UNKNOWN_DOUBLE
    jni_weak_reference_pause_time: float = UNKNOWN_DOUBLE


# ============================================================
# EVENTS
# ============================================================


def format_timestamp(timestamp: float) -> str:
    if not is_known(timestamp):
        return ""
    moment = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def unknown_memory() -> dict[MemoryArea, GCMemoryItem]:
    return {area: GCMemoryItem.unknown(area) for area in MemoryArea}


class GCEvent(BaseModel):
    """One top-level collection or one of its phases.

    Times are milliseconds relative to the start of the log. A top-level
    event owns its phases; phases are appended in log order and never
    reordered.
    """

    event_type: GCEventType
    gcid: int = UNKNOWN_INT
    start_time: float = UNKNOWN_DOUBLE
    duration: float = UNKNOWN_DOUBLE
    interval: float = UNKNOWN_DOUBLE
    timestamp: float = UNKNOWN_DOUBLE
    cause: str | None = None
    thread_name: str | None = None
    special_situations: list[GCSpecialSituation] = Field(default_factory=list)
    phases: list[GCEvent] = Field(default_factory=list)
    # every area is always present; unreported areas hold UNKNOWN items
    memory: dict[MemoryArea, GCMemoryItem] = Field(default_factory=unknown_memory)
    collection_agg: dict[MemoryArea, GCMemoryItem] = Field(default_factory=dict)
    cpu_time: CpuTime | None = None
    reference_gc: ReferenceGC | None = None
    promotion: int = UNKNOWN_INT
    allocation: int = UNKNOWN_INT
    reclamation: int = UNKNOWN_INT

    @property
    def end_time(self) -> float:
        if is_known(self.start_time) and is_known(self.duration):
            return self.start_time + self.duration
        return UNKNOWN_DOUBLE

    @property
    def level(self) -> GCEventLevel:
        return self.event_type.level

    @property
    def pause(self) -> float:
        """Stop-the-world time of this event."""
        kind = self.event_type.pause
        if kind is GCPause.PAUSE:
            return self.duration
        if kind is GCPause.CONCURRENT:
            return 0.0
        pause = 0.0
        for phase in self.phases:
            if phase.event_type.pause is not GCPause.PAUSE or phase.event_type.nested:
                continue
            if not is_known(phase.duration):
                return UNKNOWN_DOUBLE
            pause += phase.duration
        return pause

    @property
    def has_phases(self) -> bool:
        return bool(self.phases)

    @property
    def is_young(self) -> bool:
        return self.event_type.is_young

    @property
    def is_full(self) -> bool:
        return self.event_type.is_full

    @property
    def is_old(self) -> bool:
        return self.event_type.is_old

    def add_phase(self, phase: GCEvent) -> None:
        self.phases.append(phase)

    def get_last_phase_of_type(self, event_type: GCEventType) -> GCEvent | None:
        for phase in reversed(self.phases):
            if phase.event_type is event_type:
                return phase
        return None

    def get_phases_of_type(self, event_type: GCEventType) -> list[GCEvent]:
        return [phase for phase in self.phases if phase.event_type is event_type]

    def get_memory_item(self, area: MemoryArea) -> GCMemoryItem:
        """Memory reported by the log for ``area``; an all-UNKNOWN item if none."""
        return self.memory[area]

    def set_memory_item(self, item: GCMemoryItem) -> None:
        self.memory[item.area] = item

    def get_collection_agg(self, area: MemoryArea) -> GCMemoryItem:
        """Reconciled memory for ``area`` after derived-info computation."""
        return self.collection_agg.get(area) or GCMemoryItem.unknown(area)

    def has_memory_info(self) -> bool:
        return any(not item.is_empty() for item in self.memory.values())

    def add_special_situation(self, situation: GCSpecialSituation) -> None:
        if situation not in self.special_situations:
            self.special_situations.append(situation)

    def has_special_situation(self, situation: GCSpecialSituation) -> bool:
        return situation in self.special_situations

    def render(self) -> str:
        """Single-line description used by the detail view."""
        parts: list[str] = []
        if is_known(self.timestamp):
            parts.append(format_timestamp(self.timestamp))
        if is_known(self.start_time):
            parts.append(f"[{self.start_time / 1000:.3f}s]")
        if self.gcid != UNKNOWN_INT:
            parts.append(f"GC({self.gcid})")
        title = self.event_type.label
        if self.cause:
            title += f" ({self.cause})"
        if self.thread_name:
            title += f" ({self.thread_name})"
        for situation in self.special_situations:
            title += f" ({situation})"
        parts.append(title)

        details: list[str] = []
        if self.event_type.pause is not GCPause.CONCURRENT and self.level is GCEventLevel.EVENT:
            details.append(f"pause={format_ms(self.pause)}")
        details.append(f"duration={format_ms(self.duration)}")
        if is_known(self.interval):
            details.append(f"interval={format_ms(self.interval)}")
        for area in MemoryArea:
            item = self.collection_agg.get(area) or self.memory[area]
            if not item.is_empty():
                details.append(str(item))
        if is_known(self.promotion):
            details.append(f"promotion={format_kb(self.promotion)}")
        if is_known(self.allocation):
            details.append(f"allocation={format_kb(self.allocation)}")
        if is_known(self.reclamation):
            details.append(f"reclamation={format_kb(self.reclamation)}")
        if self.cpu_time is not None:
            details.append(str(self.cpu_time))
        return " ".join(parts) + ": " + ", ".join(details)

    def __str__(self) -> str:
        return self.render()


class Safepoint(BaseModel):
    """Application threads stopped at a safepoint."""

    start_time: float
    duration: float
    time_to_enter: float = UNKNOWN_DOUBLE

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


class OutOfMemory(BaseModel):
    start_time: float
    thread_name: str
