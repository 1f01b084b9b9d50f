"""Global diagnosis: find abnormal points, keep the most serious, merge them into incidents.

Rules are plain functions registered in :data:`GLOBAL_DIAGNOSE_RULES`. Each one
scans the finished model and reports findings through
:meth:`GlobalDiagnoser.add_abnormal_point`. A rule that raises is logged and
skipped; the other rules still run.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from gclog_analyzer.config import AnalysisConfig, TimeRange
from gclog_analyzer.event import (
    HEAP_MEMORY_TRIGGERED_FULL_GC_CAUSES,
    METASPACE_FULL_GC_CAUSES,
    GCCause,
    GCEvent,
    GCEventType,
    GCSpecialSituation,
)
from gclog_analyzer.log import get_logger
from gclog_analyzer.util import UNKNOWN_DOUBLE, format_kb, format_ms, is_known

if TYPE_CHECKING:
    from gclog_analyzer.model import GCModel, ProblemAndSuggestion

_logger = get_logger("diagnoser")

# ============================================================
# ABNORMAL POINTS
# ============================================================


class AbnormalSeverity(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    ULTRA = 4


class AbnormalType(StrEnum):
    METASPACE_FULL_GC = "Metaspace Full GC"
    HEAP_MEMORY_FULL_GC = "Heap Memory Full GC"
    SYSTEM_GC = "System.gc() Full GC"
    OUT_OF_MEMORY = "Out Of Memory"
    ALLOCATION_STALL = "Allocation Stall"
    TO_SPACE_EXHAUSTED = "To-space Exhausted"
    PROMOTION_FAILED = "Promotion Failed"
    CONCURRENT_MODE_FAILURE = "Concurrent Mode Failure"
    LONG_PAUSE = "Long Pause"
    LONG_YOUNG_GC_PAUSE = "Long Young GC Pause"


class AbnormalPoint(BaseModel):
    """A finding: what went wrong, how badly, and where in the log."""

    model_config = ConfigDict(frozen=True)

    type: AbnormalType
    severity: AbnormalSeverity
    start_time: float
    end_time: float = UNKNOWN_DOUBLE

    @classmethod
    def of_event(cls, abnormal_type: AbnormalType, event: GCEvent, severity: AbnormalSeverity) -> AbnormalPoint:
        return cls(type=abnormal_type, severity=severity, start_time=event.start_time, end_time=event.end_time)

    @property
    def latest_time(self) -> float:
        """End of the site, or its start when the end is unknown."""
        return max(self.start_time, self.end_time)


class Incident(BaseModel):
    """Most serious abnormal points merged over time."""

    type: AbnormalType
    severity: AbnormalSeverity
    start_time: float
    end_time: float
    count: int = 1

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)


def merge_time_ranges(
    points: Iterable[AbnormalPoint], threshold: float = 60_000
) -> list[Incident]:
    """Merge points whose sites lie within ``threshold`` ms of the running merge boundary.

    The boundary starts ``threshold`` after the first site and moves to
    ``threshold`` after every site merged into the incident.
    """
    incidents: list[Incident] = []
    current: Incident | None = None
    merge_point = 0.0
    for point in sorted(points, key=lambda p: p.start_time):
        latest = point.latest_time
        if current is not None and latest <= merge_point:
            merge_point = max(merge_point, latest + threshold)
            current.end_time = max(current.end_time, latest)
            current.count += 1
            continue
        if current is not None:
            incidents.append(current)
        current = Incident(type=point.type, severity=point.severity, start_time=point.start_time, end_time=latest)
        merge_point = latest + threshold
    if current is not None:
        incidents.append(current)
    return incidents


# ============================================================
# RESULT
# ============================================================


class MostSeriousProblemSummary(BaseModel):
    sites: list[TimeRange]
    problem: str
    suggestions: list[str] = Field(default_factory=list)


class GlobalAbnormalInfo(BaseModel):
    most_serious_problem: MostSeriousProblemSummary | None = None
    severity: AbnormalSeverity = AbnormalSeverity.NONE
    # problem name -> start time of every occurrence
    serious_problem: dict[str, list[float]] = Field(default_factory=dict)
    failed_rules: list[str] = Field(default_factory=list)

    def problem_and_suggestions(self) -> list[ProblemAndSuggestion]:
        from gclog_analyzer.model import ProblemAndSuggestion

        if self.most_serious_problem is None:
            return []
        return [
            ProblemAndSuggestion(
                problem=self.most_serious_problem.problem,
                suggestions=list(self.most_serious_problem.suggestions),
            )
        ]


# ============================================================
# DIAGNOSER
# ============================================================

DiagnoseRule = Callable[["GlobalDiagnoser"], None]


class GlobalDiagnoser:
    def __init__(self, model: GCModel, config: AnalysisConfig | None = None) -> None:
        self.model = model
        self.config = config or AnalysisConfig()
        self.all_problems: dict[str, list[float]] = {}
        self.most_serious_problems: list[AbnormalPoint] = []
        self.most_serious_severity = AbnormalSeverity.NONE
        self.failed_rules: list[str] = []

    def diagnose(self, rules: Iterable[tuple[str, DiagnoseRule]] | None = None) -> GlobalAbnormalInfo:
        for name, rule in rules if rules is not None else GLOBAL_DIAGNOSE_RULES:
            try:
                rule(self)
            except Exception:
                _logger.error("diagnose_rule_failed", rule=name, exc_info=True)
                self.failed_rules.append(name)
        incidents = merge_time_ranges(
            self.most_serious_problems, self.config.merge_abnormal_points_threshold_ms
        )
        return self._generate_result(incidents)

    def add_abnormal_point(self, point: AbnormalPoint) -> None:
        self.all_problems.setdefault(point.type.value, []).append(point.start_time)
        if point.severity > self.most_serious_severity:
            self.most_serious_problems.clear()
            self.most_serious_severity = point.severity
        if point.severity == self.most_serious_severity:
            self.most_serious_problems.append(point)

    def events_in_range(self, events: Iterable[GCEvent]) -> Iterator[GCEvent]:
        time_range = self.config.time_range
        for event in events:
            if time_range is None or time_range.contains(event.start_time):
                yield event

    def _generate_result(self, incidents: list[Incident]) -> GlobalAbnormalInfo:
        summary = None
        if incidents:
            incidents.sort(key=lambda incident: incident.duration, reverse=True)
            first = incidents[0]
            summary = MostSeriousProblemSummary(
                sites=[incident.to_time_range() for incident in incidents[: self.config.most_serious_sites_limit]],
                problem=first.type.value,
                suggestions=generate_suggestions(first.type, self.model),
            )
        return GlobalAbnormalInfo(
            most_serious_problem=summary,
            severity=self.most_serious_severity,
            serious_problem=self.all_problems,
            failed_rules=self.failed_rules,
        )


# ============================================================
# RULES
# ============================================================


def full_gc_rule(diagnoser: GlobalDiagnoser) -> None:
    for event in diagnoser.events_in_range(diagnoser.model.gc_events):
        if event.event_type is not GCEventType.FULL_GC or event.cause is None:
            continue
        if event.cause in METASPACE_FULL_GC_CAUSES:
            diagnoser.add_abnormal_point(
                AbnormalPoint.of_event(AbnormalType.METASPACE_FULL_GC, event, AbnormalSeverity.ULTRA)
            )
        elif event.cause in HEAP_MEMORY_TRIGGERED_FULL_GC_CAUSES:
            diagnoser.add_abnormal_point(
                AbnormalPoint.of_event(AbnormalType.HEAP_MEMORY_FULL_GC, event, AbnormalSeverity.ULTRA)
            )
        elif event.cause == GCCause.SYSTEM_GC:
            diagnoser.add_abnormal_point(AbnormalPoint.of_event(AbnormalType.SYSTEM_GC, event, AbnormalSeverity.HIGH))


_SITUATION_TYPES = {
    GCSpecialSituation.TO_SPACE_EXHAUSTED: AbnormalType.TO_SPACE_EXHAUSTED,
    GCSpecialSituation.PROMOTION_FAILED: AbnormalType.PROMOTION_FAILED,
    GCSpecialSituation.CONCURRENT_MODE_FAILURE: AbnormalType.CONCURRENT_MODE_FAILURE,
}


def evacuation_failure_rule(diagnoser: GlobalDiagnoser) -> None:
    for event in diagnoser.events_in_range(diagnoser.model.gc_events):
        for situation in event.special_situations:
            abnormal_type = _SITUATION_TYPES.get(situation)
            if abnormal_type is not None:
                diagnoser.add_abnormal_point(AbnormalPoint.of_event(abnormal_type, event, AbnormalSeverity.HIGH))


def long_pause_rule(diagnoser: GlobalDiagnoser) -> None:
    thresholds = diagnoser.config.thresholds
    for event in diagnoser.events_in_range(diagnoser.model.gc_events):
        pause = event.pause
        if not is_known(pause):
            continue
        if pause > thresholds.long_pause_ms:
            diagnoser.add_abnormal_point(AbnormalPoint.of_event(AbnormalType.LONG_PAUSE, event, AbnormalSeverity.MEDIUM))
        elif event.is_young and pause > thresholds.long_young_pause_ms:
            diagnoser.add_abnormal_point(
                AbnormalPoint.of_event(AbnormalType.LONG_YOUNG_GC_PAUSE, event, AbnormalSeverity.LOW)
            )


def allocation_stall_rule(diagnoser: GlobalDiagnoser) -> None:
    stalls = list(diagnoser.events_in_range(diagnoser.model.allocation_stalls))
    if len(stalls) < diagnoser.config.thresholds.allocation_stall_count:
        return
    for stall in stalls:
        diagnoser.add_abnormal_point(AbnormalPoint.of_event(AbnormalType.ALLOCATION_STALL, stall, AbnormalSeverity.HIGH))


def out_of_memory_rule(diagnoser: GlobalDiagnoser) -> None:
    time_range = diagnoser.config.time_range
    for oom in diagnoser.model.out_of_memories:
        if time_range is not None and not time_range.contains(oom.start_time):
            continue
        diagnoser.add_abnormal_point(
            AbnormalPoint(type=AbnormalType.OUT_OF_MEMORY, severity=AbnormalSeverity.ULTRA, start_time=oom.start_time)
        )


def bad_kpi_rule(diagnoser: GlobalDiagnoser) -> None:
    """Flag KPIs outside a healthy range; these are not abnormal points."""
    from gclog_analyzer.model import KPIType

    thresholds = diagnoser.config.thresholds
    kpi = diagnoser.model.kpi
    throughput = kpi.get(KPIType.THROUGHPUT.value)
    if throughput is not None and is_known(throughput.value):
        throughput.bad = throughput.value * 100 < thresholds.throughput_warning_percentage
    max_pause = kpi.get(KPIType.MAX_PAUSE.value)
    if max_pause is not None and is_known(max_pause.value):
        max_pause.bad = max_pause.value > thresholds.long_pause_ms


GLOBAL_DIAGNOSE_RULES: list[tuple[str, DiagnoseRule]] = [
    ("full_gc", full_gc_rule),
    ("evacuation_failure", evacuation_failure_rule),
    ("long_pause", long_pause_rule),
    ("allocation_stall", allocation_stall_rule),
    ("out_of_memory", out_of_memory_rule),
    ("bad_kpi", bad_kpi_rule),
]

# ============================================================
# SUGGESTIONS
# ============================================================


def generate_suggestions(abnormal_type: AbnormalType, model: GCModel) -> list[str]:
    from gclog_analyzer.model import KPIType

    suggestions: list[str] = []
    promotion_speed = model.get_kpi_value(KPIType.PROMOTION_SPEED)
    creation_speed = model.get_kpi_value(KPIType.OBJECT_CREATION_SPEED)
    if abnormal_type is AbnormalType.METASPACE_FULL_GC:
        suggestions.append("Check for class loader leaks and dynamically generated classes.")
        if is_known(model.basic_info.metaspace_size):
            suggestions.append(
                f"Raise -XX:MaxMetaspaceSize above {format_kb(model.basic_info.metaspace_size)} "
                "if the class count is legitimately high."
            )
        else:
            suggestions.append("Set -XX:MetaspaceSize and -XX:MaxMetaspaceSize explicitly.")
    elif abnormal_type in (
        AbnormalType.HEAP_MEMORY_FULL_GC,
        AbnormalType.PROMOTION_FAILED,
        AbnormalType.TO_SPACE_EXHAUSTED,
        AbnormalType.CONCURRENT_MODE_FAILURE,
    ):
        suggestions.append("Check for a memory leak by comparing heap usage after successive full GCs.")
        if is_known(promotion_speed):
            suggestions.append(
                f"Objects are promoted at {format_kb(int(promotion_speed))}/s; "
                "enlarge the young generation so short-lived objects die there."
            )
        if is_known(creation_speed):
            suggestions.append(
                f"Objects are allocated at {format_kb(int(creation_speed))}/s; "
                "enlarge the heap or reduce allocation on hot paths."
            )
        else:
            suggestions.append("Enlarge the heap (-Xmx) if live data legitimately grows.")
        if abnormal_type is AbnormalType.CONCURRENT_MODE_FAILURE:
            suggestions.append("Start the concurrent cycle earlier with -XX:CMSInitiatingOccupancyFraction.")
        if abnormal_type is AbnormalType.TO_SPACE_EXHAUSTED:
            suggestions.append("Increase -XX:G1ReservePercent to keep room for evacuation.")
    elif abnormal_type is AbnormalType.SYSTEM_GC:
        suggestions.append("Find the caller of System.gc() or disable it with -XX:+DisableExplicitGC.")
        suggestions.append("If direct buffers depend on it, use -XX:+ExplicitGCInvokesConcurrent instead.")
    elif abnormal_type is AbnormalType.ALLOCATION_STALL:
        suggestions.append("Enlarge the heap so a collection cycle finishes before memory runs out.")
        recommended = model.get_recommend_max_heap_size()
        if is_known(recommended):
            suggestions.append(f"A max heap of at least {format_kb(recommended)} is recommended.")
        suggestions.append("Give ZGC more concurrent threads with -XX:ConcGCThreads.")
    elif abnormal_type is AbnormalType.OUT_OF_MEMORY:
        suggestions.append("Capture a heap dump with -XX:+HeapDumpOnOutOfMemoryError and look for leaks.")
        suggestions.append("Enlarge the heap if live data legitimately exceeds it.")
    elif abnormal_type in (AbnormalType.LONG_PAUSE, AbnormalType.LONG_YOUNG_GC_PAUSE):
        max_pause = model.get_kpi_value(KPIType.MAX_PAUSE)
        if is_known(max_pause):
            suggestions.append(f"The longest pause took {format_ms(max_pause)}.")
        suggestions.append("Lower -XX:MaxGCPauseMillis or shrink the young generation to shorten pauses.")
        suggestions.append("Check user/sys/real CPU times for swapping or CPU starvation.")
    return suggestions
