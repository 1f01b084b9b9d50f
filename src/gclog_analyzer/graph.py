"""Windowed time-series views over a finished :class:`GCModel`."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from gclog_analyzer.event import GCCollectorType, GCEvent, GCEventType, GCPause, MemoryArea
from gclog_analyzer.model import ZGC_ALLOCATION_RATE
from gclog_analyzer.util import KB_PER_MB, MS_PER_SECOND, is_known

if TYPE_CHECKING:
    from gclog_analyzer.model import GCModel

# allowed spans (ms) and the bucket width each one uses
BUCKET_INTERVALS: dict[int, float] = {
    300_000: 1 * MS_PER_SECOND,
    3_600_000: 30 * MS_PER_SECOND,
    10_800_000: 60 * MS_PER_SECOND,
    43_200_000: 120 * MS_PER_SECOND,
    259_200_000: 600 * MS_PER_SECOND,
}

LABEL_YOUNG = "youngRegion"
LABEL_OLD = "oldRegion"
LABEL_HUMONGOUS = "humongousRegion"
LABEL_HEAP_TOTAL = "totalHeap"
LABEL_HEAP_MAX = "heapMax"
LABEL_METASPACE = "metaspaceRegion"
LABEL_METASPACE_MAX = "metaspaceMax"
LABEL_ALLOCATION = "allocation"
LABEL_RECLAMATION = "reclamation"
LABEL_PROMOTION = "promotion"
LABEL_DURATION_PERCENTAGE = "gcDurationPercentage"


class ChartPoint(BaseModel):
    time: float
    value: float


class TimeLineChartView(BaseModel):
    """Series of points per label inside ``[start_time, end_time]``.

    Aggregated views carry one point per non-empty bucket, placed at the
    bucket start; preserved views carry every data point as recorded.
    """

    start_time: float
    end_time: float
    labels: list[str]
    bucket_interval: float | None = None
    series: dict[str, list[ChartPoint]] = Field(default_factory=dict)


def _aggregate(
    start: float,
    end: float,
    labels: list[str],
    points: list[tuple[str, float, float]],
    bucket_interval: float,
    average_by_time: bool = False,
) -> TimeLineChartView:
    """Sum values per bucket; ``average_by_time`` turns the sum into a per-second rate."""
    buckets: dict[str, dict[int, float]] = {label: {} for label in labels}
    for label, time, value in points:
        index = int((time - start) // bucket_interval)
        per_label = buckets.setdefault(label, {})
        per_label[index] = per_label.get(index, 0.0) + value
    divisor = bucket_interval / MS_PER_SECOND if average_by_time else 1.0
    series = {
        label: [
            ChartPoint(time=start + index * bucket_interval, value=total / divisor)
            for index, total in sorted(per_label.items())
        ]
        for label, per_label in buckets.items()
    }
    return TimeLineChartView(
        start_time=start, end_time=end, labels=labels, bucket_interval=bucket_interval, series=series
    )


def _preserve(
    start: float, end: float, labels: list[str], points: list[tuple[str, float, float]]
) -> TimeLineChartView:
    series: dict[str, list[ChartPoint]] = {label: [] for label in labels}
    for label, time, value in points:
        series.setdefault(label, []).append(ChartPoint(time=time, value=value))
    for values in series.values():
        values.sort(key=lambda point: point.time)
    return TimeLineChartView(start_time=start, end_time=end, labels=labels, series=series)


def _in_window(events: list[GCEvent], start: float, end: float) -> Iterator[GCEvent]:
    for event in events:
        event_end = event.end_time
        if event_end < start:
            continue
        if event_end > end:
            break
        yield event


# ============================================================
# VIEWS
# ============================================================


def _count_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    labels = [t.label for t in model.capabilities.parent_event_types]
    points = [(e.event_type.label, e.end_time, 1.0) for e in _in_window(model.gc_events, start, end)]
    return _aggregate(start, end, labels, points, bucket)


def _pause_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    pause_types = model.capabilities.pause_event_types
    labels = [t.label for t in pause_types]
    points: list[tuple[str, float, float]] = []
    for event in _in_window(model.gc_events, start, end):
        kind = event.event_type.pause
        if kind is GCPause.PAUSE:
            points.append((event.event_type.label, event.end_time, event.pause))
        elif kind is GCPause.PARTIAL:
            for phase in event.phases:
                if phase.event_type in pause_types and is_known(phase.duration):
                    points.append((phase.event_type.label, phase.end_time, phase.duration))
    return _preserve(start, end, labels, points)


def _heap_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    areas = [(MemoryArea.YOUNG, LABEL_YOUNG), (MemoryArea.OLD, LABEL_OLD)]
    if model.collector_type is GCCollectorType.G1:
        areas.append((MemoryArea.HUMONGOUS, LABEL_HUMONGOUS))
    areas.append((MemoryArea.TOTAL, LABEL_HEAP_TOTAL))
    labels = [label for _, label in areas] + [LABEL_HEAP_MAX]
    points: list[tuple[str, float, float]] = []
    for event in _in_window(model.gc_collection_events, start, end):
        for area, label in areas:
            item = event.get_collection_agg(area)
            if is_known(item.pre_used):
                points.append((label, event.start_time, item.pre_used / KB_PER_MB))
            if is_known(item.post_used):
                points.append((label, event.end_time, item.post_used / KB_PER_MB))
        capacity = event.get_collection_agg(MemoryArea.TOTAL).total
        if is_known(capacity):
            points.append((LABEL_HEAP_MAX, event.start_time, capacity / KB_PER_MB))
            points.append((LABEL_HEAP_MAX, event.end_time, capacity / KB_PER_MB))
    return _preserve(start, end, labels, points)


def _metaspace_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    labels = [LABEL_METASPACE, LABEL_METASPACE_MAX]
    points: list[tuple[str, float, float]] = []
    for event in _in_window(model.gc_collection_events, start, end):
        metaspace = event.get_collection_agg(MemoryArea.METASPACE)
        if is_known(metaspace.pre_used):
            points.append((LABEL_METASPACE, event.start_time, metaspace.pre_used / KB_PER_MB))
        if is_known(metaspace.post_used):
            points.append((LABEL_METASPACE, event.end_time, metaspace.post_used / KB_PER_MB))
        if is_known(metaspace.total):
            points.append((LABEL_METASPACE_MAX, event.start_time, metaspace.total / KB_PER_MB))
            points.append((LABEL_METASPACE_MAX, event.end_time, metaspace.total / KB_PER_MB))
    return _preserve(start, end, labels, points)


def _allocation_reclamation_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    labels = [LABEL_ALLOCATION, LABEL_RECLAMATION]
    # ZGC reports its own allocation rate, which beats the derived one
    use_statistics = bool(model.statistics)
    points: list[tuple[str, float, float]] = []
    for event in _in_window(model.gc_collection_events, start, end):
        if not use_statistics and is_known(event.allocation):
            points.append((LABEL_ALLOCATION, event.end_time, event.allocation / KB_PER_MB))
        if is_known(event.reclamation):
            points.append((LABEL_RECLAMATION, event.end_time, event.reclamation / KB_PER_MB))
    for statistic in model.statistics:
        rate = statistic.get(ZGC_ALLOCATION_RATE)
        if rate is None or statistic.start_time < start:
            continue
        if statistic.start_time > end:
            break
        # MB/s over ten seconds
        points.append((LABEL_ALLOCATION, statistic.start_time, rate.avg10s * 10))
    return _aggregate(start, end, labels, points, bucket, average_by_time=True)


def _promotion_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    points = [
        (LABEL_PROMOTION, event.end_time, float(event.promotion))
        for event in _in_window(model.gc_collection_events, start, end)
        if is_known(event.promotion)
    ]
    return _aggregate(start, end, [LABEL_PROMOTION], points, bucket, average_by_time=True)


def _gc_cycle_view(model: GCModel, start: float, end: float, bucket: float) -> TimeLineChartView:
    points: list[tuple[str, float, float]] = []
    for event in _in_window(model.gc_collection_events, start, end):
        if event.event_type is not GCEventType.ZGC_GARBAGE_COLLECTION:
            continue
        if is_known(event.duration) and is_known(event.interval) and event.duration + event.interval > 0:
            percentage = event.duration / (event.duration + event.interval) * 100
            points.append((LABEL_DURATION_PERCENTAGE, event.end_time, percentage))
    return _preserve(start, end, [LABEL_DURATION_PERCENTAGE], points)


GRAPH_VIEWS: dict[str, Callable[[GCModel, float, float, float], TimeLineChartView]] = {
    "count": _count_view,
    "pause": _pause_view,
    "heap": _heap_view,
    "metaspace": _metaspace_view,
    "alloRec": _allocation_reclamation_view,
    "promotion": _promotion_view,
    "gccycle": _gc_cycle_view,
}


def decide_window(model: GCModel, time_point: float, time_span: float) -> tuple[float, float]:
    """Window of ``time_span`` centred on ``time_point``, clamped to the model."""
    start = time_point - time_span / 2
    end = time_point + time_span / 2
    if start < model.start_time:
        return model.start_time, model.start_time + min(model.duration, time_span)
    if end > model.end_time:
        return model.end_time - min(model.duration, time_span), model.end_time
    return start, end


def get_graph_view(model: GCModel, view_type: str, time_span: float, time_point: float) -> TimeLineChartView:
    """Chart series of ``view_type`` for a window of ``time_span`` ms around ``time_point``.

    Raises ``ValueError`` for an unknown type or a span outside
    :data:`BUCKET_INTERVALS`.
    """
    view = GRAPH_VIEWS.get(view_type)
    if view is None:
        raise ValueError(f"Unknown graph type: {view_type}")
    bucket = BUCKET_INTERVALS.get(int(time_span))
    if bucket is None or int(time_span) != time_span:
        raise ValueError(f"Unsupported time span: {time_span}")
    if model.is_empty() or not is_known(model.duration):
        return TimeLineChartView(start_time=0.0, end_time=0.0, labels=[], bucket_interval=bucket)
    start, end = decide_window(model, time_point, time_span)
    start = math.floor(start / MS_PER_SECOND) * MS_PER_SECOND
    end = math.ceil(end / MS_PER_SECOND) * MS_PER_SECOND
    return view(model, start, end, bucket)
