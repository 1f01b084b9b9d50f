"""Analysis configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gclog_analyzer.util import is_known


class TimeRange(BaseModel):
    """A [start, end] window in milliseconds relative to the log start."""

    model_config = ConfigDict(frozen=True)

    start: float
    end: float

    @model_validator(mode="after")
    def _check_order(self) -> TimeRange:
        if self.end < self.start:
            raise ValueError(f"time range end {self.end} precedes start {self.start}")
        return self

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, time: float) -> bool:
        return is_known(time) and self.start <= time <= self.end


class DiagnosticThresholds(BaseModel):
    """Configurable thresholds for diagnosis rules."""

    long_pause_ms: float = 1000.0
    long_young_pause_ms: float = 300.0
    throughput_warning_percentage: float = 90.0
    allocation_stall_count: int = Field(default=1, ge=1)


class AnalysisConfig(BaseModel):
    """Options for :meth:`GCModel.calculate_derived_info` and diagnosis."""

    time_range: TimeRange | None = None
    thresholds: DiagnosticThresholds = Field(default_factory=DiagnosticThresholds)
    # merge abnormal points closer than this into one incident
    merge_abnormal_points_threshold_ms: float = 60_000
    most_serious_sites_limit: int = 3
