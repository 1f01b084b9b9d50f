"""JVM GC log analyzer: parse G1, CMS, Parallel, Serial and ZGC logs into a model, derive KPIs and diagnose."""

from gclog_analyzer.config import AnalysisConfig, DiagnosticThresholds, TimeRange
from gclog_analyzer.errors import GCLogError, LogFormatError, ModelStateError, UnsupportedCollectorError
from gclog_analyzer.model import GCModel
from gclog_analyzer.parser import get_parser, parse_gc_log

__version__ = "1.0.0"

__all__ = [
    "AnalysisConfig",
    "DiagnosticThresholds",
    "GCLogError",
    "GCModel",
    "LogFormatError",
    "ModelStateError",
    "TimeRange",
    "UnsupportedCollectorError",
    "get_parser",
    "parse_gc_log",
]
