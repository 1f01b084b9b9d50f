"""GC log parsers for JDK8 (``-XX:+PrintGCDetails``) and JDK9+ unified (``-Xlog:gc*``) logs."""

from gclog_analyzer.parser.base import GCLogParser, NullProgressListener, ProgressListener
from gclog_analyzer.parser.factory import create_parser, get_parser, parse_gc_log
from gclog_analyzer.parser.legacy import LegacyG1GCLogParser, LegacyGenerationalGCLogParser
from gclog_analyzer.parser.unified import (
    UnifiedG1GCLogParser,
    UnifiedGenerationalGCLogParser,
    UnifiedZGCLogParser,
)

__all__ = [
    "GCLogParser",
    "LegacyG1GCLogParser",
    "LegacyGenerationalGCLogParser",
    "NullProgressListener",
    "ProgressListener",
    "UnifiedG1GCLogParser",
    "UnifiedGenerationalGCLogParser",
    "UnifiedZGCLogParser",
    "create_parser",
    "get_parser",
    "parse_gc_log",
]
