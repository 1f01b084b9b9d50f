"""Pick the parser for a log by sniffing its first lines."""

from __future__ import annotations

import re
from collections.abc import Iterable

from gclog_analyzer.errors import LogFormatError, UnsupportedCollectorError
from gclog_analyzer.event import GCCollectorType, GCLogStyle
from gclog_analyzer.log import get_logger
from gclog_analyzer.model import GCModel
from gclog_analyzer.parser.base import GCLogParser, ProgressListener
from gclog_analyzer.parser.legacy import LegacyG1GCLogParser, LegacyGenerationalGCLogParser
from gclog_analyzer.parser.unified import (
    UnifiedG1GCLogParser,
    UnifiedGenerationalGCLogParser,
    UnifiedZGCLogParser,
)
from gclog_analyzer.vm_options import parse_vm_options

_logger = get_logger("parser_factory")

SAMPLE_LINES = 1000

UNIFIED_LINE_PATTERN: re.Pattern[str] = re.compile(
    r"^\[(?:\d+(?:[.,]\d+)?s|\d+ms|\d+ns|\d{4}-\d{2}-\d{2}T[^\]]+)\]"
)
LEGACY_LINE_PATTERN: re.Pattern[str] = re.compile(
    r"(?:^|: )(?:\d+\.\d{3}|#\d+): \[(?:GC|Full GC|CMS-concurrent)"
)

# first marker found wins, checked top to bottom
UNIFIED_MARKERS: tuple[tuple[str, GCCollectorType], ...] = (
    ("Using G1", GCCollectorType.G1),
    ("Using Concurrent Mark Sweep", GCCollectorType.CMS),
    ("Using Parallel", GCCollectorType.PARALLEL),
    ("Using Serial", GCCollectorType.SERIAL),
    ("Using The Z Garbage Collector", GCCollectorType.ZGC),
    ("Initializing The Z Garbage Collector", GCCollectorType.ZGC),
    ("Pause Mark Start", GCCollectorType.ZGC),
    ("Garbage Collection (", GCCollectorType.ZGC),
    ("Pause Initial Mark", GCCollectorType.CMS),
    ("ParNew", GCCollectorType.CMS),
    ("CMS:", GCCollectorType.CMS),
    ("PSYoungGen", GCCollectorType.PARALLEL),
    ("ParOldGen", GCCollectorType.PARALLEL),
    ("Marking Phase", GCCollectorType.PARALLEL),
    ("DefNew", GCCollectorType.SERIAL),
    ("Tenured", GCCollectorType.SERIAL),
    ("regions:", GCCollectorType.G1),
    ("Pause Young (Normal)", GCCollectorType.G1),
    ("Pause Young (Concurrent Start)", GCCollectorType.G1),
    ("Pause Young (Mixed)", GCCollectorType.G1),
    ("Concurrent Cycle", GCCollectorType.G1),
)
LEGACY_MARKERS: tuple[tuple[str, GCCollectorType], ...] = (
    ("GC pause", GCCollectorType.G1),
    ("G1 Evacuation", GCCollectorType.G1),
    ("GC concurrent-", GCCollectorType.G1),
    ("ParNew", GCCollectorType.CMS),
    ("CMS", GCCollectorType.CMS),
    ("PSYoungGen", GCCollectorType.PARALLEL),
    ("ParOldGen", GCCollectorType.PARALLEL),
    ("PSOldGen", GCCollectorType.PARALLEL),
    ("DefNew", GCCollectorType.SERIAL),
    ("Tenured", GCCollectorType.SERIAL),
)


def detect_log_style(lines: list[str]) -> GCLogStyle | None:
    for line in lines:
        if UNIFIED_LINE_PATTERN.match(line):
            return GCLogStyle.UNIFIED
        if LEGACY_LINE_PATTERN.search(line):
            return GCLogStyle.PRE_UNIFIED
    return None


def detect_collector(lines: list[str], style: GCLogStyle) -> GCCollectorType:
    """Collector from ``-XX:+Use*GC`` flags if printed, else from collector specific text."""
    vm_options = parse_vm_options(lines)
    if vm_options is not None:
        collector = vm_options.get_collector_type()
        if collector is not GCCollectorType.UNKNOWN:
            return collector

    sample = "\n".join(lines)
    markers = UNIFIED_MARKERS if style is GCLogStyle.UNIFIED else LEGACY_MARKERS
    for marker, collector in markers:
        if marker in sample:
            return collector
    return GCCollectorType.UNKNOWN


def create_parser(
    collector: GCCollectorType,
    style: GCLogStyle,
    progress: ProgressListener | None = None,
) -> GCLogParser:
    if style is GCLogStyle.UNIFIED:
        if collector is GCCollectorType.G1:
            return UnifiedG1GCLogParser(progress)
        if collector is GCCollectorType.ZGC:
            return UnifiedZGCLogParser(progress)
        if collector in (GCCollectorType.CMS, GCCollectorType.PARALLEL, GCCollectorType.SERIAL):
            return UnifiedGenerationalGCLogParser(collector, progress)
    else:
        if collector is GCCollectorType.G1:
            return LegacyG1GCLogParser(progress)
        if collector in (GCCollectorType.CMS, GCCollectorType.PARALLEL, GCCollectorType.SERIAL):
            return LegacyGenerationalGCLogParser(collector, progress)
    raise UnsupportedCollectorError(f"No parser for {collector} logs in {style} format")


def get_parser(lines: Iterable[str], progress: ProgressListener | None = None) -> GCLogParser:
    """Detect format and collector of a log and return a matching parser."""
    sample = [line.rstrip("\r\n") for _, line in zip(range(SAMPLE_LINES), lines, strict=False)]
    style = detect_log_style(sample)
    if style is None:
        raise LogFormatError(
            "Unsupported or unrecognized GC log format. "
            "Supported formats: unified (-Xlog:gc*) and -XX:+PrintGCDetails logs "
            "of G1, CMS, Parallel, Serial and ZGC"
        )
    collector = detect_collector(sample, style)
    if collector is GCCollectorType.UNKNOWN:
        raise LogFormatError(f"Cannot tell which collector wrote this {style} log")
    _logger.debug("parser_detected", collector=str(collector), style=str(style))
    return create_parser(collector, style, progress)


def parse_gc_log(text: str, progress: ProgressListener | None = None) -> GCModel:
    """Parse a whole log; derived info is left to the caller."""
    lines = text.splitlines()
    return get_parser(lines, progress).parse(lines)
