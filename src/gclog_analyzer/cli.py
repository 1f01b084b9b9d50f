#!/usr/bin/env python3
"""gclog-analyzer command line interface.

Parses a JVM GC log (G1, CMS, Parallel, Serial or ZGC, JDK8 or unified
format), derives KPIs and a diagnosis and renders them with rich:
- basic JVM and heap information
- KPI table with unhealthy values highlighted
- GC cause and phase tables
- most serious problem with suggestions
- optional event details, Markdown export and chart series as JSON
"""

from __future__ import annotations

import cProfile
import pstats
import sys
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TextColumn
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from gclog_analyzer import __version__
from gclog_analyzer.config import AnalysisConfig, DiagnosticThresholds, TimeRange
from gclog_analyzer.diagnoser import AbnormalSeverity
from gclog_analyzer.errors import GCLogError
from gclog_analyzer.event import format_timestamp
from gclog_analyzer.graph import BUCKET_INTERVALS, GRAPH_VIEWS
from gclog_analyzer.log import get_logger, setup_logging
from gclog_analyzer.model import GCModel, KPIType
from gclog_analyzer.parser import get_parser
from gclog_analyzer.util import MS_PER_SECOND, format_kb, format_ms, format_percentage, is_known

_logger = get_logger("cli")

# ============================================================
# FORMATTING
# ============================================================

NA = "N/A"

_PERCENTAGE_KPIS = {KPIType.THROUGHPUT, KPIType.GC_DURATION_PERCENTAGE}
_SIZE_KPIS = {KPIType.PROMOTION_AVG, KPIType.PROMOTION_MAX}
_SPEED_KPIS = {KPIType.PROMOTION_SPEED, KPIType.OBJECT_CREATION_SPEED}


def format_kpi(kpi_type: KPIType, value: float) -> str:
    if not is_known(value):
        return NA
    if kpi_type in _PERCENTAGE_KPIS:
        return format_percentage(value)
    if kpi_type in _SIZE_KPIS:
        return format_kb(int(value))
    if kpi_type in _SPEED_KPIS:
        return f"{format_kb(int(value))}/s"
    return format_ms(value)


def format_log_time(model: GCModel, time: float) -> str:
    """Offset into the log, with the wall clock time when the log carries one."""
    if not is_known(time):
        return NA
    text = f"{time / MS_PER_SECOND:.3f}s"
    if is_known(model.reference_timestamp):
        text += f" ({format_timestamp(model.reference_timestamp + time)})"
    return text


def format_count(value: int) -> str:
    return str(value) if is_known(value) else NA


# ============================================================
# ROW BUILDERS
# ============================================================


def build_basic_info_rows(model: GCModel) -> list[tuple[str, str]]:
    info = model.basic_info
    return [
        ("Collector", info.collector),
        ("Log Format", str(model.log_style) if model.log_style is not None else NA),
        ("Log Start", format_log_time(model, model.start_time)),
        ("Log Duration", format_ms(info.duration)),
        ("GC Events", str(len(model.gc_events))),
        ("Heap Size", format_kb(info.heap_size)),
        ("Young Gen Size", format_kb(info.young_gen_size)),
        ("Old Gen Size", format_kb(info.old_gen_size)),
        ("Max Metaspace Size", format_kb(info.metaspace_size)),
        ("Heap Region Size", format_kb(model.heap_region_size)),
        ("Parallel GC Threads", format_count(info.parallel_gc_thread)),
        ("Concurrent GC Threads", format_count(info.concurrent_gc_thread)),
    ]


def build_kpi_rows(model: GCModel) -> list[tuple[str, str, bool]]:
    """(name, formatted value, bad) for every KPI the collector reports."""
    rows = []
    for key, item in model.kpi.items():
        kpi_type = KPIType(key)
        rows.append((key, format_kpi(kpi_type, item.value), item.bad))
    return rows


def build_cause_rows(model: GCModel) -> list[tuple[str, str, str, str, str]]:
    return [
        (
            info.cause,
            str(info.count),
            format_ms(info.avg_pause),
            format_ms(info.max_pause),
            format_ms(info.total_pause),
        )
        for info in model.gc_cause_infos
    ]


def build_phase_rows(model: GCModel) -> list[tuple[str, str, str, str, str, str, str]]:
    return [
        (
            info.name,
            "yes" if info.stw else "no",
            str(info.count),
            format_ms(info.avg_time),
            format_ms(info.max_time),
            format_ms(info.total_time),
            format_ms(info.avg_interval),
        )
        for info in model.gc_phase_infos
    ]


def build_site_rows(model: GCModel) -> list[str]:
    if model.diagnosis is None or model.diagnosis.most_serious_problem is None:
        return []
    return [
        f"{format_log_time(model, site.start)} - {format_log_time(model, site.end)}"
        for site in model.diagnosis.most_serious_problem.sites
    ]


def build_problem_history_rows(model: GCModel) -> list[tuple[str, str, str]]:
    """(problem, occurrences, first seen) for everything any rule reported."""
    if model.diagnosis is None:
        return []
    return [
        (problem, str(len(times)), format_log_time(model, min(times)))
        for problem, times in sorted(model.diagnosis.serious_problem.items())
        if times
    ]


def determine_severity(model: GCModel) -> AbnormalSeverity:
    return model.diagnosis.severity if model.diagnosis is not None else AbnormalSeverity.NONE


# ============================================================
# RICH OUTPUT
# ============================================================

GCLOG_THEME = Theme(
    {
        "critical": "bold red",
        "warning": "bold yellow",
        "success": "bold green",
        "info": "cyan",
        "metric": "white",
        "label": "dim white",
        "header": "bold magenta",
    }
)

console = Console(theme=GCLOG_THEME)

_SEVERITY_STYLES = {
    AbnormalSeverity.NONE: ("success", "green"),
    AbnormalSeverity.LOW: ("info", "cyan"),
    AbnormalSeverity.MEDIUM: ("warning", "yellow"),
    AbnormalSeverity.HIGH: ("critical", "red"),
    AbnormalSeverity.ULTRA: ("critical", "red"),
}


class RichProgressListener:
    """Feeds parser progress into a rich progress bar."""

    def __init__(self, progress: Progress) -> None:
        self._progress = progress
        self._task: TaskID | None = None

    def begin_task(self, name: str, total: int) -> None:
        self._task = self._progress.add_task(f"[cyan]{name}...", total=total)

    def worked(self, amount: int) -> None:
        if self._task is not None:
            self._progress.advance(self._task, amount)

    def sub_task(self, name: str) -> None:
        if self._task is not None:
            self._progress.update(self._task, description=f"[cyan]{name}...")


def create_key_value_table(title: str, rows: list[tuple[str, str]]) -> Table:
    """Create a simple two-column key/value table."""
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="label")
    table.add_column("Value", style="metric")
    for label, value in rows:
        table.add_row(label, value)
    return table


def create_kpi_table(model: GCModel) -> Table:
    table = Table(title="Key Performance Indicators", header_style="header")
    table.add_column("KPI", style="label")
    table.add_column("Value", justify="right")
    for name, value, bad in build_kpi_rows(model):
        table.add_row(name, Text(value, style="critical" if bad else "metric"))
    return table


def create_cause_table(model: GCModel) -> Table:
    table = Table(title="GC Causes", header_style="header")
    for column in ("Cause", "Count", "Avg Pause", "Max Pause", "Total Pause"):
        table.add_column(column, justify="left" if column == "Cause" else "right")
    for row in build_cause_rows(model):
        table.add_row(*row)
    return table


def create_phase_table(model: GCModel) -> Table:
    table = Table(title="GC Phases", header_style="header")
    for column in ("Phase", "STW", "Count", "Avg", "Max", "Total", "Avg Interval"):
        table.add_column(column, justify="left" if column in ("Phase", "STW") else "right")
    for row in build_phase_rows(model):
        table.add_row(*row)
    return table


def render_diagnosis_panel(model: GCModel) -> Panel:
    severity = determine_severity(model)
    text_style, border_style = _SEVERITY_STYLES[severity]
    diagnosis = model.diagnosis
    if diagnosis is None or diagnosis.most_serious_problem is None:
        return Panel(Text(" No problems found", style="success"), title="Diagnosis", border_style="green")

    problem = diagnosis.most_serious_problem
    body = Text()
    body.append(f"{problem.problem} (severity {severity.name})\n", style=text_style)
    body.append("Sites:\n", style="label")
    for site in build_site_rows(model):
        body.append(f"  {site}\n", style="metric")
    if problem.suggestions:
        body.append("Suggestions:\n", style="label")
        for index, suggestion in enumerate(problem.suggestions):
            line_ending = "\n" if index < len(problem.suggestions) - 1 else ""
            body.append(f"  - {suggestion}{line_ending}", style="metric")
    return Panel(body, title=f"[{text_style}]Diagnosis[/{text_style}]", border_style=border_style, expand=True)


def render_rich_output(model: GCModel, details: int = 0) -> None:
    console.print()
    console.print(create_key_value_table("Basic Information", build_basic_info_rows(model)))
    console.print()
    console.print(render_diagnosis_panel(model))
    console.print(create_kpi_table(model))
    if model.gc_cause_infos:
        console.print(create_cause_table(model))
    if model.gc_phase_infos:
        console.print(create_phase_table(model))

    history = build_problem_history_rows(model)
    if history:
        table = Table(title="Problem History", header_style="header")
        table.add_column("Problem")
        table.add_column("Occurrences", justify="right")
        table.add_column("First Seen")
        for row in history:
            table.add_row(*row)
        console.print(table)

    if model.diagnosis is not None and model.diagnosis.failed_rules:
        console.print(
            f"[warning]Diagnosis incomplete, failed rules: {', '.join(model.diagnosis.failed_rules)}[/warning]"
        )

    if details > 0:
        page = model.get_gc_details(page=1, page_size=details)
        console.print(f"\n[header]GC Events (first {len(page.items)} of {page.total})[/header]")
        for item in page.items:
            console.print(item, markup=False, highlight=False)


# ============================================================
# MARKDOWN EXPORT
# ============================================================


def export_markdown_summary(model: GCModel, log_file: Path, output_path: Path, details: int = 0) -> None:
    """Export the analysis to a Markdown report."""
    md_content: list[str] = []

    md_content.append("# GC Analysis Report\n\n")
    md_content.append(f"**Generated:** {datetime.now().isoformat()}\n\n")
    md_content.append(f"**Log File:** {log_file}\n\n")

    md_content.append("## Basic Information\n\n")
    for label, value in build_basic_info_rows(model):
        md_content.append(f"- **{label}:** {value}\n")
    md_content.append("\n")

    md_content.append("## Diagnosis\n\n")
    diagnosis = model.diagnosis
    if diagnosis is None or diagnosis.most_serious_problem is None:
        md_content.append("No problems found.\n\n")
    else:
        problem = diagnosis.most_serious_problem
        md_content.append(f"**Most serious problem:** {problem.problem} (severity {diagnosis.severity.name})\n\n")
        md_content.append("Sites:\n\n")
        for site in build_site_rows(model):
            md_content.append(f"- {site}\n")
        md_content.append("\n")
        if problem.suggestions:
            md_content.append("Suggestions:\n\n")
            for suggestion in problem.suggestions:
                md_content.append(f"- {suggestion}\n")
            md_content.append("\n")

    md_content.append("## Key Performance Indicators\n\n")
    md_content.append("| KPI | Value |\n|---|---:|\n")
    for name, value, bad in build_kpi_rows(model):
        md_content.append(f"| {name} | {'**' + value + '**' if bad else value} |\n")
    md_content.append("\n")

    if model.gc_cause_infos:
        md_content.append("## GC Causes\n\n")
        md_content.append("| Cause | Count | Avg Pause | Max Pause | Total Pause |\n|---|---:|---:|---:|---:|\n")
        for row in build_cause_rows(model):
            md_content.append("| " + " | ".join(row) + " |\n")
        md_content.append("\n")

    if model.gc_phase_infos:
        md_content.append("## GC Phases\n\n")
        md_content.append("| Phase | STW | Count | Avg | Max | Total | Avg Interval |\n|---|---|---:|---:|---:|---:|---:|\n")
        for row in build_phase_rows(model):
            md_content.append("| " + " | ".join(row) + " |\n")
        md_content.append("\n")

    if details > 0:
        page = model.get_gc_details(page=1, page_size=details)
        md_content.append("## GC Events\n\n```\n")
        md_content.extend(f"{item}\n" for item in page.items)
        md_content.append("```\n")

    output_path.write_text("".join(md_content), encoding="utf-8")


# ============================================================
# LOADING
# ============================================================


def read_log_lines(log_file: Path) -> list[str]:
    with log_file.open(encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\r\n") for line in f]


def load_model(lines: list[str], config: AnalysisConfig, show_progress: bool = True) -> GCModel:
    """Parse ``lines`` with the detected parser and run the derived-info pipeline."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
        disable=not show_progress,
        transient=True,
    ) as progress:
        parser = get_parser(lines, RichProgressListener(progress))
        model = parser.parse(lines)
    model.calculate_derived_info(config)
    return model


# ============================================================
# TYPER CLI INTERFACE
# ============================================================

app = typer.Typer(
    name="gclog-analyzer",
    help="JVM GC log analyzer supporting G1, CMS, Parallel, Serial and ZGC logs",
    add_completion=False,
    rich_markup_mode="rich",
)

LogFileArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to GC log file to analyze",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]


@app.command()
def analyze(
    log_file: LogFileArgument,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Export analysis report to Markdown file (e.g., report.md)",
            file_okay=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log parsing and analysis progress to stderr"),
    ] = False,
    pause_threshold: Annotated[
        float,
        typer.Option("--pause-threshold", help="Pause length in ms reported as a long pause", min=0.0),
    ] = 1000.0,
    time_from: Annotated[
        float | None,
        typer.Option("--from", help="Only diagnose events after this many ms into the log", min=0.0),
    ] = None,
    time_to: Annotated[
        float | None,
        typer.Option("--to", help="Only diagnose events before this many ms into the log", min=0.0),
    ] = None,
    details: Annotated[
        int,
        typer.Option("--details", help="Print the first N GC events", min=0),
    ] = 0,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Write diagnostic logs as JSON lines"),
    ] = False,
    profile: Annotated[
        bool,
        typer.Option("--profile", help="Enable performance profiling and display timing statistics"),
    ] = False,
) -> None:
    """Analyze a JVM GC log file.

    Exit codes: 0 = clean or minor findings, 1 = error, 2 = serious problems.
    """
    setup_logging("debug" if verbose else "warning", json_output=json_logs)

    profiler = None
    if profile:
        profiler = cProfile.Profile()
        profiler.enable()

    try:
        lines = read_log_lines(log_file)
        if verbose:
            console.print(f"[info]Read {len(lines)} lines from {log_file}[/info]")

        time_range = None
        if time_from is not None or time_to is not None:
            time_range = TimeRange(
                start=time_from if time_from is not None else 0.0,
                end=time_to if time_to is not None else float("inf"),
            )
        config = AnalysisConfig(
            time_range=time_range,
            thresholds=DiagnosticThresholds(long_pause_ms=pause_threshold),
        )

        model = load_model(lines, config, show_progress=not json_logs)
        if model.is_empty():
            console.print("[critical]ERROR: No usable GC events found in log file[/critical]")
            sys.exit(1)

        if verbose:
            console.print(
                f"[info]Detected {model.collector_type} collector, {model.log_style} format, "
                f"{len(model.gc_events)} GC events[/info]"
            )

        render_rich_output(model, details)

        if output:
            export_markdown_summary(model, log_file, output, details)
            console.print(f"\n[success] Summary exported to {output}[/success]")

        if profiler:
            profiler.disable()
            console.print("\n[bold cyan] Performance Profile (Top 20 Functions) [/bold cyan]\n")
            stats_stream = StringIO()
            stats = pstats.Stats(profiler, stream=stats_stream)
            stats.strip_dirs()
            stats.sort_stats("cumulative")
            stats.print_stats(20)
            console.print(stats_stream.getvalue())

        if determine_severity(model) >= AbnormalSeverity.HIGH:
            sys.exit(2)

    except (GCLogError, ValueError) as e:
        _logger.debug("analysis_failed", exc_info=True)
        console.print(f"[critical]ERROR: {e}[/critical]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[critical]ERROR: {e}[/critical]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def graph(
    log_file: LogFileArgument,
    view_type: Annotated[
        str,
        typer.Option("--type", "-t", help=f"Chart type: {', '.join(GRAPH_VIEWS)}"),
    ] = "heap",
    time_span: Annotated[
        int,
        typer.Option("--span", help=f"Window length in ms: {', '.join(map(str, BUCKET_INTERVALS))}"),
    ] = 300_000,
    time_point: Annotated[
        float | None,
        typer.Option("--at", help="Window centre in ms into the log (default: log start)"),
    ] = None,
) -> None:
    """Print the series of one chart as JSON."""
    setup_logging("warning")
    try:
        model = load_model(read_log_lines(log_file), AnalysisConfig(), show_progress=False)
        point = time_point if time_point is not None else model.start_time
        view = model.get_graph_view(view_type, time_span, point)
    except (GCLogError, ValueError) as e:
        console.print(f"[critical]ERROR: {e}[/critical]")
        sys.exit(1)
    typer.echo(view.model_dump_json(indent=2))


@app.command()
def version() -> None:
    """Display version."""
    console.print(f"gclog-analyzer {__version__}")


if __name__ == "__main__":
    app()
