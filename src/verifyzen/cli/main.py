"""
Command Line Interface for VerifyZen.

Runs timeline consistency analysis on candidate history files and prints the
result as a markdown report, a JSON document or a Rich table.

Candidate files are JSON objects with ``workExperience`` and ``education``
arrays (see ``verifyzen.core.validation``).
"""

import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from verifyzen import __version__
from verifyzen.config import AppConfig, get_config, load_config
from verifyzen.core.models import Severity, TimelineAnalysis
from verifyzen.core.timeline import TimelineAnalyzer
from verifyzen.core.validation import load_candidate_history
from verifyzen.exceptions import VerifyZenError
from verifyzen.output.text_report import TimelineReportGenerator
from verifyzen.utils.logging import LogContext, setup_logging

logger = logging.getLogger(__name__)

console = Console()

SEVERITY_STYLE = {
    Severity.LOW: "green",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "bold red",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def print_header(text: str) -> None:
    """Print a styled header."""
    console.print()
    console.print(Panel(text, style="bold blue", expand=False))
    console.print()


def print_success(text: str) -> None:
    """Print green success message."""
    console.print(f"[bold green]✓[/bold green] {text}", soft_wrap=True)


def print_error(text: str) -> None:
    """Print red error message."""
    console.print(f"[bold red]✗[/bold red] {text}", highlight=False, soft_wrap=True)


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into one line per problem."""
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "input"
        lines.append(f"{location}: {item['msg']}")
    return "\n".join(lines)


def risk_style(score: int) -> str:
    if score >= 50:
        return "bold red"
    if score >= 25:
        return "yellow"
    return "green"


def print_analysis_table(analysis: TimelineAnalysis) -> None:
    """Print an analysis as Rich tables."""
    score = analysis.risk_score
    console.print(f"Risk Score: [{risk_style(score)}]{score}/100[/]")
    console.print(f"Evaluated on: {analysis.evaluated_on.isoformat()}")
    console.print(
        f"Gaps: {analysis.total_gaps} ({len(analysis.significant_gaps)} significant), "
        f"overlaps: {analysis.total_overlaps} ({len(analysis.significant_overlaps)} significant)",
        soft_wrap=True,
    )

    if analysis.flags:
        console.print()
        for flag in analysis.flags:
            console.print(f"[bold yellow]⚠[/bold yellow] {flag}")

    if analysis.gaps:
        table = Table(title="Timeline Gaps")
        table.add_column("#", justify="right")
        table.add_column("From", style="cyan")
        table.add_column("To", style="cyan")
        table.add_column("Days", justify="right")
        table.add_column("Severity")
        for index, gap in enumerate(analysis.gaps, start=1):
            table.add_row(
                str(index),
                gap.start.isoformat(),
                gap.end.isoformat(),
                str(gap.duration_in_days),
                f"[{SEVERITY_STYLE[gap.severity]}]{gap.severity.value}[/]",
            )
        console.print(table)

    if analysis.overlaps:
        table = Table(title="Overlapping Positions")
        table.add_column("#", justify="right")
        table.add_column("First")
        table.add_column("Second")
        table.add_column("Days", justify="right")
        table.add_column("Severity")
        for index, overlap in enumerate(analysis.overlaps, start=1):
            table.add_row(
                str(index),
                f"{overlap.entry1.title} at {overlap.entry1.organization}",
                f"{overlap.entry2.title} at {overlap.entry2.organization}",
                str(overlap.overlap_in_days),
                f"[{SEVERITY_STYLE[overlap.severity]}]{overlap.severity.value}[/]",
            )
        console.print(table)

    if not analysis.has_issues:
        print_success("No timeline issues found")


# =============================================================================
# MAIN CLI GROUP
# =============================================================================


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.option("--config", "config_path", type=click.Path(), help="Custom config file")
@click.version_option(__version__, prog_name="verifyzen")
@click.pass_context
def verifyzen(ctx, verbose, debug, config_path):
    """
    VerifyZen - candidate background verification.

    Analyzes a candidate's work and education history for timeline gaps,
    overlapping positions and other patterns, and reports a 0-100 risk score.
    """
    try:
        config = load_config(Path(config_path)) if config_path else get_config()
    except VerifyZenError as e:
        print_error(str(e))
        ctx.exit(1)

    if verbose or debug:
        config = config.model_copy(update={"verbose": verbose, "debug": debug})

    setup_logging(level=config.effective_log_level(), log_file=config.logging.file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _get_config(ctx) -> AppConfig:
    return ctx.obj["config"]


# =============================================================================
# ANALYZE COMMAND
# =============================================================================


@verifyzen.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["markdown", "json", "table"]),
    default=None,
    help="Output format (defaults to report.format from config)",
)
@click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Evaluation date for ongoing positions (YYYY-MM-DD, default: today)",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write output to file")
@click.pass_context
def analyze(ctx, input_file, output_format, as_of, output):
    """
    Analyze a candidate history file for timeline gaps and overlaps.

    Example:
        verifyzen analyze candidate.json --format json --as-of 2024-01-01
    """
    config = _get_config(ctx)
    output_format = output_format or config.report.format
    as_of_date: Optional[date] = as_of.date() if as_of else None

    try:
        history = load_candidate_history(input_file)
    except VerifyZenError as e:
        print_error(str(e))
        ctx.exit(1)
    except ValidationError as e:
        print_error(f"Invalid candidate history in {input_file}:\n{format_validation_error(e)}")
        ctx.exit(1)

    analyzer = TimelineAnalyzer(config.analysis)
    with LogContext(f"Analyzing {len(history)} timeline entries", level=logging.DEBUG):
        analysis = analyzer.analyze(history.to_timeline_entries(), as_of=as_of_date)

    if output_format == "json":
        rendered = json.dumps(analysis.to_dict(), indent=2) + "\n"
    else:
        rendered = TimelineReportGenerator(config.report).generate(analysis)

    if output_format == "table":
        print_header(f"Timeline Analysis: {Path(input_file).name}")
        print_analysis_table(analysis)
    elif not output:
        click.echo(rendered, nl=False)

    # Table output saves the markdown report
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
        logger.info(f"Output written to {output_path}")
        print_success(f"Report saved to: {output_path}")


# =============================================================================
# VALIDATE COMMAND
# =============================================================================


@verifyzen.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate(ctx, input_file):
    """
    Validate a candidate history file without analyzing it.

    Example:
        verifyzen validate candidate.json
    """
    try:
        history = load_candidate_history(input_file)
    except VerifyZenError as e:
        print_error(str(e))
        ctx.exit(1)
    except ValidationError as e:
        print_error(f"Invalid candidate history in {input_file}:\n{format_validation_error(e)}")
        ctx.exit(1)

    print_success(
        f"{input_file} is valid: {len(history.work_experience)} work and "
        f"{len(history.education)} education entries"
    )


# =============================================================================
# CONFIG COMMANDS
# =============================================================================


@verifyzen.group()
def config():
    """Inspect configuration."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show the effective configuration as JSON."""
    cfg = _get_config(ctx)
    click.echo(json.dumps(cfg.model_dump(mode="json"), indent=2))


# =============================================================================
# VERSION COMMAND
# =============================================================================


@verifyzen.command()
def version():
    """Show version and system information."""
    console.print(f"VerifyZen [bold]{__version__}[/bold]")
    console.print(f"Python: {sys.version.split()[0]}")


def main():
    """Entry point for the console script."""
    verifyzen()


if __name__ == "__main__":
    main()
