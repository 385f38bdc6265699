"""
Timeline Report Generator - Render a TimelineAnalysis as markdown.

The report is a direct projection of the analysis: risk score header, red
flags, enumerated gaps and enumerated overlapping positions. Dates are
printed as YYYY-MM-DD. Rendering has no hidden state, so the same analysis
always produces the same text.
"""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from verifyzen.config import ReportConfig
from verifyzen.core.models import TimelineAnalysis

logger = logging.getLogger(__name__)

NO_ISSUES_TEXT = "The timeline appears consistent with no significant gaps or overlaps."


# =============================================================================
# DATA MODELS
# =============================================================================


@dataclass
class ReportSection:
    """A section of the report."""

    id: str
    title: str
    lines: List[str]
    order: int
    trailing_blank_line: bool = True

    def render(self) -> str:
        body = "".join(f"{line}\n" for line in self.lines)
        end = "\n" if self.trailing_blank_line else ""
        return f"## {self.title}\n{body}{end}"


# =============================================================================
# TIMELINE REPORT GENERATOR
# =============================================================================


class TimelineReportGenerator:
    """
    Generates markdown reports from TimelineAnalysis data.

    Sections are rendered in a fixed order and skipped when empty. When the
    analysis has no flags, gaps or overlaps, a single "No Issues Found"
    section is rendered instead.
    """

    def __init__(self, config: Optional[ReportConfig] = None) -> None:
        """
        Initialize the report generator.

        Args:
            config: Report configuration (uses defaults if None)
        """
        self._config = config or ReportConfig()

    def generate(self, analysis: TimelineAnalysis, output_path: Optional[Path] = None) -> str:
        """
        Generate the markdown report.

        Args:
            analysis: Result of a timeline analysis
            output_path: Optional path to write the report to

        Returns:
            Markdown string
        """
        sections = self._render_all_sections(analysis)

        report = self._render_header(analysis)
        report += "".join(section.render() for section in sorted(sections, key=lambda s: s.order))

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(report, encoding="utf-8")
            logger.info(f"Report written to {output_path}")

        return report

    def _render_all_sections(self, analysis: TimelineAnalysis) -> List[ReportSection]:
        """Render all non-empty report sections."""
        renderers: List[tuple[bool, Callable[[TimelineAnalysis], Optional[ReportSection]]]] = [
            (self._config.include_flags, self._render_flags),
            (self._config.include_gaps, self._render_gaps),
            (self._config.include_overlaps, self._render_overlaps),
        ]

        sections = []
        for enabled, renderer in renderers:
            if not enabled:
                continue
            section = renderer(analysis)
            if section is not None:
                sections.append(section)

        if not analysis.flags and not analysis.gaps and not analysis.overlaps:
            sections.append(
                ReportSection(
                    id="no-issues",
                    title="No Issues Found",
                    lines=[NO_ISSUES_TEXT],
                    order=99,
                    trailing_blank_line=False,
                )
            )

        return sections

    def _render_header(self, analysis: TimelineAnalysis) -> str:
        return f"# {self._config.title}\n\n**Risk Score:** {analysis.risk_score}/100\n\n"

    def _render_flags(self, analysis: TimelineAnalysis) -> Optional[ReportSection]:
        if not analysis.flags:
            return None
        return ReportSection(
            id="flags",
            title="Red Flags",
            lines=[f"- {flag}" for flag in analysis.flags],
            order=1,
        )

    def _render_gaps(self, analysis: TimelineAnalysis) -> Optional[ReportSection]:
        if not analysis.gaps:
            return None
        lines = []
        for index, gap in enumerate(analysis.gaps, start=1):
            lines.append(
                f"{index}. Gap of {gap.duration_in_days} days ({gap.severity.value} severity)"
            )
            lines.append(f"   From {self._format_date(gap.start)} to {self._format_date(gap.end)}")
        return ReportSection(id="gaps", title="Timeline Gaps", lines=lines, order=2)

    def _render_overlaps(self, analysis: TimelineAnalysis) -> Optional[ReportSection]:
        if not analysis.overlaps:
            return None
        lines = []
        for index, overlap in enumerate(analysis.overlaps, start=1):
            first, second = overlap.entry1, overlap.entry2
            lines.append(f"{index}. {first.title} at {first.organization} overlaps with")
            lines.append(f"   {second.title} at {second.organization}")
            lines.append(
                f"   Overlap: {overlap.overlap_in_days} days ({overlap.severity.value} severity)"
            )
        return ReportSection(id="overlaps", title="Overlapping Positions", lines=lines, order=3)

    def _format_date(self, d: date) -> str:
        """Format date as YYYY-MM-DD."""
        return d.isoformat()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def generate_timeline_report(
    analysis: TimelineAnalysis,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Render a timeline analysis as a markdown string.

    Args:
        analysis: Result of a timeline analysis
        config: Optional report configuration

    Returns:
        Markdown string
    """
    return TimelineReportGenerator(config=config).generate(analysis)
