"""Output generation module for timeline reports."""

from verifyzen.output.text_report import (
    ReportSection,
    TimelineReportGenerator,
    generate_timeline_report,
)

__all__ = [
    "ReportSection",
    "TimelineReportGenerator",
    "generate_timeline_report",
]
