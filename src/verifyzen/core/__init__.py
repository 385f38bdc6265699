"""Core timeline analysis for VerifyZen.

This package contains the pieces the rest of the application builds on:

- **Models**: TimelineEntry in, TimelineAnalysis out
- **Dates**: interval math and date helpers
- **Timeline**: gap/overlap detection, severity and risk scoring
- **Validation**: turning raw candidate JSON into TimelineEntry objects

Example:
    >>> from datetime import date
    >>> from verifyzen.core import CandidateHistory, analyze_timeline
    >>>
    >>> history = CandidateHistory.model_validate(payload)
    >>> analysis = analyze_timeline(history.to_timeline_entries(), as_of=date.today())
    >>> print(analysis.risk_score, analysis.flags)
"""

from verifyzen.core.dates import (
    calculate_duration,
    calculate_duration_in_days,
    days_between,
    detect_overlaps,
    detect_timeline_gaps,
    format_date_range,
    is_date_in_range,
    parse_date_string,
    validate_date_range,
)
from verifyzen.core.models import (
    DateRange,
    EntryType,
    Severity,
    TimelineAnalysis,
    TimelineEntry,
    TimelineGap,
    TimelineOverlap,
)
from verifyzen.core.timeline import TimelineAnalyzer, analyze_timeline
from verifyzen.core.validation import (
    CandidateHistory,
    Education,
    WorkExperience,
    load_candidate_history,
)

__all__ = [
    # Models
    "DateRange",
    "EntryType",
    "Severity",
    "TimelineAnalysis",
    "TimelineEntry",
    "TimelineGap",
    "TimelineOverlap",
    # Analysis
    "TimelineAnalyzer",
    "analyze_timeline",
    # Dates
    "calculate_duration",
    "calculate_duration_in_days",
    "days_between",
    "detect_overlaps",
    "detect_timeline_gaps",
    "format_date_range",
    "is_date_in_range",
    "parse_date_string",
    "validate_date_range",
    # Validation
    "CandidateHistory",
    "Education",
    "WorkExperience",
    "load_candidate_history",
]
