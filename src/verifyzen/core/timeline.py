"""Timeline - Gap, Overlap and Risk Analysis for Candidate Histories.

This module turns a candidate's work and education entries into a
TimelineAnalysis: gaps between consecutive entries, overlapping entries,
severity for each finding, human-readable flags and a bounded risk score.

The analysis is a pure function of the entries, the configuration and the
evaluation date (``as_of``), which stands in for "now" whenever an entry is
still ongoing. Nothing is cached between calls, so one analyzer may be shared
across threads.

Example:
    >>> from datetime import date
    >>> from verifyzen.core import TimelineAnalyzer, TimelineEntry, EntryType
    >>>
    >>> entries = [
    ...     TimelineEntry(id="w1", type=EntryType.WORK, title="Engineer",
    ...                   organization="Acme", start_date=date(2018, 1, 1),
    ...                   end_date=date(2018, 12, 1)),
    ...     TimelineEntry(id="w2", type=EntryType.WORK, title="Lead",
    ...                   organization="Globex", start_date=date(2019, 8, 1)),
    ... ]
    >>> analysis = TimelineAnalyzer().analyze(entries, as_of=date(2020, 8, 1))
    >>> analysis.risk_score
    15
    >>> analysis.flags
    ('Found 1 significant timeline gap(s)',)
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from verifyzen.config import AnalysisConfig
from verifyzen.core.dates import detect_overlaps, detect_timeline_gaps
from verifyzen.core.models import (
    EntryType,
    Severity,
    TimelineAnalysis,
    TimelineEntry,
    TimelineGap,
    TimelineOverlap,
)

logger = logging.getLogger(__name__)

GAPS_FLAG = "Found {count} significant timeline gap(s)"
OVERLAPS_FLAG = "Found {count} suspicious overlapping position(s)"
MANY_POSITIONS_FLAG = "Unusually high number of positions"
SHORT_TENURES_FLAG = "Multiple short-tenure positions (< {months:g} months)"


class TimelineAnalyzer:
    """Analyzes candidate timelines against a fixed set of thresholds.

    Attributes:
        config: Thresholds and weights used for classification and scoring.

    Example:
        >>> analyzer = TimelineAnalyzer(AnalysisConfig(gap_weight=20))
        >>> result = analyzer.analyze(entries, as_of=date(2024, 1, 1))
    """

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()

    # =========================================================================
    # Severity
    # =========================================================================

    def gap_severity(self, duration_in_days: int) -> Severity:
        """Classify a gap duration."""
        if duration_in_days < self.config.gap_medium_days:
            return Severity.LOW
        if duration_in_days < self.config.gap_high_days:
            return Severity.MEDIUM
        return Severity.HIGH

    def overlap_severity(self, overlap_in_days: int) -> Severity:
        """Classify an overlap duration."""
        if overlap_in_days < self.config.overlap_medium_days:
            return Severity.LOW
        if overlap_in_days < self.config.overlap_high_days:
            return Severity.MEDIUM
        return Severity.HIGH

    # =========================================================================
    # Detection
    # =========================================================================

    def find_gaps(self, entries: Sequence[TimelineEntry], as_of: date) -> list[TimelineGap]:
        """Gaps between consecutive entries ordered by start date."""
        ranges = [entry.to_date_range() for entry in entries]
        return [
            TimelineGap(
                start=raw.start,
                end=raw.end,
                duration_in_days=raw.duration_in_days,
                severity=self.gap_severity(raw.duration_in_days),
            )
            for raw in detect_timeline_gaps(
                ranges, as_of=as_of, min_gap_days=self.config.gap_min_days
            )
        ]

    def find_overlaps(
        self, entries: Sequence[TimelineEntry], as_of: date
    ) -> list[TimelineOverlap]:
        """Every pair of entries whose date ranges intersect."""
        ranges = [entry.to_date_range() for entry in entries]
        return [
            TimelineOverlap(
                entry1=entries[raw.first],
                entry2=entries[raw.second],
                overlap_in_days=raw.overlap_in_days,
                severity=self.overlap_severity(raw.overlap_in_days),
            )
            for raw in detect_overlaps(ranges, as_of=as_of)
        ]

    def is_short_tenure(self, entry: TimelineEntry, as_of: date) -> bool:
        """True if the entry lasted fewer than ``short_tenure_months``.

        Months are approximated as elapsed days divided by ``days_per_month``.
        """
        months = entry.to_date_range().duration_days(as_of) / self.config.days_per_month
        return months < self.config.short_tenure_months

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze(
        self, entries: Sequence[TimelineEntry], as_of: date | None = None
    ) -> TimelineAnalysis:
        """Analyze a candidate timeline.

        Args:
            entries: Work and education entries in any order. Not modified.
            as_of: Evaluation date for ongoing entries. Defaults to today.

        Returns:
            A fresh TimelineAnalysis.
        """
        as_of = as_of or date.today()
        entries = list(entries)
        cfg = self.config

        gaps = self.find_gaps(entries, as_of)
        overlaps = self.find_overlaps(entries, as_of)

        flags: list[str] = []
        risk_score = 0

        significant_gaps = [g for g in gaps if g.severity.is_significant]
        if significant_gaps:
            flags.append(GAPS_FLAG.format(count=len(significant_gaps)))
            risk_score += len(significant_gaps) * cfg.gap_weight

        significant_overlaps = [o for o in overlaps if o.severity.is_significant]
        if significant_overlaps:
            flags.append(OVERLAPS_FLAG.format(count=len(significant_overlaps)))
            risk_score += len(significant_overlaps) * cfg.overlap_weight

        work_entries = [e for e in entries if e.type is EntryType.WORK]
        if len(work_entries) > cfg.max_work_positions:
            flags.append(MANY_POSITIONS_FLAG)
            risk_score += cfg.many_positions_weight

        short_tenures = [e for e in work_entries if self.is_short_tenure(e, as_of)]
        if len(short_tenures) > cfg.max_short_tenures:
            flags.append(SHORT_TENURES_FLAG.format(months=cfg.short_tenure_months))
            risk_score += cfg.short_tenure_weight

        risk_score = max(0, min(risk_score, cfg.max_risk_score))

        logger.debug(
            f"Analyzed {len(entries)} entries as of {as_of}: "
            f"{len(gaps)} gaps, {len(overlaps)} overlaps, risk {risk_score}"
        )

        return TimelineAnalysis(
            total_gaps=len(gaps),
            total_overlaps=len(overlaps),
            gaps=tuple(gaps),
            overlaps=tuple(overlaps),
            risk_score=risk_score,
            flags=tuple(flags),
            evaluated_on=as_of,
        )


def analyze_timeline(
    entries: Sequence[TimelineEntry],
    *,
    as_of: date | None = None,
    config: AnalysisConfig | None = None,
) -> TimelineAnalysis:
    """Analyze a candidate timeline with the given (or default) thresholds.

    Convenience wrapper around ``TimelineAnalyzer(config).analyze(...)``.
    """
    return TimelineAnalyzer(config).analyze(entries, as_of=as_of)
