"""Core data models for VerifyZen timeline analysis.

This module holds the value objects that flow through the timeline analyzer:

1. INPUT (TimelineEntry, EntryType)
2. INTERMEDIATE (DateRange)
3. FINDINGS (TimelineGap, TimelineOverlap, Severity)
4. RESULT (TimelineAnalysis)

Every model is frozen. An analysis is created fresh by one call to the
analyzer and never mutated afterwards.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================


class EntryType(str, Enum):
    """Kind of timeline entry.

    Attributes:
        WORK: An employment position.
        EDUCATION: A degree or course of study.
    """

    WORK = "work"
    EDUCATION = "education"


class Severity(str, Enum):
    """Three-level classification of a gap or overlap duration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def is_significant(self) -> bool:
        """Medium and high findings raise flags and add risk."""
        return self is not Severity.LOW


# =============================================================================
# Base
# =============================================================================


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# =============================================================================
# Input Models
# =============================================================================


class TimelineEntry(_FrozenModel):
    """One work or education record in a candidate's history.

    ``start_date <= end_date`` is expected but not enforced here. Input
    validation rejects inverted ranges before entries are built; the analyzer
    itself copes with them.

    Attributes:
        id: Opaque identifier, unique within one analysis call.
        type: Work or education.
        title: Position or degree label.
        organization: Employer or institution name.
        start_date: First day of the entry.
        end_date: Last day of the entry, or None while ongoing.

    Example:
        >>> entry = TimelineEntry(
        ...     id="work-0",
        ...     type=EntryType.WORK,
        ...     title="Backend Engineer",
        ...     organization="Acme Corp",
        ...     start_date=date(2018, 1, 1),
        ...     end_date=date(2018, 12, 31),
        ... )
        >>> entry.is_ongoing
        False
    """

    id: str
    type: EntryType
    title: str
    organization: str
    start_date: date
    end_date: date | None = None

    @property
    def is_ongoing(self) -> bool:
        """True when the entry has no end date."""
        return self.end_date is None

    def to_date_range(self) -> DateRange:
        """Project to the minimal range needed for interval math."""
        return DateRange(start=self.start_date, end=self.end_date)


class DateRange(_FrozenModel):
    """A start date with an optional end date.

    An absent end means "ongoing" and resolves to the evaluation date.
    """

    start: date
    end: date | None = None

    def resolved_end(self, as_of: date) -> date:
        """End date, with ongoing ranges resolved against ``as_of``."""
        return self.end if self.end is not None else as_of

    def duration_days(self, as_of: date) -> int:
        """Elapsed days from start to the resolved end (may be negative)."""
        return (self.resolved_end(as_of) - self.start).days


# =============================================================================
# Findings
# =============================================================================


class TimelineGap(_FrozenModel):
    """A period of inactivity between two consecutive entries.

    Attributes:
        start: End of the earlier entry (or the evaluation date if ongoing).
        end: Start of the following entry.
        duration_in_days: Whole days between ``start`` and ``end``.
        severity: Classification of the duration.
    """

    start: date
    end: date
    duration_in_days: int
    severity: Severity


class TimelineOverlap(_FrozenModel):
    """Two entries whose date ranges intersect."""

    entry1: TimelineEntry
    entry2: TimelineEntry
    overlap_in_days: int
    severity: Severity


# =============================================================================
# Result
# =============================================================================


class TimelineAnalysis(_FrozenModel):
    """Result of analyzing one candidate timeline.

    Attributes:
        total_gaps: Number of detected gaps of any severity.
        total_overlaps: Number of detected overlaps of any severity.
        gaps: Gaps in ascending order of start date.
        overlaps: Overlaps in pair evaluation order (i < j, original order).
        risk_score: Aggregated risk, clamped to [0, 100].
        flags: Human-readable findings in generation order.
        evaluated_on: Date used to resolve ongoing entries.
    """

    total_gaps: int = 0
    total_overlaps: int = 0
    gaps: tuple[TimelineGap, ...] = ()
    overlaps: tuple[TimelineOverlap, ...] = ()
    risk_score: int = Field(default=0, ge=0, le=100)
    flags: tuple[str, ...] = ()
    evaluated_on: date = Field(default_factory=date.today)

    @computed_field
    @property
    def has_issues(self) -> bool:
        """True when there is anything to report."""
        return bool(self.flags or self.gaps or self.overlaps)

    @property
    def significant_gaps(self) -> list[TimelineGap]:
        """Gaps whose severity is above low."""
        return [g for g in self.gaps if g.severity.is_significant]

    @property
    def significant_overlaps(self) -> list[TimelineOverlap]:
        """Overlaps whose severity is above low."""
        return [o for o in self.overlaps if o.severity.is_significant]

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys for storage as a JSON blob."""
        return self.model_dump(mode="json", by_alias=True)
