"""Date helpers for timeline analysis.

Everything here works on ``datetime.date`` values. Ongoing ranges (no end
date) resolve against an explicit ``as_of`` date, falling back to today, so
callers that need reproducible output should always pass ``as_of``.

Example:
    >>> from datetime import date
    >>> from verifyzen.core.dates import days_between, format_date_range
    >>> days_between(date(2020, 3, 1), date(2020, 6, 1))
    92
    >>> format_date_range(date(2020, 1, 15), None)
    'Jan 2020 - Present'
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import NamedTuple, Sequence

from verifyzen.core.models import DateRange

# Reduced-precision ISO-8601: "2020" or "2020-01"
REDUCED_PRECISION_RE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


class RawGap(NamedTuple):
    """A gap before severity is assigned."""

    start: date
    end: date
    duration_in_days: int


class RawOverlap(NamedTuple):
    """An overlapping pair, identified by input indices."""

    first: int
    second: int
    overlap_in_days: int


# =============================================================================
# Parsing & Validation
# =============================================================================


def parse_date_string(date_str: str | None) -> date | None:
    """Parse an ISO-8601 date or datetime string.

    Reduced-precision forms resolve to the first day of the period, so
    ``"2020-03"`` is March 1 and ``"2020"`` is January 1.

    Args:
        date_str: String such as ``"2020-01-31"``, ``"2020-01"`` or
            ``"2020-01-31T09:00:00Z"``.

    Returns:
        The calendar date, or None if the string is empty or unparseable.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    text = date_str.strip()
    match = REDUCED_PRECISION_RE.match(text)
    if match:
        year, month = match.groups()
        try:
            return date(int(year), int(month or 1), 1)
        except ValueError:
            return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    # Trailing "Z" is only accepted by fromisoformat on 3.11+
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def validate_date_range(start: str, end: str | None = None) -> bool:
    """Check that ``start`` parses and, if given, ``end`` parses and is not earlier.

    Returns:
        True if the range is well formed.
    """
    start_date = parse_date_string(start)
    if start_date is None:
        return False

    if end:
        end_date = parse_date_string(end)
        if end_date is None:
            return False
        return start_date <= end_date

    return True


# =============================================================================
# Durations
# =============================================================================


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative when end is earlier)."""
    return (end - start).days


def calculate_duration_in_days(
    start_date: date, end_date: date | None = None, *, as_of: date | None = None
) -> int:
    """Days elapsed from start to end, with ongoing ranges ending at ``as_of``."""
    end = end_date or as_of or date.today()
    return days_between(start_date, end)


def calculate_duration(
    start_date: date, end_date: date | None = None, *, as_of: date | None = None
) -> int:
    """Whole calendar months elapsed from start to end.

    A month only counts once the day of month has been reached, so
    Jan 31 -> Feb 28 is 0 months and Jan 15 -> Mar 15 is 2.
    """
    end = end_date or as_of or date.today()
    sign = 1
    start = start_date
    if end < start:
        start, end = end, start
        sign = -1

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return sign * months


def format_date_range(start_date: date, end_date: date | None = None) -> str:
    """Format as ``"Jan 2020 - Mar 2021"``, or ``"... - Present"`` when ongoing."""
    start = start_date.strftime("%b %Y")
    end = end_date.strftime("%b %Y") if end_date else "Present"
    return f"{start} - {end}"


def is_date_in_range(d: date, date_range: DateRange, *, as_of: date | None = None) -> bool:
    """Inclusive membership test against a possibly ongoing range."""
    end = date_range.resolved_end(as_of or date.today())
    return date_range.start <= d <= end


# =============================================================================
# Interval Detection
# =============================================================================


def detect_timeline_gaps(
    ranges: Sequence[DateRange],
    *,
    as_of: date | None = None,
    min_gap_days: int = 30,
) -> list[RawGap]:
    """Find gaps between consecutive ranges ordered by start date.

    Only adjacent ranges in start order are compared. An ongoing range ends
    at ``as_of``. The input sequence is not modified.

    Args:
        ranges: Ranges in any order.
        as_of: Evaluation date for ongoing ranges.
        min_gap_days: Smallest gap that is reported.

    Returns:
        Gaps in ascending order of their start.
    """
    now = as_of or date.today()
    ordered = sorted(ranges, key=lambda r: r.start)
    gaps: list[RawGap] = []

    for current, following in zip(ordered, ordered[1:]):
        current_end = current.resolved_end(now)
        gap_days = days_between(current_end, following.start)
        if gap_days >= min_gap_days:
            gaps.append(RawGap(current_end, following.start, gap_days))

    return gaps


def detect_overlaps(
    ranges: Sequence[DateRange],
    *,
    as_of: date | None = None,
) -> list[RawOverlap]:
    """Find every pair of ranges whose windows intersect.

    Pairs are evaluated as (i, j) with i < j in input order. A pair overlaps
    when the later start is strictly before the earlier end, so inverted or
    zero-length ranges never produce an overlap.

    Returns:
        Overlaps in pair evaluation order, carrying the input indices.
    """
    now = as_of or date.today()
    overlaps: list[RawOverlap] = []

    for i, first in enumerate(ranges):
        first_end = first.resolved_end(now)
        for j in range(i + 1, len(ranges)):
            second = ranges[j]
            window_start = max(first.start, second.start)
            window_end = min(first_end, second.resolved_end(now))
            if window_start < window_end:
                overlaps.append(RawOverlap(i, j, days_between(window_start, window_end)))

    return overlaps
