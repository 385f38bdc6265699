"""Tests for the date helpers in verifyzen.core.dates."""

from datetime import date

import pytest

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
from verifyzen.core.models import DateRange


class TestParsing:
    """ISO-8601 parsing and range validation."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2020-01-15", date(2020, 1, 15)),
            (" 2020-01-15 ", date(2020, 1, 15)),
            ("2020-01-15T10:30:00", date(2020, 1, 15)),
            ("2020-01-15T10:30:00Z", date(2020, 1, 15)),
            ("2020-01-15T10:30:00+02:00", date(2020, 1, 15)),
            ("2020-03", date(2020, 3, 1)),
            ("2020", date(2020, 1, 1)),
            (" 2019-12 ", date(2019, 12, 1)),
        ],
    )
    def test_parse_valid(self, text: str, expected: date) -> None:
        assert parse_date_string(text) == expected

    @pytest.mark.parametrize(
        "text", ["", "not-a-date", "2020-13-01", "2020-02-30", "2020-13", "2020-1", "20", None]
    )
    def test_parse_invalid(self, text) -> None:
        assert parse_date_string(text) is None

    def test_validate_date_range(self) -> None:
        assert validate_date_range("2020-01-01")
        assert validate_date_range("2020-01-01", "2020-01-01")
        assert validate_date_range("2020-01-01", "2021-01-01")
        assert not validate_date_range("2021-01-01", "2020-01-01")
        assert validate_date_range("2020-01", "2020-01-31")
        assert not validate_date_range("2020-02", "2020-01-31")
        assert not validate_date_range("garbage")
        assert not validate_date_range("2020-01-01", "garbage")


class TestDurations:
    """Day and month differences."""

    def test_days_between(self) -> None:
        assert days_between(date(2020, 3, 1), date(2020, 6, 1)) == 92
        assert days_between(date(2020, 6, 1), date(2020, 3, 1)) == -92

    def test_duration_in_days_ongoing(self) -> None:
        assert calculate_duration_in_days(date(2023, 12, 1), as_of=date(2024, 1, 1)) == 31
        assert calculate_duration_in_days(date(2023, 12, 1), date(2023, 12, 11)) == 10

    @pytest.mark.parametrize(
        "start, end, months",
        [
            (date(2020, 1, 15), date(2020, 3, 15), 2),
            (date(2020, 1, 15), date(2020, 3, 14), 1),
            (date(2020, 1, 31), date(2020, 2, 29), 0),
            (date(2018, 1, 1), date(2019, 1, 1), 12),
            (date(2020, 3, 15), date(2020, 1, 15), -2),
        ],
    )
    def test_calendar_months(self, start: date, end: date, months: int) -> None:
        assert calculate_duration(start, end) == months

    def test_calendar_months_ongoing(self) -> None:
        assert calculate_duration(date(2023, 1, 1), as_of=date(2024, 1, 1)) == 12


class TestFormatting:
    """Display helpers."""

    def test_format_closed_range(self) -> None:
        assert format_date_range(date(2020, 1, 15), date(2021, 3, 1)) == "Jan 2020 - Mar 2021"

    def test_format_ongoing_range(self) -> None:
        assert format_date_range(date(2020, 1, 15)) == "Jan 2020 - Present"

    def test_is_date_in_range_inclusive(self) -> None:
        r = DateRange(start=date(2020, 1, 1), end=date(2020, 12, 31))
        assert is_date_in_range(date(2020, 1, 1), r)
        assert is_date_in_range(date(2020, 12, 31), r)
        assert not is_date_in_range(date(2021, 1, 1), r)

    def test_is_date_in_ongoing_range(self) -> None:
        r = DateRange(start=date(2020, 1, 1))
        assert is_date_in_range(date(2023, 6, 1), r, as_of=date(2024, 1, 1))
        assert not is_date_in_range(date(2024, 6, 1), r, as_of=date(2024, 1, 1))


class TestIntervalDetection:
    """Raw gap and overlap detection over bare ranges."""

    def test_gaps_leave_input_untouched(self) -> None:
        ranges = [
            DateRange(start=date(2021, 1, 1), end=date(2021, 6, 1)),
            DateRange(start=date(2019, 1, 1), end=date(2019, 6, 1)),
        ]
        gaps = detect_timeline_gaps(ranges, as_of=date(2024, 1, 1))

        assert ranges[0].start == date(2021, 1, 1)
        assert len(gaps) == 1
        assert gaps[0].start == date(2019, 6, 1)
        assert gaps[0].end == date(2021, 1, 1)

    def test_gap_threshold_is_configurable(self) -> None:
        ranges = [
            DateRange(start=date(2020, 1, 1), end=date(2020, 1, 31)),
            DateRange(start=date(2020, 2, 10), end=date(2020, 3, 1)),
        ]
        assert detect_timeline_gaps(ranges, as_of=date(2024, 1, 1)) == []
        gaps = detect_timeline_gaps(ranges, as_of=date(2024, 1, 1), min_gap_days=7)
        assert gaps[0].duration_in_days == 10

    def test_overlaps_carry_indices(self) -> None:
        ranges = [
            DateRange(start=date(2020, 1, 1), end=date(2020, 6, 1)),
            DateRange(start=date(2018, 1, 1), end=date(2018, 6, 1)),
            DateRange(start=date(2020, 3, 1), end=date(2020, 9, 1)),
        ]
        overlaps = detect_overlaps(ranges, as_of=date(2024, 1, 1))

        assert len(overlaps) == 1
        assert (overlaps[0].first, overlaps[0].second) == (0, 2)
        assert overlaps[0].overlap_in_days == 92

    def test_zero_length_range_never_overlaps(self) -> None:
        ranges = [
            DateRange(start=date(2020, 3, 1), end=date(2020, 3, 1)),
            DateRange(start=date(2020, 1, 1), end=date(2020, 12, 1)),
        ]
        assert detect_overlaps(ranges, as_of=date(2024, 1, 1)) == []
