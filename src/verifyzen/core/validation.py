"""Input validation for candidate histories.

Candidate data arrives as loosely typed JSON (manual entry in the dashboard,
or the output of resume parsing). This module validates that data and turns
it into TimelineEntry objects. Dates are parsed here and nowhere else:
anything that reaches the analyzer is already a valid ``date``.

Rejected here:
- empty company/title/institution/degree
- unparseable dates
- inverted ranges (end date before start date)

Example:
    >>> history = CandidateHistory.model_validate({
    ...     "workExperience": [
    ...         {"company": "Acme", "title": "Engineer",
    ...          "startDate": "2018-01-01", "endDate": "2018-12-01"},
    ...     ],
    ... })
    >>> [e.id for e in history.to_timeline_entries()]
    ['work-0']
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from verifyzen.core.dates import parse_date_string
from verifyzen.core.models import EntryType, TimelineEntry
from verifyzen.exceptions import CandidateFileError

logger = logging.getLogger(__name__)


class _HistoryItem(BaseModel):
    """Fields shared by work and education records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    start_date: date
    end_date: date | None = None
    current: bool = False

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_iso_date(cls, v: Any) -> Any:
        """Accept ISO-8601 date and datetime strings."""
        if v is None or isinstance(v, date):
            return v
        if isinstance(v, str):
            if not v.strip():
                return None
            parsed = parse_date_string(v)
            if parsed is None:
                raise ValueError(f"Invalid date format: {v!r}")
            return parsed
        raise ValueError(f"Invalid date format: {v!r}")

    @model_validator(mode="after")
    def check_range(self) -> "_HistoryItem":
        """Drop the end date of current positions and reject inverted ranges."""
        if self.current:
            self.end_date = None
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"End date {self.end_date.isoformat()} is before start date "
                f"{self.start_date.isoformat()}"
            )
        return self


class WorkExperience(_HistoryItem):
    """A position held by the candidate."""

    company: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None

    def to_timeline_entry(self, entry_id: str) -> TimelineEntry:
        return TimelineEntry(
            id=entry_id,
            type=EntryType.WORK,
            title=self.title,
            organization=self.company,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class Education(_HistoryItem):
    """A degree or course of study."""

    institution: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    field_of_study: str | None = None

    def to_timeline_entry(self, entry_id: str) -> TimelineEntry:
        title = self.degree
        if self.field_of_study:
            title = f"{self.degree} in {self.field_of_study}"
        return TimelineEntry(
            id=entry_id,
            type=EntryType.EDUCATION,
            title=title,
            organization=self.institution,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class CandidateHistory(BaseModel):
    """A candidate's full work and education history.

    Attributes:
        candidate_id: Optional identifier of the candidate record.
        work_experience: Positions in input order.
        education: Degrees in input order.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    candidate_id: str | None = None
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.work_experience) + len(self.education)

    def to_timeline_entries(self) -> list[TimelineEntry]:
        """Build timeline entries, work first, each in input order.

        Ids are ``work-{i}`` and ``education-{i}``.
        """
        entries = [
            item.to_timeline_entry(f"work-{i}") for i, item in enumerate(self.work_experience)
        ]
        entries.extend(
            item.to_timeline_entry(f"education-{i}") for i, item in enumerate(self.education)
        )
        return entries


def load_candidate_history(path: Path | str) -> CandidateHistory:
    """Read and validate a candidate history JSON file.

    Args:
        path: JSON file with ``workExperience`` and/or ``education`` arrays.

    Returns:
        The validated history.

    Raises:
        CandidateFileError: If the file cannot be read or is not a JSON object.
        ValidationError: If the content fails validation.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CandidateFileError(f"Cannot read {path}: {e.strerror or e}", path) from e
    except json.JSONDecodeError as e:
        raise CandidateFileError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})", path) from e

    if not isinstance(data, dict):
        raise CandidateFileError(f"Expected a JSON object in {path}", path)

    try:
        history = CandidateHistory.model_validate(data)
    except ValidationError:
        logger.debug(f"Validation failed for {path}")
        raise

    logger.debug(
        f"Loaded {len(history.work_experience)} work and "
        f"{len(history.education)} education entries from {path}"
    )
    return history
