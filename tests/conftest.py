"""Central Pytest Fixtures for VerifyZen.

This module provides reusable timeline entries, candidate payloads and
temporary files across all test modules.

Fixtures included:
- Environment: isolated_config (autouse)
- Entries: make_entry helper, career_gap_entries, overlapping_entries
- Candidate files: candidate_payload, candidate_file
"""

import json
import os
from datetime import date
from pathlib import Path

import pytest

from verifyzen.config import reset_config
from verifyzen.core.models import EntryType, TimelineEntry

# Fixed evaluation date so ongoing entries resolve the same way in every run
AS_OF = date(2024, 1, 1)


# =============================================================================
# Helper Functions
# =============================================================================


def make_entry(
    entry_id: str,
    start: date,
    end: date | None = None,
    entry_type: EntryType = EntryType.WORK,
    title: str | None = None,
    organization: str | None = None,
) -> TimelineEntry:
    """Build a TimelineEntry with sensible defaults for the free-text fields."""
    return TimelineEntry(
        id=entry_id,
        type=entry_type,
        title=title or f"Title {entry_id}",
        organization=organization or f"Org {entry_id}",
        start_date=start,
        end_date=end,
    )


def create_test_json(path: Path, data: object) -> Path:
    """Helper to create a JSON file.

    Args:
        path: Where to save the JSON.
        data: Object to write.

    Returns:
        Path to the created JSON.
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep tests independent of the developer's environment and config files."""
    for key in list(os.environ):
        if key.upper().startswith("VERIFYZEN_"):
            monkeypatch.delenv(key, raising=False)

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("verifyzen.config.DEFAULT_SEARCH_PATHS", (tmp_path / "verifyzen.yaml",))
    reset_config()
    yield
    reset_config()


# =============================================================================
# Timeline Fixtures
# =============================================================================


@pytest.fixture
def career_gap_entries() -> list[TimelineEntry]:
    """One year at Acme, then a 243-day break, then an ongoing role."""
    return [
        make_entry(
            "work-0",
            date(2018, 1, 1),
            date(2018, 12, 1),
            title="Software Engineer",
            organization="Acme Corp",
        ),
        make_entry(
            "work-1",
            date(2019, 8, 1),
            None,
            title="Senior Engineer",
            organization="Globex",
        ),
    ]


@pytest.fixture
def overlapping_entries() -> list[TimelineEntry]:
    """Two positions sharing 92 days (2020-03-01 to 2020-06-01)."""
    return [
        make_entry(
            "work-0",
            date(2020, 1, 1),
            date(2020, 6, 1),
            title="Engineer",
            organization="Acme",
        ),
        make_entry(
            "work-1",
            date(2020, 3, 1),
            date(2020, 9, 1),
            title="Consultant",
            organization="Globex",
        ),
    ]


# =============================================================================
# Candidate File Fixtures
# =============================================================================


@pytest.fixture
def candidate_payload() -> dict:
    """Candidate history in the JSON shape accepted by the CLI."""
    return {
        "candidateId": "3f6c2a58-8a4e-4c8e-9a55-1f0f0e0c9d11",
        "workExperience": [
            {
                "company": "Acme Corp",
                "title": "Software Engineer",
                "startDate": "2018-01-01",
                "endDate": "2018-12-01",
                "description": "Backend services",
            },
            {
                "company": "Globex",
                "title": "Senior Engineer",
                "startDate": "2019-08-01",
                "current": True,
            },
        ],
        "education": [],
    }


@pytest.fixture
def candidate_file(tmp_path: Path, candidate_payload: dict) -> Path:
    """Candidate payload written to a temporary JSON file."""
    return create_test_json(tmp_path / "candidate.json", candidate_payload)
