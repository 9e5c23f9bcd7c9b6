"""Shared test fixtures for teamrisk."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from teamrisk.engine.models import ActivityData, Issue, Meeting, PullRequest
from teamrisk.loader import load_activity, sample_paths

# Reference instant used wherever a test needs a deterministic "now".
NOW = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_pr():
    """Build a PullRequest `days_old` days before NOW."""
    counter = iter(range(1, 10_000))

    def _make(days_old: float = 0.0, status: str = "open", author: str | None = None,
              created_at: datetime | None = None) -> PullRequest:
        return PullRequest(
            id=next(counter),
            status=status,
            created_at=created_at or NOW - timedelta(days=days_old),
            author=author,
        )

    return _make


@pytest.fixture
def make_issue():
    counter = iter(range(1, 10_000))

    def _make(assignee: str | None = None, labels: list[str] | None = None) -> Issue:
        return Issue(id=next(counter), assignee=assignee, labels=labels)

    return _make


@pytest.fixture
def make_meeting():
    def _make(when: datetime, has_action_items: bool | None = True) -> Meeting:
        return Meeting(date=when, has_action_items=has_action_items)

    return _make


@pytest.fixture
def sample_activity() -> ActivityData:
    """The bundled sample dataset."""
    github, meetings = sample_paths()
    return load_activity(github, meetings)


GITHUB_EXPORT = {
    "pullRequests": [
        {"id": 1, "status": "open", "createdAt": "2020-01-01T09:00:00Z", "author": "alice"},
        {"id": 2, "status": "open", "createdAt": "2020-01-03T09:00:00Z", "author": "alice"},
        {"id": 3, "status": "closed", "createdAt": "2020-01-04T09:00:00Z", "author": "bob"},
    ],
    "issues": [
        {"id": 10, "assignee": "alice", "labels": ["blocked"]},
        {"id": 11, "assignee": "alice", "labels": ["bug"]},
        {"id": 12, "assignee": "alice"},
        {"id": 13, "assignee": "alice", "labels": None},
        {"id": 14, "assignee": "bob", "labels": ["blocked"]},
    ],
}

MEETINGS_LOG = [
    {"date": "2020-01-01T08:00:00Z", "hasActionItems": True},
    {"date": "2020-01-10T08:00:00Z", "hasActionItems": False},
    {"date": "2020-01-20T08:00:00Z"},
]


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """A project directory with a .teamrisk config and activity data."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "github.json").write_text(json.dumps(GITHUB_EXPORT))
    (data_dir / "meetings.json").write_text(json.dumps(MEETINGS_LOG))
    (tmp_path / ".teamrisk").mkdir()
    return tmp_path
