"""Data models for team activity records and risk reports."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_utc(value: Any) -> Any:
    """Coerce ISO-8601 strings and naive datetimes to aware UTC datetimes.

    Naive values (including date-only strings) are read as UTC so results
    never depend on the host timezone. Anything unparseable is left for
    pydantic to reject.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class _Record(BaseModel):
    """Immutable input record. Accepts both camelCase JSON keys and field names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class PullRequest(_Record):
    """A pull request as exported from the code host."""

    id: str | int
    status: str | None = None  # "open" or "closed"; anything else is neither
    created_at: datetime = Field(alias="createdAt")
    author: str | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, value: Any) -> Any:
        return to_utc(value)

    @property
    def is_open(self) -> bool:
        return self.status == "open"


class Issue(_Record):
    """A tracked issue."""

    id: str | int
    title: str = ""
    assignee: str | None = None
    labels: list[str] | None = None

    def has_label(self, label: str) -> bool:
        return label in (self.labels or [])


class Meeting(_Record):
    """A team meeting and whether it closed with recorded action items."""

    date: datetime
    title: str = ""
    has_action_items: bool | None = Field(default=False, alias="hasActionItems")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> Any:
        return to_utc(value)


class ActivityData(BaseModel):
    """The three input collections for one analysis run."""

    model_config = ConfigDict(populate_by_name=True)

    pull_requests: list[PullRequest] = Field(default_factory=list, alias="pullRequests")
    issues: list[Issue] = Field(default_factory=list)
    meetings: list[Meeting] = Field(default_factory=list)


class AnalysisOptions(BaseModel):
    """Per-invocation engine configuration."""

    model_config = ConfigDict(frozen=True)

    pr_age_threshold: int = Field(default=10, ge=0)  # days
    overload_threshold: int = Field(default=5, ge=0)  # assigned items
    verbose: bool = False


class RiskLevel(str, Enum):
    """Risk classification bands."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Driver(_Frozen):
    """One contributing factor to the risk score."""

    label: str
    points: int = Field(ge=0)


class OverloadedContributor(_Frozen):
    login: str
    load: int


class WhatIfScenario(_Frozen):
    """Projected outcome if one risk category were fully resolved."""

    scenario: str
    projected_score: int
    projected_level: RiskLevel
    impact: int  # always <= 0


class HistoricalTrend(_Frozen):
    """Synthetic two-week backcast derived from the current score.

    This is a display heuristic, not measured history: both prior weeks are
    computed from the current score alone.
    """

    week_minus_2: int
    week_minus_1: int
    current: int
    change: int
    direction: TrendDirection
    trend: str


class ThresholdsUsed(_Frozen):
    pr_age_threshold: int
    overload_threshold: int


class RiskReport(_Frozen):
    """The engine's output for one analysis run."""

    old_pr_count: int = 0
    blocked_issue_count: int = 0
    meetings_without_actions_count: int = 0
    meetings_without_follow_up_count: int = 0
    avg_meeting_gap_days: float | None = None  # None when fewer than 2 meetings
    overloaded: list[OverloadedContributor] = Field(default_factory=list)
    contributor_load: dict[str, int] = Field(default_factory=dict)
    score: int = 0
    risk_level: RiskLevel = RiskLevel.LOW
    executive_summary: str = ""
    strategic_insight: str = ""
    drivers: list[Driver] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    recommended_actions: list[str] = Field(default_factory=list)
    what_if_scenarios: list[WhatIfScenario] = Field(default_factory=list)
    historical_trend: HistoricalTrend
    thresholds: ThresholdsUsed | None = None  # populated in verbose mode only
