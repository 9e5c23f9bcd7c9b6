"""Risk signal detectors.

Each detector is a stateless pass over the loaded activity records:

  1. Aging PRs:        open PRs older (in whole days) than the age threshold
  2. Blocked issues:   issues carrying the literal ``blocked`` label
  3. Meeting cadence:  average whole-day gap between consecutive meetings
  4. Action items:     meetings that closed without action items
  5. Follow-up:        meetings with no PR opened within 3 days afterwards
  6. Contributor load: assigned issues + authored open PRs per person

``collect_signals`` runs them all and bundles the results for the scorer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from teamrisk.engine.models import (
    ActivityData,
    AnalysisOptions,
    Issue,
    Meeting,
    OverloadedContributor,
    PullRequest,
)

ONE_DAY = timedelta(days=1)
FOLLOW_UP_WINDOW = timedelta(days=3)
BLOCKED_LABEL = "blocked"


@dataclass
class RiskSignals:
    """Everything the detectors found, before scoring."""

    aging_prs: list[PullRequest] = field(default_factory=list)
    blocked_issues: list[Issue] = field(default_factory=list)
    meetings_without_actions: list[Meeting] = field(default_factory=list)
    meetings_without_follow_up: list[Meeting] = field(default_factory=list)
    avg_meeting_gap_days: float | None = None
    contributor_load: dict[str, int] = field(default_factory=dict)
    overloaded: list[OverloadedContributor] = field(default_factory=list)


def whole_days(delta: timedelta) -> int:
    """Floor a time difference to whole days (9.9 days -> 9)."""
    return delta // ONE_DAY


def find_aging_pull_requests(
    pull_requests: list[PullRequest], threshold: int, now: datetime
) -> list[PullRequest]:
    """Open PRs whose whole-day age strictly exceeds `threshold`."""
    return [
        pr for pr in pull_requests
        if pr.is_open and whole_days(now - pr.created_at) > threshold
    ]


def find_blocked_issues(issues: list[Issue]) -> list[Issue]:
    return [issue for issue in issues if issue.has_label(BLOCKED_LABEL)]


def average_meeting_gap(meetings: list[Meeting]) -> float | None:
    """Mean whole-day gap between consecutive meetings, or None if < 2 meetings."""
    if len(meetings) < 2:
        return None

    ordered = sorted(meetings, key=lambda m: m.date)  # stable for equal dates
    total_gap = sum(
        whole_days(abs(later.date - earlier.date))
        for earlier, later in zip(ordered, ordered[1:])
    )
    return total_gap / (len(ordered) - 1)


def find_meetings_without_action_items(meetings: list[Meeting]) -> list[Meeting]:
    return [m for m in meetings if not m.has_action_items]


def has_follow_up(meeting: Meeting, pull_requests: list[PullRequest]) -> bool:
    """True if any PR was opened within [meeting, meeting + 3 days], inclusive."""
    return any(
        timedelta(0) <= pr.created_at - meeting.date <= FOLLOW_UP_WINDOW
        for pr in pull_requests
    )


def find_meetings_without_follow_up(
    meetings: list[Meeting], pull_requests: list[PullRequest]
) -> list[Meeting]:
    return [m for m in meetings if not has_follow_up(m, pull_requests)]


def contributor_load(issues: list[Issue], pull_requests: list[PullRequest]) -> dict[str, int]:
    """Count assigned issues and authored open PRs per contributor.

    Insertion order is significant: issues are counted first, then PRs, each
    in input order. Downstream overload reporting follows that order.
    """
    load: dict[str, int] = {}

    for issue in issues:
        if not issue.assignee:
            continue
        load[issue.assignee] = load.get(issue.assignee, 0) + 1

    for pr in pull_requests:
        if not pr.is_open or not pr.author:
            continue
        load[pr.author] = load.get(pr.author, 0) + 1

    return load


def find_overloaded(load: dict[str, int], threshold: int) -> list[OverloadedContributor]:
    """Contributors whose load is strictly greater than `threshold`, in load-map order."""
    return [
        OverloadedContributor(login=login, load=count)
        for login, count in load.items()
        if count > threshold
    ]


def collect_signals(
    activity: ActivityData, options: AnalysisOptions, now: datetime
) -> RiskSignals:
    """Run every detector over the activity data."""
    prs = activity.pull_requests
    load = contributor_load(activity.issues, prs)

    return RiskSignals(
        aging_prs=find_aging_pull_requests(prs, options.pr_age_threshold, now),
        blocked_issues=find_blocked_issues(activity.issues),
        meetings_without_actions=find_meetings_without_action_items(activity.meetings),
        meetings_without_follow_up=find_meetings_without_follow_up(activity.meetings, prs),
        avg_meeting_gap_days=average_meeting_gap(activity.meetings),
        contributor_load=load,
        overloaded=find_overloaded(load, options.overload_threshold),
    )
