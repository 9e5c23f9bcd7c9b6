"""Tests for the risk signal detectors."""

from __future__ import annotations

from datetime import timedelta

import pytest

from teamrisk.engine import analyze_risk
from teamrisk.engine.detectors import (
    average_meeting_gap,
    collect_signals,
    contributor_load,
    find_aging_pull_requests,
    find_blocked_issues,
    find_meetings_without_action_items,
    find_meetings_without_follow_up,
    find_overloaded,
    whole_days,
)
from teamrisk.engine.models import ActivityData, AnalysisOptions, PullRequest


class TestWholeDays:
    def test_truncates_fraction(self):
        assert whole_days(timedelta(days=9, hours=23)) == 9

    def test_exact_days(self):
        assert whole_days(timedelta(days=3)) == 3


class TestAgingPullRequests:
    def test_older_than_threshold(self, make_pr, now):
        prs = [make_pr(days_old=11)]
        assert find_aging_pull_requests(prs, 10, now) == prs

    def test_fractional_age_is_truncated(self, make_pr, now):
        # 9.9 and 10.1 days both truncate to a whole-day age that is not > 10
        prs = [make_pr(days_old=9.9), make_pr(days_old=10.1)]
        assert find_aging_pull_requests(prs, 10, now) == []

    def test_closed_prs_ignored(self, make_pr, now):
        prs = [make_pr(days_old=30, status="closed")]
        assert find_aging_pull_requests(prs, 10, now) == []

    def test_future_pr_not_aging(self, make_pr, now):
        prs = [make_pr(days_old=-2)]
        assert find_aging_pull_requests(prs, 0, now) == []

    def test_keeps_full_records(self, make_pr, now):
        old = make_pr(days_old=20, author="alice")
        result = find_aging_pull_requests([make_pr(days_old=1), old], 10, now)
        assert result[0].author == "alice"
        assert result[0].id == old.id


class TestBlockedIssues:
    def test_blocked_label(self, make_issue):
        blocked = make_issue(labels=["bug", "blocked"])
        assert find_blocked_issues([blocked, make_issue(labels=["bug"])]) == [blocked]

    def test_case_sensitive(self, make_issue):
        assert find_blocked_issues([make_issue(labels=["Blocked"])]) == []

    def test_exact_match_only(self, make_issue):
        assert find_blocked_issues([make_issue(labels=["blocked-by-infra"])]) == []

    def test_missing_labels(self, make_issue):
        assert find_blocked_issues([make_issue(labels=None)]) == []


class TestMeetingCadence:
    def test_fewer_than_two_meetings(self, make_meeting, now):
        assert average_meeting_gap([]) is None
        assert average_meeting_gap([make_meeting(now)]) is None

    def test_average_gap(self, make_meeting, now):
        meetings = [
            make_meeting(now),
            make_meeting(now + timedelta(days=7)),
            make_meeting(now + timedelta(days=18)),
        ]
        assert average_meeting_gap(meetings) == 9.0

    def test_unsorted_input(self, make_meeting, now):
        meetings = [
            make_meeting(now + timedelta(days=10)),
            make_meeting(now),
            make_meeting(now + timedelta(days=4)),
        ]
        assert average_meeting_gap(meetings) == 5.0

    def test_gaps_truncated_to_whole_days(self, make_meeting, now):
        meetings = [make_meeting(now), make_meeting(now + timedelta(days=1, hours=20))]
        assert average_meeting_gap(meetings) == 1.0

    def test_same_day_meetings(self, make_meeting, now):
        assert average_meeting_gap([make_meeting(now), make_meeting(now)]) == 0.0

    def test_non_integer_average(self, make_meeting, now):
        meetings = [
            make_meeting(now),
            make_meeting(now + timedelta(days=7)),
            make_meeting(now + timedelta(days=14)),
            make_meeting(now + timedelta(days=25)),
        ]
        assert average_meeting_gap(meetings) == 25 / 3


class TestActionItems:
    def test_missing_or_false(self, make_meeting, now):
        with_items = make_meeting(now, has_action_items=True)
        without = make_meeting(now, has_action_items=False)
        unset = make_meeting(now, has_action_items=None)
        result = find_meetings_without_action_items([with_items, without, unset])
        assert result == [without, unset]


class TestFollowUp:
    def test_pr_within_window(self, make_meeting, make_pr, now):
        meeting = make_meeting(now)
        pr = make_pr(created_at=now + timedelta(days=1))
        assert find_meetings_without_follow_up([meeting], [pr]) == []

    def test_inclusive_boundaries(self, make_meeting, make_pr, now):
        meeting = make_meeting(now)
        assert find_meetings_without_follow_up([meeting], [make_pr(created_at=now)]) == []
        at_three_days = make_pr(created_at=now + timedelta(days=3))
        assert find_meetings_without_follow_up([meeting], [at_three_days]) == []

    def test_pr_just_after_window(self, make_meeting, make_pr, now):
        meeting = make_meeting(now)
        late = make_pr(created_at=now + timedelta(days=3, seconds=1))
        assert find_meetings_without_follow_up([meeting], [late]) == [meeting]

    def test_pr_before_meeting(self, make_meeting, make_pr, now):
        meeting = make_meeting(now)
        early = make_pr(created_at=now - timedelta(hours=1))
        assert find_meetings_without_follow_up([meeting], [early]) == [meeting]

    def test_closed_pr_counts_as_follow_up(self, make_meeting, make_pr, now):
        meeting = make_meeting(now)
        pr = make_pr(created_at=now + timedelta(hours=5), status="closed")
        assert find_meetings_without_follow_up([meeting], [pr]) == []

    def test_no_prs(self, make_meeting, now):
        meetings = [make_meeting(now), make_meeting(now + timedelta(days=7))]
        assert find_meetings_without_follow_up(meetings, []) == meetings


class TestContributorLoad:
    def test_counts_issues_and_open_prs(self, make_issue, make_pr):
        issues = [make_issue(assignee="alice"), make_issue(assignee="bob")]
        prs = [make_pr(author="alice"), make_pr(author="alice", status="closed")]
        assert contributor_load(issues, prs) == {"alice": 2, "bob": 1}

    def test_missing_assignee_and_author(self, make_issue, make_pr):
        assert contributor_load([make_issue(assignee=None)], [make_pr(author=None)]) == {}

    def test_insertion_order_issues_first(self, make_issue, make_pr):
        issues = [make_issue(assignee="zed")]
        prs = [make_pr(author="amy"), make_pr(author="zed")]
        assert list(contributor_load(issues, prs)) == ["zed", "amy"]


class TestOverloaded:
    def test_strictly_greater_than_threshold(self):
        result = find_overloaded({"alice": 5, "bob": 6}, 5)
        assert [(c.login, c.load) for c in result] == [("bob", 6)]

    def test_keeps_load_map_order(self):
        result = find_overloaded({"zed": 9, "amy": 7, "kim": 1}, 5)
        assert [c.login for c in result] == ["zed", "amy"]


class TestCollectSignals:
    def test_empty_activity(self, now):
        signals = collect_signals(ActivityData(), AnalysisOptions(), now)
        assert signals.aging_prs == []
        assert signals.blocked_issues == []
        assert signals.meetings_without_actions == []
        assert signals.meetings_without_follow_up == []
        assert signals.avg_meeting_gap_days is None
        assert signals.contributor_load == {}
        assert signals.overloaded == []

    def test_uses_thresholds(self, make_pr, now):
        activity = ActivityData(pull_requests=[make_pr(days_old=6, author="alice")])
        options = AnalysisOptions(pr_age_threshold=5, overload_threshold=0)
        signals = collect_signals(activity, options, now)
        assert len(signals.aging_prs) == 1
        assert [c.login for c in signals.overloaded] == ["alice"]


class TestPullRequestWithoutStatus:
    @pytest.fixture
    def unstated(self):
        return [
            PullRequest.model_validate(
                {"id": i, "createdAt": "2024-01-01T09:00:00Z", "author": "alice"}
            )
            for i in range(6)
        ]

    def test_not_open(self, unstated):
        assert unstated[0].status is None
        assert not unstated[0].is_open

    def test_not_aging(self, unstated, now):
        assert find_aging_pull_requests(unstated, 10, now) == []

    def test_no_contributor_load(self, unstated):
        assert contributor_load([], unstated) == {}

    def test_contributes_nothing_to_score(self, unstated, now):
        report = analyze_risk(ActivityData(pull_requests=unstated), now=now)
        assert report.old_pr_count == 0
        assert report.contributor_load == {}
        assert report.score == 0
