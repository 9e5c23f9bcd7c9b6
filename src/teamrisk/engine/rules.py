"""Declarative risk rule table.

One ``RiskRule`` per category: how to count it, how many points each
occurrence is worth, where its contribution is capped, and the sentences
used when it fires. Adding a category means adding a row here and naming it
in the orderings below; the scorer, narrative and simulation stages read the
table and never branch on individual categories.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from teamrisk.engine.detectors import RiskSignals
from teamrisk.engine.models import AnalysisOptions

Template = Callable[[RiskSignals, AnalysisOptions], str]


@dataclass(frozen=True)
class RiskRule:
    """A risk category and everything needed to score and explain it."""

    key: str
    label: str
    count: Callable[[RiskSignals], int]
    insight: Template
    action: Template
    weight: int = 0  # points per occurrence; 0 = informational only
    cap: int = 0
    what_if: Callable[[RiskSignals], str] | None = None

    @property
    def scored(self) -> bool:
        return self.weight > 0


def _is_or_are(n: int, noun: str) -> str:
    return f"{n} {noun} is" if n == 1 else f"{n} {noun}s are"


def _reassign_count(signals: RiskSignals, options: AnalysisOptions) -> int:
    top = signals.overloaded[0]
    return min(2, top.load - options.overload_threshold)


AGING_PRS = RiskRule(
    key="aging_prs",
    label="Aging PRs",
    weight=10,
    cap=40,
    count=lambda s: len(s.aging_prs),
    insight=lambda s, o: (
        f"Review throughput bottleneck: {len(s.aging_prs)} PR(s) open > "
        f"{o.pr_age_threshold} days. Consider adding reviewers or reducing PR size."
    ),
    action=lambda s, o: (
        f"Review and prioritize {len(s.aging_prs)} PR(s) older than "
        f"{o.pr_age_threshold} days"
    ),
    what_if=lambda s: f"If {_is_or_are(len(s.aging_prs), 'aging PR')} merged/closed",
)

BLOCKED_ISSUES = RiskRule(
    key="blocked_issues",
    label="Blocked issues",
    weight=15,
    cap=30,
    count=lambda s: len(s.blocked_issues),
    insight=lambda s, o: (
        f"{len(s.blocked_issues)} blocked issue(s) detected. "
        "Escalate external dependencies."
    ),
    action=lambda s, o: f"Escalate {len(s.blocked_issues)} blocked issue(s) in next standup",
    what_if=lambda s: f"If {_is_or_are(len(s.blocked_issues), 'blocked issue')} resolved",
)

MISSING_FOLLOW_UP = RiskRule(
    key="missing_follow_up",
    label="Meetings w/o follow-up",
    weight=7,
    cap=20,
    count=lambda s: len(s.meetings_without_follow_up),
    insight=lambda s, o: (
        f"{len(s.meetings_without_follow_up)} meeting(s) lacked follow-up PRs "
        "within 3 days. Improve accountability tracking."
    ),
    action=lambda s, o: (
        f"Assign owners to {len(s.meetings_without_follow_up)} meeting(s) "
        "lacking follow-up"
    ),
)

CONTRIBUTOR_OVERLOAD = RiskRule(
    key="contributor_overload",
    label="Contributor overload",
    weight=10,
    cap=20,
    count=lambda s: len(s.overloaded),
    insight=lambda s, o: (
        "Workload imbalance: "
        + ", ".join(f"@{c.login}" for c in s.overloaded)
        + f" exceed {o.overload_threshold}-item threshold. Consider redistribution."
    ),
    action=lambda s, o: (
        f"Reassign {_reassign_count(s, o)} item(s) from @{s.overloaded[0].login} "
        "to balance workload"
    ),
    what_if=lambda s: "If workload is redistributed from overloaded contributors",
)

MISSING_ACTION_ITEMS = RiskRule(
    key="missing_action_items",
    label="Meetings w/o action items",
    count=lambda s: len(s.meetings_without_actions),
    insight=lambda s, o: (
        f"{len(s.meetings_without_actions)} meeting(s) ended without action items. "
        "Enforce structured close-outs."
    ),
    action=lambda s, o: (
        f"Add action items to {len(s.meetings_without_actions)} meeting(s) retroactively"
    ),
)

RULES: dict[str, RiskRule] = {
    rule.key: rule
    for rule in (
        AGING_PRS,
        BLOCKED_ISSUES,
        MISSING_FOLLOW_UP,
        CONTRIBUTOR_OVERLOAD,
        MISSING_ACTION_ITEMS,
    )
}

# Scoring order doubles as the tie-break order for drivers.
SCORED_RULES: tuple[RiskRule, ...] = tuple(rule for rule in RULES.values() if rule.scored)

INSIGHT_ORDER = (
    "aging_prs",
    "blocked_issues",
    "missing_follow_up",
    "missing_action_items",
    "contributor_overload",
)
ACTION_ORDER = (
    "contributor_overload",
    "aging_prs",
    "missing_follow_up",
    "blocked_issues",
    "missing_action_items",
)
WHAT_IF_ORDER = ("blocked_issues", "aging_prs", "contributor_overload")
