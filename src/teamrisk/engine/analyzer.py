"""Risk engine entry point.

Turns activity records into a scored, explained ``RiskReport``:

    detectors -> scorer -> classification -> narrative -> simulation

The pipeline is pure and synchronous. Nothing is shared between calls, so
the same process can analyze several teams (or thresholds) side by side.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from teamrisk.engine.detectors import collect_signals
from teamrisk.engine.models import (
    ActivityData,
    AnalysisOptions,
    RiskReport,
    ThresholdsUsed,
    to_utc,
)
from teamrisk.engine.narrative import (
    build_insights,
    build_recommended_actions,
    executive_summary,
    strategic_insight,
)
from teamrisk.engine.scoring import classify, score_signals
from teamrisk.engine.simulation import historical_trend, what_if_scenarios

logger = logging.getLogger("teamrisk.engine")


def analyze_risk(
    activity: ActivityData,
    options: AnalysisOptions | None = None,
    now: datetime | None = None,
) -> RiskReport:
    """Score team activity and explain the result.

    Args:
        activity: Pull requests, issues and meetings to analyze.
        options: Thresholds and verbosity. Defaults to 10 days / 5 items.
        now: Reference instant for PR ages. Defaults to the current UTC time.

    Returns:
        A new, immutable RiskReport.
    """
    options = options or AnalysisOptions()
    now = to_utc(now) if now is not None else datetime.now(timezone.utc)

    signals = collect_signals(activity, options, now)
    logger.debug(
        "Signals: %d aging PRs, %d blocked issues, %d meetings w/o follow-up, "
        "%d meetings w/o action items, %d overloaded",
        len(signals.aging_prs),
        len(signals.blocked_issues),
        len(signals.meetings_without_follow_up),
        len(signals.meetings_without_actions),
        len(signals.overloaded),
    )

    score, drivers = score_signals(signals)
    level = classify(score)
    logger.debug("Score %d (%s) from %d driver(s)", score, level.value, len(drivers))

    thresholds = None
    if options.verbose:
        thresholds = ThresholdsUsed(
            pr_age_threshold=options.pr_age_threshold,
            overload_threshold=options.overload_threshold,
        )

    return RiskReport(
        old_pr_count=len(signals.aging_prs),
        blocked_issue_count=len(signals.blocked_issues),
        meetings_without_actions_count=len(signals.meetings_without_actions),
        meetings_without_follow_up_count=len(signals.meetings_without_follow_up),
        avg_meeting_gap_days=signals.avg_meeting_gap_days,
        overloaded=signals.overloaded,
        contributor_load=signals.contributor_load,
        score=score,
        risk_level=level,
        executive_summary=executive_summary(level),
        strategic_insight=strategic_insight(drivers),
        drivers=drivers,
        insights=build_insights(signals, options),
        recommended_actions=build_recommended_actions(signals, options),
        what_if_scenarios=what_if_scenarios(signals, score),
        historical_trend=historical_trend(score),
        thresholds=thresholds,
    )
