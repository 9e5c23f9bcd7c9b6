"""What-if projections and the synthetic risk trend."""

from __future__ import annotations

from teamrisk.engine.detectors import RiskSignals
from teamrisk.engine.models import HistoricalTrend, TrendDirection, WhatIfScenario
from teamrisk.engine.rules import RULES, WHAT_IF_ORDER
from teamrisk.engine.scoring import classify, clamp, rule_points

MAX_SCENARIOS = 3
TREND_BAND = 5  # points of change over two weeks still considered stable


def what_if_scenarios(signals: RiskSignals, score: int) -> list[WhatIfScenario]:
    """Project the score with each reducible category fully removed."""
    scenarios: list[WhatIfScenario] = []

    for key in WHAT_IF_ORDER:
        rule = RULES[key]
        points = rule_points(rule, signals)
        if not points or rule.what_if is None:
            continue
        projected = max(0, score - points)
        scenarios.append(WhatIfScenario(
            scenario=rule.what_if(signals),
            projected_score=projected,
            projected_level=classify(projected),
            impact=-points,
        ))

    return scenarios[:MAX_SCENARIOS]


def historical_trend(current: int) -> HistoricalTrend:
    """Backcast two prior weeks from the current score.

    Illustrative only: there is no stored history behind these numbers, and
    the formula must stay exactly as is so reports remain comparable across
    versions.
    """
    week_minus_1 = clamp(current - 8 + (current % 5))
    week_minus_2 = clamp(week_minus_1 - 9 + (current % 3))
    change = current - week_minus_2
    sign = "+" if change >= 0 else ""

    if change > TREND_BAND:
        direction = TrendDirection.INCREASING
        label = f"↑ Increasing risk ({sign}{change} points over 2 weeks)"
    elif change < -TREND_BAND:
        direction = TrendDirection.DECREASING
        label = f"↓ Decreasing risk ({change} points over 2 weeks)"
    else:
        direction = TrendDirection.STABLE
        label = f"→ Stable ({sign}{change} points over 2 weeks)"

    return HistoricalTrend(
        week_minus_2=week_minus_2,
        week_minus_1=week_minus_1,
        current=current,
        change=change,
        direction=direction,
        trend=label,
    )
