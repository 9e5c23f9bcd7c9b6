"""Narrative text: executive summary, strategic insight, insights and actions."""

from __future__ import annotations

from teamrisk.engine.detectors import RiskSignals
from teamrisk.engine.models import AnalysisOptions, Driver, RiskLevel
from teamrisk.engine.rules import ACTION_ORDER, INSIGHT_ORDER, RULES

MAX_INSIGHTS = 5
MAX_ACTIONS = 5

EXECUTIVE_SUMMARIES: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: (
        "The team is in a Critical risk state. Without immediate intervention, "
        "delivery commitments are at risk of failure within the current sprint."
    ),
    RiskLevel.HIGH: (
        "The team is operating in a High-risk state. Without intervention, sprint "
        "predictability and review throughput are likely to degrade within the next cycle."
    ),
    RiskLevel.MEDIUM: (
        "The team shows Moderate operational risk. Unaddressed, current patterns "
        "could escalate within 2-3 sprints."
    ),
    RiskLevel.LOW: (
        "The team is currently operating in a Low-risk state with stable workflow "
        "patterns. Continue current practices."
    ),
}


def executive_summary(level: RiskLevel) -> str:
    return EXECUTIVE_SUMMARIES[level]


def strategic_insight(drivers: list[Driver]) -> str:
    """Name the dominant drivers. Expects `drivers` already sorted by points."""
    if len(drivers) >= 2:
        first, second = drivers[0], drivers[1]
        return (
            f"{first.label} and {second.label.lower()} "
            "are the dominant instability drivers."
        )
    if len(drivers) == 1:
        return f"{drivers[0].label} is the primary instability driver."
    return "No significant risk drivers detected."


def _render(order: tuple[str, ...], kind: str, signals: RiskSignals,
            options: AnalysisOptions, limit: int) -> list[str]:
    lines: list[str] = []
    for key in order:
        rule = RULES[key]
        if not rule.count(signals):
            continue
        template = rule.insight if kind == "insight" else rule.action
        lines.append(template(signals, options))
    return lines[:limit]


def build_insights(signals: RiskSignals, options: AnalysisOptions) -> list[str]:
    return _render(INSIGHT_ORDER, "insight", signals, options, MAX_INSIGHTS)


def build_recommended_actions(signals: RiskSignals, options: AnalysisOptions) -> list[str]:
    """Concrete next steps, workload first."""
    return _render(ACTION_ORDER, "action", signals, options, MAX_ACTIONS)
