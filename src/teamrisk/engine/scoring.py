"""Score composition and risk classification."""

from __future__ import annotations

from teamrisk.engine.detectors import RiskSignals
from teamrisk.engine.models import Driver, RiskLevel
from teamrisk.engine.rules import SCORED_RULES, RiskRule

MIN_SCORE = 0
MAX_SCORE = 100

# Inclusive lower bounds, checked from the top.
LEVEL_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (80, RiskLevel.CRITICAL),
    (50, RiskLevel.HIGH),
    (25, RiskLevel.MEDIUM),
)


def clamp(value: int, low: int = MIN_SCORE, high: int = MAX_SCORE) -> int:
    return max(low, min(high, value))


def category_points(rule: RiskRule, count: int) -> int:
    """Points for `count` occurrences of a category, capped per category."""
    if count <= 0 or not rule.scored:
        return 0
    return min(rule.cap, count * rule.weight)


def rule_points(rule: RiskRule, signals: RiskSignals) -> int:
    return category_points(rule, rule.count(signals))


def score_signals(signals: RiskSignals) -> tuple[int, list[Driver]]:
    """Accumulate category points into a 0-100 score.

    Returns the score and the non-zero drivers, highest first. Equal points
    keep category evaluation order.
    """
    score = MIN_SCORE
    drivers: list[Driver] = []

    for rule in SCORED_RULES:
        points = rule_points(rule, signals)
        if not points:
            continue
        score = clamp(score + points)
        drivers.append(Driver(label=rule.label, points=points))

    drivers.sort(key=lambda d: d.points, reverse=True)
    return clamp(score), drivers


def classify(score: int) -> RiskLevel:
    for lower_bound, level in LEVEL_THRESHOLDS:
        if score >= lower_bound:
            return level
    return RiskLevel.LOW
