"""Risk engine: activity records in, scored and explained report out.

Usage:
    from teamrisk.engine import ActivityData, AnalysisOptions, analyze_risk

    report = analyze_risk(activity, AnalysisOptions(pr_age_threshold=7))
    print(report.score, report.risk_level.value)
"""

from teamrisk.engine.analyzer import analyze_risk
from teamrisk.engine.models import (
    ActivityData,
    AnalysisOptions,
    Driver,
    HistoricalTrend,
    Issue,
    Meeting,
    OverloadedContributor,
    PullRequest,
    RiskLevel,
    RiskReport,
    WhatIfScenario,
)

__all__ = [
    "analyze_risk",
    "ActivityData",
    "AnalysisOptions",
    "Driver",
    "HistoricalTrend",
    "Issue",
    "Meeting",
    "OverloadedContributor",
    "PullRequest",
    "RiskLevel",
    "RiskReport",
    "WhatIfScenario",
]
