"""Markdown and plain-text renderers for risk reports.

Generates GitHub-flavored markdown with:
  - Risk score badge (color-coded by level)
  - Key metrics and overloaded contributors
  - Drivers table
  - Insights, recommended actions and what-if scenarios
  - The illustrative trend
"""

from __future__ import annotations

from teamrisk.engine.models import RiskLevel, RiskReport

_BADGES: dict[RiskLevel, tuple[str, str]] = {
    RiskLevel.LOW: ("🟢", "green"),
    RiskLevel.MEDIUM: ("🟡", "yellow"),
    RiskLevel.HIGH: ("🟠", "orange"),
    RiskLevel.CRITICAL: ("🔴", "red"),
}


def risk_badge(level: RiskLevel) -> tuple[str, str, str]:
    """Return (emoji, label, color) for a risk level."""
    emoji, color = _BADGES[level]
    return emoji, level.value.upper(), color


def format_gap(avg_gap: float | None) -> str:
    return "N/A" if avg_gap is None else f"{avg_gap:.1f} days"


def render_markdown_report(report: RiskReport) -> str:
    """Render the full report as a markdown document."""
    sections: list[str] = []
    emoji, label, _ = risk_badge(report.risk_level)

    sections.append("# 🚨 Risk Report")
    sections.append("")
    sections.append(f"**Risk score:** {report.score}/100")
    sections.append(f"**Risk level:** {emoji} {report.risk_level.value}")
    sections.append("")
    sections.append(f"> {report.executive_summary}")
    sections.append("")

    sections.append("## Key metrics")
    sections.append("")
    sections.append(f"- {report.old_pr_count} PRs older than threshold")
    sections.append(f"- {report.blocked_issue_count} Issues marked blocked")
    sections.append(f"- {report.meetings_without_actions_count} Meetings without action items")
    sections.append(
        f"- {report.meetings_without_follow_up_count} Meetings without follow-up actions/PRs"
    )
    if report.avg_meeting_gap_days is not None:
        sections.append(f"- Avg meeting gap: {format_gap(report.avg_meeting_gap_days)}")

    if report.overloaded:
        for contributor in report.overloaded:
            sections.append(
                f"- Contributor @{contributor.login} assigned {contributor.load} items "
                "(capacity risk)"
            )
    else:
        sections.append("- No contributors flagged for overload")
    sections.append("")

    sections.append("## Top drivers")
    sections.append("")
    if report.drivers:
        sections.append("| Driver | Points |")
        sections.append("|:-------|-------:|")
        for driver in report.drivers:
            sections.append(f"| {driver.label} | +{driver.points} |")
    else:
        sections.append("_None_")
    sections.append("")

    if report.insights:
        sections.append("## Insights")
        sections.append("")
        sections.extend(f"- {insight}" for insight in report.insights)
        sections.append("")

    if report.recommended_actions:
        sections.append("## Recommended actions")
        sections.append("")
        sections.extend(
            f"{i}. {action}" for i, action in enumerate(report.recommended_actions, 1)
        )
        sections.append("")

    if report.what_if_scenarios:
        sections.append("## What-if scenarios")
        sections.append("")
        sections.append("| Scenario | Projected score | Level | Impact |")
        sections.append("|:---------|:---------------:|:-----:|-------:|")
        for s in report.what_if_scenarios:
            sections.append(
                f"| {s.scenario} | {s.projected_score} | "
                f"{s.projected_level.value} | {s.impact} |"
            )
        sections.append("")

    trend = report.historical_trend
    sections.append("## Risk trend (illustrative)")
    sections.append("")
    sections.append("| Week -2 | Week -1 | Current |")
    sections.append("|:---:|:---:|:---:|")
    sections.append(f"| {trend.week_minus_2} | {trend.week_minus_1} | {trend.current} |")
    sections.append("")
    sections.append(f"**Trend:** {trend.trend}")
    sections.append("")
    sections.append(
        "_Prior weeks are derived from the current score, not from stored history._"
    )
    sections.append("")

    sections.append(f"**Operational signal:** {report.strategic_insight}")
    sections.append("")

    if report.thresholds is not None:
        sections.append(
            f"<sub>Thresholds: PR age {report.thresholds.pr_age_threshold} days, "
            f"overload {report.thresholds.overload_threshold} items</sub>"
        )
        sections.append("")

    sections.append(_footer(label))
    return "\n".join(sections)


def render_tool_summary(report: RiskReport) -> str:
    """Plain-text summary returned to MCP clients."""
    driver_lines = "\n".join(f"• {d.label}: +{d.points}" for d in report.drivers)

    if report.overloaded:
        overloaded_lines = "\n".join(
            f"• @{c.login} ({c.load} items)" for c in report.overloaded
        )
    else:
        overloaded_lines = "• None"

    if report.insights:
        insight_lines = "\n".join(
            f"{i}. {insight}" for i, insight in enumerate(report.insights, 1)
        )
    else:
        insight_lines = "No specific recommendations."

    gap = "N/A" if report.avg_meeting_gap_days is None else f"{report.avg_meeting_gap_days:g}"

    lines = [
        "🚨 Team Risk Analysis",
        "",
        f"Risk Score: {report.score}/100 ({report.risk_level.value})",
        "",
        f"Old PRs (> threshold): {report.old_pr_count}",
        f"Blocked Issues: {report.blocked_issue_count}",
        f"Meetings w/o Action Items: {report.meetings_without_actions_count}",
        f"Meetings w/o Follow-up: {report.meetings_without_follow_up_count}",
        f"Average Meeting Gap: {gap} days",
        "",
        "Overloaded Contributors:",
        overloaded_lines,
        "",
        "Top Risk Drivers:",
        driver_lines,
        "",
        "💡 Recommendations:",
        insight_lines,
    ]
    return "\n".join(lines)


def _footer(level_label: str) -> str:
    return f"---\n*Generated by teamrisk · overall risk {level_label}*"
