#!/usr/bin/env python3
"""Demo: Using teamrisk as a Python library.

This shows how to use the risk engine programmatically, not just as a CLI tool.
"""

from teamrisk.engine import AnalysisOptions, analyze_risk
from teamrisk.loader import load_activity, sample_paths
from teamrisk.report.markdown import render_markdown_report


def main():
    # 1. Load the bundled sample dataset
    github, meetings = sample_paths()
    activity = load_activity(github, meetings)
    print(f"Loaded {len(activity.pull_requests)} PRs, {len(activity.issues)} issues, "
          f"{len(activity.meetings)} meetings")

    # 2. Score it with the default thresholds
    report = analyze_risk(activity)
    print(f"\nRisk score: {report.score}/100 ({report.risk_level.value})")
    print(report.executive_summary)

    print("\n--- Top drivers ---")
    for driver in report.drivers:
        print(f"  {driver.label}: +{driver.points}")

    # 3. Compare stricter thresholds side by side
    strict = analyze_risk(activity, AnalysisOptions(pr_age_threshold=5, overload_threshold=3))
    print(f"\nWith 5-day / 3-item thresholds: {strict.score}/100 ({strict.risk_level.value})")

    # 4. What would help most?
    print("\n--- What-if ---")
    for scenario in report.what_if_scenarios:
        print(f"  {scenario.scenario}: {scenario.projected_score} "
              f"({scenario.projected_level.value}, {scenario.impact} points)")

    # 5. Render markdown, e.g. for a PR comment or wiki page
    print("\n--- Markdown report ---")
    print(render_markdown_report(report))


if __name__ == "__main__":
    main()
