"""Rich-powered console output for teamrisk."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from teamrisk import __version__
from teamrisk.engine.models import RiskLevel, RiskReport, TrendDirection

LEVEL_STYLES: dict[RiskLevel, tuple[str, str]] = {
    RiskLevel.CRITICAL: ("red", "🔴"),
    RiskLevel.HIGH: ("dark_orange", "🟠"),
    RiskLevel.MEDIUM: ("yellow", "🟡"),
    RiskLevel.LOW: ("green", "🟢"),
}

TREND_STYLES: dict[TrendDirection, str] = {
    TrendDirection.INCREASING: "red",
    TrendDirection.DECREASING: "green",
    TrendDirection.STABLE: "yellow",
}

METER_BLOCKS = 20


def risk_meter(score: int, level: RiskLevel) -> str:
    """Render a 20-block bar in rich markup, filled proportionally to the score."""
    filled = round(score / 100 * METER_BLOCKS)
    color, _ = LEVEL_STYLES[level]
    return (
        f"[[{color}]{'█' * filled}[/{color}]"
        f"[grey50]{'░' * (METER_BLOCKS - filled)}[/grey50]] {score}%"
    )


class Console:
    """Terminal output for teamrisk using Rich."""

    def __init__(self, console: RichConsole | None = None) -> None:
        self.console = console or RichConsole()

    def banner(self) -> None:
        self.console.print(
            Panel(
                f"[bold cyan]teamrisk[/bold cyan] [dim]v{__version__}[/dim]\n"
                "[dim]Delivery risk from pull requests, issues and meetings[/dim]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def show_report(self, report: RiskReport) -> None:
        """Display a full risk report."""
        color, icon = LEVEL_STYLES[report.risk_level]
        out = self.console

        out.print()
        out.print(
            Panel(
                f"[bold {color}]{icon} TEAM HEALTH STATUS: "
                f"{report.risk_level.value.upper()} RISK[/bold {color}]\n"
                f"[dim]Risk Index: {report.score}/100[/dim]",
                border_style=color,
            )
        )
        out.print(f"Risk Meter: {risk_meter(report.score, report.risk_level)}")
        out.print()

        if report.executive_summary:
            out.print("[bold underline]Executive Summary[/bold underline]")
            out.print(f"[italic]{report.executive_summary}[/italic]")
            out.print()

        self.show_metrics(report)
        self.show_drivers(report)

        if report.recommended_actions:
            out.print("\n[bold underline]Recommended Actions[/bold underline]")
            for i, action in enumerate(report.recommended_actions, 1):
                out.print(f"  [green]{i}. {action}[/green]")

        if report.what_if_scenarios:
            self.show_scenarios(report)

        self.show_trend(report)

        if report.strategic_insight:
            out.print()
            out.print(f"[bold cyan]🎯 Operational Signal:[/bold cyan] {report.strategic_insight}")

        if report.thresholds is not None:
            out.print(
                f"[dim]Thresholds: PR age {report.thresholds.pr_age_threshold} days, "
                f"overload {report.thresholds.overload_threshold} items[/dim]"
            )

        out.print()
        out.rule(style="grey50")
        out.print(f"[dim]Report generated: {datetime.now():%Y-%m-%d %H:%M:%S}[/dim]")
        out.print()

    def show_metrics(self, report: RiskReport) -> None:
        table = Table(title="Key Metrics", border_style="cyan", title_justify="left")
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="cyan")

        table.add_row("PRs older than threshold", str(report.old_pr_count))
        table.add_row("Issues marked blocked", str(report.blocked_issue_count))
        table.add_row("Meetings without action items", str(report.meetings_without_actions_count))
        table.add_row(
            "Meetings without follow-up PRs", str(report.meetings_without_follow_up_count)
        )
        gap = report.avg_meeting_gap_days
        table.add_row("Avg meeting gap", "N/A" if gap is None else f"{gap:.1f} days")

        if report.overloaded:
            table.add_section()
            for contributor in report.overloaded:
                table.add_row(
                    f"  @{contributor.login} (capacity risk)",
                    f"{contributor.load} items",
                )

        self.console.print(table)
        if not report.overloaded:
            self.console.print("[dim]No contributors flagged for overload[/dim]")

    def show_drivers(self, report: RiskReport) -> None:
        self.console.print("\n[bold]Top Risk Drivers[/bold]")
        if not report.drivers:
            self.console.print("  None")
            return
        for driver in report.drivers:
            self.console.print(f"  • {driver.label} [bold](+{driver.points})[/bold]")

    def show_scenarios(self, report: RiskReport) -> None:
        self.console.print("\n[bold underline]📊 Simulation Mode[/bold underline]")
        for scenario in report.what_if_scenarios:
            color, _ = LEVEL_STYLES[scenario.projected_level]
            self.console.print(f"  {scenario.scenario}:")
            self.console.print(
                f"    [{color}]→ Projected Score: {scenario.projected_score} "
                f"({scenario.projected_level.value})[/{color}]"
            )
            self.console.print(f"    [green]→ Impact: {scenario.impact} points[/green]")

    def show_trend(self, report: RiskReport) -> None:
        trend = report.historical_trend
        color = TREND_STYLES[trend.direction]
        self.console.print(
            "\n[bold underline]📈 Risk Trend (Last 3 Weeks)[/bold underline] "
            "[dim](illustrative)[/dim]"
        )
        self.console.print(f"  Week -2: {trend.week_minus_2}")
        self.console.print(f"  Week -1: {trend.week_minus_1}")
        self.console.print(f"  Current: {trend.current}")
        self.console.print(f"  [bold {color}]Trend:   {trend.trend}[/bold {color}]")
