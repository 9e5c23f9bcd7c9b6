"""Command-line interface for teamrisk."""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import sys
from pathlib import Path

import click

from teamrisk import __version__
from teamrisk.config import (
    OUTPUT_FORMATS,
    ProjectConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from teamrisk.exceptions import TeamRiskError
from teamrisk.ui.console import Console

console = Console()


def _configure_logging(level: str) -> None:
    from rich.console import Console as RichConsole
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=RichConsole(stderr=True), show_path=False)],
    )


def _get_project_root(path: str | None = None) -> Path:
    """Find the project root or error."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root

    root = find_project_root()
    if root is None:
        console.error(
            "No teamrisk project found. Run 'teamrisk init' first, "
            "or specify a path with --path."
        )
        sys.exit(1)
    return root


def _resolve_data_paths(
    root: Path | None,
    config: ProjectConfig,
    github: str | None,
    meetings: str | None,
) -> tuple[Path, Path, bool]:
    """Pick the dataset files: explicit flags, then project config, then samples.

    Returns (github_path, meetings_path, using_samples).
    """
    from teamrisk.loader import sample_paths

    sample_github, sample_meetings = sample_paths()
    if github or meetings:
        base = root or Path.cwd()
        github_path = Path(github) if github else base / config.data.github_file
        meetings_path = Path(meetings) if meetings else base / config.data.meetings_file
        return github_path, meetings_path, False

    if root is not None:
        github_path = root / config.data.github_file
        meetings_path = root / config.data.meetings_file
        if github_path.exists() and meetings_path.exists():
            return github_path, meetings_path, False

    return sample_github, sample_meetings, True


@click.group()
@click.version_option(version=__version__, prog_name="teamrisk")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Logging verbosity on stderr (default: warning).",
)
def main(log_level: str):
    """teamrisk - delivery risk scoring from PRs, issues and meetings."""
    _configure_logging(log_level)


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--with-samples", is_flag=True, help="Copy the sample datasets into data/.")
def init(path: str | None, with_samples: bool):
    """Initialize teamrisk for a project directory."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    console.banner()
    console.info(f"Initializing teamrisk for: {root}")

    try:
        config = load_config(root)
    except TeamRiskError as e:
        console.error(str(e))
        sys.exit(1)
    config.name = root.name
    config.root_path = str(root)
    save_config(root, config)
    console.success("Configuration saved to .teamrisk/")

    if with_samples:
        from teamrisk.loader import sample_paths

        for source, target in zip(
            sample_paths(), (config.data.github_file, config.data.meetings_file)
        ):
            dest = root / target
            if dest.exists():
                console.warning(f"Keeping existing {target}")
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, dest)
            console.success(f"Wrote sample data to {target}")


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--pr-age", type=click.IntRange(min=0), default=None,
              help="PR age threshold in days (default: 10).")
@click.option("--overload", type=click.IntRange(min=0), default=None,
              help="Overload threshold for assigned items (default: 5).")
@click.option(
    "--format", "output_format",
    type=click.Choice(list(OUTPUT_FORMATS)),
    default=None,
    help="Output format: console, md or json (default: console).",
)
@click.option("--verbose", "-v", is_flag=True,
              help="Include the thresholds used in the report.")
@click.option("--github", default=None, help="GitHub export JSON (pullRequests + issues).")
@click.option("--meetings", default=None, help="Meetings JSON.")
def analyze(
    path: str | None,
    pr_age: int | None,
    overload: int | None,
    output_format: str | None,
    verbose: bool,
    github: str | None,
    meetings: str | None,
):
    """Analyze team risk factors and print the report.

    Examples:

        teamrisk analyze

        teamrisk analyze --pr-age 7 --overload 4 --format md

        teamrisk analyze --github export.json --meetings meetings.json --format json
    """
    from teamrisk.engine import analyze_risk
    from teamrisk.loader import load_activity
    from teamrisk.report.markdown import render_markdown_report

    root = _get_project_root(path) if path else find_project_root()
    try:
        config = load_config(root) if root else ProjectConfig()
    except TeamRiskError as e:
        console.error(str(e))
        sys.exit(1)

    if pr_age is not None:
        config.thresholds.pr_age_days = pr_age
    if overload is not None:
        config.thresholds.overload_items = overload
    output_format = output_format or config.output.format
    options = config.analysis_options(verbose=verbose or None)

    github_path, meetings_path, using_samples = _resolve_data_paths(
        root, config, github, meetings
    )
    if using_samples and output_format == "console":
        console.info("No project data found, analyzing the bundled sample data.")

    try:
        activity = load_activity(github_path, meetings_path)
    except TeamRiskError as e:
        console.error(str(e))
        sys.exit(1)

    report = analyze_risk(activity, options)

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(mode="json"), indent=2))
    elif output_format == "md":
        click.echo(render_markdown_report(report))
    else:
        console.show_report(report)


# =========================================================================
# MCP Server
# =========================================================================

@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option(
    "--transport", "-t",
    type=click.Choice(["stdio"]),
    default="stdio",
    help="Transport protocol (default: stdio).",
)
@click.option("--generate-config", type=click.Choice(["claude", "cursor"]),
              default=None, help="Generate MCP config for a client.")
def serve(path: str | None, transport: str, generate_config: str | None):
    """Start the MCP server for AI tool integration.

    Exposes the risk engine as the `analyze_team_risk` MCP tool.

    Setup for Claude Code:

        teamrisk serve --generate-config claude >> ~/.claude/mcp_servers.json

    Setup for Cursor:

        teamrisk serve --generate-config cursor >> .cursor/mcp.json
    """
    from teamrisk.mcp.server import MCPServer

    if generate_config:
        root_path = str(Path(path or ".").resolve())
        if generate_config == "claude":
            config = MCPServer.generate_claude_config(root_path)
        else:
            config = MCPServer.generate_cursor_config(root_path)
        click.echo(json.dumps(config, indent=2))
        return

    root = _get_project_root(path) if path else (find_project_root() or Path.cwd())
    try:
        server = MCPServer(root)
    except TeamRiskError as e:
        console.error(str(e))
        sys.exit(1)

    if transport == "stdio":
        asyncio.run(server.run_stdio())


# =========================================================================
# Config Management
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage teamrisk configuration."""
    root = _get_project_root(path)
    try:
        config = load_config(root)
    except TeamRiskError as e:
        console.error(str(e))
        sys.exit(1)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: teamrisk config get <key>")
            sys.exit(1)
        data = config.model_dump()
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(1)
        console.console.print(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: teamrisk config set <key> <value>")
            sys.exit(1)
        # Try to parse as JSON for non-string values
        try:
            parsed_value = json.loads(value)
        except json.JSONDecodeError:
            parsed_value = value

        try:
            config = set_config_value(config, key, parsed_value)
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)
        except TeamRiskError as e:
            console.error(str(e))
            sys.exit(1)
        save_config(root, config)
        console.success(f"Set {key} = {parsed_value}")


if __name__ == "__main__":
    main()
