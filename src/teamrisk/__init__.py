"""teamrisk - delivery risk scoring from a team's pull requests, issues and meetings."""

__version__ = "0.1.0"
