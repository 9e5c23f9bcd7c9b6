"""Custom exceptions for teamrisk."""


class TeamRiskError(Exception):
    """Base exception for all teamrisk errors."""


class ConfigError(TeamRiskError):
    """Configuration-related errors."""


class DataError(TeamRiskError):
    """Activity data could not be loaded or validated."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load {path}: {reason}")
