"""Configuration management for teamrisk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from teamrisk.engine.models import AnalysisOptions
from teamrisk.exceptions import ConfigError

TEAMRISK_DIR = ".teamrisk"
CONFIG_FILE = "config.json"

OUTPUT_FORMATS = ("console", "md", "json")


class ThresholdConfig(BaseModel):
    """Risk detection thresholds."""

    pr_age_days: int = Field(default=10, ge=0)
    overload_items: int = Field(default=5, ge=0)


class DataConfig(BaseModel):
    """Where the activity datasets live, relative to the project root."""

    github_file: str = "data/github.json"
    meetings_file: str = "data/meetings.json"


class OutputConfig(BaseModel):
    """Report output defaults."""

    format: Literal["console", "md", "json"] = "console"
    verbose: bool = False


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    root_path: str = "."
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def analysis_options(self, verbose: bool | None = None) -> AnalysisOptions:
        return AnalysisOptions(
            pr_age_threshold=self.thresholds.pr_age_days,
            overload_threshold=self.thresholds.overload_items,
            verbose=self.output.verbose if verbose is None else verbose,
        )


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .teamrisk directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / TEAMRISK_DIR).is_dir():
            return current
        current = current.parent
    if (current / TEAMRISK_DIR).is_dir():
        return current
    return None


def get_teamrisk_dir(root: Path) -> Path:
    """Get the .teamrisk directory for a project root."""
    return root / TEAMRISK_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .teamrisk/config.json."""
    config_path = get_teamrisk_dir(root) / CONFIG_FILE
    if not config_path.exists():
        return ProjectConfig(name=root.name, root_path=str(root))
    try:
        data = json.loads(config_path.read_text())
        return ProjectConfig(**data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config at {config_path}: {e}") from e


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .teamrisk/config.json."""
    tr_dir = get_teamrisk_dir(root)
    tr_dir.mkdir(parents=True, exist_ok=True)
    config_path = tr_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'thresholds.pr_age_days')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e
