"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from teamrisk.config import (
    ProjectConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from teamrisk.exceptions import ConfigError


class TestConfig:
    def test_default_config(self):
        config = ProjectConfig()
        assert config.thresholds.pr_age_days == 10
        assert config.thresholds.overload_items == 5
        assert config.output.format == "console"
        assert config.data.github_file == "data/github.json"

    def test_save_and_load(self, tmp_path: Path):
        config = ProjectConfig(name="test-project")
        config.thresholds.pr_age_days = 7
        config.output.format = "md"

        save_config(tmp_path, config)
        loaded = load_config(tmp_path)

        assert loaded.name == "test-project"
        assert loaded.thresholds.pr_age_days == 7
        assert loaded.output.format == "md"

    def test_load_missing_config(self, tmp_path: Path):
        config = load_config(tmp_path)
        assert config.name == tmp_path.name
        assert config.thresholds.pr_age_days == 10

    def test_load_corrupt_config(self, tmp_path: Path):
        (tmp_path / ".teamrisk").mkdir()
        (tmp_path / ".teamrisk" / "config.json").write_text("{oops")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_find_project_root(self, tmp_path: Path):
        # No .teamrisk dir - should return None
        assert find_project_root(tmp_path) is None

        (tmp_path / ".teamrisk").mkdir()
        assert find_project_root(tmp_path) == tmp_path.resolve()

        # Should find from subdirectory
        sub = tmp_path / "src" / "module"
        sub.mkdir(parents=True)
        assert find_project_root(sub) == tmp_path.resolve()

    def test_set_config_value(self):
        config = ProjectConfig()
        updated = set_config_value(config, "thresholds.pr_age_days", 14)
        assert updated.thresholds.pr_age_days == 14
        assert config.thresholds.pr_age_days == 10

    def test_set_config_invalid_key(self):
        config = ProjectConfig()
        with pytest.raises(KeyError):
            set_config_value(config, "nonexistent.key", "value")

    def test_set_config_invalid_value(self):
        config = ProjectConfig()
        with pytest.raises(ConfigError):
            set_config_value(config, "thresholds.overload_items", -1)

    def test_unknown_output_format_rejected(self, tmp_path: Path):
        (tmp_path / ".teamrisk").mkdir()
        (tmp_path / ".teamrisk" / "config.json").write_text('{"output": {"format": "pdf"}}')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_analysis_options(self):
        config = ProjectConfig()
        config.thresholds.overload_items = 3
        options = config.analysis_options()
        assert options.pr_age_threshold == 10
        assert options.overload_threshold == 3
        assert options.verbose is False

    def test_analysis_options_verbose_override(self):
        config = ProjectConfig()
        config.output.verbose = True
        assert config.analysis_options().verbose is True
        assert config.analysis_options(verbose=False).verbose is False
