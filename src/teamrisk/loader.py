"""Load team activity datasets from JSON files.

Two files make up a dataset:
  - a GitHub export: ``{"pullRequests": [...], "issues": [...]}``
  - a meetings log: ``[{"date": ..., "hasActionItems": ...}, ...]``
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from teamrisk.engine.models import ActivityData, Issue, Meeting, PullRequest
from teamrisk.exceptions import DataError

logger = logging.getLogger("teamrisk.loader")

SAMPLES_DIR = Path(__file__).parent / "samples"
SAMPLE_GITHUB_FILE = "sample_github.json"
SAMPLE_MEETINGS_FILE = "sample_meetings.json"


def sample_paths() -> tuple[Path, Path]:
    """Paths of the bundled sample GitHub export and meetings log."""
    return SAMPLES_DIR / SAMPLE_GITHUB_FILE, SAMPLES_DIR / SAMPLE_MEETINGS_FILE


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise DataError(str(path), "file not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataError(str(path), f"invalid JSON ({e})") from e


def _validate(path: Path, model: type, records: Any) -> list:
    if not isinstance(records, list):
        raise DataError(str(path), f"expected a list, got {type(records).__name__}")
    try:
        return [model.model_validate(record) for record in records]
    except (ValidationError, ValueError) as e:
        raise DataError(str(path), str(e)) from e


def load_github(path: Path) -> tuple[list[PullRequest], list[Issue]]:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise DataError(str(path), "expected an object with 'pullRequests' and 'issues'")
    pull_requests = _validate(path, PullRequest, data.get("pullRequests", []))
    issues = _validate(path, Issue, data.get("issues", []))
    return pull_requests, issues


def load_meetings(path: Path) -> list[Meeting]:
    return _validate(path, Meeting, _read_json(path))


def load_activity(github_path: Path, meetings_path: Path) -> ActivityData:
    """Load and validate both files into an ActivityData bundle."""
    pull_requests, issues = load_github(Path(github_path))
    meetings = load_meetings(Path(meetings_path))
    logger.info(
        "Loaded %d PRs, %d issues, %d meetings",
        len(pull_requests), len(issues), len(meetings),
    )
    return ActivityData(pull_requests=pull_requests, issues=issues, meetings=meetings)
