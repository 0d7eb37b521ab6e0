"""Project configuration model for e2e-recorder.

Captures recorder.yaml fields with sensible defaults for
report/suite locations, screenshot capture, logging, and the
default step retry policy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

CONFIG_FILENAME = "recorder.yaml"
DEFAULT_SUITES_DIR = "suites"


class ProjectConfigError(Exception):
    """Raised when recorder.yaml exists but cannot be used."""

    def __init__(self, path: Path, problem: str) -> None:
        self.path = path
        self.problem = problem
        super().__init__(f"{path}: {problem}")


class RetryConfig(BaseModel):
    """Default retry settings applied to driver steps."""

    model_config = {"extra": "forbid"}

    max_attempts: int = Field(default=1, ge=1, le=20)
    base_delay: float = Field(default=0.5, ge=0.0)
    max_delay: float = Field(default=5.0, ge=0.0)
    backoff: float = Field(default=2.0, ge=1.0)


class ProjectConfig(BaseModel):
    """Project-level configuration loaded from recorder.yaml."""

    model_config = {"extra": "forbid"}

    reports_dir: str = "reports"
    suites_dir: str = DEFAULT_SUITES_DIR
    screenshots: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    retry: RetryConfig = Field(default_factory=RetryConfig)


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root, walking up from start (default: cwd).

    The nearest directory holding recorder.yaml wins. Projects without
    a config file are recognised by a suites/ directory. Falls back to
    cwd when neither marker is found.
    """
    origin = (start or Path.cwd()).resolve()
    if origin.is_file():
        origin = origin.parent
    lineage = [origin, *origin.parents]

    for directory in lineage:
        if (directory / CONFIG_FILENAME).is_file():
            return directory
    for directory in lineage:
        if (directory / DEFAULT_SUITES_DIR).is_dir():
            return directory
    return Path.cwd()


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    )


def load_project_config(project_root: Path | None = None) -> ProjectConfig:
    """Load recorder.yaml from the project root.

    A missing or empty file yields the defaults.

    Raises:
        ProjectConfigError: If the file is not valid YAML, is not a
            mapping, or holds unknown or out-of-range settings.
    """
    root = project_root if project_root is not None else find_project_root()
    config_path = root / CONFIG_FILENAME
    if not config_path.is_file():
        return ProjectConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ProjectConfigError(config_path, f"invalid YAML: {exc}") from exc
    if raw is None:
        return ProjectConfig()
    if not isinstance(raw, dict):
        raise ProjectConfigError(config_path, "expected a mapping of settings")

    try:
        return ProjectConfig.model_validate(raw)
    except ValidationError as exc:
        raise ProjectConfigError(config_path, _describe(exc)) from exc
