"""e2e-recorder data models - re-exports all public model classes."""

from e2e_recorder.models.config import ProjectConfig, ProjectConfigError, RetryConfig
from e2e_recorder.models.result import (
    FailureCategory,
    Outcome,
    ResultRecord,
    RunSummary,
    RunWindow,
    StoreSnapshot,
    compute_pass_rate,
)
from e2e_recorder.models.suite import IconSet, SuiteDefinition

__all__ = [
    "FailureCategory",
    "IconSet",
    "Outcome",
    "ProjectConfig",
    "ProjectConfigError",
    "ResultRecord",
    "RetryConfig",
    "RunSummary",
    "RunWindow",
    "StoreSnapshot",
    "SuiteDefinition",
    "compute_pass_rate",
]
