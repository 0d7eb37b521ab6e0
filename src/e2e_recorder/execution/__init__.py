"""Step execution utilities - retry policy and narrated step runner."""

from e2e_recorder.execution.retry import RetryPolicy, StepAction, StepOutcome
from e2e_recorder.execution.steps import StepRunner, create_step_runner

__all__ = [
    "RetryPolicy",
    "StepAction",
    "StepOutcome",
    "StepRunner",
    "create_step_runner",
]
