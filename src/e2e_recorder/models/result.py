"""Result data models for scenario outcomes.

These models encode the outcome ledger contract: one immutable
ResultRecord per executed scenario, the partitioned snapshot the
renderer reads, and the derived run summary.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Outcome(str, Enum):
    """Terminal classification of a scenario execution."""

    passed = "passed"
    failed = "failed"
    skipped = "skipped"


class FailureCategory(str, Enum):
    """Why a scenario failed.

    assertion: an expected UI state was not observed within its wait bound.
    driver: the automation driver could not perform an interaction.
    """

    assertion = "assertion"
    driver = "driver"


class ResultRecord(BaseModel):
    """Outcome of a single scenario execution.

    Created once, immediately after the scenario's terminal
    success or failure is known, and never mutated afterwards.
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    status: Outcome
    timestamp: datetime
    duration_ms: int | None = Field(default=None, ge=0)
    error_message: str | None = None
    error_type: str | None = None
    failure_category: FailureCategory | None = None
    screenshot_path: str | None = None


class StoreSnapshot(BaseModel):
    """Read-only view of an outcome store partitioned by outcome.

    `records` holds every record in insertion order; the outcome
    tuples are views over the same records.
    """

    model_config = {"frozen": True}

    records: tuple[ResultRecord, ...] = ()
    passed: tuple[ResultRecord, ...] = ()
    failed: tuple[ResultRecord, ...] = ()
    skipped: tuple[ResultRecord, ...] = ()
    total: int = 0

    def all_records(self) -> list[ResultRecord]:
        """Return every record in the order it was recorded."""
        return list(self.records)


class RunSummary(BaseModel):
    """Aggregate counts derived from a snapshot. Never stored."""

    total: int
    passed: int
    failed: int
    skipped: int
    pass_rate: float

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> RunSummary:
        passed = len(snapshot.passed)
        return cls(
            total=snapshot.total,
            passed=passed,
            failed=len(snapshot.failed),
            skipped=len(snapshot.skipped),
            pass_rate=compute_pass_rate(passed, snapshot.total),
        )


class RunWindow(BaseModel):
    """Start and end instants of one suite run."""

    started_at: datetime | None = None
    finished_at: datetime | None = None


def compute_pass_rate(passed: int, total: int) -> float:
    """Percentage of passed scenarios rounded to 2 decimal places.

    Returns 0 when total is 0.
    """
    if total <= 0:
        return 0.0
    return round(passed / total * 100, 2)
