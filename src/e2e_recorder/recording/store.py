"""Append-only outcome ledger for a single suite run.

The store is created empty when a suite starts, accumulates one
ResultRecord per executed scenario, and is read by the renderer
when the suite ends. It is never persisted; only the rendered
report text is.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from e2e_recorder.models.result import (
    FailureCategory,
    Outcome,
    ResultRecord,
    StoreSnapshot,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OutcomeStore:
    """In-memory ledger of scenario outcomes.

    Single-threaded: one scenario runs at a time within a suite, so
    record() and snapshot() take no lock. Repeated names are kept as
    independent records; nothing is deduplicated.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._records: list[ResultRecord] = []

    def record(
        self,
        name: str,
        status: Outcome | str,
        error: BaseException | str | None = None,
        screenshot_path: str | None = None,
        duration_ms: int | None = None,
        failure_category: FailureCategory | None = None,
    ) -> ResultRecord:
        """Append a new ResultRecord stamped with the current instant.

        Args:
            name: Scenario name.
            status: Outcome of the scenario.
            error: Exception or message describing a failure.
            screenshot_path: Path of a captured failure screenshot.
            duration_ms: Elapsed milliseconds, if timed.
            failure_category: Classification of a failure.

        Returns:
            The record that was appended.
        """
        error_message: str | None = None
        error_type: str | None = None
        if isinstance(error, BaseException):
            error_message = str(error) or type(error).__name__
            error_type = type(error).__name__
        elif error is not None:
            error_message = error

        result = ResultRecord(
            name=name,
            status=Outcome(status),
            timestamp=self._clock(),
            duration_ms=duration_ms,
            error_message=error_message,
            error_type=error_type,
            failure_category=failure_category,
            screenshot_path=str(screenshot_path) if screenshot_path is not None else None,
        )
        self._records.append(result)
        return result

    def snapshot(self) -> StoreSnapshot:
        """Return the current contents partitioned by outcome."""
        return StoreSnapshot(
            records=tuple(self._records),
            passed=tuple(r for r in self._records if r.status == Outcome.passed),
            failed=tuple(r for r in self._records if r.status == Outcome.failed),
            skipped=tuple(r for r in self._records if r.status == Outcome.skipped),
            total=len(self._records),
        )

    def latest(self, name: str) -> ResultRecord | None:
        for result in reversed(self._records):
            if result.name == name:
                return result
        return None

    def history(self, name: str) -> list[ResultRecord]:
        return [r for r in self._records if r.name == name]

    @property
    def records(self) -> list[ResultRecord]:
        return list(self._records)

    @property
    def total(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)
