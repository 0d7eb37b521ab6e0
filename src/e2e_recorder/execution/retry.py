"""Declarative retry policy for driver steps.

A step is an awaitable factory. The policy calls it up to
max_attempts times with exponential backoff between attempts, and
optionally runs a fallback action once attempts are exhausted.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from e2e_recorder.models.config import RetryConfig

StepAction = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class StepOutcome:
    """Result of running a step under a retry policy.

    Attributes:
        value: Whatever the action (or fallback) returned.
        attempts: Number of times the primary action was called.
        used_fallback: True if the fallback produced the value.
        errors: Type names of the exceptions raised by failed attempts.
    """

    value: Any
    attempts: int
    used_fallback: bool = False
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try a step, how long to wait, what to fall back to."""

    max_attempts: int = 1
    base_delay: float = 0.5
    max_delay: float = 5.0
    backoff: float = 2.0
    retry_on: tuple[type[BaseException], ...] = (Exception,)
    fallback: StepAction | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        return cls(
            max_attempts=config.max_attempts,
            base_delay=config.base_delay,
            max_delay=config.max_delay,
            backoff=config.backoff,
        )

    def with_fallback(self, fallback: StepAction) -> RetryPolicy:
        return replace(self, fallback=fallback)

    def delay_for(self, attempt: int) -> float:
        """Delay after the given 1-indexed failed attempt."""
        return min(self.base_delay * (self.backoff ** (attempt - 1)), self.max_delay)

    async def run(self, action: StepAction) -> StepOutcome:
        """Run action under this policy.

        Raises:
            Exception: A non-retryable exception immediately, or the last
                exception when attempts are exhausted and no fallback is set.
        """
        errors: list[str] = []

        for attempt in range(1, self.max_attempts + 1):
            try:
                value = await action()
                return StepOutcome(value=value, attempts=attempt, errors=tuple(errors))
            except self.retry_on as exc:
                errors.append(type(exc).__name__)
                if attempt == self.max_attempts:
                    if self.fallback is None:
                        raise
                    break
                await asyncio.sleep(self.delay_for(attempt))

        value = await self.fallback()
        return StepOutcome(
            value=value,
            attempts=self.max_attempts,
            used_fallback=True,
            errors=tuple(errors),
        )
