"""StepRunner: narrated driver steps with uniform retry handling.

Hard steps re-raise once their retry policy is exhausted so the
enclosing scenario fails. Soft steps (negative and optional checks)
log a warning and let the scenario continue.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from e2e_recorder.execution.retry import RetryPolicy, StepAction, StepOutcome
from e2e_recorder.models.config import ProjectConfig, load_project_config

logger = logging.getLogger(__name__)


class StepRunner:
    """Runs and narrates the steps of a scenario.

    Args:
        console: Rich console for step narration.
        default_policy: Retry policy for steps that do not pass one.
    """

    def __init__(
        self,
        console: Console | None = None,
        default_policy: RetryPolicy | None = None,
    ) -> None:
        self.console = console or Console()
        self.default_policy = default_policy or RetryPolicy()
        self.completed: list[str] = []
        self.warnings: list[str] = []

    def section(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold]\U0001f4cd {escape(title)}[/bold]")

    async def pause(self, seconds: float) -> None:
        """Fixed settle delay, e.g. waiting for an animation to finish."""
        if seconds > 0:
            await asyncio.sleep(seconds)

    async def step(
        self,
        description: str,
        action: StepAction,
        policy: RetryPolicy | None = None,
        soft: bool = False,
        settle: float = 0.0,
    ) -> Any:
        """Run one step and narrate its outcome.

        Args:
            description: Human-readable step description.
            action: Zero-argument callable returning an awaitable.
            policy: Retry policy (default: the runner's default policy).
            soft: If True, a failure is reported as a warning and None
                is returned instead of raising.
            settle: Seconds to wait after the step succeeds.

        Returns:
            The action's (or fallback's) return value, or None for a
            failed soft step.
        """
        policy = policy or self.default_policy
        try:
            outcome: StepOutcome = await policy.run(action)
        except Exception as exc:
            if not soft:
                self.console.print(f"[red]❌ {escape(description)}: {escape(str(exc))}[/red]")
                raise
            self.warnings.append(description)
            self.console.print(f"[yellow]⚠️ {escape(description)}: {escape(str(exc))}[/yellow]")
            logger.warning("Soft step failed: %s: %s", description, exc)
            return None

        suffix = ""
        if outcome.used_fallback:
            suffix = " (fallback)"
        elif outcome.attempts > 1:
            suffix = f" (after {outcome.attempts} attempts)"
        self.completed.append(description)
        self.console.print(f"[green]✅ {escape(description)}{suffix}[/green]")
        await self.pause(settle)
        return outcome.value


def create_step_runner(
    config: ProjectConfig | None = None,
    project_root: Path | None = None,
    console: Console | None = None,
) -> StepRunner:
    """Build a StepRunner whose default policy comes from recorder.yaml."""
    if config is None:
        config = load_project_config(project_root)
    return StepRunner(console=console, default_policy=RetryPolicy.from_config(config.retry))
