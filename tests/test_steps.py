"""Tests for e2e_recorder.execution.steps - narrated driver steps."""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from rich.console import Console

from e2e_recorder.execution.retry import RetryPolicy
from e2e_recorder.execution.steps import StepRunner, create_step_runner
from e2e_recorder.models.config import ProjectConfig, RetryConfig


def _runner(**kwargs) -> tuple[StepRunner, StringIO]:
    buffer = StringIO()
    console = Console(file=buffer, width=120, force_terminal=False)
    return StepRunner(console=console, **kwargs), buffer


class TestStep:
    """Test StepRunner.step outcomes."""

    @pytest.mark.asyncio
    async def test_success_returns_value(self):
        runner, buffer = _runner()
        value = await runner.step("Tap login button", AsyncMock(return_value=42))
        assert value == 42
        assert runner.completed == ["Tap login button"]
        assert "✅ Tap login button" in buffer.getvalue()

    @pytest.mark.asyncio
    async def test_hard_failure_reraises(self):
        runner, buffer = _runner()
        with pytest.raises(TimeoutError):
            await runner.step(
                "Wait for home screen", AsyncMock(side_effect=TimeoutError("not visible"))
            )
        assert runner.completed == []
        assert "❌ Wait for home screen: not visible" in buffer.getvalue()

    @pytest.mark.asyncio
    async def test_soft_failure_warns(self, caplog):
        runner, buffer = _runner()
        with caplog.at_level("WARNING", logger="e2e_recorder.execution.steps"):
            value = await runner.step(
                "Dismiss keyboard", AsyncMock(side_effect=RuntimeError("no keyboard")), soft=True
            )
        assert value is None
        assert runner.warnings == ["Dismiss keyboard"]
        assert "⚠️ Dismiss keyboard: no keyboard" in buffer.getvalue()
        assert "Soft step failed" in caplog.text

    @pytest.mark.asyncio
    async def test_fallback_suffix(self):
        runner, buffer = _runner()
        policy = RetryPolicy(base_delay=0).with_fallback(AsyncMock(return_value="coords"))
        value = await runner.step(
            "Tap send", AsyncMock(side_effect=LookupError("send-button")), policy=policy
        )
        assert value == "coords"
        assert "✅ Tap send (fallback)" in buffer.getvalue()

    @pytest.mark.asyncio
    async def test_attempts_suffix(self):
        runner, buffer = _runner(default_policy=RetryPolicy(max_attempts=3, base_delay=0))
        action = AsyncMock(side_effect=[LookupError("x"), "done"])
        value = await runner.step("Type email", action)
        assert value == "done"
        assert "(after 2 attempts)" in buffer.getvalue()

    @pytest.mark.asyncio
    async def test_settle_pause_after_success(self):
        runner, _ = _runner()
        with patch("e2e_recorder.execution.steps.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await runner.step("Open tab", AsyncMock(), settle=1.5)
        sleep.assert_awaited_once_with(1.5)

    @pytest.mark.asyncio
    async def test_markup_in_description_is_literal(self):
        runner, buffer = _runner()
        await runner.step("Type [bold]text[/bold]", AsyncMock())
        assert "Type [bold]text[/bold]" in buffer.getvalue()


class TestSection:
    """Test section headers and pauses."""

    def test_section_header(self):
        runner, buffer = _runner()
        runner.section("STEP 1: Login")
        assert "📍 STEP 1: Login" in buffer.getvalue()

    @pytest.mark.asyncio
    async def test_zero_pause_does_not_sleep(self):
        runner, _ = _runner()
        with patch("e2e_recorder.execution.steps.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await runner.pause(0)
        sleep.assert_not_awaited()


class TestCreateStepRunner:
    """Test building a runner from project configuration."""

    def test_retry_settings_reach_default_policy(self):
        config = ProjectConfig(retry=RetryConfig(max_attempts=3, base_delay=0.2, backoff=1.5))
        runner = create_step_runner(config)
        assert runner.default_policy == RetryPolicy(
            max_attempts=3, base_delay=0.2, max_delay=5.0, backoff=1.5
        )

    def test_reads_recorder_yaml(self, tmp_path: Path):
        (tmp_path / "recorder.yaml").write_text(
            "retry:\n  max_attempts: 4\n  base_delay: 0\n", encoding="utf-8"
        )
        runner = create_step_runner(project_root=tmp_path)
        assert runner.default_policy.max_attempts == 4
        assert runner.default_policy.base_delay == 0

    @pytest.mark.asyncio
    async def test_configured_attempts_used_by_step(self):
        config = ProjectConfig(retry=RetryConfig(max_attempts=2, base_delay=0))
        runner = create_step_runner(config, console=Console(file=StringIO()))
        action = AsyncMock(side_effect=[LookupError("x"), "done"])
        assert await runner.step("Tap retry", action) == "done"
        assert action.await_count == 2
