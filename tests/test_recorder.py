"""Tests for e2e_recorder.recording.recorder - suite lifecycle and dual reporting."""

from __future__ import annotations

from datetime import date
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from e2e_recorder.models.config import ProjectConfig, RetryConfig
from e2e_recorder.models.result import FailureCategory, Outcome
from e2e_recorder.models.suite import SuiteDefinition
from e2e_recorder.recording.recorder import (
    ScenarioSkipped,
    SuiteRecorder,
    classify_failure,
    create_recorder,
)
from e2e_recorder.recording.screenshot import ScreenshotCapture
from e2e_recorder.reporting.writer import ReportWriter


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


SUITE = SuiteDefinition(
    name="navigation",
    title="Navigation",
    log_tag="detox",
    scenarios=[
        "Basic Tab Navigation Flow",
        "Rapid Tab Switching Stress Test",
        "Tab Navigation with Device Rotation",
    ],
)


class FakeDriver:
    def __init__(self) -> None:
        self.paths: list[Path] = []

    async def take_screenshot(self, path: Path) -> None:
        self.paths.append(path)
        path.write_bytes(b"\x89PNG")


class BrokenDriver:
    async def take_screenshot(self, path: Path) -> None:
        raise RuntimeError("screencap failed")


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=200, force_terminal=False), buffer


def _recorder(tmp_path: Path, driver=None) -> SuiteRecorder:
    console, _ = _console()
    screenshots = ScreenshotCapture(driver, tmp_path / "shots") if driver is not None else None
    return SuiteRecorder(
        SUITE,
        screenshots=screenshots,
        writer=ReportWriter(tmp_path / "reports", SUITE),
        console=console,
    )


class TestClassifyFailure:
    """Test failure taxonomy."""

    def test_assertion_error(self):
        assert classify_failure(AssertionError("text mismatch")) == FailureCategory.assertion

    def test_timeout_error(self):
        assert classify_failure(TimeoutError("not visible")) == FailureCategory.assertion

    def test_other_errors_are_driver_failures(self):
        assert classify_failure(LookupError("no element")) == FailureCategory.driver
        assert classify_failure(RuntimeError("tap failed")) == FailureCategory.driver


class TestScenario:
    """Test SuiteRecorder.scenario context manager."""

    @pytest.mark.asyncio
    async def test_pass_recorded_with_duration(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        async with recorder.scenario("Basic Tab Navigation Flow") as scope:
            pass
        assert scope.result is not None
        assert scope.result.status == Outcome.passed
        assert scope.result.duration_ms is not None
        assert scope.result.duration_ms >= 0
        assert recorder.store.total == 1

    @pytest.mark.asyncio
    async def test_failure_recorded_then_reraised(self, tmp_path: Path) -> None:
        """Dual reporting: local failed record plus the original exception."""
        driver = FakeDriver()
        recorder = _recorder(tmp_path, driver)
        original = TimeoutError("tab-home not visible within 5000ms")

        with pytest.raises(TimeoutError) as excinfo:
            async with recorder.scenario("Rapid Tab Switching Stress Test"):
                raise original

        assert excinfo.value is original
        failed = recorder.store.snapshot().failed
        assert len(failed) == 1
        assert failed[0].error_message == "tab-home not visible within 5000ms"
        assert failed[0].failure_category == FailureCategory.assertion
        assert failed[0].screenshot_path == str(driver.paths[0])

    @pytest.mark.asyncio
    async def test_screenshot_failure_still_records(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path, BrokenDriver())

        with pytest.raises(LookupError, match="next-button"):
            async with recorder.scenario("Basic Tab Navigation Flow"):
                raise LookupError("next-button")

        failed = recorder.store.snapshot().failed
        assert len(failed) == 1
        assert failed[0].screenshot_path is None
        assert failed[0].failure_category == FailureCategory.driver

    @pytest.mark.asyncio
    async def test_skip_recorded_and_swallowed(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        async with recorder.scenario("Tab Navigation with Device Rotation") as scope:
            scope.skip("rotation unsupported on this simulator")
        skipped = recorder.store.snapshot().skipped
        assert len(skipped) == 1
        assert skipped[0].error_message == "rotation unsupported on this simulator"

    @pytest.mark.asyncio
    async def test_skip_via_exception(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        async with recorder.scenario("A"):
            raise ScenarioSkipped("not ready")
        assert recorder.store.snapshot().skipped[0].error_message == "not ready"


class TestManualRecording:
    """Test record(), skip() and record_failure()."""

    def test_record_failed_exception_classified(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        result = recorder.record("A", Outcome.failed, error=AssertionError("x"))
        assert result.failure_category == FailureCategory.assertion

    def test_record_passed_has_no_category(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        result = recorder.record("A", "passed", duration_ms=10)
        assert result.failure_category is None

    def test_skip(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        result = recorder.skip("A", "blocked by login")
        assert result.status == Outcome.skipped

    @pytest.mark.asyncio
    async def test_record_failure_without_capture(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        result = await recorder.record_failure("A", RuntimeError("crash"))
        assert result.status == Outcome.failed
        assert result.screenshot_path is None
        assert result.duration_ms is None


class TestLifecycle:
    """Test start/finish and async context manager use."""

    @pytest.mark.asyncio
    async def test_context_manager_writes_report(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        async with recorder:
            async with recorder.scenario("Basic Tab Navigation Flow"):
                pass
        assert recorder.run_window.started_at is not None
        assert recorder.run_window.finished_at is not None
        assert recorder.report_path == (
            tmp_path / "reports" / "navigation"
            / f"navigation-test-report-{date.today():%Y-%m-%d}.txt"
        )
        text = recorder.report_path.read_text(encoding="utf-8")
        assert "NAVIGATION TEST REPORT" in text
        assert "Not executed: 2 tests" in text

    def test_finish_prints_console_text(self, tmp_path: Path) -> None:
        console, buffer = _console()
        recorder = SuiteRecorder(SUITE, console=console)
        recorder.start()
        recorder.record("Basic Tab Navigation Flow", Outcome.passed)
        report = recorder.finish()
        output = buffer.getvalue()
        assert "detox[" in output
        assert "Pass Rate: 100.00% (1/1)" in output
        assert report.summary.passed == 1
        assert recorder.report_path is None

    @pytest.mark.asyncio
    async def test_report_written_even_when_scenario_fails(self, tmp_path: Path) -> None:
        recorder = _recorder(tmp_path)
        with pytest.raises(RuntimeError):
            async with recorder:
                async with recorder.scenario("Basic Tab Navigation Flow"):
                    raise RuntimeError("app crashed")
        assert recorder.report_path is not None
        assert "app crashed" in recorder.report_path.read_text(encoding="utf-8")

    def test_each_recorder_has_its_own_store(self, tmp_path: Path) -> None:
        first = _recorder(tmp_path)
        second = _recorder(tmp_path)
        first.record("A", Outcome.passed)
        assert second.store.total == 0


class TestCreateRecorder:
    """Test create_recorder wiring from project config."""

    def test_wires_writer_and_screenshots(self, tmp_path: Path) -> None:
        recorder = create_recorder(
            SUITE,
            driver=FakeDriver(),
            project_root=tmp_path,
            config=ProjectConfig(reports_dir="out"),
        )
        assert recorder.writer is not None
        assert recorder.writer.report_dir == tmp_path / "out" / "navigation"
        assert recorder.screenshots is not None
        assert recorder.screenshots.directory == tmp_path / "out" / "navigation"

    def test_screenshots_disabled_by_config(self, tmp_path: Path) -> None:
        recorder = create_recorder(
            SUITE,
            driver=FakeDriver(),
            project_root=tmp_path,
            config=ProjectConfig(screenshots=False),
        )
        assert recorder.screenshots is None

    def test_no_driver_no_screenshots(self, tmp_path: Path) -> None:
        recorder = create_recorder(SUITE, project_root=tmp_path)
        assert recorder.screenshots is None

    def test_step_runner_uses_configured_retry(self, tmp_path: Path) -> None:
        recorder = create_recorder(
            SUITE,
            project_root=tmp_path,
            config=ProjectConfig(retry=RetryConfig(max_attempts=4)),
        )
        assert recorder.steps.default_policy.max_attempts == 4

    def test_default_step_runner_shares_console(self, tmp_path: Path) -> None:
        console, _ = _console()
        recorder = SuiteRecorder(SUITE, console=console)
        assert recorder.steps.console is console
        assert recorder.steps.default_policy.max_attempts == 1
