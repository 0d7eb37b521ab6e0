"""SuiteRecorder: per-suite lifecycle around the outcome store.

Owns one OutcomeStore for the lifetime of a suite run, times each
scenario, captures a screenshot when one fails, and renders and
persists the report when the suite finishes.

Failures are reported twice: the scenario is recorded as
failed in the local ledger, then the original exception is re-raised
so the hosting test framework fails the scenario as well.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console

from e2e_recorder.execution.steps import StepRunner, create_step_runner
from e2e_recorder.models.config import ProjectConfig, find_project_root, load_project_config
from e2e_recorder.models.result import (
    FailureCategory,
    Outcome,
    ResultRecord,
    RunWindow,
)
from e2e_recorder.models.suite import SuiteDefinition
from e2e_recorder.recording.screenshot import ScreenshotCapture, ScreenshotDriver
from e2e_recorder.recording.store import OutcomeStore
from e2e_recorder.recording.timer import TimerHandle, start_timer
from e2e_recorder.reporting.renderer import RenderedReport, ReportRenderer
from e2e_recorder.reporting.writer import ReportWriter

logger = logging.getLogger(__name__)

# Exceptions meaning an expected UI state was not observed in time
ASSERTION_EXCEPTIONS: tuple[type[BaseException], ...] = (AssertionError, TimeoutError)


class ScenarioSkipped(Exception):
    """Raised inside a scenario block to record it as skipped."""

    def __init__(self, reason: str = "Skipped") -> None:
        self.reason = reason
        super().__init__(reason)


def classify_failure(exc: BaseException) -> FailureCategory:
    if isinstance(exc, ASSERTION_EXCEPTIONS):
        return FailureCategory.assertion
    return FailureCategory.driver


class ScenarioScope:
    """Handle yielded by SuiteRecorder.scenario()."""

    def __init__(self, name: str, timer: TimerHandle) -> None:
        self.name = name
        self.timer = timer
        self.result: ResultRecord | None = None

    def skip(self, reason: str = "Skipped") -> None:
        raise ScenarioSkipped(reason)

    def elapsed_ms(self) -> int:
        return self.timer.end()


class SuiteRecorder:
    """Tracks scenario outcomes for one suite run and reports them.

    Args:
        suite: Suite definition (title, icons, declared scenarios).
        store: Outcome store; a fresh one is created if omitted.
        screenshots: Failure screenshot capture, or None to disable.
        writer: Report writer, or None to skip persisting the report.
        console: Rich console for report output.
        steps: Step runner for narrated driver steps; defaults to one
            with a single-attempt policy sharing the console.
    """

    def __init__(
        self,
        suite: SuiteDefinition,
        store: OutcomeStore | None = None,
        screenshots: ScreenshotCapture | None = None,
        writer: ReportWriter | None = None,
        console: Console | None = None,
        steps: StepRunner | None = None,
    ) -> None:
        self.suite = suite
        self.store = store or OutcomeStore()
        self.screenshots = screenshots
        self.writer = writer
        self.console = console or Console()
        self.steps = steps or StepRunner(console=self.console)
        self.run_window = RunWindow()
        screenshot_dir = screenshots.directory if screenshots is not None else None
        self.renderer = ReportRenderer(suite, screenshot_dir=screenshot_dir)
        self.report_path: Path | None = None

    def start(self) -> None:
        self.run_window = RunWindow(started_at=datetime.now(timezone.utc))
        logger.info("Starting suite %s", self.suite.name)

    def finish(self) -> RenderedReport:
        """Stamp the end of the run, print the report, and persist it."""
        self.run_window = RunWindow(
            started_at=self.run_window.started_at,
            finished_at=datetime.now(timezone.utc),
        )
        report = self.renderer.render(self.store.snapshot(), run_window=self.run_window)
        self.console.print(report.console_text, markup=False, highlight=False)
        if self.writer is not None:
            self.report_path = self.writer.write(report.file_text)
        return report

    def record(
        self,
        name: str,
        status: Outcome | str,
        error: BaseException | str | None = None,
        screenshot_path: str | None = None,
        duration_ms: int | None = None,
    ) -> ResultRecord:
        failure_category = None
        if isinstance(error, BaseException) and Outcome(status) == Outcome.failed:
            failure_category = classify_failure(error)
        return self.store.record(
            name,
            status,
            error=error,
            screenshot_path=screenshot_path,
            duration_ms=duration_ms,
            failure_category=failure_category,
        )

    def skip(self, name: str, reason: str = "Skipped") -> ResultRecord:
        return self.store.record(name, Outcome.skipped, error=reason)

    async def record_failure(
        self,
        name: str,
        error: BaseException,
        timer: TimerHandle | None = None,
    ) -> ResultRecord:
        """Capture a screenshot and record a failed scenario.

        The record is created even when the screenshot capture fails.
        """
        duration_ms = timer.end() if timer is not None else None
        screenshot_path = None
        if self.screenshots is not None:
            screenshot_path = await self.screenshots.capture(name)
        return self.record(
            name,
            Outcome.failed,
            error=error,
            screenshot_path=str(screenshot_path) if screenshot_path else None,
            duration_ms=duration_ms,
        )

    @asynccontextmanager
    async def scenario(self, name: str) -> AsyncIterator[ScenarioScope]:
        """Time and record one scenario.

        Records passed on normal exit. On ScenarioSkipped records skipped
        and swallows it. On any other exception records failed (with a
        screenshot when capture is configured) and re-raises it.
        """
        scope = ScenarioScope(name, start_timer(name))
        logger.info("Scenario started: %s", name)
        try:
            yield scope
        except ScenarioSkipped as skipped:
            scope.result = self.store.record(
                name, Outcome.skipped, error=skipped.reason, duration_ms=scope.elapsed_ms()
            )
            logger.info("Scenario skipped: %s (%s)", name, skipped.reason)
        except Exception as exc:
            scope.result = await self.record_failure(name, exc, scope.timer)
            logger.error("Scenario failed: %s: %s", name, exc)
            raise
        else:
            scope.result = self.record(name, Outcome.passed, duration_ms=scope.elapsed_ms())
            logger.info("Scenario passed: %s (%sms)", name, scope.result.duration_ms)

    async def __aenter__(self) -> SuiteRecorder:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.finish()


def create_recorder(
    suite: SuiteDefinition,
    driver: ScreenshotDriver | None = None,
    project_root: Path | None = None,
    config: ProjectConfig | None = None,
    console: Console | None = None,
) -> SuiteRecorder:
    """Build a SuiteRecorder wired from project configuration.

    Reports and failure screenshots share the suite's report directory.
    Screenshot capture is disabled when no driver is given or when the
    project config turns it off. The step runner uses the configured
    retry policy.
    """
    if project_root is None:
        project_root = find_project_root()
    if config is None:
        config = load_project_config(project_root)

    writer = ReportWriter(project_root / config.reports_dir, suite)
    screenshots = None
    if driver is not None and config.screenshots:
        screenshots = ScreenshotCapture(driver, writer.report_dir)
    steps = create_step_runner(config, console=console)
    return SuiteRecorder(
        suite, screenshots=screenshots, writer=writer, console=console, steps=steps
    )
