"""Scenario recording: timer, outcome store, screenshots, suite lifecycle."""

from e2e_recorder.recording.recorder import (
    ScenarioScope,
    ScenarioSkipped,
    SuiteRecorder,
    classify_failure,
    create_recorder,
)
from e2e_recorder.recording.screenshot import ScreenshotCapture, ScreenshotDriver
from e2e_recorder.recording.store import OutcomeStore
from e2e_recorder.recording.timer import TimerHandle, start_timer

__all__ = [
    "OutcomeStore",
    "ScenarioScope",
    "ScenarioSkipped",
    "ScreenshotCapture",
    "ScreenshotDriver",
    "SuiteRecorder",
    "TimerHandle",
    "classify_failure",
    "create_recorder",
    "start_timer",
]
