"""Report rendering and persistence."""

from e2e_recorder.reporting.renderer import (
    NOT_EXECUTED,
    RenderedReport,
    ReportRenderer,
    ReportRow,
)
from e2e_recorder.reporting.writer import ReportWriter

__all__ = [
    "NOT_EXECUTED",
    "RenderedReport",
    "ReportRenderer",
    "ReportRow",
    "ReportWriter",
]
