"""e2e-recorder preview -- render the report layout of an empty run.

Every declared scenario shows as not executed, which makes it easy
to check titles, icons and column widths before wiring up a suite.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from e2e_recorder.cli.common import load_suite_or_exit
from e2e_recorder.models.result import StoreSnapshot
from e2e_recorder.reporting.renderer import ReportRenderer


def preview(
    suite_path: str = typer.Argument(..., help="Path to suite YAML file"),
    console_format: bool = typer.Option(
        False, "--console", help="Prefix lines the way the live console output does"
    ),
) -> None:
    """Render an empty report for a suite."""
    console = Console()
    suite = load_suite_or_exit(Path(suite_path), console)

    report = ReportRenderer(suite).render(StoreSnapshot())
    text = report.console_text if console_format else report.file_text.rstrip("\n")
    console.print(text, markup=False, highlight=False, soft_wrap=True)
