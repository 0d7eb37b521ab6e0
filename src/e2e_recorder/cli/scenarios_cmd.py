"""e2e-recorder scenarios -- list a suite's declared scenarios."""

from __future__ import annotations

from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from e2e_recorder.cli.common import load_suite_or_exit


def scenarios(
    suite_path: str = typer.Argument(..., help="Path to suite YAML file"),
) -> None:
    """Show the declared scenario order of a suite."""
    console = Console()
    suite = load_suite_or_exit(Path(suite_path), console)

    table = Table(box=box.ROUNDED, title=suite.report_title)
    table.add_column("#", justify="right")
    table.add_column("Scenario")

    for index, name in enumerate(suite.scenarios, 1):
        table.add_row(str(index), name)

    console.print(table)
    console.print(f"\n{len(suite.scenarios)} scenario(s) declared in '{suite.name}'.")
