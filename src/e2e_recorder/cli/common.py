"""Helpers shared by CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from e2e_recorder.loader.errors import ErrorFormatter, SuiteDefinitionError
from e2e_recorder.loader.suite_loader import load_suite
from e2e_recorder.models.config import ProjectConfig, ProjectConfigError, load_project_config
from e2e_recorder.models.suite import SuiteDefinition


def configure_logging(level: str = "INFO") -> None:
    """Route library log records through a Rich handler on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_config_or_exit(project_root: Path | None = None) -> ProjectConfig:
    """Load recorder.yaml, printing the problem and exiting 1 if it is invalid."""
    try:
        return load_project_config(project_root)
    except ProjectConfigError as exc:
        console = Console(stderr=True)
        console.print(
            f"[bold red]Config error:[/bold red] {escape(str(exc.path))}", soft_wrap=True
        )
        console.print(f"  {exc.problem}", markup=False, soft_wrap=True)
        raise typer.Exit(code=1)


def load_suite_or_exit(path: Path, console: Console) -> SuiteDefinition:
    """Load a suite definition, printing errors and exiting 1 on failure."""
    if not path.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {path}")
        raise typer.Exit(code=1)
    try:
        return load_suite(path)
    except SuiteDefinitionError as exc:
        formatter = ErrorFormatter(ci_mode=False)
        console.print("[bold red]Suite definition errors:[/bold red]")
        console.print(formatter.format_all(exc.errors, exc.filename), markup=False)
        raise typer.Exit(code=1)
