"""e2e-recorder validate -- check suite definition files.

Every problem in a file is reported in one pass. Without arguments the
configured suites directory is scanned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from e2e_recorder.cli.common import load_config_or_exit
from e2e_recorder.loader.errors import ErrorFormatter
from e2e_recorder.loader.suite_loader import discover_suite_files, validate_suite_file
from e2e_recorder.models.config import find_project_root


def _suite_files(paths: Optional[list[str]]) -> list[Path]:
    """Resolve explicit paths, or discover files under the suites directory."""
    if paths:
        missing = [p for p in paths if not Path(p).exists()]
        if missing:
            typer.echo(f"Error: File not found: {missing[0]}", err=True)
            raise typer.Exit(code=1)
        return [Path(p) for p in paths]

    project_root = find_project_root()
    config = load_config_or_exit(project_root)
    files = discover_suite_files(project_root / config.suites_dir)
    if not files:
        typer.echo(
            f"No suite files found. Pass files explicitly or add them under "
            f"{config.suites_dir}/."
        )
        raise typer.Exit(code=1)
    return files


def validate(
    suites: Optional[list[str]] = typer.Argument(
        None, help="Suite files to validate (default: all in the suites directory)"
    ),
    ci: bool = typer.Option(False, "--ci", help="CI-friendly concise output"),
) -> None:
    """Validate suite definition YAML files.

    Exits with code 0 if all files are valid, 1 if any has errors.
    """
    formatter = ErrorFormatter(ci_mode=ci)
    files = _suite_files(suites)

    invalid = 0
    scenario_count = 0
    for path in files:
        suite, errors = validate_suite_file(path)
        if suite is None:
            invalid += 1
            typer.echo(formatter.format_all(errors, str(path)), err=not ci)
            continue
        scenario_count += len(suite.scenarios)
        if not ci:
            typer.echo(f"✓ {path} ({len(suite.scenarios)} scenarios)")

    valid = len(files) - invalid
    typer.echo(f"\n{valid}/{len(files)} suites valid, {scenario_count} scenarios declared")
    if invalid:
        raise typer.Exit(code=1)
