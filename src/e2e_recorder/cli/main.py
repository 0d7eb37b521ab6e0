"""e2e-recorder CLI entry point."""

from typing import Optional

import typer

from e2e_recorder import __version__
from e2e_recorder.cli.common import configure_logging, load_config_or_exit
from e2e_recorder.cli.preview_cmd import preview
from e2e_recorder.cli.scenarios_cmd import scenarios
from e2e_recorder.cli.validate_cmd import validate

app = typer.Typer(
    name="e2e-recorder",
    help="Scenario outcome tracking and reports for end-to-end UI suites",
    no_args_is_help=True,
)

# Register subcommands
app.command()(preview)
app.command()(scenarios)
app.command()(validate)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"e2e-recorder {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override the configured log level."
    ),
) -> None:
    """Scenario outcome tracking and reports for end-to-end UI suites."""
    config = load_config_or_exit()
    configure_logging((log_level or config.log_level).upper())
