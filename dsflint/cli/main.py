"""dsflint CLI - Typer-based command line interface."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from dsflint.cli.commands import detect_command, kinds_command, lint_command
from dsflint.cli.utils import CLIContext

# Create main app and console
app = typer.Typer(
    name="dsflint",
    help="dsflint: static checks for DSF process plugins (BPMN and FHIR resources)",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output and debug logging")
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", exists=True, dir_okay=False, help="YAML configuration file"),
    ] = None,
):
    """
    dsflint CLI callback - sets up context for all commands.

    Commands access the shared CLIContext via ctx.obj.
    """
    ctx.obj = CLIContext(console=console, verbose=verbose, config_file=config_file)


app.command(name="lint")(lint_command)
app.command(name="kinds")(kinds_command)
app.command(name="detect")(detect_command)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
