"""Informational commands: finding kinds and project detection."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from dsflint.cli.utils import handle_cli_errors
from dsflint.models.enums import LintKind
from dsflint.project import detect_api_version, find_project_root


def kinds_command(
    ctx: typer.Context,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as a JSON list")
    ] = False,
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", "-p", help="Only kinds whose tag starts with this prefix"),
    ] = None,
):
    """List every finding kind the linter can report."""
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output)

    kinds = [kind for kind in LintKind if prefix is None or kind.value.startswith(prefix.lower())]
    if cli_ctx.json_mode:
        cli_ctx.print_json(data=[kind.value for kind in kinds])
        return

    table = Table(title=f"Finding kinds ({len(kinds)})", title_justify="left")
    table.add_column("Name", no_wrap=True)
    table.add_column("Tag", no_wrap=True)
    for kind in kinds:
        table.add_row(kind.name, kind.value)
    cli_ctx.printer.console.print(table)


@handle_cli_errors("Detection failed")
def detect_command(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(exists=True, help="Project directory or a file inside the project"),
    ] = Path("."),
    json_output: Annotated[
        bool, typer.Option("--json", help="Output in JSON format")
    ] = False,
):
    """Print the resolved project root and the detected plugin API generation."""
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output)

    config = cli_ctx.load_config(path.resolve())
    root = find_project_root(path.resolve(), config.project_root)
    detected = detect_api_version(root)

    if cli_ctx.json_mode:
        cli_ctx.print_json(data={
            "project_root": str(root),
            "api_version": detected.version.value,
            "evidence": str(detected.evidence) if detected.evidence else None,
        })
        return

    cli_ctx.printer.print(f"Project root: {root}")
    cli_ctx.printer.print(f"API version:  {detected.version}")
    if detected.evidence:
        cli_ctx.printer.print(f"Evidence:     {detected.evidence}")
