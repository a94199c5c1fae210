"""Lint command: run every linter over a plugin project."""

from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer

from dsflint.cli.utils import handle_cli_errors
from dsflint.models.enums import ApiVersion, LintSeverity
from dsflint.report import JsonReportWriter, build_project_report
from dsflint.runner import ProjectLinter


class ApiChoice(StrEnum):
    V1 = "v1"
    V2 = "v2"


@handle_cli_errors("Lint run failed")
def lint_command(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(exists=True, help="Project directory or a file inside the project"),
    ] = Path("."),
    report_dir: Annotated[
        Path | None,
        typer.Option("--report-dir", "-o", help="Write JSON reports into this directory"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Output the aggregate report as JSON")
    ] = False,
    api_version: Annotated[
        ApiChoice | None,
        typer.Option("--api-version", help="Force the plugin API generation (default: detected)"),
    ] = None,
    fail_on_warn: Annotated[
        bool, typer.Option("--fail-on-warn", help="Exit with code 1 on warnings as well")
    ] = False,
    min_severity: Annotated[
        LintSeverity,
        typer.Option("--min-severity", "-s", case_sensitive=False, help="Least severe level to display"),
    ] = LintSeverity.INFO,
):
    """
    Lint the BPMN processes and FHIR resources of a DSF plugin project.

    Exit code is 1 when the run holds ERROR findings (or warnings with
    --fail-on-warn), else 0.

    Example:
        dsflint lint ./my-process-plugin --report-dir target/lint
    """
    cli_ctx = ctx.obj
    cli_ctx.set_json_mode(json_output)

    config = cli_ctx.load_config(path.resolve())
    config = config.with_overrides(
        report_dir=report_dir.resolve() if report_dir else None,
        api_version=ApiVersion(api_version.value) if api_version else None,
        fail_on_warn=True if fail_on_warn else None,
    )
    cli_ctx.configure_logging(config.log_level)
    cli_ctx.print_verbose(f"[dim]Using {config}[/dim]")

    result = ProjectLinter(config).lint_project(path.resolve())
    aggregate = result.aggregate
    failed = result.failed(config.fail_on_warn)

    if config.report_dir is not None:
        written = JsonReportWriter(config.report_dir).write(result)
        cli_ctx.print_verbose(f"[dim]Wrote {len(written)} report files to {config.report_dir}[/dim]")

    shown = aggregate.at_least(min_severity)
    if cli_ctx.json_mode:
        data = build_project_report(result).model_dump(mode="json")
        data["findings"] = [f for f in data["findings"] if LintSeverity(f["severity"]).rank <= min_severity.rank]
        data["failed"] = failed
        cli_ctx.print_json(data=data)
    else:
        cli_ctx.print_verbose(
            f"[dim]Project root: {result.project_root} (api {result.api_version}, "
            f"detected {result.detected_version})[/dim]"
        )
        cli_ctx.printer.print_findings(shown)
        cli_ctx.printer.print_summary(aggregate, failed)

    if failed:
        raise typer.Exit(code=1)
