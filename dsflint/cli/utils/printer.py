"""CLI Printer for consistent output formatting."""

from itertools import groupby

from rich.console import Console
from rich.table import Table

from dsflint.models.enums import LintSeverity
from dsflint.models.finding import Finding, LintReport

SEVERITY_STYLES = {
    LintSeverity.ERROR: "bold red",
    LintSeverity.WARN: "yellow",
    LintSeverity.INFO: "cyan",
    LintSeverity.SUCCESS: "green",
}


class CliPrinter:
    """Centralized printer for CLI output.

    This class handles all printing operations for the CLI, ensuring consistent
    formatting across commands and proper handling of verbose/JSON modes.
    """

    def __init__(
        self, console: Console, verbose: bool = False, json_mode: bool = False
    ):
        """Initialize printer with console and mode settings.

        Args:
            console: Rich console for output
            verbose: Whether to show detailed output
            json_mode: Whether to output in JSON format (can be set later)
        """
        self.console = console
        self.verbose = verbose
        self.json_mode = json_mode

    def print_findings(self, findings: list[Finding]) -> None:
        """Print findings as one table per file, most severe first.

        Args:
            findings: Findings to print, in any order
        """
        if not findings:
            self.show_success("No findings at the selected severity")
            return

        by_file = sorted(findings, key=lambda f: (f.file_name, f.sort_key()))
        for file_name, group in groupby(by_file, key=lambda f: f.file_name):
            table = Table(title=file_name, title_justify="left", show_lines=False)
            table.add_column("Severity", no_wrap=True)
            table.add_column("Kind", no_wrap=True)
            table.add_column("Location")
            table.add_column("Description")
            for finding in group:
                location = finding.location
                where = ", ".join(
                    part for part in (location.process_id, location.element_id, location.reference) if part
                )
                table.add_row(
                    f"[{SEVERITY_STYLES[finding.severity]}]{finding.severity}[/]",
                    finding.kind.value,
                    where,
                    finding.description,
                )
            self.console.print(table)

    def print_summary(self, report: LintReport, failed: bool) -> None:
        """Print the per-severity counts of the aggregate report.

        Args:
            report: Aggregate report of the run
            failed: Whether the run outcome is a failure
        """
        counts = ", ".join(
            f"[{SEVERITY_STYLES[severity]}]{count} {severity}[/]"
            for severity, count in (
                (LintSeverity.ERROR, report.errors),
                (LintSeverity.WARN, report.warnings),
                (LintSeverity.INFO, report.infos),
                (LintSeverity.SUCCESS, report.successes),
            )
        )
        self.console.print(f"\nSummary: {counts}")
        if failed:
            self.console.print("[red]❌ Lint failed[/red]")
        else:
            self.show_success("Lint passed")

    def show_success(self, message: str) -> None:
        """Show success message with green checkmark.

        Args:
            message: Success message to show
        """
        self.console.print(f"[green]✅ {message}[/green]")

    def print_json(self, data: dict | list) -> None:
        """Print data as JSON.

        Args:
            data: Data to print as JSON
        """
        self.console.print_json(data=data)

    def print(self, message: str, **kwargs) -> None:
        self.console.print(message, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message with red formatting.

        Args:
            message: Error message to print
        """
        self.console.print(f"[red]❌ Error:[/red] {message}")
