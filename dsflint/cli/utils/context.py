"""
CLI Context for dsflint.

Holds the console, output modes and configuration shared by all commands.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from dsflint.cli.utils.printer import CliPrinter
from dsflint.config import LintConfig


@dataclass
class CLIContext:
    """
    Context object for CLI commands.

    This context is created once in the app callback and passed to all
    commands via Typer's context injection.

    Attributes:
        console: Rich console for output
        verbose: Enable verbose output (ignored when json_mode is True)
        config_file: Explicit configuration file given on the command line
        printer: CLI printer for formatted output (always initialized)
        json_mode: When True, suppress all non-JSON output (set by commands)
    """

    console: Console
    verbose: bool = False
    config_file: Path | None = None
    printer: CliPrinter = field(init=False)
    json_mode: bool = False

    def __post_init__(self):
        self.printer = CliPrinter(console=self.console, verbose=self.verbose)

    def set_json_mode(self, enabled: bool) -> None:
        self.json_mode = enabled
        self.printer.json_mode = enabled

    def load_config(self, project_path: Path | None = None) -> LintConfig:
        """
        Configuration for a run.

        An explicit ``--config`` file wins; otherwise ``dsflint.yaml`` in the
        project directory, otherwise the environment.
        """
        if self.config_file is not None:
            return LintConfig.from_file(self.config_file)
        if project_path is not None:
            directory = project_path if project_path.is_dir() else project_path.parent
            return LintConfig.discover(directory)
        return LintConfig.from_env()

    def configure_logging(self, level: str) -> None:
        """Route log records through rich; ``--verbose`` forces DEBUG."""
        effective = "DEBUG" if self.verbose else level
        logging.basicConfig(
            level=effective,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), show_path=self.verbose)],
            force=True,
        )

    def print_verbose(self, message: str, **kwargs) -> None:
        if self.verbose and not self.json_mode:
            self.console.print(message, **kwargs)

    def print_error(self, message: str) -> None:
        """
        Print an error message (always prints unless in JSON mode).

        Args:
            message: Error message to print
        """
        if not self.json_mode:
            self.printer.print_error(message)

    def print_json(self, data: Any) -> None:
        """
        Print data as JSON (always prints, even in JSON mode).

        Args:
            data: Data to serialize and print as JSON
        """
        self.printer.print_json(data=data)
