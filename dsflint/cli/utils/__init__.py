"""CLI utilities package.

This package provides utilities for CLI commands including:
- CLIContext: Context management for commands
- CliPrinter: Finding tables and summaries
- Decorators: Error handling decorators
"""

from dsflint.cli.utils.context import CLIContext
from dsflint.cli.utils.decorators import handle_cli_errors
from dsflint.cli.utils.printer import CliPrinter

__all__ = [
    "CLIContext",
    "CliPrinter",
    "handle_cli_errors",
]
