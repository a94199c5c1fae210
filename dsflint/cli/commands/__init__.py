"""CLI commands module for dsflint."""

from dsflint.cli.commands.info import detect_command, kinds_command
from dsflint.cli.commands.lint import lint_command

__all__ = [
    "lint_command",
    "kinds_command",
    "detect_command",
]
