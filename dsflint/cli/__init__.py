"""dsflint command line interface."""

from dsflint.cli.main import app, main

__all__ = ["app", "main"]
