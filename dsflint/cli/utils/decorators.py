"""Decorators for CLI error handling and consistent output formatting."""

from collections.abc import Callable
from functools import wraps

import typer

from dsflint.common.exceptions import DsfLintError


def handle_cli_errors(error_message: str) -> Callable:
    """Decorator to handle CLI errors with consistent formatting.

    Any exception other than ``typer.Exit`` is printed (as JSON in json_mode)
    and turned into exit code 1.

    Args:
        error_message: Base error message template (can include {error} placeholder)

    Returns:
        Decorated function that handles errors consistently

    Example:
        ```python
        @handle_cli_errors("Lint run failed")
        def lint_command(ctx: typer.Context, ...):
            result = ProjectLinter(config).lint_project(path)
        ```
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            # Extract context from first argument (standard Typer pattern)
            ctx = args[0] if args else kwargs.get("ctx")
            if not ctx or not hasattr(ctx, "obj"):
                return func(*args, **kwargs)

            cli_ctx = ctx.obj

            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:
                if "{error}" in error_message:
                    formatted_message = error_message.format(error=e)
                else:
                    formatted_message = f"{error_message}: {e}"

                if getattr(cli_ctx, "json_mode", False):
                    data = {"error": formatted_message}
                    if isinstance(e, DsfLintError) and e.context:
                        data["context"] = e.context
                    cli_ctx.print_json(data=data)
                else:
                    cli_ctx.print_error(formatted_message)

                raise typer.Exit(1) from e

        return wrapper

    return decorator
