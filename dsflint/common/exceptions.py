"""Common exceptions for dsflint.

Rule violations are never raised; they are reported as findings. The
exceptions below signal failures at the edges of a run: configuration,
document parsing, resource resolution and report writing.
"""

from typing import Any


class DsfLintError(Exception):
    """Base exception for all dsflint errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize exception with message and optional context."""
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(DsfLintError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize configuration error with details."""
        super().__init__(message, context)
        self.config_key = config_key


class DocumentParseError(DsfLintError):
    """Raised when a process or resource document cannot be parsed."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        document_kind: str | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize parse error with details."""
        super().__init__(message, context)
        self.file_path = file_path
        self.document_kind = document_kind


class ResourceResolutionError(DsfLintError):
    """Raised when a project root or resource directory cannot be resolved."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, context)
        self.path = path


class ReportError(DsfLintError):
    """Raised when a report cannot be written."""

    def __init__(
        self,
        message: str,
        output_path: str | None = None,
        context: dict[str, Any] | None = None
    ):
        super().__init__(message, context)
        self.output_path = output_path


__all__ = [
    'DsfLintError',
    'ConfigurationError',
    'DocumentParseError',
    'ResourceResolutionError',
    'ReportError',
]
