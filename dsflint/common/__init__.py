"""Shared constants and exceptions for dsflint."""

from dsflint.common.exceptions import (
    ConfigurationError,
    DocumentParseError,
    DsfLintError,
    ReportError,
    ResourceResolutionError,
)

__all__ = [
    "DsfLintError",
    "ConfigurationError",
    "DocumentParseError",
    "ResourceResolutionError",
    "ReportError",
]
