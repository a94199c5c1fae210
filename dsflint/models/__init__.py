"""Finding model for dsflint."""

from dsflint.models.enums import ApiVersion, LintKind, LintSeverity
from dsflint.models.finding import (
    Finding,
    FindingLocation,
    LintReport,
    extract_process_id,
    sort_findings,
)

__all__ = [
    "ApiVersion",
    "LintKind",
    "LintSeverity",
    "Finding",
    "FindingLocation",
    "LintReport",
    "extract_process_id",
    "sort_findings",
]
