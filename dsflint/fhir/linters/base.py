"""Base class and shared checks for resource linters."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from dsflint.common.constants import CS_READ_ACCESS
from dsflint.fhir.document import FhirDocument, is_blank
from dsflint.fhir.resolver import ResourceResolver, contains_placeholder
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding, FindingLocation
from dsflint.terminology.cache import TerminologyCache, default_cache


@dataclass
class FhirLintContext:
    """A parsed resource plus the collaborators its linter may consult."""

    document: FhirDocument
    project_root: Path
    cache: TerminologyCache = field(default_factory=default_cache)
    resolver: ResourceResolver | None = None
    reference: str | None = None

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = ResourceResolver(self.project_root)
        if self.reference is None:
            self.reference = self.document.url or self.document.file_name

    @property
    def file_name(self) -> str:
        return self.document.file_name

    def finding(self, severity: LintSeverity, kind: LintKind, description: str) -> Finding:
        location = FindingLocation(file_name=self.file_name, reference=self.reference)
        return Finding.of(severity, kind, description, location)

    def error(self, kind: LintKind, description: str) -> Finding:
        return self.finding(LintSeverity.ERROR, kind, description)

    def warn(self, kind: LintKind, description: str) -> Finding:
        return self.finding(LintSeverity.WARN, kind, description)

    def info(self, kind: LintKind, description: str) -> Finding:
        return self.finding(LintSeverity.INFO, kind, description)

    def success(self, description: str) -> Finding:
        return Finding.success(description, FindingLocation(file_name=self.file_name, reference=self.reference))


class FhirResourceLinter(ABC):
    """Linter for one resource type, selected through ``can_handle``."""

    resource_type: ClassVar[str]

    def can_handle(self, document: FhirDocument) -> bool:
        return document.resource_type == self.resource_type

    def reference_for(self, document: FhirDocument) -> str | None:
        """Reference stamped on every finding of the document."""
        return None

    @abstractmethod
    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        """Lint the document carried by ``ctx``."""
        pass


# ============================================================================
# Shared checks
# ============================================================================


def check_placeholder(
    ctx: FhirLintContext,
    value: str | None,
    token: str | None,
    kind: LintKind,
    severity: LintSeverity,
    label: str,
) -> list[Finding]:
    """
    Exactly one finding: SUCCESS if ``value`` carries the placeholder, else ``kind``.

    With ``token=None`` any ``#{...}`` or ``${...}`` placeholder is accepted.
    """
    present = contains_placeholder(value) if token is None else (value is not None and token in value)
    if present:
        return [ctx.success(f"{label} contains a placeholder: '{value}'")]
    expected = token or "a placeholder"
    if is_blank(value):
        return [ctx.finding(severity, kind, f"{label} is missing, expected {expected}")]
    return [ctx.finding(severity, kind, f"{label} must contain {expected} (found '{value}')")]


def check_fixed_status(
    ctx: FhirLintContext,
    expected: str,
    kind: LintKind,
    missing_kind: LintKind | None = None,
    severity: LintSeverity = LintSeverity.ERROR,
) -> list[Finding]:
    status = ctx.document.status
    if status == expected:
        return [ctx.success(f"status is '{expected}'")]
    if is_blank(status):
        return [ctx.finding(severity, missing_kind or kind, f"{ctx.document.resource_type} is missing <status>")]
    return [ctx.finding(severity, kind, f"status must be '{expected}' (found '{status}')")]


def check_read_access_tag(
    ctx: FhirLintContext,
    kind: LintKind,
    allowed: Iterable[str] | None = None,
) -> list[Finding]:
    """
    At least one ``meta.tag`` from the read-access system.

    With ``allowed`` the code must be one of them, otherwise it must be a code
    the terminology cache knows.
    """
    allowed = set(allowed) if allowed is not None else None
    for system, code in ctx.document.read_access_tags():
        if system != CS_READ_ACCESS or is_blank(code):
            continue
        if allowed is not None and code in allowed:
            return [ctx.success(f"Read-access tag present with code '{code}'")]
        if allowed is None and ctx.cache.is_known(system, code):
            return [ctx.success(f"Read-access tag present with code '{code}'")]
    expected = f" with code {' or '.join(sorted(allowed))}" if allowed else ""
    return [ctx.error(kind, f"Missing read-access tag (system '{CS_READ_ACCESS}'){expected}")]


def check_required_elements(
    ctx: FhirLintContext,
    names: Iterable[str],
    kind: LintKind,
    severity: LintSeverity = LintSeverity.ERROR,
) -> list[Finding]:
    findings = []
    for name in names:
        value = ctx.document.value(name)
        if is_blank(value):
            findings.append(ctx.finding(severity, kind, f"<{name}> is missing or empty"))
        else:
            findings.append(ctx.success(f"<{name}> is present: '{value}'"))
    return findings
