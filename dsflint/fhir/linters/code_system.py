"""CodeSystem checks."""

from dsflint.common.constants import KIND_CODE_SYSTEM, PLACEHOLDER_DATE, PLACEHOLDER_VERSION
from dsflint.fhir.document import is_blank
from dsflint.fhir.linters.base import (
    FhirLintContext,
    FhirResourceLinter,
    check_fixed_status,
    check_placeholder,
    check_read_access_tag,
    check_required_elements,
)
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding

REQUIRED_ELEMENTS = ("url", "name", "title", "publisher", "content", "caseSensitive")


class CodeSystemLinter(FhirResourceLinter):
    resource_type = KIND_CODE_SYSTEM

    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        findings = check_read_access_tag(ctx, LintKind.CODE_SYSTEM_MISSING_READ_ACCESS_TAG, {"ALL"})
        findings.extend(check_required_elements(ctx, REQUIRED_ELEMENTS, LintKind.CODE_SYSTEM_MISSING_ELEMENT))
        findings.extend(check_fixed_status(ctx, "unknown", LintKind.CODE_SYSTEM_INVALID_STATUS))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("version"),
            PLACEHOLDER_VERSION,
            LintKind.CODE_SYSTEM_VERSION_NO_PLACEHOLDER,
            LintSeverity.ERROR,
            "<version>",
        ))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("date"),
            PLACEHOLDER_DATE,
            LintKind.CODE_SYSTEM_DATE_NO_PLACEHOLDER,
            LintSeverity.WARN,
            "<date>",
        ))
        findings.extend(self._check_concepts(ctx))
        return findings

    def _check_concepts(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        concepts = doc.find_all("concept")
        if not concepts:
            return [ctx.error(LintKind.CODE_SYSTEM_MISSING_CONCEPT, "CodeSystem must contain at least one concept")]

        findings: list[Finding] = []
        seen: set[str] = set()
        for concept in concepts:
            code = doc.value("code", concept)
            if is_blank(code):
                findings.append(ctx.error(LintKind.CODE_SYSTEM_CONCEPT_MISSING_CODE, "CodeSystem concept is missing code"))
            elif code in seen:
                findings.append(ctx.error(LintKind.CODE_SYSTEM_DUPLICATE_CODE, f"CodeSystem has duplicate code: {code}"))
            else:
                seen.add(code)
            if is_blank(doc.value("display", concept)):
                findings.append(ctx.error(
                    LintKind.CODE_SYSTEM_CONCEPT_MISSING_DISPLAY,
                    f"CodeSystem concept '{code or ''}' is missing display",
                ))
        if len(seen) == len(concepts):
            findings.append(ctx.success(f"all concept codes unique ({len(seen)})"))
        return findings
