"""ValueSet checks: metadata, placeholders and compose includes."""

from dsflint.common.constants import (
    CS_ORGANIZATION_ROLE,
    EXT_READ_ACCESS_PARENT_ORG_ROLE,
    KIND_VALUE_SET,
    PLACEHOLDER_DATE,
    PLACEHOLDER_VERSION,
)
from dsflint.fhir.document import is_blank
from dsflint.fhir.linters.base import (
    FhirLintContext,
    FhirResourceLinter,
    check_placeholder,
    check_read_access_tag,
)
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding

REQUIRED_ELEMENTS = {
    "url": LintKind.FHIR_VALUE_SET_MISSING_URL,
    "name": LintKind.FHIR_VALUE_SET_MISSING_NAME,
    "title": LintKind.FHIR_VALUE_SET_MISSING_TITLE,
    "publisher": LintKind.FHIR_VALUE_SET_MISSING_PUBLISHER,
    "description": LintKind.FHIR_VALUE_SET_MISSING_DESCRIPTION,
}


class ValueSetLinter(FhirResourceLinter):
    resource_type = KIND_VALUE_SET

    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        findings = check_read_access_tag(
            ctx, LintKind.FHIR_VALUE_SET_MISSING_READ_ACCESS_TAG_ALL_OR_LOCAL, {"ALL", "LOCAL"}
        )
        findings.extend(self._check_organization_roles(ctx))
        for name, kind in REQUIRED_ELEMENTS.items():
            value = ctx.document.value(name)
            if is_blank(value):
                findings.append(ctx.error(kind, f"ValueSet is missing <{name}>"))
            else:
                findings.append(ctx.success(f"<{name}> OK"))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("version"),
            PLACEHOLDER_VERSION,
            LintKind.FHIR_VALUE_SET_VERSION_NO_PLACEHOLDER,
            LintSeverity.WARN,
            "<version>",
        ))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("date"),
            PLACEHOLDER_DATE,
            LintKind.FHIR_VALUE_SET_DATE_NO_PLACEHOLDER,
            LintSeverity.WARN,
            "<date>",
        ))
        findings.extend(self._check_includes(ctx))
        return findings

    def _check_organization_roles(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        findings = []
        for tag in doc.find_all("meta.tag"):
            for parent_role in doc.extensions(EXT_READ_ACCESS_PARENT_ORG_ROLE, tag):
                for role in doc.extensions("organization-role", parent_role):
                    code = doc.value("valueCoding.code", role)
                    if ctx.cache.is_unknown(CS_ORGANIZATION_ROLE, code):
                        findings.append(ctx.error(
                            LintKind.FHIR_VALUE_SET_ORGANIZATION_ROLE_MISSING_VALID_CODE_VALUE,
                            f"Invalid organization-role code '{code}'",
                        ))
                    else:
                        findings.append(ctx.success(f"parent-organization-role code '{code}' OK"))
        return findings

    def _check_includes(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        includes = doc.find_all("compose.include")
        if not includes:
            return [ctx.error(LintKind.FHIR_VALUE_SET_MISSING_COMPOSE_INCLUDE, "ValueSet has no compose.include")]

        findings: list[Finding] = []
        for include in includes:
            system = doc.value("system", include)
            if is_blank(system):
                findings.append(ctx.error(
                    LintKind.FHIR_VALUE_SET_INCLUDE_MISSING_SYSTEM, "compose.include without system"
                ))
                continue
            findings.append(ctx.success(f"include.system = '{system}'"))
            findings.extend(check_placeholder(
                ctx,
                doc.value("version", include),
                PLACEHOLDER_VERSION,
                LintKind.FHIR_VALUE_SET_INCLUDE_VERSION_NO_PLACEHOLDER,
                LintSeverity.WARN,
                "include.version",
            ))

            seen: set[str] = set()
            for concept in doc.children(include, "concept"):
                code = doc.value("code", concept)
                if is_blank(code):
                    findings.append(ctx.error(
                        LintKind.FHIR_VALUE_SET_CONCEPT_MISSING_CODE, "include.concept without code"
                    ))
                    continue
                if code in seen:
                    findings.append(ctx.warn(
                        LintKind.FHIR_VALUE_SET_DUPLICATE_CONCEPT_CODE,
                        f"duplicate code '{code}' in the same include",
                    ))
                seen.add(code)
                findings.append(self._check_concept_code(ctx, system, code))
        return findings

    def _check_concept_code(self, ctx: FhirLintContext, system: str, code: str) -> Finding:
        if ctx.cache.contains_system(system) and ctx.cache.is_known(system, code):
            return ctx.success(f"concept.code '{code}' is known in '{system}'")
        elsewhere = ctx.cache.systems_containing(code)
        if elsewhere:
            return ctx.error(
                LintKind.FHIR_VALUE_SET_FALSE_URL_REFERENCED,
                f"code '{code}' exists in system(s) {elsewhere} but ValueSet references '{system}'",
            )
        return ctx.error(LintKind.FHIR_VALUE_SET_UNKNOWN_CODE, f"unknown code '{code}' in system '{system}'")
