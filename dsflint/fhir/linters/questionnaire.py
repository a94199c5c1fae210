"""Questionnaire checks: metadata, placeholders and items."""

import re

from dsflint.common.constants import KIND_QUESTIONNAIRE, PLACEHOLDER_DATE, PLACEHOLDER_VERSION
from dsflint.fhir.document import is_blank
from dsflint.fhir.linters.base import (
    FhirLintContext,
    FhirResourceLinter,
    check_fixed_status,
    check_placeholder,
    check_read_access_tag,
)
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding

PROFILE_PATTERN = re.compile(r"^http://dsf\.dev/fhir/StructureDefinition/questionnaire\|\d+\.\d+\.\d+$")
LINK_ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

MANDATORY_LINK_IDS = ("business-key", "user-task-id")


class QuestionnaireLinter(FhirResourceLinter):
    resource_type = KIND_QUESTIONNAIRE

    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        findings = self._check_profile(ctx)
        findings.extend(check_read_access_tag(ctx, LintKind.QUESTIONNAIRE_MISSING_READ_ACCESS_TAG))
        findings.extend(check_fixed_status(ctx, "unknown", LintKind.QUESTIONNAIRE_INVALID_STATUS))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("version"),
            PLACEHOLDER_VERSION,
            LintKind.QUESTIONNAIRE_VERSION_NO_PLACEHOLDER,
            LintSeverity.ERROR,
            "<version>",
        ))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("date"),
            PLACEHOLDER_DATE,
            LintKind.QUESTIONNAIRE_DATE_NO_PLACEHOLDER,
            LintSeverity.ERROR,
            "<date>",
        ))
        findings.extend(self._check_items(ctx))
        return findings

    def _check_profile(self, ctx: FhirLintContext) -> list[Finding]:
        profile = ctx.document.value("meta.profile")
        if is_blank(profile):
            return [ctx.error(LintKind.QUESTIONNAIRE_MISSING_META_PROFILE, "Questionnaire is missing meta.profile")]
        if not PROFILE_PATTERN.match(profile):
            return [ctx.error(
                LintKind.QUESTIONNAIRE_INVALID_META_PROFILE,
                f"Questionnaire has invalid meta.profile: {profile}",
            )]
        return [ctx.success("meta.profile present and valid")]

    def _check_items(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        items = doc.find_all("item")
        if not items:
            return [ctx.error(LintKind.QUESTIONNAIRE_MISSING_ITEM, "Questionnaire must contain at least one item")]

        findings: list[Finding] = []
        # linkId -> (type, required)
        seen: dict[str, tuple[str | None, str | None]] = {}
        for item in items:
            link_id = doc.primitive(item, "linkId")
            item_type = doc.primitive(item, "type")
            if is_blank(link_id):
                findings.append(ctx.error(LintKind.QUESTIONNAIRE_ITEM_MISSING_LINK_ID, "Questionnaire item is missing linkId"))
                continue
            if is_blank(item_type):
                findings.append(ctx.error(
                    LintKind.QUESTIONNAIRE_ITEM_MISSING_TYPE, f"Questionnaire item '{link_id}' is missing type"
                ))
                continue
            if is_blank(doc.primitive(item, "text")):
                findings.append(ctx.info(
                    LintKind.QUESTIONNAIRE_ITEM_MISSING_TEXT, f"Questionnaire item '{link_id}' is missing text"
                ))
            if link_id in seen:
                findings.append(ctx.error(
                    LintKind.QUESTIONNAIRE_DUPLICATE_LINK_ID, f"Questionnaire has duplicate linkId: {link_id}"
                ))
            else:
                seen[link_id] = (item_type, doc.primitive(item, "required"))
            if not LINK_ID_PATTERN.match(link_id):
                findings.append(ctx.warn(
                    LintKind.QUESTIONNAIRE_UNUSUAL_LINK_ID,
                    f"linkId '{link_id}' does not match the recommended pattern [a-z0-9]+(-[a-z0-9]+)*",
                ))
            elif link_id not in MANDATORY_LINK_IDS:
                findings.append(ctx.success(f"item '{link_id}' looks good"))

        for link_id in MANDATORY_LINK_IDS:
            findings.append(self._check_mandatory_item(ctx, link_id, seen.get(link_id)))
        return findings

    def _check_mandatory_item(
        self,
        ctx: FhirLintContext,
        link_id: str,
        item: tuple[str | None, str | None] | None,
    ) -> Finding:
        if item is None:
            return ctx.error(LintKind.QUESTIONNAIRE_MANDATORY_ITEM_MISSING, f"Mandatory item '{link_id}' is missing")
        item_type, required = item
        if item_type != "string":
            return ctx.error(
                LintKind.QUESTIONNAIRE_MANDATORY_ITEM_INVALID_TYPE,
                f"Mandatory item '{link_id}' must be of type 'string' (found '{item_type}')",
            )
        if required != "true":
            return ctx.error(
                LintKind.QUESTIONNAIRE_MANDATORY_ITEM_NOT_REQUIRED,
                f"Mandatory item '{link_id}' must have required='true'",
            )
        return ctx.success(f"mandatory item '{link_id}' valid")
