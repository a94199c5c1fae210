"""ActivityDefinition checks: metadata, read access and process authorization."""

import re
import xml.etree.ElementTree as ET

from dsflint.common.constants import (
    CS_PROCESS_AUTHORIZATION,
    EXT_PROCESS_AUTHORIZATION,
    KIND_ACTIVITY_DEFINITION,
    PROFILE_ACTIVITY_DEFINITION,
)
from dsflint.fhir.document import is_blank
from dsflint.fhir.linters.base import FhirLintContext, FhirResourceLinter, check_fixed_status, check_read_access_tag
from dsflint.models.enums import LintKind
from dsflint.models.finding import Finding

URL_PATTERN = re.compile(
    r"^https?://(?:(?:[a-zA-Z0-9][a-zA-Z0-9-]{0,61}[a-zA-Z0-9])\.)+[a-zA-Z0-9]{1,63}"
    r"/bpe/Process/[a-zA-Z0-9-]+$"
)

# sub-extension url -> (missing kind, invalid kind)
AUTHORIZATION_PARTIES = {
    "requester": (
        LintKind.ACTIVITY_DEFINITION_ENTRY_MISSING_REQUESTER,
        LintKind.ACTIVITY_DEFINITION_ENTRY_INVALID_REQUESTER,
    ),
    "recipient": (
        LintKind.ACTIVITY_DEFINITION_ENTRY_MISSING_RECIPIENT,
        LintKind.ACTIVITY_DEFINITION_ENTRY_INVALID_RECIPIENT,
    ),
}


class ActivityDefinitionLinter(FhirResourceLinter):
    resource_type = KIND_ACTIVITY_DEFINITION

    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        findings = self._check_url(ctx)
        findings.extend(check_fixed_status(
            ctx,
            "unknown",
            LintKind.ACTIVITY_DEFINITION_STATUS_NOT_UNKNOWN,
            LintKind.ACTIVITY_DEFINITION_MISSING_STATUS,
        ))
        findings.extend(self._check_kind(ctx))
        findings.extend(self._check_profile(ctx))
        findings.extend(check_read_access_tag(ctx, LintKind.ACTIVITY_DEFINITION_MISSING_READ_ACCESS_TAG, {"ALL"}))
        findings.extend(self._check_authorizations(ctx))
        return findings

    def _check_url(self, ctx: FhirLintContext) -> list[Finding]:
        url = ctx.document.url
        if is_blank(url):
            return [ctx.error(LintKind.ACTIVITY_DEFINITION_MISSING_URL, "ActivityDefinition is missing <url>")]
        findings = [ctx.success(f"Found <url>: '{url}'")]
        if URL_PATTERN.match(url):
            findings.append(ctx.success("ActivityDefinition URL pattern is valid"))
        else:
            findings.append(ctx.error(
                LintKind.ACTIVITY_DEFINITION_INVALID_URL_PATTERN,
                f"ActivityDefinition URL must look like http[s]://domain/bpe/Process/processName (found '{url}')",
            ))
        return findings

    def _check_kind(self, ctx: FhirLintContext) -> list[Finding]:
        kind = ctx.document.value("kind")
        if is_blank(kind):
            return [ctx.error(LintKind.ACTIVITY_DEFINITION_MISSING_KIND, "ActivityDefinition is missing <kind>")]
        if kind != "Task":
            return [ctx.error(LintKind.ACTIVITY_DEFINITION_KIND_NOT_TASK, f"<kind> must be 'Task' (found '{kind}')")]
        return [ctx.success("<kind> is 'Task'")]

    def _check_profile(self, ctx: FhirLintContext) -> list[Finding]:
        profile = ctx.document.value("meta.profile")
        if is_blank(profile) or not profile.startswith(PROFILE_ACTIVITY_DEFINITION):
            found = f" (found '{profile}')" if not is_blank(profile) else ""
            return [ctx.warn(
                LintKind.ACTIVITY_DEFINITION_MISSING_PROFILE,
                f"<meta><profile> should be '{PROFILE_ACTIVITY_DEFINITION}'{found}",
            )]
        if "|" in profile:
            return [ctx.error(
                LintKind.ACTIVITY_DEFINITION_PROFILE_NO_PLACEHOLDER,
                f"ActivityDefinition profile must not pin a version (found '{profile}')",
            )]
        return [ctx.success(f"Profile '{PROFILE_ACTIVITY_DEFINITION}' is specified without version")]

    def _check_authorizations(self, ctx: FhirLintContext) -> list[Finding]:
        authorizations = ctx.document.extensions(EXT_PROCESS_AUTHORIZATION)
        if not authorizations:
            return [ctx.error(
                LintKind.ACTIVITY_DEFINITION_NO_PROCESS_AUTHORIZATION,
                "No extension-process-authorization found",
            )]
        findings = [ctx.success(f"Found extension-process-authorization ({len(authorizations)})")]
        for authorization in authorizations:
            for party, (missing_kind, invalid_kind) in AUTHORIZATION_PARTIES.items():
                entries = ctx.document.extensions(party, authorization)
                if not entries:
                    findings.append(ctx.error(
                        missing_kind, f"No <extension url='{party}'> found in process-authorization"
                    ))
                    continue
                findings.append(ctx.success(f"Found <extension url='{party}'> ({len(entries)})"))
                for entry in entries:
                    findings.extend(_check_authorization_coding(ctx, entry, party, invalid_kind))
        return findings


def _check_authorization_coding(
    ctx: FhirLintContext,
    entry: ET.Element,
    party: str,
    invalid_kind: LintKind,
) -> list[Finding]:
    system = ctx.document.value("valueCoding.system", entry)
    code = ctx.document.value("valueCoding.code", entry)
    if is_blank(system) or is_blank(code):
        return [ctx.error(invalid_kind, f"Missing <system> or <code> in '{party}' valueCoding")]
    if system != CS_PROCESS_AUTHORIZATION:
        return [ctx.error(
            invalid_kind,
            f"'{party}' valueCoding.system must be '{CS_PROCESS_AUTHORIZATION}' (found '{system}')",
        )]
    if ctx.cache.is_unknown(system, code):
        return [ctx.error(invalid_kind, f"'{party}' code '{code}' is not known in CodeSystem '{system}'")]
    return [ctx.success(f"'{party}' coding system and code are valid ({code})")]
