"""Field-injection checks and the profile cross-checks they enable.

The three recognised injections are ``profile``, ``messageName`` and
``instantiatesCanonical``. Once the profile resolves to a StructureDefinition,
that document is loaded and correlated with the other two values and with the
project's ActivityDefinitions.
"""

from dataclasses import dataclass

from dsflint.bpmn.linters.base import BpmnLintContext
from dsflint.bpmn.model import FieldInjection
from dsflint.fhir.document import is_blank
from dsflint.fhir.resolver import (
    INSTANTIATES_CANONICAL_ELEMENT_ID,
    MESSAGE_NAME_ELEMENT_ID,
    contains_placeholder,
    extract_fixed_value,
)
from dsflint.models.enums import LintKind
from dsflint.models.finding import Finding

FIELD_PROFILE = "profile"
FIELD_MESSAGE_NAME = "messageName"
FIELD_INSTANTIATES_CANONICAL = "instantiatesCanonical"


@dataclass
class _Collected:
    profile: str | None = None
    message_name: str | None = None
    instantiates_canonical: str | None = None
    profile_resolved: bool = False


def check_field_injections(
    ctx: BpmnLintContext,
    element_id: str,
    fields: list[FieldInjection],
) -> list[Finding]:
    """
    Validate the field injections of one node.

    Args:
        ctx: Lint context of the enclosing process
        element_id: Id of the node carrying the injections
        fields: Injections of the node and its message event definition

    Returns:
        Findings for every injection plus the profile cross-checks
    """
    findings: list[Finding] = []
    collected = _Collected()

    for field in fields:
        name = field.name or ""
        if field.is_expression:
            findings.append(ctx.error(
                LintKind.BPMN_FIELD_INJECTION_NOT_STRING_LITERAL,
                element_id,
                f"Field injection '{name}' is provided as expression, expected string literal",
            ))
            continue
        if field.string_value is not None:
            findings.append(ctx.success(element_id, f"Field injection '{name}' provided as string literal"))

        value = field.string_value
        if name == FIELD_PROFILE:
            profile_findings, resolved = check_profile_field(ctx, element_id, value)
            findings.extend(profile_findings)
            collected.profile = value
            collected.profile_resolved = resolved
        elif name == FIELD_MESSAGE_NAME:
            if is_blank(value):
                findings.append(ctx.error(
                    LintKind.BPMN_FIELD_INJECTION_MESSAGE_VALUE_EMPTY,
                    element_id,
                    "Field injection messageName is empty",
                ))
            else:
                collected.message_name = value
                findings.append(ctx.success(element_id, f"Field 'messageName' is valid with value: '{value}'"))
        elif name == FIELD_INSTANTIATES_CANONICAL:
            findings.extend(check_instantiates_canonical_field(ctx, element_id, value))
            collected.instantiates_canonical = value
        else:
            findings.append(ctx.warn(
                LintKind.BPMN_UNKNOWN_FIELD_INJECTION,
                element_id,
                f"Unknown field injection: {name}",
            ))

    if collected.profile_resolved:
        findings.extend(_cross_check(ctx, element_id, collected))
    return findings


def check_profile_field(
    ctx: BpmnLintContext, element_id: str, value: str | None
) -> tuple[list[Finding], bool]:
    """Check one profile injection; also report whether it resolved to a StructureDefinition."""
    if is_blank(value):
        return [ctx.error(LintKind.BPMN_FIELD_INJECTION_PROFILE_EMPTY, element_id, "Field injection profile is empty")], False

    findings = [ctx.success(element_id, f"Profile field is provided with value: '{value}'")]
    if contains_placeholder(value):
        findings.append(ctx.success(element_id, f"Profile field contains a version placeholder: '{value}'"))
    else:
        findings.append(ctx.warn(
            LintKind.BPMN_FIELD_INJECTION_PROFILE_NO_VERSION_PLACEHOLDER,
            element_id,
            f"Profile field does not contain a version placeholder: {value}",
            reference=value,
        ))

    resolved = ctx.resolver.structure_definition_exists(value)
    if resolved:
        findings.append(ctx.success(element_id, f"StructureDefinition found for profile: '{value}'", reference=value))
    else:
        findings.append(ctx.warn(
            LintKind.BPMN_FIELD_INJECTION_PROFILE_NOT_FOUND,
            element_id,
            f"StructureDefinition for the profile [{value}] not found",
            reference=value,
        ))
    return findings, resolved


def check_instantiates_canonical_field(ctx: BpmnLintContext, element_id: str, value: str | None) -> list[Finding]:
    if is_blank(value):
        return [ctx.error(
            LintKind.BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_EMPTY,
            element_id,
            "Field injection instantiatesCanonical is empty",
        )]
    if contains_placeholder(value):
        return [ctx.success(element_id, f"instantiatesCanonical field is valid with value: '{value}'")]
    return [ctx.warn(
        LintKind.BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NO_VERSION_PLACEHOLDER,
        element_id,
        f"instantiatesCanonical does not contain a version placeholder: {value}",
        reference=value,
    )]


def _cross_check(ctx: BpmnLintContext, element_id: str, collected: _Collected) -> list[Finding]:
    findings: list[Finding] = []
    profile = collected.profile
    canonical = collected.instantiates_canonical
    message_name = collected.message_name

    document = ctx.resolver.load_structure_definition(profile)
    if document is not None:
        if not is_blank(canonical):
            fixed_canonical = extract_fixed_value(document, INSTANTIATES_CANONICAL_ELEMENT_ID, "fixedCanonical")
            if is_blank(fixed_canonical):
                findings.append(ctx.error(
                    LintKind.BPMN_PROFILE_MISSING_FIXED_CANONICAL,
                    element_id,
                    "StructureDefinition lacks a fixedCanonical for Task.instantiatesCanonical",
                    reference=profile,
                ))
            else:
                findings.append(ctx.success(element_id, "StructureDefinition contains a valid fixedCanonical"))

        fixed_message = extract_fixed_value(document, MESSAGE_NAME_ELEMENT_ID, "fixedString")
        if is_blank(fixed_message):
            findings.append(ctx.error(
                LintKind.BPMN_PROFILE_MISSING_FIXED_MESSAGE_NAME,
                element_id,
                "StructureDefinition has no valid fixedString for message-name",
                reference=profile,
            ))
        else:
            findings.append(ctx.success(element_id, "StructureDefinition contains a valid fixedString"))

    if is_blank(canonical):
        return findings

    if not ctx.resolver.activity_definition_exists_for_canonical(canonical):
        findings.append(ctx.warn(
            LintKind.BPMN_NO_ACTIVITY_DEFINITION_FOR_INSTANTIATES_CANONICAL,
            element_id,
            f"No ActivityDefinition found for instantiatesCanonical {canonical}",
            reference=canonical,
        ))
        return findings
    findings.append(ctx.success(element_id, f"ActivityDefinition exists for instantiatesCanonical: '{canonical}'"))

    if not is_blank(message_name):
        if ctx.resolver.activity_definition_has_message_name(message_name):
            findings.append(ctx.success(element_id, f"ActivityDefinition declares message name '{message_name}'"))
        else:
            findings.append(ctx.error(
                LintKind.BPMN_ACTIVITY_DEFINITION_MISSING_MESSAGE_NAME,
                element_id,
                f"ActivityDefinition does not contain message name '{message_name}'",
                reference=message_name,
            ))
    return findings
