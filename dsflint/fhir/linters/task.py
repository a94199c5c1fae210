"""Task template checks.

A Task template must carry the development placeholders, instantiate a known
ActivityDefinition and declare its inputs consistently with the slices of the
StructureDefinition named in ``meta.profile``.
"""

import logging
import xml.etree.ElementTree as ET
from collections import Counter
from dataclasses import dataclass

from dsflint.common.constants import (
    CS_BPMN_MESSAGE,
    CS_TASK_STATUS,
    KIND_TASK,
    NS_ORGANIZATION_IDENTIFIER,
    PLACEHOLDER_DATE,
    PLACEHOLDER_ORGANIZATION,
    PLACEHOLDER_VERSION,
)
from dsflint.fhir.document import FhirDocument, is_blank, local_name
from dsflint.fhir.linters.base import FhirLintContext, FhirResourceLinter, check_placeholder
from dsflint.fhir.resolver import strip_version
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding

logger = logging.getLogger(__name__)

STATUSES_REQUIRING_BUSINESS_KEY = frozenset({"in-progress", "completed", "failed"})

SLICE_MESSAGE_NAME = "message-name"
SLICE_BUSINESS_KEY = "business-key"
SLICE_CORRELATION_KEY = "correlation-key"

UNBOUNDED = 2**31 - 1

# (label, path to identifier, missing kind, invalid kind, placeholder kind)
PARTIES = (
    (
        "requester",
        "requester.identifier",
        LintKind.FHIR_TASK_MISSING_REQUESTER,
        LintKind.FHIR_TASK_INVALID_REQUESTER,
        LintKind.FHIR_TASK_REQUESTER_ID_NO_PLACEHOLDER,
    ),
    (
        "restriction.recipient",
        "restriction.recipient.identifier",
        LintKind.FHIR_TASK_MISSING_RECIPIENT,
        LintKind.FHIR_TASK_INVALID_RECIPIENT,
        LintKind.FHIR_TASK_RECIPIENT_ID_NO_PLACEHOLDER,
    ),
)


@dataclass(frozen=True)
class Cardinality:
    min: int
    max: int

    def describe(self) -> str:
        upper = "*" if self.max == UNBOUNDED else str(self.max)
        return f"{self.min}..{upper}"


@dataclass(frozen=True)
class InputCardinalities:
    """Cardinality of ``Task.input`` and of each of its slices."""

    base: Cardinality
    slices: dict[str, Cardinality]

    def correlation_allowed(self) -> bool:
        card = self.slices.get(SLICE_CORRELATION_KEY)
        return card is not None and card.max != 0


def _parse_max(value: str | None, default: int) -> int:
    if value is None or value == "*":
        return default
    return int(value)


def load_input_cardinalities(profile_document: FhirDocument) -> InputCardinalities:
    """Read ``Task.input`` and ``Task.input:<slice>`` min/max from a StructureDefinition."""
    base = Cardinality(0, UNBOUNDED)
    elements = list(profile_document.iter("element"))
    for element in elements:
        if element.get("id") == "Task.input":
            base = Cardinality(
                int(profile_document.value("min", element) or 0),
                _parse_max(profile_document.value("max", element), UNBOUNDED),
            )
            break

    slices: dict[str, Cardinality] = {}
    for element in elements:
        element_id = element.get("id") or ""
        if not element_id.startswith("Task.input:"):
            continue
        slice_name = element_id[len("Task.input:"):]
        if "." in slice_name:
            continue
        slices[slice_name] = Cardinality(
            int(profile_document.value("min", element) or 0),
            _parse_max(profile_document.value("max", element), base.max),
        )
    return InputCardinalities(base, slices)


def extract_value_x(document: FhirDocument, element: ET.Element) -> str | None:
    """First non-blank ``value`` attribute below a ``value[x]`` child."""
    for child in element:
        if not local_name(child.tag).startswith("value"):
            continue
        for node in child.iter():
            value = node.get("value")
            if not is_blank(value):
                return value
        if not is_blank(child.get("value")):
            return child.get("value")
    return None


class TaskLinter(FhirResourceLinter):
    resource_type = KIND_TASK

    def reference_for(self, document: FhirDocument) -> str | None:
        canonical = document.value("instantiatesCanonical")
        if not is_blank(canonical):
            return strip_version(canonical)
        identifier = document.value("identifier.value")
        return identifier if not is_blank(identifier) else document.file_name

    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        findings = self._check_metadata(ctx)
        findings.extend(self._check_parties(ctx))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("authoredOn"),
            PLACEHOLDER_DATE,
            LintKind.FHIR_TASK_DATE_NO_PLACEHOLDER,
            LintSeverity.WARN,
            "<authoredOn>",
        ))
        findings.extend(self._check_inputs(ctx))
        findings.extend(self._check_terminology(ctx))
        findings.extend(self._check_party_placeholders(ctx))
        return findings

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def _check_metadata(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        findings = []
        if doc.has("meta.profile"):
            findings.append(ctx.success("meta.profile present"))
        else:
            findings.append(ctx.error(LintKind.FHIR_TASK_MISSING_PROFILE, "Task is missing meta.profile"))

        canonical = doc.value("instantiatesCanonical")
        if is_blank(canonical):
            findings.append(ctx.error(
                LintKind.FHIR_TASK_MISSING_INSTANTIATES_CANONICAL, "Task is missing instantiatesCanonical"
            ))
        else:
            findings.append(ctx.success("instantiatesCanonical found"))
            if canonical.endswith(f"|{PLACEHOLDER_VERSION}"):
                findings.append(ctx.success(f"instantiatesCanonical ends with '|{PLACEHOLDER_VERSION}'"))
            else:
                findings.append(ctx.warn(
                    LintKind.FHIR_TASK_INSTANTIATES_CANONICAL_PLACEHOLDER,
                    f"instantiatesCanonical must end with '|{PLACEHOLDER_VERSION}', got: '{canonical}'",
                ))
            if ctx.resolver.activity_definition_exists_for_canonical(canonical):
                findings.append(ctx.success("ActivityDefinition exists"))
            else:
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_UNKNOWN_INSTANTIATES_CANONICAL,
                    f"No ActivityDefinition found for instantiatesCanonical '{canonical}'",
                ))

        status = doc.status
        if is_blank(status):
            findings.append(ctx.error(LintKind.FHIR_TASK_MISSING_STATUS, "Task is missing <status>"))
        elif status != "draft":
            findings.append(ctx.error(
                LintKind.FHIR_TASK_STATUS_NOT_DRAFT, f"status must be 'draft' (found '{status}')"
            ))
        else:
            findings.append(ctx.success("status = 'draft'"))

        intent = doc.value("intent")
        if intent == "order":
            findings.append(ctx.success("intent = 'order'"))
        else:
            findings.append(ctx.error(
                LintKind.FHIR_TASK_VALUE_IS_NOT_SET_AS_ORDER, f"intent must be 'order' (found '{intent}')"
            ))
        return findings

    def _check_parties(self, ctx: FhirLintContext) -> list[Finding]:
        findings = []
        for label, path, missing_kind, invalid_kind, _ in PARTIES:
            system = ctx.document.value(f"{path}.system")
            if is_blank(system):
                findings.append(ctx.error(missing_kind, f"{label}.identifier.system is missing"))
            elif system != NS_ORGANIZATION_IDENTIFIER:
                findings.append(ctx.error(
                    invalid_kind, f"{label}.identifier.system must be '{NS_ORGANIZATION_IDENTIFIER}'"
                ))
            else:
                findings.append(ctx.success(f"{label}.identifier.system OK"))
        return findings

    def _check_party_placeholders(self, ctx: FhirLintContext) -> list[Finding]:
        """Only checked once the instantiated ActivityDefinition is known to exist."""
        canonical = ctx.document.value("instantiatesCanonical")
        if is_blank(canonical) or not ctx.resolver.activity_definition_exists_for_canonical(canonical):
            return []
        findings = []
        for label, path, _, _, placeholder_kind in PARTIES:
            value = ctx.document.value(f"{path}.value")
            if value == PLACEHOLDER_ORGANIZATION:
                findings.append(ctx.success(
                    f"{label}.identifier.value contains the '{PLACEHOLDER_ORGANIZATION}' placeholder"
                ))
            else:
                findings.append(ctx.error(
                    placeholder_kind,
                    f"{label}.identifier.value must be '{PLACEHOLDER_ORGANIZATION}' (found '{value}')",
                ))
        return findings

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def _load_cardinalities(self, ctx: FhirLintContext) -> InputCardinalities | None:
        profile = ctx.document.value("meta.profile")
        if is_blank(profile):
            return None
        document = ctx.resolver.load_structure_definition(profile)
        if document is None:
            return None
        try:
            return load_input_cardinalities(document)
        except ValueError as e:
            logger.debug(f"Invalid cardinality in profile {profile}: {e}")
            return None

    def _check_inputs(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        findings: list[Finding] = []
        cards = self._load_cardinalities(ctx)
        if cards is None:
            findings.append(ctx.warn(
                LintKind.FHIR_TASK_COULD_NOT_LOAD_PROFILE,
                f"StructureDefinition for profile '{doc.value('meta.profile')}' not found, "
                "input cardinality checks skipped",
            ))

        inputs = doc.find_all("input")
        if not inputs:
            findings.append(ctx.error(LintKind.FHIR_TASK_MISSING_INPUT, "Task has no input"))
            return findings

        pairs: Counter[tuple[str, str]] = Counter()
        slice_counts: Counter[str] = Counter()
        present: set[str] = set()
        for element in inputs:
            system = doc.value("type.coding.system", element)
            code = doc.value("type.coding.code", element)
            if not is_blank(code):
                slice_counts[code] += 1
            if is_blank(system) or is_blank(code):
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_INPUT_REQUIRED_CODING_SYSTEM_AND_CODING_CODE,
                    "Task.input without type.coding system and code",
                ))
                continue
            pairs[(system, code)] += 1
            findings.append(ctx.success(f"Task.input has required system and code: {system}#{code}"))

            value = extract_value_x(doc, element)
            if is_blank(value):
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_INPUT_MISSING_VALUE, f"Task.input({code}) is missing value[x]"
                ))
            else:
                findings.append(ctx.success(f"input '{code}' value='{value}'"))
            if system == CS_BPMN_MESSAGE:
                present.add(code)

        duplicates = [(pair, count) for pair, count in pairs.items() if count > 1]
        for (system, code), count in duplicates:
            findings.append(ctx.error(
                LintKind.FHIR_TASK_INPUT_DUPLICATE_SLICE, f"Duplicate slice '{system}#{code}' ({count}x)"
            ))
        if not duplicates:
            findings.append(ctx.success("No duplicate Task.input slices detected"))

        if SLICE_MESSAGE_NAME in present:
            findings.append(ctx.success(f"mandatory slice '{SLICE_MESSAGE_NAME}' present"))
        else:
            findings.append(ctx.error(
                LintKind.FHIR_TASK_REQUIRED_INPUT_WITH_CODE_MESSAGE_NAME,
                f"Task.input with code '{SLICE_MESSAGE_NAME}' is required",
            ))

        findings.extend(self._check_business_key(ctx, SLICE_BUSINESS_KEY in present))
        findings.extend(self._check_correlation(ctx, SLICE_CORRELATION_KEY in present, cards))
        if cards is not None:
            findings.extend(self._check_cardinalities(ctx, len(inputs), slice_counts, cards))
        return findings

    def _check_business_key(self, ctx: FhirLintContext, has_business_key: bool) -> list[Finding]:
        status = ctx.document.status
        findings = []
        if ctx.cache.is_unknown(CS_TASK_STATUS, status):
            findings.append(ctx.error(LintKind.FHIR_TASK_UNKNOWN_STATUS, f"Unknown Task status '{status}'"))
        else:
            findings.append(ctx.success(f"Task status '{status}' is valid"))

        if status in STATUSES_REQUIRING_BUSINESS_KEY:
            if has_business_key:
                findings.append(ctx.success(f"status='{status}' has the required business-key"))
            else:
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_STATUS_REQUIRED_INPUT_BUSINESS_KEY,
                    f"status='{status}' requires a business-key input",
                ))
        elif status == "draft":
            if has_business_key:
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_BUSINESS_KEY_EXISTS,
                    "business-key must not be present when status is 'draft'",
                ))
            else:
                findings.append(ctx.success("status=draft, business-key correctly absent"))
        else:
            findings.append(ctx.info(
                LintKind.FHIR_TASK_BUSINESS_KEY_CHECK_IS_SKIPPED,
                f"business-key check skipped for status '{status}'",
            ))
        return findings

    def _check_correlation(
        self,
        ctx: FhirLintContext,
        has_correlation: bool,
        cards: InputCardinalities | None,
    ) -> list[Finding]:
        if has_correlation:
            if cards is not None and cards.correlation_allowed():
                return [ctx.success("correlation input present and permitted by StructureDefinition")]
            return [ctx.error(
                LintKind.FHIR_TASK_CORRELATION_EXISTS,
                "correlation input is not allowed by StructureDefinition",
            )]
        card = cards.slices.get(SLICE_CORRELATION_KEY) if cards is not None else None
        if card is not None and card.min > 0:
            return [ctx.error(
                LintKind.FHIR_TASK_CORRELATION_MISSING_BUT_REQUIRED,
                f"correlation input missing but slice min-cardinality is {card.min}",
            )]
        return [ctx.success("correlation input absent as expected")]

    def _check_cardinalities(
        self,
        ctx: FhirLintContext,
        count: int,
        slice_counts: Counter[str],
        cards: InputCardinalities,
    ) -> list[Finding]:
        findings = []
        base = cards.base
        if count < base.min:
            findings.append(ctx.error(
                LintKind.FHIR_TASK_INPUT_INSTANCE_COUNT_BELOW_MIN,
                f"Task.input count {count} is below the minimum {base.min}",
            ))
        elif count > base.max:
            findings.append(ctx.error(
                LintKind.FHIR_TASK_INPUT_INSTANCE_COUNT_EXCEEDS_MAX,
                f"Task.input count {count} exceeds the maximum {base.max}",
            ))
        else:
            findings.append(ctx.success(f"Task.input count {count} within {base.describe()}"))

        for name, card in cards.slices.items():
            seen = slice_counts.get(name, 0)
            if seen < card.min:
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_INPUT_SLICE_COUNT_BELOW_SLICE_MIN,
                    f"slice '{name}' occurs {seen} times, minimum is {card.min}",
                ))
            elif seen > card.max:
                findings.append(ctx.error(
                    LintKind.FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_SLICE_MAX,
                    f"slice '{name}' occurs {seen} times, maximum is {card.max}",
                ))
            else:
                findings.append(ctx.success(f"slice '{name}' count {seen} within {card.describe()}"))
        return findings

    # ------------------------------------------------------------------
    # Terminology
    # ------------------------------------------------------------------

    def _check_terminology(self, ctx: FhirLintContext) -> list[Finding]:
        findings = []
        for coding in ctx.document.iter("coding"):
            system = ctx.document.value("system", coding)
            code = ctx.document.value("code", coding)
            if ctx.cache.is_unknown(system, code):
                findings.append(ctx.error(LintKind.FHIR_TASK_UNKNOWN_CODE, f"Unknown code '{code}' in '{system}'"))
        return findings
