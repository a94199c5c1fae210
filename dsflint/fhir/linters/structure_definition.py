"""StructureDefinition checks: metadata, differential and slice cardinalities."""

import xml.etree.ElementTree as ET

from dsflint.common.constants import KIND_STRUCTURE_DEFINITION, PLACEHOLDER_DATE, PLACEHOLDER_VERSION
from dsflint.fhir.document import FhirDocument, is_blank
from dsflint.fhir.linters.base import (
    FhirLintContext,
    FhirResourceLinter,
    check_fixed_status,
    check_placeholder,
    check_read_access_tag,
)
from dsflint.models.enums import LintKind, LintSeverity
from dsflint.models.finding import Finding

UNBOUNDED = 2**31 - 1


def _parse_cardinality(value: str | None, default: int) -> int:
    if is_blank(value):
        return default
    if value == "*":
        return UNBOUNDED
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _label(value: int) -> str:
    return "*" if value == UNBOUNDED else str(value)


class StructureDefinitionLinter(FhirResourceLinter):
    resource_type = KIND_STRUCTURE_DEFINITION

    def lint(self, ctx: FhirLintContext) -> list[Finding]:
        findings = check_read_access_tag(ctx, LintKind.STRUCTURE_DEFINITION_READ_ACCESS_TAG_MISSING)
        if is_blank(ctx.document.url):
            findings.append(ctx.error(LintKind.STRUCTURE_DEFINITION_URL_MISSING, "StructureDefinition is missing <url>"))
        else:
            findings.append(ctx.success("<url> is present"))
        findings.extend(check_fixed_status(ctx, "unknown", LintKind.STRUCTURE_DEFINITION_INVALID_STATUS))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("version"),
            PLACEHOLDER_VERSION,
            LintKind.STRUCTURE_DEFINITION_VERSION_NO_PLACEHOLDER,
            LintSeverity.ERROR,
            "<version>",
        ))
        findings.extend(check_placeholder(
            ctx,
            ctx.document.value("date"),
            PLACEHOLDER_DATE,
            LintKind.STRUCTURE_DEFINITION_DATE_NO_PLACEHOLDER,
            LintSeverity.ERROR,
            "<date>",
        ))
        findings.extend(self._check_sections(ctx))
        findings.extend(self._check_element_ids(ctx))
        findings.extend(self._check_slice_cardinalities(ctx))
        return findings

    def _check_sections(self, ctx: FhirLintContext) -> list[Finding]:
        findings = []
        if ctx.document.has("differential"):
            findings.append(ctx.success("differential section present"))
        else:
            findings.append(ctx.error(
                LintKind.STRUCTURE_DEFINITION_DIFFERENTIAL_MISSING, "StructureDefinition has no <differential>"
            ))
        if ctx.document.has("snapshot"):
            findings.append(ctx.warn(
                LintKind.STRUCTURE_DEFINITION_SNAPSHOT_PRESENT,
                "StructureDefinition contains a <snapshot>; only the differential should be authored",
            ))
        else:
            findings.append(ctx.success("snapshot section absent"))
        return findings

    def _check_element_ids(self, ctx: FhirLintContext) -> list[Finding]:
        elements = ctx.document.find_all("differential.element")
        if not elements:
            return []
        findings = []
        seen: set[str] = set()
        for element in elements:
            element_id = element.get("id")
            if is_blank(element_id):
                findings.append(ctx.error(
                    LintKind.STRUCTURE_DEFINITION_ELEMENT_ID_MISSING, "differential element without @id"
                ))
            elif element_id in seen:
                findings.append(ctx.error(
                    LintKind.STRUCTURE_DEFINITION_ELEMENT_ID_DUPLICATE, f"duplicate element id '{element_id}'"
                ))
            else:
                seen.add(element_id)
        if not findings:
            findings.append(ctx.success(f"all {len(elements)} element ids are present and unique"))
        return findings

    def _check_slice_cardinalities(self, ctx: FhirLintContext) -> list[Finding]:
        doc = ctx.document
        elements = doc.find_all("differential.element")
        findings = []
        for base in elements:
            base_id = base.get("id")
            if is_blank(base_id) or ":" in base_id:
                continue
            slices = _direct_slices(elements, base_id)
            if slices:
                findings.extend(_check_base_element(ctx, doc, base, base_id, slices))
        return findings


def _direct_slices(elements: list[ET.Element], base_id: str) -> list[ET.Element]:
    """Slices of ``base_id`` itself, not elements nested below a slice."""
    prefix = f"{base_id}:"
    return [
        element for element in elements
        if (element.get("id") or "").startswith(prefix)
        and "." not in (element.get("id") or "")[len(prefix):]
    ]


def _check_base_element(
    ctx: FhirLintContext,
    doc: FhirDocument,
    base: ET.Element,
    base_id: str,
    slices: list[ET.Element],
) -> list[Finding]:
    raw_min = doc.value("min", base)
    raw_max = doc.value("max", base)
    base_min = _parse_cardinality(raw_min, 0)
    base_max = _parse_cardinality(raw_max, UNBOUNDED)

    min_sum = 0
    widest_max = 0
    widest_slice = None
    for element in slices:
        min_sum += _parse_cardinality(doc.value("min", element), 0)
        slice_max = _parse_cardinality(doc.value("max", element), base_max)
        if slice_max > widest_max:
            widest_max = slice_max
            widest_slice = element.get("id")

    findings = []
    if raw_min is not None:
        if min_sum > base_min:
            findings.append(ctx.info(
                LintKind.STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN,
                f"element '{base_id}': sum of slice min ({min_sum}) is above the declared min ({base_min})",
            ))
        else:
            findings.append(ctx.success(f"element '{base_id}': sum of slice min ({min_sum}) <= min ({base_min})"))

    if raw_max is None or base_max == UNBOUNDED:
        findings.append(ctx.success(f"element '{base_id}': unlimited max, no upper-bound check"))
        return findings

    if widest_max > base_max:
        findings.append(ctx.error(
            LintKind.STRUCTURE_DEFINITION_SLICE_MAX_TOO_HIGH,
            f"element '{base_id}': slice '{widest_slice}' max ({_label(widest_max)}) exceeds base max ({base_max})",
        ))
    else:
        findings.append(ctx.success(f"element '{base_id}': all slice max <= {base_max}"))
    if min_sum > base_max:
        findings.append(ctx.error(
            LintKind.STRUCTURE_DEFINITION_SLICE_MIN_SUM_EXCEEDS_MAX,
            f"element '{base_id}': sum of slice min ({min_sum}) exceeds base max ({base_max})",
        ))
    else:
        findings.append(ctx.success(f"element '{base_id}': sum of slice min ({min_sum}) <= max ({base_max})"))
    return findings
