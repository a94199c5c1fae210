"""Tests for StructureDefinition linting."""

from collections import Counter

import pytest

from dsflint.fhir.linters.structure_definition import StructureDefinitionLinter
from dsflint.models.enums import LintKind, LintSeverity


def element(element_id, min_value=None, max_value=None):
    parts = []
    if min_value is not None:
        parts.append(f'<min value="{min_value}"/>')
    if max_value is not None:
        parts.append(f'<max value="{max_value}"/>')
    return f'<element id="{element_id}">{"".join(parts)}</element>' if element_id else f"<element>{''.join(parts)}</element>"


@pytest.fixture
def structure_definition_xml(fhir_xml, read_access_tag):
    def _build(elements, extra=""):
        return fhir_xml("StructureDefinition", f"""
            <meta>{read_access_tag("ALL")}</meta>
            <url value="http://dsf.dev/fhir/StructureDefinition/task-release"/>
            <version value="#{{version}}"/>
            <date value="#{{date}}"/>
            <status value="unknown"/>
            {extra}
            <differential>{''.join(elements)}</differential>
        """)

    return _build


@pytest.fixture
def lint_sd(fhir_context):
    def _lint(text):
        return StructureDefinitionLinter().lint(fhir_context(text, "task-release.xml"))

    return _lint


def problems(findings):
    return Counter((f.severity, f.kind) for f in findings if not f.is_success)


class TestMetadata:
    def test_ping_profile_is_valid(self, lint_sd, ping_structure_definition):
        assert problems(lint_sd(ping_structure_definition)) == Counter()

    def test_placeholders_are_errors(self, lint_sd, ping_structure_definition):
        text = ping_structure_definition.replace('<version value="#{version}"/>', '<version value="1.0"/>')
        text = text.replace('<date value="#{date}"/>', "")

        assert problems(lint_sd(text)) == Counter({
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_VERSION_NO_PLACEHOLDER): 1,
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_DATE_NO_PLACEHOLDER): 1,
        })

    def test_missing_url_and_wrong_status(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([element("Task")])
        text = text.replace('<url value="http://dsf.dev/fhir/StructureDefinition/task-release"/>', "")
        text = text.replace('<status value="unknown"/>', '<status value="draft"/>')

        assert problems(lint_sd(text)) == Counter({
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_URL_MISSING): 1,
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_INVALID_STATUS): 1,
        })

    def test_snapshot_is_a_warning(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([element("Task")], extra="<snapshot><element id='Task'/></snapshot>")

        assert problems(lint_sd(text)) == Counter({(LintSeverity.WARN, LintKind.STRUCTURE_DEFINITION_SNAPSHOT_PRESENT): 1})

    def test_missing_differential(self, lint_sd, fhir_xml, read_access_tag):
        text = fhir_xml("StructureDefinition", f"""
            <meta>{read_access_tag("ALL")}</meta>
            <url value="http://dsf.dev/fhir/StructureDefinition/task-release"/>
            <version value="#{{version}}"/>
            <date value="#{{date}}"/>
            <status value="unknown"/>
        """)

        assert problems(lint_sd(text)) == Counter({
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_DIFFERENTIAL_MISSING): 1,
        })


class TestElementIds:
    def test_missing_and_duplicate_ids(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([element("Task"), element(None), element("Task")])

        assert problems(lint_sd(text)) == Counter({
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_ELEMENT_ID_MISSING): 1,
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_ELEMENT_ID_DUPLICATE): 1,
        })


class TestSliceCardinalities:
    """Slices are compared against their base element."""

    def test_slice_min_sum_above_base_min_is_info(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([
            element("Task.input", min_value=1),
            element("Task.input:a", min_value=1),
            element("Task.input:b", min_value=1),
        ])

        assert problems(lint_sd(text)) == Counter({
            (LintSeverity.INFO, LintKind.STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN): 1,
        })

    def test_slice_max_too_high(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([
            element("Task.input", max_value=2),
            element("Task.input:a", max_value=3),
        ])

        findings = lint_sd(text)

        assert problems(findings) == Counter({(LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_SLICE_MAX_TOO_HIGH): 1})
        assert "Task.input:a" in next(f for f in findings if not f.is_success).description

    def test_slice_min_sum_exceeds_base_max(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([
            element("Task.input", min_value=2, max_value=2),
            element("Task.input:a", min_value=2),
            element("Task.input:b", min_value=1),
        ])

        assert problems(lint_sd(text)) == Counter({
            (LintSeverity.INFO, LintKind.STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN): 1,
            (LintSeverity.ERROR, LintKind.STRUCTURE_DEFINITION_SLICE_MIN_SUM_EXCEEDS_MAX): 1,
        })

    def test_unbounded_base_skips_max_checks(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([
            element("Task.input", max_value="*"),
            element("Task.input:a", min_value=5, max_value=9),
        ])

        assert problems(lint_sd(text)) == Counter()

    def test_slices_without_max_inherit_base_max(self, lint_sd, structure_definition_xml):
        text = structure_definition_xml([
            element("Task.input", max_value=2),
            element("Task.input:a", min_value=1),
            element("Task.input:a.value[x]", max_value=7),
        ])

        assert problems(lint_sd(text)) == Counter()
