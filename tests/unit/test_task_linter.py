"""Tests for Task template linting against the ping ActivityDefinition and profile."""

from collections import Counter

import pytest

from dsflint.fhir.document import parse_xml_text
from dsflint.fhir.linters.task import (
    UNBOUNDED,
    Cardinality,
    TaskLinter,
    extract_value_x,
    load_input_cardinalities,
)
from dsflint.models.enums import LintKind, LintSeverity

PING_PROCESS_URL = "http://dsf.dev/bpe/Process/ping"
PING_TASK_PROFILE = "http://dsf.dev/fhir/StructureDefinition/task-start-ping"
BPMN_MESSAGE = "http://dsf.dev/fhir/CodeSystem/bpmn-message"
ORGANIZATION_IDENTIFIER = "http://dsf.dev/sid/organization-identifier"


def task_input(code, value="x", system=BPMN_MESSAGE):
    return (
        f'<input><type><coding><system value="{system}"/><code value="{code}"/></coding></type>'
        f'<valueString value="{value}"/></input>'
    )


@pytest.fixture
def task_xml(fhir_xml):
    """Task template for the ping process; keyword arguments replace single parts."""

    def _build(
        status="draft",
        inputs=None,
        canonical=f"{PING_PROCESS_URL}|#{{version}}",
        profile=f"{PING_TASK_PROFILE}|#{{version}}",
        authored_on="#{date}",
        requester_value="#{organization}",
        recipient_system=ORGANIZATION_IDENTIFIER,
    ):
        if inputs is None:
            inputs = [task_input("message-name", "startPing")]
        joined_inputs = "".join(inputs)
        return fhir_xml("Task", f"""
            <meta><profile value="{profile}"/></meta>
            <instantiatesCanonical value="{canonical}"/>
            <status value="{status}"/>
            <intent value="order"/>
            <authoredOn value="{authored_on}"/>
            <requester>
                <type value="Organization"/>
                <identifier><system value="{ORGANIZATION_IDENTIFIER}"/><value value="{requester_value}"/></identifier>
            </requester>
            <restriction>
                <recipient>
                    <type value="Organization"/>
                    <identifier><system value="{recipient_system}"/><value value="#{{organization}}"/></identifier>
                </recipient>
            </restriction>
            {joined_inputs}
        """)

    return _build


@pytest.fixture
def lint_task(fhir_context, ping_resources):
    def _lint(text):
        return TaskLinter().lint(fhir_context(text, "task-start-ping.xml"))

    return _lint


def problems(findings):
    return Counter(f.kind for f in findings if not f.is_success)


class TestValidTemplate:
    def test_only_successes(self, lint_task, task_xml):
        findings = lint_task(task_xml())

        assert problems(findings) == Counter()

    def test_reference_is_the_process_url(self, task_xml):
        document = parse_xml_text(task_xml())

        assert TaskLinter().reference_for(document) == PING_PROCESS_URL


class TestMetadata:
    def test_canonical_without_version_placeholder_warns(self, lint_task, task_xml):
        findings = lint_task(task_xml(canonical=PING_PROCESS_URL))

        assert problems(findings) == Counter({LintKind.FHIR_TASK_INSTANTIATES_CANONICAL_PLACEHOLDER: 1})

    def test_unknown_activity_definition(self, lint_task, task_xml):
        findings = lint_task(task_xml(canonical="http://dsf.dev/bpe/Process/pong|#{version}"))

        assert problems(findings) == Counter({LintKind.FHIR_TASK_UNKNOWN_INSTANTIATES_CANONICAL: 1})

    def test_missing_authored_on_placeholder_warns(self, lint_task, task_xml):
        findings = lint_task(task_xml(authored_on="2024-01-01"))

        warnings = [f for f in findings if f.severity == LintSeverity.WARN]
        assert [f.kind for f in warnings] == [LintKind.FHIR_TASK_DATE_NO_PLACEHOLDER]

    def test_invalid_recipient_system(self, lint_task, task_xml):
        findings = lint_task(task_xml(recipient_system="http://example.org/sid"))

        assert problems(findings) == Counter({LintKind.FHIR_TASK_INVALID_RECIPIENT: 1})

    def test_requester_placeholder_checked_when_definition_exists(self, lint_task, task_xml):
        findings = lint_task(task_xml(requester_value="dic.example.org"))

        assert problems(findings) == Counter({LintKind.FHIR_TASK_REQUESTER_ID_NO_PLACEHOLDER: 1})

    def test_requester_placeholder_not_checked_without_definition(self, lint_task, task_xml):
        findings = lint_task(task_xml(
            canonical="http://dsf.dev/bpe/Process/pong|#{version}",
            requester_value="dic.example.org",
        ))

        assert LintKind.FHIR_TASK_REQUESTER_ID_NO_PLACEHOLDER not in problems(findings)


class TestInputs:
    """Business key, correlation and slice cardinalities."""

    def test_in_progress_without_business_key(self, lint_task, task_xml):
        findings = lint_task(task_xml(status="in-progress"))

        counts = problems(findings)
        assert counts[LintKind.FHIR_TASK_STATUS_REQUIRED_INPUT_BUSINESS_KEY] == 1
        assert counts[LintKind.FHIR_TASK_STATUS_NOT_DRAFT] == 1

    def test_draft_with_business_key(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[
            task_input("message-name", "startPing"),
            task_input("business-key", "3f2a"),
        ]))

        assert problems(findings) == Counter({LintKind.FHIR_TASK_BUSINESS_KEY_EXISTS: 1})

    def test_business_key_check_skipped_for_other_statuses(self, lint_task, task_xml):
        findings = lint_task(task_xml(status="requested"))

        infos = [f.kind for f in findings if f.severity == LintSeverity.INFO]
        assert infos == [LintKind.FHIR_TASK_BUSINESS_KEY_CHECK_IS_SKIPPED]

    def test_unknown_status(self, lint_task, task_xml):
        findings = lint_task(task_xml(status="sleeping"))

        assert problems(findings)[LintKind.FHIR_TASK_UNKNOWN_STATUS] == 1

    def test_correlation_not_allowed_by_profile(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[
            task_input("message-name", "startPing"),
            task_input("correlation-key", "c1"),
        ]))

        counts = problems(findings)
        assert counts[LintKind.FHIR_TASK_CORRELATION_EXISTS] == 1
        assert counts[LintKind.FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_SLICE_MAX] == 1

    def test_missing_message_name(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[task_input("business-key", "3f2a")]))

        counts = problems(findings)
        assert counts[LintKind.FHIR_TASK_REQUIRED_INPUT_WITH_CODE_MESSAGE_NAME] == 1
        assert counts[LintKind.FHIR_TASK_INPUT_SLICE_COUNT_BELOW_SLICE_MIN] == 1

    def test_duplicate_slice(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[
            task_input("message-name", "startPing"),
            task_input("message-name", "startPing"),
        ]))

        counts = problems(findings)
        assert counts[LintKind.FHIR_TASK_INPUT_DUPLICATE_SLICE] == 1
        assert counts[LintKind.FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_SLICE_MAX] == 1

    def test_input_without_value_or_coding(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[
            task_input("message-name", "startPing"),
            '<input><type><coding><code value="note"/></coding></type><valueString value="n"/></input>',
            f'<input><type><coding><system value="{BPMN_MESSAGE}"/><code value="business-key"/></coding></type></input>',
        ], status="in-progress"))

        counts = problems(findings)
        assert counts[LintKind.FHIR_TASK_INPUT_REQUIRED_CODING_SYSTEM_AND_CODING_CODE] == 1
        assert counts[LintKind.FHIR_TASK_INPUT_MISSING_VALUE] == 1

    def test_no_inputs(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[]))

        assert problems(findings)[LintKind.FHIR_TASK_MISSING_INPUT] == 1

    def test_unknown_code_in_known_system(self, lint_task, task_xml):
        findings = lint_task(task_xml(inputs=[
            task_input("message-name", "startPing"),
            task_input("trace-id", "t1"),
        ]))

        assert problems(findings)[LintKind.FHIR_TASK_UNKNOWN_CODE] == 1

    def test_profile_that_cannot_be_loaded(self, lint_task, task_xml):
        findings = lint_task(task_xml(profile="http://dsf.dev/fhir/StructureDefinition/task-missing|#{version}"))

        assert problems(findings) == Counter({LintKind.FHIR_TASK_COULD_NOT_LOAD_PROFILE: 1})


class TestCardinalities:
    def test_slices_inherit_base_max(self, fhir_xml):
        document = parse_xml_text(fhir_xml("StructureDefinition", """
            <differential>
                <element id="Task.input"><min value="2"/><max value="5"/></element>
                <element id="Task.input:a"><min value="1"/></element>
                <element id="Task.input:b"><max value="*"/></element>
                <element id="Task.input:a.value[x]"><min value="1"/></element>
            </differential>
        """))

        cards = load_input_cardinalities(document)

        assert cards.base == Cardinality(2, 5)
        assert cards.slices == {"a": Cardinality(1, 5), "b": Cardinality(0, 5)}
        assert not cards.correlation_allowed()

    def test_unbounded_description(self):
        assert Cardinality(0, UNBOUNDED).describe() == "0..*"
        assert Cardinality(1, 1).describe() == "1..1"

    def test_extract_value_x(self, fhir_xml):
        document = parse_xml_text(fhir_xml("Task", """
            <input><type/><valueReference><identifier><value value="org"/></identifier></valueReference></input>
            <input><type/></input>
        """))
        first, second = document.find_all("input")

        assert extract_value_x(document, first) == "org"
        assert extract_value_x(document, second) is None
