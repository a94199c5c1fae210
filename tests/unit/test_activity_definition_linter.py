"""Tests for ActivityDefinition linting."""

import pytest

from dsflint.fhir.linters.activity_definition import ActivityDefinitionLinter
from dsflint.models.enums import LintKind, LintSeverity

AUTHORIZATION_URL = "http://dsf.dev/fhir/StructureDefinition/extension-process-authorization"
PROCESS_AUTHORIZATION = "http://dsf.dev/fhir/CodeSystem/process-authorization"


def kinds(findings, severity=None):
    return [f.kind for f in findings if severity is None or f.severity == severity]


@pytest.fixture
def lint_ad(fhir_context):
    def _lint(text):
        return ActivityDefinitionLinter().lint(fhir_context(text, "ping.xml"))

    return _lint


class TestValidDefinition:
    def test_only_successes(self, lint_ad, ping_activity_definition):
        findings = lint_ad(ping_activity_definition)

        assert findings
        assert all(f.is_success for f in findings)

    def test_reference_is_the_url(self, lint_ad, ping_activity_definition):
        findings = lint_ad(ping_activity_definition)

        assert {f.location.reference for f in findings} == {"http://dsf.dev/bpe/Process/ping"}
        assert {f.file_name for f in findings} == {"ping.xml"}


class TestMetadata:
    """url, status, kind and profile checks."""

    @pytest.mark.parametrize("old,new,expected", [
        ('<url value="http://dsf.dev/bpe/Process/ping"/>', "", LintKind.ACTIVITY_DEFINITION_MISSING_URL),
        (
            "http://dsf.dev/bpe/Process/ping",
            "http://dsf.dev/fhir/Process/ping",
            LintKind.ACTIVITY_DEFINITION_INVALID_URL_PATTERN,
        ),
        ('<status value="unknown"/>', "", LintKind.ACTIVITY_DEFINITION_MISSING_STATUS),
        ('<status value="unknown"/>', '<status value="active"/>', LintKind.ACTIVITY_DEFINITION_STATUS_NOT_UNKNOWN),
        ('<kind value="Task"/>', "", LintKind.ACTIVITY_DEFINITION_MISSING_KIND),
        ('<kind value="Task"/>', '<kind value="ServiceRequest"/>', LintKind.ACTIVITY_DEFINITION_KIND_NOT_TASK),
    ])
    def test_errors(self, lint_ad, ping_activity_definition, old, new, expected):
        findings = lint_ad(ping_activity_definition.replace(old, new))

        assert kinds(findings, LintSeverity.ERROR) == [expected]

    def test_missing_profile_is_a_warning(self, lint_ad, ping_activity_definition):
        text = ping_activity_definition.replace(
            '<profile value="http://dsf.dev/fhir/StructureDefinition/activity-definition"/>', ""
        )

        findings = lint_ad(text)

        assert kinds(findings, LintSeverity.WARN) == [LintKind.ACTIVITY_DEFINITION_MISSING_PROFILE]
        assert kinds(findings, LintSeverity.ERROR) == []

    def test_pinned_profile_version_is_an_error(self, lint_ad, ping_activity_definition):
        text = ping_activity_definition.replace(
            "StructureDefinition/activity-definition\"", "StructureDefinition/activity-definition|1.0.0\""
        )

        assert kinds(lint_ad(text), LintSeverity.ERROR) == [LintKind.ACTIVITY_DEFINITION_PROFILE_NO_PLACEHOLDER]


class TestReadAccess:
    def test_tag_must_be_all(self, lint_ad, ping_activity_definition):
        text = ping_activity_definition.replace('<code value="ALL"/>', '<code value="LOCAL"/>')

        assert kinds(lint_ad(text), LintSeverity.ERROR) == [LintKind.ACTIVITY_DEFINITION_MISSING_READ_ACCESS_TAG]


class TestProcessAuthorization:
    """Requester and recipient codings inside extension-process-authorization."""

    def test_missing_extension(self, lint_ad, fhir_xml, read_access_tag):
        text = fhir_xml("ActivityDefinition", f"""
            <meta>
                <profile value="http://dsf.dev/fhir/StructureDefinition/activity-definition"/>
                {read_access_tag()}
            </meta>
            <url value="http://dsf.dev/bpe/Process/ping"/>
            <status value="unknown"/>
            <kind value="Task"/>
        """)

        assert kinds(lint_ad(text), LintSeverity.ERROR) == [LintKind.ACTIVITY_DEFINITION_NO_PROCESS_AUTHORIZATION]

    def test_missing_recipient(self, lint_ad, ping_activity_definition):
        start = ping_activity_definition.index('<extension url="recipient">')
        end = ping_activity_definition.index("</extension>", ping_activity_definition.index("LOCAL_ORGANIZATION"))
        text = ping_activity_definition[:start] + ping_activity_definition[end + len("</extension>"):]

        assert kinds(lint_ad(text), LintSeverity.ERROR) == [LintKind.ACTIVITY_DEFINITION_ENTRY_MISSING_RECIPIENT]

    def test_unknown_requester_code(self, lint_ad, ping_activity_definition):
        text = ping_activity_definition.replace("LOCAL_ALL", "EVERYONE")

        assert kinds(lint_ad(text), LintSeverity.ERROR) == [LintKind.ACTIVITY_DEFINITION_ENTRY_INVALID_REQUESTER]

    def test_foreign_recipient_system(self, lint_ad, fhir_xml, read_access_tag):
        text = fhir_xml("ActivityDefinition", f"""
            <meta>
                <profile value="http://dsf.dev/fhir/StructureDefinition/activity-definition"/>
                {read_access_tag()}
            </meta>
            <extension url="{AUTHORIZATION_URL}">
                <extension url="requester">
                    <valueCoding><system value="{PROCESS_AUTHORIZATION}"/><code value="REMOTE_ALL"/></valueCoding>
                </extension>
                <extension url="recipient">
                    <valueCoding><system value="http://example.org/other"/><code value="LOCAL_ALL"/></valueCoding>
                </extension>
            </extension>
            <url value="http://dsf.dev/bpe/Process/ping"/>
            <status value="unknown"/>
            <kind value="Task"/>
        """)

        findings = lint_ad(text)

        assert kinds(findings, LintSeverity.ERROR) == [LintKind.ACTIVITY_DEFINITION_ENTRY_INVALID_RECIPIENT]
        assert "http://example.org/other" in findings[-1].description
