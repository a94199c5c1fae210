"""Tests for Questionnaire linting."""

from collections import Counter

import pytest

from dsflint.fhir.linters.questionnaire import QuestionnaireLinter
from dsflint.models.enums import LintKind, LintSeverity


def item(link_id, item_type="string", text="Question", required=None):
    parts = [f'<linkId value="{link_id}"/>'] if link_id is not None else []
    if text is not None:
        parts.append(f'<text value="{text}"/>')
    if item_type is not None:
        parts.append(f'<type value="{item_type}"/>')
    if required is not None:
        parts.append(f'<required value="{required}"/>')
    return f"<item>{''.join(parts)}</item>"


MANDATORY_ITEMS = [
    item("business-key", text="The business-key of the process execution", required="true"),
    item("user-task-id", text="The user-task-id of the process execution", required="true"),
]


@pytest.fixture
def questionnaire_xml(fhir_xml, read_access_tag):
    def _build(items=None, profile="http://dsf.dev/fhir/StructureDefinition/questionnaire|1.0.0"):
        if items is None:
            items = MANDATORY_ITEMS + [item("approve", item_type="boolean", text="Approve the release?")]
        return fhir_xml("Questionnaire", f"""
            <meta>
                <profile value="{profile}"/>
                {read_access_tag("ALL")}
            </meta>
            <url value="http://dsf.dev/fhir/Questionnaire/release-approval"/>
            <version value="#{{version}}"/>
            <date value="#{{date}}"/>
            <status value="unknown"/>
            {''.join(items)}
        """)

    return _build


@pytest.fixture
def lint_questionnaire(fhir_context):
    def _lint(text):
        return QuestionnaireLinter().lint(fhir_context(text, "release-approval.xml"))

    return _lint


def problems(findings):
    return Counter((f.severity, f.kind) for f in findings if not f.is_success)


class TestMetadata:
    def test_valid_questionnaire(self, lint_questionnaire, questionnaire_xml):
        assert problems(lint_questionnaire(questionnaire_xml())) == Counter()

    @pytest.mark.parametrize("profile", [
        "http://dsf.dev/fhir/StructureDefinition/questionnaire",
        "http://dsf.dev/fhir/StructureDefinition/questionnaire|#{version}",
        "http://example.org/StructureDefinition/questionnaire|1.0.0",
    ])
    def test_invalid_profile(self, lint_questionnaire, questionnaire_xml, profile):
        findings = lint_questionnaire(questionnaire_xml(profile=profile))

        assert problems(findings) == Counter({(LintSeverity.ERROR, LintKind.QUESTIONNAIRE_INVALID_META_PROFILE): 1})

    def test_placeholders_and_status_are_errors(self, lint_questionnaire, questionnaire_xml):
        text = (
            questionnaire_xml()
            .replace("#{version}", "1.0")
            .replace("#{date}", "2024-01-01")
            .replace('<status value="unknown"/>', '<status value="active"/>')
        )

        assert problems(lint_questionnaire(text)) == Counter({
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_VERSION_NO_PLACEHOLDER): 1,
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_DATE_NO_PLACEHOLDER): 1,
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_INVALID_STATUS): 1,
        })

    def test_any_known_read_access_code(self, lint_questionnaire, questionnaire_xml):
        text = questionnaire_xml().replace('<code value="ALL"/>', '<code value="ORGANIZATION"/>')

        assert problems(lint_questionnaire(text)) == Counter()

    def test_unknown_read_access_code(self, lint_questionnaire, questionnaire_xml):
        text = questionnaire_xml().replace('<code value="ALL"/>', '<code value="EVERYONE"/>')

        assert problems(lint_questionnaire(text)) == Counter({
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_MISSING_READ_ACCESS_TAG): 1,
        })


class TestItems:
    """linkId, type and text of items plus the two mandatory items."""

    def test_no_items(self, lint_questionnaire, questionnaire_xml):
        assert problems(lint_questionnaire(questionnaire_xml(items=[]))) == Counter({
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_MISSING_ITEM): 1,
        })

    def test_item_problems(self, lint_questionnaire, questionnaire_xml):
        items = MANDATORY_ITEMS + [
            item(None),
            item("no-type", item_type=None),
            item("silent", text=None),
            item("Release_Date"),
            item("silent"),
        ]

        assert problems(lint_questionnaire(questionnaire_xml(items=items))) == Counter({
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_ITEM_MISSING_LINK_ID): 1,
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_ITEM_MISSING_TYPE): 1,
            (LintSeverity.INFO, LintKind.QUESTIONNAIRE_ITEM_MISSING_TEXT): 1,
            (LintSeverity.WARN, LintKind.QUESTIONNAIRE_UNUSUAL_LINK_ID): 1,
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_DUPLICATE_LINK_ID): 1,
        })

    def test_mandatory_items(self, lint_questionnaire, questionnaire_xml):
        items = [
            item("business-key", item_type="text", required="true"),
            item("user-task-id", required="false"),
        ]

        assert problems(lint_questionnaire(questionnaire_xml(items=items))) == Counter({
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_MANDATORY_ITEM_INVALID_TYPE): 1,
            (LintSeverity.ERROR, LintKind.QUESTIONNAIRE_MANDATORY_ITEM_NOT_REQUIRED): 1,
        })

    def test_missing_mandatory_item(self, lint_questionnaire, questionnaire_xml):
        findings = lint_questionnaire(questionnaire_xml(items=MANDATORY_ITEMS[:1]))

        assert problems(findings) == Counter({(LintSeverity.ERROR, LintKind.QUESTIONNAIRE_MANDATORY_ITEM_MISSING): 1})
        assert "user-task-id" in findings[-1].description
