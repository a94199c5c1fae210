"""Pytest configuration and fixtures for dsflint tests.

Fixtures build a throw-away plugin project in the Maven layout
(``src/main/resources/bpe`` and ``src/main/resources/fhir/<Kind>``) and
provide small builders for FHIR and BPMN documents, so test modules only
spell out the parts of a resource they care about.
"""

from pathlib import Path

import pytest

from dsflint.bpmn.linter import BpmnModelLinter
from dsflint.bpmn.model import parse_bpmn_text
from dsflint.bpmn.reflection import StaticClassInspector
from dsflint.common.constants import (
    BPE_DIR_NAME,
    BPMN_NS,
    CAMUNDA_NS,
    CS_READ_ACCESS,
    ENV_API_VERSION,
    ENV_DSF_PROJECT_ROOT,
    ENV_FAIL_ON_WARN,
    ENV_LOG_LEVEL,
    ENV_PROJECT_ROOT,
    ENV_REPORT_DIR,
    ENV_SEED_TERMINOLOGY,
    FHIR_DIR_NAME,
    FHIR_NS,
    RESOURCE_KINDS,
    RESOURCES_DIR,
)
from dsflint.fhir.document import parse_xml_text
from dsflint.fhir.linters.base import FhirLintContext
from dsflint.fhir.registry import FhirLinterRegistry
from dsflint.models.enums import ApiVersion
from dsflint.terminology.cache import TerminologyCache

PING_PROCESS_URL = "http://dsf.dev/bpe/Process/ping"
PING_TASK_PROFILE = "http://dsf.dev/fhir/StructureDefinition/task-start-ping"
PING_MESSAGE_NAME = "startPing"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep DSFLINT_* and DSF_PROJECT_ROOT from the caller's shell out of the tests."""
    for name in (
        ENV_PROJECT_ROOT,
        ENV_DSF_PROJECT_ROOT,
        ENV_API_VERSION,
        ENV_REPORT_DIR,
        ENV_FAIL_ON_WARN,
        ENV_SEED_TERMINOLOGY,
        ENV_LOG_LEVEL,
    ):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# Project tree
# ============================================================================


@pytest.fixture
def plugin_root(tmp_path) -> Path:
    """Empty plugin project with process and resource folders."""
    root = tmp_path / "ping-plugin"
    (root / RESOURCES_DIR / BPE_DIR_NAME).mkdir(parents=True)
    for kind in RESOURCE_KINDS:
        (root / RESOURCES_DIR / FHIR_DIR_NAME / kind).mkdir(parents=True)
    return root


@pytest.fixture
def write_resource(plugin_root):
    """Write a resource file into ``fhir/<kind>`` of the plugin project."""

    def _write(kind: str, file_name: str, content: str) -> Path:
        path = plugin_root / RESOURCES_DIR / FHIR_DIR_NAME / kind / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_undecodable_json(write_resource):
    """Write a JSON resource whose bytes are not valid UTF-8."""

    def _write(kind: str, file_name: str = "bad.json") -> Path:
        path = write_resource(kind, file_name, "")
        path.write_bytes(b'{"resourceType": "' + kind.encode() + b'", "name": "\xff\xfe"}')
        return path

    return _write


@pytest.fixture
def write_bpmn(plugin_root):
    """Write a process file into ``bpe`` of the plugin project."""

    def _write(file_name: str, content: str) -> Path:
        path = plugin_root / RESOURCES_DIR / BPE_DIR_NAME / file_name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ============================================================================
# Document builders
# ============================================================================


@pytest.fixture
def fhir_xml():
    """Wrap a body into a FHIR XML resource of the given type."""

    def _build(resource_type: str, body: str) -> str:
        return f'<{resource_type} xmlns="{FHIR_NS}">{body}</{resource_type}>'

    return _build


@pytest.fixture
def read_access_tag():
    """``meta.tag`` element from the read-access vocabulary."""

    def _build(code: str = "ALL") -> str:
        return f'<tag><system value="{CS_READ_ACCESS}"/><code value="{code}"/></tag>'

    return _build


@pytest.fixture
def bpmn_xml():
    """Wrap processes (and root-level messages, signals, errors) into BPMN definitions."""

    def _build(body: str) -> str:
        return (
            f'<definitions xmlns="{BPMN_NS}" xmlns:camunda="{CAMUNDA_NS}" '
            f'id="definitions" targetNamespace="http://bpmn.io/schema/bpmn">{body}</definitions>'
        )

    return _build


# ============================================================================
# Linting helpers
# ============================================================================


@pytest.fixture
def cache() -> TerminologyCache:
    """Fresh cache seeded with the built-in vocabularies only."""
    return TerminologyCache()


@pytest.fixture
def inspector() -> StaticClassInspector:
    """Empty class table; tests declare the classes they need."""
    return StaticClassInspector()


@pytest.fixture
def fhir_context(plugin_root, cache):
    """Build a FhirLintContext for an XML resource text."""

    def _make(text: str, file_name: str = "resource.xml") -> FhirLintContext:
        document = parse_xml_text(text, plugin_root / file_name)
        return FhirLintContext(document=document, project_root=plugin_root, cache=cache)

    return _make


@pytest.fixture
def lint_resource(plugin_root, cache):
    """Lint an XML resource text through the default registry."""
    registry = FhirLinterRegistry()

    def _lint(text: str, file_name: str = "resource.xml"):
        document = parse_xml_text(text, plugin_root / file_name)
        return registry.lint_document(document, plugin_root, cache=cache)

    return _lint


@pytest.fixture
def lint_process(plugin_root, cache, inspector):
    """Lint a BPMN text with the given API generation."""

    def _lint(text: str, api_version: ApiVersion = ApiVersion.V2):
        linter = BpmnModelLinter(plugin_root, api_version=api_version, inspector=inspector, cache=cache)
        return linter.lint_model(parse_bpmn_text(text, plugin_root / "ping.bpmn"))

    return _lint


@pytest.fixture
def lint_nodes(lint_process, bpmn_xml):
    """Lint flow nodes placed into a single ``dsfdev_ping`` process."""

    def _lint(nodes: str, definitions: str = "", api_version: ApiVersion = ApiVersion.V2):
        return lint_process(bpmn_xml(f'<process id="dsfdev_ping">{nodes}</process>{definitions}'), api_version)

    return _lint


# ============================================================================
# Consistent ping resources
# ============================================================================


@pytest.fixture
def ping_activity_definition(fhir_xml, read_access_tag):
    """ActivityDefinition for the ping process that passes every check."""
    return fhir_xml(
        "ActivityDefinition",
        f"""
        <meta>
            <profile value="http://dsf.dev/fhir/StructureDefinition/activity-definition"/>
            {read_access_tag("ALL")}
        </meta>
        <extension url="http://dsf.dev/fhir/StructureDefinition/extension-process-authorization">
            <extension url="message-name"><valueString value="{PING_MESSAGE_NAME}"/></extension>
            <extension url="task-profile"><valueCanonical value="{PING_TASK_PROFILE}|#{{version}}"/></extension>
            <extension url="requester">
                <valueCoding>
                    <system value="http://dsf.dev/fhir/CodeSystem/process-authorization"/>
                    <code value="LOCAL_ALL"/>
                </valueCoding>
            </extension>
            <extension url="recipient">
                <valueCoding>
                    <system value="http://dsf.dev/fhir/CodeSystem/process-authorization"/>
                    <code value="LOCAL_ORGANIZATION"/>
                </valueCoding>
            </extension>
        </extension>
        <url value="{PING_PROCESS_URL}"/>
        <version value="#{{version}}"/>
        <status value="unknown"/>
        <kind value="Task"/>
        """,
    )


@pytest.fixture
def ping_structure_definition(fhir_xml, read_access_tag):
    """Task profile for the ping message: exactly one message-name, no correlation."""
    return fhir_xml(
        "StructureDefinition",
        f"""
        <meta>{read_access_tag("ALL")}</meta>
        <url value="{PING_TASK_PROFILE}"/>
        <version value="#{{version}}"/>
        <date value="#{{date}}"/>
        <status value="unknown"/>
        <differential>
            <element id="Task.instantiatesCanonical">
                <path value="Task.instantiatesCanonical"/>
                <fixedCanonical value="{PING_PROCESS_URL}|#{{version}}"/>
            </element>
            <element id="Task.input">
                <path value="Task.input"/>
                <min value="1"/>
            </element>
            <element id="Task.input:message-name">
                <path value="Task.input"/>
                <sliceName value="message-name"/>
                <min value="1"/>
                <max value="1"/>
            </element>
            <element id="Task.input:message-name.value[x]">
                <path value="Task.input.value[x]"/>
                <fixedString value="{PING_MESSAGE_NAME}"/>
            </element>
            <element id="Task.input:business-key">
                <path value="Task.input"/>
                <sliceName value="business-key"/>
                <min value="0"/>
                <max value="1"/>
            </element>
            <element id="Task.input:correlation-key">
                <path value="Task.input"/>
                <sliceName value="correlation-key"/>
                <max value="0"/>
            </element>
        </differential>
        """,
    )


@pytest.fixture
def ping_resources(write_resource, ping_activity_definition, ping_structure_definition):
    """Write the ping ActivityDefinition and Task profile into the project."""
    write_resource("ActivityDefinition", "ping.xml", ping_activity_definition)
    write_resource("StructureDefinition", "task-start-ping.xml", ping_structure_definition)
