"""Tests for FHIR document access and JSON normalization."""

import json

import pytest

from dsflint.common.constants import CS_READ_ACCESS, FHIR_NS
from dsflint.common.exceptions import DocumentParseError
from dsflint.fhir.document import is_blank, local_name, parse_fhir_file, parse_json_text, parse_xml_text
from dsflint.fhir.normalizer import json_to_xml


class TestHelpers:
    def test_local_name(self):
        assert local_name(f"{{{FHIR_NS}}}Task") == "Task"
        assert local_name("Task") == "Task"
        assert local_name(None) == ""

    @pytest.mark.parametrize("value,expected", [(None, True), ("", True), ("  ", True), ("x", False)])
    def test_is_blank(self, value, expected):
        assert is_blank(value) is expected


class TestXmlDocument:
    """Navigation over a namespaced XML resource."""

    @pytest.fixture
    def document(self, fhir_xml, read_access_tag):
        return parse_xml_text(fhir_xml("Task", f"""
            <meta>
                <profile value="http://dsf.dev/fhir/StructureDefinition/task-start-ping|#{{version}}"/>
                {read_access_tag("ALL")}
                {read_access_tag("LOCAL")}
            </meta>
            <status value="draft"/>
            <input><type><coding><code value="message-name"/></coding></type><valueString value="a"/></input>
            <input><type><coding><code value="business-key"/></coding></type><valueString value="b"/></input>
        """))

    def test_resource_type_and_file_name(self, document):
        assert document.resource_type == "Task"
        assert document.file_name == "<memory>"

    def test_dotted_paths(self, document):
        assert document.value("status") == "draft"
        assert document.values("input.type.coding.code") == ["message-name", "business-key"]
        assert document.has("meta.profile")
        assert not document.has("meta.versionId")
        assert document.value("missing.path") is None

    def test_read_access_tags(self, document):
        assert document.read_access_tags() == [(CS_READ_ACCESS, "ALL"), (CS_READ_ACCESS, "LOCAL")]

    def test_contains_value(self, document):
        assert document.contains_value("business-key")
        assert not document.contains_value("correlation-key")

    def test_primitive_reads_child_or_attribute(self, document):
        element = document.find("input")
        element.set("linkId", "attr")

        assert document.primitive(element, "valueString") == "a"
        assert document.primitive(element, "linkId") == "attr"
        assert document.primitive(element, "missing") is None


class TestJsonNormalization:
    """JSON resources become the equivalent XML tree."""

    def test_primitives_and_arrays(self):
        root = json_to_xml({
            "resourceType": "CodeSystem",
            "url": "http://example.org/cs",
            "caseSensitive": True,
            "count": 2,
            "concept": [{"code": "a"}, {"code": "b"}],
            "title": None,
        })

        assert root.tag == f"{{{FHIR_NS}}}CodeSystem"
        assert root.find(f"{{{FHIR_NS}}}url").get("value") == "http://example.org/cs"
        assert root.find(f"{{{FHIR_NS}}}caseSensitive").get("value") == "true"
        assert root.find(f"{{{FHIR_NS}}}count").get("value") == "2"
        assert len(root.findall(f"{{{FHIR_NS}}}concept")) == 2
        assert root.find(f"{{{FHIR_NS}}}title") is None

    def test_nested_id_url_and_slice_name_become_attributes(self):
        document = parse_json_text(json.dumps({
            "resourceType": "StructureDefinition",
            "id": "task-start-ping",
            "differential": {"element": [{"id": "Task.input:message-name", "sliceName": "message-name"}]},
            "extension": [{"url": "http://example.org/ext", "valueString": "x"}],
        }))

        element = document.find("differential.element")
        assert element.get("id") == "Task.input:message-name"
        assert element.get("sliceName") == "message-name"
        assert document.value("id") == "task-start-ping"
        assert document.extensions("http://example.org/ext")[0].get("url") == "http://example.org/ext"

    def test_embedded_resource_is_wrapped(self):
        root = json_to_xml({
            "resourceType": "Bundle",
            "entry": [{"resource": {"resourceType": "Task", "status": "draft"}}],
        })

        resource = root.find(f"{{{FHIR_NS}}}entry/{{{FHIR_NS}}}resource")
        assert resource.find(f"{{{FHIR_NS}}}Task") is not None

    @pytest.mark.parametrize("data", [[], {"status": "draft"}, {"resourceType": " "}])
    def test_rejects_non_resources(self, data):
        with pytest.raises(DocumentParseError):
            json_to_xml(data)

    def test_json_and_xml_read_alike(self, fhir_xml):
        from_xml = parse_xml_text(fhir_xml("ValueSet", '<url value="http://example.org/vs"/><status value="unknown"/>'))
        from_json = parse_json_text('{"resourceType": "ValueSet", "url": "http://example.org/vs", "status": "unknown"}')

        assert from_json.resource_type == from_xml.resource_type
        assert from_json.url == from_xml.url
        assert from_json.status == from_xml.status


class TestParsing:
    def test_parse_file_by_extension(self, tmp_path, fhir_xml):
        xml_path = tmp_path / "task.xml"
        xml_path.write_text(fhir_xml("Task", '<status value="draft"/>'), encoding="utf-8")
        json_path = tmp_path / "task.json"
        json_path.write_text('{"resourceType": "Task", "status": "draft"}', encoding="utf-8")

        assert parse_fhir_file(xml_path).status == "draft"
        assert parse_fhir_file(json_path).status == "draft"
        assert parse_fhir_file(json_path).file_name == "task.json"

    def test_malformed_xml(self):
        with pytest.raises(DocumentParseError, match="Malformed XML"):
            parse_xml_text("<Task>")

    def test_malformed_json(self):
        with pytest.raises(DocumentParseError, match="Malformed JSON"):
            parse_json_text("{")

    def test_undecodable_json(self):
        with pytest.raises(DocumentParseError, match="Malformed JSON"):
            parse_json_text(b'{"resourceType": "CodeSystem", "name": "\xff\xfe"}')

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentParseError):
            parse_fhir_file(tmp_path / "missing.xml")
