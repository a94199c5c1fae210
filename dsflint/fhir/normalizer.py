"""Convert FHIR JSON resources into the equivalent XML element tree.

Conversion rules:
- the root element is named after ``resourceType`` in the FHIR namespace
- primitives become ``<name value="..."/>`` (booleans as ``true``/``false``)
- arrays repeat the element once per entry
- inside nested objects, ``id``, ``url`` and ``sliceName`` become attributes,
  matching FHIR XML where ``element.id`` and ``extension.url`` are attributes
  while a resource's own ``id``/``url`` are child elements
- an embedded resource (an object with ``resourceType``) is wrapped as
  ``<name><Type>...</Type></name>``
- ``null`` values are skipped
"""

import xml.etree.ElementTree as ET
from typing import Any

from dsflint.common.constants import FHIR_NS
from dsflint.common.exceptions import DocumentParseError

ATTRIBUTE_KEYS = frozenset({"id", "url", "sliceName"})


def json_to_xml(data: Any) -> ET.Element:
    """
    Convert a parsed FHIR JSON resource into an XML element tree.

    Raises:
        DocumentParseError: If ``data`` is not an object with a ``resourceType``
    """
    if not isinstance(data, dict):
        raise DocumentParseError("FHIR JSON document must be an object", document_kind="fhir")
    resource_type = data.get("resourceType")
    if not isinstance(resource_type, str) or not resource_type.strip():
        raise DocumentParseError("FHIR JSON document has no resourceType", document_kind="fhir")
    return _build_resource(data)


def _tag(name: str) -> str:
    return f"{{{FHIR_NS}}}{name}"


def _format_primitive(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build_resource(data: dict[str, Any]) -> ET.Element:
    element = ET.Element(_tag(data["resourceType"]))
    _append_members(element, data, resource_level=True)
    return element


def _append_members(parent: ET.Element, obj: dict[str, Any], resource_level: bool = False) -> None:
    for key, value in obj.items():
        if key == "resourceType" or value is None:
            continue
        if not resource_level and key in ATTRIBUTE_KEYS and not isinstance(value, (dict, list)):
            parent.set(key, _format_primitive(value))
            continue
        entries = value if isinstance(value, list) else [value]
        for entry in entries:
            if entry is not None:
                _append_entry(parent, key, entry)


def _append_entry(parent: ET.Element, name: str, value: Any) -> None:
    if isinstance(value, list):
        for entry in value:
            if entry is not None:
                _append_entry(parent, name, entry)
        return
    child = ET.SubElement(parent, _tag(name))
    if isinstance(value, dict):
        if isinstance(value.get("resourceType"), str):
            child.append(_build_resource(value))
        else:
            _append_members(child, value)
    else:
        child.set("value", _format_primitive(value))
