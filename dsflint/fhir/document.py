"""Namespace-agnostic access to parsed FHIR resource documents.

Resources are read either from XML directly or from JSON converted into the
equivalent XML tree (see ``dsflint.fhir.normalizer``), so every linter works
against one tree shape built on ``xml.etree.ElementTree``.
"""

import json
import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from dsflint.common.exceptions import DocumentParseError
from dsflint.fhir.normalizer import json_to_xml

logger = logging.getLogger(__name__)


def local_name(tag: object) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class FhirDocument:
    """Read-only view over a FHIR resource element tree."""

    def __init__(self, root: ET.Element, source: Path | None = None):
        self.root = root
        self.source = source

    @property
    def resource_type(self) -> str:
        return local_name(self.root.tag)

    @property
    def file_name(self) -> str:
        return self.source.name if self.source else "<memory>"

    # ------------------------------------------------------------------
    # Element navigation
    # ------------------------------------------------------------------

    @staticmethod
    def children(element: ET.Element, name: str) -> list[ET.Element]:
        return [child for child in element if local_name(child.tag) == name]

    @staticmethod
    def child(element: ET.Element, name: str) -> ET.Element | None:
        for child in element:
            if local_name(child.tag) == name:
                return child
        return None

    def find_all(self, path: str, start: ET.Element | None = None) -> list[ET.Element]:
        """All elements reached by a dotted path of local names, e.g. ``meta.tag.code``."""
        current = [start if start is not None else self.root]
        for part in path.split("."):
            current = [c for element in current for c in element if local_name(c.tag) == part]
            if not current:
                break
        return current

    def find(self, path: str, start: ET.Element | None = None) -> ET.Element | None:
        found = self.find_all(path, start)
        return found[0] if found else None

    def value(self, path: str, start: ET.Element | None = None) -> str | None:
        """The ``value`` attribute of the first element on ``path``."""
        element = self.find(path, start)
        return element.get("value") if element is not None else None

    def values(self, path: str, start: ET.Element | None = None) -> list[str]:
        return [e.get("value") for e in self.find_all(path, start) if e.get("value") is not None]

    def has(self, path: str, start: ET.Element | None = None) -> bool:
        return self.find(path, start) is not None

    def iter(self, name: str, start: ET.Element | None = None) -> Iterator[ET.Element]:
        """Depth-first iteration over descendants with the given local name."""
        base = start if start is not None else self.root
        for element in base.iter():
            if element is not base and local_name(element.tag) == name:
                yield element

    def extensions(self, url: str, start: ET.Element | None = None) -> list[ET.Element]:
        """Direct ``extension`` children carrying the given url."""
        base = start if start is not None else self.root
        return [e for e in self.children(base, "extension") if e.get("url") == url]

    def primitive(self, element: ET.Element, name: str) -> str | None:
        """Read a primitive either from a child's value attribute or an attribute."""
        child = self.child(element, name)
        if child is not None and child.get("value") is not None:
            return child.get("value")
        return element.get(name)

    # ------------------------------------------------------------------
    # Common resource fields
    # ------------------------------------------------------------------

    @property
    def url(self) -> str | None:
        return self.value("url")

    @property
    def status(self) -> str | None:
        return self.value("status")

    def read_access_tags(self) -> list[tuple[str | None, str | None]]:
        """(system, code) pairs of every ``meta.tag`` entry."""
        return [
            (self.value("system", tag), self.value("code", tag))
            for tag in self.find_all("meta.tag")
        ]

    def contains_value(self, needle: str) -> bool:
        """True if any ``value`` attribute in the document equals ``needle``."""
        return any(element.get("value") == needle for element in self.root.iter())


def parse_xml_text(text: str | bytes, source: Path | None = None) -> FhirDocument:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DocumentParseError(
            f"Malformed XML: {e}", file_path=str(source) if source else None, document_kind="fhir"
        ) from e
    return FhirDocument(root, source)


def parse_json_text(text: str | bytes, source: Path | None = None) -> FhirDocument:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DocumentParseError(
            f"Malformed JSON: {e}", file_path=str(source) if source else None, document_kind="fhir"
        ) from e
    return FhirDocument(json_to_xml(data), source)


def parse_fhir_file(path: Path) -> FhirDocument:
    """
    Parse a FHIR resource file into a document tree.

    Args:
        path: ``.xml`` or ``.json`` resource file

    Returns:
        FhirDocument for the resource

    Raises:
        DocumentParseError: If the file cannot be read or is not well-formed
    """
    suffix = path.suffix.lower()
    if suffix not in (".xml", ".json"):
        raise DocumentParseError(
            f"Unsupported file type: {path.name} (only .xml and .json are supported)",
            file_path=str(path),
            document_kind="fhir",
        )
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentParseError(f"Cannot read {path}: {e}", file_path=str(path), document_kind="fhir") from e

    logger.debug(f"Parsing FHIR resource {path}")
    if suffix == ".xml":
        return parse_xml_text(raw, path)
    return parse_json_text(raw, path)
