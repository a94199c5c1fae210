"""Cross-reference resolution from process nodes to project resources.

Matching is content based: files inside a resource-kind directory are parsed
and inspected, file names are never consulted. A file that cannot be read or
parsed simply does not match, and a missing directory means "not found".
"""

import logging
import re
from collections.abc import Callable
from pathlib import Path

from dsflint.common.constants import (
    KIND_ACTIVITY_DEFINITION,
    KIND_QUESTIONNAIRE,
    KIND_STRUCTURE_DEFINITION,
)
from dsflint.common.exceptions import DocumentParseError
from dsflint.fhir.document import FhirDocument, is_blank, parse_fhir_file
from dsflint.project import list_resource_files

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"(?:\$|#)\{[^}]+\}")

MESSAGE_NAME_EXTENSION = "message-name"
INSTANTIATES_CANONICAL_ELEMENT_ID = "Task.instantiatesCanonical"
MESSAGE_NAME_ELEMENT_ID = "Task.input:message-name.value[x]"


def contains_placeholder(value: str | None) -> bool:
    """True if ``value`` holds a ``#{...}`` or ``${...}`` template token."""
    return value is not None and PLACEHOLDER_PATTERN.search(value) is not None


def strip_version(canonical: str) -> str:
    """Drop the ``|version`` suffix of a canonical identifier."""
    return canonical.split("|", 1)[0].strip()


Matcher = Callable[[FhirDocument], bool]


class ResourceResolver:
    """
    Answers existence queries about resources of one project.

    Args:
        project_root: Root directory holding ``fhir/<Kind>`` folders
    """

    def __init__(self, project_root: Path):
        self.project_root = project_root

    # ------------------------------------------------------------------
    # Generic scanning
    # ------------------------------------------------------------------

    def _documents(self, kind: str):
        for path in list_resource_files(self.project_root, kind):
            try:
                document = parse_fhir_file(path)
            except Exception as e:
                logger.debug(f"Resolver skipped {path}: {e}")
                continue
            if document.resource_type != kind:
                continue
            yield document

    def find_file(self, kind: str, matcher: Matcher) -> Path | None:
        """First file of ``kind`` whose parsed document satisfies ``matcher``."""
        for document in self._documents(kind):
            if matcher(document):
                return document.source
        return None

    def exists(self, kind: str, matcher: Matcher) -> bool:
        return self.find_file(kind, matcher) is not None

    def definition_exists(self, kind: str, identifier_or_name: str) -> bool:
        """
        Check whether a resource of ``kind`` references ``identifier_or_name``.

        ActivityDefinitions are matched by the message name they declare,
        StructureDefinitions by canonical url, Questionnaires by url.
        """
        if is_blank(identifier_or_name):
            return False
        if kind == KIND_ACTIVITY_DEFINITION:
            return self.activity_definition_exists(identifier_or_name)
        if kind == KIND_STRUCTURE_DEFINITION:
            return self.structure_definition_exists(identifier_or_name)
        if kind == KIND_QUESTIONNAIRE:
            return self.questionnaire_exists(identifier_or_name)
        target = strip_version(identifier_or_name)
        return self.exists(kind, lambda doc: doc.url is not None and strip_version(doc.url) == target)

    # ------------------------------------------------------------------
    # Message names
    # ------------------------------------------------------------------

    def activity_definition_exists(self, message_name: str) -> bool:
        """An ActivityDefinition declares ``message_name`` in a message-name extension."""
        return self.exists(KIND_ACTIVITY_DEFINITION, lambda doc: declares_message_name(doc, message_name))

    def activity_definition_has_message_name(self, message_name: str) -> bool:
        return self.activity_definition_exists(message_name)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def structure_definition_exists(self, profile: str) -> bool:
        return self.find_structure_definition_file(profile) is not None

    def find_structure_definition_file(self, profile: str) -> Path | None:
        """
        Find the StructureDefinition for a profile or message name.

        A file matches when its url equals ``profile`` without version, or
        when any fixed or value string in it equals ``profile`` without version.
        """
        if is_blank(profile):
            return None
        base = strip_version(profile)
        return self.find_file(
            KIND_STRUCTURE_DEFINITION,
            lambda doc: (doc.url is not None and strip_version(doc.url) == base) or _has_fixed_string(doc, base),
        )

    def load_structure_definition(self, profile: str) -> FhirDocument | None:
        path = self.find_structure_definition_file(profile)
        if path is None:
            return None
        try:
            return parse_fhir_file(path)
        except DocumentParseError as e:
            logger.debug(f"Cannot reload {path}: {e}")
            return None

    # ------------------------------------------------------------------
    # Canonical references
    # ------------------------------------------------------------------

    def find_activity_definition_file(self, canonical: str) -> Path | None:
        """ActivityDefinition whose url equals ``canonical`` without version."""
        if is_blank(canonical):
            return None
        target = strip_version(canonical)
        return self.find_file(
            KIND_ACTIVITY_DEFINITION,
            lambda doc: doc.url is not None and doc.url.strip() == target,
        )

    def activity_definition_exists_for_canonical(self, canonical: str) -> bool:
        return self.find_activity_definition_file(canonical) is not None

    def questionnaire_exists(self, form_key: str) -> bool:
        """A Questionnaire whose url equals ``form_key`` without version."""
        if is_blank(form_key):
            return False
        target = strip_version(form_key)
        return self.exists(
            KIND_QUESTIONNAIRE,
            lambda doc: doc.url is not None and doc.url.strip() == target,
        )


def declares_message_name(document: FhirDocument, message_name: str) -> bool:
    """True if any message-name extension carries ``message_name``."""
    for extension in document.iter("extension"):
        if extension.get("url") != MESSAGE_NAME_EXTENSION:
            continue
        for field in ("valueString", "fixedString"):
            if document.value(field, extension) == message_name:
                return True
    return False


def _has_fixed_string(document: FhirDocument, value: str) -> bool:
    for name in ("fixedString", "valueString"):
        for element in document.iter(name):
            if element.get("value") == value:
                return True
    return False


def extract_fixed_value(document: FhirDocument, element_id: str, fixed_name: str) -> str | None:
    """
    Read a fixed value from a StructureDefinition element.

    Args:
        document: Parsed StructureDefinition
        element_id: ``element/@id`` to look for, e.g. ``Task.instantiatesCanonical``
        fixed_name: Child carrying the value, e.g. ``fixedCanonical``

    Returns:
        The value attribute, or None when the element or value is absent
    """
    for element in document.iter("element"):
        if element.get("id") == element_id:
            value = document.value(fixed_name, element)
            if value is not None:
                return value
    return None
