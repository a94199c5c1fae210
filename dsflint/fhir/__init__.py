"""FHIR resource parsing, reference resolution and resource linters."""

from dsflint.fhir.document import FhirDocument, parse_fhir_file
from dsflint.fhir.normalizer import json_to_xml
from dsflint.fhir.resolver import ResourceResolver, contains_placeholder, strip_version

__all__ = [
    "FhirDocument",
    "parse_fhir_file",
    "json_to_xml",
    "ResourceResolver",
    "contains_placeholder",
    "strip_version",
]
