"""Registry of resource linters, selected per document."""

import logging
from pathlib import Path

from dsflint.fhir.document import FhirDocument, parse_fhir_file
from dsflint.fhir.linters.activity_definition import ActivityDefinitionLinter
from dsflint.fhir.linters.base import FhirLintContext, FhirResourceLinter
from dsflint.fhir.linters.code_system import CodeSystemLinter
from dsflint.fhir.linters.questionnaire import QuestionnaireLinter
from dsflint.fhir.linters.structure_definition import StructureDefinitionLinter
from dsflint.fhir.linters.task import TaskLinter
from dsflint.fhir.linters.value_set import ValueSetLinter
from dsflint.fhir.resolver import ResourceResolver
from dsflint.models.finding import LintReport
from dsflint.terminology.cache import TerminologyCache, default_cache

logger = logging.getLogger(__name__)


def default_linters() -> list[FhirResourceLinter]:
    return [
        ActivityDefinitionLinter(),
        TaskLinter(),
        StructureDefinitionLinter(),
        ValueSetLinter(),
        CodeSystemLinter(),
        QuestionnaireLinter(),
    ]


class FhirLinterRegistry:
    """
    Ordered set of resource linters.

    The first linter whose ``can_handle`` accepts a document lints it; a
    document nobody handles yields no report.
    """

    def __init__(self, linters: list[FhirResourceLinter] | None = None):
        self._linters: list[FhirResourceLinter] = list(linters) if linters is not None else default_linters()

    def register(self, linter: FhirResourceLinter) -> None:
        """
        Add a linter after the existing ones.

        Raises:
            ValueError: If a linter for the same resource type is registered
        """
        if any(existing.resource_type == linter.resource_type for existing in self._linters):
            raise ValueError(f"A linter for '{linter.resource_type}' is already registered")
        self._linters.append(linter)

    @property
    def linters(self) -> list[FhirResourceLinter]:
        return list(self._linters)

    def resource_types(self) -> list[str]:
        return [linter.resource_type for linter in self._linters]

    def linter_for(self, document: FhirDocument) -> FhirResourceLinter | None:
        for linter in self._linters:
            if linter.can_handle(document):
                return linter
        return None

    def lint_document(
        self,
        document: FhirDocument,
        project_root: Path,
        cache: TerminologyCache | None = None,
        resolver: ResourceResolver | None = None,
    ) -> LintReport | None:
        linter = self.linter_for(document)
        if linter is None:
            logger.info(f"No linter for {document.resource_type} resource {document.file_name}; skipped")
            return None
        ctx = FhirLintContext(
            document=document,
            project_root=project_root,
            cache=cache or default_cache(),
            resolver=resolver,
            reference=linter.reference_for(document),
        )
        findings = linter.lint(ctx)
        logger.debug(f"{document.file_name}: {len(findings)} findings from {type(linter).__name__}")
        return LintReport.from_findings(document.file_name, findings)

    def lint_file(
        self,
        path: Path,
        project_root: Path,
        cache: TerminologyCache | None = None,
        resolver: ResourceResolver | None = None,
    ) -> LintReport | None:
        """
        Parse and lint one resource file.

        Raises:
            DocumentParseError: If the file cannot be parsed
        """
        return self.lint_document(parse_fhir_file(path), project_root, cache, resolver)
