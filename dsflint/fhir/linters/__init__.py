"""Per-resource-type linters."""

from dsflint.fhir.linters.activity_definition import ActivityDefinitionLinter
from dsflint.fhir.linters.base import FhirLintContext, FhirResourceLinter, check_placeholder
from dsflint.fhir.linters.code_system import CodeSystemLinter
from dsflint.fhir.linters.questionnaire import QuestionnaireLinter
from dsflint.fhir.linters.structure_definition import StructureDefinitionLinter
from dsflint.fhir.linters.task import TaskLinter, load_input_cardinalities
from dsflint.fhir.linters.value_set import ValueSetLinter

__all__ = [
    "FhirLintContext",
    "FhirResourceLinter",
    "check_placeholder",
    "ActivityDefinitionLinter",
    "TaskLinter",
    "load_input_cardinalities",
    "StructureDefinitionLinter",
    "ValueSetLinter",
    "CodeSystemLinter",
    "QuestionnaireLinter",
]
