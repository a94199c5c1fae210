"""
dsflint: static checks for DSF process plugins.

dsflint reads a plugin project's BPMN process files and FHIR resource files
(ActivityDefinition, Task, StructureDefinition, ValueSet, CodeSystem,
Questionnaire) and reports one finding per rule check. Findings carry a
severity (ERROR, WARN, INFO, SUCCESS) and a kind tag, and a run fails when any
ERROR is reported.

Core Components:
    - ProjectLinter: Lints every file of a project
    - BpmnModelLinter: Lints the processes of one BPMN file
    - FhirLinterRegistry: Selects and runs the linter for a resource
    - TerminologyCache: Known vocabulary codes
    - LintReport / Finding: Results

Example Usage:
    ```python
    from pathlib import Path
    from dsflint import LintConfig, ProjectLinter

    result = ProjectLinter(LintConfig()).lint_project(Path("my-plugin"))
    for finding in result.aggregate.other_findings():
        print(finding)
    ```
"""

__version__ = "0.1.0"

from .bpmn import BpmnModelLinter
from .config import LintConfig
from .fhir.registry import FhirLinterRegistry
from .models import ApiVersion, Finding, FindingLocation, LintKind, LintReport, LintSeverity
from .runner import ProjectLinter, ProjectLintResult, lint_project
from .terminology import TerminologyCache

__all__ = [
    "ProjectLinter",
    "ProjectLintResult",
    "lint_project",
    "LintConfig",
    "BpmnModelLinter",
    "FhirLinterRegistry",
    "TerminologyCache",
    "Finding",
    "FindingLocation",
    "LintReport",
    "LintKind",
    "LintSeverity",
    "ApiVersion",
    "__version__",
]
