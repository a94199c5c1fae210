"""
Project Runner Module

Lints a whole plugin project: every process file under ``bpe`` and every
resource file under ``fhir``. Each file is isolated, so a file that cannot be
parsed (or whose linting fails) becomes a single ERROR finding and the run
carries on with the remaining files.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from dsflint.bpmn.linter import BpmnModelLinter
from dsflint.bpmn.reflection import ClassInspector, SafeClassInspector, SourceTreeClassInspector
from dsflint.common.exceptions import ResourceResolutionError
from dsflint.config import LintConfig
from dsflint.fhir.registry import FhirLinterRegistry
from dsflint.fhir.resolver import ResourceResolver
from dsflint.models.enums import ApiVersion, LintKind, LintSeverity
from dsflint.models.finding import Finding, FindingLocation, LintReport
from dsflint.project import bpmn_files, detect_api_version, fhir_files, find_project_root
from dsflint.terminology.cache import TerminologyCache

logger = logging.getLogger(__name__)

AGGREGATE_SOURCE = "aggregate"


def unparsable_finding(kind: LintKind, project_name: str, path: Path) -> Finding:
    """The single ERROR recorded for a file that could not be linted."""
    return Finding.of(
        LintSeverity.ERROR,
        kind,
        f'linting for plugin "{project_name}" may has some false items '
        f'because the file "{path.name}" is unparsable.',
        FindingLocation(file_name=path.name),
    )


@dataclass
class ProjectLintResult:
    """Outcome of linting one project."""

    project_root: Path
    api_version: ApiVersion
    detected_version: ApiVersion
    file_reports: list[LintReport] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def aggregate(self) -> LintReport:
        return LintReport.merge(AGGREGATE_SOURCE, self.file_reports)

    @property
    def project_name(self) -> str:
        return self.project_root.name

    def failed(self, fail_on_warn: bool = False) -> bool:
        """True if the aggregate holds an ERROR (or a WARN with ``fail_on_warn``)."""
        aggregate = self.aggregate
        return aggregate.has_errors or (fail_on_warn and aggregate.has_warnings)

    def report_for(self, file_name: str) -> LintReport | None:
        for report in self.file_reports:
            if report.source == file_name:
                return report
        return None


class ProjectLinter:
    """
    Coordinates a full lint run over a plugin project.

    Args:
        config: Run configuration; environment based if omitted
        cache: Terminology cache for the run; a fresh seeded one if omitted
        inspector: Class inspector; a source-tree inspector if omitted.
            Whatever is passed is wrapped so that failures read as "no".
        registry: Resource linter registry
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        cache: TerminologyCache | None = None,
        inspector: ClassInspector | None = None,
        registry: FhirLinterRegistry | None = None,
    ):
        self._config = config if config is not None else LintConfig.from_env()
        self._cache = cache if cache is not None else TerminologyCache()
        self._inspector = SafeClassInspector(inspector or SourceTreeClassInspector())
        self._registry = registry or FhirLinterRegistry()

    @property
    def config(self) -> LintConfig:
        return self._config

    @property
    def cache(self) -> TerminologyCache:
        return self._cache

    def resolve_root(self, path: Path | None = None) -> Path:
        start = path if path is not None else (self._config.project_root or Path.cwd())
        if not start.exists():
            raise ResourceResolutionError(f"Path does not exist: {start}", path=str(start))
        return find_project_root(start, self._config.project_root)

    def lint_project(self, path: Path | None = None) -> ProjectLintResult:
        """
        Lint every process and resource file of the project containing ``path``.

        Args:
            path: Project directory or any file inside it; defaults to the
                configured project root, then the working directory

        Returns:
            ProjectLintResult with one report per linted file
        """
        root = self.resolve_root(path)
        detected = detect_api_version(root).version
        api_version = self._config.api_version or (detected if detected != ApiVersion.UNKNOWN else ApiVersion.V2)
        logger.info(f"Linting {root} (api {api_version}, detected {detected})")

        if self._config.seed_terminology:
            self._cache.seed_from_project_folder(root)

        result = ProjectLintResult(project_root=root, api_version=api_version, detected_version=detected)
        resolver = ResourceResolver(root)
        bpmn_linter = BpmnModelLinter(
            root,
            api_version=api_version,
            inspector=self._inspector,
            cache=self._cache,
            resolver=resolver,
        )

        for path in bpmn_files(root):
            result.file_reports.append(self._lint_bpmn_file(bpmn_linter, root, path))

        for path in fhir_files(root):
            report = self._lint_fhir_file(root, resolver, path)
            if report is None:
                result.skipped_files.append(path)
            else:
                result.file_reports.append(report)

        logger.info(
            f"Linted {len(result.file_reports)} files under {root} "
            f"({len(result.skipped_files)} unrecognized resources skipped)"
        )
        return result

    def _lint_bpmn_file(self, linter: BpmnModelLinter, root: Path, path: Path) -> LintReport:
        logger.debug(f"Linting process file {path}")
        try:
            return linter.lint_file(path)
        except Exception as e:
            logger.debug(f"Process file {path} could not be linted: {e}")
            finding = unparsable_finding(LintKind.UNPARSABLE_BPMN_RESOURCE, root.name, path)
            return LintReport.from_findings(path.name, [finding])

    def _lint_fhir_file(self, root: Path, resolver: ResourceResolver, path: Path) -> LintReport | None:
        logger.debug(f"Linting resource file {path}")
        try:
            return self._registry.lint_file(path, root, cache=self._cache, resolver=resolver)
        except Exception as e:
            logger.debug(f"Resource file {path} could not be linted: {e}")
            finding = unparsable_finding(LintKind.UNPARSABLE_FHIR_RESOURCE, root.name, path)
            return LintReport.from_findings(path.name, [finding])


def lint_project(path: Path, config: LintConfig | None = None) -> ProjectLintResult:
    """Convenience wrapper: lint the project containing ``path``."""
    return ProjectLinter(config).lint_project(path)
