"""Shared context and finding helpers for process-node linters."""

from dataclasses import dataclass, field
from pathlib import Path

from dsflint.bpmn.reflection import ClassInspector, NullClassInspector
from dsflint.fhir.document import is_blank
from dsflint.fhir.resolver import ResourceResolver
from dsflint.models.enums import ApiVersion, LintKind, LintSeverity
from dsflint.models.finding import Finding, FindingLocation
from dsflint.terminology.cache import TerminologyCache, default_cache


@dataclass
class BpmnLintContext:
    """Everything a node linter needs besides the node itself."""

    source: Path
    project_root: Path
    api_version: ApiVersion = ApiVersion.V2
    process_id: str | None = None
    inspector: ClassInspector = field(default_factory=NullClassInspector)
    cache: TerminologyCache = field(default_factory=default_cache)
    resolver: ResourceResolver | None = None

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = ResourceResolver(self.project_root)

    @property
    def file_name(self) -> str:
        return self.source.name

    def for_process(self, process_id: str | None) -> "BpmnLintContext":
        return BpmnLintContext(
            source=self.source,
            project_root=self.project_root,
            api_version=self.api_version,
            process_id=process_id,
            inspector=self.inspector,
            cache=self.cache,
            resolver=self.resolver,
        )

    def location(self, element_id: str | None, reference: str | None = None) -> FindingLocation:
        return FindingLocation(
            file_name=self.file_name,
            element_id=element_id,
            process_id=self.process_id,
            reference=reference,
        )

    def finding(
        self,
        severity: LintSeverity,
        kind: LintKind,
        element_id: str | None,
        description: str,
        reference: str | None = None,
    ) -> Finding:
        return Finding.of(severity, kind, description, self.location(element_id, reference))

    def error(self, kind: LintKind, element_id: str | None, description: str, reference: str | None = None) -> Finding:
        return self.finding(LintSeverity.ERROR, kind, element_id, description, reference)

    def warn(self, kind: LintKind, element_id: str | None, description: str, reference: str | None = None) -> Finding:
        return self.finding(LintSeverity.WARN, kind, element_id, description, reference)

    def info(self, kind: LintKind, element_id: str | None, description: str, reference: str | None = None) -> Finding:
        return self.finding(LintSeverity.INFO, kind, element_id, description, reference)

    def success(self, element_id: str | None, description: str, reference: str | None = None) -> Finding:
        return Finding.success(description, self.location(element_id, reference))

    # Reflection shortcuts

    def class_exists(self, name: str) -> bool:
        return self.inspector.class_exists(name, self.project_root)

    def implements(self, name: str, capability: str) -> bool:
        return self.inspector.implements_capability(name, capability, self.project_root)

    def extends(self, name: str, ancestor: str) -> bool:
        return self.inspector.is_descendant_of(name, ancestor, self.project_root)


def check_not_blank(
    ctx: BpmnLintContext,
    value: str | None,
    element_id: str | None,
    kind: LintKind,
    severity: LintSeverity,
    failure: str,
    passed: str,
) -> list[Finding]:
    """Emit ``kind`` at ``severity`` when ``value`` is blank, else a SUCCESS."""
    if is_blank(value):
        return [ctx.finding(severity, kind, element_id, failure)]
    return [ctx.success(element_id, passed)]


def check_name(
    ctx: BpmnLintContext,
    element_id: str,
    name: str | None,
    kind: LintKind,
    label: str,
    severity: LintSeverity = LintSeverity.WARN,
) -> list[Finding]:
    return check_not_blank(
        ctx,
        name,
        element_id,
        kind,
        severity,
        f"'{element_id}' has no name",
        f"{label} has a non-empty name: '{name}'",
    )


def simple_name(class_name: str) -> str:
    return class_name.rsplit(".", 1)[-1]
