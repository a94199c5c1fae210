"""Process-graph linting for dsflint.

``BpmnModelLinter`` walks every process of a parsed model and dispatches each
flow node to the check module for its type. The rule list follows a simple
shape: every rule takes the process and returns findings, and a rule that
fails is reported instead of aborting the file.
"""

import logging
import re
from collections.abc import Callable
from pathlib import Path

from dsflint.bpmn.linters.base import BpmnLintContext
from dsflint.bpmn.linters.events import (
    lint_boundary_event,
    lint_end_event,
    lint_intermediate_catch_event,
    lint_intermediate_throw_event,
    lint_start_event,
)
from dsflint.bpmn.linters.gateways import lint_gateway, lint_sequence_flow
from dsflint.bpmn.linters.listeners import check_execution_listeners
from dsflint.bpmn.linters.subprocess import lint_sub_process
from dsflint.bpmn.linters.tasks import lint_receive_task, lint_send_task, lint_service_task, lint_user_task
from dsflint.bpmn.model import BpmnModel, BpmnProcess, FlowNode, parse_bpmn_file
from dsflint.bpmn.reflection import ClassInspector, NullClassInspector
from dsflint.fhir.document import is_blank
from dsflint.fhir.resolver import ResourceResolver
from dsflint.models.enums import ApiVersion, LintKind
from dsflint.models.finding import Finding, LintReport
from dsflint.terminology.cache import TerminologyCache, default_cache

logger = logging.getLogger(__name__)

PROCESS_ID_PATTERN = re.compile(r"^[a-zA-Z0-9-]+_[a-zA-Z0-9-]+$")

NodeLinter = Callable[[BpmnLintContext, FlowNode], list[Finding]]

NODE_LINTERS: dict[str, NodeLinter] = {
    "startEvent": lint_start_event,
    "endEvent": lint_end_event,
    "intermediateCatchEvent": lint_intermediate_catch_event,
    "intermediateThrowEvent": lint_intermediate_throw_event,
    "boundaryEvent": lint_boundary_event,
    "serviceTask": lint_service_task,
    "sendTask": lint_send_task,
    "userTask": lint_user_task,
    "receiveTask": lint_receive_task,
    "exclusiveGateway": lint_gateway,
    "inclusiveGateway": lint_gateway,
    "parallelGateway": lint_gateway,
    "eventBasedGateway": lint_gateway,
    "complexGateway": lint_gateway,
    "subProcess": lint_sub_process,
}


class BpmnModelLinter:
    """
    Linter for the processes of one BPMN file.

    Args:
        project_root: Root of the plugin project, used to resolve resources
        api_version: Plugin API generation the project targets
        inspector: Collaborator answering implementation-class questions
        cache: Terminology cache for code lookups
        resolver: Resource resolver; created from ``project_root`` if omitted
    """

    def __init__(
        self,
        project_root: Path,
        api_version: ApiVersion = ApiVersion.V2,
        inspector: ClassInspector | None = None,
        cache: TerminologyCache | None = None,
        resolver: ResourceResolver | None = None,
    ):
        self.project_root = project_root
        self.api_version = api_version
        self.inspector = inspector or NullClassInspector()
        self.cache = cache or default_cache()
        self.resolver = resolver or ResourceResolver(project_root)
        self._rules = [
            self._check_process_id,
            self._check_nodes,
            self._check_flows,
        ]

    def lint_file(self, path: Path) -> LintReport:
        """
        Parse and lint one ``.bpmn`` file.

        Raises:
            DocumentParseError: If the file is not well-formed BPMN
        """
        return self.lint_model(parse_bpmn_file(path))

    def lint_model(self, model: BpmnModel) -> LintReport:
        source = model.source or Path(model.file_name)
        base = BpmnLintContext(
            source=source,
            project_root=self.project_root,
            api_version=self.api_version,
            inspector=self.inspector,
            cache=self.cache,
            resolver=self.resolver,
        )
        findings: list[Finding] = []
        for process in model.processes:
            findings.extend(self.lint_process(base.for_process(process.id), process))
        logger.debug(f"{model.file_name}: {len(findings)} findings in {len(model.processes)} processes")
        return LintReport.from_findings(model.file_name, findings)

    def lint_process(self, ctx: BpmnLintContext, process: BpmnProcess) -> list[Finding]:
        findings: list[Finding] = []
        for rule in self._rules:
            try:
                findings.extend(rule(ctx, process))
            except Exception as e:
                logger.debug(f"Rule {rule.__name__} failed on {ctx.file_name}: {e}")
                findings.append(ctx.error(
                    LintKind.UNPARSABLE_BPMN_RESOURCE,
                    process.id,
                    f"Linting rule failed: {e}",
                ))
        return findings

    def _check_process_id(self, ctx: BpmnLintContext, process: BpmnProcess) -> list[Finding]:
        if is_blank(process.id):
            return [ctx.error(LintKind.BPMN_PROCESS_ID_EMPTY, None, "Process id is empty")]
        if PROCESS_ID_PATTERN.match(process.id):
            return [ctx.success(process.id, f"Process id '{process.id}' follows the pattern")]
        return [ctx.error(
            LintKind.BPMN_PROCESS_ID_PATTERN_MISMATCH,
            process.id,
            f"Process id '{process.id}' does not match {PROCESS_ID_PATTERN.pattern}",
        )]

    def _check_nodes(self, ctx: BpmnLintContext, process: BpmnProcess) -> list[Finding]:
        findings: list[Finding] = []
        for node in process.nodes:
            linter = NODE_LINTERS.get(node.node_type, check_execution_listeners)
            findings.extend(linter(ctx, node))
        return findings

    def _check_flows(self, ctx: BpmnLintContext, process: BpmnProcess) -> list[Finding]:
        findings: list[Finding] = []
        for flow in process.flows:
            findings.extend(lint_sequence_flow(ctx, flow))
        return findings
