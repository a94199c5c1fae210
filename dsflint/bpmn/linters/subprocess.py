"""Sub-process checks."""

from dsflint.bpmn.linters.base import BpmnLintContext
from dsflint.bpmn.linters.listeners import check_execution_listeners
from dsflint.bpmn.model import FlowNode
from dsflint.models.enums import LintKind
from dsflint.models.finding import Finding


def lint_sub_process(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings: list[Finding] = []
    if node.multi_instance:
        if node.async_before:
            findings.append(ctx.success(node.id, "Multi-instance sub-process has asyncBefore=true"))
        else:
            findings.append(ctx.warn(
                LintKind.BPMN_SUB_PROCESS_MULTI_INSTANCE_NOT_ASYNC_BEFORE,
                node.id,
                f"Multi-instance sub-process '{node.id}' should have asyncBefore=true",
            ))
    findings.extend(check_execution_listeners(ctx, node))
    return findings
