"""Gateway and sequence-flow checks."""

from dsflint.bpmn.linters.base import BpmnLintContext, check_name
from dsflint.bpmn.linters.listeners import check_execution_listeners
from dsflint.bpmn.model import FlowNode, SequenceFlow
from dsflint.models.enums import LintKind
from dsflint.models.finding import Finding

DECISION_GATEWAYS = {
    "exclusiveGateway": LintKind.BPMN_EXCLUSIVE_GATEWAY_NAME_EMPTY,
    "inclusiveGateway": LintKind.BPMN_INCLUSIVE_GATEWAY_NAME_EMPTY,
}


def lint_gateway(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    """
    A splitting exclusive or inclusive gateway needs a name.

    Merging and floating gateways have at most one outgoing flow and are not
    checked. Other gateway types only get the execution listener checks.
    """
    findings: list[Finding] = []
    name_kind = DECISION_GATEWAYS.get(node.node_type)
    if name_kind is not None and len(node.outgoing) > 1:
        label = "Exclusive gateway" if node.node_type == "exclusiveGateway" else "Inclusive gateway"
        findings.extend(check_name(ctx, node.id, node.name, name_kind, label))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


def lint_sequence_flow(ctx: BpmnLintContext, flow: SequenceFlow) -> list[Finding]:
    source = flow.source
    if source is None:
        return [ctx.error(
            LintKind.BPMN_SEQUENCE_FLOW_NO_SOURCE,
            flow.id,
            f"Sequence flow '{flow.id}' has no resolvable source '{flow.source_ref}'",
            reference=flow.source_ref,
        )]

    if len(source.outgoing) <= 1:
        return []
    findings = check_name(ctx, flow.id, flow.name, LintKind.BPMN_SEQUENCE_FLOW_NAME_EMPTY, "Sequence flow")
    if source.node_type in DECISION_GATEWAYS:
        findings.extend(_check_gateway_branch(ctx, flow, source))
    return findings


def _check_gateway_branch(ctx: BpmnLintContext, flow: SequenceFlow, gateway: FlowNode) -> list[Finding]:
    if flow.id == gateway.default_flow_id:
        if flow.has_condition:
            return [ctx.warn(
                LintKind.BPMN_DEFAULT_FLOW_HAS_CONDITION,
                flow.id,
                f"Default flow '{flow.id}' of gateway '{gateway.id}' has a condition expression",
            )]
        return [ctx.success(flow.id, f"Default flow '{flow.id}' has no condition expression")]

    if flow.has_condition:
        return [ctx.success(flow.id, f"Sequence flow '{flow.id}' has a condition expression")]
    return [ctx.error(
        LintKind.BPMN_NON_DEFAULT_FLOW_MISSING_CONDITION,
        flow.id,
        f"Non-default flow '{flow.id}' leaving gateway '{gateway.id}' has no condition expression",
    )]
