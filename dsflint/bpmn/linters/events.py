"""Start, end, intermediate and boundary event checks."""

from dsflint.bpmn.linters.base import BpmnLintContext, check_name, check_not_blank, simple_name
from dsflint.bpmn.linters.field_injection import check_field_injections
from dsflint.bpmn.linters.listeners import check_execution_listeners
from dsflint.bpmn.model import EventDefinition, FlowNode
from dsflint.common.constants import V1_JAVA_DELEGATE, V2_MESSAGE_END_EVENT, V2_MESSAGE_INTERMEDIATE_THROW
from dsflint.fhir.document import is_blank
from dsflint.fhir.resolver import contains_placeholder
from dsflint.models.enums import ApiVersion, LintKind, LintSeverity
from dsflint.models.finding import Finding

# ============================================================================
# Shared checks
# ============================================================================


def check_message_name(ctx: BpmnLintContext, element_id: str, message_name: str) -> list[Finding]:
    """
    Resolve a message name against ActivityDefinitions and StructureDefinitions.

    Only the v2 generation correlates message names with resources; for other
    generations nothing is reported.
    """
    if ctx.api_version != ApiVersion.V2:
        return []
    findings = []
    if ctx.resolver.activity_definition_exists(message_name):
        findings.append(ctx.success(element_id, f"ActivityDefinition found for messageName: '{message_name}'"))
    else:
        findings.append(ctx.error(
            LintKind.BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE,
            element_id,
            f"No ActivityDefinition found for messageName: {message_name}",
            reference=message_name,
        ))
    if ctx.resolver.structure_definition_exists(message_name):
        findings.append(ctx.success(element_id, f"StructureDefinition found for messageName: '{message_name}'"))
    else:
        findings.append(ctx.error(
            LintKind.BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE,
            element_id,
            f"StructureDefinition [{message_name}] not found",
            reference=message_name,
        ))
    return findings


def _check_message_definition(
    ctx: BpmnLintContext,
    node: FlowNode,
    empty_kind: LintKind,
) -> list[Finding]:
    definition = node.event_definition("message")
    message_name = definition.message_name if definition is not None else None
    if is_blank(message_name):
        return [ctx.error(empty_kind, node.id, f"'{node.id}' has no message name")]
    findings = [ctx.success(node.id, f"Message name is not empty: '{message_name}'")]
    findings.extend(check_message_name(ctx, node.id, message_name))
    return findings


def check_timer_definition(ctx: BpmnLintContext, element_id: str, timer: EventDefinition) -> list[Finding]:
    """A timer needs exactly one of timeDate, timeCycle or timeDuration."""
    values = {
        "timeDate": timer.time_date,
        "timeCycle": timer.time_cycle,
        "timeDuration": timer.time_duration,
    }
    provided = {k: v for k, v in values.items() if not is_blank(v)}
    if not provided:
        return [ctx.error(
            LintKind.BPMN_TIMER_TYPE_EMPTY,
            element_id,
            "Timer type is empty (no timeDate, timeCycle, or timeDuration)",
        )]

    findings = []
    if len(provided) > 1:
        findings.append(ctx.error(
            LintKind.BPMN_TIMER_TYPE_AMBIGUOUS,
            element_id,
            f"Timer declares more than one of {', '.join(provided)}",
        ))
    else:
        findings.append(ctx.success(element_id, "Timer type is provided"))

    if "timeDate" in provided:
        findings.append(ctx.info(
            LintKind.BPMN_TIMER_FIXED_DATE,
            element_id,
            "Timer type is a fixed date/time (timeDate), please verify if this is intended",
        ))
        findings.append(ctx.success(element_id, f"Fixed date/time (timeDate) provided: '{provided['timeDate']}'"))
        return findings

    value = provided.get("timeCycle") or provided.get("timeDuration")
    if contains_placeholder(value):
        findings.append(ctx.success(element_id, f"Timer value contains a placeholder: '{value}'"))
    else:
        findings.append(ctx.warn(
            LintKind.BPMN_TIMER_VALUE_NO_PLACEHOLDER,
            element_id,
            f"Timer value '{value}' appears fixed (no placeholder found)",
        ))
    return findings


def _check_signal(
    ctx: BpmnLintContext,
    node: FlowNode,
    name_kind: LintKind,
    signal_kind: LintKind,
    label: str,
) -> list[Finding]:
    findings = check_name(ctx, node.id, node.name, name_kind, label)
    definition = node.event_definition("signal")
    signal_name = definition.signal_name if definition is not None else None
    findings.extend(check_not_blank(
        ctx,
        signal_name,
        node.id,
        signal_kind,
        LintSeverity.ERROR,
        f"Signal is empty in {label}",
        f"Signal is present with name: '{signal_name}'",
    ))
    return findings


def check_message_event_implementation(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    """Implementation class of a message end or intermediate throw event."""
    class_name = node.implementation_class
    if is_blank(class_name):
        return [ctx.error(
            LintKind.BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_EMPTY,
            node.id,
            f"'{node.id}' has no implementation class",
        )]
    if not ctx.class_exists(class_name):
        return [ctx.error(
            LintKind.BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_FOUND,
            node.id,
            f"Implementation class not found: {class_name}",
            reference=class_name,
        )]

    if ctx.api_version == ApiVersion.V1:
        if ctx.implements(class_name, V1_JAVA_DELEGATE):
            return [ctx.success(node.id, f"Implementation class '{class_name}' implements JavaDelegate")]
        return [ctx.error(
            LintKind.BPMN_MESSAGE_SEND_EVENT_NOT_IMPLEMENTING_JAVA_DELEGATE,
            node.id,
            f"Implementation class does not implement JavaDelegate: {class_name}",
            reference=class_name,
        )]
    if ctx.api_version == ApiVersion.V2:
        interface = V2_MESSAGE_END_EVENT if node.node_type == "endEvent" else V2_MESSAGE_INTERMEDIATE_THROW
        if ctx.implements(class_name, interface):
            return [ctx.success(node.id, f"Implementation class '{class_name}' implements {simple_name(interface)}")]
        return [ctx.error(
            LintKind.BPMN_END_OR_THROW_EVENT_NO_INTERFACE_CLASS_IMPLEMENTING,
            node.id,
            f"Implementation class '{class_name}' does not implement {simple_name(interface)}",
            reference=class_name,
        )]
    return [ctx.success(node.id, f"Implementation class '{class_name}' found")]


# ============================================================================
# Start events
# ============================================================================


def lint_start_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings: list[Finding] = []
    if node.has_event_definition("message"):
        findings.extend(check_name(ctx, node.id, node.name, LintKind.BPMN_EVENT_NAME_EMPTY, "Start event"))
        findings.extend(_check_message_definition(ctx, node, LintKind.BPMN_MESSAGE_START_EVENT_MESSAGE_NAME_EMPTY))
        if node.all_fields:
            findings.extend(check_field_injections(ctx, node.id, node.all_fields))
    else:
        if not node.in_sub_process:
            findings.extend(check_name(
                ctx, node.id, node.name, LintKind.BPMN_START_EVENT_NOT_PART_OF_SUB_PROCESS, "Start event"
            ))
        timer = node.event_definition("timer")
        if timer is not None:
            findings.extend(check_timer_definition(ctx, node.id, timer))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


# ============================================================================
# End events
# ============================================================================


def lint_end_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings: list[Finding] = []
    if node.has_event_definition("message"):
        findings.extend(check_name(ctx, node.id, node.name, LintKind.BPMN_EVENT_NAME_EMPTY, "Message end event"))
        findings.extend(check_message_event_implementation(ctx, node))
        if node.all_fields:
            findings.extend(check_field_injections(ctx, node.id, node.all_fields))
    elif node.has_event_definition("signal"):
        findings.extend(_check_signal(
            ctx,
            node,
            LintKind.BPMN_SIGNAL_END_EVENT_NAME_EMPTY,
            LintKind.BPMN_SIGNAL_END_EVENT_SIGNAL_EMPTY,
            "Signal end event",
        ))
    elif node.in_sub_process:
        if node.async_after:
            findings.append(ctx.success(node.id, "End event inside a sub-process has asyncAfter=true"))
        else:
            findings.append(ctx.warn(
                LintKind.BPMN_END_EVENT_INSIDE_SUB_PROCESS_SHOULD_HAVE_ASYNC_AFTER_TRUE,
                node.id,
                f"End event '{node.id}' inside a sub-process should have asyncAfter=true",
            ))
    else:
        findings.extend(check_name(
            ctx, node.id, node.name, LintKind.BPMN_END_EVENT_NOT_PART_OF_SUB_PROCESS, "End event"
        ))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


# ============================================================================
# Intermediate events
# ============================================================================


def lint_intermediate_catch_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings: list[Finding] = []
    if node.has_event_definition("message"):
        findings.extend(check_name(
            ctx,
            node.id,
            node.name,
            LintKind.BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY,
            "Message intermediate catch event",
        ))
        findings.extend(_check_message_definition(
            ctx, node, LintKind.BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_MESSAGE_NAME_EMPTY
        ))
    elif node.has_event_definition("timer"):
        findings.extend(check_name(
            ctx,
            node.id,
            node.name,
            LintKind.BPMN_TIMER_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY,
            "Timer intermediate catch event",
        ))
        findings.extend(check_timer_definition(ctx, node.id, node.event_definition("timer")))
    elif node.has_event_definition("signal"):
        findings.extend(_check_signal(
            ctx,
            node,
            LintKind.BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY,
            LintKind.BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_SIGNAL_EMPTY,
            "Signal intermediate catch event",
        ))
    elif node.has_event_definition("conditional"):
        findings.extend(check_conditional_event(ctx, node))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


def check_conditional_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    definition = node.event_definition("conditional")
    findings = check_name(
        ctx, node.id, node.name, LintKind.BPMN_CONDITIONAL_EVENT_NAME_EMPTY, "Conditional event"
    )
    findings.extend(check_not_blank(
        ctx,
        definition.variable_name,
        node.id,
        LintKind.BPMN_CONDITIONAL_EVENT_VARIABLE_NAME_EMPTY,
        LintSeverity.ERROR,
        "Conditional event variable name is empty",
        f"Conditional event variable name is provided: '{definition.variable_name}'",
    ))
    findings.extend(check_not_blank(
        ctx,
        definition.condition,
        node.id,
        LintKind.BPMN_CONDITIONAL_EVENT_CONDITION_EMPTY,
        LintSeverity.ERROR,
        "Conditional event has no condition expression",
        f"Conditional event condition is provided: '{definition.condition}'",
    ))
    return findings


def lint_intermediate_throw_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings: list[Finding] = []
    if node.has_event_definition("message"):
        findings.extend(check_name(
            ctx, node.id, node.name, LintKind.BPMN_EVENT_NAME_EMPTY, "Message intermediate throw event"
        ))
        findings.extend(check_message_event_implementation(ctx, node))
        if node.all_fields:
            findings.extend(check_field_injections(ctx, node.id, node.all_fields))
        definition = node.event_definition("message")
        if definition.has_message_ref:
            findings.append(ctx.warn(
                LintKind.BPMN_MESSAGE_INTERMEDIATE_THROW_EVENT_HAS_MESSAGE,
                node.id,
                f"Message intermediate throw event references a message: {definition.message_name}",
            ))
        else:
            findings.append(ctx.success(node.id, "Message intermediate throw event references no message"))
    elif node.has_event_definition("signal"):
        findings.extend(_check_signal(
            ctx,
            node,
            LintKind.BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_NAME_EMPTY,
            LintKind.BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_SIGNAL_EMPTY,
            "Signal intermediate throw event",
        ))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


# ============================================================================
# Boundary events
# ============================================================================


def lint_boundary_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings: list[Finding] = []
    if node.has_event_definition("message"):
        findings.extend(check_name(
            ctx, node.id, node.name, LintKind.BPMN_MESSAGE_BOUNDARY_EVENT_NAME_EMPTY, "Message boundary event"
        ))
        findings.extend(_check_message_definition(
            ctx, node, LintKind.BPMN_MESSAGE_BOUNDARY_EVENT_MESSAGE_NAME_EMPTY
        ))
    elif node.has_event_definition("error"):
        findings.extend(check_error_boundary_event(ctx, node))
    elif node.has_event_definition("timer"):
        findings.extend(check_timer_definition(ctx, node.id, node.event_definition("timer")))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


def check_error_boundary_event(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    """Name, referenced error name/code and the errorCodeVariable attribute."""
    definition = node.event_definition("error")
    findings = check_name(
        ctx, node.id, node.name, LintKind.BPMN_ERROR_BOUNDARY_EVENT_NAME_EMPTY, "Error boundary event"
    )
    if definition.has_error_ref:
        findings.extend(check_not_blank(
            ctx,
            definition.error_name,
            node.id,
            LintKind.BPMN_ERROR_BOUNDARY_EVENT_ERROR_NAME_EMPTY,
            LintSeverity.WARN,
            "Error boundary event references an error without name",
            f"Error name is provided: '{definition.error_name}'",
        ))
        findings.extend(check_not_blank(
            ctx,
            definition.error_code,
            node.id,
            LintKind.BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_EMPTY,
            LintSeverity.ERROR,
            "Error boundary event references an error without error code",
            f"Error code is provided: '{definition.error_code}'",
        ))
    findings.extend(check_not_blank(
        ctx,
        definition.error_code_variable,
        node.id,
        LintKind.BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_VARIABLE_EMPTY,
        LintSeverity.WARN,
        "Error boundary event has no errorCodeVariable",
        f"errorCodeVariable is provided: '{definition.error_code_variable}'",
    ))
    return findings
