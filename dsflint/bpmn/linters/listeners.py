"""Execution- and task-listener checks."""

from dsflint.bpmn.linters.base import BpmnLintContext, simple_name
from dsflint.bpmn.model import FlowNode, TaskListener
from dsflint.common.constants import (
    V1_DEFAULT_USER_TASK_LISTENER,
    V1_EXECUTION_LISTENER,
    V1_TASK_LISTENER,
    V2_DEFAULT_USER_TASK_LISTENER,
    V2_EXECUTION_LISTENER,
    V2_USER_TASK_LISTENER,
)
from dsflint.fhir.document import is_blank
from dsflint.fhir.resolver import contains_placeholder
from dsflint.models.enums import ApiVersion, LintKind, LintSeverity
from dsflint.models.finding import Finding

EXECUTION_LISTENER_INTERFACES = {
    ApiVersion.V1: V1_EXECUTION_LISTENER,
    ApiVersion.V2: V2_EXECUTION_LISTENER,
}

# (default super class, listener interface) per generation
TASK_LISTENER_TYPES = {
    ApiVersion.V1: (V1_DEFAULT_USER_TASK_LISTENER, V1_TASK_LISTENER),
    ApiVersion.V2: (V2_DEFAULT_USER_TASK_LISTENER, V2_USER_TASK_LISTENER),
}

LISTENER_INPUT_PARAMETERS = {
    "practitionerRole": LintKind.BPMN_PRACTITIONER_ROLE_HAS_NO_VALUE,
    "practitioners": LintKind.BPMN_PRACTITIONERS_HAS_NO_VALUE,
}

TASK_OUTPUT_FIELDS = ("taskOutputSystem", "taskOutputCode", "taskOutputVersion")


def check_execution_listeners(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    """Every execution listener class must exist and implement the listener interface."""
    findings: list[Finding] = []
    for listener in node.execution_listeners:
        class_name = listener.class_name
        if is_blank(class_name):
            continue
        if not ctx.class_exists(class_name):
            findings.append(ctx.error(
                LintKind.BPMN_EXECUTION_LISTENER_CLASS_NOT_FOUND,
                node.id,
                f"Execution listener class '{class_name}' not found",
            ))
            continue
        findings.append(ctx.success(node.id, f"Execution listener class '{class_name}' found"))

        interface = EXECUTION_LISTENER_INTERFACES.get(ctx.api_version)
        if interface is None:
            continue
        if ctx.implements(class_name, interface):
            findings.append(ctx.success(
                node.id, f"Execution listener '{class_name}' implements {simple_name(interface)}"
            ))
        else:
            findings.append(ctx.error(
                LintKind.BPMN_EXECUTION_LISTENER_NOT_IMPLEMENTING_REQUIRED_INTERFACE,
                node.id,
                f"Execution listener '{class_name}' does not implement {simple_name(interface)}",
            ))
    return findings


def check_task_listeners(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    """
    Validate the task listeners of a user task.

    Each listener must declare a class that exists and that either extends the
    generation's DefaultUserTaskListener or implements its listener interface.
    Under v2 the ``practitionerRole``/``practitioners`` input parameters and
    the taskOutput field injections are checked as well.
    """
    findings: list[Finding] = []
    for listener in node.task_listeners:
        class_name = listener.class_name
        if is_blank(class_name):
            findings.append(ctx.error(
                LintKind.BPMN_USER_TASK_LISTENER_MISSING_CLASS_ATTRIBUTE,
                node.id,
                "User task listener has no class attribute",
            ))
            continue
        findings.append(ctx.success(node.id, f"User task listener declares a class attribute: '{class_name}'"))

        if not ctx.class_exists(class_name):
            findings.append(ctx.error(
                LintKind.BPMN_USER_TASK_LISTENER_CLASS_NOT_FOUND,
                node.id,
                f"User task listener class '{class_name}' not found",
            ))
            continue
        findings.append(ctx.success(node.id, f"User task listener class '{class_name}' was found"))

        findings.extend(_check_listener_inheritance(ctx, node, class_name))

        if ctx.api_version == ApiVersion.V2:
            extends_default = ctx.extends(class_name, V2_DEFAULT_USER_TASK_LISTENER)
            findings.extend(_check_input_parameters(ctx, node, listener, extends_default))
            findings.extend(_check_task_output_fields(ctx, node, listener))
    return findings


def _check_listener_inheritance(ctx: BpmnLintContext, node: FlowNode, class_name: str) -> list[Finding]:
    types = TASK_LISTENER_TYPES.get(ctx.api_version)
    if types is None:
        return []
    default_class, interface = types
    if ctx.extends(class_name, default_class):
        return [ctx.success(node.id, f"User task listener '{class_name}' extends {simple_name(default_class)}")]
    if ctx.implements(class_name, interface):
        return [ctx.success(node.id, f"User task listener '{class_name}' implements {simple_name(interface)}")]
    return [ctx.error(
        LintKind.BPMN_USER_TASK_LISTENER_NOT_EXTENDING_OR_IMPLEMENTING_REQUIRED_CLASS,
        node.id,
        f"User task listener '{class_name}' does not extend '{simple_name(default_class)}' "
        f"or implement '{simple_name(interface)}'",
    )]


def _check_input_parameters(
    ctx: BpmnLintContext,
    node: FlowNode,
    listener: TaskListener,
    extends_default: bool,
) -> list[Finding]:
    severity = LintSeverity.ERROR if extends_default else LintSeverity.WARN
    findings = []
    for name, kind in LISTENER_INPUT_PARAMETERS.items():
        if name not in listener.input_parameters:
            continue
        value = listener.input_parameters[name]
        if is_blank(value):
            findings.append(ctx.finding(
                severity, kind, node.id, f"Task listener input parameter '{name}' has no value"
            ))
        else:
            findings.append(ctx.success(node.id, f"Task listener input parameter '{name}' has a non-empty value"))
    return findings


def _check_task_output_fields(ctx: BpmnLintContext, node: FlowNode, listener: TaskListener) -> list[Finding]:
    system, code, version = (listener.field_value(name) for name in TASK_OUTPUT_FIELDS)
    provided = [not is_blank(v) for v in (system, code, version)]
    if not any(provided):
        return []
    if not all(provided):
        return [ctx.error(
            LintKind.BPMN_USER_TASK_LISTENER_INCOMPLETE_TASK_OUTPUT_FIELDS,
            node.id,
            "taskOutputSystem, taskOutputCode and taskOutputVersion must be set together",
        )]

    findings = [ctx.success(node.id, "All taskOutput fields are set")]
    if ctx.cache.contains_system(system):
        findings.append(ctx.success(node.id, f"taskOutputSystem '{system}' references a known CodeSystem"))
    else:
        findings.append(ctx.error(
            LintKind.BPMN_USER_TASK_LISTENER_TASK_OUTPUT_SYSTEM_UNKNOWN,
            node.id,
            f"taskOutputSystem '{system}' references an unknown CodeSystem",
            reference=system,
        ))

    if ctx.cache.is_unknown(system, code):
        findings.append(ctx.error(
            LintKind.BPMN_USER_TASK_LISTENER_TASK_OUTPUT_CODE_UNKNOWN,
            node.id,
            f"taskOutputCode '{code}' is unknown in CodeSystem '{system}'",
            reference=system,
        ))
    else:
        findings.append(ctx.success(node.id, f"taskOutputCode '{code}' is valid in CodeSystem '{system}'"))

    if contains_placeholder(version):
        findings.append(ctx.success(node.id, f"taskOutputVersion contains a placeholder: '{version}'"))
    else:
        findings.append(ctx.warn(
            LintKind.BPMN_USER_TASK_LISTENER_TASK_OUTPUT_VERSION_NO_PLACEHOLDER,
            node.id,
            f"taskOutputVersion '{version}' does not contain a placeholder",
        ))
    return findings
