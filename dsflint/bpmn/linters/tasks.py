"""Service, send, user and receive task checks."""

from dsflint.bpmn.linters.base import BpmnLintContext, check_name, check_not_blank, simple_name
from dsflint.bpmn.linters.events import check_message_name
from dsflint.bpmn.linters.field_injection import check_field_injections
from dsflint.bpmn.linters.listeners import check_execution_listeners, check_task_listeners
from dsflint.bpmn.model import FlowNode
from dsflint.common.constants import (
    V1_ABSTRACT_SERVICE_DELEGATE,
    V1_ABSTRACT_TASK_MESSAGE_SEND,
    V1_JAVA_DELEGATE,
    V2_MESSAGE_SEND_TASK,
    V2_SERVICE_TASK,
)
from dsflint.fhir.document import is_blank
from dsflint.models.enums import ApiVersion, LintKind, LintSeverity
from dsflint.models.finding import Finding

EXTERNAL_FORM_KEY_PREFIXES = ("external:", "http://", "https://")


def _check_generation_types(
    ctx: BpmnLintContext,
    node: FlowNode,
    class_name: str,
    v1_ancestor: tuple[str, LintKind],
    v1_delegate_kind: LintKind,
    v2_capability: tuple[str, LintKind],
) -> list[Finding]:
    findings: list[Finding] = []
    if ctx.api_version == ApiVersion.V1:
        ancestor, ancestor_kind = v1_ancestor
        if ctx.extends(class_name, ancestor):
            findings.append(ctx.success(node.id, f"'{class_name}' extends {simple_name(ancestor)}"))
        else:
            findings.append(ctx.warn(
                ancestor_kind,
                node.id,
                f"'{class_name}' does not extend {simple_name(ancestor)}",
                reference=class_name,
            ))
        if ctx.implements(class_name, V1_JAVA_DELEGATE):
            findings.append(ctx.success(node.id, f"'{class_name}' implements JavaDelegate"))
        else:
            findings.append(ctx.error(
                v1_delegate_kind,
                node.id,
                f"'{class_name}' does not implement JavaDelegate",
                reference=class_name,
            ))
    elif ctx.api_version == ApiVersion.V2:
        capability, capability_kind = v2_capability
        if ctx.implements(class_name, capability):
            findings.append(ctx.success(node.id, f"'{class_name}' implements {simple_name(capability)}"))
        else:
            findings.append(ctx.error(
                capability_kind,
                node.id,
                f"'{class_name}' does not implement {simple_name(capability)}",
                reference=class_name,
            ))
    return findings


# ============================================================================
# Service tasks
# ============================================================================


def lint_service_task(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings = check_name(
        ctx, node.id, node.name, LintKind.BPMN_SERVICE_TASK_NAME_EMPTY, "Service task", LintSeverity.ERROR
    )
    findings.extend(_check_service_task_class(ctx, node))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


def _check_service_task_class(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    if not node.has_class_attribute:
        return [ctx.error(
            LintKind.BPMN_SERVICE_TASK_IMPLEMENTATION_NOT_EXIST,
            node.id,
            "Service task has no implementation class attribute",
        )]
    class_name = node.class_name
    if is_blank(class_name):
        return [ctx.error(
            LintKind.BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_EMPTY,
            node.id,
            "Service task implementation class is empty",
        )]
    if not ctx.class_exists(class_name):
        return [ctx.error(
            LintKind.BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_NOT_FOUND,
            node.id,
            f"Service task implementation class not found: {class_name}",
            reference=class_name,
        )]
    findings = [ctx.success(node.id, f"Implementation class '{class_name}' found")]
    findings.extend(_check_generation_types(
        ctx,
        node,
        class_name,
        (V1_ABSTRACT_SERVICE_DELEGATE, LintKind.BPMN_SERVICE_TASK_NOT_EXTENDING_ABSTRACT_SERVICE_DELEGATE),
        LintKind.BPMN_SERVICE_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE,
        (V2_SERVICE_TASK, LintKind.BPMN_SERVICE_TASK_NO_INTERFACE_CLASS_IMPLEMENTING),
    ))
    return findings


# ============================================================================
# Send tasks
# ============================================================================


def lint_send_task(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings = check_name(ctx, node.id, node.name, LintKind.BPMN_EVENT_NAME_EMPTY, "Send task")
    findings.extend(_check_send_task_class(ctx, node))
    findings.extend(check_field_injections(ctx, node.id, node.all_fields))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


def _check_send_task_class(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    class_name = node.implementation_class
    if is_blank(class_name):
        return [ctx.error(
            LintKind.BPMN_SEND_TASK_IMPLEMENTATION_CLASS_EMPTY,
            node.id,
            "Send task implementation class is empty",
        )]
    if not ctx.class_exists(class_name):
        return [ctx.error(
            LintKind.BPMN_SEND_TASK_IMPLEMENTATION_CLASS_NOT_FOUND,
            node.id,
            f"Send task implementation class not found: {class_name}",
            reference=class_name,
        )]
    findings = [ctx.success(node.id, f"Implementation class '{class_name}' found")]
    findings.extend(_check_generation_types(
        ctx,
        node,
        class_name,
        (V1_ABSTRACT_TASK_MESSAGE_SEND, LintKind.BPMN_SEND_TASK_NOT_EXTENDING_ABSTRACT_TASK_MESSAGE_SEND),
        LintKind.BPMN_SEND_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE,
        (V2_MESSAGE_SEND_TASK, LintKind.BPMN_SEND_TASK_NO_INTERFACE_CLASS_IMPLEMENTING),
    ))
    return findings


# ============================================================================
# User tasks
# ============================================================================


def lint_user_task(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings = check_name(
        ctx, node.id, node.name, LintKind.BPMN_USER_TASK_NAME_EMPTY, "User task", LintSeverity.ERROR
    )
    findings.extend(check_form_key(ctx, node))
    findings.extend(check_task_listeners(ctx, node))
    findings.extend(check_execution_listeners(ctx, node))
    return findings


def check_form_key(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    """The form key must be external and name a Questionnaire of the project."""
    form_key = node.form_key
    if is_blank(form_key):
        return [ctx.error(LintKind.BPMN_USER_TASK_FORM_KEY_EMPTY, node.id, "User task has no formKey")]
    form_key = form_key.strip()
    findings = [ctx.success(node.id, f"User task formKey is present: '{form_key}'")]

    if not form_key.startswith(EXTERNAL_FORM_KEY_PREFIXES):
        findings.append(ctx.error(
            LintKind.BPMN_USER_TASK_FORM_KEY_NOT_EXTERNAL,
            node.id,
            f"formKey must start with 'external:', 'http://' or 'https://': {form_key}",
            reference=form_key,
        ))
        return findings
    findings.append(ctx.success(node.id, "formKey is external"))

    if ctx.resolver.questionnaire_exists(form_key):
        findings.append(ctx.success(node.id, f"Questionnaire found for formKey: '{form_key}'", reference=form_key))
    else:
        findings.append(ctx.error(
            LintKind.BPMN_USER_TASK_QUESTIONNAIRE_NOT_FOUND,
            node.id,
            f"Questionnaire for formKey [{form_key}] not found",
            reference=form_key,
        ))
    return findings


# ============================================================================
# Receive tasks
# ============================================================================


def lint_receive_task(ctx: BpmnLintContext, node: FlowNode) -> list[Finding]:
    findings = check_name(ctx, node.id, node.name, LintKind.BPMN_EVENT_NAME_EMPTY, "Receive task")
    message_name = node.message_name
    findings.extend(check_not_blank(
        ctx,
        message_name,
        node.id,
        LintKind.BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_MESSAGE_NAME_EMPTY,
        LintSeverity.ERROR,
        "Receive task has no message name",
        f"Message name is not empty: '{message_name}'",
    ))
    if not is_blank(message_name):
        findings.extend(check_message_name(ctx, node.id, message_name))
    findings.extend(check_execution_listeners(ctx, node))
    return findings
