"""Per-node-type checks for process-graph files."""

from dsflint.bpmn.linters.base import BpmnLintContext, check_name, check_not_blank
from dsflint.bpmn.linters.events import check_message_name, check_timer_definition
from dsflint.bpmn.linters.field_injection import check_field_injections
from dsflint.bpmn.linters.listeners import check_execution_listeners, check_task_listeners

__all__ = [
    "BpmnLintContext",
    "check_name",
    "check_not_blank",
    "check_message_name",
    "check_timer_definition",
    "check_field_injections",
    "check_execution_listeners",
    "check_task_listeners",
]
