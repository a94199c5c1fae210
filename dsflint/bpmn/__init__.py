"""Process-graph (BPMN) parsing, class inspection and linting."""

from dsflint.bpmn.linter import BpmnModelLinter
from dsflint.bpmn.model import BpmnModel, BpmnProcess, FlowNode, SequenceFlow, parse_bpmn_file, parse_bpmn_text
from dsflint.bpmn.reflection import (
    ClassInspector,
    NullClassInspector,
    SafeClassInspector,
    SourceTreeClassInspector,
    StaticClassInspector,
)

__all__ = [
    "BpmnModelLinter",
    "BpmnModel",
    "BpmnProcess",
    "FlowNode",
    "SequenceFlow",
    "parse_bpmn_file",
    "parse_bpmn_text",
    "ClassInspector",
    "NullClassInspector",
    "SafeClassInspector",
    "SourceTreeClassInspector",
    "StaticClassInspector",
]
