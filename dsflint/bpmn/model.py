"""Light process-graph model read from BPMN 2.0 files.

Only the parts of the graph the linters inspect are modelled: processes,
flow nodes with their event definitions, sequence flows and the Camunda
extension attributes (implementation class, form key, field injections,
execution and task listeners).
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from dsflint.common.constants import BPMN_NS, CAMUNDA_NS
from dsflint.common.exceptions import DocumentParseError

logger = logging.getLogger(__name__)


def _bpmn(name: str) -> str:
    return f"{{{BPMN_NS}}}{name}"


def _camunda(name: str) -> str:
    return f"{{{CAMUNDA_NS}}}{name}"


def _text(element: ET.Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip()


def _truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


# Tags of flow nodes the model keeps; everything else in a process is ignored
FLOW_NODE_TYPES = frozenset({
    "startEvent",
    "endEvent",
    "intermediateCatchEvent",
    "intermediateThrowEvent",
    "boundaryEvent",
    "serviceTask",
    "sendTask",
    "receiveTask",
    "userTask",
    "scriptTask",
    "businessRuleTask",
    "manualTask",
    "task",
    "callActivity",
    "exclusiveGateway",
    "inclusiveGateway",
    "parallelGateway",
    "eventBasedGateway",
    "complexGateway",
    "subProcess",
})

EVENT_DEFINITION_TYPES = {
    "messageEventDefinition": "message",
    "signalEventDefinition": "signal",
    "timerEventDefinition": "timer",
    "errorEventDefinition": "error",
    "conditionalEventDefinition": "conditional",
    "terminateEventDefinition": "terminate",
    "escalationEventDefinition": "escalation",
    "compensateEventDefinition": "compensate",
    "linkEventDefinition": "link",
}


# ============================================================================
# Extension elements
# ============================================================================


@dataclass(frozen=True)
class FieldInjection:
    """A ``camunda:field`` attached to a node or listener."""

    name: str | None
    string_value: str | None = None
    expression: str | None = None

    @property
    def is_expression(self) -> bool:
        return self.expression is not None and self.string_value is None

    @property
    def value(self) -> str | None:
        return self.string_value if self.string_value is not None else self.expression


@dataclass(frozen=True)
class ExecutionListener:
    class_name: str | None
    event: str | None = None


@dataclass(frozen=True)
class TaskListener:
    """A ``camunda:taskListener`` with its nested parameters and fields."""

    class_name: str | None
    event: str | None = None
    fields: tuple[FieldInjection, ...] = ()
    input_parameters: dict[str, str | None] = field(default_factory=dict)

    def field_value(self, name: str) -> str | None:
        for injection in self.fields:
            if injection.name == name and injection.string_value is not None:
                return injection.string_value
        return None


# ============================================================================
# Event definitions
# ============================================================================


@dataclass(frozen=True)
class EventDefinition:
    """One event definition of an event node, with references resolved."""

    kind: str
    message_name: str | None = None
    signal_name: str | None = None
    error_name: str | None = None
    error_code: str | None = None
    error_code_variable: str | None = None
    time_date: str | None = None
    time_cycle: str | None = None
    time_duration: str | None = None
    variable_name: str | None = None
    condition: str | None = None
    class_name: str | None = None
    has_message_ref: bool = False
    has_signal_ref: bool = False
    has_error_ref: bool = False
    fields: tuple[FieldInjection, ...] = ()


# ============================================================================
# Graph
# ============================================================================


@dataclass(eq=False)
class SequenceFlow:
    id: str
    name: str | None
    source_ref: str | None
    target_ref: str | None
    condition: str | None = None
    source: "FlowNode | None" = None
    target: "FlowNode | None" = None

    @property
    def has_condition(self) -> bool:
        return self.condition is not None and bool(self.condition.strip())


@dataclass(eq=False)
class FlowNode:
    """A flow node (event, task, gateway or sub-process) of a process."""

    id: str
    node_type: str
    name: str | None = None
    parent: "FlowNode | None" = None
    event_definitions: list[EventDefinition] = field(default_factory=list)
    incoming: list[SequenceFlow] = field(default_factory=list)
    outgoing: list[SequenceFlow] = field(default_factory=list)
    default_flow_id: str | None = None
    attached_to: str | None = None
    async_before: bool = False
    async_after: bool = False
    multi_instance: bool = False
    triggered_by_event: bool = False
    class_name: str | None = None
    has_class_attribute: bool = False
    form_key: str | None = None
    message_name: str | None = None
    fields: list[FieldInjection] = field(default_factory=list)
    execution_listeners: list[ExecutionListener] = field(default_factory=list)
    task_listeners: list[TaskListener] = field(default_factory=list)

    @property
    def in_sub_process(self) -> bool:
        return self.parent is not None

    @property
    def is_floating(self) -> bool:
        """No incoming and no outgoing flow at all."""
        return not self.incoming and not self.outgoing

    def event_definition(self, kind: str) -> EventDefinition | None:
        for definition in self.event_definitions:
            if definition.kind == kind:
                return definition
        return None

    def has_event_definition(self, kind: str) -> bool:
        return self.event_definition(kind) is not None

    @property
    def implementation_class(self) -> str | None:
        """Own ``camunda:class``, else the one of a message event definition."""
        if self.class_name is not None:
            return self.class_name
        message = self.event_definition("message")
        return message.class_name if message is not None else None

    @property
    def all_fields(self) -> list[FieldInjection]:
        """Field injections of the node and its message event definition."""
        collected = list(self.fields)
        message = self.event_definition("message")
        if message is not None:
            collected.extend(message.fields)
        return collected


@dataclass
class BpmnProcess:
    id: str | None
    name: str | None = None
    nodes: list[FlowNode] = field(default_factory=list)
    flows: list[SequenceFlow] = field(default_factory=list)

    def node(self, node_id: str | None) -> FlowNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_type(self, node_type: str) -> list[FlowNode]:
        return [n for n in self.nodes if n.node_type == node_type]


@dataclass
class BpmnModel:
    source: Path | None
    processes: list[BpmnProcess] = field(default_factory=list)

    @property
    def file_name(self) -> str:
        return self.source.name if self.source else "<memory>"


# ============================================================================
# Parsing
# ============================================================================


def parse_bpmn_text(text: str | bytes, source: Path | None = None) -> BpmnModel:
    """
    Build a model from BPMN XML text.

    Raises:
        DocumentParseError: If the text is not well-formed BPMN
    """
    file_path = str(source) if source else None
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DocumentParseError(f"Malformed BPMN: {e}", file_path=file_path, document_kind="bpmn") from e
    if root.tag != _bpmn("definitions"):
        raise DocumentParseError(
            f"Not a BPMN definitions document: <{root.tag}>", file_path=file_path, document_kind="bpmn"
        )
    return _ModelBuilder(root, source).build()


def parse_bpmn_file(path: Path) -> BpmnModel:
    """
    Parse a ``.bpmn`` file into a process-graph model.

    Raises:
        DocumentParseError: If the file cannot be read or parsed
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentParseError(f"Cannot read {path}: {e}", file_path=str(path), document_kind="bpmn") from e
    logger.debug(f"Parsing BPMN file {path}")
    return parse_bpmn_text(raw, path)


class _ModelBuilder:
    def __init__(self, root: ET.Element, source: Path | None):
        self.root = root
        self.source = source
        self.messages = self._named_refs("message")
        self.signals = self._named_refs("signal")
        self.errors = {
            e.get("id"): (e.get("name"), e.get("errorCode"))
            for e in root.findall(_bpmn("error"))
        }

    def _named_refs(self, tag: str) -> dict[str | None, str | None]:
        return {e.get("id"): e.get("name") for e in self.root.findall(_bpmn(tag))}

    def build(self) -> BpmnModel:
        model = BpmnModel(source=self.source)
        for element in self.root.findall(_bpmn("process")):
            process = BpmnProcess(id=element.get("id"), name=element.get("name"))
            self._collect(element, process, parent=None)
            self._link(process)
            model.processes.append(process)
        return model

    def _collect(self, container: ET.Element, process: BpmnProcess, parent: FlowNode | None) -> None:
        for child in container:
            tag = child.tag
            if not isinstance(tag, str) or not tag.startswith(f"{{{BPMN_NS}}}"):
                continue
            local = tag.split("}", 1)[1]
            if local == "sequenceFlow":
                process.flows.append(self._flow(child))
            elif local in FLOW_NODE_TYPES or local in ("transaction", "adHocSubProcess"):
                node_type = "subProcess" if local in ("transaction", "adHocSubProcess") else local
                node = self._node(child, node_type, parent)
                process.nodes.append(node)
                if node_type == "subProcess":
                    self._collect(child, process, parent=node)

    def _flow(self, element: ET.Element) -> SequenceFlow:
        return SequenceFlow(
            id=element.get("id", ""),
            name=element.get("name"),
            source_ref=element.get("sourceRef"),
            target_ref=element.get("targetRef"),
            condition=_text(element.find(_bpmn("conditionExpression"))),
        )

    def _node(self, element: ET.Element, node_type: str, parent: FlowNode | None) -> FlowNode:
        extensions = element.find(_bpmn("extensionElements"))
        return FlowNode(
            id=element.get("id", ""),
            node_type=node_type,
            name=element.get("name"),
            parent=parent,
            event_definitions=self._event_definitions(element),
            default_flow_id=element.get("default"),
            attached_to=element.get("attachedToRef"),
            async_before=_truthy(element.get(_camunda("asyncBefore"))),
            async_after=_truthy(element.get(_camunda("asyncAfter"))),
            multi_instance=element.find(_bpmn("multiInstanceLoopCharacteristics")) is not None,
            triggered_by_event=_truthy(element.get("triggeredByEvent")),
            class_name=element.get(_camunda("class")),
            has_class_attribute=element.get(_camunda("class")) is not None,
            form_key=element.get(_camunda("formKey")),
            message_name=self.messages.get(element.get("messageRef")) if element.get("messageRef") else None,
            fields=_fields(extensions),
            execution_listeners=_execution_listeners(extensions),
            task_listeners=_task_listeners(extensions),
        )

    def _event_definitions(self, element: ET.Element) -> list[EventDefinition]:
        definitions = []
        for child in element:
            if not isinstance(child.tag, str) or not child.tag.startswith(f"{{{BPMN_NS}}}"):
                continue
            kind = EVENT_DEFINITION_TYPES.get(child.tag.split("}", 1)[1])
            if kind is None:
                continue
            definitions.append(self._event_definition(kind, child))
        return definitions

    def _event_definition(self, kind: str, element: ET.Element) -> EventDefinition:
        extensions = element.find(_bpmn("extensionElements"))
        message_ref = element.get("messageRef")
        signal_ref = element.get("signalRef")
        error_ref = element.get("errorRef")
        error_name, error_code = self.errors.get(error_ref, (None, None)) if error_ref else (None, None)
        condition = element.find(_bpmn("condition"))
        return EventDefinition(
            kind=kind,
            message_name=self.messages.get(message_ref) if message_ref else None,
            signal_name=self.signals.get(signal_ref) if signal_ref else None,
            error_name=error_name,
            error_code=error_code,
            error_code_variable=element.get(_camunda("errorCodeVariable")),
            time_date=_text(element.find(_bpmn("timeDate"))),
            time_cycle=_text(element.find(_bpmn("timeCycle"))),
            time_duration=_text(element.find(_bpmn("timeDuration"))),
            variable_name=element.get(_camunda("variableName")),
            condition=_text(condition) if condition is not None else None,
            class_name=element.get(_camunda("class")),
            has_message_ref=message_ref is not None,
            has_signal_ref=signal_ref is not None,
            has_error_ref=error_ref is not None,
            fields=tuple(_fields(extensions)),
        )

    def _link(self, process: BpmnProcess) -> None:
        by_id = {node.id: node for node in process.nodes}
        for flow in process.flows:
            flow.source = by_id.get(flow.source_ref)
            flow.target = by_id.get(flow.target_ref)
            if flow.source is not None:
                flow.source.outgoing.append(flow)
            if flow.target is not None:
                flow.target.incoming.append(flow)


def _fields(container: ET.Element | None) -> list[FieldInjection]:
    if container is None:
        return []
    return [_field(element) for element in container.findall(_camunda("field"))]


def _field(element: ET.Element) -> FieldInjection:
    string_value = element.get("stringValue")
    expression = element.get("expression")
    if string_value is None and expression is None:
        nested_string = element.find(_camunda("string"))
        nested_expression = element.find(_camunda("expression"))
        if nested_string is not None:
            string_value = nested_string.text or ""
        elif nested_expression is not None:
            expression = nested_expression.text or ""
    return FieldInjection(
        name=element.get("name"),
        string_value=string_value.strip() if string_value is not None else None,
        expression=expression.strip() if expression is not None else None,
    )


def _execution_listeners(container: ET.Element | None) -> list[ExecutionListener]:
    if container is None:
        return []
    return [
        ExecutionListener(class_name=e.get("class"), event=e.get("event"))
        for e in container.findall(_camunda("executionListener"))
    ]


def _task_listeners(container: ET.Element | None) -> list[TaskListener]:
    if container is None:
        return []
    listeners = []
    for element in container.findall(_camunda("taskListener")):
        fields = _fields(element)
        nested = element.find(_camunda("extensionElements"))
        if nested is None:
            nested = element.find(_bpmn("extensionElements"))
        fields.extend(_fields(nested))
        listeners.append(TaskListener(
            class_name=element.get("class"),
            event=element.get("event"),
            fields=tuple(fields),
            input_parameters=_input_parameters(element.find(_camunda("inputOutput"))),
        ))
    return listeners


def _input_parameters(input_output: ET.Element | None) -> dict[str, str | None]:
    """Parameter name to value; ``None`` when the parameter holds no value at all."""
    if input_output is None:
        return {}
    parameters: dict[str, str | None] = {}
    for element in input_output.findall(_camunda("inputParameter")):
        name = element.get("name")
        if name is not None:
            parameters[name] = _parameter_value(element)
    return parameters


def _parameter_value(element: ET.Element) -> str | None:
    text = _text(element)
    if text:
        return text
    for child in element:
        if child.tag == _camunda("string"):
            value = _text(child)
            if value:
                return value
        elif child.tag == _camunda("list"):
            for item in child.findall(_camunda("value")):
                value = _text(item)
                if value:
                    return value
            return ""
    return None


__all__ = [
    "BpmnModel",
    "BpmnProcess",
    "EventDefinition",
    "ExecutionListener",
    "FieldInjection",
    "FlowNode",
    "SequenceFlow",
    "TaskListener",
    "parse_bpmn_file",
    "parse_bpmn_text",
]
