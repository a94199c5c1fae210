"""Implementation-class inspection for process nodes.

The linters only ever ask three questions about a class named in a process
file: does it exist, does it implement a capability interface, and does it
descend from a given class. ``ClassInspector`` captures that contract; the
implementations below answer it from a declared table, from the project's
Java sources, or not at all.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from dsflint.common.constants import (
    BUILD_OUTPUT_DIRS,
    V1_ABSTRACT_SERVICE_DELEGATE,
    V1_ABSTRACT_TASK_MESSAGE_SEND,
    V1_DEFAULT_USER_TASK_LISTENER,
    V1_JAVA_DELEGATE,
    V1_TASK_LISTENER,
    V2_DEFAULT_USER_TASK_LISTENER,
    V2_USER_TASK_LISTENER,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class ClassInspector(Protocol):
    """Three boolean queries about implementation classes of a project."""

    def class_exists(self, name: str, root: Path) -> bool:
        ...

    def implements_capability(self, name: str, capability: str, root: Path) -> bool:
        ...

    def is_descendant_of(self, name: str, ancestor: str, root: Path) -> bool:
        ...


class NullClassInspector:
    """Inspector that knows no classes."""

    def class_exists(self, name: str, root: Path) -> bool:
        return False

    def implements_capability(self, name: str, capability: str, root: Path) -> bool:
        return False

    def is_descendant_of(self, name: str, ancestor: str, root: Path) -> bool:
        return False


@dataclass
class ClassInfo:
    """Declared supertypes of one class."""

    name: str
    superclass: str | None = None
    interfaces: frozenset[str] = frozenset()


@dataclass
class StaticClassInspector:
    """
    Inspector backed by a declared class table.

    Example:
        >>> inspector = StaticClassInspector().declare(
        ...     "org.example.Task", interfaces=["dev.dsf.bpe.v2.activity.ServiceTask"]
        ... )
        >>> inspector.class_exists("org.example.Task", Path("."))
        True
    """

    classes: dict[str, ClassInfo] = field(default_factory=dict)

    @classmethod
    def of(cls, classes: Mapping[str, ClassInfo] | Iterable[ClassInfo]) -> "StaticClassInspector":
        if isinstance(classes, Mapping):
            return cls(dict(classes))
        return cls({info.name: info for info in classes})

    def declare(
        self,
        name: str,
        superclass: str | None = None,
        interfaces: Iterable[str] = (),
    ) -> "StaticClassInspector":
        self.classes[name] = ClassInfo(name, superclass, frozenset(interfaces))
        return self

    def class_exists(self, name: str, root: Path) -> bool:
        return name in self.classes

    def implements_capability(self, name: str, capability: str, root: Path) -> bool:
        return capability in _all_supertypes(name, self.classes)

    def is_descendant_of(self, name: str, ancestor: str, root: Path) -> bool:
        return ancestor in _superclass_chain(name, self.classes)


def _superclass_chain(name: str, classes: Mapping[str, ClassInfo]) -> list[str]:
    chain: list[str] = []
    current = classes.get(name)
    while current is not None and current.superclass and current.superclass not in chain:
        chain.append(current.superclass)
        current = classes.get(current.superclass)
    return chain


def _all_supertypes(name: str, classes: Mapping[str, ClassInfo]) -> set[str]:
    """Transitive closure over superclasses and interfaces."""
    seen: set[str] = set()
    pending = [name]
    while pending:
        info = classes.get(pending.pop())
        if info is None:
            continue
        for parent in ([info.superclass] if info.superclass else []) + sorted(info.interfaces):
            if parent not in seen:
                seen.add(parent)
                pending.append(parent)
    return seen


# ============================================================================
# Source tree inspection
# ============================================================================

_PACKAGE_RE = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)
_IMPORT_RE = re.compile(r"^\s*import\s+(?!static)([\w.]+)\s*;", re.MULTILINE)
_COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_GENERICS_RE = re.compile(r"<[^<>]*>")
_DECLARATION_RE = re.compile(
    r"\b(?:class|interface|enum|record)\s+(?P<name>\w+)(?:\s*\([^)]*\))?"
    r"(?:\s+extends\s+(?P<extends>[\w.,\s]+?))?"
    r"(?:\s+implements\s+(?P<implements>[\w.,\s]+?))?\s*\{",
)

JAVA_SOURCE_DIRS = ("src/main/java",)

# Supertypes of the DSF API base classes, which never appear in project sources
FRAMEWORK_CLASSES: dict[str, ClassInfo] = {
    info.name: info
    for info in (
        ClassInfo(V1_ABSTRACT_SERVICE_DELEGATE, None, frozenset({V1_JAVA_DELEGATE})),
        ClassInfo(V1_ABSTRACT_TASK_MESSAGE_SEND, None, frozenset({V1_JAVA_DELEGATE})),
        ClassInfo(V1_DEFAULT_USER_TASK_LISTENER, None, frozenset({V1_TASK_LISTENER})),
        ClassInfo(V2_DEFAULT_USER_TASK_LISTENER, None, frozenset({V2_USER_TASK_LISTENER})),
    )
}


class SourceTreeClassInspector:
    """
    Heuristic inspector reading a project's Java sources and build output.

    Supertypes are taken from ``extends``/``implements`` clauses and resolved
    through imports and the declaring package. A supertype that cannot be
    resolved to a project source still counts as declared under its resolved
    or simple name, so framework interfaces named in a clause are found.
    """

    def __init__(self) -> None:
        self._tables: dict[Path, dict[str, ClassInfo]] = {}
        self._compiled: dict[Path, set[str]] = {}

    def class_exists(self, name: str, root: Path) -> bool:
        return name in self._table(root) or name in self._compiled_classes(root)

    def implements_capability(self, name: str, capability: str, root: Path) -> bool:
        supertypes = _all_supertypes(name, self._table(root))
        return capability in supertypes or _simple(capability) in supertypes

    def is_descendant_of(self, name: str, ancestor: str, root: Path) -> bool:
        chain = _superclass_chain(name, self._table(root))
        return ancestor in chain or _simple(ancestor) in chain

    def _table(self, root: Path) -> dict[str, ClassInfo]:
        key = root.resolve()
        if key not in self._tables:
            self._tables[key] = _scan_sources(key)
        return self._tables[key]

    def _compiled_classes(self, root: Path) -> set[str]:
        key = root.resolve()
        if key not in self._compiled:
            self._compiled[key] = _scan_compiled(key)
        return self._compiled[key]


def _simple(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def _scan_sources(root: Path) -> dict[str, ClassInfo]:
    table: dict[str, ClassInfo] = dict(FRAMEWORK_CLASSES)
    for source_dir in JAVA_SOURCE_DIRS:
        directory = root / source_dir
        if not directory.is_dir():
            continue
        for path in sorted(directory.rglob("*.java")):
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.debug(f"Cannot read {path}: {e}")
                continue
            for info in parse_java_source(text):
                table[info.name] = info
    logger.debug(f"Indexed {len(table)} Java types under {root}")
    return table


def _scan_compiled(root: Path) -> set[str]:
    names: set[str] = set()
    for output_dir in BUILD_OUTPUT_DIRS:
        directory = root / output_dir
        if not directory.is_dir():
            continue
        for path in directory.rglob("*.class"):
            relative = path.relative_to(directory).with_suffix("")
            names.add(".".join(relative.parts).replace("$", "."))
    return names


def parse_java_source(text: str) -> list[ClassInfo]:
    """Top-level and nested type declarations of one Java compilation unit."""
    code = _COMMENT_RE.sub(" ", text)
    package_match = _PACKAGE_RE.search(code)
    package = package_match.group(1) if package_match else ""
    imports = {_simple(i): i for i in _IMPORT_RE.findall(code)}

    def resolve(type_name: str) -> str:
        type_name = type_name.strip()
        if "." in type_name:
            return type_name
        if type_name in imports:
            return imports[type_name]
        return f"{package}.{type_name}" if package else type_name

    code = _strip_generics(code)
    infos = []
    for match in _DECLARATION_RE.finditer(code):
        name = match.group("name")
        qualified = f"{package}.{name}" if package else name
        extends = [t for t in (match.group("extends") or "").split(",") if t.strip()]
        implements = [t for t in (match.group("implements") or "").split(",") if t.strip()]
        is_interface = re.search(rf"\binterface\s+{name}\b", match.group(0)) is not None
        if is_interface:
            infos.append(ClassInfo(qualified, None, frozenset(resolve(t) for t in extends)))
            continue
        superclass = resolve(extends[0]) if extends else None
        infos.append(ClassInfo(qualified, superclass, frozenset(resolve(t) for t in implements)))
    return infos


def _strip_generics(code: str) -> str:
    previous = None
    while previous != code:
        previous = code
        code = _GENERICS_RE.sub("", code)
    return code


class SafeClassInspector:
    """Wrapper that turns any inspector failure into a negative answer."""

    def __init__(self, delegate: ClassInspector):
        self.delegate = delegate

    def class_exists(self, name: str, root: Path) -> bool:
        return self._ask("class_exists", name, root)

    def implements_capability(self, name: str, capability: str, root: Path) -> bool:
        return self._ask("implements_capability", name, capability, root)

    def is_descendant_of(self, name: str, ancestor: str, root: Path) -> bool:
        return self._ask("is_descendant_of", name, ancestor, root)

    def _ask(self, query: str, *args) -> bool:
        try:
            return bool(getattr(self.delegate, query)(*args))
        except Exception as e:
            logger.debug(f"Class inspection {query}{args[:-1]} failed: {e}")
            return False
