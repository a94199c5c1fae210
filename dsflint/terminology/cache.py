"""Terminology cache answering "is this vocabulary code known" queries.

The cache maps a vocabulary-system URL to the set of codes known for it. It is
pre-seeded with the built-in DSF vocabularies and extended at the start of a
run from the project's own CodeSystem resources.

Lifecycle: a run either constructs its own ``TerminologyCache`` and passes it
to every linter, or uses the long-lived module instance from
``default_cache()``; ``reset_default_cache()`` restores that instance to its
seeded state for test isolation.
"""

import logging
import os
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path

from dsflint.common.constants import BUILTIN_VOCABULARIES, CS_ORGANIZATION_ROLE
from dsflint.fhir.document import FhirDocument, is_blank, parse_fhir_file

logger = logging.getLogger(__name__)

CODE_SYSTEM_DIR_SUFFIX = ("fhir", "CodeSystem")


class TerminologyCache:
    """Concurrency-safe, merge-only mapping from vocabulary system to codes."""

    def __init__(self, seed: Mapping[str, Iterable[str]] | None = None):
        self._lock = threading.Lock()
        self._codes: dict[str, frozenset[str]] = _freeze(BUILTIN_VOCABULARIES if seed is None else seed)

    def register(self, system: str, codes: Iterable[str]) -> None:
        """Union ``codes`` into the entry for ``system``, creating it if absent."""
        incoming = _freeze_codes(codes)
        with self._lock:
            self._codes[system] = self._codes.get(system, frozenset()) | incoming

    def is_unknown(self, system: str | None, code: str | None) -> bool:
        """
        Check whether ``code`` is unknown within ``system``.

        Blank codes and systems without an entry count as known. The reserved
        organization-role system uses a heuristic when it has no entry: a
        code is known iff it starts with an uppercase letter.
        """
        if is_blank(code):
            return False
        codes = self._codes.get(system or "")
        if codes is None:
            if system == CS_ORGANIZATION_ROLE:
                return not code[0].isupper()
            return False
        return code not in codes

    def is_known(self, system: str | None, code: str | None) -> bool:
        return not self.is_unknown(system, code)

    def contains_system(self, system: str | None) -> bool:
        return system in self._codes

    def systems_containing(self, code: str) -> list[str]:
        """Systems whose registered codes include ``code``."""
        snapshot = dict(self._codes)
        return sorted(system for system, codes in snapshot.items() if code in codes)

    def get_codes(self, system: str) -> frozenset[str]:
        return self._codes.get(system, frozenset())

    def systems(self) -> list[str]:
        return sorted(self._codes)

    def clear_all(self, reseed: bool = False) -> None:
        """Drop every entry; optionally restore the built-in vocabularies in the same swap."""
        replacement = _freeze(BUILTIN_VOCABULARIES) if reseed else {}
        with self._lock:
            self._codes = replacement

    def seed_from_project_folder(self, root: Path) -> int:
        """
        Register every CodeSystem found under ``fhir/CodeSystem`` folders.

        Both the nested ``src/main/resources/fhir/CodeSystem`` layout and a flat
        ``fhir/CodeSystem`` layout are found. Unreadable or malformed files are
        skipped; seeding never fails the run.

        Returns:
            Number of CodeSystem resources registered
        """
        registered = 0
        for directory in find_code_system_dirs(root):
            for path in sorted(directory.rglob("*")):
                if not path.is_file() or path.suffix.lower() not in (".xml", ".json"):
                    continue
                try:
                    document = parse_fhir_file(path)
                except Exception as e:
                    logger.debug(f"Skipping vocabulary file {path}: {e}")
                    continue
                if document.resource_type != "CodeSystem":
                    continue
                system = document.url
                if is_blank(system):
                    continue
                self.register(system, collect_concept_codes(document))
                registered += 1
        logger.info(f"Seeded {registered} vocabularies from {root}")
        return registered


def _freeze_codes(codes: Iterable[str]) -> frozenset[str]:
    return frozenset(c for c in codes if c is not None)


def _freeze(vocabularies: Mapping[str, Iterable[str]]) -> dict[str, frozenset[str]]:
    return {system: _freeze_codes(codes) for system, codes in vocabularies.items()}


def find_code_system_dirs(root: Path) -> list[Path]:
    """Directories below ``root`` whose path ends in ``fhir/CodeSystem``."""
    found: list[Path] = []
    if not root.is_dir():
        return found
    for current, dirnames, _ in os.walk(root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        path = Path(current)
        if path.parts[-2:] == CODE_SYSTEM_DIR_SUFFIX:
            found.append(path)
    return sorted(found)


def collect_concept_codes(document: FhirDocument) -> set[str]:
    """Every ``concept.code`` value, including nested child concepts."""
    codes: set[str] = set()
    for concept in document.iter("concept"):
        code = document.value("code", concept)
        if not is_blank(code):
            codes.add(code)
    return codes


_default_cache = TerminologyCache()


def default_cache() -> TerminologyCache:
    """Long-lived process-wide cache instance."""
    return _default_cache


def reset_default_cache() -> TerminologyCache:
    """Restore the process-wide cache to its built-in vocabularies."""
    _default_cache.clear_all(reseed=True)
    return _default_cache
