"""Project layout discovery for DSF process plugins.

Resolves the project root anchoring every relative resource lookup, locates
the process and resource directories for both the Maven layout
(``src/main/resources/...``) and the flat layout, and detects which plugin API
generation the project targets.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dsflint.common.constants import (
    BPE_DIR_NAME,
    BPMN_EXTENSION,
    BUILD_OUTPUT_DIRS,
    FHIR_DIR_NAME,
    FHIR_EXTENSIONS,
    PROJECT_MARKER_DIRS,
    PROJECT_MARKER_FILES,
    RESOURCES_DIR,
    SERVICE_DIRS,
    V1_PACKAGE_PREFIX,
    V1_SERVICE_FILE,
    V2_PACKAGE_PREFIX,
    V2_SERVICE_FILE,
    get_project_root_override,
)
from dsflint.models.enums import ApiVersion

logger = logging.getLogger(__name__)


def find_project_root(start: Path, override: str | Path | None = None) -> Path:
    """
    Resolve the project root for a file or directory.

    Resolution order:
    1. ``override`` (or the environment override) if it names a directory
    2. the nearest ancestor holding a build file, else the nearest holding a
       ``src`` folder, else the nearest holding a ``fhir`` folder
    3. the parent directory of ``start`` (``start`` itself for directories)

    Markers are tried one at a time over the whole ancestry, so a file below
    ``src/main/resources`` resolves to the build root rather than to the
    resources folder that holds ``fhir``.

    Args:
        start: File or directory inside the project
        override: Explicit root, usually from configuration

    Returns:
        Absolute project root path
    """
    configured = override if override is not None else get_project_root_override()
    if configured is not None:
        candidate = Path(configured).expanduser()
        if candidate.is_dir():
            return candidate.resolve()
        logger.debug(f"Ignoring project root override {candidate}: not a directory")

    start = start.resolve()
    origin = start if start.is_dir() else start.parent
    ancestry = (origin, *origin.parents)
    for directory in ancestry:
        if any((directory / marker).is_file() for marker in PROJECT_MARKER_FILES):
            return directory
    for marker in PROJECT_MARKER_DIRS:
        for directory in ancestry:
            if (directory / marker).is_dir():
                return directory
    return origin


def bpe_dirs(root: Path) -> list[Path]:
    """Existing process-definition directories, Maven layout first."""
    candidates = [root / RESOURCES_DIR / BPE_DIR_NAME, root / BPE_DIR_NAME]
    return [c for c in candidates if c.is_dir()]


def fhir_dirs(root: Path) -> list[Path]:
    """Existing resource root directories, Maven layout first."""
    candidates = [root / RESOURCES_DIR / FHIR_DIR_NAME, root / FHIR_DIR_NAME]
    return [c for c in candidates if c.is_dir()]


def resource_kind_dirs(root: Path, kind: str) -> list[Path]:
    """Existing ``fhir/<kind>`` directories for one resource kind."""
    return [d / kind for d in fhir_dirs(root) if (d / kind).is_dir()]


def bpmn_files(root: Path) -> list[Path]:
    """All process-definition files of the project, sorted by path."""
    directories = bpe_dirs(root)
    if not directories:
        logger.warning(f"No process directory found under {root}")
    files = {
        path
        for directory in directories
        for path in directory.rglob(f"*{BPMN_EXTENSION}")
        if path.is_file()
    }
    return sorted(files)


def fhir_files(root: Path) -> list[Path]:
    """All resource files of the project, sorted by path."""
    directories = fhir_dirs(root)
    if not directories:
        logger.warning(f"No resource directory found under {root}")
    files = {
        path
        for directory in directories
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in FHIR_EXTENSIONS
    }
    return sorted(files)


def list_resource_files(root: Path, kind: str) -> list[Path]:
    """Resource files of one kind, used by reference resolution."""
    files = {
        path
        for directory in resource_kind_dirs(root, kind)
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in FHIR_EXTENSIONS
    }
    return sorted(files)


# ============================================================================
# API generation detection
# ============================================================================


@dataclass(frozen=True)
class DetectedVersion:
    """Detected API generation and the file that declared it."""

    version: ApiVersion
    evidence: Path | None = None

    @property
    def is_known(self) -> bool:
        return self.version != ApiVersion.UNKNOWN


def detect_api_version(root: Path) -> DetectedVersion:
    """
    Detect the plugin API generation from the service registration file.

    Each service directory is checked in order and v2 wins over v1 within a
    directory. Without a registration file, the build output (or the root) is
    searched for a file whose name starts with a generation's package prefix.
    """
    for service_dir in SERVICE_DIRS:
        directory = root / service_dir
        if not directory.is_dir():
            continue
        for file_name, version in ((V2_SERVICE_FILE, ApiVersion.V2), (V1_SERVICE_FILE, ApiVersion.V1)):
            candidate = directory / file_name
            if candidate.is_file():
                logger.info(f"Detected API {version} from {candidate}")
                return DetectedVersion(version, candidate)

    search_root = next(
        (root / d for d in BUILD_OUTPUT_DIRS if (root / d).is_dir()),
        root,
    )
    for prefix, version in ((V2_PACKAGE_PREFIX, ApiVersion.V2), (V1_PACKAGE_PREFIX, ApiVersion.V1)):
        evidence = _find_file_with_prefix(search_root, prefix)
        if evidence is not None:
            logger.info(f"Detected API {version} from {evidence}")
            return DetectedVersion(version, evidence)

    logger.info(f"No API generation declared under {root}")
    return DetectedVersion(ApiVersion.UNKNOWN)


def _find_file_with_prefix(directory: Path, prefix: str) -> Path | None:
    if not directory.is_dir():
        return None
    for current, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for name in sorted(filenames):
            if name.startswith(prefix):
                return Path(current) / name
    return None
