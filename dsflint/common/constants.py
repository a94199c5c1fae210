"""Constants and default values for dsflint.

This module centralizes the namespaces, vocabulary identifiers, project layout
conventions and environment variable settings used throughout the linter.
"""

import os
from typing import Final

# =============================================================================
# Environment Variable Names
# =============================================================================

ENV_VAR_PREFIX: Final[str] = "DSFLINT_"

ENV_PROJECT_ROOT: Final[str] = f"{ENV_VAR_PREFIX}PROJECT_ROOT"
ENV_API_VERSION: Final[str] = f"{ENV_VAR_PREFIX}API_VERSION"
ENV_REPORT_DIR: Final[str] = f"{ENV_VAR_PREFIX}REPORT_DIR"
ENV_FAIL_ON_WARN: Final[str] = f"{ENV_VAR_PREFIX}FAIL_ON_WARN"
ENV_SEED_TERMINOLOGY: Final[str] = f"{ENV_VAR_PREFIX}SEED_TERMINOLOGY"
ENV_LOG_LEVEL: Final[str] = f"{ENV_VAR_PREFIX}LOG_LEVEL"

# Honored for compatibility with existing plugin build setups
ENV_DSF_PROJECT_ROOT: Final[str] = "DSF_PROJECT_ROOT"


# =============================================================================
# Default Configuration Values
# =============================================================================

DEFAULT_FAIL_ON_WARN: Final[bool] = False
DEFAULT_SEED_TERMINOLOGY: Final[bool] = True
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_CONFIG_FILE_NAME: Final[str] = "dsflint.yaml"

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


# =============================================================================
# XML Namespaces
# =============================================================================

BPMN_NS: Final[str] = "http://www.omg.org/spec/BPMN/20100524/MODEL"
CAMUNDA_NS: Final[str] = "http://camunda.org/schema/1.0/bpmn"
FHIR_NS: Final[str] = "http://hl7.org/fhir"


# =============================================================================
# Project Layout
# =============================================================================

RESOURCES_DIR: Final[str] = "src/main/resources"
BPE_DIR_NAME: Final[str] = "bpe"
FHIR_DIR_NAME: Final[str] = "fhir"
BPMN_EXTENSION: Final[str] = ".bpmn"
FHIR_EXTENSIONS: Final[tuple[str, ...]] = (".xml", ".json")

# Markers checked while walking upward for the project root
PROJECT_MARKER_FILES: Final[tuple[str, ...]] = ("pom.xml", "build.gradle", "build.gradle.kts")
PROJECT_MARKER_DIRS: Final[tuple[str, ...]] = ("src", "fhir")

KIND_ACTIVITY_DEFINITION: Final[str] = "ActivityDefinition"
KIND_TASK: Final[str] = "Task"
KIND_STRUCTURE_DEFINITION: Final[str] = "StructureDefinition"
KIND_VALUE_SET: Final[str] = "ValueSet"
KIND_CODE_SYSTEM: Final[str] = "CodeSystem"
KIND_QUESTIONNAIRE: Final[str] = "Questionnaire"

RESOURCE_KINDS: Final[tuple[str, ...]] = (
    KIND_ACTIVITY_DEFINITION,
    KIND_TASK,
    KIND_STRUCTURE_DEFINITION,
    KIND_VALUE_SET,
    KIND_CODE_SYSTEM,
    KIND_QUESTIONNAIRE,
)


# =============================================================================
# API Generation Detection
# =============================================================================

V1_SERVICE_FILE: Final[str] = "dev.dsf.bpe.v1.ProcessPluginDefinition"
V2_SERVICE_FILE: Final[str] = "dev.dsf.bpe.v2.ProcessPluginDefinition"
V1_PACKAGE_PREFIX: Final[str] = "dev.dsf.bpe.v1"
V2_PACKAGE_PREFIX: Final[str] = "dev.dsf.bpe.v2"

SERVICE_DIRS: Final[tuple[str, ...]] = (
    "META-INF/services",
    "src/main/resources/META-INF/services",
    "target/classes/META-INF/services",
    "build/resources/main/META-INF/services",
    "build/classes/java/main/META-INF/services",
)

BUILD_OUTPUT_DIRS: Final[tuple[str, ...]] = ("target/classes", "build/classes/java/main")


# =============================================================================
# Implementation Class Capabilities
# =============================================================================

V1_JAVA_DELEGATE: Final[str] = "org.camunda.bpm.engine.delegate.JavaDelegate"
V1_TASK_LISTENER: Final[str] = "org.camunda.bpm.engine.delegate.TaskListener"
V1_EXECUTION_LISTENER: Final[str] = "org.camunda.bpm.engine.delegate.ExecutionListener"
V1_ABSTRACT_SERVICE_DELEGATE: Final[str] = "dev.dsf.bpe.v1.activity.AbstractServiceDelegate"
V1_ABSTRACT_TASK_MESSAGE_SEND: Final[str] = "dev.dsf.bpe.v1.activity.AbstractTaskMessageSend"
V1_DEFAULT_USER_TASK_LISTENER: Final[str] = "dev.dsf.bpe.v1.activity.DefaultUserTaskListener"

V2_SERVICE_TASK: Final[str] = "dev.dsf.bpe.v2.activity.ServiceTask"
V2_MESSAGE_SEND_TASK: Final[str] = "dev.dsf.bpe.v2.activity.MessageSendTask"
V2_MESSAGE_INTERMEDIATE_THROW: Final[str] = "dev.dsf.bpe.v2.activity.MessageIntermediateThrowEvent"
V2_MESSAGE_END_EVENT: Final[str] = "dev.dsf.bpe.v2.activity.MessageEndEvent"
V2_USER_TASK_LISTENER: Final[str] = "dev.dsf.bpe.v2.activity.UserTaskListener"
V2_DEFAULT_USER_TASK_LISTENER: Final[str] = "dev.dsf.bpe.v2.activity.DefaultUserTaskListener"
V2_EXECUTION_LISTENER: Final[str] = "dev.dsf.bpe.v2.activity.ExecutionListener"


# =============================================================================
# Vocabulary Systems
# =============================================================================

CS_READ_ACCESS: Final[str] = "http://dsf.dev/fhir/CodeSystem/read-access-tag"
CS_PROCESS_AUTHORIZATION: Final[str] = "http://dsf.dev/fhir/CodeSystem/process-authorization"
CS_PRACTITIONER_ROLE: Final[str] = "http://dsf.dev/fhir/CodeSystem/practitioner-role"
CS_BPMN_MESSAGE: Final[str] = "http://dsf.dev/fhir/CodeSystem/bpmn-message"
CS_ORGANIZATION_ROLE: Final[str] = "http://dsf.dev/fhir/CodeSystem/organization-role"
CS_TASK_STATUS: Final[str] = "http://hl7.org/fhir/task-status"

NS_ORGANIZATION_IDENTIFIER: Final[str] = "http://dsf.dev/sid/organization-identifier"

BUILTIN_VOCABULARIES: Final[dict[str, frozenset[str]]] = {
    CS_READ_ACCESS: frozenset({"ALL", "LOCAL", "ORGANIZATION", "ROLE"}),
    CS_PROCESS_AUTHORIZATION: frozenset({
        "LOCAL_ORGANIZATION",
        "LOCAL_ORGANIZATION_PRACTITIONER",
        "REMOTE_ORGANIZATION",
        "LOCAL_ROLE",
        "LOCAL_ROLE_PRACTITIONER",
        "REMOTE_ROLE",
        "LOCAL_ALL",
        "LOCAL_ALL_PRACTITIONER",
        "REMOTE_ALL",
    }),
    CS_PRACTITIONER_ROLE: frozenset({
        "DSF_ADMIN",
        "UAC_USER",
        "COS_USER",
        "CRR_USER",
        "DIC_USER",
        "DMS_USER",
        "DTS_USER",
        "HRP_USER",
        "TTP_USER",
        "AMS_USER",
    }),
    CS_BPMN_MESSAGE: frozenset({"message-name", "business-key", "correlation-key"}),
    CS_TASK_STATUS: frozenset({
        "draft",
        "requested",
        "received",
        "accepted",
        "rejected",
        "ready",
        "cancelled",
        "in-progress",
        "on-hold",
        "failed",
        "completed",
        "entered-in-error",
    }),
}


# =============================================================================
# Structure Definition / Extension URLs
# =============================================================================

EXT_PROCESS_AUTHORIZATION: Final[str] = "http://dsf.dev/fhir/StructureDefinition/extension-process-authorization"
EXT_READ_ACCESS_PARENT_ORG_ROLE: Final[str] = (
    "http://dsf.dev/fhir/StructureDefinition/extension-read-access-parent-organization-role"
)
PROFILE_ACTIVITY_DEFINITION: Final[str] = "http://dsf.dev/fhir/StructureDefinition/activity-definition"


# =============================================================================
# Placeholders
# =============================================================================

PLACEHOLDER_VERSION: Final[str] = "#{version}"
PLACEHOLDER_DATE: Final[str] = "#{date}"
PLACEHOLDER_ORGANIZATION: Final[str] = "#{organization}"


# =============================================================================
# Boolean String Parsing
# =============================================================================

TRUTHY_VALUES: Final[tuple[str, ...]] = ("true", "1", "yes", "on")


# =============================================================================
# Helper Functions
# =============================================================================


def get_env_bool(env_var: str, default: bool) -> bool:
    """
    Get boolean value from environment variable.

    Args:
        env_var: Environment variable name
        default: Default value if not set

    Returns:
        Boolean value from environment or default
    """
    value = os.getenv(env_var, str(default)).lower()
    return value in TRUTHY_VALUES


def get_env_str(env_var: str, default: str | None) -> str | None:
    """Get string value from environment variable, treating blanks as unset."""
    value = os.getenv(env_var)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_project_root_override() -> str | None:
    """Project root configured through the environment, if any."""
    return get_env_str(ENV_PROJECT_ROOT, None) or get_env_str(ENV_DSF_PROJECT_ROOT, None)


# Environment variable reference:
# DSFLINT_PROJECT_ROOT - Project root used for resource lookups (fallback: DSF_PROJECT_ROOT)
# DSFLINT_API_VERSION - Force API generation: v1|v2 (default: detected, else v2)
# DSFLINT_REPORT_DIR - Directory for JSON reports (default: none, no reports written)
# DSFLINT_FAIL_ON_WARN - Treat warnings as run failure: true|false (default: false)
# DSFLINT_SEED_TERMINOLOGY - Seed vocabularies from project CodeSystems: true|false (default: true)
# DSFLINT_LOG_LEVEL - Log level: DEBUG|INFO|WARNING|ERROR (default: WARNING)
