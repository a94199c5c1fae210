"""
Enums for dsflint findings.

This module defines the severity scale, the closed catalogue of finding kinds
(one tag per distinct rule) and the plugin API generations.

Usage:
    from dsflint.models.enums import LintKind, LintSeverity
"""

from enum import StrEnum

# ============================================================================
# Severity and API generation
# ============================================================================


class LintSeverity(StrEnum):
    """Severity levels for findings, ordered from most to least severe."""

    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    SUCCESS = "SUCCESS"

    @property
    def rank(self) -> int:
        """Sort rank: ERROR(0) < WARN(1) < INFO(2) < SUCCESS(3)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    LintSeverity.ERROR: 0,
    LintSeverity.WARN: 1,
    LintSeverity.INFO: 2,
    LintSeverity.SUCCESS: 3,
}


class ApiVersion(StrEnum):
    """Plugin API generation declared by a project."""

    V1 = "v1"
    V2 = "v2"
    UNKNOWN = "unknown"


# ============================================================================
# Finding kinds
# ============================================================================


class LintKind(StrEnum):
    """Tag identifying the rule that produced a finding."""

    SUCCESS = "success"

    # Document-level
    UNPARSABLE_BPMN_RESOURCE = "unparsable_bpmn_resource"
    UNPARSABLE_FHIR_RESOURCE = "unparsable_fhir_resource"

    # Process
    BPMN_PROCESS_ID_EMPTY = "bpmn_process_id_empty"
    BPMN_PROCESS_ID_PATTERN_MISMATCH = "bpmn_process_id_pattern_mismatch"

    # Service and send tasks
    BPMN_SERVICE_TASK_NAME_EMPTY = "bpmn_service_task_name_empty"
    BPMN_SERVICE_TASK_IMPLEMENTATION_NOT_EXIST = "bpmn_service_task_implementation_not_exist"
    BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_EMPTY = "bpmn_service_task_implementation_class_empty"
    BPMN_SERVICE_TASK_IMPLEMENTATION_CLASS_NOT_FOUND = "bpmn_service_task_implementation_class_not_found"
    BPMN_SERVICE_TASK_NOT_EXTENDING_ABSTRACT_SERVICE_DELEGATE = (
        "bpmn_service_task_not_extending_abstract_service_delegate"
    )
    BPMN_SERVICE_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE = "bpmn_service_task_not_implementing_java_delegate"
    BPMN_SERVICE_TASK_NO_INTERFACE_CLASS_IMPLEMENTING = "bpmn_service_task_no_interface_class_implementing"
    BPMN_SEND_TASK_IMPLEMENTATION_CLASS_EMPTY = "bpmn_send_task_implementation_class_empty"
    BPMN_SEND_TASK_IMPLEMENTATION_CLASS_NOT_FOUND = "bpmn_send_task_implementation_class_not_found"
    BPMN_SEND_TASK_NOT_EXTENDING_ABSTRACT_TASK_MESSAGE_SEND = (
        "bpmn_send_task_not_extending_abstract_task_message_send"
    )
    BPMN_SEND_TASK_NOT_IMPLEMENTING_JAVA_DELEGATE = "bpmn_send_task_not_implementing_java_delegate"
    BPMN_SEND_TASK_NO_INTERFACE_CLASS_IMPLEMENTING = "bpmn_send_task_no_interface_class_implementing"

    # User tasks and task listeners
    BPMN_USER_TASK_NAME_EMPTY = "bpmn_user_task_name_empty"
    BPMN_USER_TASK_FORM_KEY_EMPTY = "bpmn_user_task_form_key_empty"
    BPMN_USER_TASK_FORM_KEY_NOT_EXTERNAL = "bpmn_user_task_form_key_not_external"
    BPMN_USER_TASK_QUESTIONNAIRE_NOT_FOUND = "bpmn_user_task_questionnaire_not_found"
    BPMN_USER_TASK_LISTENER_MISSING_CLASS_ATTRIBUTE = "bpmn_user_task_listener_missing_class_attribute"
    BPMN_USER_TASK_LISTENER_CLASS_NOT_FOUND = "bpmn_user_task_listener_class_not_found"
    BPMN_USER_TASK_LISTENER_NOT_EXTENDING_OR_IMPLEMENTING_REQUIRED_CLASS = (
        "bpmn_user_task_listener_not_extending_or_implementing_required_class"
    )
    BPMN_USER_TASK_LISTENER_INCOMPLETE_TASK_OUTPUT_FIELDS = "bpmn_user_task_listener_incomplete_task_output_fields"
    BPMN_USER_TASK_LISTENER_TASK_OUTPUT_SYSTEM_UNKNOWN = "bpmn_user_task_listener_task_output_system_unknown"
    BPMN_USER_TASK_LISTENER_TASK_OUTPUT_CODE_UNKNOWN = "bpmn_user_task_listener_task_output_code_unknown"
    BPMN_USER_TASK_LISTENER_TASK_OUTPUT_VERSION_NO_PLACEHOLDER = (
        "bpmn_user_task_listener_task_output_version_no_placeholder"
    )
    BPMN_PRACTITIONER_ROLE_HAS_NO_VALUE = "bpmn_practitioner_role_has_no_value"
    BPMN_PRACTITIONERS_HAS_NO_VALUE = "bpmn_practitioners_has_no_value"

    # Receive tasks and generic naming
    BPMN_EVENT_NAME_EMPTY = "bpmn_event_name_empty"

    # Start and end events
    BPMN_MESSAGE_START_EVENT_MESSAGE_NAME_EMPTY = "bpmn_message_start_event_message_name_empty"
    BPMN_START_EVENT_NOT_PART_OF_SUB_PROCESS = "bpmn_start_event_not_part_of_sub_process"
    BPMN_END_EVENT_NOT_PART_OF_SUB_PROCESS = "bpmn_end_event_not_part_of_sub_process"
    BPMN_END_EVENT_INSIDE_SUB_PROCESS_SHOULD_HAVE_ASYNC_AFTER_TRUE = (
        "bpmn_end_event_inside_sub_process_should_have_async_after_true"
    )
    BPMN_SIGNAL_END_EVENT_NAME_EMPTY = "bpmn_signal_end_event_name_empty"
    BPMN_SIGNAL_END_EVENT_SIGNAL_EMPTY = "bpmn_signal_end_event_signal_empty"

    # Message send events
    BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_EMPTY = "bpmn_message_send_event_implementation_class_empty"
    BPMN_MESSAGE_SEND_EVENT_IMPLEMENTATION_CLASS_NOT_FOUND = (
        "bpmn_message_send_event_implementation_class_not_found"
    )
    BPMN_MESSAGE_SEND_EVENT_NOT_IMPLEMENTING_JAVA_DELEGATE = (
        "bpmn_message_send_event_not_implementing_java_delegate"
    )
    BPMN_END_OR_THROW_EVENT_NO_INTERFACE_CLASS_IMPLEMENTING = (
        "bpmn_end_or_throw_event_no_interface_class_implementing"
    )
    BPMN_MESSAGE_INTERMEDIATE_THROW_EVENT_HAS_MESSAGE = "bpmn_message_intermediate_throw_event_has_message"
    BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_NAME_EMPTY = "bpmn_signal_intermediate_throw_event_name_empty"
    BPMN_SIGNAL_INTERMEDIATE_THROW_EVENT_SIGNAL_EMPTY = "bpmn_signal_intermediate_throw_event_signal_empty"

    # Catch and boundary events
    BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY = "bpmn_message_intermediate_catch_event_name_empty"
    BPMN_MESSAGE_INTERMEDIATE_CATCH_EVENT_MESSAGE_NAME_EMPTY = (
        "bpmn_message_intermediate_catch_event_message_name_empty"
    )
    BPMN_TIMER_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY = "bpmn_timer_intermediate_catch_event_name_empty"
    BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_NAME_EMPTY = "bpmn_signal_intermediate_catch_event_name_empty"
    BPMN_SIGNAL_INTERMEDIATE_CATCH_EVENT_SIGNAL_EMPTY = "bpmn_signal_intermediate_catch_event_signal_empty"
    BPMN_CONDITIONAL_EVENT_NAME_EMPTY = "bpmn_conditional_event_name_empty"
    BPMN_CONDITIONAL_EVENT_VARIABLE_NAME_EMPTY = "bpmn_conditional_event_variable_name_empty"
    BPMN_CONDITIONAL_EVENT_CONDITION_EMPTY = "bpmn_conditional_event_condition_empty"
    BPMN_MESSAGE_BOUNDARY_EVENT_NAME_EMPTY = "bpmn_message_boundary_event_name_empty"
    BPMN_MESSAGE_BOUNDARY_EVENT_MESSAGE_NAME_EMPTY = "bpmn_message_boundary_event_message_name_empty"
    BPMN_ERROR_BOUNDARY_EVENT_NAME_EMPTY = "bpmn_error_boundary_event_name_empty"
    BPMN_ERROR_BOUNDARY_EVENT_ERROR_NAME_EMPTY = "bpmn_error_boundary_event_error_name_empty"
    BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_EMPTY = "bpmn_error_boundary_event_error_code_empty"
    BPMN_ERROR_BOUNDARY_EVENT_ERROR_CODE_VARIABLE_EMPTY = "bpmn_error_boundary_event_error_code_variable_empty"

    # Timers
    BPMN_TIMER_TYPE_EMPTY = "bpmn_timer_type_empty"
    BPMN_TIMER_TYPE_AMBIGUOUS = "bpmn_timer_type_ambiguous"
    BPMN_TIMER_FIXED_DATE = "bpmn_timer_fixed_date"
    BPMN_TIMER_VALUE_NO_PLACEHOLDER = "bpmn_timer_value_no_placeholder"

    # Message resolution
    BPMN_NO_ACTIVITY_DEFINITION_FOUND_FOR_MESSAGE = "bpmn_no_activity_definition_found_for_message"
    BPMN_NO_STRUCTURE_DEFINITION_FOUND_FOR_MESSAGE = "bpmn_no_structure_definition_found_for_message"

    # Gateways and flows
    BPMN_EXCLUSIVE_GATEWAY_NAME_EMPTY = "bpmn_exclusive_gateway_name_empty"
    BPMN_INCLUSIVE_GATEWAY_NAME_EMPTY = "bpmn_inclusive_gateway_name_empty"
    BPMN_SEQUENCE_FLOW_NO_SOURCE = "bpmn_sequence_flow_no_source"
    BPMN_SEQUENCE_FLOW_NAME_EMPTY = "bpmn_sequence_flow_name_empty"
    BPMN_DEFAULT_FLOW_HAS_CONDITION = "bpmn_default_flow_has_condition"
    BPMN_NON_DEFAULT_FLOW_MISSING_CONDITION = "bpmn_non_default_flow_missing_condition"

    # Sub-processes and listeners
    BPMN_SUB_PROCESS_MULTI_INSTANCE_NOT_ASYNC_BEFORE = "bpmn_sub_process_multi_instance_not_async_before"
    BPMN_EXECUTION_LISTENER_CLASS_NOT_FOUND = "bpmn_execution_listener_class_not_found"
    BPMN_EXECUTION_LISTENER_NOT_IMPLEMENTING_REQUIRED_INTERFACE = (
        "bpmn_execution_listener_not_implementing_required_interface"
    )

    # Field injections
    BPMN_FIELD_INJECTION_NOT_STRING_LITERAL = "bpmn_field_injection_not_string_literal"
    BPMN_UNKNOWN_FIELD_INJECTION = "bpmn_unknown_field_injection"
    BPMN_FIELD_INJECTION_PROFILE_EMPTY = "bpmn_field_injection_profile_empty"
    BPMN_FIELD_INJECTION_PROFILE_NO_VERSION_PLACEHOLDER = "bpmn_field_injection_profile_no_version_placeholder"
    BPMN_FIELD_INJECTION_PROFILE_NOT_FOUND = "bpmn_field_injection_profile_not_found"
    BPMN_FIELD_INJECTION_MESSAGE_VALUE_EMPTY = "bpmn_field_injection_message_value_empty"
    BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_EMPTY = "bpmn_field_injection_instantiates_canonical_empty"
    BPMN_FIELD_INJECTION_INSTANTIATES_CANONICAL_NO_VERSION_PLACEHOLDER = (
        "bpmn_field_injection_instantiates_canonical_no_version_placeholder"
    )
    BPMN_PROFILE_MISSING_FIXED_CANONICAL = "bpmn_profile_missing_fixed_canonical"
    BPMN_PROFILE_MISSING_FIXED_MESSAGE_NAME = "bpmn_profile_missing_fixed_message_name"
    BPMN_NO_ACTIVITY_DEFINITION_FOR_INSTANTIATES_CANONICAL = (
        "bpmn_no_activity_definition_for_instantiates_canonical"
    )
    BPMN_ACTIVITY_DEFINITION_MISSING_MESSAGE_NAME = "bpmn_activity_definition_missing_message_name"

    # ActivityDefinition
    ACTIVITY_DEFINITION_MISSING_URL = "activity_definition_missing_url"
    ACTIVITY_DEFINITION_INVALID_URL_PATTERN = "activity_definition_invalid_url_pattern"
    ACTIVITY_DEFINITION_MISSING_STATUS = "activity_definition_missing_status"
    ACTIVITY_DEFINITION_STATUS_NOT_UNKNOWN = "activity_definition_status_not_unknown"
    ACTIVITY_DEFINITION_MISSING_KIND = "activity_definition_missing_kind"
    ACTIVITY_DEFINITION_KIND_NOT_TASK = "activity_definition_kind_not_task"
    ACTIVITY_DEFINITION_MISSING_PROFILE = "activity_definition_missing_profile"
    ACTIVITY_DEFINITION_PROFILE_NO_PLACEHOLDER = "activity_definition_profile_no_placeholder"
    ACTIVITY_DEFINITION_MISSING_READ_ACCESS_TAG = "activity_definition_missing_read_access_tag"
    ACTIVITY_DEFINITION_INVALID_READ_ACCESS_TAG = "activity_definition_invalid_read_access_tag"
    ACTIVITY_DEFINITION_NO_PROCESS_AUTHORIZATION = "activity_definition_no_process_authorization"
    ACTIVITY_DEFINITION_ENTRY_MISSING_REQUESTER = "activity_definition_entry_missing_requester"
    ACTIVITY_DEFINITION_ENTRY_MISSING_RECIPIENT = "activity_definition_entry_missing_recipient"
    ACTIVITY_DEFINITION_ENTRY_INVALID_REQUESTER = "activity_definition_entry_invalid_requester"
    ACTIVITY_DEFINITION_ENTRY_INVALID_RECIPIENT = "activity_definition_entry_invalid_recipient"

    # Task
    FHIR_TASK_MISSING_PROFILE = "fhir_task_missing_profile"
    FHIR_TASK_MISSING_INSTANTIATES_CANONICAL = "fhir_task_missing_instantiates_canonical"
    FHIR_TASK_INSTANTIATES_CANONICAL_PLACEHOLDER = "fhir_task_instantiates_canonical_placeholder"
    FHIR_TASK_UNKNOWN_INSTANTIATES_CANONICAL = "fhir_task_unknown_instantiates_canonical"
    FHIR_TASK_MISSING_STATUS = "fhir_task_missing_status"
    FHIR_TASK_STATUS_NOT_DRAFT = "fhir_task_status_not_draft"
    FHIR_TASK_UNKNOWN_STATUS = "fhir_task_unknown_status"
    FHIR_TASK_VALUE_IS_NOT_SET_AS_ORDER = "fhir_task_value_is_not_set_as_order"
    FHIR_TASK_MISSING_REQUESTER = "fhir_task_missing_requester"
    FHIR_TASK_INVALID_REQUESTER = "fhir_task_invalid_requester"
    FHIR_TASK_MISSING_RECIPIENT = "fhir_task_missing_recipient"
    FHIR_TASK_INVALID_RECIPIENT = "fhir_task_invalid_recipient"
    FHIR_TASK_DATE_NO_PLACEHOLDER = "fhir_task_date_no_placeholder"
    FHIR_TASK_REQUESTER_ID_NO_PLACEHOLDER = "fhir_task_requester_id_no_placeholder"
    FHIR_TASK_RECIPIENT_ID_NO_PLACEHOLDER = "fhir_task_recipient_id_no_placeholder"
    FHIR_TASK_COULD_NOT_LOAD_PROFILE = "fhir_task_could_not_load_profile"
    FHIR_TASK_MISSING_INPUT = "fhir_task_missing_input"
    FHIR_TASK_INPUT_REQUIRED_CODING_SYSTEM_AND_CODING_CODE = "fhir_task_input_required_coding_system_and_coding_code"
    FHIR_TASK_INPUT_MISSING_VALUE = "fhir_task_input_missing_value"
    FHIR_TASK_INPUT_DUPLICATE_SLICE = "fhir_task_input_duplicate_slice"
    FHIR_TASK_REQUIRED_INPUT_WITH_CODE_MESSAGE_NAME = "fhir_task_required_input_with_code_message_name"
    FHIR_TASK_STATUS_REQUIRED_INPUT_BUSINESS_KEY = "fhir_task_status_required_input_business_key"
    FHIR_TASK_BUSINESS_KEY_EXISTS = "fhir_task_business_key_exists"
    FHIR_TASK_BUSINESS_KEY_CHECK_IS_SKIPPED = "fhir_task_business_key_check_is_skipped"
    FHIR_TASK_CORRELATION_EXISTS = "fhir_task_correlation_exists"
    FHIR_TASK_CORRELATION_MISSING_BUT_REQUIRED = "fhir_task_correlation_missing_but_required"
    FHIR_TASK_INPUT_INSTANCE_COUNT_BELOW_MIN = "fhir_task_input_instance_count_below_min"
    FHIR_TASK_INPUT_INSTANCE_COUNT_EXCEEDS_MAX = "fhir_task_input_instance_count_exceeds_max"
    FHIR_TASK_INPUT_SLICE_COUNT_BELOW_SLICE_MIN = "fhir_task_input_slice_count_below_slice_min"
    FHIR_TASK_INPUT_SLICE_COUNT_EXCEEDS_SLICE_MAX = "fhir_task_input_slice_count_exceeds_slice_max"
    FHIR_TASK_UNKNOWN_CODE = "fhir_task_unknown_code"

    # ValueSet
    FHIR_VALUE_SET_MISSING_READ_ACCESS_TAG_ALL_OR_LOCAL = "fhir_value_set_missing_read_access_tag_all_or_local"
    FHIR_VALUE_SET_ORGANIZATION_ROLE_MISSING_VALID_CODE_VALUE = (
        "fhir_value_set_organization_role_missing_valid_code_value"
    )
    FHIR_VALUE_SET_MISSING_URL = "fhir_value_set_missing_url"
    FHIR_VALUE_SET_MISSING_NAME = "fhir_value_set_missing_name"
    FHIR_VALUE_SET_MISSING_TITLE = "fhir_value_set_missing_title"
    FHIR_VALUE_SET_MISSING_PUBLISHER = "fhir_value_set_missing_publisher"
    FHIR_VALUE_SET_MISSING_DESCRIPTION = "fhir_value_set_missing_description"
    FHIR_VALUE_SET_VERSION_NO_PLACEHOLDER = "fhir_value_set_version_no_placeholder"
    FHIR_VALUE_SET_DATE_NO_PLACEHOLDER = "fhir_value_set_date_no_placeholder"
    FHIR_VALUE_SET_MISSING_COMPOSE_INCLUDE = "fhir_value_set_missing_compose_include"
    FHIR_VALUE_SET_INCLUDE_MISSING_SYSTEM = "fhir_value_set_include_missing_system"
    FHIR_VALUE_SET_INCLUDE_VERSION_NO_PLACEHOLDER = "fhir_value_set_include_version_no_placeholder"
    FHIR_VALUE_SET_CONCEPT_MISSING_CODE = "fhir_value_set_concept_missing_code"
    FHIR_VALUE_SET_DUPLICATE_CONCEPT_CODE = "fhir_value_set_duplicate_concept_code"
    FHIR_VALUE_SET_UNKNOWN_CODE = "fhir_value_set_unknown_code"
    FHIR_VALUE_SET_FALSE_URL_REFERENCED = "fhir_value_set_false_url_referenced"

    # CodeSystem
    CODE_SYSTEM_MISSING_READ_ACCESS_TAG = "code_system_missing_read_access_tag"
    CODE_SYSTEM_MISSING_ELEMENT = "code_system_missing_element"
    CODE_SYSTEM_INVALID_STATUS = "code_system_invalid_status"
    CODE_SYSTEM_VERSION_NO_PLACEHOLDER = "code_system_version_no_placeholder"
    CODE_SYSTEM_DATE_NO_PLACEHOLDER = "code_system_date_no_placeholder"
    CODE_SYSTEM_MISSING_CONCEPT = "code_system_missing_concept"
    CODE_SYSTEM_CONCEPT_MISSING_CODE = "code_system_concept_missing_code"
    CODE_SYSTEM_CONCEPT_MISSING_DISPLAY = "code_system_concept_missing_display"
    CODE_SYSTEM_DUPLICATE_CODE = "code_system_duplicate_code"

    # Questionnaire
    QUESTIONNAIRE_MISSING_META_PROFILE = "questionnaire_missing_meta_profile"
    QUESTIONNAIRE_INVALID_META_PROFILE = "questionnaire_invalid_meta_profile"
    QUESTIONNAIRE_MISSING_READ_ACCESS_TAG = "questionnaire_missing_read_access_tag"
    QUESTIONNAIRE_INVALID_STATUS = "questionnaire_invalid_status"
    QUESTIONNAIRE_VERSION_NO_PLACEHOLDER = "questionnaire_version_no_placeholder"
    QUESTIONNAIRE_DATE_NO_PLACEHOLDER = "questionnaire_date_no_placeholder"
    QUESTIONNAIRE_MISSING_ITEM = "questionnaire_missing_item"
    QUESTIONNAIRE_ITEM_MISSING_LINK_ID = "questionnaire_item_missing_link_id"
    QUESTIONNAIRE_ITEM_MISSING_TYPE = "questionnaire_item_missing_type"
    QUESTIONNAIRE_ITEM_MISSING_TEXT = "questionnaire_item_missing_text"
    QUESTIONNAIRE_DUPLICATE_LINK_ID = "questionnaire_duplicate_link_id"
    QUESTIONNAIRE_UNUSUAL_LINK_ID = "questionnaire_unusual_link_id"
    QUESTIONNAIRE_MANDATORY_ITEM_MISSING = "questionnaire_mandatory_item_missing"
    QUESTIONNAIRE_MANDATORY_ITEM_INVALID_TYPE = "questionnaire_mandatory_item_invalid_type"
    QUESTIONNAIRE_MANDATORY_ITEM_NOT_REQUIRED = "questionnaire_mandatory_item_not_required"

    # StructureDefinition
    STRUCTURE_DEFINITION_READ_ACCESS_TAG_MISSING = "structure_definition_read_access_tag_missing"
    STRUCTURE_DEFINITION_URL_MISSING = "structure_definition_url_missing"
    STRUCTURE_DEFINITION_INVALID_STATUS = "structure_definition_invalid_status"
    STRUCTURE_DEFINITION_VERSION_NO_PLACEHOLDER = "structure_definition_version_no_placeholder"
    STRUCTURE_DEFINITION_DATE_NO_PLACEHOLDER = "structure_definition_date_no_placeholder"
    STRUCTURE_DEFINITION_DIFFERENTIAL_MISSING = "structure_definition_differential_missing"
    STRUCTURE_DEFINITION_SNAPSHOT_PRESENT = "structure_definition_snapshot_present"
    STRUCTURE_DEFINITION_ELEMENT_ID_MISSING = "structure_definition_element_id_missing"
    STRUCTURE_DEFINITION_ELEMENT_ID_DUPLICATE = "structure_definition_element_id_duplicate"
    STRUCTURE_DEFINITION_SLICE_MIN_SUM_ABOVE_BASE_MIN = "structure_definition_slice_min_sum_above_base_min"
    STRUCTURE_DEFINITION_SLICE_MAX_TOO_HIGH = "structure_definition_slice_max_too_high"
    STRUCTURE_DEFINITION_SLICE_MIN_SUM_EXCEEDS_MAX = "structure_definition_slice_min_sum_exceeds_max"
