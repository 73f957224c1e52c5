"""Response validators."""

from repairwave.validation.types import PromptResponseValidator, Validation
from repairwave.validation.default import DefaultResponseValidator
from repairwave.validation.json_validator import DEFAULT_MISSING_JSON_FEEDBACK, JSONResponseValidator
from repairwave.validation.schema_feedback import FEEDBACK_HEADER, build_feedback, format_property, get_error_fixes

__all__ = [
    "PromptResponseValidator",
    "Validation",
    "DefaultResponseValidator",
    "JSONResponseValidator",
    "DEFAULT_MISSING_JSON_FEEDBACK",
    "FEEDBACK_HEADER",
    "build_feedback",
    "format_property",
    "get_error_fixes",
]
