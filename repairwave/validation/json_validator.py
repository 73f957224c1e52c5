"""
JSON response validator.

Parses any JSON objects out of the model's response and optionally checks
them against a JSON schema. When nothing usable is found the returned
feedback tells the model exactly what to fix.
"""

import logging
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from jsonschema.validators import validator_for

from inference import PromptResponse, Tokenizer, message_text
from repairwave.memory.base import PromptMemory
from repairwave.response_parser import parse_all_objects
from repairwave.validation.schema_feedback import build_feedback
from repairwave.validation.types import PromptResponseValidator, Validation

logger = logging.getLogger(__name__)

DEFAULT_MISSING_JSON_FEEDBACK = "No valid JSON objects were found in the response. Return a valid JSON object."


class JSONResponseValidator(PromptResponseValidator):
    """
    Accepts responses containing a JSON object (matching a schema, if given).

    Candidates are checked last to first: models that change their mind tend
    to put the corrected object last. On failure, feedback is built from the
    errors of the last candidate only.
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None, missing_json_feedback: Optional[str] = None):
        """
        Args:
            schema: Optional JSON schema the object must satisfy
            missing_json_feedback: Feedback used when no object is found

        Raises:
            jsonschema.exceptions.SchemaError: if the schema itself is invalid
        """
        self.schema = schema
        self.missing_json_feedback = missing_json_feedback or DEFAULT_MISSING_JSON_FEEDBACK
        self._validator = None
        if schema is not None:
            validator_cls = validator_for(schema, default=Draft202012Validator)
            validator_cls.check_schema(schema)
            self._validator = validator_cls(schema, format_checker=validator_cls.FORMAT_CHECKER)

    def validate_response(
        self,
        memory: PromptMemory,
        functions: Optional[Dict[str, Any]],
        tokenizer: Optional[Tokenizer],
        response: PromptResponse,
        remaining_attempts: int,
    ) -> Validation:
        parsed = parse_all_objects(message_text(response.message))
        if not parsed:
            logger.debug("No JSON objects found in response")
            return Validation(valid=False, feedback=self.missing_json_feedback)

        if self._validator is None:
            return Validation(valid=True, value=parsed[-1])

        errors: Optional[List[ValidationError]] = None
        for obj in reversed(parsed):
            candidate_errors = list(self._validator.iter_errors(obj))
            if not candidate_errors:
                return Validation(valid=True, value=obj)
            if errors is None:
                errors = candidate_errors

        logger.debug(f"{len(parsed)} candidate object(s) failed schema validation")
        return Validation(valid=False, feedback=build_feedback(errors or []))
