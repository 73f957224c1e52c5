"""
Test suite for response validators.

Verifies:
- DefaultResponseValidator accepts everything without a replacement value
- JSONResponseValidator without a schema accepts the last object found
- JSONResponseValidator with a schema prefers the last valid candidate
- Feedback is built from the last candidate's errors only
- Missing JSON produces the configured feedback
- Invalid schemas are rejected at construction
"""

import pytest
from jsonschema.exceptions import SchemaError

from inference import Message, PromptResponse
from repairwave.validation import (
    DEFAULT_MISSING_JSON_FEEDBACK,
    FEEDBACK_HEADER,
    DefaultResponseValidator,
    JSONResponseValidator,
    Validation,
)


def _response(content):
    return PromptResponse(status="success", message=Message(role="assistant", content=content))


class TestValidation:
    """Tests for the Validation result type."""

    def test_value_not_set(self):
        assert not Validation(valid=True).has_value

    def test_explicit_none_value_counts(self):
        validation = Validation(valid=True, value=None)
        assert validation.has_value
        assert validation.value is None


class TestDefaultResponseValidator:
    """Tests for DefaultResponseValidator."""

    def test_accepts_anything(self, memory):
        validation = DefaultResponseValidator().validate_response(
            memory, None, None, _response("anything at all"), 3
        )
        assert validation.valid
        assert validation.feedback is None
        assert not validation.has_value


class TestJSONResponseValidatorWithoutSchema:
    """Tests for JSONResponseValidator without a schema."""

    def test_accepts_object(self, memory):
        validation = JSONResponseValidator().validate_response(
            memory, None, None, _response('Sure: {"foo": "bar"}'), 3
        )
        assert validation.valid
        assert validation.value == {"foo": "bar"}

    def test_value_is_last_object(self, memory):
        validation = JSONResponseValidator().validate_response(
            memory, None, None, _response('{"a": 1}\n{"b": 2}'), 3
        )
        assert validation.value == {"b": 2}

    def test_missing_json(self, memory):
        validation = JSONResponseValidator().validate_response(
            memory, None, None, _response("I cannot answer that."), 3
        )
        assert not validation.valid
        assert validation.feedback == DEFAULT_MISSING_JSON_FEEDBACK

    def test_custom_missing_json_feedback(self, memory):
        validator = JSONResponseValidator(missing_json_feedback="Reply with JSON only.")
        validation = validator.validate_response(memory, None, None, _response("nope"), 3)
        assert validation.feedback == "Reply with JSON only."

    def test_structured_content_is_rendered_before_parsing(self, memory):
        validation = JSONResponseValidator().validate_response(
            memory, None, None, _response({"answer": "yes"}), 3
        )
        assert validation.valid
        assert validation.value == {"answer": "yes"}

    def test_string_message(self, memory):
        response = PromptResponse(status="success", message='{"x": true}')
        validation = JSONResponseValidator().validate_response(memory, None, None, response, 3)
        assert validation.value == {"x": True}


class TestJSONResponseValidatorWithSchema:
    """Tests for JSONResponseValidator with a schema."""

    def test_accepts_matching_object(self, memory, answer_schema):
        validator = JSONResponseValidator(answer_schema)
        validation = validator.validate_response(memory, None, None, _response('{"answer": "42"}'), 3)
        assert validation.valid
        assert validation.value == {"answer": "42"}

    def test_prefers_last_valid_candidate(self, memory, answer_schema):
        validator = JSONResponseValidator(answer_schema)
        text = '{"answer": "first"}\n{"answer": "second"}'
        validation = validator.validate_response(memory, None, None, _response(text), 3)
        assert validation.value == {"answer": "second"}

    def test_finds_only_valid_candidate(self, memory, answer_schema):
        validator = JSONResponseValidator(answer_schema)
        text = '{"answer": "good"}\n{"answer": 7}'
        validation = validator.validate_response(memory, None, None, _response(text), 3)
        assert validation.valid
        assert validation.value == {"answer": "good"}

    def test_feedback_from_last_candidate_only(self, memory, answer_schema):
        validator = JSONResponseValidator(answer_schema)
        text = '{"answer": 7}\n{"other": "x"}'
        validation = validator.validate_response(memory, None, None, _response(text), 3)

        assert not validation.valid
        assert validation.feedback == FEEDBACK_HEADER + '\nadd the "answer" property to "instance"'
        assert "convert" not in validation.feedback

    def test_type_error_feedback(self, memory, answer_schema):
        validator = JSONResponseValidator(answer_schema)
        validation = validator.validate_response(memory, None, None, _response('{"answer": 7}'), 3)
        assert validation.feedback == FEEDBACK_HEADER + '\nconvert "instance.answer" to a string'

    def test_missing_json_with_schema(self, memory, answer_schema):
        validator = JSONResponseValidator(answer_schema)
        validation = validator.validate_response(memory, None, None, _response("no json"), 3)
        assert validation.feedback == DEFAULT_MISSING_JSON_FEEDBACK

    def test_format_is_checked(self, memory):
        schema = {
            "type": "object",
            "properties": {"email": {"type": "string", "format": "email"}},
        }
        validator = JSONResponseValidator(schema)
        validation = validator.validate_response(
            memory, None, None, _response('{"email": "not-an-address"}'), 3
        )
        assert not validation.valid
        assert 'change the "instance.email" property to be a email' in validation.feedback

    def test_invalid_schema_rejected(self):
        with pytest.raises(SchemaError):
            JSONResponseValidator({"type": 5})
