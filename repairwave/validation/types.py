"""
Validator contract and result type.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel

from inference import PromptResponse, Tokenizer
from repairwave.memory.base import PromptMemory


class Validation(BaseModel):
    """
    Result of validating one response.

    feedback is meaningful only when valid is False (it becomes the next
    repair prompt); value only when valid is True (it replaces the message
    content). value=None passed explicitly still counts as a replacement,
    use has_value to tell the two apart.
    """

    valid: bool
    feedback: Optional[str] = None
    value: Any = None

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set


class PromptResponseValidator(ABC):
    """
    Acceptance policy for backend output.

    Validators must not mutate the response; replacements go through
    Validation.value. Prefer returning an invalid Validation with actionable
    feedback over raising: an exception aborts the whole completion instead
    of triggering a repair.
    """

    @abstractmethod
    def validate_response(
        self,
        memory: PromptMemory,
        functions: Optional[Dict[str, Any]],
        tokenizer: Optional[Tokenizer],
        response: PromptResponse,
        remaining_attempts: int,
    ) -> Validation:
        """Check a response and return a Validation."""
        raise NotImplementedError
