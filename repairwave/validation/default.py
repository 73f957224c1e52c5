from typing import Any, Dict, Optional

from inference import PromptResponse, Tokenizer
from repairwave.memory.base import PromptMemory
from repairwave.validation.types import PromptResponseValidator, Validation


class DefaultResponseValidator(PromptResponseValidator):
    """Accepts every response. Used when no validator is configured."""

    def validate_response(
        self,
        memory: PromptMemory,
        functions: Optional[Dict[str, Any]],
        tokenizer: Optional[Tokenizer],
        response: PromptResponse,
        remaining_attempts: int,
    ) -> Validation:
        return Validation(valid=True)
