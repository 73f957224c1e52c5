from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .types import CompletionOptions, PromptResponse


class Tokenizer(ABC):
    """Token encoder/decoder supplied by the prompt-rendering layer."""

    @abstractmethod
    def encode(self, text: str) -> List[int]:
        raise NotImplementedError

    @abstractmethod
    def decode(self, tokens: List[int]) -> str:
        raise NotImplementedError


class PromptCompletionClient(ABC):
    """
    Abstract completion boundary.
    Orchestration code must depend ONLY on this interface.

    Implementations render the prompt against the given memory, call their
    backend and classify the outcome into a PromptResponse status. They
    must not raise for backend failures: errors, rate limiting, over-long
    prompts and cancellation are all reported through the status field.
    """

    @abstractmethod
    def complete_prompt(
        self,
        memory: Any,
        functions: Optional[Dict[str, Any]],
        tokenizer: Optional[Tokenizer],
        prompt: Any,
        options: Optional[CompletionOptions],
    ) -> PromptResponse:
        """Complete a prompt rendered from the given memory."""
        raise NotImplementedError
