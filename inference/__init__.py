"""
Backend boundary layer for prompt completion.

This package provides a clean abstraction for completion clients,
allowing the orchestrator to remain agnostic of the underlying backend.

Supplied clients:
- StubCompletionClient: Fixed status/message on every call (default for CI/tests)
- ScriptedCompletionClient: Replays a queue of responses and records each call

Example usage:
    from inference import StubCompletionClient

    client = StubCompletionClient()
    response = client.complete_prompt(memory, None, None, prompt, None)
"""

from .types import (
    ClientCall,
    CompletionOptions,
    CompletionType,
    Message,
    MessageRole,
    PromptResponse,
    PromptResponseStatus,
    message_text,
    normalize_response,
    render_value,
)
from .base import PromptCompletionClient, Tokenizer
from .stub import StubCompletionClient, ScriptedCompletionClient

__all__ = [
    "ClientCall",
    "CompletionOptions",
    "CompletionType",
    "Message",
    "MessageRole",
    "PromptResponse",
    "PromptResponseStatus",
    "message_text",
    "normalize_response",
    "render_value",
    "PromptCompletionClient",
    "Tokenizer",
    "StubCompletionClient",
    "ScriptedCompletionClient",
]
