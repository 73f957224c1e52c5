"""
repairwave: validated prompt completion with bounded self-repair.

Example usage:
    from inference import StubCompletionClient
    from repairwave import CompletionOrchestrator, JSONResponseValidator

    wave = CompletionOrchestrator(
        client=StubCompletionClient(response='{"answer": 42}'),
        prompt="Answer in JSON",
        validator=JSONResponseValidator({"type": "object", "required": ["answer"]}),
    )
    response = wave.complete_prompt("What is the answer?")
"""

from repairwave.orchestrator import (
    CompletionOrchestrator,
    DEFAULT_REPAIR_FEEDBACK,
    LAST_ATTEMPT_SUFFIX,
)
from repairwave.response_parser import parse_json, parse_all_objects
from repairwave.memory import (
    PromptMemory,
    MemoryStoreError,
    VolatileMemory,
    SQLiteMemory,
    MemoryFork,
    ConversationHistoryFork,
    ConversationHistoryMemoryFork,
    TransientMemory,
)
from repairwave.validation import (
    PromptResponseValidator,
    Validation,
    DefaultResponseValidator,
    JSONResponseValidator,
)

__all__ = [
    "CompletionOrchestrator",
    "DEFAULT_REPAIR_FEEDBACK",
    "LAST_ATTEMPT_SUFFIX",
    "parse_json",
    "parse_all_objects",
    "PromptMemory",
    "MemoryStoreError",
    "VolatileMemory",
    "SQLiteMemory",
    "MemoryFork",
    "ConversationHistoryFork",
    "ConversationHistoryMemoryFork",
    "TransientMemory",
    "PromptResponseValidator",
    "Validation",
    "DefaultResponseValidator",
    "JSONResponseValidator",
]
