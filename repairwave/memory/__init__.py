"""
Memory module exports.

Clean interface for the orchestrator to import memory components.
"""

from repairwave.memory.base import PromptMemory, MemoryStoreError
from repairwave.memory.volatile import VolatileMemory
from repairwave.memory.sqlite import SQLiteMemory
from repairwave.memory.history import append_to_history, trim_history
from repairwave.memory.fork import MemoryFork
from repairwave.memory.history_fork import ConversationHistoryFork, ConversationHistoryMemoryFork
from repairwave.memory.transient import TransientMemory

__all__ = [
    # Stores
    "PromptMemory",
    "MemoryStoreError",
    "VolatileMemory",
    "SQLiteMemory",
    # History
    "append_to_history",
    "trim_history",
    # Forks
    "MemoryFork",
    "ConversationHistoryFork",
    "ConversationHistoryMemoryFork",
    "TransientMemory",
]
