"""
Conversation history helpers.

History is a list of message dicts ({"role": ..., "content": ...}) stored
under a single memory slot. It is a sliding window: every push drops the
oldest entries once the configured maximum is exceeded.
"""

from typing import Any, Dict, List, Optional

from repairwave.memory.base import PromptMemory


def trim_history(history: List[Dict[str, Any]], max_messages: int) -> List[Dict[str, Any]]:
    """Drop the oldest entries in place until at most max_messages remain."""
    if len(history) > max_messages:
        del history[: len(history) - max_messages]
    return history


def append_to_history(
    memory: PromptMemory,
    variable: Optional[str],
    message: Dict[str, Any],
    max_messages: int,
) -> None:
    """
    Push a message onto the history slot and truncate it.

    No-op when variable is empty (history disabled).
    """
    if not variable:
        return
    history = memory.get(variable)
    if not isinstance(history, list):
        history = []
    history.append(message)
    memory.set(variable, trim_history(history, max_messages))
