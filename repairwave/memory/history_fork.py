"""
Partial forks that isolate conversation history.

Repair attempts need to rewrite "what just happened" (the history and the
corrective input) without touching the caller's real conversation, while
still reading and writing every other key as if for real. These forks
isolate only the named slots and pass everything else through.
"""

import copy
from typing import Any, List, Optional

from repairwave.memory.base import PromptMemory


class ConversationHistoryFork(PromptMemory):
    """
    Isolates the history and input slots; every other key passes through.

    Invariants:
    - Both slots are deep-copied out of the delegate at construction
      (defaults: [] and "")
    - Reads and writes of both slots are deep copies, so callers never
      alias the fork's private state
    - Writing a non-list history, or None to either slot, resets it to its default
    - clear() resets both slots AND clears the delegate
    """

    def __init__(self, memory: PromptMemory, history_variable: Optional[str], input_variable: Optional[str]):
        self._memory = memory
        self._history_variable = history_variable
        self._input_variable = input_variable

        history = memory.get(history_variable) if history_variable and memory.has(history_variable) else None
        self._history: List[Any] = copy.deepcopy(history) if isinstance(history, list) else []

        text = memory.get(input_variable) if input_variable and memory.has(input_variable) else None
        self._input: Any = copy.deepcopy(text) if text is not None else ""

    def _is_history(self, key: str) -> bool:
        return bool(self._history_variable) and key == self._history_variable

    def _is_input(self, key: str) -> bool:
        return bool(self._input_variable) and key == self._input_variable

    def has(self, key: str) -> bool:
        return self._is_history(key) or self._is_input(key) or self._memory.has(key)

    def get(self, key: str) -> Any:
        if self._is_history(key):
            return copy.deepcopy(self._history)
        if self._is_input(key):
            return copy.deepcopy(self._input)
        return self._memory.get(key)

    def set(self, key: str, value: Any) -> None:
        if self._is_history(key):
            self._history = copy.deepcopy(value) if isinstance(value, list) else []
        elif self._is_input(key):
            self._input = copy.deepcopy(value) if value is not None else ""
        else:
            self._memory.set(key, value)

    def delete(self, key: str) -> None:
        if self._is_history(key):
            self._history = []
        elif self._is_input(key):
            self._input = ""
        else:
            self._memory.delete(key)

    def clear(self) -> None:
        self._history = []
        self._input = ""
        self._memory.clear()


class ConversationHistoryMemoryFork(PromptMemory):
    """
    Isolates only the history slot, via a shallow copy taken at construction.

    No default seeding: if the delegate has no history the fork has none
    either until one is written. The stored list is returned as-is.
    """

    def __init__(self, memory: PromptMemory, history_variable: str):
        self._memory = memory
        self._history_variable = history_variable
        if history_variable and memory.has(history_variable):
            history = memory.get(history_variable)
            self._history: Optional[List[Any]] = list(history) if isinstance(history, list) else history
        else:
            self._history = None

    def has(self, key: str) -> bool:
        if key == self._history_variable:
            return self._history is not None
        return self._memory.has(key)

    def get(self, key: str) -> Any:
        if key == self._history_variable:
            return self._history
        return self._memory.get(key)

    def set(self, key: str, value: Any) -> None:
        if key == self._history_variable:
            self._history = value
        else:
            self._memory.set(key, value)

    def delete(self, key: str) -> None:
        if key == self._history_variable:
            self._history = None
        else:
            self._memory.delete(key)

    def clear(self) -> None:
        self._history = None
        self._memory.clear()
