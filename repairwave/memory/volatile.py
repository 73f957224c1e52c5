"""
In-process memory for tests, CI and single-process callers.

Deterministic, no external dependencies.
"""

import copy
from typing import Any, Dict, Optional

from repairwave.memory.base import PromptMemory


class VolatileMemory(PromptMemory):
    """
    Dict-backed memory.

    Container values are deep-copied on the way in and out, so a list
    returned by get() can be mutated freely without changing what is stored.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._memory: Dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def has(self, key: str) -> bool:
        return key in self._memory

    def get(self, key: str) -> Any:
        return _clone(self._memory.get(key))

    def set(self, key: str, value: Any) -> None:
        self._memory[key] = _clone(value)

    def delete(self, key: str) -> None:
        self._memory.pop(key, None)

    def clear(self) -> None:
        self._memory.clear()

    def keys(self):
        """Keys currently stored."""
        return list(self._memory.keys())


def _clone(value: Any) -> Any:
    if isinstance(value, (dict, list, set, tuple)):
        return copy.deepcopy(value)
    return value
