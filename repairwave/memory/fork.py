"""
Full overlay fork.

Every write lands in a private overlay, so the whole fork can be thrown
away without the caller knowing which keys were touched.
"""

from typing import Any

from repairwave.memory.base import PromptMemory
from repairwave.memory.volatile import VolatileMemory


class MemoryFork(PromptMemory):
    """
    Copy-on-write view over another memory.

    - Reads check the overlay first, then the delegate
    - Writes only ever go to the overlay
    - delete() and clear() only touch the overlay, never the delegate
    """

    def __init__(self, memory: PromptMemory):
        self._fork = VolatileMemory()
        self._memory = memory

    def has(self, key: str) -> bool:
        return self._fork.has(key) or self._memory.has(key)

    def get(self, key: str) -> Any:
        if self._fork.has(key):
            return self._fork.get(key)
        return self._memory.get(key)

    def set(self, key: str, value: Any) -> None:
        self._fork.set(key, value)

    def delete(self, key: str) -> None:
        if self._fork.has(key):
            self._fork.delete(key)

    def clear(self) -> None:
        self._fork.clear()
