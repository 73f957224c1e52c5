from typing import Any, Iterable

from repairwave.memory.base import PromptMemory
from repairwave.memory.volatile import VolatileMemory


class TransientMemory(PromptMemory):
    """
    Keeps a chosen set of keys in a private overlay; all other keys pass through.

    Unlike ConversationHistoryFork the isolated keys start empty, and
    clear() only empties the overlay.
    """

    def __init__(self, memory: PromptMemory, variables: Iterable[str]):
        self._transient = VolatileMemory()
        self._memory = memory
        self._variables = set(variables)

    def has(self, key: str) -> bool:
        return self._transient.has(key) if key in self._variables else self._memory.has(key)

    def get(self, key: str) -> Any:
        return self._transient.get(key) if key in self._variables else self._memory.get(key)

    def set(self, key: str, value: Any) -> None:
        if key in self._variables:
            self._transient.set(key, value)
        else:
            self._memory.set(key, value)

    def delete(self, key: str) -> None:
        if key in self._variables:
            self._transient.delete(key)
        else:
            self._memory.delete(key)

    def clear(self) -> None:
        self._transient.clear()
