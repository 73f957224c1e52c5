"""
Abstract key/value memory interface.

The orchestrator depends only on this interface, not on specific implementations.
"""

from abc import ABC, abstractmethod
from typing import Any


class MemoryStoreError(RuntimeError):
    """Raised by durable stores when the backing storage fails."""


class PromptMemory(ABC):
    """
    Abstract memory boundary.

    Key properties:
    - Flat string keys, arbitrary values
    - get() of a missing key returns None, it never raises KeyError
    - delete() of a missing key is a no-op
    """

    @abstractmethod
    def has(self, key: str) -> bool:
        """Return True if the key holds a value."""
        raise NotImplementedError

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value stored under key, or None."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value under key."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Remove every key this memory is responsible for."""
        raise NotImplementedError
