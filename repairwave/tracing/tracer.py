"""
Lifecycle observer contract for the completion orchestrator.

Each complete_prompt() call opens one "complete_prompt" span and emits point
events around every client call, validation and repair step:

    before_prompt / after_prompt
    before_validation / after_validation
    before_repair / next_repair / after_repair

Observers see metadata only (statuses, counters, durations, memory kind).
Prompts, inputs and model output never reach a tracer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class TraceMetadata:
    """Identity shared by every span and event of one completion."""

    trace_id: str                          # Fresh uuid4 per complete_prompt() call
    conversation_id: Optional[str] = None  # Passed through from the orchestrator


class Tracer(ABC):
    """
    Passive observer of a completion.

    A tracer can neither change the response nor touch memory. When
    is_enabled() returns False the orchestrator skips the tracer entirely,
    and every call it does make is wrapped so a raising tracer only loses
    visibility.
    """

    @abstractmethod
    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        """
        Open a span and return an opaque handle for end_span().

        Args:
            name: Span name ("complete_prompt")
            metadata: Memory kind the call runs against
            trace_metadata: Completion identity
        """
        raise NotImplementedError

    @abstractmethod
    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        """Close a span with the PromptResponse status it ended on."""
        raise NotImplementedError

    @abstractmethod
    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        """
        Record one lifecycle event.

        Args:
            name: Event name, e.g. "after_validation" or "next_repair"
            metadata: valid, remaining_attempts, status, duration_ms and similar
            trace_metadata: Completion identity
        """
        raise NotImplementedError

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether the orchestrator should emit spans and events at all."""
        raise NotImplementedError


class NoOpTracer(Tracer):
    """Default when TRACER_BACKEND is unset; discards everything."""

    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        return None

    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        return None

    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        return None

    def is_enabled(self) -> bool:
        return False
