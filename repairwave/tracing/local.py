"""
Local tracer implementations.

LoggingTracer writes lifecycle events to the standard logging module.
RecordingTracer keeps them in memory for tests and debug endpoints.

Frozen constraints (same as every Tracer):
- Never influences control flow
- Only metadata is traced, never message content
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from repairwave.tracing.tracer import Tracer, TraceMetadata

logger = logging.getLogger(__name__)

# Keys allowed into trace output; prompts and model output never are
_SAFE_FIELDS = {
    "status",
    "valid",
    "remaining_attempts",
    "attempt",
    "memory",
    "duration_ms",
    "error",
    "has_feedback",
    "has_value",
    "backend",
}


def filter_safe_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep only whitelisted fields, truncating long strings.

    Args:
        metadata: Unfiltered metadata dict

    Returns:
        Filtered dict with only safe fields
    """
    filtered: Dict[str, Any] = {}
    for key, value in metadata.items():
        if key not in _SAFE_FIELDS:
            continue
        if isinstance(value, str):
            filtered[key] = value if len(value) <= 256 else value[:256] + "..."
        elif isinstance(value, (int, float, bool)) or value is None:
            filtered[key] = value
        else:
            filtered[key] = str(value)[:256]
    return filtered


@dataclass
class TraceRecord:
    """One recorded span boundary or event."""

    kind: str                      # "span_start" | "span_end" | "event"
    name: str
    trace_id: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)
    status: Optional[str] = None


class RecordingTracer(Tracer):
    """Keeps every span and event in memory, in order."""

    def __init__(self):
        self.records: List[TraceRecord] = []

    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        self.records.append(
            TraceRecord("span_start", name, trace_metadata.trace_id, filter_safe_metadata(metadata))
        )
        return {"name": name, "trace_id": trace_metadata.trace_id, "start": time.monotonic()}

    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        if span is None:
            return
        data = filter_safe_metadata(metadata)
        data["duration_ms"] = round((time.monotonic() - span["start"]) * 1000, 3)
        self.records.append(TraceRecord("span_end", span["name"], span["trace_id"], data, status))

    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        self.records.append(
            TraceRecord("event", name, trace_metadata.trace_id, filter_safe_metadata(metadata))
        )

    def is_enabled(self) -> bool:
        return True

    def event_names(self) -> List[str]:
        """Names of recorded events, in order."""
        return [record.name for record in self.records if record.kind == "event"]

    def clear(self) -> None:
        self.records.clear()


class LoggingTracer(Tracer):
    """Writes spans and events to the logger at a configurable level."""

    def __init__(self, level: int = logging.DEBUG):
        self.level = level

    def start_span(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> Optional[Any]:
        logger.log(self.level, f"span_start {name} [trace_id={trace_metadata.trace_id}] {filter_safe_metadata(metadata)}")
        return {"name": name, "trace_id": trace_metadata.trace_id, "start": time.monotonic()}

    def end_span(self, span: Any, status: str, metadata: Dict[str, Any]) -> None:
        if span is None:
            return
        duration_ms = (time.monotonic() - span["start"]) * 1000
        logger.log(
            self.level,
            f"span_end {span['name']} [trace_id={span['trace_id']}] status={status} duration_ms={duration_ms:.1f}",
        )

    def record_event(
        self, name: str, metadata: Dict[str, Any], trace_metadata: TraceMetadata
    ) -> None:
        logger.log(self.level, f"{name} [trace_id={trace_metadata.trace_id}] {filter_safe_metadata(metadata)}")

    def is_enabled(self) -> bool:
        return logger.isEnabledFor(self.level)
