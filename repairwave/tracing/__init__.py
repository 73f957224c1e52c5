"""Tracing infrastructure for observability."""

from repairwave.tracing.tracer import Tracer, TraceMetadata, NoOpTracer
from repairwave.tracing.local import LoggingTracer, RecordingTracer, TraceRecord, filter_safe_metadata
from repairwave.tracing.tracer_factory import create_tracer, get_tracer_backend, get_tracer_config

__all__ = [
    "Tracer",
    "TraceMetadata",
    "NoOpTracer",
    "LoggingTracer",
    "RecordingTracer",
    "TraceRecord",
    "filter_safe_metadata",
    "create_tracer",
    "get_tracer_backend",
    "get_tracer_config",
]
