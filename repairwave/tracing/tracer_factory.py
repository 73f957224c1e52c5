"""
Tracer factory and initialization logic.

Handles environment-based tracer selection and instantiation.

Implements TRACER_BACKEND setting:
- "noop" (default): No observability
- "logging": Lifecycle events written to the repairwave.tracing logger
- "recording": Lifecycle events kept in memory
"""

import logging
import os

from repairwave.tracing.local import LoggingTracer, RecordingTracer
from repairwave.tracing.tracer import NoOpTracer, Tracer

logger = logging.getLogger(__name__)

VALID_BACKENDS = {"noop", "logging", "recording"}


def get_tracer_backend() -> str:
    """
    Get the configured tracer backend.

    Environment Variable:
        TRACER_BACKEND: "noop" (default), "logging" or "recording"

    Returns:
        Backend name (lowercase); unknown values fall back to "noop"
    """
    backend = os.getenv("TRACER_BACKEND", "noop").lower().strip()
    if backend not in VALID_BACKENDS:
        return "noop"
    return backend


def create_tracer() -> Tracer:
    """
    Create a tracer instance based on environment configuration.

    Returns:
        Tracer instance (never None, defaults to NoOpTracer)
    """
    backend = get_tracer_backend()

    try:
        if backend == "logging":
            return LoggingTracer(level=logging.INFO)
        if backend == "recording":
            return RecordingTracer()
        return NoOpTracer()

    except Exception as e:
        # Tracer initialization failure is non-fatal
        logger.warning(f"Failed to initialize tracer backend '{backend}': {e}")
        return NoOpTracer()


def get_tracer_config() -> dict:
    """
    Get current tracer configuration for debug output.

    Returns:
        Dict with tracer status and configuration
    """
    backend = get_tracer_backend()
    return {
        "tracer_backend": backend,
        "enabled": backend != "noop",
    }
