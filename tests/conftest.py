"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from repairwave.memory import VolatileMemory  # noqa: E402
from repairwave.tracing import RecordingTracer  # noqa: E402


@pytest.fixture
def memory():
    """Empty in-process memory."""
    return VolatileMemory()


@pytest.fixture
def tracer():
    """Tracer that records every lifecycle event."""
    return RecordingTracer()


@pytest.fixture
def answer_schema():
    """Schema requiring a string "answer" property."""
    return {
        "type": "object",
        "properties": {
            "answer": {"type": "string"},
        },
        "required": ["answer"],
    }
