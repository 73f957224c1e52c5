"""
Configuration management for repairwave.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


def _env_int(name: str, default: int) -> int:
    """Read a non-negative integer env var, falling back to default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


class Config:
    """Configuration class for repairwave."""

    # Memory slots
    HISTORY_VARIABLE = os.getenv("REPAIRWAVE_HISTORY_VARIABLE", "history")
    INPUT_VARIABLE = os.getenv("REPAIRWAVE_INPUT_VARIABLE", "input")

    # Orchestration limits
    MAX_HISTORY_MESSAGES = _env_int("REPAIRWAVE_MAX_HISTORY_MESSAGES", 10)
    MAX_REPAIR_ATTEMPTS = _env_int("REPAIRWAVE_MAX_REPAIR_ATTEMPTS", 3)
    LOG_REPAIRS = _env_bool("REPAIRWAVE_LOG_REPAIRS", False)

    # Completion defaults
    MODEL = os.getenv("REPAIRWAVE_MODEL", "stub")
    COMPLETION_TYPE = os.getenv("REPAIRWAVE_COMPLETION_TYPE", "chat")

    # Observability
    TRACER_BACKEND = os.getenv("TRACER_BACKEND", "noop").lower().strip()

    # Database
    SQLITE_DB_PATH = os.getenv("SQLITE_DB_PATH", ":memory:")

    @classmethod
    def validate(cls) -> bool:
        """Validate that configuration values are usable."""
        problems = []
        if cls.MAX_HISTORY_MESSAGES < 1:
            problems.append("REPAIRWAVE_MAX_HISTORY_MESSAGES must be at least 1")
        if cls.COMPLETION_TYPE not in {"text", "chat"}:
            problems.append("REPAIRWAVE_COMPLETION_TYPE must be 'text' or 'chat'")
        if cls.TRACER_BACKEND not in {"noop", "logging", "recording"}:
            problems.append("TRACER_BACKEND must be one of: noop, logging, recording")
        if not cls.HISTORY_VARIABLE:
            problems.append("REPAIRWAVE_HISTORY_VARIABLE must not be empty")

        if problems:
            print(f"⚠️  Invalid configuration: {'; '.join(problems)}")
            print(f"   Please fix them in .env file")
            return False

        return True

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Current configuration values for debug output."""
        return {
            "history_variable": cls.HISTORY_VARIABLE,
            "input_variable": cls.INPUT_VARIABLE,
            "max_history_messages": cls.MAX_HISTORY_MESSAGES,
            "max_repair_attempts": cls.MAX_REPAIR_ATTEMPTS,
            "log_repairs": cls.LOG_REPAIRS,
            "model": cls.MODEL,
            "completion_type": cls.COMPLETION_TYPE,
            "tracer_backend": cls.TRACER_BACKEND,
            "sqlite_db_path": cls.SQLITE_DB_PATH,
        }


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    for key, value in Config.as_dict().items():
        print(f"  {key}: {value}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
