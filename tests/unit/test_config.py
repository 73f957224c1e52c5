"""
Test suite for configuration loading.

Verifies:
- Integer settings fall back to defaults on bad or negative values
- Boolean settings accept the usual spellings
- validate() flags unusable values
"""

import pytest

import config
from config import Config


class TestEnvHelpers:
    """Tests for the env parsing helpers."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("5", 5), (" 7 ", 7), ("0", 0), ("-1", 3), ("abc", 3), ("", 3)],
    )
    def test_env_int(self, monkeypatch, raw, expected):
        monkeypatch.setenv("REPAIRWAVE_TEST_INT", raw)
        assert config._env_int("REPAIRWAVE_TEST_INT", 3) == expected

    def test_env_int_unset(self, monkeypatch):
        monkeypatch.delenv("REPAIRWAVE_TEST_INT", raising=False)
        assert config._env_int("REPAIRWAVE_TEST_INT", 3) == 3

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("1", True), ("Yes", True), ("off", False), ("0", False), ("maybe", False)],
    )
    def test_env_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("REPAIRWAVE_TEST_BOOL", raw)
        assert config._env_bool("REPAIRWAVE_TEST_BOOL") is expected


class TestConfig:
    """Tests for the Config class."""

    def test_defaults_are_valid(self, monkeypatch):
        monkeypatch.setattr(Config, "MAX_HISTORY_MESSAGES", 10)
        monkeypatch.setattr(Config, "COMPLETION_TYPE", "chat")
        monkeypatch.setattr(Config, "TRACER_BACKEND", "noop")
        monkeypatch.setattr(Config, "HISTORY_VARIABLE", "history")
        assert Config.validate()

    @pytest.mark.parametrize(
        "attr,value",
        [
            ("MAX_HISTORY_MESSAGES", 0),
            ("COMPLETION_TYPE", "image"),
            ("TRACER_BACKEND", "zipkin"),
            ("HISTORY_VARIABLE", ""),
        ],
    )
    def test_invalid_values(self, monkeypatch, attr, value):
        monkeypatch.setattr(Config, attr, value)
        assert not Config.validate()

    def test_as_dict(self):
        values = Config.as_dict()
        assert values["max_repair_attempts"] == Config.MAX_REPAIR_ATTEMPTS
        assert values["history_variable"] == Config.HISTORY_VARIABLE
