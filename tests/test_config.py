"""Tests for garden_advisor.config and garden_advisor.log."""

import logging
from pathlib import Path

import pytest

from garden_advisor.config import DEFAULT_MODEL, Settings
from garden_advisor.log import configure_logging

ENV_VARS = (
    "OPENAI_API_KEY",
    "GARDEN_MODEL",
    "GARDEN_TEMPERATURE",
    "GARDEN_MAX_QUESTIONS",
    "GARDEN_LLM_SUMMARY",
    "GARDEN_SUMMARY_TIMEOUT",
    "GARDEN_SESSION_FILE",
    "GARDEN_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Settings.from_env."""

    def test_defaults(self):
        """Nothing set means defaults and no LLM."""
        settings = Settings.from_env(dotenv=False)
        assert settings.model == DEFAULT_MODEL
        assert settings.max_questions == 10
        assert settings.session_file is None
        assert settings.use_llm_summary is False

    def test_values_from_env(self, monkeypatch):
        """Environment variables override defaults."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("GARDEN_MODEL", "gpt-test")
        monkeypatch.setenv("GARDEN_TEMPERATURE", "0.2")
        monkeypatch.setenv("GARDEN_MAX_QUESTIONS", "7")
        monkeypatch.setenv("GARDEN_SESSION_FILE", "/tmp/garden.json")
        monkeypatch.setenv("GARDEN_LOG_LEVEL", "debug")
        settings = Settings.from_env(dotenv=False)
        assert settings.model == "gpt-test"
        assert settings.temperature == 0.2
        assert settings.max_questions == 7
        assert settings.session_file == Path("/tmp/garden.json")
        assert settings.log_level == "DEBUG"
        assert settings.use_llm_summary is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_summary_switch_off(self, monkeypatch, raw):
        """Falsy switch values disable the narrative even with a key."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("GARDEN_LLM_SUMMARY", raw)
        assert Settings.from_env(dotenv=False).use_llm_summary is False

    @pytest.mark.parametrize("raw", ["many", "0", "-3"])
    def test_bad_max_questions_falls_back(self, monkeypatch, raw):
        """Invalid or too small limits use the default."""
        monkeypatch.setenv("GARDEN_MAX_QUESTIONS", raw)
        assert Settings.from_env(dotenv=False).max_questions == 10

    def test_bad_float_falls_back(self, monkeypatch):
        monkeypatch.setenv("GARDEN_SUMMARY_TIMEOUT", "soon")
        assert Settings.from_env(dotenv=False).summary_timeout_s == 20.0


class TestLogging:
    """configure_logging."""

    def test_single_handler(self):
        """Repeated calls do not stack handlers."""
        logger = configure_logging("DEBUG")
        count = len(logger.handlers)
        configure_logging("INFO")
        assert len(logger.handlers) == count
        assert logger.level == logging.INFO

    def test_unknown_level(self):
        """Unknown level names fall back to INFO."""
        assert configure_logging("chatty").level == logging.INFO
