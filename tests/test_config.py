"""Tests for environment-driven settings and logging setup."""

import logging

import pytest

from diagramscholar.config import DEFAULT_MODEL, configure_logging, get_settings
from diagramscholar.errors import ConfigurationError

ENV_VARS = [
    "GEMINI_API_KEY",
    "DIAGRAM_SCHOLAR_MODEL",
    "DIAGRAM_SCHOLAR_QUIZ_SIZE",
    "DIAGRAM_SCHOLAR_MAX_UPLOAD_MB",
    "DIAGRAM_SCHOLAR_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = get_settings()
    assert settings.api_key is None
    assert settings.model == DEFAULT_MODEL
    assert settings.quiz_size == 3
    assert settings.max_upload_bytes == 20 * 1024 * 1024
    assert settings.log_level == "INFO"


def test_values_from_environment(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "abc")
    clean_env.setenv("DIAGRAM_SCHOLAR_MODEL", "gemini-2.5-pro")
    clean_env.setenv("DIAGRAM_SCHOLAR_QUIZ_SIZE", "5")
    clean_env.setenv("DIAGRAM_SCHOLAR_MAX_UPLOAD_MB", "4")
    clean_env.setenv("DIAGRAM_SCHOLAR_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.api_key == "abc"
    assert settings.model == "gemini-2.5-pro"
    assert settings.quiz_size == 5
    assert settings.max_upload_bytes == 4 * 1024 * 1024
    assert settings.log_level == "DEBUG"


def test_blank_api_key_is_missing(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "")
    assert get_settings().api_key is None


@pytest.mark.parametrize("value", ["three", "0", "-2"])
def test_invalid_quiz_size(clean_env, value):
    clean_env.setenv("DIAGRAM_SCHOLAR_QUIZ_SIZE", value)
    with pytest.raises(ConfigurationError, match="DIAGRAM_SCHOLAR_QUIZ_SIZE"):
        get_settings()


def test_configure_logging_installs_one_handler():
    logger = logging.getLogger("diagramscholar")
    saved = list(logger.handlers)
    logger.handlers = []
    try:
        configure_logging("WARNING")
        configure_logging("WARNING")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        logger.handlers = saved
