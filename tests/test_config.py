"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sizegate.config import Settings, get_settings
from sizegate.middleware.content_limit import SizeLimitConfig


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.delenv("SIZEGATE_CONTENT_LENGTH_LIMIT", raising=False)
    monkeypatch.delenv("SIZEGATE_LOG_LEVEL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.content_length_limit == 65536
    assert settings.log_level == "INFO"
    assert settings.suppress_404_logs is True


def test_limit_from_env(monkeypatch):
    monkeypatch.setenv("SIZEGATE_CONTENT_LENGTH_LIMIT", "10")
    settings = get_settings()
    assert settings.content_length_limit == 10
    assert settings.size_limit() == SizeLimitConfig(content_length_limit=10)


def test_env_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("sizegate_content_length_limit", "512")
    assert Settings(_env_file=None).content_length_limit == 512


def test_non_integer_limit_is_rejected(monkeypatch):
    monkeypatch.setenv("SIZEGATE_CONTENT_LENGTH_LIMIT", "ten")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize(
    "raw, expected",
    [("debug", "DEBUG"), (" Warning ", "WARNING"), ("chatty", "INFO"), ("", "INFO")],
)
def test_log_level_is_normalized(monkeypatch, raw, expected):
    monkeypatch.setenv("SIZEGATE_LOG_LEVEL", raw)
    assert Settings(_env_file=None).log_level == expected


def test_settings_are_cached():
    assert get_settings() is get_settings()
