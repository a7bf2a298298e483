"""Shared fixtures for txt2cal tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from txt2cal.config import Settings

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "EXTRACTION_TEMPERATURE",
    "LOG_LEVEL",
    "CALENDAR_NAME",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all txt2cal-related environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("txt2cal.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def monkeypatch_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set a default API key in the environment and return the variables."""
    env_vars = {"GEMINI_API_KEY": "test-gemini-key-12345"}
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture()
def settings() -> Settings:
    """Settings with a default API key, independent of the environment."""
    return Settings(gemini_api_key="settings-key")


@pytest.fixture(autouse=True)
def _reset_loggers() -> Generator[None, None, None]:
    """Restore the root and package loggers after each test."""
    saved = []
    for logger in (logging.getLogger(), logging.getLogger("txt2cal")):
        saved.append((logger, logger.handlers[:], logger.level, logger.propagate))
    yield
    for logger, handlers, level, propagate in saved:
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
