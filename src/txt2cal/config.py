"""Configuration loading for txt2cal.

Reads settings from environment variables (with .env support via
python-dotenv).  Nothing is strictly required here: a missing API key is
reported by the extractor as :class:`~txt2cal.exceptions.MissingCredentialError`
only when no key is passed by the caller either.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_CALENDAR_NAME = "My Calendar"

_MAX_TEMPERATURE = 2.0


class ConfigError(Exception):
    """Raised when a configuration value is present but invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        gemini_api_key: Process-wide default API key for Google Gemini,
            or ``None`` when not configured.
        model: Gemini model identifier used for extraction.
        temperature: Sampling temperature for the extraction call.
        log_level: Logging level (default ``"INFO"``).
        calendar_name: Value of ``X-WR-CALNAME`` in generated calendars.
    """

    gemini_api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    log_level: str = "INFO"
    calendar_name: str = DEFAULT_CALENDAR_NAME

    def __repr__(self) -> str:
        key = "'***'" if self.gemini_api_key else "None"
        return (
            f"Settings(gemini_api_key={key}, "
            f"model={self.model!r}, "
            f"temperature={self.temperature!r}, "
            f"log_level={self.log_level!r}, "
            f"calendar_name={self.calendar_name!r})"
        )


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _parse_temperature(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"EXTRACTION_TEMPERATURE must be a number, got {raw!r}"
        ) from exc
    if not 0.0 <= value <= _MAX_TEMPERATURE:
        raise ConfigError(
            f"EXTRACTION_TEMPERATURE must be between 0 and {_MAX_TEMPERATURE}, "
            f"got {value}"
        )
    return value


def load_settings() -> Settings:
    """Load settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.  Empty or whitespace-only values
    are treated as unset and fall back to the defaults.

    Returns:
        A :class:`Settings` instance.

    Raises:
        ConfigError: If ``EXTRACTION_TEMPERATURE`` is not a number in
            the accepted range.
    """
    load_dotenv()

    values: dict[str, object] = {}

    api_key = _env("GEMINI_API_KEY")
    if api_key:
        values["gemini_api_key"] = api_key

    model = _env("GEMINI_MODEL")
    if model:
        values["model"] = model

    temperature = _env("EXTRACTION_TEMPERATURE")
    if temperature:
        values["temperature"] = _parse_temperature(temperature)

    log_level = _env("LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level

    calendar_name = _env("CALENDAR_NAME")
    if calendar_name:
        values["calendar_name"] = calendar_name

    return Settings(**values)
