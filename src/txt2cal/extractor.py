"""Event extraction: free-form text to :class:`EventRecord`.

:func:`extract_event` is the extractor contract.  It validates the input,
resolves the API key, makes exactly one completion call and parses the
reply.  Nothing is retried and no partial record is returned on failure.
"""

from __future__ import annotations

import logging

from txt2cal.config import Settings, load_settings
from txt2cal.exceptions import MissingCredentialError, MissingInputError
from txt2cal.llm import GeminiClient
from txt2cal.models.event import EventRecord
from txt2cal.parser import parse_reply
from txt2cal.prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)


def resolve_credential(credential: str | None, settings: Settings) -> str:
    """Pick the caller's key, else the configured default.

    Raises:
        MissingCredentialError: If neither is a non-empty string.
    """
    if credential and credential.strip():
        return credential.strip()
    if settings.gemini_api_key:
        return settings.gemini_api_key
    raise MissingCredentialError(
        "A Gemini API key is required: pass one or set GEMINI_API_KEY"
    )


def extract_event(
    text: str | None,
    credential: str | None = None,
    *,
    settings: Settings | None = None,
) -> EventRecord:
    """Extract a single event from *text* using the completion backend.

    Args:
        text: Free-form description of the event.
        credential: Gemini API key for this request.  Falls back to
            ``settings.gemini_api_key`` when ``None`` or blank.
        settings: Settings to use.  Loaded from the environment when
            ``None``.

    Returns:
        The extracted :class:`EventRecord`, possibly with every field
        ``None`` when the text mentions nothing usable.

    Raises:
        MissingInputError: If *text* is ``None``, empty or blank.
        MissingCredentialError: If no API key is available.  Raised before
            any backend client is created.
        BackendError: If the backend call fails or returns nothing.
        ExtractionParseError: If the reply is not a usable JSON object.
    """
    if text is None or not text.strip():
        raise MissingInputError("Input text is required")

    if settings is None:
        settings = load_settings()
    api_key = resolve_credential(credential, settings)

    system_prompt = build_system_prompt()
    user_prompt = build_user_prompt(text)
    logger.debug("User prompt sent to Gemini:\n%s", user_prompt)

    client = GeminiClient(
        api_key=api_key,
        model=settings.model,
        temperature=settings.temperature,
    )
    raw_text = client.complete(system_prompt, user_prompt)
    logger.debug("Raw LLM response:\n%s", raw_text)

    record = parse_reply(raw_text)
    logger.info(
        "Extracted event: '%s' | date=%s | time=%s",
        record.title,
        record.start_date,
        record.start_time,
    )
    return record
