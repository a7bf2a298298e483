"""Unit tests for extract_event.

The Gemini SDK client is patched at ``txt2cal.llm.genai.Client`` so no
network call is ever made.
"""

from __future__ import annotations

import json
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from txt2cal.config import Settings
from txt2cal.exceptions import (
    BackendError,
    ExtractionParseError,
    MissingCredentialError,
    MissingInputError,
)
from txt2cal.extractor import extract_event, resolve_credential
from txt2cal.prompts import SYSTEM_PROMPT

_REPLY = {
    "title": "Meeting",
    "startDate": "2025-03-22",
    "startTime": "09:30",
    "location": "Head office",
    "description": None,
}


@pytest.fixture()
def genai_client() -> Generator[MagicMock, None, None]:
    """Patch the SDK client class and return it; replies default to ``_REPLY``."""
    with patch("txt2cal.llm.genai.Client") as mock_cls:
        mock_cls.return_value.models.generate_content.return_value.text = json.dumps(_REPLY)
        yield mock_cls


def _set_reply(genai_client: MagicMock, text: str) -> None:
    genai_client.return_value.models.generate_content.return_value.text = text


class TestHappyPath:
    def test_extracts_record(self, genai_client: MagicMock, settings: Settings) -> None:
        record = extract_event("Meeting at head office on 22 March at 9:30", settings=settings)

        assert record.to_payload() == _REPLY

    def test_sends_fixed_prompt_and_text(
        self, genai_client: MagicMock, settings: Settings
    ) -> None:
        extract_event("  Meeting tomorrow  ", settings=settings)

        call_kwargs = genai_client.return_value.models.generate_content.call_args.kwargs
        assert call_kwargs["contents"] == "Meeting tomorrow"
        assert call_kwargs["config"].system_instruction == SYSTEM_PROMPT
        assert call_kwargs["model"] == settings.model
        assert call_kwargs["config"].temperature == settings.temperature

    def test_one_backend_call_per_invocation(
        self, genai_client: MagicMock, settings: Settings
    ) -> None:
        extract_event("Gym on Friday", settings=settings)

        assert genai_client.return_value.models.generate_content.call_count == 1

    def test_prose_wrapped_reply_recovered(
        self, genai_client: MagicMock, settings: Settings
    ) -> None:
        _set_reply(genai_client, "Here is the event:\n" + json.dumps(_REPLY) + "\nThanks!")

        assert extract_event("text", settings=settings).title == "Meeting"

    def test_sparse_reply(self, genai_client: MagicMock, settings: Settings) -> None:
        _set_reply(genai_client, '{"title": "Call the bank"}')

        record = extract_event("call the bank", settings=settings)

        assert record.title == "Call the bank"
        assert record.start_date is None


class TestCredentials:
    def test_caller_credential_wins(self, genai_client: MagicMock, settings: Settings) -> None:
        extract_event("text", "caller-key", settings=settings)

        genai_client.assert_called_once_with(api_key="caller-key")

    def test_falls_back_to_configured_default(
        self, genai_client: MagicMock, settings: Settings
    ) -> None:
        extract_event("text", None, settings=settings)

        genai_client.assert_called_once_with(api_key="settings-key")

    def test_blank_caller_credential_falls_back(
        self, genai_client: MagicMock, settings: Settings
    ) -> None:
        extract_event("text", "   ", settings=settings)

        genai_client.assert_called_once_with(api_key="settings-key")

    def test_loads_settings_from_env(
        self, genai_client: MagicMock, monkeypatch_env: dict[str, str]
    ) -> None:
        extract_event("text")

        genai_client.assert_called_once_with(api_key="test-gemini-key-12345")

    def test_missing_credential_makes_no_backend_call(
        self, genai_client: MagicMock, clean_env: None
    ) -> None:
        with pytest.raises(MissingCredentialError):
            extract_event("Dentist on Monday")

        genai_client.assert_not_called()

    def test_resolve_credential_without_any_key(self) -> None:
        with pytest.raises(MissingCredentialError, match="GEMINI_API_KEY"):
            resolve_credential(None, Settings())


class TestFailures:
    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_missing_input(
        self, genai_client: MagicMock, settings: Settings, text: str | None
    ) -> None:
        with pytest.raises(MissingInputError):
            extract_event(text, settings=settings)

        genai_client.assert_not_called()

    def test_missing_input_checked_before_credential(self, clean_env: None) -> None:
        with pytest.raises(MissingInputError):
            extract_event("", None, settings=Settings())

    def test_unparseable_reply(self, genai_client: MagicMock, settings: Settings) -> None:
        _set_reply(genai_client, "Sorry, I can't help with that.")

        with pytest.raises(ExtractionParseError):
            extract_event("text", settings=settings)

    def test_empty_reply_is_backend_error(
        self, genai_client: MagicMock, settings: Settings
    ) -> None:
        _set_reply(genai_client, "")

        with pytest.raises(BackendError):
            extract_event("text", settings=settings)
