"""Gemini completion client used by the extractor.

Wraps the Google ``google-genai`` SDK behind a single text-in/text-out call:
a system instruction plus one user message, answered by one text reply.
The client does not retry; every backend failure is surfaced immediately
as :class:`~txt2cal.exceptions.BackendError`.
"""

from __future__ import annotations

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from txt2cal.config import DEFAULT_MODEL, DEFAULT_TEMPERATURE
from txt2cal.exceptions import BackendError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for the Gemini completion backend.

    Args:
        api_key: Google Gemini API key.
        model: Model identifier to use for generation.
        temperature: Sampling temperature.  Kept low so the model copies
            values from the text instead of inventing them.

    Raises:
        BackendError: If the SDK rejects the client configuration.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        try:
            self._client = genai.Client(api_key=api_key)
        except ValueError as exc:
            logger.error("Could not create Gemini client: %s", exc)
            raise BackendError(f"Could not create the Gemini client: {exc}") from exc
        self._model = model
        self._temperature = temperature

    @property
    def model(self) -> str:
        return self._model

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system directive and user message and return the reply text.

        Args:
            system_prompt: Instruction passed as the system message.
            user_prompt: The user message content.

        Returns:
            The raw text of the first candidate, unmodified.

        Raises:
            BackendError: If the API call fails (network, auth, quota, ...)
                or the reply carries no text.
        """
        config = genai_types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self._temperature,
        )

        logger.debug("Calling %s (temperature=%s)", self._model, self._temperature)
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=user_prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            logger.error("Gemini API error: %s", exc)
            raise BackendError(f"Gemini API call failed: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.error("Could not reach Gemini: %s", exc)
            raise BackendError(f"Could not reach the completion backend: {exc}") from exc

        text = response.text
        if not text or not text.strip():
            logger.error("Gemini returned an empty reply")
            raise BackendError("The completion backend returned no content")

        return text
