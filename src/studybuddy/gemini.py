"""Blocking client for the Gemini generateContent endpoint."""
from __future__ import annotations

import logging

import httpx

from studybuddy.config import GeminiConfig
from studybuddy.errors import GenerationFailedError

log = logging.getLogger(__name__)


class GenerationClient:
    """Sends one prompt per request and returns the first candidate's text.

    No retries and no streaming: each call is a single round trip.
    """

    def __init__(self, config: GeminiConfig, http_client: httpx.Client | None = None):
        self.config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=config.timeout)

    def complete(self, prompt: str) -> str:
        if not self.config.api_key:
            raise GenerationFailedError("GEMINI_API_KEY is not configured")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self._http.post(
                self.config.endpoint,
                headers={"X-goog-api-key": self.config.api_key},
                json=body,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            log.error("Error calling Gemini API: %s", e)
            raise GenerationFailedError(f"Failed to get AI response: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise GenerationFailedError("Gemini API returned a non-JSON response") from e
        log.debug("Gemini API raw response: %s", payload)

        candidates = payload.get("candidates") if isinstance(payload, dict) else None
        if not candidates:
            log.error("No candidates in Gemini response: %s", payload)
            raise GenerationFailedError("Invalid Gemini API response: no candidates")
        try:
            return candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationFailedError(
                "Invalid Gemini API response: candidate has no text"
            ) from e

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> GenerationClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
