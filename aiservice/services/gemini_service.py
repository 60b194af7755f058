"""Thin HTTP client for the Gemini generateContent endpoint."""
from __future__ import annotations

import logging

import requests

from aiservice.config import get_settings


logger = logging.getLogger(__name__)


class GeminiServiceError(RuntimeError):
    """Raised when the Gemini API cannot be reached or rejects the request."""


class GeminiService:
    """Sends prompts to Gemini and returns the raw response body."""

    def __init__(self) -> None:
        settings = get_settings()
        self.api_url = settings.gemini_api_url
        self.api_key = settings.gemini_api_key
        self.timeout = settings.gemini_timeout_seconds

    def get_answer(self, question: str) -> str:
        """
        POST ``question`` as a single-part prompt.

        Returns:
            The undecoded response envelope text.

        Raises:
            GeminiServiceError: on network errors or non-2xx responses.
        """
        request_body = {"contents": [{"parts": [{"text": question}]}]}

        try:
            r = requests.post(
                self.api_url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=request_body,
                timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.exception("Gemini request failed")
            raise GeminiServiceError(f"Gemini request failed: {e}") from e

        logger.debug("Gemini responded | status=%s bytes=%d", r.status_code, len(r.content))
        return r.text
