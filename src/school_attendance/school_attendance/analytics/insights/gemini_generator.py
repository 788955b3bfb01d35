from __future__ import annotations

import logging

import requests

from .generator import InsightError, InsightGenerator

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiInsightGenerator(InsightGenerator):
    """Calls the Generative Language ``generateContent`` REST endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: float = 20.0,
        max_output_tokens: int = 512,
    ):
        self._api_key = api_key
        self._model = model
        self._endpoint = endpoint.rstrip("/")
        self._timeout = float(timeout_seconds)
        self._max_output_tokens = int(max_output_tokens)

    def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise InsightError("INSIGHT_API_KEY is not configured")

        url = f"{self._endpoint}/models/{self._model}:generateContent"
        response = requests.post(
            url,
            headers={"x-goog-api-key": self._api_key, "Content-Type": "application/json"},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {"maxOutputTokens": self._max_output_tokens},
            },
            timeout=self._timeout,
        )
        response.raise_for_status()

        try:
            parts = response.json()["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise InsightError("Malformed generateContent response")

        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
        if not text:
            raise InsightError("Empty generateContent response")
        logger.debug("insight generated model=%s chars=%d", self._model, len(text))
        return text
