from __future__ import annotations

import logging
import os
from typing import Optional

import httpx
from pydantic import ValidationError

from llm.schemas import GeminiResponse
from .base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    name = "Gemini"

    def __init__(self, client: Optional[httpx.Client] = None, timeout_s: Optional[float] = None):
        super().__init__(client=client, timeout_s=timeout_s)
        self.base_url = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).strip().rstrip("/")

    def generate(self, *, prompt: str, model: str, api_key: str) -> Optional[str]:
        # The key travels as a query parameter, not a header.
        url = f"{self.base_url}/models/{model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        data = self._post(
            url,
            payload=payload,
            headers={"Content-Type": "application/json"},
            params={"key": api_key},
        )
        if data is None:
            return None

        try:
            return GeminiResponse.model_validate(data).first_text()
        except ValidationError as e:
            logger.warning("Unexpected Gemini response shape: %s", e)
            return None

    def empty_reply(self, model: str) -> str:
        return f"No response from Gemini {model}"
