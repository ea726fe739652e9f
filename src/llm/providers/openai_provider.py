from __future__ import annotations

import logging
import os
from typing import Optional

import httpx
from pydantic import ValidationError

from llm.schemas import ChatCompletionResponse
from .base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    name = "OpenAI"
    base_url_env = "OPENAI_BASE_URL"
    default_base_url = "https://api.openai.com/v1"
    temperature = 0.7

    def __init__(self, client: Optional[httpx.Client] = None, timeout_s: Optional[float] = None):
        super().__init__(client=client, timeout_s=timeout_s)
        self.base_url = os.getenv(self.base_url_env, self.default_base_url).strip().rstrip("/")

    def generate(self, *, prompt: str, model: str, api_key: str) -> Optional[str]:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
        }

        data = self._post(url, payload=payload, headers=headers)
        if data is None:
            return None

        try:
            return ChatCompletionResponse.model_validate(data).first_text()
        except ValidationError as e:
            logger.warning("Unexpected %s response shape: %s", self.name, e)
            return None

    def empty_reply(self, model: str) -> str:
        return "No response from OpenAI"
