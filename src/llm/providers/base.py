from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class UpstreamHTTPError(Exception):
    """Provider answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, detail: str):
        self.provider = provider
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{provider} API error: {status_code} - {detail}")


class LLMProvider(ABC):
    name: str = ""

    def __init__(self, client: Optional[httpx.Client] = None, timeout_s: Optional[float] = None):
        self._client = client
        if timeout_s is None:
            timeout_s = float(os.getenv("LLM_HTTP_TIMEOUT_S", "60"))
        self.timeout_s = timeout_s

    @abstractmethod
    def generate(self, *, prompt: str, model: str, api_key: str) -> Optional[str]:
        """
        Must return the model output as TEXT, or None when the upstream reply carried none.
        """
        raise NotImplementedError

    @abstractmethod
    def empty_reply(self, model: str) -> str:
        """Placeholder shown when the upstream answered without any text."""
        raise NotImplementedError

    def _post(
        self,
        url: str,
        *,
        payload: dict,
        headers: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        if self._client is not None:
            r = self._client.post(url, headers=headers, params=params, json=payload)
        else:
            with httpx.Client(timeout=self.timeout_s) as client:
                r = client.post(url, headers=headers, params=params, json=payload)

        if r.is_error:
            raise UpstreamHTTPError(self.name, r.status_code, r.text.strip() or r.reason_phrase)

        try:
            return r.json()
        except ValueError:
            logger.warning("%s returned a non-JSON body (status %s)", self.name, r.status_code)
            return None
