from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

import httpx

from llm.providers.base import LLMProvider, UpstreamHTTPError
from llm.providers.gemini_provider import GeminiProvider
from llm.providers.groq_provider import GroqProvider
from llm.providers.openai_provider import OpenAIProvider
from llm.registry import provider_for_model, resolve_model
from study_assistant.models import AssistantSettings

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = (
    "API key not found. Please set your API key in the settings menu under AI Integration."
)


class DispatchOutcome(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    STUB = "stub"
    MISSING_CREDENTIAL = "missing_credential"
    UPSTREAM_ERROR = "upstream_error"


@dataclass(frozen=True)
class DispatchResult:
    text: str
    model: str
    provider: Optional[str]
    outcome: DispatchOutcome

    @property
    def ok(self) -> bool:
        return self.outcome == DispatchOutcome.SUCCESS


def stub_reply(model: str, prompt: str) -> str:
    return (
        f'I\'m using the {model} model. Your question was: "{prompt}". '
        "In a full implementation, this would connect to the appropriate AI service."
    )


def default_providers(http_client: Optional[httpx.Client] = None) -> dict[str, LLMProvider]:
    return {
        "gemini": GeminiProvider(client=http_client),
        "openai": OpenAIProvider(client=http_client),
        "groq": GroqProvider(client=http_client),
    }


class LLMClient:
    """Sends one prompt to whichever provider serves the selected model.

    ``dispatch`` never raises: credentials, upstream failures and odd payloads
    all come back as display text on the ``DispatchResult``.
    """

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        providers: Optional[Mapping[str, LLMProvider]] = None,
    ):
        self.providers = dict(providers) if providers is not None else default_providers(http_client)

    def dispatch(self, model_id: Optional[str], prompt: str, api_key: Optional[str]) -> DispatchResult:
        model = resolve_model(model_id)

        if not api_key or not api_key.strip():
            logger.info("No API key configured, skipping call to %s", model)
            return DispatchResult(
                MISSING_API_KEY_MESSAGE, model, None, DispatchOutcome.MISSING_CREDENTIAL
            )

        descriptor = provider_for_model(model)
        provider = self.providers.get(descriptor.key) if descriptor else None
        if provider is None:
            logger.info("No provider serves model %s, returning stub reply", model)
            return DispatchResult(stub_reply(model, prompt), model, None, DispatchOutcome.STUB)

        logger.info("Calling %s API with model %s", provider.name, model)
        try:
            text = provider.generate(prompt=prompt, model=model, api_key=api_key.strip())
        except UpstreamHTTPError as e:
            logger.warning("%s rejected the request: %s", provider.name, e.status_code)
            return self._error(provider, model, descriptor.key, str(e))
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", provider.name, e)
            return self._error(provider, model, descriptor.key, str(e) or type(e).__name__)
        except Exception as e:
            logger.exception("Unexpected error calling %s", provider.name)
            return self._error(provider, model, descriptor.key, str(e) or type(e).__name__)

        if text is None:
            return DispatchResult(
                provider.empty_reply(model), model, descriptor.key, DispatchOutcome.EMPTY
            )
        return DispatchResult(text, model, descriptor.key, DispatchOutcome.SUCCESS)

    def complete(self, prompt: str, settings: AssistantSettings) -> str:
        return self.dispatch(settings.selected_model, prompt, settings.api_key).text

    @staticmethod
    def _error(provider: LLMProvider, model: str, key: str, reason: str) -> DispatchResult:
        return DispatchResult(
            f"Error calling {provider.name} API: {reason}",
            model,
            key,
            DispatchOutcome.UPSTREAM_ERROR,
        )
