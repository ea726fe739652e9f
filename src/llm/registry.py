from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProviderDescriptor:
    name: str
    key: str
    models: tuple[str, ...]


GEMINI = ProviderDescriptor(
    name="Gemini",
    key="gemini",
    models=("gemini-2.5-pro", "gemini-2.5-flash"),
)
OPENAI = ProviderDescriptor(
    name="OpenAI",
    key="openai",
    models=("gpt-3.5-turbo", "gpt-4", "gpt-4o", "gpt-4o-mini"),
)
GROQ = ProviderDescriptor(
    name="Groq",
    key="groq",
    models=(
        "meta-llama/llama-4-maverick-17b-128e-instruct",
        "meta-llama/llama-4-scout-17b-16e-instruct",
        "llama-3.3-70b-versatile",
    ),
)

AI_PROVIDERS: tuple[ProviderDescriptor, ...] = (GEMINI, OPENAI, GROQ)

AUTO_MODEL = "auto"
DEFAULT_MODEL = os.getenv("ASSISTANT_DEFAULT_MODEL", "gemini-2.5-pro").strip() or "gemini-2.5-pro"

# Substring -> provider, for model ids that are not listed above.
_FAMILY_HINTS = (
    ("gemini", GEMINI),
    ("gpt", OPENAI),
    ("openai", OPENAI),
    ("llama", GROQ),
)


def resolve_model(model_id: Optional[str]) -> str:
    """Map an empty or 'auto' selection onto the default model."""
    if model_id is None or not model_id.strip() or model_id.strip().lower() == AUTO_MODEL:
        return DEFAULT_MODEL
    return model_id.strip()


def provider_for_model(model_id: str) -> Optional[ProviderDescriptor]:
    for provider in AI_PROVIDERS:
        if model_id in provider.models:
            return provider

    lowered = model_id.lower()
    for hint, provider in _FAMILY_HINTS:
        if hint in lowered:
            return provider
    return None


def get_provider(key: str) -> Optional[ProviderDescriptor]:
    for provider in AI_PROVIDERS:
        if provider.key == key:
            return provider
    return None


def list_providers() -> list[dict]:
    return [
        {"name": p.name, "key": p.key, "models": list(p.models)}
        for p in AI_PROVIDERS
    ]
