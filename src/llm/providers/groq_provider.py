from __future__ import annotations

from .openai_provider import OpenAIProvider


class GroqProvider(OpenAIProvider):
    """Groq serves an OpenAI-compatible chat completion API on its own host."""

    name = "Groq"
    base_url_env = "GROQ_BASE_URL"
    default_base_url = "https://api.groq.com/openai/v1"

    def empty_reply(self, model: str) -> str:
        return f"No response from Groq {model}"
