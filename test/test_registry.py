from llm import registry
from llm.registry import (
    AI_PROVIDERS,
    get_provider,
    list_providers,
    provider_for_model,
    resolve_model,
)


def test_registry_table():
    assert [p.key for p in AI_PROVIDERS] == ["gemini", "openai", "groq"]
    assert get_provider("openai").models[0] == "gpt-3.5-turbo"
    assert "llama-3.3-70b-versatile" in get_provider("groq").models
    assert get_provider("nope") is None


def test_exact_lookup():
    assert provider_for_model("gemini-2.5-flash").key == "gemini"
    assert provider_for_model("gpt-4o-mini").key == "openai"
    assert provider_for_model("meta-llama/llama-4-scout-17b-16e-instruct").key == "groq"


def test_family_matching():
    assert provider_for_model("gemini-1.5-pro").key == "gemini"
    assert provider_for_model("gpt-4-turbo").key == "openai"
    assert provider_for_model("llama-3.1-8b-instant").key == "groq"
    assert provider_for_model("claude-3-opus") is None


def test_auto_and_empty_resolve_to_default():
    assert resolve_model("auto") == registry.DEFAULT_MODEL
    assert resolve_model("") == registry.DEFAULT_MODEL
    assert resolve_model(None) == registry.DEFAULT_MODEL
    assert resolve_model(" gpt-4 ") == "gpt-4"


def test_list_providers_is_plain_data():
    data = list_providers()
    assert data[0] == {"name": "Gemini", "key": "gemini", "models": ["gemini-2.5-pro", "gemini-2.5-flash"]}
