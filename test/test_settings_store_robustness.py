from llm import registry
from storage.settings_store import SettingsStore
from study_assistant.models import AssistantSettings


def test_settings_roundtrip(tmp_path):
    store = SettingsStore(path=str(tmp_path / "settings.json"))
    store.save(AssistantSettings(selected_model="gpt-4o", api_key="sk-1"))
    loaded = store.load()
    assert loaded.selected_model == "gpt-4o"
    assert loaded.api_key == "sk-1"


def test_settings_missing_file(tmp_path):
    loaded = SettingsStore(path=str(tmp_path / "none.json")).load()
    assert loaded.selected_model == registry.DEFAULT_MODEL
    assert loaded.api_key is None


def test_settings_corrupted_file(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text("{not valid json")
    settings = SettingsStore(path=str(p)).load()
    assert isinstance(settings, AssistantSettings)
    assert not settings.has_api_key


def test_settings_auto_and_blank_key(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text('{"selected_model": "auto", "api_key": "  "}')
    settings = SettingsStore(path=str(p)).load()
    assert settings.selected_model == registry.DEFAULT_MODEL
    assert settings.api_key is None


def test_settings_path_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("ASSISTANT_SETTINGS_PATH", str(tmp_path / "env.json"))
    assert SettingsStore().path == tmp_path / "env.json"
