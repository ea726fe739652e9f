from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from llm.registry import resolve_model
from study_assistant.models import AssistantSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "data/settings.json"


class SettingsStore:
    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or os.getenv("ASSISTANT_SETTINGS_PATH", DEFAULT_SETTINGS_PATH))

    def load(self) -> AssistantSettings:
        try:
            if not self.path.exists():
                return AssistantSettings(selected_model=resolve_model(None))

            data = json.loads(self.path.read_text(encoding="utf-8"))

            # an empty or "auto" selection is stored as-is but read back as the default model
            data["selected_model"] = resolve_model(data.get("selected_model"))
            if isinstance(data.get("api_key"), str) and not data["api_key"].strip():
                data["api_key"] = None

            return AssistantSettings(**data)
        except Exception:
            logger.warning("Unreadable settings file %s, using defaults", self.path)
            return AssistantSettings(selected_model=resolve_model(None))

    def save(self, settings: AssistantSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(settings.model_dump(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
