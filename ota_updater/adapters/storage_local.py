from __future__ import annotations
import json, os
from typing import Dict, Optional
from ota_updater.domain.ports import StoragePort

SETTINGS_FILENAME = "user_settings.json"


class StorageLocal(StoragePort):
    """Read-only access to the hand-edited user settings file (flat JSON)."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILENAME)

    def load_user_settings(self) -> Optional[Dict]:
        """Return the settings object, or ``None`` when no file exists yet."""
        if not os.path.exists(self.settings_path):
            return None
        with open(self.settings_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{SETTINGS_FILENAME} must contain a JSON object.")
        return data
