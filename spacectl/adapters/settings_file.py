from __future__ import annotations
import json
import os
from typing import Any, Dict, Optional

from spacectl.domain.errors import ConfigurationError

DEFAULT_SETTINGS_PATH = os.path.join("~", ".spacectl.json")


class SettingsFile:
    """Local JSON settings file for master coordinates and timeouts."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = os.path.expanduser(path or DEFAULT_SETTINGS_PATH)
        self.explicit = path is not None

    def load(self) -> Dict[str, Any]:
        """Return the stored mapping; an absent default file yields ``{}``.

        A file named explicitly on the command line must exist.
        """
        if not os.path.exists(self.path):
            if self.explicit:
                raise ConfigurationError(f"Settings file not found: {self.path}")
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Cannot read settings file {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Settings file {self.path} must hold a JSON object")
        return payload
