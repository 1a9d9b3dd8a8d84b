"""Persisted light/dark theme preference.

Read once when a session starts and written on every toggle. Kept apart from
the profit model: nothing here is ever passed to ``compute`` or ``distribute``.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PREFS_ENV_VAR = "ECOM_PROFIT_PREFS"
DEFAULT_PREFS_PATH = Path.home() / ".ecom_profit_pro" / "preferences.json"


def default_prefs_path() -> Path:
    override = os.environ.get(PREFS_ENV_VAR)
    return Path(override) if override else DEFAULT_PREFS_PATH


class ThemePreference:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else default_prefs_path()

    def load(self) -> bool:
        """True for a saved dark theme; anything else, including no file, is light."""
        if not self.path.exists():
            return False
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read theme preference from %s: %s", self.path, e)
            return False
        return isinstance(data, dict) and data.get("theme") == "dark"

    def save(self, dark: bool) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"theme": "dark" if dark else "light"}), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save theme preference to %s: %s", self.path, e)

    def toggle(self, dark: bool) -> bool:
        new_value = not dark
        self.save(new_value)
        return new_value
