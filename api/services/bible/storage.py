# api/services/bible/storage.py
"""
Storage management for downloaded translations.

Provides directory structure management and configuration persistence.
The base path can be configured via environment variable so translation
files can live on shared storage.
"""

import os
import json
from pathlib import Path
from typing import Optional, Union


class BibleStorage:
    """
    Manages the Bible data directory and its configuration.

    Directory structure:
        {BIBLE_DATA_PATH}/
        ├── translations/
        │   ├── kjv.txt
        │   └── asv.txt
        └── config.json
    """

    def __init__(self, base_path: Optional[Union[str, Path]] = None):
        self.base_path = Path(base_path or os.getenv(
            "BIBLE_DATA_PATH",
            os.path.join(os.path.expanduser("~"), ".local", "share", "bible"),
        ))
        self._ensure_structure()

    def _ensure_structure(self):
        """Create directory structure if it doesn't exist."""
        self.translations_path.mkdir(parents=True, exist_ok=True)

        # Initialize config if missing
        if not self.config_path.exists():
            self._write_config(self._default_config())

    def _default_config(self) -> dict:
        """Return default configuration values."""
        return {
            "default_translation": os.getenv("DEFAULT_BIBLE_TRANSLATION", "KJV"),
            "installed_translations": [],
            "custom_translations": {},
        }

    @property
    def config_path(self) -> Path:
        return self.base_path / "config.json"

    @property
    def translations_path(self) -> Path:
        """Path to downloaded translation text files."""
        return self.base_path / "translations"

    def translation_file(self, code: str) -> Path:
        """Local path of a catalogue translation's text file."""
        return self.translations_path / f"{code.lower()}.txt"

    def get_config(self) -> dict:
        """Load and return current configuration."""
        with open(self.config_path, encoding="utf-8") as f:
            return json.load(f)

    def _write_config(self, config: dict):
        """Write configuration to disk."""
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)

    def update_config(self, **kwargs):
        """Update configuration with provided key-value pairs."""
        config = self.get_config()
        config.update(kwargs)
        self._write_config(config)

    def get_default_translation(self) -> str:
        """Return the configured default translation code."""
        return self.get_config().get("default_translation", "KJV")

    def mark_installed(self, code: str):
        """Add a translation to the installed list."""
        config = self.get_config()
        installed = config.setdefault("installed_translations", [])
        if code not in installed:
            installed.append(code)
            self._write_config(config)

    def mark_removed(self, code: str):
        """Remove a translation from the installed list."""
        config = self.get_config()
        installed = config.setdefault("installed_translations", [])
        if code in installed:
            installed.remove(code)
            self._write_config(config)

    def register_custom(self, name: str, path: Union[str, Path]):
        """Remember a custom translation file under a display name."""
        config = self.get_config()
        config.setdefault("custom_translations", {})[name] = str(path)
        self._write_config(config)

    def get_custom_translations(self) -> dict:
        """Return registered custom translations as {name: path}."""
        return self.get_config().get("custom_translations", {})
