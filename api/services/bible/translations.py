# api/services/bible/translations.py
"""
Translation catalogue and download manager.

Public domain translations are fetched from openbible.com as plain text
(one verse per line) and stored locally. Custom translations are read from
any file in the same line format.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

import requests

from .errors import (
    DownloadError,
    InvalidCustomTranslationFile,
    TranslationNotInstalled,
    UnknownTranslationError,
)
from .loader import load_translation_file
from .storage import BibleStorage
from .store import TranslationStore

logger = logging.getLogger(__name__)

# Translations provided by https://openbible.com/texts.htm
TRANSLATIONS = {
    "AKJV": {
        "name": "American King James Version",
        "url": "https://openbible.com/textfiles/akjv.txt",
        "language": "en",
        "description": "Updated spelling and wording of the 1769 KJV",
    },
    "ASV": {
        "name": "American Standard Version",
        "url": "https://openbible.com/textfiles/asv.txt",
        "language": "en",
        "description": "1901 American Standard Version",
    },
    "ERV": {
        "name": "English Revised Version",
        "url": "https://openbible.com/textfiles/erv.txt",
        "language": "en",
        "description": "1885 English Revised Version",
    },
    "KJV": {
        "name": "King James Version",
        "url": "https://openbible.com/textfiles/kjv.txt",
        "language": "en",
        "description": "1769 King James Version of the Holy Bible",
    },
}


@dataclass(frozen=True)
class Translation:
    """
    A translation to load: a catalogue entry or a custom file.

    Attributes:
        code: Catalogue code ("KJV"); None for custom translations
        name: Display name
        path: Local text file (None until a catalogue entry is installed)
    """
    code: Optional[str]
    name: str
    path: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return self.code is None

    @classmethod
    def custom(cls, name: str, path) -> "Translation":
        """
        A translation read from the filesystem at load time.

        Each line must be a verse formatted as `Book Chapter:Verse Text`.
        `name` is strictly for display purposes.
        """
        return cls(code=None, name=name, path=str(path))

    def __str__(self) -> str:
        if self.is_custom:
            return f"Custom Translation: {self.name}"
        return self.name


def load_translation(
    translation: Translation,
    extra_aliases: Optional[Mapping[str, Iterable[str]]] = None,
) -> TranslationStore:
    """
    Load a translation into a TranslationStore.

    Raises:
        InvalidCustomTranslationFile: Custom file does not exist
        TranslationNotInstalled: Catalogue translation has no local file
        TranslationLoadError: Text is malformed
    """
    if translation.path is None:
        raise TranslationNotInstalled(f"Translation {translation.code} is not installed")

    path = Path(translation.path)
    if not path.is_file():
        if translation.is_custom:
            raise InvalidCustomTranslationFile(f"Custom translation file not found: {path}")
        raise TranslationNotInstalled(f"Translation file missing: {path}")

    return load_translation_file(
        path,
        name=str(translation),
        extra_aliases=extra_aliases,
        skip_preamble=not translation.is_custom,
    )


class TranslationManager:
    """
    Manages local translation files: download, list, remove.

    Usage:
        manager = TranslationManager()

        # List available translations
        for t in manager.list_available():
            print(f"{t['code']}: {t['name']}")

        # Download a translation
        manager.download("KJV")

        # Get a loadable Translation
        translation = manager.get_translation("KJV")
    """

    def __init__(self, storage: Optional[BibleStorage] = None):
        self.storage = storage or BibleStorage()
        self._download_timeout = 60  # seconds

    def list_available(self) -> list[dict]:
        """
        List catalogue translations.

        Returns:
            List of dicts with code, name, url, language, description, installed
        """
        installed = set(self.list_installed())
        result = [
            {"code": code, "installed": code in installed, **info}
            for code, info in TRANSLATIONS.items()
        ]
        return sorted(result, key=lambda x: x["name"])

    def list_installed(self) -> list[str]:
        """List catalogue codes with a local text file."""
        return sorted(
            code for code in TRANSLATIONS
            if self.storage.translation_file(code).is_file()
        )

    def is_installed(self, code: str) -> bool:
        return code.upper() in self.list_installed()

    def get_info(self, code: str) -> Optional[dict]:
        """Catalogue info for a code, or None if unknown."""
        code = code.upper()
        if code not in TRANSLATIONS:
            return None

        info = TRANSLATIONS[code].copy()
        info["code"] = code
        info["installed"] = self.is_installed(code)
        return info

    def get_translation(self, code_or_name: str) -> Translation:
        """
        Resolve a catalogue code or registered custom name to a Translation.

        Raises:
            UnknownTranslationError: Neither a catalogue code nor a custom name
        """
        code = code_or_name.upper()
        if code in TRANSLATIONS:
            path = self.storage.translation_file(code)
            return Translation(
                code=code,
                name=TRANSLATIONS[code]["name"],
                path=str(path) if path.is_file() else None,
            )

        custom = self.storage.get_custom_translations()
        if code_or_name in custom:
            return Translation.custom(code_or_name, custom[code_or_name])

        raise UnknownTranslationError(f"Unknown translation: {code_or_name}")

    def download(self, code: str, progress_callback: Optional[Callable[[int, int], None]] = None) -> bool:
        """
        Download and install a catalogue translation.

        Args:
            code: Translation code (e.g., "KJV")
            progress_callback: Optional callable(bytes_downloaded, total_bytes)

        Returns:
            True on success

        Raises:
            UnknownTranslationError: If the code is unknown
            DownloadError: If the download fails
        """
        code = code.upper()

        if code not in TRANSLATIONS:
            raise UnknownTranslationError(f"Unknown translation: {code}")

        if self.is_installed(code):
            logger.info(f"Translation {code} already installed")
            return True

        url = TRANSLATIONS[code]["url"]
        dest = self.storage.translation_file(code)
        partial = dest.with_suffix(".part")

        logger.info(f"Downloading {code} from {url}")
        try:
            self._download_file(url, partial, progress_callback)
        except requests.RequestException as e:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {code}: {e}")

        partial.replace(dest)
        self.storage.mark_installed(code)

        logger.info(f"Successfully installed {code}")
        return True

    def _download_file(self, url: str, dest_path: Path, progress_callback=None):
        """Download a file with optional progress reporting."""
        response = requests.get(url, stream=True, timeout=self._download_timeout)
        response.raise_for_status()

        total_size = int(response.headers.get("content-length", 0))
        downloaded = 0

        with open(dest_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
                downloaded += len(chunk)
                if progress_callback and total_size:
                    progress_callback(downloaded, total_size)

    def remove(self, code: str) -> bool:
        """
        Remove an installed translation.

        Returns:
            True if removed, False if not installed
        """
        code = code.upper()

        if not self.is_installed(code):
            logger.info(f"Translation {code} not installed")
            return False

        self.storage.translation_file(code).unlink()
        self.storage.mark_removed(code)

        logger.info(f"Removed translation {code}")
        return True

    def load(self, code_or_name: str) -> TranslationStore:
        """Load an installed catalogue or registered custom translation."""
        return load_translation(self.get_translation(code_or_name))
