# api/tests/test_translations.py
"""
Tests for translation storage, catalogue and downloads.

Downloads run against a monkeypatched requests.get; no network access.

Run with: pytest tests/test_translations.py -v
"""

import json

import pytest
import requests

from conftest import JOHN_3_16, TOTAL_VERSES, build_translation_text
from services.bible import translations
from services.bible.errors import (
    DownloadError,
    InvalidCustomTranslationFile,
    TranslationNotInstalled,
    UnknownTranslationError,
)
from services.bible.storage import BibleStorage
from services.bible.translations import (
    TRANSLATIONS,
    Translation,
    TranslationManager,
    load_translation,
)


class FakeResponse:
    """Minimal streaming response."""

    def __init__(self, body: bytes, chunk_size: int = 1000):
        self.body = body
        self.chunk_size = chunk_size
        self.headers = {"content-length": str(len(body))}

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=8192):
        for i in range(0, len(self.body), self.chunk_size):
            yield self.body[i:i + self.chunk_size]


@pytest.fixture
def downloaded_body():
    return build_translation_text(preamble="KJV\nVerse\tKing James Bible").encode("utf-8")


# =============================================================================
# Storage
# =============================================================================

def test_storage_creates_structure(storage):
    assert storage.translations_path.is_dir()
    config = json.loads(storage.config_path.read_text())
    assert config["default_translation"] == "KJV"
    assert config["installed_translations"] == []
    assert config["custom_translations"] == {}


def test_storage_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("BIBLE_DATA_PATH", str(tmp_path / "shared"))
    monkeypatch.setenv("DEFAULT_BIBLE_TRANSLATION", "ASV")
    storage = BibleStorage()
    assert storage.base_path == tmp_path / "shared"
    assert storage.get_default_translation() == "ASV"


def test_storage_config_updates(storage):
    storage.update_config(default_translation="ERV")
    storage.register_custom("Mine", "/tmp/mine.txt")
    assert storage.get_default_translation() == "ERV"
    assert storage.get_custom_translations() == {"Mine": "/tmp/mine.txt"}
    assert storage.translation_file("KJV").name == "kjv.txt"


# =============================================================================
# Translation handles
# =============================================================================

def test_translation_display_names():
    assert str(Translation.custom("Mine", "mine.txt")) == "Custom Translation: Mine"
    assert str(Translation("KJV", "King James Version")) == "King James Version"
    assert Translation.custom("Mine", "mine.txt").is_custom


def test_load_custom_translation(translation_file):
    store = load_translation(Translation.custom("Mine", translation_file))
    assert store.name == "Custom Translation: Mine"
    assert store.verse_text("John", 3, 16) == JOHN_3_16


def test_missing_custom_file(tmp_path):
    with pytest.raises(InvalidCustomTranslationFile):
        load_translation(Translation.custom("Gone", tmp_path / "missing.txt"))


def test_uninstalled_catalogue_translation():
    with pytest.raises(TranslationNotInstalled):
        load_translation(Translation("KJV", "King James Version"))


# =============================================================================
# Manager
# =============================================================================

def test_list_available(storage):
    manager = TranslationManager(storage)
    available = manager.list_available()
    assert {t["code"] for t in available} == set(TRANSLATIONS)
    assert not any(t["installed"] for t in available)
    assert manager.list_installed() == []


def test_get_translation(storage, translation_file):
    manager = TranslationManager(storage)

    kjv = manager.get_translation("kjv")
    assert kjv.code == "KJV"
    assert kjv.path is None

    storage.register_custom("Mine", translation_file)
    mine = manager.get_translation("Mine")
    assert mine.is_custom
    assert mine.path == str(translation_file)

    with pytest.raises(UnknownTranslationError):
        manager.get_translation("NIV")


def test_get_info(storage):
    manager = TranslationManager(storage)
    info = manager.get_info("asv")
    assert info["code"] == "ASV"
    assert info["installed"] is False
    assert manager.get_info("NIV") is None


def test_download_and_load(storage, monkeypatch, downloaded_body):
    requested = []

    def fake_get(url, stream=False, timeout=None):
        requested.append(url)
        return FakeResponse(downloaded_body)

    monkeypatch.setattr(translations.requests, "get", fake_get)

    progress = []
    manager = TranslationManager(storage)
    assert manager.download("kjv", progress_callback=lambda done, total: progress.append((done, total)))

    assert requested == [TRANSLATIONS["KJV"]["url"]]
    assert progress[-1] == (len(downloaded_body), len(downloaded_body))
    assert manager.is_installed("KJV")
    assert "KJV" in storage.get_config()["installed_translations"]
    assert not storage.translation_file("KJV").with_suffix(".part").exists()

    store = manager.load("KJV")
    assert store.name == "King James Version"
    assert store.total_verses() == TOTAL_VERSES


def test_download_skips_installed(storage, monkeypatch, downloaded_body):
    storage.translation_file("ASV").write_bytes(downloaded_body)

    def fail_get(*args, **kwargs):
        raise AssertionError("should not download")

    monkeypatch.setattr(translations.requests, "get", fail_get)
    assert TranslationManager(storage).download("ASV")


def test_download_failure(storage, monkeypatch):
    def broken_get(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(translations.requests, "get", broken_get)
    manager = TranslationManager(storage)

    with pytest.raises(DownloadError):
        manager.download("ERV")

    assert not manager.is_installed("ERV")
    assert list(storage.translations_path.iterdir()) == []


def test_download_unknown(storage):
    with pytest.raises(UnknownTranslationError):
        TranslationManager(storage).download("NIV")


def test_remove(storage, downloaded_body):
    storage.translation_file("KJV").write_bytes(downloaded_body)
    storage.mark_installed("KJV")
    manager = TranslationManager(storage)

    assert manager.remove("kjv")
    assert not manager.is_installed("KJV")
    assert storage.get_config()["installed_translations"] == []
    assert not manager.remove("KJV")
