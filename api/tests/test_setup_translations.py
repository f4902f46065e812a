# api/tests/test_setup_translations.py
"""
Tests for the translation setup CLI.

Run with: pytest tests/test_setup_translations.py -v
"""

import pytest

from scripts import setup_translations
from services.bible.storage import BibleStorage


@pytest.fixture
def data_path(tmp_path, monkeypatch):
    path = tmp_path / "bible"
    monkeypatch.setenv("BIBLE_DATA_PATH", str(path))
    monkeypatch.delenv("DEFAULT_BIBLE_TRANSLATION", raising=False)
    return path


def test_list(data_path, capsys):
    assert setup_translations.main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "King James Version" in out
    assert "Default translation: KJV" in out


def test_unknown_translation(data_path, capsys):
    assert setup_translations.main(["--translations", "NIV"]) == 1
    assert "Unknown translations: NIV" in capsys.readouterr().out


def test_register_custom(data_path, translation_file, capsys):
    assert setup_translations.main(["--custom", "Mine", str(translation_file)]) == 0
    assert BibleStorage(data_path).get_custom_translations() == {"Mine": str(translation_file)}
    assert "Registered Mine" in capsys.readouterr().out


def test_register_invalid_custom(data_path, tmp_path):
    assert setup_translations.main(["--custom", "Gone", str(tmp_path / "missing.txt")]) == 1
    assert BibleStorage(data_path).get_custom_translations() == {}


def test_set_default(data_path):
    assert setup_translations.main(["--default", "asv"]) == 0
    assert BibleStorage(data_path).get_default_translation() == "ASV"
    assert setup_translations.main(["--default", "NIV"]) == 1


def test_remove_not_installed(data_path, capsys):
    assert setup_translations.main(["--remove", "KJV"]) == 0
    assert "not installed" in capsys.readouterr().out
