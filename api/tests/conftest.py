# api/tests/conftest.py
"""
Shared fixtures: a small in-memory translation with known shape.

Books and chapter sizes are chosen so that tests can exercise long
ranges (Luke 23), numbered books (1 John / 2 John), multi-word names
(Song of Solomon) and a verse with an embedded footnote marker (John 3:16).
"""

import os
import random
import sys

import pytest

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.bible import BibleService, BibleStorage, parse_translation_text  # noqa: E402

# Verses per chapter, in canonical order
LAYOUT = {
    "Genesis": [3, 2],
    "Psalms": [2] * 22 + [6],
    "Song of Solomon": [2],
    "Luke": [3] * 22 + [56],
    "John": [3, 2, 36],
    "Romans": [2] * 7 + [39, 3],
    "1 John": [2, 2, 2, 21],
    "2 John": [13],
}

JOHN_3_16 = (
    "For God so loved the world, that he gave his only begotten Son¹, that "
    "whosoever believeth in him should not perish, but have everlasting life."
)
JOHN_3_16_PLAIN = (
    "For God so loved the world, that he gave his only begotten Son, that "
    "whosoever believeth in him should not perish, but have everlasting life."
)

SPECIAL_VERSES = {
    ("John", 3, 16): JOHN_3_16,
    ("Psalms", 23, 1): "The LORD is my shepherd; I shall not want.",
    ("1 John", 4, 8): "He that loveth not knoweth not God; for God is love.",
}

TOTAL_VERSES = sum(sum(chapters) for chapters in LAYOUT.values())


def verse_text(book: str, chapter: int, verse: int) -> str:
    """Text stored for a verse of the sample translation."""
    return SPECIAL_VERSES.get((book, chapter, verse), f"Verse {verse} of {book} {chapter}.")


def build_translation_text(preamble: str = "") -> str:
    lines = [preamble] if preamble else []
    for book, chapters in LAYOUT.items():
        for chapter, count in enumerate(chapters, start=1):
            for verse in range(1, count + 1):
                lines.append(f"{book} {chapter}:{verse}\t{verse_text(book, chapter, verse)}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def translation_text():
    return build_translation_text()


@pytest.fixture
def store(translation_text):
    return parse_translation_text(translation_text, "Sample Bible")


@pytest.fixture
def service(store):
    return BibleService(store, rng=random.Random(1234))


@pytest.fixture
def translation_file(tmp_path, translation_text):
    path = tmp_path / "sample.txt"
    path.write_text(translation_text, encoding="utf-8")
    return path


@pytest.fixture
def storage(tmp_path, monkeypatch):
    monkeypatch.delenv("DEFAULT_BIBLE_TRANSLATION", raising=False)
    return BibleStorage(tmp_path / "bible")
