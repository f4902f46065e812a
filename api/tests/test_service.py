# api/tests/test_service.py
"""
Tests for the BibleService facade.

Run with: pytest tests/test_service.py -v
"""

import pytest

from conftest import JOHN_3_16_PLAIN, TOTAL_VERSES, build_translation_text, verse_text
from services.bible import BibleService, Translation
from services.bible.errors import (
    ChapterNotFound,
    RangeOutOfBounds,
    ReferenceParseError,
    TranslationNotInstalled,
    VerseNotFound,
)
from services.bible.reference import ChapterRef, RangeRef, VerseRef


def test_lookup_strings(service):
    assert service.lookup("John 3:16") == JOHN_3_16_PLAIN
    assert service.lookup("Psalm 23:1") == "The LORD is my shepherd; I shall not want."
    assert service.lookup("Luke 23:39-40") == (
        f"{verse_text('Luke', 23, 39)} {verse_text('Luke', 23, 40)}"
    )


def test_lookup_with_superscripts(service):
    assert service.lookup("Luke 23:39-43", include_superscripts=True).startswith("³⁹ ")


def test_lookup_reference_object(service):
    ref = VerseRef(service.store.book_id("1 John"), 4, 8)
    assert service.lookup(ref) == "He that loveth not knoweth not God; for God is love."


def test_lookup_errors(service):
    with pytest.raises(ReferenceParseError):
        service.lookup("the beginning")
    with pytest.raises(VerseNotFound):
        service.lookup("John 3:37")
    with pytest.raises(ChapterNotFound):
        service.lookup("John 21:25")
    with pytest.raises(RangeOutOfBounds):
        service.lookup("Luke 23:39-99")


def test_parse(service):
    assert isinstance(service.parse("Psalms 23"), ChapterRef)
    assert isinstance(service.parse("Luke 23:39-43"), RangeRef)


def test_get_verse_range_and_chapter(service):
    assert service.get_verse("jn", 3, 17) == verse_text("John", 3, 17)
    assert service.get_range("Luke", 23, 39, 40) == service.lookup("Luke 23:39-40")
    assert service.get_chapter("Genesis", 2) == (
        f"{verse_text('Genesis', 2, 1)} {verse_text('Genesis', 2, 2)}"
    )
    assert service.get_book("Genesis").count("\n\n") == 1


def test_structure(service):
    assert service.books()[0] == "Genesis"
    assert service.chapters("Genesis") == [1, 2]
    assert service.verses("Genesis", 2) == [1, 2]
    assert service.max_verse("John", 3) == 36
    assert service.translation_name == "Sample Bible"


def test_random_verse(service):
    for _ in range(50):
        ref = service.random_verse()
        assert service.lookup(ref)


def test_detect_and_lookup_detected(service):
    text = "Read John 3:16 and 1 John 4:8."
    assert [str(r) for r in service.detect_references(text)] == ["John 3:16", "1 John 4:8"]

    pairs = service.lookup_detected(text)
    assert [str(ref) for ref, _ in pairs] == ["John 3:16", "1 John 4:8"]
    assert pairs[0][1] == JOHN_3_16_PLAIN

    spans = service.find_references(text)
    assert spans[1].text == "1 John 4:8"


def test_from_translation(translation_file):
    service = BibleService.from_translation(Translation.custom("Mine", translation_file))
    assert service.translation_name == "Custom Translation: Mine"
    assert service.max_verse("Luke", 23) == 56


def test_from_config(storage):
    storage.translation_file("KJV").write_text(
        build_translation_text(preamble="KJV"), encoding="utf-8"
    )
    service = BibleService.from_config(storage)
    assert service.translation_name == "King James Version"
    assert service.store.total_verses() == TOTAL_VERSES


def test_from_config_requires_installed_default(storage):
    storage.update_config(default_translation="ASV")
    with pytest.raises(TranslationNotInstalled):
        BibleService.from_config(storage)
