# api/tests/test_reference.py
"""
Tests for the reference model.

Run with: pytest tests/test_reference.py -v
"""

import pytest

from services.bible.books import BookId
from services.bible.errors import InvalidRange
from services.bible.reference import ChapterRef, RangeRef, VerseRef, capitalize_book


def test_rendering():
    assert str(VerseRef("john", 3, 16)) == "John 3:16"
    assert str(RangeRef("luke", 23, 39, 43)) == "Luke 23:39-43"
    assert str(ChapterRef("psalms", 23)) == "Psalms 23"
    assert str(VerseRef(BookId(4, "1 John"), 4, 8)) == "1 John 4:8"


def test_capitalize_book():
    assert capitalize_book("1 john") == "1 John"
    assert capitalize_book("song of solomon") == "Song Of Solomon"


def test_reversed_range_is_rejected():
    with pytest.raises(InvalidRange):
        RangeRef("Luke", 23, 43, 39)


def test_single_verse_range():
    ref = RangeRef("Luke", 23, 39, 39)
    assert ref.verse_count == 1
    assert ref.verse_start == ref.verse_end == 39


def test_structural_equality():
    john = BookId(4, "John")
    assert VerseRef(john, 3, 16) == VerseRef(john, 3, 16)
    assert VerseRef(john, 3, 16) != VerseRef(john, 3, 17)
    assert VerseRef(john, 3, 16) != RangeRef(john, 3, 16, 16)
    assert len({VerseRef(john, 3, 16), VerseRef(john, 3, 16)}) == 1


def test_ordering_follows_canonical_position():
    genesis = BookId(0, "Genesis")
    john = BookId(4, "John")
    refs = [
        VerseRef(john, 3, 16),
        ChapterRef(genesis, 2),
        RangeRef(john, 3, 1, 5),
        VerseRef(genesis, 1, 1),
    ]
    assert [str(r) for r in sorted(refs)] == [
        "Genesis 1:1",
        "Genesis 2",
        "John 3:1-5",
        "John 3:16",
    ]


def test_to_dict():
    assert RangeRef(BookId(3, "Luke"), 23, 39, 43).to_dict() == {
        "ref": "Luke 23:39-43",
        "kind": "range",
        "book": "Luke",
        "chapter": 23,
        "verse_start": 39,
        "verse_end": 43,
    }
    assert VerseRef("john", 3, 16).to_dict()["verse_end"] is None
    chapter = ChapterRef("psalms", 23).to_dict()
    assert chapter["kind"] == "chapter"
    assert chapter["verse_start"] is None
