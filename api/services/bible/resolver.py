# api/services/bible/resolver.py
"""
Resolve references to verse text.

Pure reads over an immutable TranslationStore:
- VerseRef    -> the verse text
- RangeRef    -> verses start..end joined by a single space
- ChapterRef  -> every verse of the chapter, same rule as a range

With include_superscripts, ranges and chapters prefix each verse with its
number in superscript digits ("³⁹ text ⁴⁰ text") and embedded markers are
kept; without it, embedded markers are stripped.
"""

import logging
from typing import Iterable, List

from .errors import InvalidRange, RangeOutOfBounds
from .reference import ChapterRef, RangeRef, Reference, VerseRef
from .store import BookLike, TranslationStore, Verse
from .superscripts import strip_superscripts, to_superscript

logger = logging.getLogger(__name__)


def _verse_text(verse: Verse, include_superscripts: bool) -> str:
    if include_superscripts or not verse.has_superscripts:
        return verse.text
    return strip_superscripts(verse.text)


def _join(verses: Iterable[Verse], include_superscripts: bool) -> str:
    parts: List[str] = []
    for verse in verses:
        text = _verse_text(verse, include_superscripts)
        if include_superscripts:
            text = f"{to_superscript(verse.number)} {text}"
        parts.append(text)
    return " ".join(parts)


def resolve(
    reference: Reference,
    store: TranslationStore,
    include_superscripts: bool = False,
) -> str:
    """
    Return the text of a reference.

    Args:
        reference: VerseRef, RangeRef or ChapterRef
        store: Translation to read from
        include_superscripts: Show verse numbers (ranges/chapters) and keep
            embedded superscript markers

    Raises:
        NotFound: Book, chapter or verse absent from this translation
        InvalidRange: Range starts after it ends
        RangeOutOfBounds: Range ends past the chapter's last verse
    """
    book = store.resolve_book(reference.book)

    if isinstance(reference, VerseRef):
        verse = store.verse(book, reference.chapter, reference.verse)
        return _verse_text(verse, include_superscripts)

    if isinstance(reference, RangeRef):
        return _resolve_range(
            store, book, reference.chapter, reference.start, reference.end, include_superscripts
        )

    if isinstance(reference, ChapterRef):
        chapter = store.chapter(book, reference.chapter)
        return _join(chapter.verses, include_superscripts)

    raise TypeError(f"Unsupported reference type: {type(reference).__name__}")


def _resolve_range(
    store: TranslationStore,
    book: BookLike,
    chapter_number: int,
    start: int,
    end: int,
    include_superscripts: bool,
) -> str:
    if start > end:
        raise InvalidRange(f"Verse range {start}-{end} starts after it ends")

    chapter = store.chapter(book, chapter_number)
    # Any end past the chapter is a shape error, even when start is too.
    if end > chapter.verse_count:
        raise RangeOutOfBounds(
            f"{store.book(book).name} {chapter_number} has {chapter.verse_count} verses, "
            f"range ends at {end}"
        )
    store.verse(book, chapter_number, start)

    return _join(chapter.verses[start - 1:end], include_superscripts)


def resolve_range(
    store: TranslationStore,
    book: BookLike,
    chapter: int,
    start: int,
    end: int,
    include_superscripts: bool = False,
) -> str:
    """Resolve an intra-chapter verse range without building a RangeRef first."""
    return _resolve_range(
        store, store.resolve_book(book), chapter, start, end, include_superscripts
    )


def book_text(store: TranslationStore, book: BookLike, include_superscripts: bool = True) -> str:
    """
    Return the full text of a book, chapters separated by a blank line.

    Note: this can be a very large string.
    """
    b = store.book(book)
    logger.debug(f"Building full text of {b.name} ({b.chapter_count} chapters)")
    return "\n\n".join(_join(c.verses, include_superscripts) for c in b.chapters)
