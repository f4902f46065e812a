# api/services/bible/store.py
"""
In-memory store for one Bible translation.

A TranslationStore is built once (see loader.py) and never mutated, so a
single instance can be shared by any number of reader threads. Books keep
the translation's canonical order; chapters and verses are dense and
numbered from 1.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .books import BookId, BookNameNormalizer
from .errors import BookNotFound, ChapterNotFound, NonMonotonicSequence, VerseNotFound
from .superscripts import has_superscripts

logger = logging.getLogger(__name__)

BookLike = Union[BookId, str]


@dataclass(frozen=True)
class Verse:
    """A single verse: its number, text and whether the text embeds superscripts."""
    number: int
    text: str
    has_superscripts: bool = False

    @classmethod
    def from_text(cls, number: int, text: str) -> "Verse":
        return cls(number=number, text=text, has_superscripts=has_superscripts(text))


@dataclass(frozen=True)
class Chapter:
    """A chapter and its verses, in order."""
    number: int
    verses: Tuple[Verse, ...]

    @property
    def verse_count(self) -> int:
        return len(self.verses)


@dataclass(frozen=True)
class Book:
    """
    A book of one translation.

    Attributes:
        name: Canonical name as spelled by the translation
        chapters: Chapters in order
        aliases: Accepted alternative spellings (normalized keys)
    """
    name: str
    chapters: Tuple[Chapter, ...]
    aliases: Tuple[str, ...] = field(default=())

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def verse_count(self) -> int:
        return sum(c.verse_count for c in self.chapters)


class TranslationStore:
    """
    Immutable, indexed text of one translation.

    Every lookup is bounds-checked and raises a NotFound subclass when the
    book, chapter or verse is not present.

    Usage:
        store = TranslationStore("King James Version", books)
        john = store.book_id("John")
        store.verse_count(john, 3)         # 36
        store.verse_text(john, 3, 16)      # "For God so loved the world..."
    """

    def __init__(
        self,
        name: str,
        books: Sequence[Book],
        extra_aliases: Optional[Mapping[str, Iterable[str]]] = None,
        use_catalogue: bool = True,
    ):
        for book in books:
            _check_dense(book)

        self.name = name
        self.normalizer = BookNameNormalizer(
            [b.name for b in books],
            extra_aliases=extra_aliases,
            use_catalogue=use_catalogue,
        )
        self._books: Tuple[Book, ...] = tuple(
            replace(book, aliases=tuple(self.normalizer.aliases_for(book_id)))
            for book, book_id in zip(books, self.normalizer.book_ids)
        )
        self._total_verses = sum(b.verse_count for b in self._books)

        logger.info(
            f"Loaded translation {name!r}: {len(self._books)} books, "
            f"{self._total_verses} verses"
        )

    def __repr__(self) -> str:
        return f"<TranslationStore {self.name!r} books={len(self._books)}>"

    # -------------------------------------------------------------------------
    # Books
    # -------------------------------------------------------------------------

    def book_count(self) -> int:
        return len(self._books)

    def book_ids(self) -> Tuple[BookId, ...]:
        """All books in canonical order."""
        return self.normalizer.book_ids

    def books(self) -> List[str]:
        """Canonical book names in order."""
        return [b.name for b in self._books]

    def book_id(self, name: str) -> BookId:
        """Resolve a book name or alias through the normalizer."""
        return self.normalizer.normalize(name)

    def resolve_book(self, book: BookLike) -> BookId:
        """
        Validate a BookId against this store, or normalize a name.

        A BookId from another store is only accepted when it names the
        same book at the same position here.
        """
        if isinstance(book, BookId):
            ids = self.normalizer.book_ids
            if 0 <= book.index < len(ids) and ids[book.index] == book:
                return book
            raise BookNotFound(f"Book {book.name!r} is not part of {self.name!r}")
        return self.book_id(book)

    def book(self, book: BookLike) -> Book:
        return self._books[self.resolve_book(book).index]

    # -------------------------------------------------------------------------
    # Chapters and verses
    # -------------------------------------------------------------------------

    def chapter(self, book: BookLike, chapter: int) -> Chapter:
        b = self.book(book)
        if not 1 <= chapter <= len(b.chapters):
            raise ChapterNotFound(f"{b.name} has no chapter {chapter}")
        return b.chapters[chapter - 1]

    def chapter_count(self, book: BookLike) -> int:
        return self.book(book).chapter_count

    def chapters(self, book: BookLike) -> List[int]:
        """Chapter numbers of a book."""
        return [c.number for c in self.book(book).chapters]

    def verse_count(self, book: BookLike, chapter: int) -> int:
        return self.chapter(book, chapter).verse_count

    def max_verse(self, book: BookLike, chapter: int) -> int:
        """Highest verse number in a chapter (equal to its verse count)."""
        return self.verse_count(book, chapter)

    def verses(self, book: BookLike, chapter: int) -> List[int]:
        """Verse numbers of a chapter."""
        return [v.number for v in self.chapter(book, chapter).verses]

    def verse(self, book: BookLike, chapter: int, verse: int) -> Verse:
        c = self.chapter(book, chapter)
        if not 1 <= verse <= len(c.verses):
            name = self.book(book).name
            raise VerseNotFound(f"{name} {chapter} has no verse {verse}")
        return c.verses[verse - 1]

    def verse_text(self, book: BookLike, chapter: int, verse: int) -> str:
        return self.verse(book, chapter, verse).text

    # -------------------------------------------------------------------------
    # Whole-translation views
    # -------------------------------------------------------------------------

    def total_verses(self) -> int:
        return self._total_verses

    def iter_verses(self) -> Iterator[Tuple[BookId, int, int]]:
        """Yield (book, chapter, verse) for every verse in canonical order."""
        for book_id, book in zip(self.normalizer.book_ids, self._books):
            for chapter in book.chapters:
                for verse in chapter.verses:
                    yield book_id, chapter.number, verse.number


def _check_dense(book: Book):
    """Chapters and verses must be numbered 1..n with no gaps."""
    if not book.chapters:
        raise NonMonotonicSequence(f"{book.name} has no chapters")
    for expected, chapter in enumerate(book.chapters, start=1):
        if chapter.number != expected:
            raise NonMonotonicSequence(
                f"{book.name}: expected chapter {expected}, found {chapter.number}"
            )
        if not chapter.verses:
            raise NonMonotonicSequence(f"{book.name} {chapter.number} has no verses")
        for expected_verse, verse in enumerate(chapter.verses, start=1):
            if verse.number != expected_verse:
                raise NonMonotonicSequence(
                    f"{book.name} {chapter.number}: expected verse {expected_verse}, "
                    f"found {verse.number}"
                )
