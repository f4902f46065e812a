# api/services/bible/reference.py
"""
Structured scripture references.

Three immutable variants:
- VerseRef("John", 3, 16)        -> "John 3:16"
- RangeRef("Luke", 23, 39, 43)   -> "Luke 23:39-43"
- ChapterRef("Psalms", 23)       -> "Psalms 23"

`book` is either a BookId validated against a store, or a raw name that
the resolver normalizes. A reference is only meaningful relative to the
store it was resolved or detected against.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .books import BookId
from .errors import InvalidRange

BookRef = Union[BookId, str]


def capitalize_book(name: str) -> str:
    """Capitalize each word of a book name, leaving numeric prefixes alone."""
    words = []
    for word in name.split():
        if word[0].isdigit():
            words.append(word)
        else:
            words.append(word[0].upper() + word[1:])
    return " ".join(words)


def book_name(book: BookRef) -> str:
    """Display name for a BookId or raw book string."""
    if isinstance(book, BookId):
        return book.name
    return capitalize_book(book)


@dataclass(frozen=True)
class Reference:
    """Base class for all reference variants."""
    book: BookRef
    chapter: int

    kind = "reference"

    @property
    def book_name(self) -> str:
        return book_name(self.book)

    @property
    def verse_start(self) -> int:
        return 1

    @property
    def verse_end(self) -> int:
        return self.verse_start

    def sort_key(self) -> Tuple:
        if isinstance(self.book, BookId):
            book_key = (self.book.index, self.book.name)
        else:
            book_key = (-1, self.book.casefold())
        return book_key + (self.chapter, self.verse_start, self.verse_end)

    def __lt__(self, other: "Reference") -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "ref": str(self),
            "kind": self.kind,
            "book": self.book_name,
            "chapter": self.chapter,
            "verse_start": None if isinstance(self, ChapterRef) else self.verse_start,
            "verse_end": self.verse_end if isinstance(self, RangeRef) else None,
        }


@dataclass(frozen=True)
class VerseRef(Reference):
    """A single verse."""
    verse: int

    kind = "verse"

    @property
    def verse_start(self) -> int:
        return self.verse

    def __str__(self) -> str:
        return f"{self.book_name} {self.chapter}:{self.verse}"


@dataclass(frozen=True)
class RangeRef(Reference):
    """
    An inclusive verse range inside one chapter.

    Raises:
        InvalidRange: If start > end
    """
    start: int
    end: int

    kind = "range"

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRange(
                f"{self.book_name} {self.chapter}:{self.start}-{self.end} "
                f"starts after it ends"
            )

    @property
    def verse_start(self) -> int:
        return self.start

    @property
    def verse_end(self) -> int:
        return self.end

    @property
    def verse_count(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.book_name} {self.chapter}:{self.start}-{self.end}"


@dataclass(frozen=True)
class ChapterRef(Reference):
    """A whole chapter."""

    kind = "chapter"

    def __str__(self) -> str:
        return f"{self.book_name} {self.chapter}"
