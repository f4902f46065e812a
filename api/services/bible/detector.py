# api/services/bible/detector.py
"""
Find scripture references in free text.

Handles many common forms:
- "John 3:16", "Jn 3:16", "Gen. 1:1"
- "1 John 4:8", "1John 4:8", "I John 4:8"
- "Luke 23:39-43" (hyphen, en dash or em dash)
- "Romans 8:28, 31-39, 9:1" (each item is its own reference)
- "Psalms 23" (chapter only; the name must be spelled as the translation spells it)

Only references that exist in the loaded translation are returned:
unknown books, chapters or verses past the end, reversed ranges and
ranges crossing into another chapter ("John 3:36-4:2") are dropped,
never clamped. Catalogue names of books the translation lacks are still
matched, so "1 John 4:1" is consumed whole and dropped rather than read
as "John 4:1".
"""

import logging
import re
import threading
import weakref
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .books import BookId, catalogue_keys
from .errors import BibleError, NotFound
from .reference import ChapterRef, RangeRef, Reference, VerseRef
from .store import TranslationStore

logger = logging.getLogger(__name__)

_DASH = r"\s*[-–—]\s*"
_RANGE_TAIL = rf"(?:{_DASH}(?:\d+:)?\d+)?"

_ITEM_RE = re.compile(
    rf"(?:(?P<c1>\d+):)?(?P<v1>\d+)(?:{_DASH}(?:(?P<c2>\d+):)?(?P<v2>\d+))?"
)


@dataclass(frozen=True)
class DetectedReference:
    """
    A reference found in text.

    Attributes:
        reference: The validated reference
        start: Offset of the first character in the input
        end: Offset just past the last character
        text: The matched substring
    """
    reference: Reference
    start: int
    end: int
    text: str


def _book_alternation(keys: List[str]) -> str:
    """Regex alternation of book keys; words may be separated by any whitespace."""
    return "|".join(r"\s+".join(re.escape(w) for w in key.split(" ")) for key in keys)


def book_keys(store: TranslationStore) -> List[str]:
    """The store's names and aliases plus every catalogue key, longest first."""
    keys = set(store.normalizer.candidates()) | catalogue_keys()
    return sorted(keys, key=lambda k: (-len(k), k))


def build_pattern(store: TranslationStore) -> re.Pattern:
    """Compile the reference pattern for a store's book names, longest first."""
    books = _book_alternation(book_keys(store))
    # A list item must not be the number of a following book ("..., 1 John 4:8")
    item = rf"(?!(?:{books})\.?\s*\d)(?:\d+:)?\d+{_RANGE_TAIL}(?![\d:])"
    pattern = (
        rf"(?<!\w)(?P<book>{books})\.?\s*(?P<chapter>\d+)"
        rf"(?:"
        rf":(?P<verses>\d+{_RANGE_TAIL}(?:\s*,\s*{item})*)"
        rf"|(?![\w:])"
        rf")"
    )
    return re.compile(pattern, re.IGNORECASE)


class Detector:
    """
    Reference scanner bound to one translation.

    The pattern is compiled from the store's own book names and aliases
    together with the catalogue keys; pass a prebuilt pattern to share one
    compilation between detectors of the same store.

    Usage:
        detector = Detector(store)
        detector.detect("Show me John 3:16")   # [VerseRef(John, 3, 16)]
    """

    def __init__(self, store: TranslationStore, pattern: Optional[re.Pattern] = None):
        self.store = store
        self._pattern = pattern if pattern is not None else build_pattern(store)

    def iter_matches(self, text: str) -> Iterator[DetectedReference]:
        """Yield valid references in order of their start offset."""
        if not text:
            return

        for match in self._pattern.finditer(text):
            try:
                book = self.store.book_id(match.group("book"))
            except BibleError as e:
                logger.debug(f"Skipping unresolvable book {match.group('book')!r}: {e}")
                continue

            chapter = int(match.group("chapter"))
            verses = match.group("verses")

            if verses is None:
                found = self._chapter_reference(match, book, chapter)
                if found:
                    yield found
                continue

            base = match.start("verses")
            for index, item in enumerate(_ITEM_RE.finditer(verses)):
                start = match.start() if index == 0 else base + item.start()
                end = base + item.end()

                if item.group("c1"):
                    chapter = int(item.group("c1"))

                reference = self._item_reference(book, chapter, item)
                if reference is None:
                    logger.debug(f"Skipping out-of-bounds reference {text[start:end]!r}")
                    continue

                yield DetectedReference(reference, start, end, text[start:end])

    def detect(self, text: str) -> List[Reference]:
        """Return every valid reference in text, in order of appearance."""
        return [d.reference for d in self.iter_matches(text)]

    def _chapter_reference(self, match, book: BookId, chapter: int) -> Optional[DetectedReference]:
        # Chapter-only references need the book spelled as the translation spells it
        if re.sub(r"\s+", " ", match.group("book")) != book.name:
            return None
        if not 1 <= chapter <= self.store.chapter_count(book):
            return None
        return DetectedReference(ChapterRef(book, chapter), match.start(), match.end(), match.group())

    def _item_reference(self, book: BookId, chapter: int, item) -> Optional[Reference]:
        start = int(item.group("v1"))
        end_chapter = item.group("c2")
        if end_chapter is not None and int(end_chapter) != chapter:
            return None

        try:
            count = self.store.verse_count(book, chapter)
        except NotFound:
            return None

        if item.group("v2") is None:
            if 1 <= start <= count:
                return VerseRef(book, chapter, start)
            return None

        end = int(item.group("v2"))
        if 1 <= start <= end <= count:
            return RangeRef(book, chapter, start, end)
        return None

    def parse(self, text: str) -> Optional[Reference]:
        """
        Parse a single whole reference string without bounds checking.

        Returns None when the text is not exactly one reference. A reversed
        range raises InvalidRange rather than being swapped.
        """
        match = self._pattern.fullmatch((text or "").strip())
        if not match:
            return None

        try:
            book = self.store.book_id(match.group("book"))
        except BibleError:
            return None

        chapter = int(match.group("chapter"))
        verses = match.group("verses")
        if verses is None:
            return ChapterRef(book, chapter)

        items = list(_ITEM_RE.finditer(verses))
        if len(items) != 1:
            return None

        item = items[0]
        if item.group("c2") is not None and int(item.group("c2")) != chapter:
            return None
        if item.group("v2") is None:
            return VerseRef(book, chapter, int(item.group("v1")))
        return RangeRef(book, chapter, int(item.group("v1")), int(item.group("v2")))


_patterns: "weakref.WeakKeyDictionary[TranslationStore, re.Pattern]" = weakref.WeakKeyDictionary()
_patterns_lock = threading.Lock()


def get_detector(store: TranslationStore) -> Detector:
    """Return a Detector for a store, reusing its compiled pattern while the store lives."""
    with _patterns_lock:
        pattern = _patterns.get(store)
        if pattern is None:
            pattern = build_pattern(store)
            _patterns[store] = pattern
    return Detector(store, pattern)


def detect(text: str, store: TranslationStore) -> List[Reference]:
    """Find all valid references to a store's books in text."""
    return get_detector(store).detect(text)


def find_references(text: str, store: TranslationStore) -> List[DetectedReference]:
    """Find all valid references in text, with their spans."""
    return list(get_detector(store).iter_matches(text))


def parse_reference(ref_string: str, store: TranslationStore) -> Optional[Reference]:
    """
    Parse a reference string such as "John 3:16", "Luke 23:39-43" or "Psalm 23".

    Returns:
        Reference with a BookId, or None if parsing fails
    """
    return get_detector(store).parse(ref_string)
