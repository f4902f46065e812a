# api/services/bible/bible_service.py
"""
Unified Bible service for one loaded translation.

Wires the independent components (store, resolver, detector, random
selector) behind a single interface. Each service instance owns exactly
one TranslationStore; the translation is always chosen explicitly.
"""

import logging
import random
from typing import List, Optional, Tuple, Union

from .detector import DetectedReference, Detector
from .errors import ReferenceParseError
from .random_selector import RandomSelector
from .reference import Reference, VerseRef
from .resolver import book_text, resolve, resolve_range
from .storage import BibleStorage
from .store import BookLike, TranslationStore
from .translations import Translation, TranslationManager, load_translation

logger = logging.getLogger(__name__)


class BibleService:
    """
    Scripture lookup, detection and random selection over one translation.

    Usage:
        service = BibleService.from_translation(Translation.custom("Mine", "mine.txt"))

        # Basic lookup
        service.lookup("John 3:16")
        service.lookup("Luke 23:39-43", include_superscripts=True)

        # Find references in text
        refs = service.detect_references("Read John 3:16 and Romans 8:28")

        # Random verse
        ref = service.random_verse()
        print(ref, service.lookup(ref))
    """

    def __init__(self, store: TranslationStore, rng: Optional[random.Random] = None):
        self.store = store
        self.detector = Detector(store)
        self.selector = RandomSelector(store, rng)

    @classmethod
    def from_translation(cls, translation: Translation, **kwargs) -> "BibleService":
        """Load a translation and build a service for it."""
        return cls(load_translation(translation), **kwargs)

    @classmethod
    def from_config(cls, storage: Optional[BibleStorage] = None, **kwargs) -> "BibleService":
        """Build a service for the default translation named in the storage config."""
        manager = TranslationManager(storage)
        code = manager.storage.get_default_translation()
        logger.info(f"Using configured default translation {code}")
        return cls.from_translation(manager.get_translation(code), **kwargs)

    @property
    def translation_name(self) -> str:
        return self.store.name

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def parse(self, ref: str) -> Reference:
        """
        Parse a reference string against this translation.

        Raises:
            ReferenceParseError: If the string is not a single reference
            InvalidRange: If the range starts after it ends
        """
        parsed = self.detector.parse(ref)
        if parsed is None:
            raise ReferenceParseError(f"Could not parse reference: {ref}")
        return parsed

    def lookup(self, ref: Union[str, Reference], include_superscripts: bool = False) -> str:
        """
        Get the text of a verse, range or chapter.

        Args:
            ref: Reference string (e.g., "John 3:16") or Reference
            include_superscripts: Show inline verse numbers and footnote markers

        Raises:
            ReferenceParseError, NotFound, InvalidRange, RangeOutOfBounds
        """
        if isinstance(ref, str):
            ref = self.parse(ref)
        return resolve(ref, self.store, include_superscripts)

    def get_verse(self, book: BookLike, chapter: int, verse: int,
                  include_superscripts: bool = False) -> str:
        return resolve(VerseRef(self.store.resolve_book(book), chapter, verse),
                       self.store, include_superscripts)

    def get_range(self, book: BookLike, chapter: int, start: int, end: int,
                  include_superscripts: bool = False) -> str:
        return resolve_range(self.store, book, chapter, start, end, include_superscripts)

    def get_chapter(self, book: BookLike, chapter: int, include_superscripts: bool = False) -> str:
        return resolve_range(
            self.store, book, chapter, 1, self.store.verse_count(book, chapter),
            include_superscripts,
        )

    def get_book(self, book: BookLike, include_superscripts: bool = True) -> str:
        """Full text of a book. Note: this can be a very large string."""
        return book_text(self.store, book, include_superscripts)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def books(self) -> List[str]:
        return self.store.books()

    def chapters(self, book: BookLike) -> List[int]:
        return self.store.chapters(book)

    def verses(self, book: BookLike, chapter: int) -> List[int]:
        return self.store.verses(book, chapter)

    def max_verse(self, book: BookLike, chapter: int) -> int:
        return self.store.max_verse(book, chapter)

    # -------------------------------------------------------------------------
    # Random and detection
    # -------------------------------------------------------------------------

    def random_verse(self) -> VerseRef:
        """A uniformly random verse of this translation."""
        return self.selector.choose()

    def detect_references(self, text: str) -> List[Reference]:
        """Find all valid scripture references in text."""
        return self.detector.detect(text)

    def find_references(self, text: str) -> List[DetectedReference]:
        """Find references in text with their spans."""
        return list(self.detector.iter_matches(text))

    def lookup_detected(self, text: str, include_superscripts: bool = False) -> List[Tuple[Reference, str]]:
        """
        Find references in text and look them all up.

        Returns:
            (reference, text) pairs in order of appearance
        """
        return [
            (ref, resolve(ref, self.store, include_superscripts))
            for ref in self.detector.detect(text)
        ]
