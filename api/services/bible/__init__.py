# api/services/bible/__init__.py
"""
Bible text lookup services.

This package provides:
- BibleService: Unified interface over one loaded translation
- TranslationStore: Immutable in-memory text of a translation
- BookNameNormalizer: Book name/alias resolution
- VerseRef, RangeRef, ChapterRef: Structured references
- resolve: Reference to text
- RandomSelector: Uniform random verse selection
- Detector / detect: Find references in free text
- TranslationManager: Download and manage openbible.com translations
- BibleStorage: Directory structure and configuration management
"""

from .errors import (
    BibleError,
    ReferenceLookupError,
    NotFound,
    BookNotFound,
    ChapterNotFound,
    VerseNotFound,
    InvalidRange,
    RangeOutOfBounds,
    AmbiguousName,
    ReferenceParseError,
    TranslationLoadError,
    MalformedLine,
    DuplicateVerse,
    NonMonotonicSequence,
    TranslationError,
    UnknownTranslationError,
    TranslationNotInstalled,
    InvalidCustomTranslationFile,
    DownloadError,
)
from .books import BookId, BookNameNormalizer, normalize_key, reload_book_catalogue
from .store import Book, Chapter, Verse, TranslationStore
from .loader import load_translation_file, parse_translation_text
from .reference import Reference, VerseRef, RangeRef, ChapterRef
from .resolver import resolve, resolve_range, book_text
from .random_selector import RandomSelector, random_reference
from .detector import (
    DetectedReference,
    Detector,
    detect,
    find_references,
    parse_reference,
)
from .storage import BibleStorage
from .translations import (
    TRANSLATIONS,
    Translation,
    TranslationManager,
    load_translation,
)
from .bible_service import BibleService

__all__ = [
    # Unified Service (primary interface)
    "BibleService",
    # Store and loading
    "Book",
    "Chapter",
    "Verse",
    "TranslationStore",
    "load_translation_file",
    "parse_translation_text",
    # Book names
    "BookId",
    "BookNameNormalizer",
    "normalize_key",
    "reload_book_catalogue",
    # References
    "Reference",
    "VerseRef",
    "RangeRef",
    "ChapterRef",
    "resolve",
    "resolve_range",
    "book_text",
    # Random
    "RandomSelector",
    "random_reference",
    # Detection
    "DetectedReference",
    "Detector",
    "detect",
    "find_references",
    "parse_reference",
    # Translations
    "TRANSLATIONS",
    "Translation",
    "TranslationManager",
    "load_translation",
    "BibleStorage",
    # Errors
    "BibleError",
    "ReferenceLookupError",
    "NotFound",
    "BookNotFound",
    "ChapterNotFound",
    "VerseNotFound",
    "InvalidRange",
    "RangeOutOfBounds",
    "AmbiguousName",
    "ReferenceParseError",
    "TranslationLoadError",
    "MalformedLine",
    "DuplicateVerse",
    "NonMonotonicSequence",
    "TranslationError",
    "UnknownTranslationError",
    "TranslationNotInstalled",
    "InvalidCustomTranslationFile",
    "DownloadError",
]
