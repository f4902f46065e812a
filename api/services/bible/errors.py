# api/services/bible/errors.py
"""
Exceptions raised by the Bible lookup services.

Lookup errors are raised at query time against a loaded translation.
Load errors are raised while parsing translation text into a store.
"""

from typing import Optional


class BibleError(Exception):
    """Base exception for all Bible service errors."""
    pass


# -----------------------------------------------------------------------------
# Lookup errors
# -----------------------------------------------------------------------------

class ReferenceLookupError(BibleError):
    """Base exception for failures resolving a reference against a store."""
    pass


class NotFound(ReferenceLookupError):
    """The book, chapter or verse is absent from this translation."""
    pass


class BookNotFound(NotFound):
    """The specified book was not found in the translation."""
    pass


class ChapterNotFound(NotFound):
    """The specified chapter was not found in the translation."""
    pass


class VerseNotFound(NotFound):
    """The specified verse was not found in the translation."""
    pass


class InvalidRange(ReferenceLookupError):
    """A verse range starts after it ends."""
    pass


class RangeOutOfBounds(ReferenceLookupError):
    """A verse range ends past the last verse of its chapter."""
    pass


class AmbiguousName(BibleError):
    """A book name or alias maps to more than one book (bad alias table)."""
    pass


class ReferenceParseError(BibleError):
    """Raised when a reference string cannot be parsed."""
    pass


# -----------------------------------------------------------------------------
# Load errors
# -----------------------------------------------------------------------------

class TranslationLoadError(BibleError):
    """
    Base exception for malformed translation source text.

    Attributes:
        line_number: 1-based line number in the source (None if unknown)
        line: The offending source line
    """

    def __init__(self, message: str, line_number: Optional[int] = None, line: str = ""):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class MalformedLine(TranslationLoadError):
    """A line does not match the `Book Chapter:Verse Text` format."""
    pass


class DuplicateVerse(TranslationLoadError):
    """The same book/chapter/verse appears more than once."""
    pass


class NonMonotonicSequence(TranslationLoadError):
    """Books, chapters or verses are out of order or skip numbers."""
    pass


# -----------------------------------------------------------------------------
# Translation management errors
# -----------------------------------------------------------------------------

class TranslationError(BibleError):
    """Base exception for translation catalogue operations."""
    pass


class UnknownTranslationError(TranslationError):
    """Raised when a translation code is not in the catalogue."""
    pass


class TranslationNotInstalled(TranslationError):
    """Raised when a catalogue translation has not been downloaded yet."""
    pass


class InvalidCustomTranslationFile(TranslationError):
    """The custom translation file is invalid or does not exist."""
    pass


class DownloadError(TranslationError):
    """Raised when a translation download fails."""
    pass
