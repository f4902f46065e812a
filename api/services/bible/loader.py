# api/services/bible/loader.py
"""
Parse line-oriented translation text into a TranslationStore.

Each non-blank line holds one verse:

    Book Chapter:Verse Text

`Book` may contain spaces and digits ("1 John", "Song of Solomon"),
the separator after the verse number may be spaces or a tab, and `Text`
is the rest of the line including any superscript markers. Books,
chapters and verses must appear in order with no gaps or repeats.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from .books import normalize_key
from .errors import DuplicateVerse, MalformedLine, NonMonotonicSequence
from .store import Book, Chapter, TranslationStore, Verse

logger = logging.getLogger(__name__)

LINE_PATTERN = re.compile(
    r"^\s*(?P<book>\S.*?)\s+(?P<chapter>\d+):(?P<verse>\d+)(?:\s+(?P<text>.*?))?\s*$"
)


class _Builder:
    """Accumulates verses while enforcing ordering, then emits Books."""

    def __init__(self):
        self.books: List[Tuple[str, List[List[Verse]]]] = []
        self.book_keys: Dict[str, int] = {}
        self.seen: Set[Tuple[str, int, int]] = set()

    def add(self, book: str, chapter: int, verse: int, text: str, line_number: int, line: str):
        key = normalize_key(book)

        if (key, chapter, verse) in self.seen:
            raise DuplicateVerse(f"{book} {chapter}:{verse} appears twice", line_number, line)

        if key in self.book_keys:
            if self.book_keys[key] != len(self.books) - 1:
                raise NonMonotonicSequence(
                    f"{book} resumes after another book started", line_number, line
                )
        else:
            self.book_keys[key] = len(self.books)
            self.books.append((book, []))

        chapters = self.books[-1][1]

        if chapter == len(chapters) + 1:
            if verse != 1:
                raise NonMonotonicSequence(
                    f"{book} {chapter} starts at verse {verse}, expected 1", line_number, line
                )
            chapters.append([])
        elif chapter != len(chapters):
            expected = len(chapters) + 1 if chapters else 1
            raise NonMonotonicSequence(
                f"{book}: found chapter {chapter}, expected {expected}", line_number, line
            )

        verses = chapters[-1]
        if verse != len(verses) + 1:
            raise NonMonotonicSequence(
                f"{book} {chapter}: found verse {verse}, expected {len(verses) + 1}",
                line_number,
                line,
            )

        verses.append(Verse.from_text(verse, text))
        self.seen.add((key, chapter, verse))

    def build(self) -> List[Book]:
        return [
            Book(
                name=name,
                chapters=tuple(
                    Chapter(number=i, verses=tuple(verses))
                    for i, verses in enumerate(chapters, start=1)
                ),
            )
            for name, chapters in self.books
        ]


def parse_line(line: str, line_number: Optional[int] = None) -> Tuple[str, int, int, str]:
    """
    Split one source line into (book, chapter, verse, text).

    Raises:
        MalformedLine: If the line does not match `Book Chapter:Verse Text`
    """
    match = LINE_PATTERN.match(line)
    if not match:
        raise MalformedLine("expected 'Book Chapter:Verse Text'", line_number, line)

    book = re.sub(r"\s+", " ", match.group("book")).strip()
    chapter = int(match.group("chapter"))
    verse = int(match.group("verse"))
    text = match.group("text") or ""

    if chapter < 1 or verse < 1:
        raise MalformedLine("chapter and verse numbers start at 1", line_number, line)
    if not text:
        raise MalformedLine(f"{book} {chapter}:{verse} has no text", line_number, line)

    return book, chapter, verse, text


def parse_lines(
    lines: Iterable[str],
    name: str,
    extra_aliases: Optional[Mapping[str, Iterable[str]]] = None,
    skip_preamble: bool = False,
) -> TranslationStore:
    """
    Build a store from an iterable of source lines.

    Args:
        lines: Source lines, one verse each
        name: Display name of the translation
        extra_aliases: Additional aliases keyed by canonical book name
        skip_preamble: Ignore title lines before the first verse line
            (downloaded texts open with a short header)
    """
    builder = _Builder()
    count = 0

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if skip_preamble and not count and not LINE_PATTERN.match(line):
            logger.debug(f"Skipping preamble line {line_number}: {line!r}")
            continue
        book, chapter, verse, text = parse_line(line, line_number)
        builder.add(book, chapter, verse, text, line_number, line)
        count += 1

    if not count:
        raise MalformedLine(f"Translation {name!r} contains no verses")

    logger.debug(f"Parsed {count} verse lines for {name!r}")
    return TranslationStore(name, builder.build(), extra_aliases=extra_aliases)


def parse_translation_text(
    text: str,
    name: str,
    extra_aliases: Optional[Mapping[str, Iterable[str]]] = None,
    skip_preamble: bool = False,
) -> TranslationStore:
    """Build a store from the full source text of a translation."""
    return parse_lines(
        text.splitlines(), name, extra_aliases=extra_aliases, skip_preamble=skip_preamble
    )


def load_translation_file(
    path: Union[str, Path],
    name: Optional[str] = None,
    extra_aliases: Optional[Mapping[str, Iterable[str]]] = None,
    skip_preamble: bool = False,
) -> TranslationStore:
    """
    Load a translation from a text file.

    Args:
        path: File with one verse per line
        name: Display name (defaults to the file stem)
        extra_aliases: Additional aliases keyed by canonical book name
        skip_preamble: Ignore title lines before the first verse line

    Raises:
        FileNotFoundError: If the file does not exist
        TranslationLoadError: If the text is malformed
    """
    path = Path(path)
    name = name or path.stem

    logger.info(f"Loading translation {name!r} from {path}")
    with open(path, "r", encoding="utf-8-sig") as f:
        return parse_lines(f, name, extra_aliases=extra_aliases, skip_preamble=skip_preamble)
