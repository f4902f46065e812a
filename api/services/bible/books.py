# api/services/bible/books.py
"""
Book name catalogue and normalization.

Maps user-supplied book spellings ("jn", "1 Jn", "I John", "song of songs")
to the canonical book identifier of one loaded translation. Matching is
done against whole names and aliases, never word by word, so "1 John"
is a single token and can not be captured by "John".
"""

import logging
import os
import re
from collections import defaultdict
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from .errors import AmbiguousName, BookNotFound

logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config", "books.yml")

_NUMBERED = re.compile(r"^([123]) (.+)$")
_ROMAN = {"1": "i", "2": "ii", "3": "iii"}


@dataclass(frozen=True, order=True)
class BookId:
    """
    Canonical identifier of a book within one translation store.

    Attributes:
        index: Position in the store's canonical book order (0-based)
        name: Canonical book name as spelled by the translation
    """
    index: int
    name: str

    def __str__(self) -> str:
        return self.name


# -----------------------------------------------------------------------------
# Catalogue
# -----------------------------------------------------------------------------

@lru_cache(maxsize=1)
def load_book_catalogue() -> Tuple[Dict[str, Any], ...]:
    """Load the book alias catalogue from YAML config."""
    if not os.path.exists(CONFIG_PATH):
        logger.warning(f"Book catalogue not found at {CONFIG_PATH}; using canonical names only")
        return get_default_catalogue()

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return tuple(data.get("books", []))


def get_default_catalogue() -> Tuple[Dict[str, Any], ...]:
    """Return an empty catalogue: books are matched by their own names only."""
    return ()


def reload_book_catalogue():
    """Clear cache and reload the catalogue."""
    load_book_catalogue.cache_clear()
    _catalogue_index.cache_clear()
    catalogue_keys.cache_clear()
    return load_book_catalogue()


@lru_cache(maxsize=1)
def _catalogue_index() -> Dict[str, FrozenSet[str]]:
    """Map every catalogue name/alias key to the full key set of its book."""
    index: Dict[str, FrozenSet[str]] = {}
    for entry in load_book_catalogue():
        keys = {normalize_key(entry["name"])}
        keys.update(normalize_key(a) for a in entry.get("aliases", []))
        group = frozenset(keys)
        for key in group:
            index[key] = group
    return index


def catalogue_aliases(name: str) -> FrozenSet[str]:
    """
    Return the catalogue keys for a book name, or an empty set.

    A translation may spell a book differently from the catalogue's
    preferred name ("Psalm" vs "Psalms"); any name or alias in the
    entry selects it.
    """
    return _catalogue_index().get(normalize_key(name), frozenset())


@lru_cache(maxsize=1)
def catalogue_keys() -> FrozenSet[str]:
    """Every catalogue name and alias key, numbered-book variants included."""
    keys = set()
    for key in _catalogue_index():
        keys.update(expand_variants(key))
    return frozenset(keys)


# -----------------------------------------------------------------------------
# Key normalization
# -----------------------------------------------------------------------------

def normalize_key(name: str) -> str:
    """
    Normalize a book name for lookup.

    Lowercases, collapses whitespace and drops a trailing period
    ("Gen." -> "gen", "Song  of   Solomon" -> "song of solomon").
    """
    key = re.sub(r"\s+", " ", name.casefold()).strip()
    return key.rstrip(".").strip()


def expand_variants(key: str) -> List[str]:
    """
    Return a key plus its numbered-book spellings.

    "1 john" -> ["1 john", "1john", "i john"]
    """
    variants = [key]
    match = _NUMBERED.match(key)
    if match:
        num, rest = match.groups()
        variants.append(f"{num}{rest}")
        variants.append(f"{_ROMAN[num]} {rest}")
    return variants


# -----------------------------------------------------------------------------
# Normalizer
# -----------------------------------------------------------------------------

class BookNameNormalizer:
    """
    Precomputed name/alias table for the books of one translation.

    Resolution order: exact canonical name, then exact alias. An alias
    claimed by two different books is recorded as ambiguous; looking it
    up raises AmbiguousName and it is never offered as a candidate.

    Usage:
        normalizer = BookNameNormalizer(["Genesis", "John", "1 John"])
        normalizer.normalize("jn")      # BookId(1, "John")
        normalizer.normalize("I John")  # BookId(2, "1 John")
    """

    def __init__(
        self,
        names: Sequence[str],
        extra_aliases: Optional[Mapping[str, Iterable[str]]] = None,
        use_catalogue: bool = True,
    ):
        self._book_ids = tuple(BookId(i, name) for i, name in enumerate(names))
        canonical: Dict[str, BookId] = {}
        aliases: Dict[str, BookId] = {}
        ambiguous: Dict[str, Tuple[BookId, ...]] = {}

        for book_id in self._book_ids:
            key = normalize_key(book_id.name)
            if not key:
                raise BookNotFound(f"Empty book name at position {book_id.index}")
            if key in canonical:
                other = canonical[key]
                raise AmbiguousName(
                    f"Book name {book_id.name!r} duplicates {other.name!r}"
                )
            canonical[key] = book_id

        extra = {normalize_key(k): list(v) for k, v in (extra_aliases or {}).items()}
        claims: Dict[str, set] = defaultdict(set)

        for book_id in self._book_ids:
            own_key = normalize_key(book_id.name)
            keys = {own_key}
            if use_catalogue:
                keys.update(catalogue_aliases(book_id.name))
            keys.update(normalize_key(a) for a in extra.get(own_key, []))

            for key in list(keys):
                keys.update(expand_variants(key))

            for key in keys:
                if not key or key in canonical:
                    continue
                claims[key].add(book_id)

        for key, owners in claims.items():
            if len(owners) == 1:
                aliases[key] = next(iter(owners))
            else:
                ambiguous[key] = tuple(sorted(owners))
                logger.warning(
                    f"Alias {key!r} claimed by {', '.join(b.name for b in sorted(owners))}; "
                    f"ignoring it"
                )

        # Read-only views
        self._canonical: Mapping[str, BookId] = MappingProxyType(canonical)
        self._aliases: Mapping[str, BookId] = MappingProxyType(aliases)
        self._ambiguous: Mapping[str, Tuple[BookId, ...]] = MappingProxyType(ambiguous)

        logger.debug(
            f"Built book normalizer: {len(self._canonical)} books, "
            f"{len(self._aliases)} aliases, {len(self._ambiguous)} ambiguous"
        )

    @property
    def book_ids(self) -> Tuple[BookId, ...]:
        """All books in canonical order."""
        return self._book_ids

    def normalize(self, raw_name: str) -> BookId:
        """
        Resolve a book name or alias to its BookId.

        Raises:
            BookNotFound: If no book matches
            AmbiguousName: If the alias belongs to more than one book
        """
        key = normalize_key(raw_name or "")

        if key in self._canonical:
            return self._canonical[key]
        if key in self._ambiguous:
            owners = ", ".join(b.name for b in self._ambiguous[key])
            raise AmbiguousName(f"Book name {raw_name!r} matches several books: {owners}")
        if key in self._aliases:
            return self._aliases[key]

        raise BookNotFound(f"Unknown book: {raw_name!r}")

    def is_canonical(self, raw_name: str) -> bool:
        """True if the name is a canonical book name (not just an alias)."""
        return normalize_key(raw_name) in self._canonical

    def aliases_for(self, book_id: BookId) -> List[str]:
        """Alias keys that resolve to a book, sorted."""
        return sorted(k for k, v in self._aliases.items() if v == book_id)

    def candidates(self) -> List[str]:
        """
        Every matchable name and alias key, longest first.

        Ambiguous aliases are excluded.
        """
        keys = list(self._canonical) + list(self._aliases)
        return sorted(keys, key=lambda k: (-len(k), k))
