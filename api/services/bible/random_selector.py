# api/services/bible/random_selector.py
"""
Uniform random verse selection.

Draws one index over the flattened verse sequence and maps it back to
book/chapter/verse, so every verse is equally likely regardless of how
many verses its book or chapter has.
"""

import bisect
import random
import threading
from itertools import accumulate
from typing import List, Optional, Tuple

from .books import BookId
from .reference import VerseRef
from .store import TranslationStore


class RandomSelector:
    """
    Picks uniformly distributed verses from one store.

    The cumulative verse table is computed once. The random source is
    guarded by a lock so one selector can be shared between threads.

    Usage:
        selector = RandomSelector(store)
        ref = selector.choose()   # VerseRef that always resolves
    """

    def __init__(self, store: TranslationStore, rng: Optional[random.Random] = None):
        self.store = store
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

        self._chapters: List[Tuple[BookId, int]] = []
        counts: List[int] = []
        for book_id in store.book_ids():
            for chapter in store.book(book_id).chapters:
                self._chapters.append((book_id, chapter.number))
                counts.append(chapter.verse_count)

        self._cumulative = list(accumulate(counts))
        self._total = self._cumulative[-1] if self._cumulative else 0

    @property
    def total(self) -> int:
        return self._total

    def reference_at(self, index: int) -> VerseRef:
        """Map a 0-based index over all verses to its reference."""
        if not 0 <= index < self._total:
            raise IndexError(f"Verse index {index} out of range 0..{self._total - 1}")

        slot = bisect.bisect_right(self._cumulative, index)
        book_id, chapter = self._chapters[slot]
        before = self._cumulative[slot - 1] if slot else 0
        return VerseRef(book_id, chapter, index - before + 1)

    def choose(self) -> VerseRef:
        """Return a uniformly random verse."""
        if not self._total:
            raise ValueError(f"Translation {self.store.name!r} has no verses")
        with self._lock:
            index = self._rng.randrange(self._total)
        return self.reference_at(index)


def random_reference(store: TranslationStore, rng: Optional[random.Random] = None) -> VerseRef:
    """Return a uniformly random verse from a store."""
    return RandomSelector(store, rng).choose()
