"""Popularity ranking backed by a binary heap."""
from __future__ import annotations

import heapq
from itertools import count
from typing import List, Tuple

from .models import Artist, RankedArtist

_HeapItem = Tuple[int, int, RankedArtist]


class PopularityRanking:
    """Answers "top N artists by popularity" without touching booking state.

    Entries are keyed on the popularity an artist had when it was added. Later
    changes to ``Artist.popularity`` do not re-rank existing entries. One entry
    is kept per ``add`` call, so an artist booked twice appears twice.
    """

    def __init__(self) -> None:
        self._heap: List[_HeapItem] = []
        self._sequence = count()

    def add(self, artist: Artist) -> RankedArtist:
        entry = RankedArtist.record(artist)
        # heapq is a min-heap: negate popularity, break ties by insertion order
        heapq.heappush(self._heap, (-entry.popularity, next(self._sequence), entry))
        return entry

    def top_n(self, n: int) -> List[Artist]:
        return [entry.artist for entry in self.entries(n)]

    def entries(self, n: int) -> List[RankedArtist]:
        if n <= 0:
            return []
        return [entry for _, _, entry in heapq.nsmallest(n, self._heap)]

    def __len__(self) -> int:
        return len(self._heap)
