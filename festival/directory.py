"""Name-indexed lookup of each artist's current performance."""
from __future__ import annotations

from typing import Dict, List, Optional

from .models import Performance


class ArtistDirectory:
    """Maps an artist name to the most recently booked performance."""

    def __init__(self) -> None:
        self._by_name: Dict[str, Performance] = {}

    def register(self, performance: Performance) -> None:
        self._by_name[performance.artist.name] = performance

    def lookup(self, name: str) -> Optional[Performance]:
        return self._by_name.get(name)

    def unregister(self, performance: Performance) -> bool:
        """Drop the mapping for ``performance`` if it is still the current one."""

        name = performance.artist.name
        if self._by_name.get(name) is performance:
            del self._by_name[name]
            return True
        return False

    def names(self) -> List[str]:
        return list(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)
