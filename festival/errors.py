"""Exception hierarchy for the festival scheduler.

    FestivalError
    +-- InvalidTimeSlot       (bad hour interval, also a ValueError)
    +-- SchedulingConflict    (booking overlaps an existing performance)
    +-- UnknownArtist         (no current booking for a name, also a KeyError)
    +-- TimelineError
    |   +-- PerformanceNotFound
    +-- BroadcastError        (snapshot delivery failed)
    +-- ConfigurationError

Conflicts and unknown artists are recoverable: the engine turns them into
result values for its callers and never leaves partial state behind.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .models import Performance


class FestivalError(Exception):
    """Base exception for all scheduler errors."""


class InvalidTimeSlot(FestivalError, ValueError):
    """Raised when a time slot does not satisfy ``start < end``."""

    def __init__(self, start: object, end: object, reason: str = "end must be after start") -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid time slot [{start}, {end}): {reason}")


class SchedulingConflict(FestivalError):
    """Raised when a performance overlaps one already on the timeline."""

    def __init__(self, existing: "Performance") -> None:
        self.existing = existing
        super().__init__(
            f"Time slot conflicts with {existing.artist.name} {existing.timeslot}"
        )


class UnknownArtist(FestivalError, KeyError):
    """Raised when an artist has no current booking."""

    def __init__(self, artist_name: str) -> None:
        self.artist_name = artist_name
        super().__init__(artist_name)

    def __str__(self) -> str:
        return f"No current booking for artist {self.artist_name!r}"


class TimelineError(FestivalError):
    """Raised for invalid timeline topology operations."""


class PerformanceNotFound(TimelineError):
    """Raised when a performance is not linked into the timeline."""

    def __init__(self, performance: "Performance") -> None:
        self.performance = performance
        super().__init__(f"Performance {performance.performance_id} is not on the timeline")


class BroadcastError(FestivalError):
    """Raised when a snapshot could not be delivered to observers."""


class ConfigurationError(FestivalError):
    """Raised when configuration values are invalid."""
