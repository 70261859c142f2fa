"""Domain models for the festival scheduler."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import InvalidTimeSlot


@dataclass(frozen=True)
class TimeSlot:
    """Half-open hour interval ``[start, end)``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        for value in (self.start, self.end):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTimeSlot(self.start, self.end, "hours must be integers")
        if self.start >= self.end:
            raise InvalidTimeSlot(self.start, self.end)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def conflicts_with(self, other: "TimeSlot") -> bool:
        """True when the two intervals share at least one hour."""

        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"[{self.start:02d}:00 - {self.end:02d}:00]"


@dataclass
class Artist:
    """Performer record; ``name`` is the identity key, ``popularity`` is mutable."""

    name: str
    genre: str
    popularity: int
    masterpiece_url: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "genre": self.genre, "popularity": self.popularity}

    def __str__(self) -> str:
        return f"{self.name} ({self.genre}, popularity {self.popularity})"


@dataclass(frozen=True, eq=False)
class Performance:
    """One artist booked into one time slot.

    The artist is shared with other performances of the same name; the time
    slot belongs to this booking alone. Equality is identity.
    """

    performance_id: int
    artist: Artist
    timeslot: TimeSlot

    def __str__(self) -> str:
        return f"{self.artist.name} {self.timeslot}"


@dataclass(frozen=True)
class FanReminder:
    fan_id: str
    performance: Performance
    reminder_time: int


@dataclass(frozen=True)
class ReminderNotice:
    """A reminder delivered by :meth:`ReminderQueue.process_due`."""

    fan_id: str
    artist_name: str
    reminder_time: int

    def to_dict(self) -> Dict[str, Any]:
        return {"fanId": self.fan_id, "artistName": self.artist_name}


@dataclass(frozen=True)
class RankedArtist:
    """Ranking entry frozen at the moment it was added.

    ``artist`` is the live, shared record; ``genre`` and ``popularity`` are the
    values it had when ranked, which is what the ranking orders and reports.
    """

    artist: Artist
    genre: str
    popularity: int

    @classmethod
    def record(cls, artist: Artist) -> "RankedArtist":
        return cls(artist=artist, genre=artist.genre, popularity=artist.popularity)

    @property
    def name(self) -> str:
        return self.artist.name

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "genre": self.genre, "popularity": self.popularity}


class BookingStatus(str, Enum):
    OK = "ok"
    CONFLICT = "conflict"


class ReminderStatus(str, Enum):
    OK = "ok"
    UNKNOWN_ARTIST = "unknown_artist"


@dataclass(frozen=True)
class BookingResult:
    """Outcome of :meth:`SchedulingEngine.add_performance`."""

    status: BookingStatus
    performance_id: Optional[int] = None
    conflicting_id: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status is BookingStatus.OK

    @classmethod
    def booked(cls, performance_id: int) -> "BookingResult":
        return cls(status=BookingStatus.OK, performance_id=performance_id)

    @classmethod
    def conflict(cls, conflicting_id: int) -> "BookingResult":
        return cls(status=BookingStatus.CONFLICT, conflicting_id=conflicting_id)

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"status": self.status.value, "id": self.performance_id}
        return {"status": self.status.value, "conflictingId": self.conflicting_id}


@dataclass(frozen=True)
class TimelineEntry:
    """Display record for one timeline position."""

    position: int
    performance_id: int
    artist_name: str
    genre: str
    start_hour: int
    end_hour: int
    popularity: int
    masterpiece_url: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_performance(cls, position: int, performance: Performance) -> "TimelineEntry":
        artist = performance.artist
        return cls(
            position=position,
            performance_id=performance.performance_id,
            artist_name=artist.name,
            genre=artist.genre,
            start_hour=performance.timeslot.start,
            end_hour=performance.timeslot.end,
            popularity=artist.popularity,
            masterpiece_url=artist.masterpiece_url,
            image_url=artist.image_url,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.position,
            "id": self.performance_id,
            "artistName": self.artist_name,
            "genre": self.genre,
            "startHour": self.start_hour,
            "endHour": self.end_hour,
            "popularity": self.popularity,
            "imageUrl": self.image_url,
            "masterpieceUrl": self.masterpiece_url,
        }
