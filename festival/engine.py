"""Scheduling engine coordinating the timeline and its derived views."""
from __future__ import annotations

from threading import Lock, RLock
from typing import Dict, List, Optional, Tuple

from . import snapshot
from .broadcast import Broadcaster, NullBroadcaster
from .directory import ArtistDirectory
from .errors import SchedulingConflict, UnknownArtist
from .logging import get_logger
from .models import (
    Artist,
    BookingResult,
    Performance,
    RankedArtist,
    ReminderNotice,
    ReminderStatus,
    TimelineEntry,
    TimeSlot,
)
from .ranking import PopularityRanking
from .reminders import ReminderQueue
from .timeline import Timeline

logger = get_logger(__name__)


class SchedulingEngine:
    """Books artists into non-overlapping slots and keeps the views in step.

    The engine owns four structures: the timeline, the artist directory, the
    popularity ranking and the reminder queue. Every public method runs under
    one re-entrant lock, so readers see the state either fully before or fully
    after a mutation. After each timeline change the serialized state is handed
    to the broadcaster outside the lock; a failing broadcaster is logged and
    never affects engine state.

    Each published state carries a version stamped under the engine lock.
    Publishing is serialized by a second lock and a state older than the last
    one delivered is dropped, so observers never end on a stale snapshot.
    """

    def __init__(self, broadcaster: Optional[Broadcaster] = None) -> None:
        self._broadcaster: Broadcaster = broadcaster or NullBroadcaster()
        self._lock = RLock()
        self._publish_lock = Lock()
        self._version = 0
        self._published_version = 0
        self._timeline = Timeline()
        self._directory = ArtistDirectory()
        self._ranking = PopularityRanking()
        self._reminders = ReminderQueue()
        self._artists: Dict[str, Artist] = {}
        self._next_id = 1

    # Booking -----------------------------------------------------------------
    def add_performance(
        self,
        artist_name: str,
        genre: str,
        popularity: int,
        start: int,
        end: int,
        *,
        masterpiece_url: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> BookingResult:
        """Book ``artist_name`` into ``[start, end)``.

        Raises :class:`InvalidTimeSlot` before touching any state when the
        slot is malformed. A conflict leaves every structure unchanged and
        publishes nothing.
        """

        timeslot = TimeSlot(start, end)
        with self._lock:
            known = self._artists.get(artist_name)
            artist = known or Artist(
                name=artist_name,
                genre=genre,
                popularity=popularity,
                masterpiece_url=masterpiece_url,
                image_url=image_url,
            )
            performance = Performance(performance_id=self._next_id, artist=artist, timeslot=timeslot)
            try:
                self._timeline.insert(performance)
            except SchedulingConflict as conflict:
                logger.info(
                    "booking_conflict",
                    artist=artist_name,
                    slot=str(timeslot),
                    conflicts_with=conflict.existing.performance_id,
                )
                return BookingResult.conflict(conflict.existing.performance_id)

            self._next_id += 1
            if known is None:
                self._artists[artist_name] = artist
            else:
                known.genre = genre
                known.popularity = popularity
                known.masterpiece_url = masterpiece_url or known.masterpiece_url
                known.image_url = image_url or known.image_url
            self._directory.register(performance)
            self._ranking.add(artist)
            version, state = self._stamp_locked()

        logger.info(
            "performance_booked",
            performance_id=performance.performance_id,
            artist=artist_name,
            slot=str(timeslot),
        )
        self._publish(version, state)
        return BookingResult.booked(performance.performance_id)

    def remove_performance(self, artist_name: str) -> Performance:
        """Take the artist's current performance off the timeline."""

        with self._lock:
            performance = self._require(artist_name)
            self._timeline.remove(performance)
            self._directory.unregister(performance)
            version, state = self._stamp_locked()

        logger.info("performance_removed", performance_id=performance.performance_id, artist=artist_name)
        self._publish(version, state)
        return performance

    def exchange_positions(self, first_artist: str, second_artist: str) -> List[TimelineEntry]:
        """Swap the timeline positions of two artists' current performances.

        Returns the timeline as it stood right after the swap.
        """

        with self._lock:
            first = self._require(first_artist)
            second = self._require(second_artist)
            self._timeline.exchange_positions(first, second)
            entries = self._entries_locked()
            version, state = self._stamp_locked(entries)

        logger.info("positions_exchanged", first=first_artist, second=second_artist)
        self._publish(version, state)
        return entries

    # Queries -----------------------------------------------------------------
    def find_artist_genre(self, artist_name: str) -> Optional[str]:
        with self._lock:
            performance = self._directory.lookup(artist_name)
            return performance.artist.genre if performance else None

    def get_performance(self, artist_name: str) -> Optional[Performance]:
        with self._lock:
            return self._directory.lookup(artist_name)

    def get_hot_artists_ranking(self, n: int) -> List[RankedArtist]:
        """Top ``n`` ranking entries, each reporting its recorded popularity."""

        with self._lock:
            return self._ranking.entries(n)

    def get_timeline_snapshot(self) -> List[TimelineEntry]:
        with self._lock:
            return self._entries_locked()

    def current_state_json(self) -> str:
        with self._lock:
            return self._serialize_locked()

    # Reminders ---------------------------------------------------------------
    def add_fan_reminder(self, fan_id: str, artist_name: str, reminder_hour: int) -> ReminderStatus:
        with self._lock:
            performance = self._directory.lookup(artist_name)
            if performance is None:
                logger.warning("reminder_rejected", fan_id=fan_id, artist=artist_name)
                return ReminderStatus.UNKNOWN_ARTIST
            self._reminders.add(fan_id, performance, reminder_hour)

        logger.info("reminder_added", fan_id=fan_id, artist=artist_name, hour=reminder_hour)
        return ReminderStatus.OK

    def process_reminders(self, current_hour: int) -> List[ReminderNotice]:
        with self._lock:
            notices = self._reminders.process_due(current_hour)

        for notice in notices:
            logger.info(
                "reminder_sent",
                fan_id=notice.fan_id,
                artist=notice.artist_name,
                hour=notice.reminder_time,
            )
        return notices

    def pending_reminders(self) -> int:
        with self._lock:
            return len(self._reminders)

    # Internal helpers --------------------------------------------------------
    def _require(self, artist_name: str) -> Performance:
        performance = self._directory.lookup(artist_name)
        if performance is None:
            raise UnknownArtist(artist_name)
        return performance

    def _entries_locked(self) -> List[TimelineEntry]:
        return [
            TimelineEntry.from_performance(position, performance)
            for position, performance in enumerate(self._timeline.snapshot())
        ]

    def _serialize_locked(self, entries: Optional[List[TimelineEntry]] = None) -> str:
        return snapshot.serialize_timeline(self._entries_locked() if entries is None else entries)

    def _stamp_locked(self, entries: Optional[List[TimelineEntry]] = None) -> Tuple[int, str]:
        self._version += 1
        return self._version, self._serialize_locked(entries)

    def _publish(self, version: int, state: str) -> None:
        with self._publish_lock:
            if version <= self._published_version:
                logger.debug("stale_state_dropped", version=version, latest=self._published_version)
                return
            self._published_version = version
            try:
                self._broadcaster.publish(state)
            except Exception:
                logger.exception("broadcast_failed", version=version)
