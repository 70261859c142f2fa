"""Booking-order timeline with conflict-checked insertion."""
from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Dict, Iterator, List, Optional

from .errors import PerformanceNotFound, SchedulingConflict, TimelineError
from .models import Performance, TimeSlot


@dataclass
class _Node:
    performance: Performance
    prev: Optional[int] = None
    next: Optional[int] = None


class TimelineView:
    """Read-only, restartable view over a timeline's current order."""

    def __init__(self, timeline: "Timeline") -> None:
        self._timeline = timeline

    def __iter__(self) -> Iterator[Performance]:
        return self._timeline._walk()

    def __len__(self) -> int:
        return len(self._timeline)


class Timeline:
    """Ordered sequence of performances, kept free of overlapping slots.

    Order is booking order. Linkage lives in node records owned by the
    timeline; a performance only knows its artist and slot.
    """

    def __init__(self) -> None:
        self._nodes: Dict[int, _Node] = {}
        self._node_of: Dict[Performance, int] = {}
        self._head: Optional[int] = None
        self._tail: Optional[int] = None
        self._ids = count()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, performance: object) -> bool:
        return performance in self._node_of

    def __iter__(self) -> Iterator[Performance]:
        return self._walk()

    def find_conflict(self, timeslot: TimeSlot) -> Optional[Performance]:
        """Return the first performance whose slot overlaps ``timeslot``."""

        for performance in self._walk():
            if performance.timeslot.conflicts_with(timeslot):
                return performance
        return None

    def insert(self, performance: Performance) -> None:
        """Append ``performance`` at the tail, raising on any overlap."""

        if performance in self._node_of:
            raise TimelineError(f"Performance {performance.performance_id} is already on the timeline")
        existing = self.find_conflict(performance.timeslot)
        if existing is not None:
            raise SchedulingConflict(existing)

        node_id = next(self._ids)
        self._nodes[node_id] = _Node(performance=performance, prev=self._tail)
        if self._tail is None:
            self._head = node_id
        else:
            self._nodes[self._tail].next = node_id
        self._tail = node_id
        self._node_of[performance] = node_id

    def remove(self, performance: Performance) -> None:
        node_id = self._node_of.pop(performance, None)
        if node_id is None:
            raise PerformanceNotFound(performance)
        node = self._nodes.pop(node_id)

        if node.prev is None:
            self._head = node.next
        else:
            self._nodes[node.prev].next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            self._nodes[node.next].prev = node.prev

    def exchange_positions(self, first: Performance, second: Performance) -> None:
        """Swap the positions of two linked performances.

        The nodes stay where they are and trade payloads, so every other
        element keeps its neighbours. Slots are not re-checked: order changes,
        time data does not.
        """

        first_id = self._node_of.get(first)
        if first_id is None:
            raise PerformanceNotFound(first)
        second_id = self._node_of.get(second)
        if second_id is None:
            raise PerformanceNotFound(second)
        if first_id == second_id:
            return

        self._nodes[first_id].performance = second
        self._nodes[second_id].performance = first
        self._node_of[first] = second_id
        self._node_of[second] = first_id

    def position_of(self, performance: Performance) -> int:
        if performance not in self._node_of:
            raise PerformanceNotFound(performance)
        for position, current in enumerate(self._walk()):
            if current is performance:
                return position
        raise PerformanceNotFound(performance)  # pragma: no cover

    def snapshot(self) -> TimelineView:
        return TimelineView(self)

    def to_list(self) -> List[Performance]:
        return list(self._walk())

    def _walk(self) -> Iterator[Performance]:
        node_id = self._head
        while node_id is not None:
            node = self._nodes[node_id]
            yield node.performance
            node_id = node.next
