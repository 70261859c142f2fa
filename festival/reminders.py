"""Time-ordered queue of fan reminders."""
from __future__ import annotations

import heapq
from itertools import count
from typing import List, Optional, Tuple

from .models import FanReminder, Performance, ReminderNotice

_HeapItem = Tuple[int, int, FanReminder]


class ReminderQueue:
    """Delivers reminders in ascending time order, each at most once."""

    def __init__(self) -> None:
        self._heap: List[_HeapItem] = []
        self._sequence = count()

    def add(self, fan_id: str, performance: Performance, reminder_time: int) -> FanReminder:
        reminder = FanReminder(fan_id=fan_id, performance=performance, reminder_time=reminder_time)
        heapq.heappush(self._heap, (reminder_time, next(self._sequence), reminder))
        return reminder

    def process_due(self, current_time: int) -> List[ReminderNotice]:
        """Pop and return every reminder with ``reminder_time <= current_time``."""

        notices: List[ReminderNotice] = []
        while self._heap and self._heap[0][0] <= current_time:
            _, _, reminder = heapq.heappop(self._heap)
            notices.append(
                ReminderNotice(
                    fan_id=reminder.fan_id,
                    artist_name=reminder.performance.artist.name,
                    reminder_time=reminder.reminder_time,
                )
            )
        return notices

    def peek_next_time(self) -> Optional[int]:
        return self._heap[0][0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)
