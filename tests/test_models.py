import dataclasses

import pytest

from festival.errors import InvalidTimeSlot
from festival.models import Artist, BookingResult, Performance, TimeSlot


@pytest.mark.parametrize("start,end", [(16, 14), (15, 15)])
def test_timeslot_rejects_non_increasing_bounds(start, end):
    with pytest.raises(InvalidTimeSlot):
        TimeSlot(start, end)


def test_timeslot_rejects_non_integer_hours():
    with pytest.raises(InvalidTimeSlot):
        TimeSlot(14.5, 16)


def test_invalid_timeslot_is_a_value_error():
    with pytest.raises(ValueError):
        TimeSlot(3, 1)


def test_timeslot_is_immutable():
    slot = TimeSlot(14, 16)
    with pytest.raises(dataclasses.FrozenInstanceError):
        slot.start = 10


def test_conflicts_with_is_half_open_and_symmetric():
    base = TimeSlot(14, 16)
    assert base.conflicts_with(TimeSlot(15, 17))
    assert TimeSlot(15, 17).conflicts_with(base)
    assert base.conflicts_with(TimeSlot(13, 20))
    assert not base.conflicts_with(TimeSlot(16, 18))
    assert not TimeSlot(16, 18).conflicts_with(base)
    assert not base.conflicts_with(TimeSlot(10, 14))


def test_timeslot_string_and_duration():
    slot = TimeSlot(9, 11)
    assert str(slot) == "[09:00 - 11:00]"
    assert slot.duration == 2


def test_performance_equality_is_identity():
    artist = Artist("Beyond", "rock", 98)
    first = Performance(1, artist, TimeSlot(14, 16))
    twin = Performance(1, artist, TimeSlot(14, 16))
    assert first == first
    assert first != twin


def test_booking_result_payloads():
    assert BookingResult.booked(3).to_dict() == {"status": "ok", "id": 3}
    assert BookingResult.conflict(1).to_dict() == {"status": "conflict", "conflictingId": 1}
    assert not BookingResult.conflict(1).ok
