"""Per-slot table availability for a calendar date"""

from datetime import date
from typing import Iterable, List, NamedTuple

from burger_house.models import Reservation, Slot


class SlotAvailability(NamedTuple):
    slot: Slot
    is_open: bool
    remaining: int


def count_active(day: date, slot: Slot, reservations: Iterable[Reservation]) -> int:
    """Count pending and confirmed reservations holding a seat in (day, slot)"""
    return sum(
        1
        for reservation in reservations
        if reservation.date == day and reservation.slot == slot and reservation.holds_seat
    )


def slot_is_open(
    day: date,
    slot: Slot,
    reservations: Iterable[Reservation],
    capacity: int,
) -> bool:
    return count_active(day, slot, reservations) < capacity


def availability(
    day: date,
    reservations: Iterable[Reservation],
    capacity: int,
) -> List[SlotAvailability]:
    """
    Report open/full status for every slot on the given date.

    Cancelled and completed reservations do not consume capacity. Output
    follows the Slot enumeration order.
    """
    counts = {slot: 0 for slot in Slot}
    for reservation in reservations:
        if reservation.date == day and reservation.holds_seat:
            counts[reservation.slot] += 1

    return [
        SlotAvailability(
            slot=slot,
            is_open=counts[slot] < capacity,
            remaining=max(capacity - counts[slot], 0),
        )
        for slot in Slot
    ]
