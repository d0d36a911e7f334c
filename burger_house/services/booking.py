"""Table booking: admission against slot capacity and reservation lifecycle"""

import uuid
from datetime import date, datetime
from typing import Any, Callable, List, Optional

import structlog

from burger_house.availability import SlotAvailability, availability, slot_is_open
from burger_house.clock import Clock, SystemClock
from burger_house.errors import (
    DuplicateIdError,
    InvalidPartySizeError,
    InvalidSlotError,
    InvalidTableError,
    InvalidTransitionError,
    ReservationNotFoundError,
    SlotUnavailableError,
    TableUnavailableError,
)
from burger_house.lifecycle import can_transition, check_booking_transition
from burger_house.models import BookingStatus, Reservation, Slot
from burger_house.store.base import BaseStore

logger = structlog.get_logger()

SLOT_CAPACITY = 10
MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 20
MAX_TABLES = 50
MAX_ID_ATTEMPTS = 3


def generate_reservation_id(created_at: datetime) -> str:
    """Format: booking-{epoch millis of created_at}-{12 hex chars}"""
    return f"booking-{int(created_at.timestamp() * 1000)}-{uuid.uuid4().hex[:12]}"


def parse_slot(value: Any) -> Slot:
    if isinstance(value, Slot):
        return value
    try:
        return Slot(value)
    except ValueError:
        raise InvalidSlotError(value)


class BookingArbiter:
    """Validates reservation requests and admits them while the slot has room"""

    def __init__(
        self,
        store: BaseStore,
        clock: Optional[Clock] = None,
        capacity: int = SLOT_CAPACITY,
        max_party_size: int = MAX_PARTY_SIZE,
        id_factory: Callable[[datetime], str] = generate_reservation_id,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.store = store
        self.clock = clock or SystemClock()
        self.capacity = capacity
        self.max_party_size = max_party_size
        self.id_factory = id_factory

    async def availability(self, day: date) -> List[SlotAvailability]:
        """Open/full status for every slot on a date"""
        reservations = await self.store.find_reservations(day)
        return availability(day, reservations, self.capacity)

    async def request_booking(
        self,
        customer_id: str,
        day: date,
        slot: Any,
        party_size: Any,
        note: Optional[str] = None,
    ) -> Reservation:
        """
        Admit a new pending reservation.

        Checks run in a fixed order and stop at the first failure: slot,
        party size, then capacity. Capacity is re-read from the store inside
        the atomic section, never taken from an earlier availability call.
        """
        slot = parse_slot(slot)

        if (
            isinstance(party_size, bool)
            or not isinstance(party_size, int)
            or not MIN_PARTY_SIZE <= party_size <= self.max_party_size
        ):
            raise InvalidPartySizeError(party_size, MIN_PARTY_SIZE, self.max_party_size)

        async with self.store.atomic():
            existing = await self.store.find_reservations(day, slot)
            if not slot_is_open(day, slot, existing, self.capacity):
                logger.warning(
                    "Booking rejected: slot full",
                    customer_id=customer_id,
                    date=day.isoformat(),
                    slot=slot.value,
                    capacity=self.capacity,
                )
                raise SlotUnavailableError(day, slot, self.capacity)

            created_at = self.clock.now()
            for attempt in range(1, MAX_ID_ATTEMPTS + 1):
                reservation = Reservation(
                    id=self.id_factory(created_at),
                    customer_id=customer_id,
                    date=day,
                    slot=slot,
                    party_size=party_size,
                    status=BookingStatus.PENDING,
                    note=(note or "").strip() or None,
                    created_at=created_at,
                )
                try:
                    await self.store.add_reservation(reservation)
                    break
                except DuplicateIdError:
                    logger.warning(
                        "Reservation id collision",
                        reservation_id=reservation.id,
                        attempt=attempt,
                    )
                    if attempt == MAX_ID_ATTEMPTS:
                        raise

        logger.info(
            "Reservation requested",
            reservation_id=reservation.id,
            customer_id=customer_id,
            date=day.isoformat(),
            slot=slot.value,
            party_size=party_size,
        )
        return reservation


class BookingManager:
    """Reservation status changes and table assignment"""

    def __init__(self, store: BaseStore, max_tables: int = MAX_TABLES):
        self.store = store
        self.max_tables = max_tables

    async def get_reservation(self, reservation_id: str) -> Reservation:
        reservation = await self.store.get_reservation(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation

    async def list_reservations(self, customer_id: str) -> List[Reservation]:
        """Customer booking history, most recent date and slot first"""
        return await self.store.find_reservations_by_customer(customer_id)

    def _check_move(self, current: Reservation, target: BookingStatus) -> None:
        try:
            check_booking_transition(current.status, target, current.id)
        except InvalidTransitionError:
            logger.warning(
                "Reservation transition rejected",
                reservation_id=current.id,
                status=current.status.value,
                target=target.value,
            )
            raise

    async def confirm(self, reservation_id: str, table_number: int) -> Reservation:
        """Confirm a pending reservation and seat it at a table"""
        async with self.store.atomic():
            current = await self.get_reservation(reservation_id)
            self._check_move(current, BookingStatus.CONFIRMED)

            if (
                isinstance(table_number, bool)
                or not isinstance(table_number, int)
                or not 1 <= table_number <= self.max_tables
            ):
                raise InvalidTableError(table_number, self.max_tables)

            same_slot = await self.store.find_reservations(current.date, current.slot)
            for other in same_slot:
                if (
                    other.id != current.id
                    and other.status == BookingStatus.CONFIRMED
                    and other.table_number == table_number
                ):
                    raise TableUnavailableError(table_number, current.date, current.slot, other.id)

            updated = current.model_copy(
                update={"status": BookingStatus.CONFIRMED, "table_number": table_number}
            )
            await self.store.save_reservation(updated)

        logger.info(
            "Reservation confirmed",
            reservation_id=reservation_id,
            table_number=table_number,
        )
        return updated

    async def cancel(self, reservation_id: str) -> bool:
        """Cancel a pending or confirmed reservation; False otherwise"""
        async with self.store.atomic():
            current = await self.store.get_reservation(reservation_id)
            if current is None:
                return False
            if not can_transition(current.status, BookingStatus.CANCELLED):
                logger.info(
                    "Reservation not cancellable",
                    reservation_id=reservation_id,
                    status=current.status.value,
                )
                return False
            await self.store.save_reservation(
                current.model_copy(update={"status": BookingStatus.CANCELLED})
            )

        logger.info("Reservation cancelled", reservation_id=reservation_id)
        return True

    async def complete(self, reservation_id: str) -> Reservation:
        """Mark a confirmed reservation as completed"""
        async with self.store.atomic():
            current = await self.get_reservation(reservation_id)
            self._check_move(current, BookingStatus.COMPLETED)
            updated = current.model_copy(update={"status": BookingStatus.COMPLETED})
            await self.store.save_reservation(updated)

        logger.info("Reservation completed", reservation_id=reservation_id)
        return updated
