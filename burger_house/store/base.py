"""Base store interface"""

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, List, Optional

from burger_house.models import Order, Reservation, Slot


class BaseStore(ABC):
    """
    Abstract persistence collaborator.

    Every method is a coroutine and may fail with StoreError. Callers that
    read and then write (capacity checks, status changes) must hold
    ``atomic()`` across the whole sequence.
    """

    def __init__(self):
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Serialize a read-then-write sequence against this store"""
        async with self._lock:
            yield

    # Orders

    @abstractmethod
    async def add_order(self, order: Order) -> Order:
        """Insert a new order; raise DuplicateIdError if the id is taken"""
        pass

    @abstractmethod
    async def save_order(self, order: Order) -> Order:
        """Replace a stored order"""
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def find_orders_by_customer(self, customer_id: str) -> List[Order]:
        """Orders for a customer, newest first"""
        pass

    # Reservations

    @abstractmethod
    async def add_reservation(self, reservation: Reservation) -> Reservation:
        """Insert a new reservation; raise DuplicateIdError if the id is taken"""
        pass

    @abstractmethod
    async def save_reservation(self, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def find_reservations(
        self,
        day: date,
        slot: Optional[Slot] = None,
    ) -> List[Reservation]:
        """Reservations of every status for a date, optionally one slot"""
        pass

    @abstractmethod
    async def find_reservations_by_customer(self, customer_id: str) -> List[Reservation]:
        """Reservations for a customer, most recent date and slot first"""
        pass
