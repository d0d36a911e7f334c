"""In-memory store"""

from datetime import date
from typing import Dict, List, Optional

from burger_house.errors import DuplicateIdError, OrderNotFoundError, ReservationNotFoundError
from burger_house.models import Order, Reservation, Slot
from burger_house.store.base import BaseStore


class InMemoryStore(BaseStore):
    """Dict-backed store scoped to a single instance"""

    def __init__(self):
        super().__init__()
        self._orders: Dict[str, Order] = {}
        self._reservations: Dict[str, Reservation] = {}

    async def add_order(self, order: Order) -> Order:
        if order.id in self._orders:
            raise DuplicateIdError("order", order.id)
        self._orders[order.id] = order
        return order

    async def save_order(self, order: Order) -> Order:
        if order.id not in self._orders:
            raise OrderNotFoundError(order.id)
        self._orders[order.id] = order
        return order

    async def get_order(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    async def find_orders_by_customer(self, customer_id: str) -> List[Order]:
        orders = [o for o in self._orders.values() if o.customer_id == customer_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    async def add_reservation(self, reservation: Reservation) -> Reservation:
        if reservation.id in self._reservations:
            raise DuplicateIdError("reservation", reservation.id)
        self._reservations[reservation.id] = reservation
        return reservation

    async def save_reservation(self, reservation: Reservation) -> Reservation:
        if reservation.id not in self._reservations:
            raise ReservationNotFoundError(reservation.id)
        self._reservations[reservation.id] = reservation
        return reservation

    async def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        return self._reservations.get(reservation_id)

    async def find_reservations(
        self,
        day: date,
        slot: Optional[Slot] = None,
    ) -> List[Reservation]:
        return [
            r
            for r in self._reservations.values()
            if r.date == day and (slot is None or r.slot == slot)
        ]

    async def find_reservations_by_customer(self, customer_id: str) -> List[Reservation]:
        reservations = [r for r in self._reservations.values() if r.customer_id == customer_id]
        return sorted(reservations, key=lambda r: (r.date, r.slot.value), reverse=True)
