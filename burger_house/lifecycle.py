"""Order and booking status transition tables"""

from typing import Dict, FrozenSet, Optional

from burger_house.errors import InvalidTransitionError
from burger_house.models import BookingStatus, OrderStatus

ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def is_terminal(status) -> bool:
    table = ORDER_TRANSITIONS if isinstance(status, OrderStatus) else BOOKING_TRANSITIONS
    return not table[status]


def can_transition(current, target) -> bool:
    table = ORDER_TRANSITIONS if isinstance(current, OrderStatus) else BOOKING_TRANSITIONS
    return target in table.get(current, frozenset())


def check_order_transition(
    current: OrderStatus,
    target: OrderStatus,
    order_id: Optional[str] = None,
) -> None:
    if target not in ORDER_TRANSITIONS[current]:
        raise InvalidTransitionError("order", order_id, current, target)


def check_booking_transition(
    current: BookingStatus,
    target: BookingStatus,
    reservation_id: Optional[str] = None,
) -> None:
    if target not in BOOKING_TRANSITIONS[current]:
        raise InvalidTransitionError("reservation", reservation_id, current, target)
