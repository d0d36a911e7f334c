"""Order and booking lifecycle services"""

from burger_house.services.booking import BookingArbiter, BookingManager
from burger_house.services.orders import OrderManager

__all__ = [
    "BookingArbiter",
    "BookingManager",
    "OrderManager",
]
