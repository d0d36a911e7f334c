"""Domain models for orders and table reservations"""

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, field_validator


class OrderStatus(str, enum.Enum):
    """Order lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return {
            "pending": "Pending",
            "confirmed": "Confirmed",
            "preparing": "Being Prepared",
            "ready": "Ready for Pickup",
            "delivered": "Delivered",
            "cancelled": "Cancelled",
        }[self.value]


class BookingStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return {
            "pending": "Pending Confirmation",
            "confirmed": "Confirmed",
            "completed": "Completed",
            "cancelled": "Cancelled",
        }[self.value]


class Service(str, enum.Enum):
    LUNCH = "lunch"
    DINNER = "dinner"


class Slot(str, enum.Enum):
    """Bookable service times, lunch 11:00-14:00 and dinner 18:00-21:00"""
    T1100 = "11:00"
    T1130 = "11:30"
    T1200 = "12:00"
    T1230 = "12:30"
    T1300 = "13:00"
    T1330 = "13:30"
    T1400 = "14:00"
    T1800 = "18:00"
    T1830 = "18:30"
    T1900 = "19:00"
    T1930 = "19:30"
    T2000 = "20:00"
    T2030 = "20:30"
    T2100 = "21:00"

    @property
    def service(self) -> Service:
        return Service.LUNCH if self.value < "15:00" else Service.DINNER


# Statuses that hold a seat in a (date, slot) pair
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class LineItem(BaseModel):
    """A priced product line; frozen once attached to an order"""
    product_id: str
    name: Optional[str] = None
    unit_price: Decimal
    quantity: int = 1
    note: Optional[str] = None

    @field_validator("unit_price", mode="before")
    @classmethod
    def _price_from_float(cls, value):
        # 8.99 must mean Decimal("8.99"), not its binary approximation
        if isinstance(value, float):
            return str(value)
        return value

    class Config:
        frozen = True


class Order(BaseModel):
    """Customer order; totals are computed once at creation"""
    id: str
    customer_id: str
    items: Tuple[LineItem, ...]
    status: OrderStatus = OrderStatus.PENDING
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime
    estimated_ready_at: datetime
    delivery_address: Optional[str] = None
    note: Optional[str] = None

    class Config:
        frozen = True


class Reservation(BaseModel):
    """Table reservation for one (date, slot) pair"""
    id: str
    customer_id: str
    date: date
    slot: Slot
    party_size: int
    status: BookingStatus = BookingStatus.PENDING
    table_number: Optional[int] = None
    note: Optional[str] = None
    created_at: datetime

    @property
    def holds_seat(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    class Config:
        frozen = True
