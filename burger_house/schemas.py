"""Request/response schemas for the HTTP adapter"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from burger_house.models import BookingStatus, OrderStatus, Slot


class LineItemCreate(BaseModel):
    """Cart line in a checkout request"""
    product_id: str
    name: Optional[str] = None
    unit_price: Decimal
    quantity: int = 1
    note: Optional[str] = None


class OrderCreate(BaseModel):
    """Create order request"""
    customer_id: str
    items: List[LineItemCreate]
    delivery_address: Optional[str] = None
    note: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    """Order status change request"""
    status: OrderStatus


class LineItemResponse(BaseModel):
    product_id: str
    name: Optional[str]
    unit_price: Decimal
    quantity: int
    note: Optional[str]


class OrderResponse(BaseModel):
    """Order response"""
    id: str
    customer_id: str
    items: List[LineItemResponse]
    status: OrderStatus
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime
    estimated_ready_at: datetime
    delivery_address: Optional[str]
    note: Optional[str]

    class Config:
        from_attributes = True


class OrderListResponse(BaseModel):
    items: List[OrderResponse]
    total: int


class ReservationCreate(BaseModel):
    """Create reservation request"""
    customer_id: str
    date: date
    # Kept as a plain string so an unknown slot reaches the arbiter's own check
    slot: str
    party_size: int
    note: Optional[str] = None


class ReservationConfirm(BaseModel):
    table_number: int


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: str
    customer_id: str
    date: date
    slot: Slot
    party_size: int
    status: BookingStatus
    table_number: Optional[int]
    note: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    items: List[ReservationResponse]
    total: int


class AvailabilitySlot(BaseModel):
    """Time slot status"""
    time: Slot
    available: bool
    tables_available: int = Field(ge=0)


class AvailabilityResponse(BaseModel):
    """Availability for one date"""
    date: date
    slots: List[AvailabilitySlot] = []


class CancelResponse(BaseModel):
    cancelled: bool
