"""SQLAlchemy-backed store"""

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, Date, DateTime, Integer, JSON, String, Text, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
import structlog

from burger_house.database import Base
from burger_house.errors import (
    DuplicateIdError,
    OrderNotFoundError,
    ReservationNotFoundError,
    StoreError,
)
from burger_house.models import LineItem, Order, OrderStatus, Reservation, BookingStatus, Slot
from burger_house.pricing import from_cents, to_cents
from burger_house.store.base import BaseStore

logger = structlog.get_logger()


class OrderRecord(Base):
    """Customer orders"""
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    customer_id = Column(String(255), nullable=False, index=True)

    # [{"product_id": "...", "name": "...", "unit_price": "12.99", "quantity": 1, "note": null}, ...]
    items_json = Column(JSON, nullable=False)

    # Pricing, frozen at creation
    subtotal_cents = Column(Integer, nullable=False)
    tax_cents = Column(Integer, nullable=False)
    total_cents = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, preparing, ready, delivered, cancelled

    delivery_address = Column(Text)
    note = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False)
    estimated_ready_at = Column(DateTime(timezone=True), nullable=False)


class ReservationRecord(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(String(64), primary_key=True)
    customer_id = Column(String(255), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    slot = Column(String(5), nullable=False)
    party_size = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, completed, cancelled
    table_number = Column(Integer)

    note = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)


def _utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _order_to_record(order: Order, record: Optional[OrderRecord] = None) -> OrderRecord:
    record = record or OrderRecord(id=order.id)
    record.customer_id = order.customer_id
    record.items_json = [item.model_dump(mode="json") for item in order.items]
    record.subtotal_cents = to_cents(order.subtotal)
    record.tax_cents = to_cents(order.tax)
    record.total_cents = to_cents(order.total)
    record.status = order.status.value
    record.delivery_address = order.delivery_address
    record.note = order.note
    record.created_at = order.created_at.astimezone(timezone.utc)
    record.estimated_ready_at = order.estimated_ready_at.astimezone(timezone.utc)
    return record


def _order_from_record(record: OrderRecord) -> Order:
    return Order(
        id=record.id,
        customer_id=record.customer_id,
        items=tuple(LineItem(**item) for item in record.items_json),
        status=OrderStatus(record.status),
        subtotal=from_cents(record.subtotal_cents),
        tax=from_cents(record.tax_cents),
        total=from_cents(record.total_cents),
        created_at=_utc(record.created_at),
        estimated_ready_at=_utc(record.estimated_ready_at),
        delivery_address=record.delivery_address,
        note=record.note,
    )


def _reservation_to_record(
    reservation: Reservation,
    record: Optional[ReservationRecord] = None,
) -> ReservationRecord:
    record = record or ReservationRecord(id=reservation.id)
    record.customer_id = reservation.customer_id
    record.date = reservation.date
    record.slot = reservation.slot.value
    record.party_size = reservation.party_size
    record.status = reservation.status.value
    record.table_number = reservation.table_number
    record.note = reservation.note
    record.created_at = reservation.created_at.astimezone(timezone.utc)
    return record


def _reservation_from_record(record: ReservationRecord) -> Reservation:
    return Reservation(
        id=record.id,
        customer_id=record.customer_id,
        date=record.date,
        slot=Slot(record.slot),
        party_size=record.party_size,
        status=BookingStatus(record.status),
        table_number=record.table_number,
        note=record.note,
        created_at=_utc(record.created_at),
    )


class SqlAlchemyStore(BaseStore):
    """
    Store backed by an async SQLAlchemy session factory.

    Each call runs in its own session and commits before returning, so a
    write either lands completely or not at all. Driver errors surface as
    StoreError with the original exception chained.
    """

    def __init__(self, session_factory: async_sessionmaker):
        super().__init__()
        self._session_factory = session_factory

    async def add_order(self, order: Order) -> Order:
        try:
            async with self._session_factory() as db:
                if await db.get(OrderRecord, order.id) is not None:
                    raise DuplicateIdError("order", order.id)
                db.add(_order_to_record(order))
                await db.commit()
        except IntegrityError as e:
            raise DuplicateIdError("order", order.id) from e
        except SQLAlchemyError as e:
            logger.error("Failed to insert order", order_id=order.id, error=str(e))
            raise StoreError("Failed to insert order", order_id=order.id) from e
        return order

    async def save_order(self, order: Order) -> Order:
        try:
            async with self._session_factory() as db:
                record = await db.get(OrderRecord, order.id)
                if record is None:
                    raise OrderNotFoundError(order.id)
                _order_to_record(order, record)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update order", order_id=order.id, error=str(e))
            raise StoreError("Failed to update order", order_id=order.id) from e
        return order

    async def get_order(self, order_id: str) -> Optional[Order]:
        try:
            async with self._session_factory() as db:
                record = await db.get(OrderRecord, order_id)
                return _order_from_record(record) if record else None
        except SQLAlchemyError as e:
            raise StoreError("Failed to load order", order_id=order_id) from e

    async def find_orders_by_customer(self, customer_id: str) -> List[Order]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(OrderRecord)
                    .where(OrderRecord.customer_id == customer_id)
                    .order_by(OrderRecord.created_at.desc())
                )
                return [_order_from_record(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreError("Failed to list orders", customer_id=customer_id) from e

    async def add_reservation(self, reservation: Reservation) -> Reservation:
        try:
            async with self._session_factory() as db:
                if await db.get(ReservationRecord, reservation.id) is not None:
                    raise DuplicateIdError("reservation", reservation.id)
                db.add(_reservation_to_record(reservation))
                await db.commit()
        except IntegrityError as e:
            raise DuplicateIdError("reservation", reservation.id) from e
        except SQLAlchemyError as e:
            logger.error(
                "Failed to insert reservation",
                reservation_id=reservation.id,
                error=str(e),
            )
            raise StoreError(
                "Failed to insert reservation",
                reservation_id=reservation.id,
            ) from e
        return reservation

    async def save_reservation(self, reservation: Reservation) -> Reservation:
        try:
            async with self._session_factory() as db:
                record = await db.get(ReservationRecord, reservation.id)
                if record is None:
                    raise ReservationNotFoundError(reservation.id)
                _reservation_to_record(reservation, record)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to update reservation",
                reservation_id=reservation.id,
                error=str(e),
            )
            raise StoreError(
                "Failed to update reservation",
                reservation_id=reservation.id,
            ) from e
        return reservation

    async def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        try:
            async with self._session_factory() as db:
                record = await db.get(ReservationRecord, reservation_id)
                return _reservation_from_record(record) if record else None
        except SQLAlchemyError as e:
            raise StoreError("Failed to load reservation", reservation_id=reservation_id) from e

    async def find_reservations(
        self,
        day: date,
        slot: Optional[Slot] = None,
    ) -> List[Reservation]:
        query = select(ReservationRecord).where(ReservationRecord.date == day)
        if slot is not None:
            query = query.where(ReservationRecord.slot == slot.value)

        try:
            async with self._session_factory() as db:
                result = await db.execute(query)
                return [_reservation_from_record(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreError("Failed to list reservations", date=day) from e

    async def find_reservations_by_customer(self, customer_id: str) -> List[Reservation]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(ReservationRecord)
                    .where(ReservationRecord.customer_id == customer_id)
                    .order_by(ReservationRecord.date.desc(), ReservationRecord.slot.desc())
                )
                return [_reservation_from_record(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreError("Failed to list reservations", customer_id=customer_id) from e
