"""Tests for the SQLAlchemy store"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from burger_house.database import create_session_factory
from burger_house.errors import DuplicateIdError, OrderNotFoundError, StoreError
from burger_house.models import BookingStatus, LineItem, Order, OrderStatus, Reservation, Slot
from burger_house.store.sql import SqlAlchemyStore

CREATED = datetime(2025, 6, 14, 17, 30, tzinfo=timezone.utc)


def make_order(order_id="order-1"):
    return Order(
        id=order_id,
        customer_id="user-1",
        items=(
            LineItem(product_id="burger-1", name="Classic Burger", unit_price="12.99"),
            LineItem(product_id="side-1", unit_price="4.99", quantity=2, note="extra salt"),
        ),
        subtotal=Decimal("22.97"),
        tax=Decimal("1.84"),
        total=Decimal("24.81"),
        created_at=CREATED,
        estimated_ready_at=CREATED + timedelta(minutes=35),
        delivery_address="456 Oak Avenue",
    )


@pytest.fixture
def sql_store(test_engine):
    return SqlAlchemyStore(create_session_factory(test_engine))


@pytest.mark.asyncio
async def test_order_round_trip(sql_store):
    order = make_order()
    await sql_store.add_order(order)

    loaded = await sql_store.get_order("order-1")

    assert loaded == order
    assert loaded.total == Decimal("24.81")
    assert loaded.items[1].note == "extra salt"
    assert loaded.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_save_order_updates_status(sql_store):
    order = make_order()
    await sql_store.add_order(order)

    await sql_store.save_order(order.model_copy(update={"status": OrderStatus.CONFIRMED}))

    assert (await sql_store.get_order("order-1")).status == OrderStatus.CONFIRMED


@pytest.mark.asyncio
async def test_duplicate_and_missing_orders(sql_store):
    await sql_store.add_order(make_order())

    with pytest.raises(DuplicateIdError):
        await sql_store.add_order(make_order())

    with pytest.raises(OrderNotFoundError):
        await sql_store.save_order(make_order("order-2"))

    assert await sql_store.get_order("order-2") is None


@pytest.mark.asyncio
async def test_find_reservations_by_slot(sql_store):
    for n, slot in enumerate([Slot.T1900, Slot.T1900, Slot.T2000]):
        await sql_store.add_reservation(
            Reservation(
                id=f"booking-{n}",
                customer_id="user-1",
                date=date(2025, 6, 14),
                slot=slot,
                party_size=2,
                status=BookingStatus.PENDING,
                created_at=CREATED,
            )
        )

    assert len(await sql_store.find_reservations(date(2025, 6, 14))) == 3
    assert len(await sql_store.find_reservations(date(2025, 6, 14), Slot.T1900)) == 2
    assert await sql_store.find_reservations(date(2025, 6, 15)) == []


@pytest.mark.asyncio
async def test_driver_errors_become_store_errors():
    """Tables were never created, so every query fails in the driver"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    store = SqlAlchemyStore(create_session_factory(engine))

    with pytest.raises(StoreError) as exc_info:
        await store.get_order("order-1")
    assert exc_info.value.__cause__ is not None

    with pytest.raises(StoreError):
        await store.find_reservations(date(2025, 6, 14))

    await engine.dispose()
