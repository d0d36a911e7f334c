"""Tests for the order lifecycle manager"""

from datetime import timedelta
from decimal import Decimal

import pytest

from burger_house.errors import (
    DuplicateIdError,
    EmptyCartError,
    InvalidInputError,
    InvalidLineItemError,
    InvalidTransitionError,
    OrderNotFoundError,
)
from burger_house.models import LineItem, OrderStatus
from burger_house.services import OrderManager
from burger_house.store import InMemoryStore

FORWARD = [
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.DELIVERED,
]


@pytest.mark.asyncio
async def test_create_order_freezes_totals(order_manager, burger_cart, clock):
    """Classic Burger and two fries at 8%"""
    order = await order_manager.create_order("user-1", burger_cart, tax_rate="0.08")

    assert order.status == OrderStatus.PENDING
    assert order.subtotal == Decimal("22.97")
    assert order.tax == Decimal("1.84")
    assert order.total == Decimal("24.81")
    assert order.created_at == clock.now()
    assert order.id.startswith("order-")
    assert list(order.items) == burger_cart


@pytest.mark.asyncio
async def test_create_order_uses_default_tax_rate(order_manager):
    order = await order_manager.create_order(
        "user-1",
        [LineItem(product_id="p", unit_price="8.99", quantity=2)],
    )

    assert (order.subtotal, order.tax, order.total) == (
        Decimal("17.98"),
        Decimal("1.44"),
        Decimal("19.42"),
    )


@pytest.mark.asyncio
async def test_estimated_ready_within_window(store, clock, rng, burger_cart):
    manager = OrderManager(store, clock=clock, rng=rng, ready_window=(30, 45))

    for _ in range(10):
        order = await manager.create_order("user-1", burger_cart)
        offset = order.estimated_ready_at - order.created_at
        assert timedelta(minutes=30) <= offset <= timedelta(minutes=45)


@pytest.mark.asyncio
async def test_estimate_is_stable_across_reads(order_manager, burger_cart):
    order = await order_manager.create_order("user-1", burger_cart)

    first = await order_manager.get_order(order.id)
    second = await order_manager.get_order(order.id)

    assert first.estimated_ready_at == second.estimated_ready_at == order.estimated_ready_at


@pytest.mark.asyncio
async def test_empty_cart_rejected(order_manager):
    with pytest.raises(EmptyCartError):
        await order_manager.create_order("user-1", [])

    assert await order_manager.list_orders("user-1") == []


@pytest.mark.asyncio
async def test_order_id_follows_injected_clock(order_manager, burger_cart, clock):
    order = await order_manager.create_order("user-1", burger_cart)

    _, millis, suffix = order.id.split("-")
    assert int(millis) == int(clock.now().timestamp() * 1000) == 1749922200000
    assert len(suffix) == 12


@pytest.mark.asyncio
@pytest.mark.parametrize("customer_id", ["", "   ", None])
async def test_blank_customer_rejected(order_manager, burger_cart, customer_id):
    with pytest.raises(InvalidInputError) as exc_info:
        await order_manager.create_order(customer_id, burger_cart)

    assert exc_info.value.detail["field"] == "customer_id"
    assert await order_manager.list_orders("") == []
    assert await order_manager.list_orders("   ") == []


@pytest.mark.asyncio
async def test_customer_id_is_trimmed(order_manager, burger_cart):
    order = await order_manager.create_order("  user-1 ", burger_cart)

    assert order.customer_id == "user-1"
    assert [o.id for o in await order_manager.list_orders("user-1")] == [order.id]


@pytest.mark.asyncio
async def test_invalid_line_item_is_not_persisted(order_manager):
    with pytest.raises(InvalidLineItemError):
        await order_manager.create_order(
            "user-1",
            [LineItem(product_id="p", unit_price="-1.00", quantity=1)],
        )

    assert await order_manager.list_orders("user-1") == []


@pytest.mark.asyncio
async def test_address_and_note_are_trimmed(order_manager, burger_cart):
    order = await order_manager.create_order(
        "user-1",
        burger_cart,
        delivery_address="  123 Main Street, Apt 4B ",
        note="   ",
    )

    assert order.delivery_address == "123 Main Street, Apt 4B"
    assert order.note is None


@pytest.mark.asyncio
async def test_forward_chain_to_delivered(order_manager, burger_cart):
    order = await order_manager.create_order("user-1", burger_cart)

    for target in FORWARD:
        order = await order_manager.transition(order, target)
        assert order.status == target
        assert order.total == Decimal("24.81")

    stored = await order_manager.get_order(order.id)
    assert stored.status == OrderStatus.DELIVERED
    assert stored.subtotal == Decimal("22.97")


@pytest.mark.asyncio
async def test_cannot_skip_to_delivered(order_manager, burger_cart):
    order = await order_manager.create_order("user-1", burger_cart)

    with pytest.raises(InvalidTransitionError) as exc_info:
        await order_manager.transition(order, OrderStatus.DELIVERED)

    assert exc_info.value.detail["current_status"] == OrderStatus.PENDING
    assert exc_info.value.detail["target_status"] == OrderStatus.DELIVERED
    assert (await order_manager.get_order(order.id)).status == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_terminal_states_absorb(order_manager, burger_cart):
    delivered = await order_manager.create_order("user-1", burger_cart)
    for target in FORWARD:
        delivered = await order_manager.transition(delivered, target)

    cancelled = await order_manager.create_order("user-1", burger_cart)
    cancelled = await order_manager.transition(cancelled, OrderStatus.CANCELLED)

    for order in (delivered, cancelled):
        for target in OrderStatus:
            with pytest.raises(InvalidTransitionError):
                await order_manager.transition(order, target)


@pytest.mark.asyncio
async def test_transition_uses_stored_status(order_manager, burger_cart):
    """A stale order object cannot replay an old move"""
    stale = await order_manager.create_order("user-1", burger_cart)
    await order_manager.transition(stale, OrderStatus.CONFIRMED)

    with pytest.raises(InvalidTransitionError):
        await order_manager.transition(stale, OrderStatus.CONFIRMED)


@pytest.mark.asyncio
async def test_transition_unknown_order(order_manager):
    with pytest.raises(OrderNotFoundError):
        await order_manager.transition("order-missing", OrderStatus.CONFIRMED)


@pytest.mark.asyncio
async def test_cancel_pending_and_confirmed(order_manager, burger_cart):
    pending = await order_manager.create_order("user-1", burger_cart)
    confirmed = await order_manager.create_order("user-1", burger_cart)
    await order_manager.transition(confirmed, OrderStatus.CONFIRMED)

    assert await order_manager.cancel(pending.id) is True
    assert await order_manager.cancel(confirmed.id) is True
    assert (await order_manager.get_order(pending.id)).status == OrderStatus.CANCELLED
    assert (await order_manager.get_order(confirmed.id)).status == OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_cancel_delivered_returns_false(order_manager, burger_cart):
    order = await order_manager.create_order("user-1", burger_cart)
    for target in FORWARD:
        await order_manager.transition(order, target)

    assert await order_manager.cancel(order.id) is False
    assert (await order_manager.get_order(order.id)).status == OrderStatus.DELIVERED


@pytest.mark.asyncio
async def test_cancel_while_preparing_returns_false(order_manager, burger_cart):
    order = await order_manager.create_order("user-1", burger_cart)
    await order_manager.transition(order, OrderStatus.CONFIRMED)
    await order_manager.transition(order, OrderStatus.PREPARING)

    assert await order_manager.cancel(order.id) is False


@pytest.mark.asyncio
async def test_cancel_twice_and_unknown(order_manager, burger_cart):
    order = await order_manager.create_order("user-1", burger_cart)

    assert await order_manager.cancel(order.id) is True
    assert await order_manager.cancel(order.id) is False
    assert await order_manager.cancel("order-missing") is False


@pytest.mark.asyncio
async def test_list_orders_newest_first(order_manager, burger_cart, clock):
    first = await order_manager.create_order("user-1", burger_cart)
    clock.advance(timedelta(hours=1))
    second = await order_manager.create_order("user-1", burger_cart)
    await order_manager.create_order("user-2", burger_cart)

    orders = await order_manager.list_orders("user-1")

    assert [o.id for o in orders] == [second.id, first.id]


@pytest.mark.asyncio
async def test_id_collision_regenerates(store, clock, rng, burger_cart):
    ids = iter(["order-a", "order-a", "order-b"])
    manager = OrderManager(store, clock=clock, rng=rng, id_factory=lambda created_at: next(ids))

    first = await manager.create_order("user-1", burger_cart)
    second = await manager.create_order("user-1", burger_cart)

    assert (first.id, second.id) == ("order-a", "order-b")


@pytest.mark.asyncio
async def test_id_collision_halts_after_retries(store, clock, rng, burger_cart):
    manager = OrderManager(store, clock=clock, rng=rng, id_factory=lambda created_at: "order-a")
    await manager.create_order("user-1", burger_cart)

    with pytest.raises(DuplicateIdError):
        await manager.create_order("user-1", burger_cart)

    assert len(await manager.list_orders("user-1")) == 1


def test_rejects_inverted_ready_window():
    with pytest.raises(ValueError):
        OrderManager(InMemoryStore(), ready_window=(45, 30))
