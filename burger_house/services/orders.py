"""Order lifecycle manager"""

import random
import uuid
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional, Union

import structlog

from burger_house.clock import Clock, SystemClock
from burger_house.errors import (
    DuplicateIdError,
    EmptyCartError,
    InvalidTransitionError,
    MissingCustomerError,
    OrderNotFoundError,
)
from burger_house.lifecycle import can_transition, check_order_transition
from burger_house.models import LineItem, Order, OrderStatus
from burger_house.pricing import Number, compute_totals
from burger_house.store.base import BaseStore

logger = structlog.get_logger()

DEFAULT_TAX_RATE = "0.08"
READY_WINDOW_MINUTES = (30, 45)
MAX_ID_ATTEMPTS = 3


def generate_order_id(created_at: datetime) -> str:
    """Format: order-{epoch millis of created_at}-{12 hex chars}"""
    return f"order-{int(created_at.timestamp() * 1000)}-{uuid.uuid4().hex[:12]}"


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text.strip() or None


class OrderManager:
    """Creates orders from cart contents and governs their status changes"""

    def __init__(
        self,
        store: BaseStore,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        tax_rate: Number = DEFAULT_TAX_RATE,
        ready_window: tuple = READY_WINDOW_MINUTES,
        id_factory: Callable[[datetime], str] = generate_order_id,
    ):
        min_minutes, max_minutes = ready_window
        if min_minutes < 0 or max_minutes < min_minutes:
            raise ValueError(f"Invalid ready window: {ready_window}")

        self.store = store
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.tax_rate = tax_rate
        self.ready_window = (min_minutes, max_minutes)
        self.id_factory = id_factory

    async def create_order(
        self,
        customer_id: str,
        cart: Iterable[LineItem],
        tax_rate: Optional[Number] = None,
        delivery_address: Optional[str] = None,
        note: Optional[str] = None,
    ) -> Order:
        """
        Freeze the cart into a pending order and persist it.

        Totals and the ready estimate are computed here once and never
        re-derived. A store-side id collision triggers a fresh id, up to
        MAX_ID_ATTEMPTS times.
        """
        customer_id = (customer_id or "").strip()
        if not customer_id:
            logger.warning("Order rejected: missing customer id")
            raise MissingCustomerError()

        items = tuple(cart)
        if not items:
            logger.warning("Order rejected: empty cart", customer_id=customer_id)
            raise EmptyCartError()

        totals = compute_totals(items, self.tax_rate if tax_rate is None else tax_rate)

        created_at = self.clock.now()
        ready_in = self.rng.randint(*self.ready_window)

        async with self.store.atomic():
            for attempt in range(1, MAX_ID_ATTEMPTS + 1):
                order = Order(
                    id=self.id_factory(created_at),
                    customer_id=customer_id,
                    items=items,
                    status=OrderStatus.PENDING,
                    subtotal=totals.subtotal,
                    tax=totals.tax,
                    total=totals.total,
                    created_at=created_at,
                    estimated_ready_at=created_at + timedelta(minutes=ready_in),
                    delivery_address=_clean(delivery_address),
                    note=_clean(note),
                )
                try:
                    await self.store.add_order(order)
                    break
                except DuplicateIdError:
                    logger.warning("Order id collision", order_id=order.id, attempt=attempt)
                    if attempt == MAX_ID_ATTEMPTS:
                        raise

        logger.info(
            "Order created",
            order_id=order.id,
            customer_id=customer_id,
            item_count=len(items),
            total=str(order.total),
        )
        return order

    async def get_order(self, order_id: str) -> Order:
        order = await self.store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def list_orders(self, customer_id: str) -> List[Order]:
        """Customer order history, newest first"""
        return await self.store.find_orders_by_customer(customer_id)

    async def transition(self, order: Union[Order, str], target: OrderStatus) -> Order:
        """Move an order one step along its lifecycle"""
        order_id = order if isinstance(order, str) else order.id
        target = OrderStatus(target)

        async with self.store.atomic():
            current = await self.get_order(order_id)
            try:
                check_order_transition(current.status, target, order_id)
            except InvalidTransitionError:
                logger.warning(
                    "Order transition rejected",
                    order_id=order_id,
                    status=current.status.value,
                    target=target.value,
                )
                raise
            updated = current.model_copy(update={"status": target})
            await self.store.save_order(updated)

        logger.info(
            "Order status changed",
            order_id=order_id,
            previous=current.status.value,
            status=target.value,
        )
        return updated

    async def cancel(self, order_id: str) -> bool:
        """
        Cancel an order that has not reached the kitchen yet.

        Returns False instead of raising when the order is unknown, already
        terminal, or being prepared.
        """
        async with self.store.atomic():
            current = await self.store.get_order(order_id)
            if current is None:
                return False
            if not can_transition(current.status, OrderStatus.CANCELLED):
                logger.info(
                    "Order not cancellable",
                    order_id=order_id,
                    status=current.status.value,
                )
                return False
            await self.store.save_order(
                current.model_copy(update={"status": OrderStatus.CANCELLED})
            )

        logger.info("Order cancelled", order_id=order_id)
        return True
