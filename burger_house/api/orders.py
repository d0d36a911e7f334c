"""Order API endpoints"""

from fastapi import APIRouter, Depends

from burger_house.api.deps import get_order_manager
from burger_house.models import LineItem
from burger_house.schemas import (
    CancelResponse,
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
)
from burger_house.services import OrderManager

router = APIRouter()


@router.post("/orders", response_model=OrderResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    manager: OrderManager = Depends(get_order_manager),
):
    """Check out a cart"""
    items = [LineItem(**item.model_dump()) for item in order_data.items]
    return await manager.create_order(
        customer_id=order_data.customer_id,
        cart=items,
        delivery_address=order_data.delivery_address,
        note=order_data.note,
    )


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    manager: OrderManager = Depends(get_order_manager),
):
    """Get order details"""
    return await manager.get_order(order_id)


@router.post("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    manager: OrderManager = Depends(get_order_manager),
):
    """Advance an order along its lifecycle"""
    return await manager.transition(order_id, update.status)


@router.post("/orders/{order_id}/cancel", response_model=CancelResponse)
async def cancel_order(
    order_id: str,
    manager: OrderManager = Depends(get_order_manager),
):
    """Cancel an order that has not started preparation"""
    return CancelResponse(cancelled=await manager.cancel(order_id))


@router.get("/customers/{customer_id}/orders", response_model=OrderListResponse)
async def list_orders(
    customer_id: str,
    manager: OrderManager = Depends(get_order_manager),
):
    """Order history for a customer, newest first"""
    orders = await manager.list_orders(customer_id)
    return OrderListResponse(
        items=[order.model_dump() for order in orders],
        total=len(orders),
    )
