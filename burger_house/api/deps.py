"""Request dependencies resolving the services wired onto the app"""

from fastapi import Request

from burger_house.services import BookingArbiter, BookingManager, OrderManager


def get_order_manager(request: Request) -> OrderManager:
    return request.app.state.order_manager


def get_booking_arbiter(request: Request) -> BookingArbiter:
    return request.app.state.booking_arbiter


def get_booking_manager(request: Request) -> BookingManager:
    return request.app.state.booking_manager
