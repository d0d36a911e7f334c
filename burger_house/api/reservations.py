"""Reservation API endpoints"""

from datetime import date

from fastapi import APIRouter, Depends

from burger_house.api.deps import get_booking_arbiter, get_booking_manager
from burger_house.schemas import (
    AvailabilityResponse,
    AvailabilitySlot,
    CancelResponse,
    ReservationConfirm,
    ReservationCreate,
    ReservationListResponse,
    ReservationResponse,
)
from burger_house.services import BookingArbiter, BookingManager

router = APIRouter()


@router.get("/reservations/availability", response_model=AvailabilityResponse)
async def check_availability(
    date: date,
    arbiter: BookingArbiter = Depends(get_booking_arbiter),
):
    """Slot availability for a date"""
    slots = await arbiter.availability(date)
    return AvailabilityResponse(
        date=date,
        slots=[
            AvailabilitySlot(
                time=slot.slot,
                available=slot.is_open,
                tables_available=slot.remaining,
            )
            for slot in slots
        ],
    )


@router.post("/reservations", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    arbiter: BookingArbiter = Depends(get_booking_arbiter),
):
    """Request a table; starts pending until the restaurant confirms"""
    return await arbiter.request_booking(
        customer_id=reservation_data.customer_id,
        day=reservation_data.date,
        slot=reservation_data.slot,
        party_size=reservation_data.party_size,
        note=reservation_data.note,
    )


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: str,
    manager: BookingManager = Depends(get_booking_manager),
):
    """Get reservation details"""
    return await manager.get_reservation(reservation_id)


@router.post("/reservations/{reservation_id}/confirm", response_model=ReservationResponse)
async def confirm_reservation(
    reservation_id: str,
    confirmation: ReservationConfirm,
    manager: BookingManager = Depends(get_booking_manager),
):
    """Confirm a pending reservation at a table"""
    return await manager.confirm(reservation_id, confirmation.table_number)


@router.post("/reservations/{reservation_id}/cancel", response_model=CancelResponse)
async def cancel_reservation(
    reservation_id: str,
    manager: BookingManager = Depends(get_booking_manager),
):
    """Cancel a reservation"""
    return CancelResponse(cancelled=await manager.cancel(reservation_id))


@router.post("/reservations/{reservation_id}/complete", response_model=ReservationResponse)
async def complete_reservation(
    reservation_id: str,
    manager: BookingManager = Depends(get_booking_manager),
):
    """Mark a seated reservation as completed"""
    return await manager.complete(reservation_id)


@router.get("/customers/{customer_id}/reservations", response_model=ReservationListResponse)
async def list_reservations(
    customer_id: str,
    manager: BookingManager = Depends(get_booking_manager),
):
    """Booking history for a customer"""
    reservations = await manager.list_reservations(customer_id)
    return ReservationListResponse(
        items=[reservation.model_dump() for reservation in reservations],
        total=len(reservations),
    )
