# carwash/api/v1/bookings.py
"""
Customer booking endpoints
Slot availability, create, reschedule and cancel
"""
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from carwash.api.dependencies import get_booking_service, get_current_user_id, get_slot_service
from carwash.schemas.booking import BookingCancel, BookingCreate, BookingUpdate
from carwash.services.booking.booking_service import BookingService
from carwash.services.slot.slot_service import SlotService
from carwash.utils.responses import api_response, paginate_meta

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("/slots/availability")
def check_availability(
        day: date = Query(..., alias="date", description="YYYY-MM-DD"),
        service_id: str = Query(..., alias="serviceId"),
        user_id: UUID = Depends(get_current_user_id),
        slot_service: SlotService = Depends(get_slot_service),
):
    availability = slot_service.get_available_slots(day, service_id)
    return api_response("Availability retrieved", availability)


@router.get("")
def get_bookings(
        status: Optional[str] = Query(None, description="Booking status or 'upcoming'"),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=50),
        user_id: UUID = Depends(get_current_user_id),
        booking_service: BookingService = Depends(get_booking_service),
):
    bookings, total = booking_service.get_user_bookings(user_id, status=status, page=page, limit=limit)
    return api_response(
        "Bookings retrieved",
        [booking.to_dict() for booking in bookings],
        paginate_meta(page, limit, total),
    )


@router.get("/{booking_id}")
def get_booking(
        booking_id: UUID,
        user_id: UUID = Depends(get_current_user_id),
        booking_service: BookingService = Depends(get_booking_service),
):
    booking = booking_service.get_booking_by_id(booking_id, user_id)
    return api_response("Booking retrieved", booking.to_dict())


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(
        data: BookingCreate,
        user_id: UUID = Depends(get_current_user_id),
        booking_service: BookingService = Depends(get_booking_service),
):
    booking = booking_service.create_booking(user_id, data)
    return api_response("Booking created successfully", booking.to_dict())


@router.patch("/{booking_id}")
def update_booking(
        booking_id: UUID,
        data: BookingUpdate,
        user_id: UUID = Depends(get_current_user_id),
        booking_service: BookingService = Depends(get_booking_service),
):
    booking = booking_service.update_booking(booking_id, user_id, data)
    return api_response("Booking updated successfully", booking.to_dict())


@router.post("/{booking_id}/cancel")
def cancel_booking(
        booking_id: UUID,
        data: Optional[BookingCancel] = None,
        user_id: UUID = Depends(get_current_user_id),
        booking_service: BookingService = Depends(get_booking_service),
):
    reason = data.reason if data else None
    booking = booking_service.cancel_booking(booking_id, user_id, reason)
    return api_response("Booking cancelled successfully", booking.to_dict())
