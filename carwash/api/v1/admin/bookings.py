# carwash/api/v1/admin/bookings.py
"""Back-office booking list and status changes"""
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from carwash.api.dependencies import get_admin_booking_service, require_admin
from carwash.schemas.booking import BookingStatusUpdate
from carwash.services.booking.admin_booking_service import AdminBookingService
from carwash.utils.responses import api_response, paginate_meta

router = APIRouter(prefix="/admin/bookings", dependencies=[Depends(require_admin)])


@router.get("")
def get_bookings(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        status: Optional[str] = Query(None, description="Booking status or 'upcoming'"),
        day: Optional[date] = Query(None, alias="date"),
        search: Optional[str] = Query(None, max_length=100),
        service: AdminBookingService = Depends(get_admin_booking_service),
):
    bookings, total = service.get_bookings(page=page, limit=limit, status=status, day=day, search=search)
    return api_response(
        "Bookings retrieved",
        [booking.to_dict(include_user=True) for booking in bookings],
        paginate_meta(page, limit, total),
    )


@router.get("/{booking_id}")
def get_booking(
        booking_id: UUID,
        service: AdminBookingService = Depends(get_admin_booking_service),
):
    booking = service.get_booking_by_id(booking_id)
    return api_response("Booking retrieved", booking.to_dict(include_user=True))


@router.patch("/{booking_id}/status")
def update_booking_status(
        booking_id: UUID,
        data: BookingStatusUpdate,
        service: AdminBookingService = Depends(get_admin_booking_service),
):
    booking = service.update_booking_status(booking_id, data.status, data.reason)
    return api_response("Booking status updated", booking.to_dict(include_user=True))
