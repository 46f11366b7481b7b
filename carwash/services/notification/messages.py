# carwash/services/notification/messages.py
"""Text of customer SMS / push messages and admin notification entries"""
from typing import Any, Dict, Optional, Tuple

from carwash.models.booking import Booking
from carwash.utils.time_slots import format_display_date, format_time_slot

BRAND_NAME = "SparkleWash"


def _slot_text(booking: Booking) -> Tuple[str, str]:
    return format_display_date(booking.scheduled_date), format_time_slot(booking.scheduled_time)


def _service_name(booking: Booking) -> str:
    return booking.service.name if booking.service else "Car wash"


def booking_received_sms(booking: Booking) -> str:
    date_text, time_text = _slot_text(booking)
    return (
        f"{BRAND_NAME} Booking Received! Booking #{booking.booking_number} for "
        f"{_service_name(booking)} on {date_text} at {time_text} is pending confirmation. "
        f"We'll notify you once confirmed!"
    )


def booking_confirmed_sms(booking: Booking) -> str:
    date_text, time_text = _slot_text(booking)
    return (
        f"{BRAND_NAME} Booking Confirmed! Booking #{booking.booking_number}. "
        f"{_service_name(booking)} on {date_text} at {time_text}. "
        f"Thank you for choosing {BRAND_NAME}!"
    )


def booking_received_push(booking: Booking) -> Tuple[str, str]:
    date_text, time_text = _slot_text(booking)
    body = (
        f"Your {_service_name(booking)} for {date_text} at {time_text} is pending confirmation. "
        f"We'll notify you once confirmed! Booking #{booking.booking_number}"
    )
    return "Booking Received!", body


def booking_confirmed_push(booking: Booking) -> Tuple[str, str]:
    date_text, time_text = _slot_text(booking)
    body = (
        f"Your {_service_name(booking)} is scheduled for {date_text} at {time_text}. "
        f"Booking #{booking.booking_number}"
    )
    return "Booking Confirmed!", body


def push_data(booking: Booking, kind: str) -> Dict[str, str]:
    return {"type": kind, "bookingId": str(booking.id), "bookingNumber": booking.booking_number}


# Admin feed entries: (title, message, data)

def new_booking_entry(booking: Booking) -> Tuple[str, str, Dict[str, Any]]:
    date_text, time_text = _slot_text(booking)
    message = (
        f"New booking #{booking.booking_number} for {_service_name(booking)} "
        f"on {date_text} at {time_text}"
    )
    return "New Booking Received", message, {
        "bookingId": str(booking.id),
        "bookingNumber": booking.booking_number,
        "userId": str(booking.user_id),
    }


def customer_cancelled_entry(booking: Booking, reason: Optional[str]) -> Tuple[str, str, Dict[str, Any]]:
    return (
        "Booking Cancelled by Customer",
        f"Booking #{booking.booking_number} was cancelled by the customer",
        {
            "bookingId": str(booking.id),
            "bookingNumber": booking.booking_number,
            "reason": reason or "No reason provided",
        },
    )


def admin_cancelled_entry(booking: Booking) -> Tuple[str, str, Dict[str, Any]]:
    return (
        "Booking Cancelled",
        f"Booking #{booking.booking_number} has been cancelled",
        {
            "bookingId": str(booking.id),
            "bookingNumber": booking.booking_number,
            "reason": booking.cancellation_reason,
        },
    )


def completed_entry(booking: Booking) -> Tuple[str, str, Dict[str, Any]]:
    return (
        "Booking Completed",
        f"Booking #{booking.booking_number} has been completed",
        {"bookingId": str(booking.id), "bookingNumber": booking.booking_number},
    )
