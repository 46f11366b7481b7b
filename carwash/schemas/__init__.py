# carwash/schemas/__init__.py
from .booking import (
    BookingCreate,
    BookingUpdate,
    BookingCancel,
    BookingStatusUpdate,
    BookingLocation,
)
from .staff import StaffConfigUpdate
from .unavailability import UnavailabilityCreate, UnavailabilityUpdate
from .task_payloads import CustomerBookingNotificationPayload, AdminNotificationPayload

__all__ = [
    "BookingCreate",
    "BookingUpdate",
    "BookingCancel",
    "BookingStatusUpdate",
    "BookingLocation",
    "StaffConfigUpdate",
    "UnavailabilityCreate",
    "UnavailabilityUpdate",
    "CustomerBookingNotificationPayload",
    "AdminNotificationPayload",
]
