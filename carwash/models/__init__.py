# carwash/models/__init__.py
from .base import Base
from .user import User
from .vehicle import Vehicle
from .service import Service
from .booking import Booking, BookingStatus
from .staff_config import StaffConfig
from .staff_unavailability import StaffUnavailability, UnavailabilityType
from .admin_notification import AdminNotification, AdminNotificationType

__all__ = [
    "Base",
    "User",
    "Vehicle",
    "Service",
    "Booking",
    "BookingStatus",
    "StaffConfig",
    "StaffUnavailability",
    "UnavailabilityType",
    "AdminNotification",
    "AdminNotificationType",
]
