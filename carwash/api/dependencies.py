# ============================================================================
# FILE: carwash/api/dependencies.py
# Authentication and service dependencies
# ============================================================================
from datetime import datetime
from functools import lru_cache
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from carwash.config.database import get_db
from carwash.config.settings import settings
from carwash.core.exceptions import ForbiddenError, UnauthorizedError
from carwash.services.booking.admin_booking_service import AdminBookingService
from carwash.services.booking.booking_service import BookingService
from carwash.services.booking.slot_lock import SlotLock, build_slot_lock
from carwash.services.notification.admin_notification_service import AdminNotificationService
from carwash.services.notification.dispatcher import CeleryNotificationDispatcher, NotificationDispatcher
from carwash.services.slot.slot_service import SlotService
from carwash.services.staff.staff_config_provider import DatabaseStaffConfigProvider, StaffConfigProvider
from carwash.services.staff.staff_service import StaffService
from carwash.services.staff.unavailability_service import UnavailabilityService

# ============================================================================
# Security Scheme
# ============================================================================

# Tokens are issued by the auth service; only verified here
jwt_security = HTTPBearer(
    scheme_name="JWT Bearer Token",
    description="Enter your JWT access token",
    auto_error=False,
)


def verify_access_token(token: str) -> dict:
    """
    Verify and decode a JWT access token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        UnauthorizedError: If token is invalid, expired or not an access token
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise UnauthorizedError(f"Could not validate credentials: {str(e)}")

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")

    return payload


def get_token_payload(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(jwt_security),
) -> dict:
    if credentials is None:
        raise UnauthorizedError("Authentication required")
    return verify_access_token(credentials.credentials)


def get_current_user_id(payload: dict = Depends(get_token_payload)) -> UUID:
    """
    Dependency returning the authenticated user's id (the token's "sub").

    Raises:
        UnauthorizedError: If the subject is missing or not a UUID
    """
    user_id_str: Optional[str] = payload.get("sub")
    if user_id_str is None:
        raise UnauthorizedError("Could not validate credentials")

    try:
        return UUID(user_id_str)
    except ValueError:
        raise UnauthorizedError("Invalid user ID in token")


def require_admin(payload: dict = Depends(get_token_payload)) -> dict:
    """Allow only tokens carrying role=admin"""
    if payload.get("role") != "admin":
        raise ForbiddenError("Admin access required")
    return payload


# ============================================================================
# Collaborators (overridden in tests)
# ============================================================================

def get_clock() -> Callable[[], datetime]:
    return datetime.now


@lru_cache()
def _celery_dispatcher() -> CeleryNotificationDispatcher:
    return CeleryNotificationDispatcher()


def get_dispatcher() -> NotificationDispatcher:
    return _celery_dispatcher()


def get_slot_lock() -> SlotLock:
    return build_slot_lock(settings.SLOT_LOCK_BACKEND, settings.SLOT_LOCK_TIMEOUT_SECONDS)


# ============================================================================
# Services
# ============================================================================

def get_config_provider(db: Session = Depends(get_db)) -> StaffConfigProvider:
    return DatabaseStaffConfigProvider(db)


def get_unavailability_service(db: Session = Depends(get_db)) -> UnavailabilityService:
    return UnavailabilityService(db)


def get_slot_service(
        db: Session = Depends(get_db),
        config_provider: StaffConfigProvider = Depends(get_config_provider),
        unavailability_service: UnavailabilityService = Depends(get_unavailability_service),
        clock: Callable[[], datetime] = Depends(get_clock),
) -> SlotService:
    return SlotService(db, config_provider, unavailability_service, clock=clock)


def get_booking_service(
        db: Session = Depends(get_db),
        slot_service: SlotService = Depends(get_slot_service),
        dispatcher: NotificationDispatcher = Depends(get_dispatcher),
        slot_lock: SlotLock = Depends(get_slot_lock),
        clock: Callable[[], datetime] = Depends(get_clock),
) -> BookingService:
    return BookingService(db, slot_service, dispatcher, slot_lock=slot_lock, clock=clock)


def get_admin_booking_service(
        db: Session = Depends(get_db),
        dispatcher: NotificationDispatcher = Depends(get_dispatcher),
        clock: Callable[[], datetime] = Depends(get_clock),
) -> AdminBookingService:
    return AdminBookingService(
        db, dispatcher, clock=clock, strict_transitions=settings.STRICT_STATUS_TRANSITIONS
    )


def get_staff_service(
        db: Session = Depends(get_db),
        config_provider: StaffConfigProvider = Depends(get_config_provider),
        unavailability_service: UnavailabilityService = Depends(get_unavailability_service),
) -> StaffService:
    return StaffService(db, config_provider, unavailability_service)


def get_admin_notification_service(db: Session = Depends(get_db)) -> AdminNotificationService:
    return AdminNotificationService(db)
