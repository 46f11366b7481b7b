# ============================================================================
# carwash/services/booking/admin_booking_service.py
# ============================================================================
"""Back-office booking list and status lifecycle"""
import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from carwash.core.exceptions import BadRequestError, NotFoundError
from carwash.models.admin_notification import AdminNotificationType
from carwash.models.booking import Booking, BookingStatus, is_transition_allowed
from carwash.models.user import User
from carwash.models.vehicle import Vehicle
from carwash.services.notification import messages
from carwash.services.notification.dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_CANCEL_REASON = "Cancelled by admin"


class AdminBookingService:

    def __init__(
            self,
            db: Session,
            dispatcher: NotificationDispatcher,
            clock: Callable[[], datetime] = datetime.now,
            strict_transitions: bool = False,
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.clock = clock
        self.strict_transitions = strict_transitions

    def _query(self):
        return self.db.query(Booking).options(
            joinedload(Booking.user),
            joinedload(Booking.vehicle),
            joinedload(Booking.service),
        )

    def get_bookings(
            self,
            page: int = 1,
            limit: int = 20,
            status: Optional[str] = None,
            day: Optional[date] = None,
            search: Optional[str] = None,
    ) -> Tuple[List[Booking], int]:
        """
        Filtered, paginated booking list for the back-office.

        status "upcoming" means pending or confirmed from today onwards.
        search matches booking number, customer name or phone and vehicle
        name or plate, case-insensitively.
        """
        query = self._query()

        if status == "upcoming":
            query = query.filter(
                Booking.status.in_([BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value]),
                Booking.scheduled_date >= self.clock().date()
            )
        elif status:
            query = query.filter(Booking.status == status)

        if day:
            query = query.filter(Booking.scheduled_date == day)

        if search:
            pattern = f"%{search.strip()}%"
            query = query.outerjoin(User, Booking.user_id == User.id).outerjoin(
                Vehicle, Booking.vehicle_id == Vehicle.id
            ).filter(or_(
                Booking.booking_number.ilike(pattern),
                User.name.ilike(pattern),
                User.phone.ilike(pattern),
                Vehicle.name.ilike(pattern),
                Vehicle.license_plate.ilike(pattern),
            ))

        total = query.count()
        bookings = query.order_by(
            Booking.scheduled_date.desc(),
            Booking.scheduled_time.desc()
        ).offset((page - 1) * limit).limit(limit).all()
        return bookings, total

    def get_booking_by_id(self, booking_id: UUID) -> Booking:
        booking = self._query().filter(Booking.id == booking_id).first()
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def update_booking_status(
            self,
            booking_id: UUID,
            status: BookingStatus,
            reason: Optional[str] = None,
    ) -> Booking:
        """
        Move a booking to a new status.

        Any status is accepted unless strict transitions are enabled.
        Cancelling or completing stamps the matching timestamp and adds an
        admin feed entry; pending -> confirmed texts the customer.
        """
        booking = self.get_booking_by_id(booking_id)
        previous = BookingStatus(booking.status)
        status = BookingStatus(status)

        if self.strict_transitions and not is_transition_allowed(previous, status):
            raise BadRequestError(f"Cannot change booking status from {previous.value} to {status.value}")

        booking.status = status.value
        if status == BookingStatus.CANCELLED:
            booking.cancelled_at = self.clock()
            booking.cancellation_reason = reason or DEFAULT_ADMIN_CANCEL_REASON
        elif status == BookingStatus.COMPLETED:
            booking.completed_at = self.clock()

        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Booking {booking.booking_number} status {previous.value} -> {status.value}")

        if status == BookingStatus.CANCELLED:
            title, message, payload = messages.admin_cancelled_entry(booking)
            self.dispatcher.admin_notification(AdminNotificationType.BOOKING_CANCELLED, title, message, payload)
        elif status == BookingStatus.COMPLETED:
            title, message, payload = messages.completed_entry(booking)
            self.dispatcher.admin_notification(AdminNotificationType.BOOKING_COMPLETED, title, message, payload)
        elif status == BookingStatus.CONFIRMED and previous == BookingStatus.PENDING:
            self.dispatcher.booking_confirmed(booking.id)

        return booking
