# ============================================================================
# carwash/services/booking/booking_service.py
# ============================================================================
"""Customer booking admission, reschedule and cancellation"""
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from carwash.config.settings import get_settings
from carwash.core.exceptions import BadRequestError, NotFoundError, SlotUnavailableError
from carwash.models.admin_notification import AdminNotificationType
from carwash.models.booking import Booking, BookingStatus, MODIFIABLE_STATUSES, UPCOMING_STATUSES
from carwash.models.service import Service
from carwash.models.vehicle import Vehicle
from carwash.schemas.booking import BookingCreate, BookingUpdate
from carwash.services.booking.slot_lock import NullSlotLock, SlotLock
from carwash.services.notification import messages
from carwash.services.notification.dispatcher import NotificationDispatcher
from carwash.services.slot.slot_service import SlotService
from carwash.utils.ids import parse_uuid
from carwash.utils.time_slots import generate_booking_number

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
MAX_BOOKING_NUMBER_ATTEMPTS = 5


def calculate_pricing(price, service_fee, tax_rate) -> Tuple[Decimal, Decimal, Decimal, Decimal]:
    """Return (subtotal, service_fee, tax, total) rounded to cents"""
    subtotal = Decimal(str(price)).quantize(CENTS, rounding=ROUND_HALF_UP)
    fee = Decimal(str(service_fee)).quantize(CENTS, rounding=ROUND_HALF_UP)
    tax = (subtotal * Decimal(str(tax_rate))).quantize(CENTS, rounding=ROUND_HALF_UP)
    return subtotal, fee, tax, subtotal + fee + tax


class BookingService:
    """Handles customer-side booking operations"""

    def __init__(
            self,
            db: Session,
            slot_service: SlotService,
            dispatcher: NotificationDispatcher,
            slot_lock: Optional[SlotLock] = None,
            clock: Callable[[], datetime] = datetime.now,
            service_fee: Optional[float] = None,
            tax_rate: Optional[float] = None,
    ):
        settings = get_settings()
        self.db = db
        self.slot_service = slot_service
        self.dispatcher = dispatcher
        self.slot_lock = slot_lock or NullSlotLock()
        self.clock = clock
        self.service_fee = settings.SERVICE_FEE if service_fee is None else service_fee
        self.tax_rate = settings.TAX_RATE if tax_rate is None else tax_rate

    def _new_booking_number(self) -> str:
        for _ in range(MAX_BOOKING_NUMBER_ATTEMPTS):
            number = generate_booking_number()
            exists = self.db.query(Booking.id).filter(Booking.booking_number == number).first()
            if not exists:
                return number
        raise RuntimeError("Could not generate a unique booking number")

    def _query(self):
        return self.db.query(Booking).options(
            joinedload(Booking.vehicle),
            joinedload(Booking.service),
        )

    def _get_owned(self, booking_id, user_id: UUID) -> Booking:
        booking = self._query().filter(
            Booking.id == parse_uuid(booking_id),
            Booking.user_id == user_id
        ).first()
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def create_booking(self, user_id: UUID, data: BookingCreate) -> Booking:
        """
        Admit a booking into a slot.

        Ownership, service and date checks run first; the capacity check and
        the insert run together under the slot lock. Notifications are queued
        only after the commit.
        """
        vehicle = self.db.query(Vehicle).filter(
            Vehicle.id == parse_uuid(data.vehicle_id),
            Vehicle.user_id == user_id,
            Vehicle.is_active.is_(True)
        ).first()
        if not vehicle:
            raise NotFoundError("Vehicle not found")

        service = self.db.query(Service).filter(
            Service.id == parse_uuid(data.service_id),
            Service.is_active.is_(True)
        ).first()
        if not service:
            raise NotFoundError("Service not found")

        self.slot_service.ensure_not_past(data.scheduled_date, "Cannot book for past dates")
        self.slot_service.validate_booking_window(data.scheduled_date)

        with self.slot_lock.hold(data.scheduled_date, data.scheduled_time):
            if not self.slot_service.is_slot_available(data.scheduled_date, data.scheduled_time):
                raise SlotUnavailableError("Selected time slot is no longer available")

            subtotal, service_fee, tax, total = calculate_pricing(
                service.price, self.service_fee, self.tax_rate
            )

            booking = Booking(
                booking_number=self._new_booking_number(),
                user_id=user_id,
                vehicle_id=vehicle.id,
                service_id=service.id,
                scheduled_date=data.scheduled_date,
                scheduled_time=data.scheduled_time,
                time_slot_start=data.scheduled_time,
                time_slot_end=self.slot_service.get_end_time(data.scheduled_time, service.duration_minutes),
                location=data.location.model_dump(by_alias=True, exclude_none=True),
                status=BookingStatus.PENDING.value,
                subtotal=subtotal,
                service_fee=service_fee,
                tax=tax,
                total=total,
                notes=data.notes,
            )
            self.db.add(booking)
            self.db.commit()

        self.db.refresh(booking)
        logger.info(
            f"Booking {booking.booking_number} created for user {user_id}: "
            f"{booking.scheduled_date} {booking.scheduled_time}"
        )

        self.dispatcher.booking_received(booking.id)
        title, message, payload = messages.new_booking_entry(booking)
        self.dispatcher.admin_notification(AdminNotificationType.NEW_BOOKING, title, message, payload)

        return booking

    def get_user_bookings(
            self,
            user_id: UUID,
            status: Optional[str] = None,
            page: int = 1,
            limit: int = 10,
    ) -> Tuple[List[Booking], int]:
        """A customer's bookings, newest slot first; "upcoming" groups the open statuses"""
        query = self._query().filter(Booking.user_id == user_id)

        if status == "upcoming":
            query = query.filter(Booking.status.in_([s.value for s in UPCOMING_STATUSES]))
        elif status:
            query = query.filter(Booking.status == status)

        total = query.count()
        bookings = query.order_by(
            Booking.scheduled_date.desc(),
            Booking.scheduled_time.desc()
        ).offset((page - 1) * limit).limit(limit).all()
        return bookings, total

    def get_booking_by_id(self, booking_id, user_id: UUID) -> Booking:
        return self._get_owned(booking_id, user_id)

    def update_booking(self, booking_id, user_id: UUID, data: BookingUpdate) -> Booking:
        """Reschedule and/or change notes on an open booking"""
        booking = self._get_owned(booking_id, user_id)

        if BookingStatus(booking.status) not in MODIFIABLE_STATUSES:
            raise BadRequestError("Cannot modify this booking")

        moved = False
        if data.scheduled_date is not None or data.scheduled_time is not None:
            new_date = data.scheduled_date or booking.scheduled_date
            new_time = data.scheduled_time or booking.scheduled_time

            self.slot_service.ensure_not_past(new_date, "Cannot reschedule to past date")
            self.slot_service.validate_booking_window(new_date)

            # Keeping the current slot must not count the booking against itself
            moved = (new_date, new_time) != (booking.scheduled_date, booking.scheduled_time)

        if moved:
            with self.slot_lock.hold(new_date, new_time):
                if not self.slot_service.is_slot_available(new_date, new_time):
                    raise SlotUnavailableError("Selected time slot is not available")

                duration = booking.service.duration_minutes if booking.service else 60
                booking.scheduled_date = new_date
                booking.scheduled_time = new_time
                booking.time_slot_start = new_time
                booking.time_slot_end = self.slot_service.get_end_time(new_time, duration)
                if data.notes is not None:
                    booking.notes = data.notes
                self.db.commit()

            logger.info(f"Booking {booking.booking_number} rescheduled to {new_date} {new_time}")
        elif data.notes is not None:
            booking.notes = data.notes
            self.db.commit()

        self.db.refresh(booking)
        return booking

    def cancel_booking(self, booking_id, user_id: UUID, reason: Optional[str] = None) -> Booking:
        booking = self._get_owned(booking_id, user_id)

        if BookingStatus(booking.status) not in MODIFIABLE_STATUSES:
            raise BadRequestError("Cannot cancel this booking")

        booking.status = BookingStatus.CANCELLED.value
        booking.cancellation_reason = reason
        booking.cancelled_at = self.clock()
        self.db.commit()
        self.db.refresh(booking)

        logger.info(f"Booking {booking.booking_number} cancelled by customer")

        title, message, payload = messages.customer_cancelled_entry(booking, reason)
        self.dispatcher.admin_notification(AdminNotificationType.BOOKING_CANCELLED, title, message, payload)

        return booking
