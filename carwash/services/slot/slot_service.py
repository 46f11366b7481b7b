# ============================================================================
# carwash/services/slot/slot_service.py
# ============================================================================
"""
Slot availability engine.

Capacity of a slot is total_staff minus the staff made unavailable for that
slot; a slot is bookable while the number of non-cancelled bookings starting
at that exact (date, time) is below capacity.
"""
import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from carwash.core.exceptions import BadRequestError, NotFoundError
from carwash.models.booking import Booking, BookingStatus
from carwash.models.service import Service
from carwash.services.slot.slot_sources import FixedSlotCatalog
from carwash.services.staff.staff_config_provider import StaffConfigProvider
from carwash.services.staff.unavailability_service import UnavailabilityService, count_unavailable
from carwash.utils.ids import parse_uuid
from carwash.utils.time_slots import calculate_end_time, format_time_slot, slot_datetime

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def available_staff(total_staff: int, unavailable: int, booked: int) -> int:
    """Free staff for a slot, never negative"""
    capacity = max(0, total_staff - unavailable)
    return max(0, capacity - booked)


class SlotService:
    """Computes per-slot availability and guards the booking window"""

    def __init__(
            self,
            db: Session,
            config_provider: StaffConfigProvider,
            unavailability_service: Optional[UnavailabilityService] = None,
            clock: Clock = datetime.now,
            catalog: Optional[FixedSlotCatalog] = None,
    ):
        self.db = db
        self.config_provider = config_provider
        self.unavailability_service = unavailability_service or UnavailabilityService(db)
        self.clock = clock
        self.catalog = catalog or FixedSlotCatalog()

    def today(self) -> date:
        return self.clock().date()

    def get_booking_window_days(self) -> int:
        return self.config_provider.get().booking_window_days

    def ensure_not_past(self, day: date, message: str = "Cannot book for past dates") -> None:
        if day < self.today():
            raise BadRequestError(message)

    def validate_booking_window(self, day: date) -> None:
        """Reject dates later than today + booking_window_days"""
        window_days = self.get_booking_window_days()
        if day > self.today() + timedelta(days=window_days):
            raise BadRequestError(f"Bookings are limited to {window_days} days in advance")

    def get_end_time(self, start_time: str, duration_minutes: int) -> str:
        return calculate_end_time(start_time, duration_minutes)

    def _booked_counts(self, day: date) -> Counter:
        """Non-cancelled bookings per start time on one date"""
        rows = self.db.query(Booking.scheduled_time, func.count(Booking.id)).filter(
            Booking.scheduled_date == day,
            Booking.status != BookingStatus.CANCELLED.value
        ).group_by(Booking.scheduled_time).all()
        return Counter({time: count for time, count in rows})

    def get_available_slots(self, day: date, service_id: str) -> Dict:
        """
        Availability for every catalog slot on one date.

        Slots whose start is already behind the clock on the current day are
        reported unavailable with staffCount 0.
        """
        service = None
        parsed_id = parse_uuid(service_id)
        if parsed_id is not None:
            service = self.db.query(Service).filter(
                Service.id == parsed_id,
                Service.is_active.is_(True)
            ).first()
        if not service:
            raise NotFoundError("Service not found")

        self.ensure_not_past(day, "Cannot book for past dates")
        self.validate_booking_window(day)

        config = self.config_provider.get()
        unavailabilities = self.unavailability_service.get_by_date(day)
        booked = self._booked_counts(day)

        now = self.clock()
        is_today = day == now.date()

        slots = {}
        for part, part_slots in self.catalog.day_parts().items():
            entries = []
            for time in part_slots:
                free = available_staff(
                    config.total_staff,
                    count_unavailable(unavailabilities, time),
                    booked.get(time, 0),
                )
                if is_today and slot_datetime(day, time) < now:
                    free = 0
                entries.append({
                    "time": time,
                    "display": format_time_slot(time),
                    "available": free > 0,
                    "staffCount": free,
                })
            slots[part] = entries

        return {
            "date": day.isoformat(),
            "serviceDuration": service.duration_minutes,
            "bookingWindowDays": config.booking_window_days,
            "slots": slots,
        }

    def is_slot_available(self, day: date, time: str) -> bool:
        """
        Admission check for a single (date, time).

        Does not look at the clock; past-date rejection happens before this
        is called.
        """
        config = self.config_provider.get()
        unavailable = self.unavailability_service.get_unavailable_count_for_slot(day, time)
        booked = self.db.query(Booking).filter(
            Booking.scheduled_date == day,
            Booking.scheduled_time == time,
            Booking.status != BookingStatus.CANCELLED.value
        ).count()
        free = available_staff(config.total_staff, unavailable, booked)
        logger.debug(f"Slot {day} {time}: total={config.total_staff} unavailable={unavailable} booked={booked}")
        return free > 0
