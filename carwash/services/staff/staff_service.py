# ============================================================================
# carwash/services/staff/staff_service.py
# ============================================================================
"""Admin staffing views: configuration and per-day staff occupancy"""
import logging
from datetime import date, timedelta
from typing import Dict, List

from sqlalchemy.orm import Session, joinedload

from carwash.models.booking import Booking, BookingStatus
from carwash.models.staff_config import StaffConfig
from carwash.schemas.staff import StaffConfigUpdate
from carwash.services.slot.slot_sources import OperatingHoursSlotSource
from carwash.services.staff.staff_config_provider import StaffConfigProvider
from carwash.services.staff.unavailability_service import UnavailabilityService, count_unavailable
from carwash.utils.time_slots import slot_datetime, time_to_minutes

logger = logging.getLogger(__name__)

DEFAULT_BOOKING_DURATION_MINUTES = 60


class StaffService:

    def __init__(
            self,
            db: Session,
            config_provider: StaffConfigProvider,
            unavailability_service: UnavailabilityService = None,
    ):
        self.db = db
        self.config_provider = config_provider
        self.unavailability_service = unavailability_service or UnavailabilityService(db)

    def get_staff_config(self) -> StaffConfig:
        return self.config_provider.get()

    def update_staff_config(self, data: StaffConfigUpdate) -> StaffConfig:
        return self.config_provider.update(**data.model_dump(exclude_unset=True))

    def _active_bookings(self, day: date) -> List[Booking]:
        return self.db.query(Booking).options(
            joinedload(Booking.user),
            joinedload(Booking.vehicle),
            joinedload(Booking.service),
        ).filter(
            Booking.scheduled_date == day,
            Booking.status != BookingStatus.CANCELLED.value
        ).order_by(Booking.scheduled_time).all()

    @staticmethod
    def _booking_minutes(booking: Booking):
        start = time_to_minutes(booking.scheduled_time)
        duration = booking.service.duration_minutes if booking.service else DEFAULT_BOOKING_DURATION_MINUTES
        return start, start + (duration or DEFAULT_BOOKING_DURATION_MINUTES)

    @staticmethod
    def _format_staff_booking(booking: Booking, index: int) -> Dict:
        start = slot_datetime(booking.scheduled_date, booking.scheduled_time)
        duration = booking.service.duration_minutes if booking.service else DEFAULT_BOOKING_DURATION_MINUTES
        end = start + timedelta(minutes=duration or DEFAULT_BOOKING_DURATION_MINUTES)
        return {
            "id": str(booking.id),
            "bookingId": str(booking.id),
            "bookingNumber": booking.booking_number,
            "customerName": booking.user.name if booking.user else "Unknown",
            "vehicleName": booking.vehicle.name if booking.vehicle else "Unknown",
            "serviceName": booking.service.name if booking.service else "Unknown",
            "startTime": start.isoformat(),
            "endTime": end.isoformat(),
            "staffAssigned": index + 1,
        }

    def get_daily_availability(self, day: date) -> Dict:
        """
        Staff occupancy across the operating-hours grid for one date.

        A booking occupies every grid slot whose start falls inside
        [booking start, booking start + service duration).
        """
        config = self.config_provider.get()
        bookings = self._active_bookings(day)
        unavailabilities = self.unavailability_service.get_by_date(day)

        spans = [self._booking_minutes(booking) for booking in bookings]

        available_slots = []
        for time in OperatingHoursSlotSource.from_config(config).slots():
            minute = time_to_minutes(time)
            overlapping = sum(1 for start, end in spans if start <= minute < end)
            unavailable = count_unavailable(unavailabilities, time)
            available_slots.append({
                "time": time,
                "availableStaff": max(0, config.total_staff - unavailable - overlapping),
                "totalStaff": config.total_staff,
            })

        return {
            "date": day.isoformat(),
            "bookings": [self._format_staff_booking(b, i) for i, b in enumerate(bookings)],
            "availableSlots": available_slots,
        }

    def get_bookings_for_date(self, day: date) -> List[Dict]:
        return [self._format_staff_booking(b, i) for i, b in enumerate(self._active_bookings(day))]
