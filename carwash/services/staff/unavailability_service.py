# ============================================================================
# carwash/services/staff/unavailability_service.py
# ============================================================================
"""Staff unavailability entries: full-day or per-slot capacity reductions"""
import logging
from datetime import date
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from carwash.core.exceptions import BadRequestError, ConflictError, NotFoundError
from carwash.models.staff_unavailability import StaffUnavailability, UnavailabilityType
from carwash.schemas.unavailability import UnavailabilityCreate, UnavailabilityUpdate
from carwash.utils.ids import parse_uuid

logger = logging.getLogger(__name__)


def count_unavailable(unavailabilities: List[StaffUnavailability], time: str) -> int:
    """Sum of staff removed from the given slot by the entries of one date"""
    return sum(u.unavailable_count for u in unavailabilities if u.affects(time))


class UnavailabilityService:
    """CRUD and capacity lookups over StaffUnavailability"""

    def __init__(self, db: Session):
        self.db = db

    def _ensure_no_full_day(self, day: date, exclude_id: Optional[UUID] = None) -> None:
        """At most one full_day entry per date"""
        query = self.db.query(StaffUnavailability).filter(
            StaffUnavailability.date == day,
            StaffUnavailability.type == UnavailabilityType.FULL_DAY.value
        )
        if exclude_id is not None:
            query = query.filter(StaffUnavailability.id != exclude_id)
        if query.first():
            raise ConflictError("Full day unavailability already exists for this date")

    def create(self, data: UnavailabilityCreate) -> StaffUnavailability:
        if data.type == UnavailabilityType.FULL_DAY:
            self._ensure_no_full_day(data.date)

        unavailability = StaffUnavailability(
            date=data.date,
            type=data.type.value,
            time_slots=list(data.time_slots) if data.type == UnavailabilityType.TIME_SLOT else None,
            unavailable_count=data.unavailable_count,
            reason=data.reason,
        )
        self.db.add(unavailability)
        self.db.commit()
        self.db.refresh(unavailability)

        logger.info(
            f"Unavailability created for {data.date}: {data.type.value} x{data.unavailable_count}"
        )
        return unavailability

    def list(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[StaffUnavailability]:
        """List entries, optionally limited to an inclusive date range"""
        query = self.db.query(StaffUnavailability)
        if start_date:
            query = query.filter(StaffUnavailability.date >= start_date)
        if end_date:
            query = query.filter(StaffUnavailability.date <= end_date)
        return query.order_by(StaffUnavailability.date, StaffUnavailability.created_at).all()

    def get_by_date(self, day: date) -> List[StaffUnavailability]:
        return self.db.query(StaffUnavailability).filter(
            StaffUnavailability.date == day
        ).order_by(StaffUnavailability.type).all()

    def get_by_id(self, unavailability_id: Union[str, UUID]) -> StaffUnavailability:
        entry_id = parse_uuid(unavailability_id)
        unavailability = None
        if entry_id is not None:
            unavailability = self.db.query(StaffUnavailability).filter(
                StaffUnavailability.id == entry_id
            ).first()
        if not unavailability:
            raise NotFoundError("Unavailability entry not found")
        return unavailability

    def update(self, unavailability_id: Union[str, UUID], data: UnavailabilityUpdate) -> StaffUnavailability:
        unavailability = self.get_by_id(unavailability_id)

        if data.type == UnavailabilityType.FULL_DAY and unavailability.type != UnavailabilityType.FULL_DAY.value:
            self._ensure_no_full_day(unavailability.date, exclude_id=unavailability.id)

        if data.type is not None:
            unavailability.type = data.type.value
        if data.time_slots is not None:
            unavailability.time_slots = list(data.time_slots)
        if data.unavailable_count is not None:
            unavailability.unavailable_count = data.unavailable_count
        if data.reason is not None:
            unavailability.reason = data.reason

        if unavailability.type == UnavailabilityType.TIME_SLOT.value:
            if not unavailability.time_slots:
                self.db.rollback()
                raise BadRequestError("Time slots are required when type is time_slot")
        else:
            unavailability.time_slots = None

        self.db.commit()
        self.db.refresh(unavailability)
        return unavailability

    def delete(self, unavailability_id: Union[str, UUID]) -> None:
        unavailability = self.get_by_id(unavailability_id)
        self.db.delete(unavailability)
        self.db.commit()
        logger.info(f"Unavailability {unavailability_id} deleted")

    def get_unavailable_count_for_slot(self, day: date, time: str) -> int:
        """Total staff unavailable for one (date, time) slot"""
        return count_unavailable(self.get_by_date(day), time)

    def has_unavailability(self, day: date) -> bool:
        return self.db.query(StaffUnavailability).filter(
            StaffUnavailability.date == day
        ).count() > 0

    def get_dates_with_unavailability(self, start_date: date, end_date: date) -> List[str]:
        """Distinct ISO dates that carry any entry (calendar markers)"""
        rows = self.db.query(StaffUnavailability.date).filter(
            StaffUnavailability.date >= start_date,
            StaffUnavailability.date <= end_date
        ).distinct().order_by(StaffUnavailability.date).all()
        return [row[0].isoformat() for row in rows]
