# carwash/models/staff_unavailability.py
from sqlalchemy import Column, String, Integer, Date, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import enum
import uuid
from carwash.models.base import Base


class UnavailabilityType(str, enum.Enum):
    FULL_DAY = "full_day"
    TIME_SLOT = "time_slot"


class StaffUnavailability(Base):
    """Staff removed from the pool for a whole day or for specific slots (leave, sickness)"""
    __tablename__ = "staff_unavailability"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    date = Column(Date, nullable=False, index=True)
    type = Column(String(20), nullable=False, default=UnavailabilityType.FULL_DAY.value)
    time_slots = Column(JSON, nullable=True)  # ["09:00", "09:30"], only for time_slot entries
    unavailable_count = Column(Integer, nullable=False, default=1)
    reason = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StaffUnavailability(date={self.date}, type={self.type}, count={self.unavailable_count})>"

    def affects(self, time: str) -> bool:
        """True if this entry removes staff from the given slot"""
        if self.type == UnavailabilityType.FULL_DAY.value:
            return True
        return self.type == UnavailabilityType.TIME_SLOT.value and time in (self.time_slots or [])

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "type": self.type,
            "timeSlots": self.time_slots,
            "unavailableCount": self.unavailable_count,
            "reason": self.reason,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


Index("ix_staff_unavailability_date_type", StaffUnavailability.date, StaffUnavailability.type)
