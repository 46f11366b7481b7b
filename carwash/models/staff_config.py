# carwash/models/staff_config.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid
from carwash.models.base import Base


DEFAULT_STAFF_CONFIG = {
    "total_staff": 3,
    "service_duration_minutes": 60,
    "operating_start_time": "08:00",
    "operating_end_time": "22:00",
    "booking_window_days": 7,
}


class StaffConfig(Base):
    """Single-row table holding capacity and operating hours"""
    __tablename__ = "staff_config"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    total_staff = Column(Integer, nullable=False, default=DEFAULT_STAFF_CONFIG["total_staff"])
    service_duration_minutes = Column(
        Integer, nullable=False, default=DEFAULT_STAFF_CONFIG["service_duration_minutes"]
    )
    operating_start_time = Column(String(5), nullable=False, default=DEFAULT_STAFF_CONFIG["operating_start_time"])
    operating_end_time = Column(String(5), nullable=False, default=DEFAULT_STAFF_CONFIG["operating_end_time"])
    booking_window_days = Column(Integer, nullable=False, default=DEFAULT_STAFF_CONFIG["booking_window_days"])

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StaffConfig(total_staff={self.total_staff}, window={self.booking_window_days}d)>"

    def to_dict(self) -> dict:
        return {
            "totalStaff": self.total_staff,
            "serviceDurationMinutes": self.service_duration_minutes,
            "operatingStartTime": self.operating_start_time,
            "operatingEndTime": self.operating_end_time,
            "bookingWindowDays": self.booking_window_days or DEFAULT_STAFF_CONFIG["booking_window_days"],
        }
