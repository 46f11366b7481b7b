# carwash/models/booking.py
from sqlalchemy import Column, String, Numeric, Text, Date, DateTime, ForeignKey, Index, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid
from carwash.models.base import Base


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses a customer may still reschedule or cancel from
MODIFIABLE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

# Statuses counted as "upcoming" in the customer's booking list
UPCOMING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS)

# Only enforced when STRICT_STATUS_TRANSITIONS is on; the admin endpoint is permissive by default
ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.COMPLETED},
    BookingStatus.CONFIRMED: {BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED, BookingStatus.COMPLETED},
    BookingStatus.IN_PROGRESS: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}


def is_transition_allowed(current: BookingStatus, new: BookingStatus) -> bool:
    if current == new:
        return True
    return new in ALLOWED_TRANSITIONS[current]


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_number = Column(String(12), nullable=False, unique=True, index=True)

    # References
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=False)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.id"), nullable=False)

    # Schedule: day granularity date plus "HH:mm" start, end derived from service duration
    scheduled_date = Column(Date, nullable=False, index=True)
    scheduled_time = Column(String(5), nullable=False)
    time_slot_start = Column(String(5), nullable=False)
    time_slot_end = Column(String(5), nullable=False)

    # {address, city?, state?, zipCode?, coordinates?: {latitude, longitude}}
    location = Column(JSON, nullable=False)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value, index=True)

    # Price snapshot taken at creation, never recomputed
    subtotal = Column(Numeric(10, 2), nullable=False)
    service_fee = Column(Numeric(10, 2), nullable=False, default=0)
    tax = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)

    notes = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bookings")
    vehicle = relationship("Vehicle")
    service = relationship("Service")

    def __repr__(self):
        return f"<Booking(number={self.booking_number}, {self.scheduled_date} {self.scheduled_time}, {self.status})>"

    def to_dict(self, include_user: bool = False) -> dict:
        """Convert to dictionary for API responses"""
        data = {
            "id": str(self.id),
            "bookingNumber": self.booking_number,
            "service": self.service.to_summary() if self.service else None,
            "vehicle": self.vehicle.to_summary() if self.vehicle else None,
            "scheduledDate": self.scheduled_date.isoformat(),
            "scheduledTime": self.scheduled_time,
            "timeSlot": {"start": self.time_slot_start, "end": self.time_slot_end},
            "location": self.location,
            "status": self.status,
            "subtotal": float(self.subtotal),
            "serviceFee": float(self.service_fee),
            "tax": float(self.tax),
            "total": float(self.total),
            "notes": self.notes,
            "cancellationReason": self.cancellation_reason,
            "cancelledAt": self.cancelled_at.isoformat() if self.cancelled_at else None,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_user:
            user = self.user
            data["user"] = {
                "id": str(user.id),
                "name": user.name,
                "phone": user.full_phone,
            } if user else {"id": "", "name": "Unknown", "phone": ""}
        return data


# Capacity counts hit (date, time, status) on every availability check
Index("ix_bookings_slot_status", Booking.scheduled_date, Booking.scheduled_time, Booking.status)
Index("ix_bookings_user_status_date", Booking.user_id, Booking.status, Booking.scheduled_date)
