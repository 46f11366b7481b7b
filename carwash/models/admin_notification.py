# carwash/models/admin_notification.py
from sqlalchemy import Column, String, Boolean, DateTime, Text, JSON, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import enum
import uuid
from carwash.models.base import Base


class AdminNotificationType(str, enum.Enum):
    NEW_USER = "new_user"
    NEW_BOOKING = "new_booking"
    BOOKING_CANCELLED = "booking_cancelled"
    BOOKING_COMPLETED = "booking_completed"
    ABANDONED_BOOKING = "abandoned_booking"


class AdminNotification(Base):
    """In-app notification feed for the back-office"""
    __tablename__ = "admin_notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(30), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, default=dict)  # bookingId, bookingNumber, reason, ...
    is_read = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "data": self.data or {},
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


Index("ix_admin_notifications_read_created", AdminNotification.is_read, AdminNotification.created_at)
