# carwash/models/service.py
"""
Service Model - wash packages offered to customers.
Source of truth for price and duration at booking time.
"""
from sqlalchemy import Column, String, Numeric, Integer, Boolean, DateTime, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid
from carwash.models.base import Base


SERVICE_CATEGORIES = ("basic", "premium", "detailing")


class Service(Base):
    __tablename__ = "services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(100), nullable=False, unique=True)
    slug = Column(String(120), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    short_description = Column(String(150), nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    category = Column(String(20), nullable=False, default="basic")
    features = Column(JSON, default=list)

    # Status and ordering
    is_active = Column(Boolean, default=True, index=True)
    sort_order = Column(Integer, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name})>"

    def to_summary(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "price": float(self.price) if self.price is not None else None,
            "durationMinutes": self.duration_minutes,
        }
