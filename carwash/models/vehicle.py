# carwash/models/vehicle.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from carwash.models.base import Base


VEHICLE_TYPES = ("sedan", "suv", "hatchback", "truck", "van", "other")


class Vehicle(Base):
    """A customer's car. Bookings reference it, they never own it."""
    __tablename__ = "vehicles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(50), nullable=False)
    license_plate = Column(String(20), nullable=False)
    make = Column(String(50), nullable=True)
    vehicle_model = Column(String(50), nullable=True)
    year = Column(Integer, nullable=True)
    color = Column(String(30), nullable=True)
    vehicle_type = Column(String(20), default="sedan")
    image = Column(String, nullable=True)

    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="vehicles")

    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate={self.license_plate})>"

    def to_summary(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "licensePlate": self.license_plate,
            "image": self.image,
        }


Index("ix_vehicles_user_active", Vehicle.user_id, Vehicle.is_active)

# At most one default vehicle per user
Index(
    "uq_vehicles_user_default",
    Vehicle.user_id,
    unique=True,
    postgresql_where=Vehicle.is_default.is_(True),
    sqlite_where=Vehicle.is_default.is_(True),
)
