# carwash/models/user.py
"""
Customer account (read-only here).
Accounts are created and authenticated by the auth service; bookings only
reference them and read the phone number for SMS.
"""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from carwash.models.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=False, unique=True, index=True)
    country_code = Column(String(5), nullable=False, default="+91")
    email = Column(String(255), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    vehicles = relationship("Vehicle", back_populates="user")
    bookings = relationship("Booking", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, phone={self.phone})>"

    @property
    def full_phone(self) -> str:
        return f"{self.country_code or ''}{self.phone}"
