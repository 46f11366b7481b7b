# carwash/schemas/booking.py
from datetime import date
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from carwash.models.booking import BookingStatus
from carwash.utils.time_slots import TIME_PATTERN, normalize_time

# "HH:mm" 24h, stored zero-padded so it matches the slot catalog
SlotTime = Annotated[str, StringConstraints(pattern=TIME_PATTERN), AfterValidator(normalize_time)]


class CamelModel(BaseModel):
    """Accepts camelCase from clients and snake_case from Python callers"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CamelModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class BookingLocation(CamelModel):
    address: str = Field(..., min_length=1, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    coordinates: Optional[Coordinates] = None


class BookingCreate(CamelModel):
    """Request body for POST /bookings"""
    vehicle_id: str = Field(..., min_length=1)
    service_id: str = Field(..., min_length=1)
    scheduled_date: date
    scheduled_time: SlotTime
    location: BookingLocation
    notes: Optional[str] = Field(None, max_length=500)


class BookingUpdate(CamelModel):
    """Request body for PATCH /bookings/{id} (reschedule and/or notes)"""
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[SlotTime] = None
    notes: Optional[str] = Field(None, max_length=500)


class BookingCancel(CamelModel):
    reason: Optional[str] = Field(None, max_length=500)


class BookingStatusUpdate(CamelModel):
    """Request body for PATCH /admin/bookings/{id}/status"""
    status: BookingStatus
    reason: Optional[str] = Field(None, max_length=500)
