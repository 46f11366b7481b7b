# carwash/schemas/unavailability.py
from datetime import date as Date
from typing import List, Optional
from pydantic import Field, model_validator

from carwash.models.staff_unavailability import UnavailabilityType
from carwash.schemas.booking import CamelModel, SlotTime


class UnavailabilityCreate(CamelModel):
    date: Date
    type: UnavailabilityType
    time_slots: Optional[List[SlotTime]] = None
    unavailable_count: int = Field(1, ge=1, description="At least 1 staff must be unavailable")
    reason: Optional[str] = Field(None, max_length=200)

    @model_validator(mode="after")
    def check_time_slots(self):
        if self.type == UnavailabilityType.TIME_SLOT and not self.time_slots:
            raise ValueError("Time slots are required when type is time_slot")
        return self


class UnavailabilityUpdate(CamelModel):
    type: Optional[UnavailabilityType] = None
    time_slots: Optional[List[SlotTime]] = None
    unavailable_count: Optional[int] = Field(None, ge=1)
    reason: Optional[str] = Field(None, max_length=200)
