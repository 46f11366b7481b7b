# carwash/schemas/staff.py
from typing import Optional
from pydantic import Field

from carwash.schemas.booking import CamelModel, SlotTime


class StaffConfigUpdate(CamelModel):
    """Partial update; omitted fields keep their stored values"""
    total_staff: Optional[int] = Field(None, ge=1, description="Must have at least 1 staff member")
    service_duration_minutes: Optional[int] = Field(None, ge=15)
    operating_start_time: Optional[SlotTime] = None
    operating_end_time: Optional[SlotTime] = None
    booking_window_days: Optional[int] = Field(None, ge=1, le=90)
