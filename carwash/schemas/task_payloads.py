from __future__ import annotations
# carwash/schemas/task_payloads.py
from pydantic import BaseModel, Field
from typing import Dict, Any, Literal


class CustomerBookingNotificationPayload(BaseModel):
    """Payload for customer-facing SMS + push about a booking"""
    kind: Literal["booking_received", "booking_confirmed"] = Field(..., description="Message template")
    booking_id: str = Field(..., description="Booking ID")


class AdminNotificationPayload(BaseModel):
    """Payload for creating an in-app admin notification"""
    type: str = Field(..., description="AdminNotificationType value")
    title: str = Field(..., description="Notification title")
    message: str = Field(..., description="Notification body")
    data: Dict[str, Any] = Field(default_factory=dict, description="bookingId, bookingNumber, reason, ...")
