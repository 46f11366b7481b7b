# carwash/utils/time_slots.py
"""Time slot helpers shared by the slot engine, bookings and notifications"""
import re
import secrets
from datetime import date, datetime

# HH:mm, 24h clock. Single-digit hours ("9:00") are accepted as the mobile app sends them.
TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"
TIME_RE = re.compile(TIME_PATTERN)

MINUTES_PER_DAY = 24 * 60

# Public slot catalog, fixed per day-part and independent of service duration
TIME_SLOTS = {
    "morning": {
        "label": "Morning",
        "slots": ("08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00", "11:30"),
    },
    "afternoon": {
        "label": "Afternoon",
        "slots": ("12:00", "12:30", "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00", "16:30"),
    },
    "evening": {
        "label": "Evening",
        "slots": ("17:00", "17:30", "18:00", "18:30", "19:00", "19:30"),
    },
    "night": {
        "label": "Night",
        "slots": ("20:00", "20:30", "21:00"),
    },
}

BOOKING_NUMBER_PREFIX = "CW-"


def is_valid_time(value: str) -> bool:
    return bool(value) and TIME_RE.match(value) is not None


def time_to_minutes(value: str) -> int:
    """Convert "HH:mm" to minutes since midnight"""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total_minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:mm" (no wrapping)"""
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def normalize_time(value: str) -> str:
    """Zero-pad an accepted time, "9:00" -> "09:00" """
    return minutes_to_time(time_to_minutes(value))


def calculate_end_time(start_time: str, duration_minutes: int) -> str:
    """
    Add a duration to a start time.

    The result wraps modulo 24h and carries no date: "23:30" + 60 gives "00:30".
    """
    total = (time_to_minutes(start_time) + duration_minutes) % MINUTES_PER_DAY
    return minutes_to_time(total)


def format_time_slot(time24: str) -> str:
    """Format "13:30" as "1:30 PM" """
    hours, minutes = (int(part) for part in time24.split(":"))
    period = "PM" if hours >= 12 else "AM"
    hours12 = hours % 12 or 12
    return f"{hours12}:{minutes:02d} {period}"


def format_display_date(value: date) -> str:
    """Short date used in customer and admin messages, e.g. "Mon, Jun 10" """
    return f"{value.strftime('%a')}, {value.strftime('%b')} {value.day}"


def slot_datetime(day: date, time24: str) -> datetime:
    hours, minutes = (int(part) for part in time24.split(":"))
    return datetime(day.year, day.month, day.day, hours, minutes)


def generate_booking_number() -> str:
    """CW- followed by 6 upper-case hex characters"""
    return f"{BOOKING_NUMBER_PREFIX}{secrets.token_hex(3).upper()}"
