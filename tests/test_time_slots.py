"""Tests for time slot helpers and slot sources."""

from datetime import date

import pytest

from carwash.services.slot.slot_sources import FixedSlotCatalog, OperatingHoursSlotSource
from carwash.utils.time_slots import (
    calculate_end_time,
    format_display_date,
    format_time_slot,
    generate_booking_number,
    is_valid_time,
    normalize_time,
    time_to_minutes,
)


class TestEndTime:

    def test_simple_addition(self):
        assert calculate_end_time("09:00", 45) == "09:45"

    def test_carries_into_next_hour(self):
        assert calculate_end_time("10:30", 90) == "12:00"

    def test_wraps_past_midnight_without_day_rollover(self):
        assert calculate_end_time("23:30", 60) == "00:30"


class TestFormatting:

    @pytest.mark.parametrize("time24, expected", [
        ("13:30", "1:30 PM"),
        ("00:05", "12:05 AM"),
        ("12:00", "12:00 PM"),
        ("09:00", "9:00 AM"),
    ])
    def test_format_time_slot(self, time24, expected):
        assert format_time_slot(time24) == expected

    def test_format_display_date(self):
        assert format_display_date(date(2024, 6, 10)) == "Mon, Jun 10"

    def test_normalize_pads_single_digit_hour(self):
        assert normalize_time("9:00") == "09:00"
        assert time_to_minutes("9:30") == 570


class TestValidation:

    @pytest.mark.parametrize("value", ["00:00", "9:30", "23:59"])
    def test_valid(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "", "1230"])
    def test_invalid(self, value):
        assert not is_valid_time(value)


class TestBookingNumber:

    def test_format(self):
        number = generate_booking_number()
        assert number.startswith("CW-")
        assert len(number) == 9
        suffix = number[3:]
        assert suffix == suffix.upper()
        int(suffix, 16)


class TestSlotSources:

    def test_fixed_catalog_day_parts(self):
        catalog = FixedSlotCatalog()
        parts = catalog.day_parts()
        assert list(parts) == ["morning", "afternoon", "evening", "night"]
        assert parts["morning"][0] == "08:00"
        assert parts["morning"][-1] == "11:30"
        assert parts["afternoon"][-1] == "16:30"
        assert parts["evening"][-1] == "19:30"
        assert parts["night"] == ("20:00", "20:30", "21:00")

    def test_fixed_catalog_ignores_service_duration(self):
        slots = FixedSlotCatalog().slots()
        assert len(slots) == 27
        assert "08:30" in slots

    def test_operating_hours_steps_by_duration(self):
        source = OperatingHoursSlotSource("08:00", "12:00", 60)
        assert source.slots() == ["08:00", "09:00", "10:00", "11:00"]

    def test_operating_hours_end_is_exclusive_and_partial_steps_kept(self):
        source = OperatingHoursSlotSource("08:00", "10:00", 45)
        assert source.slots() == ["08:00", "08:45", "09:30"]

    def test_operating_hours_rejects_zero_duration(self):
        with pytest.raises(ValueError):
            OperatingHoursSlotSource("08:00", "10:00", 0)
