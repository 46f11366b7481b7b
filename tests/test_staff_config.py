"""Tests for the staff configuration provider and unavailability store."""

from datetime import date

import pytest
from pydantic import ValidationError

from carwash.core.exceptions import BadRequestError, ConflictError, NotFoundError
from carwash.models import StaffConfig, UnavailabilityType
from carwash.schemas.staff import StaffConfigUpdate
from carwash.schemas.unavailability import UnavailabilityCreate, UnavailabilityUpdate


class TestStaffConfigProvider:

    def test_first_read_creates_defaults(self, db, config_provider):
        config = config_provider.get()
        assert config.total_staff == 3
        assert config.service_duration_minutes == 60
        assert config.operating_start_time == "08:00"
        assert config.operating_end_time == "22:00"
        assert config.booking_window_days == 7
        assert db.query(StaffConfig).count() == 1

    def test_repeated_reads_keep_single_row(self, db, config_provider):
        config_provider.get()
        config_provider.get()
        assert db.query(StaffConfig).count() == 1

    def test_partial_update_keeps_other_fields(self, config_provider):
        config_provider.get()
        config = config_provider.update(total_staff=5, booking_window_days=None)
        assert config.total_staff == 5
        assert config.booking_window_days == 7

    def test_update_without_row_merges_defaults(self, db, config_provider):
        config = config_provider.update(booking_window_days=14)
        assert config.booking_window_days == 14
        assert config.total_staff == 3
        assert db.query(StaffConfig).count() == 1

    def test_unknown_field_rejected(self, config_provider):
        with pytest.raises(TypeError):
            config_provider.update(max_bookings=4)


class TestStaffConfigSchema:

    def test_accepts_camel_case(self):
        data = StaffConfigUpdate.model_validate({"totalStaff": 4, "operatingStartTime": "7:30"})
        assert data.total_staff == 4
        assert data.operating_start_time == "07:30"

    @pytest.mark.parametrize("payload", [
        {"totalStaff": 0},
        {"serviceDurationMinutes": 10},
        {"bookingWindowDays": 91},
        {"operatingEndTime": "25:00"},
    ])
    def test_bounds(self, payload):
        with pytest.raises(ValidationError):
            StaffConfigUpdate.model_validate(payload)


class TestUnavailabilityService:

    def test_create_full_day_clears_time_slots(self, unavailability_service):
        entry = unavailability_service.create(UnavailabilityCreate(
            date=date(2024, 6, 10), type=UnavailabilityType.FULL_DAY, time_slots=["09:00"],
        ))
        assert entry.time_slots is None
        assert entry.unavailable_count == 1

    def test_second_full_day_same_date_conflicts(self, unavailability_service):
        data = UnavailabilityCreate(date=date(2024, 6, 10), type=UnavailabilityType.FULL_DAY)
        unavailability_service.create(data)
        with pytest.raises(ConflictError, match="Full day unavailability already exists"):
            unavailability_service.create(data)

    def test_switching_to_full_day_conflicts_with_existing_full_day(self, unavailability_service):
        day = date(2024, 6, 10)
        unavailability_service.create(UnavailabilityCreate(date=day, type=UnavailabilityType.FULL_DAY))
        entry = unavailability_service.create(UnavailabilityCreate(
            date=day, type=UnavailabilityType.TIME_SLOT, time_slots=["09:00"],
        ))

        with pytest.raises(ConflictError, match="Full day unavailability already exists"):
            unavailability_service.update(entry.id, UnavailabilityUpdate(type=UnavailabilityType.FULL_DAY))

        types = sorted(u.type for u in unavailability_service.get_by_date(day))
        assert types == ["full_day", "time_slot"]

    def test_full_day_entry_can_be_updated_in_place(self, unavailability_service):
        entry = unavailability_service.create(UnavailabilityCreate(
            date=date(2024, 6, 10), type=UnavailabilityType.FULL_DAY,
        ))
        updated = unavailability_service.update(entry.id, UnavailabilityUpdate(
            type=UnavailabilityType.FULL_DAY, unavailable_count=2,
        ))
        assert updated.unavailable_count == 2

    def test_time_slot_entries_may_repeat(self, unavailability_service):
        for _ in range(2):
            unavailability_service.create(UnavailabilityCreate(
                date=date(2024, 6, 10), type=UnavailabilityType.TIME_SLOT, time_slots=["09:00"],
            ))
        assert len(unavailability_service.get_by_date(date(2024, 6, 10))) == 2

    def test_time_slot_type_requires_slots(self):
        with pytest.raises(ValidationError, match="Time slots are required"):
            UnavailabilityCreate(date=date(2024, 6, 10), type=UnavailabilityType.TIME_SLOT)

    def test_count_for_slot_sums_matching_entries(self, unavailability_service):
        day = date(2024, 6, 10)
        unavailability_service.create(UnavailabilityCreate(
            date=day, type=UnavailabilityType.FULL_DAY, unavailable_count=1,
        ))
        unavailability_service.create(UnavailabilityCreate(
            date=day, type=UnavailabilityType.TIME_SLOT, time_slots=["09:00", "09:30"], unavailable_count=2,
        ))
        assert unavailability_service.get_unavailable_count_for_slot(day, "09:00") == 3
        assert unavailability_service.get_unavailable_count_for_slot(day, "10:00") == 1
        assert unavailability_service.get_unavailable_count_for_slot(date(2024, 6, 11), "09:00") == 0

    def test_list_range_and_dates(self, unavailability_service):
        for day in (date(2024, 6, 12), date(2024, 6, 3), date(2024, 6, 20)):
            unavailability_service.create(UnavailabilityCreate(date=day, type=UnavailabilityType.FULL_DAY))
        unavailability_service.create(UnavailabilityCreate(
            date=date(2024, 6, 3), type=UnavailabilityType.TIME_SLOT, time_slots=["08:00"],
        ))

        entries = unavailability_service.list(date(2024, 6, 1), date(2024, 6, 15))
        assert [e.date for e in entries] == [date(2024, 6, 3), date(2024, 6, 3), date(2024, 6, 12)]

        dates = unavailability_service.get_dates_with_unavailability(date(2024, 6, 1), date(2024, 6, 30))
        assert dates == ["2024-06-03", "2024-06-12", "2024-06-20"]
        assert unavailability_service.has_unavailability(date(2024, 6, 3))
        assert not unavailability_service.has_unavailability(date(2024, 6, 4))

    def test_update_and_delete(self, unavailability_service):
        entry = unavailability_service.create(UnavailabilityCreate(
            date=date(2024, 6, 10), type=UnavailabilityType.FULL_DAY,
        ))
        updated = unavailability_service.update(entry.id, UnavailabilityUpdate(
            type=UnavailabilityType.TIME_SLOT, time_slots=["10:00"], unavailable_count=2, reason="Dentist",
        ))
        assert updated.type == "time_slot"
        assert updated.time_slots == ["10:00"]
        assert updated.reason == "Dentist"

        unavailability_service.delete(entry.id)
        with pytest.raises(NotFoundError, match="Unavailability entry not found"):
            unavailability_service.get_by_id(entry.id)

    def test_update_to_time_slot_without_slots_rejected(self, unavailability_service):
        entry = unavailability_service.create(UnavailabilityCreate(
            date=date(2024, 6, 10), type=UnavailabilityType.FULL_DAY,
        ))
        with pytest.raises(BadRequestError):
            unavailability_service.update(entry.id, UnavailabilityUpdate(type=UnavailabilityType.TIME_SLOT))

    def test_get_by_malformed_id_is_not_found(self, unavailability_service):
        with pytest.raises(NotFoundError):
            unavailability_service.get_by_id("not-a-uuid")
