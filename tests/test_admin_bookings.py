"""Tests for the admin booking lifecycle and staff views."""

import uuid
from datetime import date

import pytest

from carwash.core.exceptions import BadRequestError, NotFoundError
from carwash.models import BookingStatus, UnavailabilityType
from carwash.models.booking import is_transition_allowed
from carwash.schemas.unavailability import UnavailabilityCreate
from carwash.services.booking.admin_booking_service import AdminBookingService
from carwash.services.staff.staff_service import StaffService

from conftest import NOW, make_booking, make_service, make_user, make_vehicle


class TestStatusUpdate:

    def test_confirm_pending_texts_customer(self, db, admin_booking_service, dispatcher, user, vehicle, service):
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00")
        updated = admin_booking_service.update_booking_status(booking.id, BookingStatus.CONFIRMED)
        assert updated.status == "confirmed"
        assert [(p.kind, p.booking_id) for p in dispatcher.customer] == [("booking_confirmed", str(booking.id))]
        assert dispatcher.admin == []

    def test_reconfirming_does_not_text_again(self, db, admin_booking_service, dispatcher, user, vehicle, service):
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00", status=BookingStatus.CONFIRMED)
        admin_booking_service.update_booking_status(booking.id, BookingStatus.CONFIRMED)
        assert dispatcher.customer == []

    def test_cancel_uses_default_reason(self, db, admin_booking_service, dispatcher, user, vehicle, service):
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00")
        updated = admin_booking_service.update_booking_status(booking.id, BookingStatus.CANCELLED)
        assert updated.cancellation_reason == "Cancelled by admin"
        assert updated.cancelled_at.replace(tzinfo=None) == NOW
        assert dispatcher.admin_types() == ["booking_cancelled"]
        assert dispatcher.admin[0].title == "Booking Cancelled"
        assert dispatcher.admin[0].message == f"Booking #{booking.booking_number} has been cancelled"

    def test_cancel_with_reason(self, db, admin_booking_service, user, vehicle, service):
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00")
        updated = admin_booking_service.update_booking_status(booking.id, BookingStatus.CANCELLED, "Equipment failure")
        assert updated.cancellation_reason == "Equipment failure"

    def test_complete_stamps_completed_at(self, db, admin_booking_service, dispatcher, user, vehicle, service):
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00", status=BookingStatus.IN_PROGRESS)
        updated = admin_booking_service.update_booking_status(booking.id, BookingStatus.COMPLETED)
        assert updated.completed_at is not None
        assert dispatcher.admin_types() == ["booking_completed"]
        assert dispatcher.admin[0].message == f"Booking #{booking.booking_number} has been completed"

    def test_permissive_by_default(self, db, admin_booking_service, user, vehicle, service):
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00", status=BookingStatus.COMPLETED)
        updated = admin_booking_service.update_booking_status(booking.id, BookingStatus.PENDING)
        assert updated.status == "pending"

    def test_strict_mode_rejects_reopening(self, db, dispatcher, clock, user, vehicle, service):
        strict = AdminBookingService(db, dispatcher, clock=clock, strict_transitions=True)
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00", status=BookingStatus.COMPLETED)
        with pytest.raises(BadRequestError, match="from completed to pending"):
            strict.update_booking_status(booking.id, BookingStatus.PENDING)

    def test_strict_mode_allows_forward_moves(self, db, dispatcher, clock, user, vehicle, service):
        strict = AdminBookingService(db, dispatcher, clock=clock, strict_transitions=True)
        booking = make_booking(db, user, vehicle, service, date(2024, 6, 3), "09:00")
        for status in (BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED):
            strict.update_booking_status(booking.id, status)
        assert booking.status == "completed"

    def test_unknown_booking(self, admin_booking_service):
        with pytest.raises(NotFoundError):
            admin_booking_service.update_booking_status(uuid.uuid4(), BookingStatus.CONFIRMED)


class TestTransitionTable:

    def test_terminal_states(self):
        assert not is_transition_allowed(BookingStatus.CANCELLED, BookingStatus.CONFIRMED)
        assert not is_transition_allowed(BookingStatus.COMPLETED, BookingStatus.CANCELLED)

    def test_same_status_is_a_no_op(self):
        assert is_transition_allowed(BookingStatus.CANCELLED, BookingStatus.CANCELLED)


class TestAdminBookingList:

    @pytest.fixture
    def seeded(self, db, user, vehicle, service):
        other = make_user(db, phone="9123456789", name="Meera Iyer")
        suv = make_vehicle(db, other, name="Family SUV", plate="DL3CAF0007")
        return {
            "past": make_booking(db, user, vehicle, service, date(2024, 5, 28), "09:00", status=BookingStatus.CONFIRMED),
            "today": make_booking(db, user, vehicle, service, date(2024, 6, 1), "12:00"),
            "future": make_booking(db, other, suv, service, date(2024, 6, 4), "08:00", status=BookingStatus.CONFIRMED),
            "done": make_booking(db, other, suv, service, date(2024, 6, 2), "08:00", status=BookingStatus.COMPLETED),
        }

    def test_upcoming(self, admin_booking_service, seeded):
        bookings, total = admin_booking_service.get_bookings(status="upcoming")
        assert total == 2
        assert [b.id for b in bookings] == [seeded["future"].id, seeded["today"].id]

    def test_status_and_date(self, admin_booking_service, seeded):
        bookings, total = admin_booking_service.get_bookings(status="completed")
        assert [b.id for b in bookings] == [seeded["done"].id]
        bookings, total = admin_booking_service.get_bookings(day=date(2024, 5, 28))
        assert [b.id for b in bookings] == [seeded["past"].id]

    @pytest.mark.parametrize("term", ["meera", "9123", "family", "dl3caf"])
    def test_search_customer_and_vehicle(self, admin_booking_service, seeded, term):
        bookings, total = admin_booking_service.get_bookings(search=term)
        assert total == 2
        assert {b.id for b in bookings} == {seeded["future"].id, seeded["done"].id}

    def test_search_booking_number(self, admin_booking_service, seeded):
        number = seeded["today"].booking_number
        bookings, total = admin_booking_service.get_bookings(search=number.lower())
        assert [b.id for b in bookings] == [seeded["today"].id]

    def test_admin_view_includes_customer(self, admin_booking_service, seeded):
        data = admin_booking_service.get_booking_by_id(seeded["future"].id).to_dict(include_user=True)
        assert data["user"]["name"] == "Meera Iyer"
        assert data["user"]["phone"] == "+919123456789"
        assert data["vehicle"]["licensePlate"] == "DL3CAF0007"


class TestStaffService:

    @pytest.fixture
    def staff_service(self, db, config_provider, unavailability_service):
        return StaffService(db, config_provider, unavailability_service)

    def test_daily_availability_counts_overlapping_bookings(
            self, db, config_provider, unavailability_service, staff_service, user, vehicle
    ):
        config_provider.update(operating_start_time="08:00", operating_end_time="12:00", service_duration_minutes=60)
        long_wash = make_service(db, name="Full Detail", price="80.00", duration=120)
        day = date(2024, 6, 4)
        make_booking(db, user, vehicle, long_wash, day, "08:00")
        make_booking(db, user, vehicle, long_wash, day, "08:30", status=BookingStatus.CANCELLED)
        unavailability_service.create(UnavailabilityCreate(
            date=day, type=UnavailabilityType.TIME_SLOT, time_slots=["11:00"], unavailable_count=2,
        ))

        result = staff_service.get_daily_availability(day)

        assert result["date"] == "2024-06-04"
        assert [(s["time"], s["availableStaff"]) for s in result["availableSlots"]] == [
            ("08:00", 2), ("09:00", 2), ("10:00", 3), ("11:00", 1),
        ]
        assert len(result["bookings"]) == 1
        entry = result["bookings"][0]
        assert entry["serviceName"] == "Full Detail"
        assert entry["startTime"] == "2024-06-04T08:00:00"
        assert entry["endTime"] == "2024-06-04T10:00:00"
        assert entry["staffAssigned"] == 1

    def test_bookings_for_date_numbers_staff(self, db, staff_service, user, vehicle, service):
        day = date(2024, 6, 4)
        make_booking(db, user, vehicle, service, day, "10:00")
        make_booking(db, user, vehicle, service, day, "09:00")
        entries = staff_service.get_bookings_for_date(day)
        assert [(e["startTime"][-8:-3], e["staffAssigned"]) for e in entries] == [("09:00", 1), ("10:00", 2)]
        assert entries[0]["customerName"] == "Asha Rao"
        assert entries[0]["vehicleName"] == "Daily Driver"
