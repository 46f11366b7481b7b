"""Shared test fixtures and helpers."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from carwash.api.dependencies import get_clock, get_dispatcher, get_slot_lock
from carwash.config.database import get_db
from carwash.config.settings import settings
from carwash.main import create_app
from carwash.models import Base, Booking, BookingStatus, Service, User, Vehicle
from carwash.services.booking.admin_booking_service import AdminBookingService
from carwash.services.booking.booking_service import BookingService
from carwash.services.booking.slot_lock import NullSlotLock
from carwash.services.notification.dispatcher import NotificationDispatcher
from carwash.services.slot.slot_service import SlotService
from carwash.services.staff.staff_config_provider import DatabaseStaffConfigProvider
from carwash.services.staff.unavailability_service import UnavailabilityService
from carwash.utils.time_slots import calculate_end_time, generate_booking_number

# Saturday morning
TODAY = date(2024, 6, 1)
NOW = datetime(2024, 6, 1, 10, 15)


class FixedClock:
    """Callable clock that tests can move forward"""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class RecordingDispatcher(NotificationDispatcher):
    """Keeps queued intents in memory instead of enqueuing Celery tasks"""

    def __init__(self):
        self.customer = []
        self.admin = []

    def send_customer(self, payload):
        self.customer.append(payload)

    def send_admin(self, payload):
        self.admin.append(payload)

    def admin_types(self):
        return [payload.type for payload in self.admin]


class FailingDispatcher(NotificationDispatcher):
    def send_customer(self, payload):
        raise ConnectionError("broker down")

    def send_admin(self, payload):
        raise ConnectionError("broker down")


# ============================================================================
# Database
# ============================================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


# ============================================================================
# Collaborators
# ============================================================================

@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def config_provider(db):
    return DatabaseStaffConfigProvider(db)


@pytest.fixture
def unavailability_service(db):
    return UnavailabilityService(db)


@pytest.fixture
def slot_service(db, config_provider, unavailability_service, clock):
    return SlotService(db, config_provider, unavailability_service, clock=clock)


@pytest.fixture
def booking_service(db, slot_service, dispatcher, clock):
    return BookingService(
        db, slot_service, dispatcher,
        slot_lock=NullSlotLock(), clock=clock, service_fee=3.00, tax_rate=0.0,
    )


@pytest.fixture
def admin_booking_service(db, dispatcher, clock):
    return AdminBookingService(db, dispatcher, clock=clock)


# ============================================================================
# Records
# ============================================================================

def make_user(db, phone: str = "9876543210", name: str = "Asha Rao") -> User:
    user = User(name=name, phone=phone, country_code="+91")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_vehicle(db, user: User, name: str = "Daily Driver", plate: str = "KA01AB1234",
                 is_active: bool = True) -> Vehicle:
    vehicle = Vehicle(user_id=user.id, name=name, license_plate=plate, is_active=is_active)
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    return vehicle


def make_service(db, name: str = "Exterior Wash", price: str = "25.00", duration: int = 30,
                 is_active: bool = True) -> Service:
    service = Service(
        name=name,
        slug=name.lower().replace(" ", "-"),
        description=f"{name} package",
        price=Decimal(price),
        duration_minutes=duration,
        category="basic",
        is_active=is_active,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def make_booking(db, user: User, vehicle: Vehicle, service: Service, day: date, time: str,
                 status: BookingStatus = BookingStatus.PENDING) -> Booking:
    """Insert a booking directly, bypassing admission"""
    booking = Booking(
        booking_number=generate_booking_number(),
        user_id=user.id,
        vehicle_id=vehicle.id,
        service_id=service.id,
        scheduled_date=day,
        scheduled_time=time,
        time_slot_start=time,
        time_slot_end=calculate_end_time(time, service.duration_minutes),
        location={"address": "12 MG Road"},
        status=status.value,
        subtotal=service.price,
        service_fee=Decimal("3.00"),
        tax=Decimal("0.00"),
        total=service.price + Decimal("3.00"),
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def vehicle(db, user):
    return make_vehicle(db, user)


@pytest.fixture
def service(db):
    return make_service(db)


# ============================================================================
# HTTP
# ============================================================================

def make_token(sub: str, role: str = "user", token_type: str = "access") -> str:
    claims = {
        "sub": str(sub),
        "role": role,
        "type": token_type,
        "exp": datetime.utcnow() + timedelta(hours=1),
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers(sub, role: str = "user") -> dict:
    return {"Authorization": f"Bearer {make_token(sub, role)}"}


@pytest.fixture
def client(db, clock, dispatcher):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_slot_lock] = lambda: NullSlotLock()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    return auth_headers("00000000-0000-0000-0000-000000000001", role="admin")


def booking_payload(vehicle: Vehicle, service: Service, day: date, time: str = "09:00",
                    notes: Optional[str] = None) -> dict:
    payload = {
        "vehicleId": str(vehicle.id),
        "serviceId": str(service.id),
        "scheduledDate": day.isoformat(),
        "scheduledTime": time,
        "location": {"address": "12 MG Road", "city": "Bengaluru", "zipCode": "560001"},
    }
    if notes is not None:
        payload["notes"] = notes
    return payload
