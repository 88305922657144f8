from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import Base, get_db
from src.main import app
from src.models import Booking, Employee, ParkingSpot, Privilege, Vehicle
from src.bookings.booking_service import BookingLockRegistry, BookingService

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def booking_service(db):
    return BookingService(db, locks=BookingLockRegistry())

@pytest.fixture
def make_spot(db):
    counter = {"n": 0}

    def _make_spot(
        zone="Zone A",
        spot_type="General Parking",
        price=Decimal("3000"),
        is_active=True,
        lot_code="A",
    ):
        counter["n"] += 1
        spot = ParkingSpot(
            lot_code=lot_code,
            spot_number=counter["n"],
            zone_text=zone,
            spot_type=spot_type,
            price=price,
            is_active=is_active
        )
        db.add(spot)
        db.commit()
        db.refresh(spot)
        return spot

    return _make_spot

@pytest.fixture
def make_employee(db):
    counter = {"n": 0}

    def _make_employee(
        full_name=None,
        employee_type="General",
        tier=None,
        privilege_label=None,
        plates=(),
        code=None,
        is_active=True,
    ):
        counter["n"] += 1
        code = code or f"{counter['n']:08d}"
        employee = Employee(
            employee_code=code,
            full_name=full_name or f"Employee {counter['n']}",
            employee_type=employee_type,
            is_active=is_active
        )
        db.add(employee)
        if tier is not None or privilege_label:
            db.add(Privilege(employee_code=code, tier=tier or 0, label=privilege_label))
        for plate in plates:
            db.add(Vehicle(employee_code=code, license_plate=plate))
        db.commit()
        db.refresh(employee)
        return employee

    return _make_employee

@pytest.fixture
def insert_booking(db):
    """Insert a booking row directly, bypassing conflict checks"""

    def _insert_booking(spot_id, employee_id, start, end, is_deleted=False):
        booking = Booking(
            spot_id=spot_id,
            employee_id=employee_id,
            booking_start=start,
            booking_end=end,
            status="confirmed",
            is_deleted=is_deleted
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _insert_booking
