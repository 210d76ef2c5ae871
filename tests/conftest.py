"""
Shared fixtures.

Every test gets its own SQLite database file, so sessions opened from
several threads see each other's committed rows exactly as separate
requests would.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence, Tuple

import pytest
from sqlalchemy.orm import Session, sessionmaker

from app.db.init_db import init_db
from app.db.session import build_engine
from app.models.base.enums import RoomStatus, RoomType
from app.models.homestay import Homestay, Room
from app.models.lead import Lead
from app.repositories.booking import BookingRepository, PaymentRepository
from app.repositories.homestay import RoomRepository
from app.schemas.booking import BookingCreate, BookingRoomRequest
from app.services.booking import (
    BookingAnalyticsService,
    BookingPaymentService,
    BookingService,
    RoomAvailabilityService,
)

CHECK_IN = date(2025, 1, 10)
CHECK_OUT = date(2025, 1, 15)


@dataclass
class SeedData:
    homestay: Homestay
    other_homestay: Homestay
    room_a: Room
    room_b: Room
    family_room: Room
    blocked_room: Room
    maintenance_room: Room
    foreign_room: Room
    lead: Lead


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


def _room(homestay: Homestay, number: str, capacity: int, price: str, **kwargs) -> Room:
    return Room(
        homestay=homestay,
        room_number=number,
        room_type=kwargs.pop("room_type", RoomType.NON_VIEW),
        capacity=capacity,
        price_per_head=Decimal(price),
        **kwargs,
    )


@pytest.fixture
def seed(db_session) -> SeedData:
    homestay = Homestay(name="Hillside Homestay", city="Munnar", total_rooms=5)
    other = Homestay(name="Lakeview Homestay", city="Alleppey", total_rooms=1)

    data = SeedData(
        homestay=homestay,
        other_homestay=other,
        room_a=_room(homestay, "101", 2, "1000.00", room_type=RoomType.VIEW),
        room_b=_room(homestay, "102", 2, "1500.00"),
        family_room=_room(homestay, "103", 4, "800.00"),
        blocked_room=_room(homestay, "104", 2, "900.00", status=RoomStatus.BLOCKED),
        maintenance_room=_room(homestay, "105", 2, "900.00", status=RoomStatus.MAINTENANCE),
        foreign_room=_room(other, "201", 2, "1200.00"),
        lead=Lead(
            name="Meera Nair",
            email="meera@example.com",
            phone="+919800000001",
            number_of_adults=2,
            number_of_children=1,
        ),
    )
    db_session.add_all([homestay, other, data.lead])
    db_session.commit()
    return data


@pytest.fixture
def booking_service(db_session) -> BookingService:
    return BookingService(BookingRepository(db_session), db_session)


@pytest.fixture
def availability_service(db_session) -> RoomAvailabilityService:
    return RoomAvailabilityService(RoomRepository(db_session), db_session)


@pytest.fixture
def payment_service(db_session) -> BookingPaymentService:
    return BookingPaymentService(PaymentRepository(db_session), db_session)


@pytest.fixture
def analytics_service(db_session) -> BookingAnalyticsService:
    return BookingAnalyticsService(BookingRepository(db_session), db_session)


@pytest.fixture
def make_request(seed) -> Callable[..., BookingCreate]:
    """Build a BookingCreate for the seeded lead and homestay."""

    def factory(
        rooms: Sequence[Tuple[Room, int]],
        check_in: date = CHECK_IN,
        check_out: date = CHECK_OUT,
        discount: str = "0",
        tax: Optional[str] = "0",
        homestay: Optional[Homestay] = None,
        lead_id: Optional[str] = None,
        **kwargs,
    ) -> BookingCreate:
        return BookingCreate(
            lead_id=lead_id or seed.lead.id,
            homestay_id=(homestay or seed.homestay).id,
            check_in_date=check_in,
            check_out_date=check_out,
            rooms=[
                BookingRoomRequest(room_id=room.id, number_of_guests=guests)
                for room, guests in rooms
            ],
            discount_amount=Decimal(discount),
            tax_percentage=Decimal(tax) if tax is not None else None,
            **kwargs,
        )

    return factory


@pytest.fixture
def create_booking(booking_service, make_request):
    """Create a booking and return its detail, failing the test on error."""

    def factory(*args, **kwargs):
        result = booking_service.create_booking(make_request(*args, **kwargs))
        assert result.is_success, result.error
        return result.data

    return factory
