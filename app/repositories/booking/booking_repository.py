# app/repositories/booking/booking_repository.py
"""
Booking repository.

Provides lookups by id and reference, filtered listing, the daily
arrival/departure views and aggregate statistics for homestay bookings.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models.base.enums import BookingStatus
from app.models.booking.booking import Booking
from app.repositories.base.base_repository import BaseRepository


@dataclass
class BookingSearchCriteria:
    """Filters accepted by booking listing."""

    status: Optional[BookingStatus] = None
    homestay_id: Optional[str] = None
    lead_id: Optional[str] = None
    check_in_after: Optional[date] = None
    check_in_before: Optional[date] = None


@dataclass
class BookingStatistics:
    """Booking statistics data structure."""

    total_bookings: int = 0
    confirmed_bookings: int = 0
    checked_in_bookings: int = 0
    cancelled_bookings: int = 0
    total_revenue: Decimal = field(default_factory=lambda: Decimal("0.00"))
    total_paid: Decimal = field(default_factory=lambda: Decimal("0.00"))

    @property
    def pending_amount(self) -> Decimal:
        return self.total_revenue - self.total_paid


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for booking operations.

    Provides:
    - Lookup by id and by booking reference
    - Filtered search, newest first
    - Today's check-ins and check-outs
    - Aggregate statistics
    """

    def __init__(self, db: Session):
        """Initialize booking repository."""
        super().__init__(Booking, db)

    # ==================== SEARCH & RETRIEVAL ====================

    def find_by_reference(self, booking_reference: str) -> Optional[Booking]:
        """
        Find booking by its reference.

        Args:
            booking_reference: Reference such as BKG-2025-7QK2MX

        Returns:
            Booking or None
        """
        try:
            query = (
                select(Booking)
                .where(Booking.booking_reference == booking_reference)
                .options(selectinload(Booking.rooms))
            )
            return self.db.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._persistence_error("find by reference", e) from e

    def reference_exists(self, booking_reference: str) -> bool:
        query = select(func.count(Booking.id)).where(
            Booking.booking_reference == booking_reference
        )
        return self.db.execute(query).scalar_one() > 0

    def search_bookings(
        self,
        criteria: BookingSearchCriteria,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Booking]:
        """
        Booking search with optional filters.

        Args:
            criteria: Search criteria
            skip: Number of records to skip
            limit: Maximum number of records

        Returns:
            Bookings, newest first
        """
        query = select(Booking)

        filters = self._build_search_filters(criteria)
        if filters:
            query = query.where(and_(*filters))

        query = (
            query.order_by(Booking.created_at.desc(), Booking.booking_reference.desc())
            .offset(skip)
            .limit(limit)
            .options(selectinload(Booking.rooms))
        )

        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("search", e) from e

    def _build_search_filters(self, criteria: BookingSearchCriteria) -> List:
        """Build SQLAlchemy filters from search criteria."""
        filters = []

        if criteria.status:
            filters.append(Booking.status == criteria.status)

        if criteria.homestay_id:
            filters.append(Booking.homestay_id == criteria.homestay_id)

        if criteria.lead_id:
            filters.append(Booking.lead_id == criteria.lead_id)

        if criteria.check_in_after:
            filters.append(Booking.check_in_date >= criteria.check_in_after)

        if criteria.check_in_before:
            filters.append(Booking.check_in_date <= criteria.check_in_before)

        return filters

    # ==================== DAILY VIEWS ====================

    def find_check_ins_on(self, day: date, homestay_id: Optional[str] = None) -> List[Booking]:
        """Confirmed bookings arriving on the given day."""
        return self._find_on_day(Booking.check_in_date, BookingStatus.CONFIRMED, day, homestay_id)

    def find_check_outs_on(self, day: date, homestay_id: Optional[str] = None) -> List[Booking]:
        """Checked-in bookings leaving on the given day."""
        return self._find_on_day(Booking.check_out_date, BookingStatus.CHECKED_IN, day, homestay_id)

    def _find_on_day(self, column, status: BookingStatus, day: date, homestay_id: Optional[str]):
        query = select(Booking).where(column == day, Booking.status == status)
        if homestay_id:
            query = query.where(Booking.homestay_id == homestay_id)
        query = query.order_by(Booking.guest_name).options(selectinload(Booking.rooms))

        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("daily view", e) from e

    # ==================== ANALYTICS ====================

    def get_booking_statistics(self, homestay_id: Optional[str] = None) -> BookingStatistics:
        """
        Get booking statistics.

        Revenue and paid amounts exclude cancelled bookings.

        Args:
            homestay_id: Optional homestay filter

        Returns:
            Booking statistics
        """
        not_cancelled = Booking.status != BookingStatus.CANCELLED

        def count_status(status: BookingStatus):
            return func.coalesce(func.sum(case((Booking.status == status, 1), else_=0)), 0)

        query = select(
            func.count(Booking.id),
            count_status(BookingStatus.CONFIRMED),
            count_status(BookingStatus.CHECKED_IN),
            count_status(BookingStatus.CANCELLED),
            func.coalesce(func.sum(case((not_cancelled, Booking.total_amount), else_=0)), 0),
            func.coalesce(func.sum(case((not_cancelled, Booking.paid_amount), else_=0)), 0),
        )

        if homestay_id:
            query = query.where(Booking.homestay_id == homestay_id)

        try:
            row = self.db.execute(query).one()
        except SQLAlchemyError as e:
            raise self._persistence_error("statistics", e) from e

        return BookingStatistics(
            total_bookings=row[0] or 0,
            confirmed_bookings=int(row[1]),
            checked_in_bookings=int(row[2]),
            cancelled_bookings=int(row[3]),
            total_revenue=Decimal(str(row[4])).quantize(Decimal("0.01")),
            total_paid=Decimal(str(row[5])).quantize(Decimal("0.01")),
        )
