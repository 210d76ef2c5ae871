# app/services/booking/booking_analytics_service.py
"""
Booking analytics and daily front-desk views.

- Aggregate statistics (counts by status, revenue, collected, pending)
- Today's expected check-ins and check-outs
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.booking.booking import Booking
from app.repositories.booking.booking_repository import BookingRepository
from app.schemas.booking.booking_response import BookingResponse, BookingStatisticsResponse
from app.services.base import BaseService, ServiceResult
from app.utils.date_utils import today_utc


class BookingAnalyticsService(BaseService[Booking, BookingRepository]):
    """Read-only reporting over bookings."""

    def __init__(self, repository: BookingRepository, db_session: Session):
        super().__init__(repository, db_session)

    def get_statistics(self, homestay_id: Optional[str] = None) -> ServiceResult[BookingStatisticsResponse]:
        """
        Booking counts and money totals, optionally for one homestay.

        Cancelled bookings count towards total_bookings and
        cancelled_bookings only; their amounts are left out of revenue.
        """
        try:
            stats = self.repository.get_booking_statistics(homestay_id)
            return ServiceResult.success(
                BookingStatisticsResponse(
                    total_bookings=stats.total_bookings,
                    confirmed_bookings=stats.confirmed_bookings,
                    checked_in_bookings=stats.checked_in_bookings,
                    cancelled_bookings=stats.cancelled_bookings,
                    total_revenue=stats.total_revenue,
                    total_paid=stats.total_paid,
                    pending_amount=stats.pending_amount,
                )
            )
        except Exception as e:
            return self._handle_exception(e, "get booking statistics", homestay_id)

    def get_today_check_ins(
        self,
        homestay_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ServiceResult[List[BookingResponse]]:
        """Confirmed bookings arriving today."""
        day = today or today_utc()
        try:
            bookings = self.repository.find_check_ins_on(day, homestay_id)
            return ServiceResult.success(
                [BookingResponse.from_booking(b) for b in bookings],
                metadata={"date": day.isoformat(), "count": len(bookings)},
            )
        except Exception as e:
            return self._handle_exception(e, "get today's check-ins", homestay_id)

    def get_today_check_outs(
        self,
        homestay_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ServiceResult[List[BookingResponse]]:
        """Checked-in bookings due to leave today."""
        day = today or today_utc()
        try:
            bookings = self.repository.find_check_outs_on(day, homestay_id)
            return ServiceResult.success(
                [BookingResponse.from_booking(b) for b in bookings],
                metadata={"date": day.isoformat(), "count": len(bookings)},
            )
        except Exception as e:
            return self._handle_exception(e, "get today's check-outs", homestay_id)


__all__ = ["BookingAnalyticsService"]
