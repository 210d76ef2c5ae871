# app/api/deps.py
"""
Request-scoped dependencies for the HTTP layer.

Each service is built on the request's database session. Example usage in
a router:

    @router.get("/bookings/{booking_id}")
    def read_booking(
        booking_id: str,
        service: BookingService = Depends(deps.get_booking_service),
    ):
        return deps.unwrap_result(service.get_booking(booking_id))
"""

from typing import Dict, TypeVar

from fastapi import Depends, status
from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException, ErrorCode
from app.db.session import get_db
from app.repositories.booking import BookingRepository, PaymentRepository
from app.repositories.homestay import HomestayRepository, RoomRepository
from app.services.base import ServiceResult
from app.services.booking import (
    BookingAnalyticsService,
    BookingPaymentService,
    BookingService,
    RoomAvailabilityService,
)
from app.services.homestay import HomestayService

TData = TypeVar("TData")


# --- Services ------------------------------------------------------------------

def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(BookingRepository(db), db)


def get_payment_service(db: Session = Depends(get_db)) -> BookingPaymentService:
    return BookingPaymentService(PaymentRepository(db), db)


def get_analytics_service(db: Session = Depends(get_db)) -> BookingAnalyticsService:
    return BookingAnalyticsService(BookingRepository(db), db)


def get_availability_service(db: Session = Depends(get_db)) -> RoomAvailabilityService:
    return RoomAvailabilityService(RoomRepository(db), db)


def get_homestay_service(db: Session = Depends(get_db)) -> HomestayService:
    return HomestayService(HomestayRepository(db), db)


# --- Results -------------------------------------------------------------------

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ROOM_HOMESTAY_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DISCOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LEAD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.HOMESTAY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROOM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROOM_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATUS_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BOOKING_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.LOCK_TIMEOUT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap_result(result: ServiceResult[TData]) -> TData:
    """
    Return the data of a successful result.

    A failed result is raised as a BaseAppException carrying the error's
    code, message and details; the registered exception handler renders it.
    """
    if result.is_success:
        return result.data

    error = result.error
    code = error.code if error else ErrorCode.INTERNAL_ERROR
    raise BaseAppException(
        message=error.message if error else "Request failed",
        error_code=code,
        details=error.details if error else None,
        status_code=ERROR_STATUS_CODES.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


__all__ = [
    "get_db",
    "get_booking_service",
    "get_payment_service",
    "get_analytics_service",
    "get_availability_service",
    "get_homestay_service",
    "unwrap_result",
    "ERROR_STATUS_CODES",
]
