# app/api/v1/bookings.py
"""
Booking endpoints: creation, queries, updates, lifecycle and payments.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import ValidationError as PydanticValidationError

from app.api import deps
from app.core.exceptions import ValidationError
from app.models.base.enums import BookingStatus
from app.schemas.booking import (
    BookingCreate,
    BookingDetail,
    BookingFilterParams,
    BookingResponse,
    BookingStatisticsResponse,
    BookingStatusUpdate,
    BookingUpdate,
    CheckInRequest,
    CheckOutRequest,
    PaymentCreate,
    PaymentResponse,
    RoomLineCancellation,
)
from app.services.booking import (
    BookingAnalyticsService,
    BookingPaymentService,
    BookingService,
)

router = APIRouter(prefix="/bookings", tags=["Booking Management"])


@router.post("", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(deps.get_booking_service),
):
    """Create a booking and all its room lines in one step."""
    return deps.unwrap_result(service.create_booking(payload))


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    homestay_id: Optional[str] = None,
    lead_id: Optional[str] = None,
    check_in_after: Optional[date] = None,
    check_in_before: Optional[date] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: BookingService = Depends(deps.get_booking_service),
):
    try:
        filters = BookingFilterParams(
            status=status_filter,
            homestay_id=homestay_id,
            lead_id=lead_id,
            check_in_after=check_in_after,
            check_in_before=check_in_before,
            skip=skip,
            limit=limit,
        )
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid booking filters",
            details={"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]},
        ) from e
    return deps.unwrap_result(service.list_bookings(filters))


@router.get("/statistics", response_model=BookingStatisticsResponse)
def get_booking_statistics(
    homestay_id: Optional[str] = None,
    service: BookingAnalyticsService = Depends(deps.get_analytics_service),
):
    return deps.unwrap_result(service.get_statistics(homestay_id))


@router.get("/today/check-ins", response_model=List[BookingResponse])
def get_today_check_ins(
    homestay_id: Optional[str] = None,
    service: BookingAnalyticsService = Depends(deps.get_analytics_service),
):
    return deps.unwrap_result(service.get_today_check_ins(homestay_id))


@router.get("/today/check-outs", response_model=List[BookingResponse])
def get_today_check_outs(
    homestay_id: Optional[str] = None,
    service: BookingAnalyticsService = Depends(deps.get_analytics_service),
):
    return deps.unwrap_result(service.get_today_check_outs(homestay_id))


@router.get("/reference/{reference}", response_model=BookingDetail)
def get_booking_by_reference(
    reference: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return deps.unwrap_result(service.get_booking_by_reference(reference))


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return deps.unwrap_result(service.get_booking(booking_id))


@router.patch("/{booking_id}", response_model=BookingDetail)
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    """Edit booking fields; a discount or tax change recomputes the totals."""
    return deps.unwrap_result(service.update_booking(booking_id, payload))


@router.patch("/{booking_id}/status", response_model=BookingDetail)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return deps.unwrap_result(service.update_status(booking_id, payload))


@router.post("/{booking_id}/check-in", response_model=BookingDetail)
def check_in_booking(
    booking_id: str,
    payload: Optional[CheckInRequest] = Body(None),
    service: BookingService = Depends(deps.get_booking_service),
):
    return deps.unwrap_result(service.check_in(booking_id, payload))


@router.post("/{booking_id}/check-out", response_model=BookingDetail)
def check_out_booking(
    booking_id: str,
    payload: Optional[CheckOutRequest] = Body(None),
    service: BookingService = Depends(deps.get_booking_service),
):
    return deps.unwrap_result(service.check_out(booking_id, payload))


@router.delete("/{booking_id}/rooms/{line_id}", response_model=BookingDetail)
def cancel_booking_room(
    booking_id: str,
    line_id: str,
    reason: Optional[str] = Query(None, max_length=500),
    service: BookingService = Depends(deps.get_booking_service),
):
    """Release one room of a pending or confirmed booking."""
    return deps.unwrap_result(
        service.cancel_room_line(booking_id, line_id, RoomLineCancellation(reason=reason))
    )


@router.post(
    "/{booking_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_booking_payment(
    booking_id: str,
    payload: PaymentCreate,
    service: BookingPaymentService = Depends(deps.get_payment_service),
):
    return deps.unwrap_result(service.add_payment(booking_id, payload))


@router.get("/{booking_id}/payments", response_model=List[PaymentResponse])
def list_booking_payments(
    booking_id: str,
    service: BookingPaymentService = Depends(deps.get_payment_service),
):
    return deps.unwrap_result(service.list_payments(booking_id))
