"""
Core booking service: creation workflow, detail/list queries, updates and
the status lifecycle.

Creation is one fail-fast pass:

1. the stay range is validated and its nights counted;
2. the lead and the homestay are resolved;
3. under the reservation locks of every requested room, each line is
   checked in request order (room exists, fits the guests, belongs to
   the homestay, is free for the dates);
4. the lines are priced;
5. the booking and its lines are written and committed together;
6. the lead is marked converted. This last step runs after the commit and
   its failure is logged, never returned.

The booking status is the only stored lifecycle state. Room line status
is derived from it (see derive_line_status), so a status change is a
single-row update.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import (
    BookingNotFoundError,
    BookingStateError,
    CapacityExceededError,
    InvalidDiscountError,
    InvalidStatusTransitionError,
    PersistenceError,
    ResourceNotFoundError,
    RoomHomestayMismatchError,
)
from app.core.logging import track_performance
from app.models.base.enums import BookingStatus
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.models.homestay.homestay import Homestay
from app.models.lead.lead import Lead
from app.repositories.booking.booking_repository import BookingRepository, BookingSearchCriteria
from app.repositories.booking.payment_repository import PaymentRepository
from app.repositories.homestay.homestay_repository import HomestayRepository
from app.repositories.homestay.room_repository import RoomRepository
from app.repositories.lead.lead_repository import LeadRepository
from app.schemas.booking.booking_filters import BookingFilterParams
from app.schemas.booking.booking_request import BookingCreate
from app.schemas.booking.booking_response import BookingDetail, BookingResponse
from app.schemas.booking.booking_update import (
    BookingStatusUpdate,
    BookingUpdate,
    CheckInRequest,
    CheckOutRequest,
    RoomLineCancellation,
)
from app.services.base import BaseService, ServiceResult
from app.services.booking.booking_pricing_service import (
    BookingPricingService,
    BookingQuote,
    PricingLine,
)
from app.services.booking.room_availability_service import RoomAvailabilityService
from app.services.booking.room_lock import RoomReservationLock
from app.services.homestay.homestay_service import HomestayService
from app.services.lead.lead_service import LeadService
from app.utils.date_utils import now_utc, validate_stay_range
from app.utils.money import quantize_money, to_decimal
from app.utils.reference import generate_reference


ALLOWED_STATUS_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CHECKED_OUT}),
    BookingStatus.CHECKED_OUT: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}

LINE_RELEASABLE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})

REFERENCE_ATTEMPTS = 5


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    """Whether the lifecycle allows moving from current to target."""
    return target in ALLOWED_STATUS_TRANSITIONS.get(current, frozenset())


class BookingService(BaseService[Booking, BookingRepository]):
    """
    Core booking operations: create, update, detail & listings, lifecycle.

    Responsibilities:
    - All-or-nothing booking creation under per-room locks
    - Query operations by id, reference and filters
    - Editable fields and explicit total recomputation
    - Status transitions, check-in/check-out, releasing a room line
    """

    def __init__(
        self,
        repository: BookingRepository,
        db_session: Session,
        lead_service: Optional[LeadService] = None,
        homestay_service: Optional[HomestayService] = None,
        availability_service: Optional[RoomAvailabilityService] = None,
        pricing_service: Optional[BookingPricingService] = None,
        room_lock: Optional[RoomReservationLock] = None,
        payment_repository: Optional[PaymentRepository] = None,
    ):
        super().__init__(repository, db_session)
        self.room_repository = RoomRepository(db_session)
        self.lead_service = lead_service or LeadService(LeadRepository(db_session), db_session)
        self.homestay_service = homestay_service or HomestayService(
            HomestayRepository(db_session), db_session, room_repository=self.room_repository
        )
        self.availability_service = availability_service or RoomAvailabilityService(
            self.room_repository, db_session
        )
        self.pricing_service = pricing_service or BookingPricingService()
        self.room_lock = room_lock or RoomReservationLock(db_session)
        self.payment_repository = payment_repository or PaymentRepository(db_session)

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(self, request: BookingCreate) -> ServiceResult[BookingDetail]:
        """
        Create a booking with all its room lines, or nothing at all.

        Args:
            request: Booking creation data

        Returns:
            ServiceResult containing BookingDetail or error
        """
        try:
            nights = validate_stay_range(request.check_in_date, request.check_out_date)

            lead = self.lead_service.find_lead_by_id(request.lead_id)
            homestay = self.homestay_service.find_homestay_by_id(request.homestay_id)

            tax_percentage = (
                request.tax_percentage
                if request.tax_percentage is not None
                else to_decimal(settings.DEFAULT_TAX_PERCENTAGE)
            )

            log = self._logger.bind(lead_id=lead.id, homestay_id=homestay.id)
            log.info(
                "Creating booking",
                extra={
                    "room_ids": [line.room_id for line in request.rooms],
                    "check_in_date": request.check_in_date.isoformat(),
                    "check_out_date": request.check_out_date.isoformat(),
                },
            )

            # Availability check, pricing and writes form one unit per room.
            with self.room_lock.hold(line.room_id for line in request.rooms):
                with self.transaction():
                    booking = self._reserve_rooms(request, lead, homestay, nights, tax_percentage)

            log.info(
                f"Successfully created booking {booking.booking_reference}",
                extra={
                    "booking_id": booking.id,
                    "booking_reference": booking.booking_reference,
                    "total_amount": str(booking.total_amount),
                },
            )

            self._notify_lead_converted(lead.id, booking.id)

            return ServiceResult.success(
                BookingDetail.from_booking(booking, payments=[]),
                message="Booking created successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "create booking", request.lead_id)

    def _reserve_rooms(
        self,
        request: BookingCreate,
        lead: Lead,
        homestay: Homestay,
        nights: int,
        tax_percentage: Decimal,
    ) -> Booking:
        """Validate every line against fresh room state, price them and write the booking."""
        # Row locks and fresh state; later lookups hit the identity map.
        self.room_repository.lock_rooms([line.room_id for line in request.rooms])

        validated = []
        for line in request.rooms:
            room = self.homestay_service.find_room_by_id(line.room_id)

            if line.number_of_guests > room.capacity:
                raise CapacityExceededError(
                    room.id,
                    room_number=room.room_number,
                    capacity=room.capacity,
                    requested=line.number_of_guests,
                )

            if room.homestay_id != homestay.id:
                raise RoomHomestayMismatchError(room.id, homestay.id, room_number=room.room_number)

            self.availability_service.assert_available(
                room, request.check_in_date, request.check_out_date
            )
            validated.append((line, room))

        quote = self.pricing_service.compute_totals(
            [PricingLine(room.price_per_head, line.number_of_guests) for line, room in validated],
            nights,
            discount=request.discount_amount,
            tax_percentage=tax_percentage,
        )
        self._ensure_non_negative(quote)

        grand_total = quantize_money(quote.grand_total)
        booking = Booking(
            booking_reference=self._generate_booking_reference(),
            lead_id=lead.id,
            homestay_id=homestay.id,
            guest_name=lead.name,
            guest_email=lead.email,
            guest_phone=lead.phone,
            number_of_adults=lead.number_of_adults or 1,
            number_of_children=lead.number_of_children or 0,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            number_of_nights=nights,
            total_rooms=len(validated),
            status=BookingStatus.PENDING,
            total_amount=grand_total,
            paid_amount=Decimal("0.00"),
            balance_amount=grand_total,
            discount_amount=quantize_money(quote.discount),
            tax_percentage=quantize_money(quote.tax_percentage),
            tax_amount=quantize_money(quote.tax),
            is_payment_complete=grand_total <= 0,
            special_requests=request.special_requests,
            notes=request.notes,
            expected_arrival_time=request.expected_arrival_time,
            guest_details=request.guest_details,
        )

        booking.rooms = [
            BookingRoom(
                line_number=position,
                room=room,
                room_id=room.id,
                number_of_guests=line.number_of_guests,
                rate_per_night=quantize_money(line_quote.rate_per_night),
                total_amount=quantize_money(line_quote.line_total),
                is_fully_occupied=line.is_fully_occupied or line.number_of_guests == room.capacity,
                notes=line.notes,
                is_cancelled=False,
            )
            for position, ((line, room), line_quote) in enumerate(
                zip(validated, quote.line_quotes), start=1
            )
        ]

        return self.repository.create(booking)

    def _ensure_non_negative(self, quote: BookingQuote) -> None:
        if quote.is_negative:
            raise InvalidDiscountError(
                str(quantize_money(quote.discount)),
                str(quantize_money(quote.gross_total)),
            )

    def _generate_booking_reference(self) -> str:
        for _ in range(REFERENCE_ATTEMPTS):
            reference = generate_reference(settings.BOOKING_REFERENCE_PREFIX)
            if not self.repository.reference_exists(reference):
                return reference
        raise PersistenceError(
            "Could not generate a unique booking reference",
            operation="generate reference",
            table="bookings",
        )

    def _notify_lead_converted(self, lead_id: str, booking_id: str) -> None:
        """Best-effort lead conversion; the booking stands whatever happens here."""
        try:
            result = self.lead_service.mark_converted(lead_id, booking_id)
            if not result.is_success:
                self._logger.warning(
                    "Lead conversion update failed",
                    extra={
                        "lead_id": lead_id,
                        "booking_id": booking_id,
                        "error_code": result.error_code.value if result.error_code else None,
                    },
                )
        except Exception as e:
            self._rollback()
            self._logger.error(
                f"Lead conversion update failed: {e}",
                exc_info=True,
                extra={"lead_id": lead_id, "booking_id": booking_id},
            )

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def _get_booking_or_raise(self, booking_id: str, for_update: bool = False) -> Booking:
        if for_update:
            booking = self.repository.find_by_id_for_update(booking_id)
        else:
            booking = self.repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id=booking_id)
        return booking

    def _to_detail(self, booking: Booking) -> BookingDetail:
        return BookingDetail.from_booking(
            booking,
            payments=self.payment_repository.find_by_booking(booking.id),
        )

    def get_booking(self, booking_id: str) -> ServiceResult[BookingDetail]:
        """
        Retrieve a booking with its room lines and payments.

        Args:
            booking_id: Booking ID

        Returns:
            ServiceResult containing BookingDetail or error
        """
        try:
            booking = self._get_booking_or_raise(booking_id)
            return ServiceResult.success(self._to_detail(booking))
        except Exception as e:
            return self._handle_exception(e, "get booking", booking_id)

    def get_booking_by_reference(self, reference: str) -> ServiceResult[BookingDetail]:
        """Retrieve a booking by its human-readable reference."""
        try:
            booking = self.repository.find_by_reference(reference)
            if booking is None:
                raise BookingNotFoundError(reference=reference)
            return ServiceResult.success(self._to_detail(booking))
        except Exception as e:
            return self._handle_exception(e, "get booking by reference", reference)

    def list_bookings(self, filters: Optional[BookingFilterParams] = None) -> ServiceResult[List[BookingResponse]]:
        """
        List bookings matching the filters, newest first.

        Args:
            filters: Optional status, homestay, lead and check-in window filters

        Returns:
            ServiceResult containing the bookings
        """
        filters = filters or BookingFilterParams()
        try:
            criteria = BookingSearchCriteria(
                status=filters.status,
                homestay_id=filters.homestay_id,
                lead_id=filters.lead_id,
                check_in_after=filters.check_in_after,
                check_in_before=filters.check_in_before,
            )
            bookings = self.repository.search_bookings(criteria, skip=filters.skip, limit=filters.limit)
            return ServiceResult.success(
                [BookingResponse.from_booking(booking) for booking in bookings],
                metadata={"count": len(bookings)},
            )
        except Exception as e:
            return self._handle_exception(e, "list bookings")

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    @track_performance("update_booking")
    def update_booking(self, booking_id: str, request: BookingUpdate) -> ServiceResult[BookingDetail]:
        """
        Update editable booking fields.

        A new discount or tax rate is the only way totals change after
        creation: they are recomputed from the booking's active lines and
        the balance follows.
        """
        try:
            with self.transaction():
                booking = self._get_booking_or_raise(booking_id, for_update=True)
                if booking.is_closed:
                    raise BookingStateError(
                        f"Cannot update a {booking.status.value} booking",
                        booking_id=booking.id,
                        status=booking.status.value,
                    )

                changes = request.model_dump(
                    exclude_unset=True,
                    exclude={"discount_amount", "tax_percentage"},
                )
                self.repository.update(booking, changes)

                if request.changes_totals:
                    self._recalculate_totals(booking, request)

            self._log_operation(
                "update booking",
                booking.id,
                extra={"fields": sorted(request.model_fields_set)},
            )
            return ServiceResult.success(self._to_detail(booking), message="Booking updated successfully")
        except Exception as e:
            return self._handle_exception(e, "update booking", booking_id)

    def _recalculate_totals(self, booking: Booking, request: BookingUpdate) -> None:
        discount = (
            request.discount_amount if request.discount_amount is not None else booking.discount_amount
        )
        tax_percentage = (
            request.tax_percentage if request.tax_percentage is not None else booking.tax_percentage
        )

        # A stored nightly rate already includes the line's guest count.
        quote = self.pricing_service.compute_totals(
            [PricingLine(line.rate_per_night, 1) for line in booking.active_rooms],
            booking.number_of_nights,
            discount=discount,
            tax_percentage=tax_percentage,
        )
        self._ensure_non_negative(quote)

        total = quantize_money(quote.grand_total)
        balance = total - booking.paid_amount
        self.repository.update(
            booking,
            {
                "discount_amount": quantize_money(quote.discount),
                "tax_percentage": quantize_money(quote.tax_percentage),
                "tax_amount": quantize_money(quote.tax),
                "total_amount": total,
                "balance_amount": balance,
                "is_payment_complete": balance <= 0,
            },
        )

    # -------------------------------------------------------------------------
    # Status Lifecycle
    # -------------------------------------------------------------------------

    @staticmethod
    def _append_note(booking: Booking, text: str) -> None:
        booking.notes = f"{booking.notes}\n{text}" if booking.notes else text

    def _transition(self, booking: Booking, target: BookingStatus, message: Optional[str] = None) -> None:
        if not can_transition(booking.status, target):
            raise InvalidStatusTransitionError(booking.status.value, target.value, message)
        booking.status = target

    @track_performance("update_booking_status")
    def update_status(self, booking_id: str, request: BookingStatusUpdate) -> ServiceResult[BookingDetail]:
        """
        Move a booking along its lifecycle.

        Cancelling stamps the cancellation time and reason; every room
        line of a cancelled booking reads as cancelled and stops holding
        its room.
        """
        try:
            with self.transaction():
                booking = self._get_booking_or_raise(booking_id, for_update=True)
                previous = booking.status
                self._transition(booking, request.status)

                now = now_utc()
                if request.status == BookingStatus.CANCELLED:
                    booking.cancelled_at = now
                    booking.cancellation_reason = request.cancellation_reason or request.reason
                elif request.status == BookingStatus.CHECKED_IN and booking.actual_check_in_time is None:
                    booking.actual_check_in_time = now
                elif request.status == BookingStatus.CHECKED_OUT and booking.actual_check_out_time is None:
                    booking.actual_check_out_time = now

                if request.reason:
                    self._append_note(
                        booking,
                        f"[{now.isoformat()}] Status: {request.status.value} - {request.reason}",
                    )
                self.db.flush()

            self._logger.info(
                "Booking status changed",
                extra={
                    "booking_id": booking.id,
                    "from_status": previous.value,
                    "to_status": booking.status.value,
                },
            )
            return ServiceResult.success(self._to_detail(booking), message="Booking status updated")
        except Exception as e:
            return self._handle_exception(e, "update booking status", booking_id)

    @track_performance("check_in_booking")
    def check_in(self, booking_id: str, request: Optional[CheckInRequest] = None) -> ServiceResult[BookingDetail]:
        """Check a confirmed booking in; its room lines become occupied."""
        request = request or CheckInRequest()
        try:
            with self.transaction():
                booking = self._get_booking_or_raise(booking_id, for_update=True)
                self._transition(
                    booking,
                    BookingStatus.CHECKED_IN,
                    "Only confirmed bookings can be checked in",
                )
                booking.actual_check_in_time = request.actual_check_in_time or now_utc()
                if request.notes:
                    self._append_note(booking, f"[Check-in] {request.notes}")
                self.db.flush()

            self._log_operation("check in", booking.id)
            return ServiceResult.success(self._to_detail(booking), message="Guest checked in")
        except Exception as e:
            return self._handle_exception(e, "check in booking", booking_id)

    @track_performance("check_out_booking")
    def check_out(self, booking_id: str, request: Optional[CheckOutRequest] = None) -> ServiceResult[BookingDetail]:
        """Check a checked-in booking out; its rooms are released."""
        request = request or CheckOutRequest()
        try:
            with self.transaction():
                booking = self._get_booking_or_raise(booking_id, for_update=True)
                self._transition(
                    booking,
                    BookingStatus.CHECKED_OUT,
                    "Only checked-in bookings can be checked out",
                )
                booking.actual_check_out_time = request.actual_check_out_time or now_utc()
                if request.notes:
                    self._append_note(booking, f"[Check-out] {request.notes}")
                self.db.flush()

            self._log_operation("check out", booking.id)
            return ServiceResult.success(self._to_detail(booking), message="Guest checked out")
        except Exception as e:
            return self._handle_exception(e, "check out booking", booking_id)

    @track_performance("cancel_room_line")
    def cancel_room_line(
        self,
        booking_id: str,
        line_id: str,
        request: Optional[RoomLineCancellation] = None,
    ) -> ServiceResult[BookingDetail]:
        """
        Release one room of an open booking.

        Totals are left as they are; a discount or tax update recomputes
        them from the remaining lines.
        """
        request = request or RoomLineCancellation()
        try:
            with self.transaction():
                booking = self._get_booking_or_raise(booking_id, for_update=True)
                if booking.status not in LINE_RELEASABLE_STATUSES:
                    raise BookingStateError(
                        f"Rooms of a {booking.status.value} booking cannot be released",
                        booking_id=booking.id,
                        status=booking.status.value,
                    )

                line = next((line for line in booking.rooms if line.id == line_id), None)
                if line is None:
                    raise ResourceNotFoundError("BookingRoom", line_id)

                if not line.is_cancelled:
                    if len(booking.active_rooms) == 1:
                        raise BookingStateError(
                            "Cannot release the last room of a booking; cancel the booking instead",
                            booking_id=booking.id,
                            status=booking.status.value,
                        )
                    line.is_cancelled = True
                    note = f"[{now_utc().isoformat()}] Room {line.room.room_number} released"
                    if request.reason:
                        note = f"{note} - {request.reason}"
                    self._append_note(booking, note)
                    self.db.flush()

            self._logger.info(
                "Booking room line released",
                extra={"booking_id": booking.id, "line_id": line_id, "room_id": line.room_id},
            )
            return ServiceResult.success(self._to_detail(booking), message="Room released")
        except Exception as e:
            return self._handle_exception(e, "cancel room line", booking_id)


__all__ = ["BookingService", "ALLOWED_STATUS_TRANSITIONS", "can_transition"]
