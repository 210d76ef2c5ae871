# app/services/booking/booking_payment_service.py
"""
Booking payment service.

Recording a payment updates the booking's paid and balance amounts in the
same transaction, and the first money received confirms a pending
booking.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import BookingNotFoundError, BookingStateError, PersistenceError
from app.core.logging import track_performance
from app.models.base.enums import BookingStatus, PaymentStatus
from app.models.booking.booking import Booking
from app.models.booking.payment import Payment
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.booking.payment_repository import PaymentRepository
from app.schemas.booking.booking_payment import PaymentCreate
from app.schemas.booking.booking_response import PaymentResponse
from app.services.base import BaseService, ServiceResult
from app.utils.date_utils import now_utc
from app.utils.money import quantize_money
from app.utils.reference import generate_reference

REFERENCE_ATTEMPTS = 5


class BookingPaymentService(BaseService[Payment, PaymentRepository]):
    """
    Payments against bookings.

    Provides:
    - Recording a completed payment and rebalancing the booking
    - Listing a booking's payments, newest first
    """

    def __init__(
        self,
        repository: PaymentRepository,
        db_session: Session,
        booking_repository: Optional[BookingRepository] = None,
    ):
        super().__init__(repository, db_session)
        self.booking_repository = booking_repository or BookingRepository(db_session)

    def _get_booking_or_raise(self, booking_id: str, for_update: bool = False) -> Booking:
        if for_update:
            booking = self.booking_repository.find_by_id_for_update(booking_id)
        else:
            booking = self.booking_repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id=booking_id)
        return booking

    def _generate_payment_reference(self) -> str:
        for _ in range(REFERENCE_ATTEMPTS):
            reference = generate_reference(settings.PAYMENT_REFERENCE_PREFIX)
            if not self.repository.reference_exists(reference):
                return reference
        raise PersistenceError(
            "Could not generate a unique payment reference",
            operation="generate reference",
            table="payments",
        )

    @track_performance("add_booking_payment")
    def add_payment(self, booking_id: str, request: PaymentCreate) -> ServiceResult[PaymentResponse]:
        """
        Record a payment for a booking.

        Args:
            booking_id: Booking ID
            request: Payment data

        Returns:
            ServiceResult containing the recorded payment

        Raises (as failures):
            BookingNotFoundError: unknown booking
            BookingStateError: the booking is cancelled
        """
        try:
            with self.transaction():
                booking = self._get_booking_or_raise(booking_id, for_update=True)
                if booking.status == BookingStatus.CANCELLED:
                    raise BookingStateError(
                        "Cannot record a payment for a cancelled booking",
                        booking_id=booking.id,
                        status=booking.status.value,
                    )

                payment = self.repository.create(
                    Payment(
                        booking_id=booking.id,
                        payment_reference=self._generate_payment_reference(),
                        amount=quantize_money(request.amount),
                        payment_method=request.payment_method,
                        payment_type=request.payment_type,
                        status=PaymentStatus.COMPLETED,
                        transaction_id=request.transaction_id,
                        payment_gateway=request.payment_gateway,
                        payment_date=request.payment_date or now_utc(),
                        notes=request.notes,
                        payment_details=request.payment_details,
                    )
                )

                paid = quantize_money(booking.paid_amount + payment.amount)
                balance = booking.total_amount - paid
                changes = {
                    "paid_amount": paid,
                    "balance_amount": balance,
                    "is_payment_complete": balance <= 0,
                }
                if booking.status == BookingStatus.PENDING and paid > 0:
                    changes["status"] = BookingStatus.CONFIRMED
                self.booking_repository.update(booking, changes)

            self._logger.info(
                f"Payment {payment.payment_reference} recorded",
                extra={
                    "booking_id": booking.id,
                    "amount": str(payment.amount),
                    "balance_amount": str(booking.balance_amount),
                    "booking_status": booking.status.value,
                },
            )
            return ServiceResult.success(
                PaymentResponse.model_validate(payment),
                message="Payment recorded successfully",
                metadata={
                    "paid_amount": str(booking.paid_amount),
                    "balance_amount": str(booking.balance_amount),
                    "booking_status": booking.status.value,
                },
            )
        except Exception as e:
            return self._handle_exception(e, "add booking payment", booking_id)

    def list_payments(self, booking_id: str) -> ServiceResult[List[PaymentResponse]]:
        """Payments of a booking, newest first."""
        try:
            self._get_booking_or_raise(booking_id)
            payments = self.repository.find_by_booking(booking_id)
            return ServiceResult.success(
                [PaymentResponse.model_validate(p) for p in payments],
                metadata={"count": len(payments)},
            )
        except Exception as e:
            return self._handle_exception(e, "list booking payments", booking_id)


__all__ = ["BookingPaymentService"]
