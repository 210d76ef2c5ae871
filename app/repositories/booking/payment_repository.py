# app/repositories/booking/payment_repository.py
"""
Payment repository.

Payments belong to a booking; references are unique across the table.
"""

from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.booking.payment import Payment
from app.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for booking payments."""

    def __init__(self, db: Session):
        super().__init__(Payment, db)

    def find_by_booking(self, booking_id: str) -> List[Payment]:
        """
        Payments of a booking, newest first.

        Args:
            booking_id: Booking ID

        Returns:
            List of payments
        """
        query = (
            select(Payment)
            .where(Payment.booking_id == booking_id)
            .order_by(Payment.payment_date.desc())
        )
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise self._persistence_error("find by booking", e) from e

    def reference_exists(self, payment_reference: str) -> bool:
        query = select(func.count(Payment.id)).where(
            Payment.payment_reference == payment_reference
        )
        return self.db.execute(query).scalar_one() > 0
