# app/services/lead/lead_service.py
"""
Lead service: the booking core's view of the sales pipeline.

Bookings read the lead they originate from and, once created, mark it
converted with the new booking's id.
"""

from sqlalchemy.orm import Session

from app.core.exceptions import LeadNotFoundError
from app.core.logging import track_performance
from app.models.base.enums import LeadStatus
from app.models.lead.lead import Lead
from app.repositories.lead.lead_repository import LeadRepository
from app.services.base import BaseService, ServiceResult
from app.utils.date_utils import now_utc


class LeadService(BaseService[Lead, LeadRepository]):
    """Lead lookup and conversion tracking."""

    def __init__(self, repository: LeadRepository, db_session: Session):
        super().__init__(repository, db_session)

    def find_lead_by_id(self, lead_id: str) -> Lead:
        """
        Resolve a lead.

        Raises:
            LeadNotFoundError: if no lead has this id
        """
        lead = self.repository.find_by_id(lead_id)
        if lead is None:
            raise LeadNotFoundError(lead_id)
        return lead

    @track_performance("mark_lead_converted")
    def mark_converted(self, lead_id: str, booking_id: str) -> ServiceResult[Lead]:
        """
        Mark a lead as converted into the given booking.

        Commits on its own, after the booking it refers to is committed.
        """
        try:
            with self.transaction():
                lead = self.find_lead_by_id(lead_id)
                self.repository.update(
                    lead,
                    {
                        "status": LeadStatus.CONVERTED,
                        "converted_at": now_utc(),
                        "booking_id": booking_id,
                    },
                )

            self._logger.info(
                "Lead marked as converted",
                extra={"lead_id": lead_id, "booking_id": booking_id},
            )
            return ServiceResult.success(lead, message="Lead converted")
        except Exception as e:
            return self._handle_exception(e, "mark lead converted", lead_id)
