"""Lead collaborator service."""

from app.services.lead.lead_service import LeadService

__all__ = ["LeadService"]
