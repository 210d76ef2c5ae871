"""Lead repositories."""

from app.repositories.lead.lead_repository import LeadRepository

__all__ = ["LeadRepository"]
