# app/repositories/lead/lead_repository.py
"""
Lead repository.
"""

from sqlalchemy.orm import Session

from app.models.lead.lead import Lead
from app.repositories.base.base_repository import BaseRepository


class LeadRepository(BaseRepository[Lead]):
    """Repository for sales leads."""

    def __init__(self, db: Session):
        super().__init__(Lead, db)
