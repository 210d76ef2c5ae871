# app/repositories/homestay/homestay_repository.py
"""
Homestay repository.
"""

from sqlalchemy.orm import Session

from app.models.homestay.homestay import Homestay
from app.repositories.base.base_repository import BaseRepository


class HomestayRepository(BaseRepository[Homestay]):
    """Repository for homestays."""

    def __init__(self, db: Session):
        super().__init__(Homestay, db)
