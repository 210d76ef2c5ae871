"""Homestay and room repositories."""

from app.repositories.homestay.homestay_repository import HomestayRepository
from app.repositories.homestay.room_repository import RoomRepository

__all__ = ["HomestayRepository", "RoomRepository"]
