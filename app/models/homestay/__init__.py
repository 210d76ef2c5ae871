"""Homestay and room models."""

from app.models.homestay.homestay import Homestay
from app.models.homestay.room import Room

__all__ = ["Homestay", "Room"]
