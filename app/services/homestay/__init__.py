"""Homestay and room collaborator service."""

from app.services.homestay.homestay_service import HomestayService

__all__ = ["HomestayService"]
