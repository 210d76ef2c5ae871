"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the homestay booking system
"""
from fastapi import APIRouter

from app.api.v1 import bookings, rooms
from app.config.settings import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
        503: {"description": "Service Unavailable"},
    }
)

router.include_router(bookings.router)
router.include_router(rooms.router)


@router.get("/health", tags=["System Health"])
def api_health_check():
    """API health check."""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "api_version": "v1",
        "total_routes": len(router.routes),
        "description": "Homestay Booking System API v1",
    }


logger.info("API v1 router initialized", extra={"total_routes": len(router.routes)})
