"""
Base services module for the homestay booking system.

This module provides foundational service layer components:
- Base service class with logging and transaction helpers
- ServiceResult / ServiceError for uniform success and failure handling

All services follow consistent patterns for:
- Result handling via ServiceResult
- Error management and logging
- Transaction safety
"""

from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from app.services.base.base_service import BaseService

__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
]
