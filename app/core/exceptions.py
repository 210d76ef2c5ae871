"""
Custom Exceptions for the Homestay Booking Application

This module defines the exception hierarchy raised by repositories and
services. Every exception carries an error code, a details payload and
the HTTP status it maps to.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Lookup errors
    LEAD_NOT_FOUND = "LEAD_NOT_FOUND"
    HOMESTAY_NOT_FOUND = "HOMESTAY_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"

    # Booking rules
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    ROOM_HOMESTAY_MISMATCH = "ROOM_HOMESTAY_MISMATCH"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    INVALID_DISCOUNT = "INVALID_DISCOUNT"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    INVALID_BOOKING_STATE = "INVALID_BOOKING_STATE"

    # Infrastructure
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"
    LOCK_TIMEOUT = "LOCK_TIMEOUT"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(BaseAppException):
    """Exception raised when request data fails a business validation"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 400)


# ========================================
# Lookup Exceptions
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
        message: Optional[str] = None,
    ):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id:
                message = f"{resource_type} with ID {resource_id} not found"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        super().__init__(message, error_code, details, 404)


class LeadNotFoundError(ResourceNotFoundError):
    def __init__(self, lead_id: Optional[str] = None):
        super().__init__("Lead", lead_id, ErrorCode.LEAD_NOT_FOUND)


class HomestayNotFoundError(ResourceNotFoundError):
    def __init__(self, homestay_id: Optional[str] = None):
        super().__init__("Homestay", homestay_id, ErrorCode.HOMESTAY_NOT_FOUND)


class RoomNotFoundError(ResourceNotFoundError):
    def __init__(self, room_id: Optional[str] = None):
        super().__init__("Room", room_id, ErrorCode.ROOM_NOT_FOUND)


class BookingNotFoundError(ResourceNotFoundError):
    """Raised for unknown booking ids and references"""

    def __init__(self, booking_id: Optional[str] = None, reference: Optional[str] = None):
        message = None
        if reference is not None:
            message = f"Booking with reference {reference} not found"
        super().__init__("Booking", booking_id or reference, ErrorCode.BOOKING_NOT_FOUND, message)


# ========================================
# Booking Rule Exceptions
# ========================================

class InvalidDateRangeError(ValidationError):
    """Exception raised when date range is invalid"""

    def __init__(
        self,
        message: str = "Check-out date must be after check-in date",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        details = {
            "check_in_date": start_date,
            "check_out_date": end_date
        }
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details)


class CapacityExceededError(ValidationError):
    """Exception raised when a room line asks for more guests than the room holds"""

    def __init__(
        self,
        room_id: str,
        room_number: Optional[str] = None,
        capacity: Optional[int] = None,
        requested: Optional[int] = None,
    ):
        message = (
            f"Room {room_number or room_id} capacity is {capacity}, "
            f"cannot accommodate {requested} guests"
        )
        details = {
            "room_id": room_id,
            "capacity": capacity,
            "requested": requested,
        }
        super().__init__(message, ErrorCode.CAPACITY_EXCEEDED, details)


class RoomHomestayMismatchError(ValidationError):
    """Exception raised when a room is requested against another homestay"""

    def __init__(
        self,
        room_id: str,
        homestay_id: str,
        room_number: Optional[str] = None,
    ):
        message = f"Room {room_number or room_id} does not belong to this homestay"
        details = {
            "room_id": room_id,
            "homestay_id": homestay_id,
        }
        super().__init__(message, ErrorCode.ROOM_HOMESTAY_MISMATCH, details)


class RoomUnavailableError(BaseAppException):
    """Exception raised when room is not available for booking"""

    BLOCKED = "blocked"
    MAINTENANCE = "maintenance"
    ALREADY_BOOKED = "already_booked"

    def __init__(
        self,
        room_id: str,
        reason: str,
        room_number: Optional[str] = None,
        conflicting_booking_ids: Optional[List[str]] = None,
    ):
        label = room_number or room_id
        if reason == self.ALREADY_BOOKED:
            message = f"Room {label} is already booked for the selected dates"
        else:
            message = f"Room {label} is not available for booking ({reason})"
        details = {
            "room_id": room_id,
            "reason": reason,
        }
        if conflicting_booking_ids:
            details["conflicting_booking_ids"] = conflicting_booking_ids
        super().__init__(message, ErrorCode.ROOM_UNAVAILABLE, details, 409)
        self.room_id = room_id
        self.reason = reason


class InvalidDiscountError(ValidationError):
    """Exception raised when a discount would drive the subtotal below zero"""

    def __init__(self, discount: str, gross_total: str):
        super().__init__(
            f"Discount {discount} exceeds booking amount {gross_total}",
            ErrorCode.INVALID_DISCOUNT,
            {"discount_amount": discount, "gross_total": gross_total},
        )


class InvalidStatusTransitionError(ValidationError):
    """Exception raised for a booking status change the lifecycle does not allow"""

    def __init__(self, current_status: str, requested_status: str, message: Optional[str] = None):
        super().__init__(
            message or f"Cannot change booking status from {current_status} to {requested_status}",
            ErrorCode.INVALID_STATUS_TRANSITION,
            {"current_status": current_status, "requested_status": requested_status},
        )


class BookingStateError(ValidationError):
    """Exception raised when an operation is not allowed in the booking's current state"""

    def __init__(self, message: str, booking_id: Optional[str] = None, status: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.INVALID_BOOKING_STATE,
            {"booking_id": booking_id, "status": status},
        )


# ========================================
# Infrastructure Exceptions
# ========================================

class PersistenceError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, ErrorCode.PERSISTENCE_FAILURE, details, 500)


class LockTimeoutError(BaseAppException):
    """Exception raised when a room reservation lock cannot be acquired in time"""

    def __init__(self, room_id: str, timeout: float):
        super().__init__(
            f"Timed out waiting for reservation lock on room {room_id}",
            ErrorCode.LOCK_TIMEOUT,
            {"room_id": room_id, "timeout_seconds": timeout},
            503,
        )


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "ResourceNotFoundError",
    "LeadNotFoundError",
    "HomestayNotFoundError",
    "RoomNotFoundError",
    "BookingNotFoundError",
    "InvalidDateRangeError",
    "CapacityExceededError",
    "RoomHomestayMismatchError",
    "RoomUnavailableError",
    "InvalidDiscountError",
    "InvalidStatusTransitionError",
    "BookingStateError",
    "PersistenceError",
    "LockTimeoutError",
]
