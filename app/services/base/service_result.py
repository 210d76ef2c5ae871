"""
ServiceResult: what every service operation returns.

A result is either a success carrying data, or a failure carrying a
ServiceError whose code is one of the application's ErrorCode values. The
HTTP layer turns failures back into exceptions with a mapped status code.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

from app.core.exceptions import BaseAppException, ErrorCode


class ErrorSeverity(str, Enum):
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """A failed operation's code, message and structured details."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_app_exception(cls, exception: BaseAppException) -> "ServiceError":
        # 4xx exceptions describe a rejected request, not a fault
        severity = ErrorSeverity.CRITICAL if exception.status_code >= 500 else ErrorSeverity.WARNING
        return cls(
            code=exception.error_code,
            message=exception.message,
            severity=severity,
            details=exception.details,
        )


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Success/failure outcome of a service operation.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
        metadata: Extra values for the caller, e.g. counts or totals
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message, metadata=metadata or {})

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    @classmethod
    def from_app_exception(cls, exception: BaseAppException) -> "ServiceResult[TData]":
        return cls.failure(ServiceError.from_app_exception(exception))

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        status = "Success" if self.is_success else f"Failure[{self.error_code.value}]"
        if self.message:
            return f"ServiceResult({status}: {self.message})"
        return f"ServiceResult({status})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
