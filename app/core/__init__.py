"""Core application modules: exceptions, logging and HTTP middleware."""

from app.core.exceptions import BaseAppException, ErrorCode
from app.core.logging import get_logger

__all__ = ["BaseAppException", "ErrorCode", "get_logger"]
