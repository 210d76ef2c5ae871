"""
Logging Configuration and Utilities

Structured logging for the booking back end: JSON or plain console output,
optional structlog processors and a context-aware logger adapter used by
every service and repository.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from contextvars import ContextVar
from functools import wraps

import structlog
from pythonjsonlogger import jsonlogger

from app.config.settings import settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class RequestContextProcessor:
    """Stamp request id, service and environment on structlog events"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = 'homestay-booking'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


SENSITIVE_KEYS = ('password', 'token', 'secret', 'guest_phone', 'guest_email')


def redact_sensitive(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Mask guest contact details and secrets in place, nested dicts included."""
    for key in list(fields.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            fields[key] = '[REDACTED]'
        elif isinstance(fields[key], dict):
            redact_sensitive(fields[key])
    return fields


class SensitiveDataProcessor:
    """Mask contact details before they reach the log sink"""

    def __call__(self, logger, method_name, event_dict):
        return redact_sensitive(event_dict)


class BookingJsonFormatter(jsonlogger.JsonFormatter):
    """JSON lines with source location, request id and redacted guest contacts"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        req_id = request_id.get()
        if req_id:
            log_record['request_id'] = req_id

        redact_sensitive(log_record)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        """Configure structured logging with structlog"""

        processors = [
            RequestContextProcessor(),
            SensitiveDataProcessor(),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if settings.LOG_FORMAT == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        """Configure standard Python logging"""

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

        # Replace only the handlers installed by a previous call
        for handler in list(root_logger.handlers):
            if getattr(handler, '_homestay_handler', False):
                root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler._homestay_handler = True

        if settings.LOG_FORMAT == "json":
            formatter = BookingJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        LoggingConfig._configure_library_loggers()

    @staticmethod
    def _configure_library_loggers():
        """Configure logging for external libraries"""

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        if settings.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("httpx").setLevel(logging.WARNING)


class BookingLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that merges bound context into every record's `extra`.

    Services bind identifiers once (`bind(booking_id=...)`) instead of
    repeating them on each call.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(context or {}))

    def bind(self, **context: Any) -> "BookingLoggerAdapter":
        return BookingLoggerAdapter(self.logger, {**self.extra, **context})

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: Optional[str] = None) -> "BookingLoggerAdapter":
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Context-aware logger adapter
    """
    if name is None:
        import inspect
        frame = inspect.currentframe()
        caller_frame = frame.f_back
        name = caller_frame.f_globals.get('__name__', 'homestay')

    return BookingLoggerAdapter(logging.getLogger(name))


def track_performance(operation_name: str):
    """Decorator to track operation performance."""
    def decorator(func):
        logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                result = func(*args, **kwargs)
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.info(
                    f"Operation '{operation_name}' completed in {duration:.3f}s",
                    extra={
                        "operation": operation_name,
                        "execution_time": duration,
                        "success": getattr(result, "is_success", True),
                    },
                )
                return result
            except Exception as e:
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.error(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {e}",
                    extra={
                        "operation": operation_name,
                        "execution_time": duration,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
                raise
        return wrapper
    return decorator


def setup_logging():
    """Initialize logging configuration"""
    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()

    LoggingConfig.configure_standard_logging()

    get_logger(__name__).info("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
        'structured_logging': settings.ENABLE_STRUCTURED_LOGGING,
    })


__all__ = [
    'get_logger',
    'setup_logging',
    'track_performance',
    'BookingLoggerAdapter',
    'LoggingConfig',
    'request_id',
    'redact_sensitive',
]
