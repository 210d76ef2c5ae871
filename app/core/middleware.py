"""
Core middleware and exception handler registration for the FastAPI application.

Provides request tracking, timing and the translation of application
exceptions into JSON error responses.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.exceptions import BaseAppException
from app.core.logging import get_logger, request_id as request_id_var

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each incoming request.

    The request ID is stored in request.state.request_id, bound to the
    logging context for the duration of the request and echoed back in
    the X-Request-ID response header.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Log every request with its duration and set the X-Process-Time header."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        logger.info(
            "Request completed",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": round(process_time, 4),
            }
        )

        return response


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    """Render application exceptions raised outside the service result flow."""
    logger.warning(
        f"Application exception: {exc.error_code.value} - {exc.message}",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "error_code": exc.error_code.value,
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_middlewares(app: FastAPI) -> None:
    """
    Register core middlewares and exception handlers on the application.

    The last middleware added is the outermost, so RequestIDMiddleware wraps
    the timing middleware and every log line of the request carries its id.
    """
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_exception_handler(BaseAppException, app_exception_handler)

    logger.debug("Core middlewares registered")


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "app_exception_handler",
    "register_middlewares",
]
