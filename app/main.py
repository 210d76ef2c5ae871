from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router as api_v1_router
from app.config.settings import settings
from app.core.logging import setup_logging
from app.core.middleware import register_middlewares
from app.db.init_db import init_db


def create_app() -> FastAPI:
    """
    Build the booking API: logging, CORS, request-id and timing middleware,
    the application exception handler and the /api/v1 routes.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Credentials cannot be combined with a wildcard origin
    wildcard = not settings.CORS_ORIGINS or settings.CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if wildcard else settings.CORS_ORIGINS,
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id, timing and exception handlers
    register_middlewares(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # Schema creation for dev/demo; production databases are migrated separately
    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            init_db()

    return app


app = create_app()
