"""
API v1 package.

The router composition lives in `app.api.v1.router`:

    from app.api.v1 import api_router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")
"""

from .router import router as api_router

__all__ = ["api_router"]
