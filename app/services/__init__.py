# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base.*)

Typical pattern for a service:

    class SomeService(BaseService[SomeModel, SomeRepository]):
        def some_use_case(self, ...) -> ServiceResult[...]:
            try:
                with self.transaction():
                    ...
                return ServiceResult.success(...)
            except Exception as e:
                return self._handle_exception(e, "some use case")
"""

from app.services.base import BaseService, ServiceError, ServiceResult

__all__ = [
    "BaseService",
    "ServiceError",
    "ServiceResult",
]
