"""
Base service class shared by the booking, lead and homestay services.
"""

from typing import TypeVar, Generic, Optional, Dict, Any
from abc import ABC
from contextlib import contextmanager

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import BaseAppException
from app.core.logging import get_logger
from app.repositories.base.base_repository import BaseRepository
from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)


TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    A service owns one repository and the request's session.

    Public operations catch everything and return a ServiceResult built by
    `_handle_exception`; writes go through `transaction()` so a failure
    always leaves the session rolled back.
    """

    def __init__(self, repository: TRepo, db_session: Session):
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Error handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """
        Turn an exception raised by `operation` into a failed ServiceResult.

        Application exceptions keep their code and details; rejected
        requests log a warning, server-side failures log the traceback.
        Anything else is reported as PERSISTENCE_FAILURE (database errors)
        or INTERNAL_ERROR.
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        if isinstance(exception, BaseAppException):
            context["error_code"] = exception.error_code.value
            if exception.status_code >= 500:
                self._logger.error(f"Error during {operation}: {exception}", exc_info=True, extra=context)
            else:
                self._logger.warning(f"Rejected {operation}: {exception.message}", extra=context)
            return ServiceResult.from_app_exception(exception)

        self._logger.error(f"Error during {operation}: {exception}", exc_info=True, extra=context)

        code = ErrorCode.PERSISTENCE_FAILURE if isinstance(exception, SQLAlchemyError) else ErrorCode.INTERNAL_ERROR
        return ServiceResult.failure(
            ServiceError(
                code=code,
                message=f"Failed to {operation}",
                details={"error": str(exception), "entity_ref": context["entity_ref"]},
                severity=ErrorSeverity.CRITICAL,
            )
        )

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Commit on normal exit, roll back and re-raise on any exception.

            with self.transaction():
                self.repository.create(booking)
        """
        try:
            yield self.db
            self._commit()
        except Exception:
            self._rollback()
            raise

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            raise

    def _rollback(self) -> None:
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # The original error is the one worth raising
            self._logger.warning(f"Rollback failed: {e}")

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = {"entity_ref": str(entity_ref) if entity_ref else None, **(extra or {})}
        self._logger.info(f"Operation: {operation}", extra=context)
