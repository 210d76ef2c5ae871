"""
Base repository shared by the booking, homestay and lead repositories.

Repositories never own the transaction: they flush, and the calling
service commits or rolls back the unit of work. SQLAlchemy failures are
re-raised as PersistenceError.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """Create, load and update one model class on the request's session."""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _persistence_error(self, operation: str, error: SQLAlchemyError) -> PersistenceError:
        logger.error(
            f"{self.model.__name__} {operation} failed: {error}",
            extra={"operation": operation, "table": self.table_name},
        )
        return PersistenceError(
            f"{self.model.__name__} {operation} failed",
            operation=operation,
            table=self.table_name,
        )

    # ==================== Create ====================

    def create(self, entity: ModelType, commit: bool = False) -> ModelType:
        """
        Add a new entity to the session and flush it.

        Args:
            entity: Entity to create
            commit: Commit immediately instead of flushing (fixtures, scripts)

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            self.db.add(entity)
            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()
            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity
        except SQLAlchemyError as e:
            raise self._persistence_error("create", e) from e

    # ==================== Read ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise self._persistence_error("find by id", e) from e

    def find_by_id_for_update(self, id: str) -> Optional[ModelType]:
        """
        Load an entity and lock its row until the transaction ends.

        The row is re-read even when the entity is already in the session.
        Engines without row locking (SQLite) ignore FOR UPDATE.
        """
        query = (
            select(self.model)
            .where(self.model.id == id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        try:
            return self.db.execute(query).scalars().first()
        except SQLAlchemyError as e:
            raise self._persistence_error("find by id for update", e) from e

    # ==================== Update ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """Apply field updates to a loaded entity and flush them; unknown keys are ignored."""
        try:
            for key, value in data.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)
            self.db.flush()
            return entity
        except SQLAlchemyError as e:
            raise self._persistence_error("update", e) from e
