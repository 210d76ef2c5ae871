# app/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy.engine import Engine

from app.core.logging import get_logger
from app.db.base import Base
from app.db.session import get_engine

logger = get_logger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all missing tables.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully",
                extra={"tables": sorted(Base.metadata.tables.keys())})
