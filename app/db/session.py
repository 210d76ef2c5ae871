"""Database session management."""
from functools import lru_cache
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with the pool settings appropriate to the backend."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_OVERFLOW,
        pool_recycle=3600,
    )


@lru_cache()
def get_engine() -> Engine:
    """Get the application engine, created on first use."""
    return build_engine(settings.get_database_url(), echo=settings.DB_ECHO)


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Get the SessionLocal factory bound to the application engine."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/bookings/{booking_id}")
        def read_booking(db: Session = Depends(get_db)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
