"""SQLAlchemy Base class and model registry."""
from app.models.base.base_model import Base


def import_models():
    """Import all models to register them with SQLAlchemy metadata."""
    from app.models.homestay import Homestay, Room  # noqa: F401
    from app.models.lead import Lead  # noqa: F401
    from app.models.booking import Booking, BookingRoom, Payment  # noqa: F401


import_models()
