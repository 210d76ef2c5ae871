"""Sales lead model."""

from app.models.lead.lead import Lead

__all__ = ["Lead"]
