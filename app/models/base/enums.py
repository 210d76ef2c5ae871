"""
Database enums shared by models, schemas and services.

Every enum stores its lowercase value in the database.
"""

import enum


class HomestayStatus(str, enum.Enum):
    """Homestay operational status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class RoomType(str, enum.Enum):
    """Room categorisation."""
    VIEW = "view"
    NON_VIEW = "non_view"


class RoomStatus(str, enum.Enum):
    """Room availability status."""
    AVAILABLE = "available"
    BLOCKED = "blocked"
    MAINTENANCE = "maintenance"


class LeadStatus(str, enum.Enum):
    """Sales lead pipeline status."""
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    PROPOSAL_SENT = "proposal_sent"
    NEGOTIATION = "negotiation"
    CONVERTED = "converted"
    LOST = "lost"
    INACTIVE = "inactive"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class RoomBookingStatus(str, enum.Enum):
    """Status of a single room line, derived from its booking."""
    RESERVED = "reserved"
    OCCUPIED = "occupied"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Payment processing status."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class PaymentMethod(str, enum.Enum):
    """How a payment was made."""
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"
    ONLINE = "online"
    CHEQUE = "cheque"
    OTHER = "other"


class PaymentType(str, enum.Enum):
    """What a payment was for."""
    ADVANCE = "advance"
    PARTIAL = "partial"
    FULL = "full"
    REFUND = "refund"
    CANCELLATION_CHARGE = "cancellation_charge"


def enum_values(enum_cls):
    """values_callable for SQLAlchemy Enum columns so the value, not the name, is stored."""
    return [member.value for member in enum_cls]
