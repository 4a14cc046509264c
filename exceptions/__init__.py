"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
    DatabaseError,

    # Booking
    CapacityExceededError,
    InvalidDateInputError,
    UrgentLeadTimeError,

    # Catalog
    ServiceNotFoundError,
    AddOnNotFoundError,

    # Orders
    OrderNotFoundError,
    InvalidStatusTransitionError,

    # Notifications
    TelegramError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    "DatabaseError",

    # Booking
    "CapacityExceededError",
    "InvalidDateInputError",
    "UrgentLeadTimeError",

    # Catalog
    "ServiceNotFoundError",
    "AddOnNotFoundError",

    # Orders
    "OrderNotFoundError",
    "InvalidStatusTransitionError",

    # Notifications
    "TelegramError",
]
