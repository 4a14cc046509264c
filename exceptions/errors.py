"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status, and a details dict
so routes can return a uniform JSON error body.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "ORDER_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# BOOKING ERRORS
# ===================

class CapacityExceededError(ConflictError):
    """Delivery date already holds its quota of bookings."""

    def __init__(self, booking_date: str, booking_type: str, cap: int):
        super().__init__(
            code="CAPACITY_EXCEEDED",
            message=f"No {booking_type} booking slots available for {booking_date}",
            details={
                "date": booking_date,
                "booking_type": booking_type,
                "max_per_day": cap,
                "hint": "Query /api/available-dates for the next open date"
            }
        )


class InvalidDateInputError(ValidationError):
    """Date could not be parsed."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            code="INVALID_DATE_INPUT",
            message=f"Invalid date for {field}",
            details={"field": field, "provided": str(value), "expected": "yyyy-MM-dd"}
        )


class UrgentLeadTimeError(ValidationError):
    """Urgent delivery requested sooner than the minimum lead time."""

    def __init__(self, booking_date: str, min_hours: int):
        super().__init__(
            code="URGENT_LEAD_TIME_NOT_MET",
            message=f"Urgent orders need at least {min_hours} hours notice",
            details={"date": booking_date, "min_hours": min_hours}
        )


# ===================
# CATALOG ERRORS
# ===================

class ServiceNotFoundError(NotFoundError):
    """Catalog service not found."""

    def __init__(self, service_id: str):
        super().__init__(
            resource="Service",
            identifier=service_id,
            code="SERVICE_NOT_FOUND"
        )


class AddOnNotFoundError(NotFoundError):
    """Customizer add-on not found."""

    def __init__(self, add_on_id: str):
        super().__init__(
            resource="Add-on",
            identifier=add_on_id,
            code="ADD_ON_NOT_FOUND"
        )


# ===================
# ORDER ERRORS
# ===================

class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: str):
        super().__init__(
            resource="Order",
            identifier=order_id,
            code="ORDER_NOT_FOUND"
        )


class InvalidStatusTransitionError(ValidationError):
    """Invalid status transition."""

    def __init__(self, current_status: str, new_status: str):
        super().__init__(
            code="INVALID_STATUS_TRANSITION",
            message=f"Cannot transition from {current_status} to {new_status}",
            details={
                "current_status": current_status,
                "new_status": new_status,
                "reason": "Status can only move forward, and delivered/cancelled are terminal"
            }
        )


# ===================
# NOTIFICATION ERRORS
# ===================

class TelegramError(ExternalServiceError):
    """Telegram API error."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="telegram",
            message=message,
            details=details
        )
