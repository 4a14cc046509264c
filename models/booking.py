"""
Booking capacity schemas.

BookingCounts maps an ISO date key (yyyy-MM-dd) to the number of normal
and urgent orders already booked for that delivery date.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from models.base import BaseSchema


class BookingType(str, Enum):
    """Urgency tier of an order."""
    NORMAL = "normal"
    URGENT = "urgent"


class DayCounts(BaseSchema):
    """Orders already booked for one date."""

    normal: int = Field(default=0, ge=0, description="Normal orders booked")
    urgent: int = Field(default=0, ge=0, description="Urgent orders booked")

    def incremented(self, booking_type: BookingType) -> "DayCounts":
        """Return a copy with one more booking of the given type."""
        if booking_type == BookingType.URGENT:
            return DayCounts(normal=self.normal, urgent=self.urgent + 1)
        return DayCounts(normal=self.normal + 1, urgent=self.urgent)

    def decremented(self, booking_type: BookingType) -> "DayCounts":
        """Return a copy with one booking of the given type released, floored at zero."""
        if booking_type == BookingType.URGENT:
            return DayCounts(normal=self.normal, urgent=max(self.urgent - 1, 0))
        return DayCounts(normal=max(self.normal - 1, 0), urgent=self.urgent)


# Snapshot of counts keyed by yyyy-MM-dd. Missing dates mean no bookings.
BookingCounts = dict[str, DayCounts]


class RemainingSlots(BaseSchema):
    """Free capacity left on one date."""

    normal: int = Field(..., ge=0)
    urgent: int = Field(..., ge=0)


# ===================
# API RESPONSES
# ===================

class DateAvailability(BaseSchema):
    """Normal-order availability for one date."""

    day: date = Field(..., alias="date")
    remaining_slots: int = Field(..., ge=0)
    is_full: bool


class AvailabilityWindow(BaseSchema):
    """Rolling availability window shown by the booking calendar."""

    success: bool = True
    min_days_ahead: int
    max_per_day: int
    first_available_date: Optional[date] = None
    dates: list[DateAvailability]


class EstimatedDeliveryResponse(BaseSchema):
    """First open delivery date after a processing start."""

    success: bool = True
    processing_start_date: date
    estimated_delivery: date
    max_per_day: int
    min_days_from_processing: int


class NextAvailableResponse(BaseSchema):
    """Suggested delivery dates for each urgency tier."""

    normal: date
    urgent: date
    urgent_min_hours: int
    normal_min_days: int
