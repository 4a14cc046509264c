"""
Pricing schemas.

All amounts are whole INR; there is no fractional currency.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from models.base import BaseSchema
from models.booking import BookingType
from models.order import MeasurementMethod


class AddOn(BaseSchema):
    """Paid extra on top of the base service."""

    name: str = Field(..., max_length=100)
    price: int = Field(default=0, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def missing_price_is_free(cls, v):
        """A null price counts as zero."""
        return 0 if v is None else v


class PricingResult(BaseSchema):
    """Price breakdown for one order."""

    base_price: int
    add_ons_total: int
    urgent_surcharge: int
    total: int
    advance_amount: int
    balance_amount: int
    requires_advance: bool


class QuoteRequest(BaseSchema):
    """Inputs the storefront sends to preview price and delivery."""

    service_id: str = Field(..., description="Catalog service id")
    add_on_ids: list[str] = Field(default_factory=list)
    booking_type: BookingType = BookingType.NORMAL
    measurement_method: MeasurementMethod = MeasurementMethod.SELF
    tailor_visit_date: Optional[date] = None


class QuoteResponse(BaseSchema):
    """Price and schedule preview."""

    service_id: str
    service_name: str
    add_ons: list[AddOn]
    booking_type: BookingType
    pricing: PricingResult
    processing_start_date: datetime
    estimated_delivery: datetime
