"""
Order schemas for validation and serialization.

Order creation is a tagged union on measurement_method:
- "self": customer supplied measurements, no tailor visit
- "tailor": a tailor visits on tailor_visit_date to measure
and service_type decides whether customization details are carried.
"""

from pydantic import Field, field_validator, model_validator
from typing import Annotated, Literal, Optional, Union
from enum import Enum
from datetime import date, datetime
import re

from models.base import BaseSchema, ListResponse
from models.booking import BookingType


class MeasurementMethod(str, Enum):
    """Who takes the measurements."""
    SELF = "self"
    TAILOR = "tailor"


class ServiceType(str, Enum):
    """Catalog booking or customizer design."""
    BOOKING = "booking"
    CUSTOM = "custom"


class OrderStatus(str, Enum):
    """Order workflow status values."""
    PICKUP_AWAITED = "pickup-awaited"
    FABRIC_RECEIVED = "fabric-received"
    PROCESSING = "processing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    ADVANCE_PAID = "advance-paid"
    PAID = "paid"


# Status order for transition validation (lower index = earlier in flow)
STATUS_ORDER = {
    OrderStatus.PICKUP_AWAITED: 0,
    OrderStatus.FABRIC_RECEIVED: 1,
    OrderStatus.PROCESSING: 2,
    OrderStatus.READY: 3,
    OrderStatus.OUT_FOR_DELIVERY: 4,
    OrderStatus.DELIVERED: 5,
}

TERMINAL_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

# Statuses counted as "in progress" on the admin dashboard
IN_PROGRESS_STATUSES = {
    OrderStatus.FABRIC_RECEIVED,
    OrderStatus.PROCESSING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
}


def is_valid_status_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """
    Check if status transition is valid.

    Rules:
    - Can skip forward (pickup-awaited → ready is OK)
    - Cannot go backward (ready → processing is NOT OK)
    - Any open order can be cancelled
    - delivered and cancelled are terminal
    """
    if current in TERMINAL_STATUSES:
        return False

    if new == OrderStatus.CANCELLED:
        return True

    return STATUS_ORDER[new] > STATUS_ORDER[current]


# ===================
# NESTED RECORDS
# ===================

class Measurements(BaseSchema):
    """Self-reported body measurements in inches."""

    bust: Optional[str] = Field(None, max_length=20)
    waist: Optional[str] = Field(None, max_length=20)
    hips: Optional[str] = Field(None, max_length=20)
    shoulder_width: Optional[str] = Field(None, max_length=20)
    sleeve_length: Optional[str] = Field(None, max_length=20)
    top_length: Optional[str] = Field(None, max_length=20)
    bottom_length: Optional[str] = Field(None, max_length=20)
    total_length: Optional[str] = Field(None, max_length=20)
    height: Optional[str] = Field(None, max_length=20)


class Customization(BaseSchema):
    """Design choices from the customizer. Neck, sleeve and fit are free."""

    neck_design: Optional[str] = Field(None, max_length=100)
    sleeve_style: Optional[str] = Field(None, max_length=100)
    fit: Optional[str] = Field(None, max_length=100)
    add_ons: list[str] = Field(default_factory=list, description="Add-on names")
    custom_neck_image_url: Optional[str] = None


class StatusHistoryEntry(BaseSchema):
    status: OrderStatus
    note: Optional[str] = None
    timestamp: datetime


class OrderImage(BaseSchema):
    url: str
    type: Literal["fabric", "reference", "progress", "completed"]
    description: Optional[str] = None
    uploaded_at: datetime


# ===================
# CREATE SCHEMAS
# ===================

class OrderCreateBase(BaseSchema):
    """Fields shared by every order variant."""

    customer_name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., max_length=20)
    address: str = Field(..., min_length=1, max_length=500)
    notes: Optional[str] = Field(None, max_length=2000)

    service_id: str = Field(..., description="Catalog service or base outfit id")
    service_type: ServiceType = ServiceType.BOOKING
    booking_type: BookingType = BookingType.NORMAL

    add_on_ids: list[str] = Field(default_factory=list, description="Customizer add-on ids")
    customization: Optional[Customization] = None
    additional_remarks: Optional[str] = Field(None, max_length=2000)

    preferred_delivery_date: Optional[date] = Field(
        None,
        description="Later delivery date picked from /api/available-dates (normal orders only)"
    )

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Require a 10-digit number; spaces and a +91 prefix are ignored."""
        digits = re.sub(r"\s", "", v)
        if digits.startswith("+91"):
            digits = digits[3:]
        if not re.fullmatch(r"\d{10}", digits):
            raise ValueError("Please enter a valid 10-digit phone number")
        return digits

    @model_validator(mode="after")
    def check_service_variant(self):
        """Custom designs carry customization; catalog bookings carry no extras."""
        if self.service_type == ServiceType.CUSTOM and self.customization is None:
            raise ValueError("customization is required for custom orders")
        if self.service_type == ServiceType.BOOKING:
            if self.customization is not None:
                raise ValueError("customization is only allowed on custom orders")
            if self.add_on_ids:
                raise ValueError("add-ons are only allowed on custom orders")
        if self.booking_type == BookingType.URGENT and self.preferred_delivery_date:
            raise ValueError("urgent orders cannot pick a delivery date")
        return self

    @property
    def is_urgent(self) -> bool:
        return self.booking_type == BookingType.URGENT


class SelfMeasuredOrderCreate(OrderCreateBase):
    """Customer provides measurements; processing starts the next day."""

    measurement_method: Literal["self"] = "self"
    measurements: Measurements

    @field_validator("measurements")
    @classmethod
    def require_core_measurements(cls, v: Measurements) -> Measurements:
        if not v.bust or not v.waist:
            raise ValueError("bust and waist measurements are required")
        return v

    @property
    def tailor_visit_date(self) -> Optional[date]:
        return None


class TailorVisitOrderCreate(OrderCreateBase):
    """Tailor measures at the doorstep; processing starts the day after."""

    measurement_method: Literal["tailor"] = "tailor"
    tailor_visit_date: date


OrderCreate = Annotated[
    Union[SelfMeasuredOrderCreate, TailorVisitOrderCreate],
    Field(discriminator="measurement_method"),
]


class OrderStatusUpdate(BaseSchema):
    """Move an order through the workflow."""

    status: OrderStatus
    note: Optional[str] = Field(None, max_length=1000)


class OrderImageCreate(BaseSchema):
    """Attach an already-uploaded image URL to an order."""

    image_url: str = Field(..., min_length=1)
    image_type: Literal["fabric", "reference", "progress", "completed"]
    description: Optional[str] = Field(None, max_length=500)


# ===================
# RESPONSE SCHEMAS
# ===================

class OrderResponse(BaseSchema):
    """Order as stored."""

    order_id: str
    customer_name: str
    phone: str
    address: str
    notes: Optional[str] = None

    service_name: str
    service_type: ServiceType
    booking_type: BookingType

    measurement_method: MeasurementMethod
    tailor_visit_date: Optional[date] = None
    measurements: Optional[Measurements] = None
    customization: Optional[Customization] = None

    booking_date: date
    processing_start_date: datetime
    estimated_delivery: datetime
    actual_delivery: Optional[datetime] = None

    base_price: int
    add_ons_total: int = 0
    urgent_surcharge: int = 0
    total_amount: int
    advance_amount: int = 0
    requires_advance: bool = False
    advance_paid: bool = False
    payment_status: PaymentStatus = PaymentStatus.PENDING

    status: OrderStatus
    status_history: list[StatusHistoryEntry] = Field(default_factory=list)
    images: list[OrderImage] = Field(default_factory=list)

    additional_remarks: Optional[str] = None
    extra_charges_note: Optional[str] = None
    admin_notes: Optional[str] = None

    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def balance_amount(self) -> int:
        return self.total_amount - self.advance_amount


class OrderListResponse(ListResponse):
    """Orders page for the admin portal."""

    orders: list[OrderResponse]


class TodayStats(BaseSchema):
    """Admin dashboard counters for the current day."""

    today_orders: int = 0
    pending_orders: int = 0
    in_progress_orders: int = 0
    today_revenue: int = 0
