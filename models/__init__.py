"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, ListResponse
from models.booking import (
    BookingType,
    DayCounts,
    BookingCounts,
    RemainingSlots,
    DateAvailability,
    AvailabilityWindow,
    EstimatedDeliveryResponse,
    NextAvailableResponse,
)
from models.order import (
    MeasurementMethod,
    ServiceType,
    OrderStatus,
    PaymentStatus,
    Measurements,
    Customization,
    StatusHistoryEntry,
    OrderImage,
    SelfMeasuredOrderCreate,
    TailorVisitOrderCreate,
    OrderCreate,
    OrderStatusUpdate,
    OrderImageCreate,
    OrderResponse,
    OrderListResponse,
    TodayStats,
    is_valid_status_transition,
)
from models.pricing import (
    AddOn,
    PricingResult,
    QuoteRequest,
    QuoteResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "ListResponse",

    # Booking
    "BookingType",
    "DayCounts",
    "BookingCounts",
    "RemainingSlots",
    "DateAvailability",
    "AvailabilityWindow",
    "EstimatedDeliveryResponse",
    "NextAvailableResponse",

    # Order
    "MeasurementMethod",
    "ServiceType",
    "OrderStatus",
    "PaymentStatus",
    "Measurements",
    "Customization",
    "StatusHistoryEntry",
    "OrderImage",
    "SelfMeasuredOrderCreate",
    "TailorVisitOrderCreate",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderImageCreate",
    "OrderResponse",
    "OrderListResponse",
    "TodayStats",
    "is_valid_status_transition",

    # Pricing
    "AddOn",
    "PricingResult",
    "QuoteRequest",
    "QuoteResponse",
]
