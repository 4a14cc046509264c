"""
Business logic services.

Each service handles one domain area.
"""

from services.availability_service import AvailabilityService, get_availability_service
from services.booking_counter_service import (
    BookingCounterStore,
    SupabaseBookingCounterStore,
    get_booking_counter_store,
)
from services.order_service import OrderService, get_order_service
from services.notification_service import (
    NotificationService,
    AdminConnectionManager,
    get_notification_service,
)

__all__ = [
    "AvailabilityService",
    "get_availability_service",
    "BookingCounterStore",
    "SupabaseBookingCounterStore",
    "get_booking_counter_store",
    "OrderService",
    "get_order_service",
    "NotificationService",
    "AdminConnectionManager",
    "get_notification_service",
]
