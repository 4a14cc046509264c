"""
Booking rules for capacity, lead times, and pricing.

Rules are read-only at runtime. The allocator and calculator take a
BookingRules instance as an explicit argument so tests can pin values.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# DEFAULTS
# =============================================================================

# Daily quota of normal orders per delivery date
MAX_NORMAL_PER_DAY = 4

# Nominal urgent quota; only enforced when ENFORCE_URGENT_CAP is on
MAX_URGENT_PER_DAY = 4

URGENT_SURCHARGE_PERCENT = 30
ADVANCE_PAYMENT_PERCENT = 30

# Lead times
URGENT_MIN_HOURS = 36
NORMAL_MIN_DAYS = 7

# Urgent lead-time checks target this hour on the candidate date
URGENT_REFERENCE_HOUR = 9

# Processing start -> estimated delivery
URGENT_DELIVERY_HOURS = 36
NORMAL_DELIVERY_DAYS = 7

# Forward scan windows for date suggestions
NORMAL_SCAN_DAYS = 30
URGENT_SCAN_DAYS = 14

# Window used by the estimated-delivery lookup
DELIVERY_SCAN_DAYS = 60


class BookingRules(BaseModel):
    """
    Immutable booking configuration.

    Invalid values (negative caps, percentages above 100) are rejected
    at construction time.
    """

    model_config = ConfigDict(frozen=True)

    max_normal_per_day: int = Field(default=MAX_NORMAL_PER_DAY, ge=0)
    max_urgent_per_day: int = Field(default=MAX_URGENT_PER_DAY, ge=0)
    enforce_urgent_cap: bool = False
    urgent_surcharge_percent: int = Field(default=URGENT_SURCHARGE_PERCENT, ge=0, le=100)
    advance_payment_percent: int = Field(default=ADVANCE_PAYMENT_PERCENT, ge=0, le=100)
    urgent_min_hours: int = Field(default=URGENT_MIN_HOURS, ge=0)
    normal_min_days: int = Field(default=NORMAL_MIN_DAYS, ge=0)
    urgent_reference_hour: int = Field(default=URGENT_REFERENCE_HOUR, ge=0, le=23)
    urgent_delivery_hours: int = Field(default=URGENT_DELIVERY_HOURS, ge=1)
    normal_delivery_days: int = Field(default=NORMAL_DELIVERY_DAYS, ge=1)
    normal_scan_days: int = Field(default=NORMAL_SCAN_DAYS, ge=1)
    urgent_scan_days: int = Field(default=URGENT_SCAN_DAYS, ge=1)
    delivery_scan_days: int = Field(default=DELIVERY_SCAN_DAYS, ge=1)


@lru_cache()
def get_booking_rules() -> BookingRules:
    """
    Build booking rules from application settings.

    Call get_booking_rules.cache_clear() after changing settings.
    """
    from config.settings import get_settings

    s = get_settings()
    return BookingRules(
        max_normal_per_day=s.max_normal_per_day,
        max_urgent_per_day=s.max_urgent_per_day,
        enforce_urgent_cap=s.enforce_urgent_cap,
        urgent_surcharge_percent=s.urgent_surcharge_percent,
        advance_payment_percent=s.advance_payment_percent,
        urgent_min_hours=s.urgent_min_hours,
        normal_min_days=s.normal_min_days,
        urgent_reference_hour=s.urgent_reference_hour,
        urgent_delivery_hours=s.urgent_delivery_hours,
        normal_delivery_days=s.normal_delivery_days,
        normal_scan_days=s.normal_scan_days,
        urgent_scan_days=s.urgent_scan_days,
        delivery_scan_days=s.delivery_scan_days,
    )
