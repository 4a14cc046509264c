"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    BookingRules / get_booking_rules: Capacity, lead-time and pricing rules
    get_supabase_client: Cached Supabase client
    check_connection: Health check function
"""

from config.settings import settings, get_settings, Settings
from config.booking_rules import BookingRules, get_booking_rules
from config.database import get_supabase_client, check_connection

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Booking rules
    "BookingRules",
    "get_booking_rules",

    # Database
    "get_supabase_client",
    "check_connection",
]
