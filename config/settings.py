"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Booking rules live here too so every instance reads the same values.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )

    # ===================
    # TELEGRAM
    # ===================
    telegram_bot_token: Optional[str] = Field(
        None,
        description="Telegram bot token from @BotFather"
    )
    telegram_chat_id: Optional[str] = Field(
        None,
        description="Telegram chat ID for new order alerts"
    )

    # ===================
    # BOOKING CAPACITY
    # ===================
    max_normal_per_day: int = Field(
        default=4,
        ge=0,
        le=100,
        description="Normal orders accepted per delivery date"
    )
    max_urgent_per_day: int = Field(
        default=4,
        ge=0,
        le=100,
        description="Urgent orders per date (only enforced with enforce_urgent_cap)"
    )
    enforce_urgent_cap: bool = Field(
        default=False,
        description="Reject urgent orders once max_urgent_per_day is reached"
    )
    strict_capacity: bool = Field(
        default=False,
        description="Use the conditional increment RPC when committing a booking"
    )

    # ===================
    # LEAD TIMES
    # ===================
    urgent_min_hours: int = Field(
        default=36,
        ge=0,
        le=720,
        description="Minimum hours before an urgent delivery"
    )
    normal_min_days: int = Field(
        default=7,
        ge=0,
        le=90,
        description="Minimum days before a normal delivery"
    )
    urgent_reference_hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="Hour of day used as the urgent lead-time target"
    )
    urgent_delivery_hours: int = Field(
        default=36,
        ge=1,
        le=720,
        description="Hours from processing start to urgent delivery"
    )
    normal_delivery_days: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Days from processing start to normal delivery"
    )
    normal_scan_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Days scanned when suggesting a normal delivery date"
    )
    urgent_scan_days: int = Field(
        default=14,
        ge=1,
        le=365,
        description="Days scanned when suggesting an urgent delivery date"
    )
    delivery_scan_days: int = Field(
        default=60,
        ge=1,
        le=365,
        description="Days scanned by the estimated-delivery lookup"
    )

    # ===================
    # PRICING
    # ===================
    urgent_surcharge_percent: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Surcharge on subtotal for urgent orders"
    )
    advance_payment_percent: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Share of total collected upfront when advance is required"
    )

    # ===================
    # ORDERS
    # ===================
    order_id_prefix: str = Field(
        default="SLQ",
        max_length=10,
        description="Prefix for generated order IDs"
    )
    order_id_start_sequence: int = Field(
        default=1231,
        ge=0,
        description="First sequence number used for order IDs"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=5000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:3001",
            "https://sliques.vercel.app",
            "https://sliques-admin.vercel.app",
        ],
        description="Origins allowed to call the API"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def telegram_configured(self) -> bool:
        """Check if Telegram is properly configured."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
