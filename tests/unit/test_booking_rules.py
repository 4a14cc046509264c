"""
Unit tests for building BookingRules from settings.

Run: pytest tests/unit/test_booking_rules.py -v
"""

import pytest
from unittest.mock import patch

from config import Settings, get_booking_rules


@pytest.fixture(autouse=True)
def fresh_rules():
    get_booking_rules.cache_clear()
    yield
    get_booking_rules.cache_clear()


class TestGetBookingRules:
    """Tests for get_booking_rules()"""

    def test_defaults(self):
        rules = get_booking_rules()

        assert rules.max_normal_per_day == 4
        assert rules.delivery_scan_days == 60

    def test_scan_windows_come_from_settings(self):
        custom = Settings(normal_scan_days=45, urgent_scan_days=10, delivery_scan_days=90)

        with patch("config.settings.get_settings", return_value=custom):
            rules = get_booking_rules()

        assert rules.normal_scan_days == 45
        assert rules.urgent_scan_days == 10
        assert rules.delivery_scan_days == 90

    def test_capacity_comes_from_settings(self):
        custom = Settings(max_normal_per_day=6, enforce_urgent_cap=True)

        with patch("config.settings.get_settings", return_value=custom):
            rules = get_booking_rules()

        assert rules.max_normal_per_day == 6
        assert rules.enforce_urgent_cap is True
