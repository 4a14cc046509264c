"""
Shared test fixtures.

The Supabase client is replaced by an in-memory mock; booking counts can
also be held by InMemoryBookingCounterStore so allocator and order tests
don't need table fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings require Supabase credentials at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import date, datetime
from typing import Generator, Optional

from config import BookingRules
from models.booking import BookingCounts, BookingType, DayCounts
from services.booking_counter_service import BookingCounterStore
from exceptions import CapacityExceededError
from utils.date_utils import date_key


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count
        self._is_single = False

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        # Simulate insert - add id and timestamps
        if isinstance(data, dict):
            data = [data]
        for item in data:
            item["id"] = "test-uuid-123"
            item.setdefault("created_at", datetime.utcnow().isoformat() + "Z")
            item.setdefault("updated_at", datetime.utcnow().isoformat() + "Z")
        self._data = data
        return self

    def update(self, data):
        # Simulate update - merge with existing data
        updated_data = []
        for item in self._data:
            merged = {**item, **data}
            updated_data.append(merged)
        self._data = updated_data if updated_data else [data]
        return self

    def delete(self):
        return self

    def eq(self, column, value):
        return self

    def neq(self, column, value):
        return self

    def gte(self, column, value):
        return self

    def lte(self, column, value):
        return self

    def in_(self, column, values):
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, **kwargs):
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._is_single:
            data = self._data[0] if self._data else None
            return MockSupabaseResponse(
                data=data,
                count=1 if data else 0
            )
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self._data.copy(), self._count)

    def insert(self, data):
        query = MockSupabaseQuery(self._data.copy(), self._count)
        return query.insert(data)

    def update(self, data):
        # For update, pass the existing data so it can be merged
        query = MockSupabaseQuery(self._data.copy(), self._count)
        return query.update(data)

    def delete(self):
        return MockSupabaseQuery(self._data.copy(), self._count)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}
        self._rpc = {}
        self.rpc_calls = []

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def set_rpc_data(self, function_name: str, data: list):
        """Configure the rows a database function returns."""
        self._rpc[function_name] = data

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseTable(config["data"], config["count"])

    def rpc(self, name: str, params: dict = None) -> MockSupabaseQuery:
        """Call a database function."""
        self.rpc_calls.append((name, params))
        return MockSupabaseQuery(list(self._rpc.get(name, [])))


# ===================
# IN-MEMORY COUNTER STORE
# ===================

class InMemoryBookingCounterStore(BookingCounterStore):
    """Booking counts held in a dict; honours the conditional cap."""

    def __init__(self, counts: Optional[BookingCounts] = None):
        self.counts: BookingCounts = dict(counts or {})
        self.increments = []
        self.releases = []

    def get_counts(self, start: date, end: date) -> BookingCounts:
        start_key, end_key = date_key(start), date_key(end)
        return {k: v for k, v in self.counts.items() if start_key <= k <= end_key}

    def increment(
        self,
        day: date,
        booking_type: BookingType,
        cap: Optional[int] = None
    ) -> DayCounts:
        key = date_key(day)
        current = self.counts.get(key) or DayCounts()
        booked = current.urgent if booking_type == BookingType.URGENT else current.normal
        if cap is not None and booked >= cap:
            raise CapacityExceededError(key, booking_type.value, cap)
        self.counts[key] = current.incremented(booking_type)
        self.increments.append((key, booking_type, cap))
        return self.counts[key]

    def release(self, day: date, booking_type: BookingType) -> DayCounts:
        key = date_key(day)
        self.counts[key] = (self.counts.get(key) or DayCounts()).decremented(booking_type)
        self.releases.append((key, booking_type))
        return self.counts[key]

    def clear(self, day: date) -> None:
        self.counts.pop(date_key(day), None)


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("orders", [
                {"order_id": "SLQ1231", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("orders", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.order_service.get_supabase_client", return_value=mock_supabase):
            with patch("services.booking_counter_service.get_supabase_client", return_value=mock_supabase):
                yield mock_supabase


@pytest.fixture
def rules() -> BookingRules:
    """Default booking rules, independent of environment settings."""
    return BookingRules()


@pytest.fixture
def counter_store() -> InMemoryBookingCounterStore:
    """Empty in-memory booking counts."""
    return InMemoryBookingCounterStore()


@pytest.fixture
def full_day_counts(rules) -> DayCounts:
    """A date with every normal slot taken."""
    return DayCounts(normal=rules.max_normal_per_day, urgent=0)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_supabase, counter_store, rules):
    """
    Create FastAPI test client with mocked database and counter store.

    Service singletons are rebuilt against the mocks for each test.
    """
    from fastapi.testclient import TestClient
    from main import app
    from services.availability_service import AvailabilityService
    from services.order_service import OrderService

    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.order_service.get_supabase_client", return_value=mock_supabase):
            availability = AvailabilityService(store=counter_store, rules=rules)
            orders = OrderService(store=counter_store, rules=rules)
            with patch("routes.availability.get_availability_service", return_value=availability):
                with patch("routes.orders.get_order_service", return_value=orders):
                    with patch("routes.stats.get_order_service", return_value=orders):
                        yield TestClient(app)
