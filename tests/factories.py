"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from models.booking import DayCounts
from utils.date_utils import date_key


class OrderFactory:
    """
    Factory for creating test order rows.

    Usage:
        # Create with defaults
        order = OrderFactory.create()

        # Create with overrides
        order = OrderFactory.create(status="processing", total_amount=1300)

        # Create multiple
        orders = OrderFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        order_id: Optional[str] = None,
        status: str = "pickup-awaited",
        booking_type: str = "normal",
        measurement_method: str = "self",
        total_amount: int = 700,
        advance_amount: int = 0,
        created_at: Optional[str] = None,
        **overrides
    ) -> dict:
        """
        Create a single order dict.

        Args:
            order_id: Order id (auto-generated if not provided)
            status: Workflow status value
            booking_type: normal or urgent
            measurement_method: self or tailor
            total_amount: Order total
            advance_amount: Advance collected upfront
            created_at: Timestamp (auto-generated if not provided)
            **overrides: Any other column

        Returns:
            Order dict matching database schema
        """
        counter = cls._next_counter()
        created = created_at or datetime(2025, 3, 10, 10, 0).isoformat()

        row = {
            "id": f"uuid-{counter}",
            "order_id": order_id or f"SLQ{1230 + counter:04d}",
            "customer_name": f"Customer {counter}",
            "phone": "9876543210",
            "address": "12 MG Road, Kochi",
            "notes": None,
            "service_name": "Simple Salwar",
            "service_type": "booking",
            "booking_type": booking_type,
            "measurement_method": measurement_method,
            "tailor_visit_date": None,
            "measurements": {"bust": "34", "waist": "28"} if measurement_method == "self" else None,
            "customization": None,
            "booking_date": "2025-03-10",
            "processing_start_date": "2025-03-11T00:00:00",
            "estimated_delivery": "2025-03-18T00:00:00",
            "actual_delivery": None,
            "base_price": total_amount,
            "add_ons_total": 0,
            "urgent_surcharge": 0,
            "total_amount": total_amount,
            "advance_amount": advance_amount,
            "requires_advance": advance_amount > 0,
            "advance_paid": False,
            "payment_status": "pending",
            "status": status,
            "status_history": [
                {"status": "pickup-awaited", "note": "Order placed", "timestamp": created}
            ],
            "images": [],
            "additional_remarks": None,
            "extra_charges_note": None,
            "admin_notes": None,
            "created_at": created,
            "updated_at": created,
        }
        row.update(overrides)
        return row

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple orders."""
        return [cls.create(**overrides) for _ in range(count)]


class BookingCountsFactory:
    """
    Factory for booking counts snapshots.

    Usage:
        counts = BookingCountsFactory.full_days(date(2025, 3, 17), 3, cap=4)
    """

    @classmethod
    def day(cls, day: date, normal: int = 0, urgent: int = 0) -> dict:
        """Snapshot with a single date."""
        return {date_key(day): DayCounts(normal=normal, urgent=urgent)}

    @classmethod
    def full_days(cls, start: date, days: int, cap: int = 4, urgent: int = 0) -> dict:
        """Snapshot with `days` consecutive dates at the normal cap."""
        return {
            date_key(start + timedelta(days=offset)): DayCounts(normal=cap, urgent=urgent)
            for offset in range(days)
        }

    @classmethod
    def row(cls, day: date, normal: int = 0, urgent: int = 0) -> dict:
        """booking_counts table row."""
        return {"date": date_key(day), "normal": normal, "urgent": urgent}
