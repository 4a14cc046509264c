"""
Unit tests for order schemas and the status workflow.

Run: pytest tests/unit/test_order_models.py -v
"""

import pytest
from datetime import date
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from models.order import (
    OrderCreate,
    SelfMeasuredOrderCreate,
    TailorVisitOrderCreate,
    OrderStatus,
    is_valid_status_transition,
)

order_adapter = TypeAdapter(OrderCreate)

BASE = {
    "customerName": "Anjali Menon",
    "phone": "9876543210",
    "address": "12 MG Road, Kochi",
    "serviceId": "simple-salwar",
}


class TestOrderVariants:
    """measurementMethod selects the order variant"""

    def test_self_variant(self):
        order = order_adapter.validate_python({
            **BASE,
            "measurementMethod": "self",
            "measurements": {"bust": "34", "waist": "28", "hips": "36"},
        })

        assert isinstance(order, SelfMeasuredOrderCreate)
        assert order.measurements.hips == "36"
        assert order.tailor_visit_date is None

    def test_tailor_variant(self):
        order = order_adapter.validate_python({
            **BASE,
            "measurementMethod": "tailor",
            "tailorVisitDate": "2025-03-14",
        })

        assert isinstance(order, TailorVisitOrderCreate)
        assert order.tailor_visit_date == date(2025, 3, 14)

    def test_tailor_requires_visit_date(self):
        with pytest.raises(PydanticValidationError):
            order_adapter.validate_python({**BASE, "measurementMethod": "tailor"})

    def test_self_requires_bust_and_waist(self):
        with pytest.raises(PydanticValidationError):
            order_adapter.validate_python({
                **BASE,
                "measurementMethod": "self",
                "measurements": {"bust": "34"},
            })

    def test_unknown_method_rejected(self):
        with pytest.raises(PydanticValidationError):
            order_adapter.validate_python({**BASE, "measurementMethod": "video-call"})


class TestServiceVariants:
    """serviceType decides which extras are allowed"""

    def test_custom_requires_customization(self):
        with pytest.raises(PydanticValidationError):
            TailorVisitOrderCreate(**BASE, service_type="custom", tailor_visit_date=date(2025, 3, 14))

    def test_booking_rejects_add_ons(self):
        with pytest.raises(PydanticValidationError):
            TailorVisitOrderCreate(**BASE, add_on_ids=["piping"], tailor_visit_date=date(2025, 3, 14))

    def test_custom_with_customization(self):
        order = TailorVisitOrderCreate(
            **BASE,
            service_type="custom",
            customization={"neckDesign": "Sweetheart", "fit": "Relaxed"},
            add_on_ids=["tassels"],
            tailor_visit_date=date(2025, 3, 14),
        )

        assert order.customization.neck_design == "Sweetheart"

    def test_urgent_cannot_pick_delivery_date(self):
        with pytest.raises(PydanticValidationError):
            TailorVisitOrderCreate(
                **BASE,
                booking_type="urgent",
                preferred_delivery_date=date(2025, 3, 25),
                tailor_visit_date=date(2025, 3, 14),
            )


class TestBookingType:
    """is_urgent follows bookingType"""

    def test_normal_by_default(self):
        order = SelfMeasuredOrderCreate(**BASE, measurements={"bust": "34", "waist": "28"})

        assert order.is_urgent is False

    def test_urgent(self):
        order = order_adapter.validate_python({
            **BASE,
            "bookingType": "urgent",
            "measurementMethod": "self",
            "measurements": {"bust": "34", "waist": "28"},
        })

        assert order.is_urgent is True


class TestPhoneValidation:
    """Tests for the phone validator"""

    @pytest.mark.parametrize("phone,expected", [
        ("9876543210", "9876543210"),
        ("98765 43210", "9876543210"),
        ("+919876543210", "9876543210"),
        ("+91 98765 43210", "9876543210"),
    ])
    def test_valid_numbers(self, phone, expected):
        order = TailorVisitOrderCreate(**{**BASE, "phone": phone}, tailor_visit_date=date(2025, 3, 14))

        assert order.phone == expected

    @pytest.mark.parametrize("phone", ["12345", "98765432101", "98765-43210", "phone"])
    def test_invalid_numbers(self, phone):
        with pytest.raises(PydanticValidationError):
            TailorVisitOrderCreate(**{**BASE, "phone": phone}, tailor_visit_date=date(2025, 3, 14))


class TestStatusTransitions:
    """Tests for is_valid_status_transition()"""

    def test_forward_allowed(self):
        assert is_valid_status_transition(OrderStatus.PICKUP_AWAITED, OrderStatus.FABRIC_RECEIVED)

    def test_skip_forward_allowed(self):
        assert is_valid_status_transition(OrderStatus.PICKUP_AWAITED, OrderStatus.READY)

    def test_backward_rejected(self):
        assert not is_valid_status_transition(OrderStatus.READY, OrderStatus.PROCESSING)

    def test_same_status_rejected(self):
        assert not is_valid_status_transition(OrderStatus.PROCESSING, OrderStatus.PROCESSING)

    @pytest.mark.parametrize("status", [
        OrderStatus.PICKUP_AWAITED,
        OrderStatus.FABRIC_RECEIVED,
        OrderStatus.PROCESSING,
        OrderStatus.READY,
        OrderStatus.OUT_FOR_DELIVERY,
    ])
    def test_open_orders_can_be_cancelled(self, status):
        assert is_valid_status_transition(status, OrderStatus.CANCELLED)

    @pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_terminal_statuses(self, terminal):
        assert not is_valid_status_transition(terminal, OrderStatus.PROCESSING)
        assert not is_valid_status_transition(terminal, OrderStatus.CANCELLED)
