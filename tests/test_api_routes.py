"""
API route tests.

Runs the FastAPI app against the mock Supabase client and an in-memory
booking counter store.

Run: pytest tests/test_api_routes.py -v
"""

import pytest
from datetime import date, timedelta
from unittest.mock import patch

from tests.factories import OrderFactory, BookingCountsFactory


ORDER_PAYLOAD = {
    "customerName": "Anjali Menon",
    "phone": "+91 98765 43210",
    "address": "12 MG Road, Kochi",
    "serviceId": "simple-salwar",
    "measurementMethod": "self",
    "measurements": {"bust": "34", "waist": "28"},
}


@pytest.fixture
def client(test_client_with_mock_db):
    with patch("services.notification_service.send_new_order_alert", return_value=True):
        yield test_client_with_mock_db


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAvailabilityRoutes:

    def test_available_dates(self, client):
        response = client.get("/api/available-dates")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["minDaysAhead"] == 7
        assert body["maxPerDay"] == 4
        assert len(body["dates"]) == 30
        assert set(body["dates"][0]) == {"date", "remainingSlots", "isFull"}
        assert body["firstAvailableDate"] == body["dates"][0]["date"]

    def test_estimated_delivery(self, client, counter_store):
        counter_store.counts.update(BookingCountsFactory.day(date(2025, 3, 18), normal=4))

        response = client.get("/api/estimated-delivery", params={"processingStart": "2025-03-11"})

        assert response.status_code == 200
        assert response.json()["estimatedDelivery"] == "2025-03-19"

    def test_estimated_delivery_invalid_date(self, client):
        response = client.get("/api/estimated-delivery", params={"processingStart": "next week"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_DATE_INPUT"

    def test_next_available(self, client):
        response = client.get("/api/availability/next")

        assert response.status_code == 200
        body = response.json()
        assert body["urgentMinHours"] == 36
        assert body["normalMinDays"] == 7


class TestPricingRoutes:

    def test_quote(self, client):
        response = client.post("/api/pricing/quote", json={
            "serviceId": "lining-blouse",
            "bookingType": "urgent",
        })

        assert response.status_code == 200
        pricing = response.json()["pricing"]
        assert pricing["total"] == 1040
        assert pricing["advanceAmount"] == 312
        assert pricing["balanceAmount"] == 728

    def test_quote_unknown_service(self, client):
        response = client.post("/api/pricing/quote", json={"serviceId": "ball-gown-xl"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SERVICE_NOT_FOUND"

    def test_catalog(self, client):
        response = client.get("/api/catalog/services")

        assert response.status_code == 200
        assert any(s["id"] == "anarkali" for s in response.json()["services"])


class TestOrderRoutes:

    def test_create_order(self, client, counter_store):
        response = client.post("/api/orders", json=ORDER_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["orderId"] == "SLQ1231"
        assert body["phone"] == "9876543210"
        assert body["status"] == "pickup-awaited"
        assert sum(c.normal for c in counter_store.counts.values()) == 1

    def test_create_order_full_date(self, client, counter_store):
        delivery = date.today() + timedelta(days=8)
        counter_store.counts.update(BookingCountsFactory.day(delivery, normal=4))

        response = client.post("/api/orders", json=ORDER_PAYLOAD)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CAPACITY_EXCEEDED"

    def test_create_order_invalid_phone(self, client):
        response = client.post("/api/orders", json={**ORDER_PAYLOAD, "phone": "12345"})

        assert response.status_code == 422

    def test_create_tailor_visit_order(self, client):
        payload = {k: v for k, v in ORDER_PAYLOAD.items() if k != "measurements"}
        payload["measurementMethod"] = "tailor"
        payload["tailorVisitDate"] = (date.today() + timedelta(days=2)).isoformat()

        response = client.post("/api/orders", json=payload)

        assert response.status_code == 201
        assert response.json()["measurementMethod"] == "tailor"

    def test_list_orders(self, client, mock_supabase):
        mock_supabase.set_table_data("orders", OrderFactory.create_batch(2))

        response = client.get("/api/orders", params={"limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert len(body["orders"]) == 2

    def test_get_missing_order(self, client):
        response = client.get("/api/orders/SLQ9999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"

    def test_invalid_status_transition(self, client, mock_supabase):
        mock_supabase.set_table_data("orders", [OrderFactory.create(status="ready")])

        response = client.patch("/api/orders/SLQ1231/status", json={"status": "processing"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    def test_update_status(self, client, mock_supabase):
        mock_supabase.set_table_data("orders", [OrderFactory.create(order_id="SLQ1231")])

        response = client.patch("/api/orders/SLQ1231/status", json={"status": "fabric-received"})

        assert response.status_code == 200
        assert response.json()["status"] == "fabric-received"

    def test_today_stats(self, client, mock_supabase):
        mock_supabase.set_table_data("orders", [OrderFactory.create(total_amount=700)])

        response = client.get("/api/stats/today")

        assert response.status_code == 200
        assert response.json()["todayRevenue"] == 700


class TestAdminWebSocket:

    def test_new_order_is_pushed(self, client):
        with client.websocket_connect("/ws/admin") as websocket:
            response = client.post("/api/orders", json=ORDER_PAYLOAD)
            assert response.status_code == 201

            event = websocket.receive_json()

        assert event["type"] == "NEW_ORDER"
        assert event["order"]["orderId"] == "SLQ1231"
