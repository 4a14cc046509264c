"""
Admin notification service.

Two fire-and-forget channels, neither of which can fail a booking:
- Telegram alert to the admin chat on new orders
- WebSocket events (NEW_ORDER, ORDER_UPDATED) to connected admin portals
"""

from typing import Optional
import structlog
from fastapi import WebSocket

from exceptions import TelegramError
from integrations.telegram import send_new_order_alert
from models.order import OrderResponse

logger = structlog.get_logger(__name__)


class AdminConnectionManager:
    """Tracks admin portal WebSocket connections on this instance."""

    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.add(websocket)
        logger.info("admin_client_connected", clients=len(self.connections))

    def disconnect(self, websocket: WebSocket) -> None:
        self.connections.discard(websocket)
        logger.info("admin_client_disconnected", clients=len(self.connections))

    async def broadcast(self, event: dict) -> int:
        """
        Send an event to every connected admin client.

        Clients that fail to receive are dropped.

        Returns:
            Number of clients that received the event
        """
        delivered = 0
        for websocket in list(self.connections):
            try:
                await websocket.send_json(event)
                delivered += 1
            except Exception as e:
                logger.warning("admin_broadcast_failed", error=str(e))
                self.connections.discard(websocket)

        logger.debug("admin_event_broadcast", type=event.get("type"), delivered=delivered)
        return delivered


def order_event(event_type: str, order: OrderResponse) -> dict:
    """WebSocket payload for an order event."""
    return {
        "type": event_type,
        "order": order.model_dump(mode="json", by_alias=True),
    }


class NotificationService:
    """Informs admins about order activity."""

    def __init__(self, connections: Optional[AdminConnectionManager] = None):
        self.connections = connections or admin_connections

    def notify_new_order(self, order: OrderResponse) -> bool:
        """
        Send the Telegram new order alert.

        Returns:
            True if the alert was delivered
        """
        try:
            sent = send_new_order_alert(order)
        except TelegramError as e:
            logger.warning("new_order_alert_failed", order_id=order.order_id, error=e.message)
            return False

        logger.info("new_order_alert_sent", order_id=order.order_id, sent=sent)
        return sent

    async def broadcast_new_order(self, order: OrderResponse) -> int:
        return await self.connections.broadcast(order_event("NEW_ORDER", order))

    async def broadcast_order_updated(self, order: OrderResponse) -> int:
        return await self.connections.broadcast(order_event("ORDER_UPDATED", order))


# Connections are per process; each instance serves its own admin sockets
admin_connections = AdminConnectionManager()

# Singleton instance
_notification_service: Optional[NotificationService] = None


def get_notification_service() -> NotificationService:
    """Get or create NotificationService instance."""
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService()
    return _notification_service
