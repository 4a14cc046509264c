"""
Admin portal WebSocket.

Connected clients receive NEW_ORDER and ORDER_UPDATED events as JSON:
    {"type": "NEW_ORDER", "order": {...}}
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import structlog

from services.notification_service import admin_connections

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Admin"])


@router.websocket("/ws/admin")
async def admin_events(websocket: WebSocket):
    await admin_connections.connect(websocket)
    try:
        # Clients only listen; incoming text is kept as a keepalive
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        admin_connections.disconnect(websocket)
