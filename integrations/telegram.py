"""
Telegram bot integration for admin order alerts.

Sends a formatted message to the boutique's admin chat whenever an order
is placed.
"""

from typing import Optional
import requests
import structlog

from config import settings
from exceptions import TelegramError
from models.order import OrderResponse

logger = structlog.get_logger(__name__)


BOOKING_TYPE_EMOJIS = {
    "normal": "🧵",
    "urgent": "⚡",
}


def get_telegram_config() -> tuple[Optional[str], Optional[str]]:
    """
    Get Telegram configuration from settings.

    Returns:
        tuple: (bot_token, chat_id)
    """
    bot_token = settings.telegram_bot_token
    chat_id = settings.telegram_chat_id

    if not bot_token or not chat_id:
        logger.warning(
            "telegram_not_configured",
            has_token=bool(bot_token),
            has_chat_id=bool(chat_id)
        )

    return bot_token, chat_id


def format_new_order_message(order: OrderResponse) -> str:
    """
    Format a new order as a Telegram message.

    Args:
        order: Order that was just created

    Returns:
        Formatted message string
    """
    emoji = BOOKING_TYPE_EMOJIS.get(order.booking_type.value, "•")

    lines = [
        "🪡 *New Order!*",
        "",
        f"{emoji} `{order.order_id}` | {order.booking_type.value.upper()}",
        f"{order.customer_name} booked {order.service_name}",
        "",
        f"💰 Total: ₹{order.total_amount}",
    ]

    if order.advance_amount:
        lines.append(f"💳 Advance: ₹{order.advance_amount} / Balance: ₹{order.balance_amount}")

    if order.tailor_visit_date:
        lines.append(f"📏 Tailor visit: {order.tailor_visit_date.strftime('%d %b %Y')}")

    lines.append(f"📦 Delivery by: {order.estimated_delivery.strftime('%d %b %Y %H:%M')}")

    return "\n".join(lines)


def send_message(message: str, parse_mode: str = "Markdown") -> bool:
    """
    Send message to Telegram.

    Args:
        message: Message text to send
        parse_mode: Telegram parse mode (Markdown or HTML)

    Returns:
        True if sent, False if Telegram is not configured

    Raises:
        TelegramError: If send fails
    """
    bot_token, chat_id = get_telegram_config()

    if not bot_token or not chat_id:
        logger.warning("telegram_not_configured_skipping_send")
        return False

    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"

    payload = {
        "chat_id": chat_id,
        "text": message,
        "parse_mode": parse_mode,
        "disable_web_page_preview": True,
    }

    try:
        logger.info("sending_telegram_message", chat_id=chat_id)

        response = requests.post(url, json=payload, timeout=10)
        response.raise_for_status()

        result = response.json()

        if not result.get("ok"):
            error_msg = result.get("description", "Unknown error")
            logger.error("telegram_api_error", error=error_msg)
            raise TelegramError(f"Telegram API error: {error_msg}")

        logger.info("telegram_message_sent", message_id=result.get("result", {}).get("message_id"))
        return True

    except requests.exceptions.RequestException as e:
        logger.error("telegram_request_failed", error=str(e))
        raise TelegramError(f"Failed to send Telegram message: {str(e)}")


def send_new_order_alert(order: OrderResponse) -> bool:
    """Send a new order alert to the admin chat."""
    return send_message(format_new_order_message(order))
