"""
Order API routes.

Customers place orders here; the admin portal lists them and moves them
through the workflow. Every change is pushed to connected admin clients.
"""

from fastapi import APIRouter, BackgroundTasks, Body, Query
from fastapi.responses import JSONResponse
from typing import Annotated, Optional, Union
import structlog

from models.order import (
    SelfMeasuredOrderCreate,
    TailorVisitOrderCreate,
    OrderStatusUpdate,
    OrderImageCreate,
    OrderResponse,
    OrderListResponse,
    OrderStatus,
)
from services.order_service import get_order_service
from services.notification_service import get_notification_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order: Annotated[
        Union[SelfMeasuredOrderCreate, TailorVisitOrderCreate],
        Body(discriminator="measurement_method")
    ],
    background_tasks: BackgroundTasks
):
    """
    Place an order.

    Capacity for the delivery date is checked again here; a date that
    filled up since the calendar was loaded returns 409 CAPACITY_EXCEEDED.

    The Telegram alert runs after the response is sent.
    """
    try:
        created = get_order_service().create(order)

        notifier = get_notification_service()
        background_tasks.add_task(notifier.notify_new_order, created)
        await notifier.broadcast_new_order(created)

        return created

    except Exception as e:
        return handle_error(e)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by status"),
    limit: int = Query(50, ge=1, le=200, description="Max orders to return"),
    skip: int = Query(0, ge=0, description="Orders to skip")
):
    """List orders, newest first."""
    try:
        orders, total = get_order_service().get_all(status=status, limit=limit, skip=skip)
        return OrderListResponse(orders=orders, total=total, limit=limit, skip=skip)

    except Exception as e:
        return handle_error(e)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str):
    """
    Get a single order.

    Raises:
        404: Order not found
    """
    try:
        return get_order_service().get_by_order_id(order_id)

    except Exception as e:
        return handle_error(e)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, data: OrderStatusUpdate):
    """
    Move an order to a new status.

    Orders only move forward (skips allowed). Open orders can be cancelled.

    Raises:
        422: Invalid status transition
        404: Order not found
    """
    try:
        updated = get_order_service().update_status(order_id, data)
        await get_notification_service().broadcast_order_updated(updated)
        return updated

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/images", response_model=OrderResponse)
async def add_order_image(order_id: str, data: OrderImageCreate):
    """Attach a fabric, reference, progress or completed image."""
    try:
        updated = get_order_service().add_image(order_id, data)
        await get_notification_service().broadcast_order_updated(updated)
        return updated

    except Exception as e:
        return handle_error(e)
