"""
Admin dashboard stats routes.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.order import TodayStats
from services.order_service import get_order_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/stats", tags=["Stats"])


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


@router.get("/today", response_model=TodayStats)
async def get_today_stats():
    """
    Today's orders and revenue, plus pending and in-progress counts.

    Cancelled orders are not counted as pending or in progress.
    """
    try:
        return get_order_service().today_stats()
    except Exception as e:
        return handle_error(e)
