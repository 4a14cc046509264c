"""
Availability API routes.

Booking calendar queries. Every result is a hint; capacity is checked again
when the order is submitted.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.booking import AvailabilityWindow, EstimatedDeliveryResponse, NextAvailableResponse
from services.availability_service import get_availability_service
from exceptions import AppError
from utils.date_utils import parse_date

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Availability"])


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


@router.get("/available-dates", response_model=AvailabilityWindow)
async def get_available_dates():
    """
    Normal-order availability for the booking calendar.

    Covers 30 days starting one week from today. Each date reports
    remainingSlots and isFull; firstAvailableDate is null when all are full.
    """
    try:
        return get_availability_service().get_available_dates()
    except Exception as e:
        return handle_error(e)


@router.get("/estimated-delivery", response_model=EstimatedDeliveryResponse)
async def get_estimated_delivery(
    processing_start: Optional[str] = Query(
        None,
        alias="processingStart",
        description="Processing start date (yyyy-MM-dd); defaults to tomorrow"
    )
):
    """
    First delivery date with a free normal slot.

    Starts 7 days after processing start and moves forward past full dates.
    """
    try:
        start = parse_date(processing_start, "processingStart") if processing_start else None
        return get_availability_service().get_estimated_delivery(processing_start=start)
    except Exception as e:
        return handle_error(e)


@router.get("/availability/next", response_model=NextAvailableResponse)
async def get_next_available():
    """Suggested delivery dates for normal and urgent orders."""
    try:
        return get_availability_service().get_next_available()
    except Exception as e:
        return handle_error(e)
