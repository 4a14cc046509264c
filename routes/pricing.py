"""
Pricing and catalog API routes.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from config.catalog import SERVICE_CATALOG, ADD_ON_CATALOG
from models.pricing import QuoteRequest, QuoteResponse
from services.pricing_service import quote
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Pricing"])


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


@router.post("/pricing/quote", response_model=QuoteResponse)
async def get_quote(request: QuoteRequest):
    """
    Price and delivery preview.

    Returns base price, add-ons, urgent surcharge, total, advance and
    balance, plus processing start and estimated delivery.
    """
    try:
        return quote(request)
    except Exception as e:
        return handle_error(e)


@router.get("/catalog/services")
async def list_services():
    """Service catalog and paid add-ons."""
    return {
        "services": SERVICE_CATALOG,
        "addOns": ADD_ON_CATALOG,
    }
