"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.availability import router as availability_router
from routes.pricing import router as pricing_router
from routes.orders import router as orders_router
from routes.stats import router as stats_router
from routes.admin_ws import router as admin_ws_router

__all__ = [
    "availability_router",
    "pricing_router",
    "orders_router",
    "stats_router",
    "admin_ws_router",
]
