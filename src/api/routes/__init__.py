"""
API routes for the consultation core.

Available routers:
- health: Health check endpoint
- consultation: Lifecycle, submission, vote and metric endpoints
"""

from src.api.routes.consultation import router as consultation_router
from src.api.routes.health import router as health_router

__all__: list[str] = ["consultation_router", "health_router"]
