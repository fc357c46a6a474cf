"""API route modules."""

from stockledger.api.routes.dashboard import router as dashboard_router
from stockledger.api.routes.health import router as health_router
from stockledger.api.routes.items import router as items_router
from stockledger.api.routes.movements import router as movements_router
from stockledger.api.routes.notifications import router as notifications_router
from stockledger.api.routes.suggestions import router as suggestions_router

__all__ = [
    "health_router",
    "items_router",
    "movements_router",
    "dashboard_router",
    "suggestions_router",
    "notifications_router",
]
