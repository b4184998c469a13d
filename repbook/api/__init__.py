"""API router aggregation."""

from fastapi import APIRouter

from repbook.api.accounts import router as accounts_router
from repbook.api.commissions import router as commissions_router
from repbook.api.companies import router as companies_router
from repbook.api.health import router as health_router
from repbook.api.orders import router as orders_router
from repbook.api.reports import router as reports_router
from repbook.api.seasons import router as seasons_router
from repbook.api.todos import router as todos_router

# Main API router (for /api/* endpoints)
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(companies_router)
api_router.include_router(accounts_router)
api_router.include_router(seasons_router)
api_router.include_router(orders_router)
api_router.include_router(commissions_router)
api_router.include_router(reports_router)
api_router.include_router(todos_router)

__all__ = ["api_router"]
