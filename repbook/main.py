"""
Repbook - Sales Commission Tracker

Main FastAPI application with:
- Brands, accounts, seasons and orders
- Commission derivation and payment ledger
- Dashboard and payment reports
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from repbook.api import api_router
from repbook.config import settings
from repbook.db import engine
from repbook.models import Base

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Creates missing tables outside production (production runs alembic)
    """
    logger.info("Starting Repbook...")

    if not settings.is_production:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    logger.info(
        "Repbook started (excluded stages: %s)",
        ", ".join(settings.excluded_stages) or "none",
    )

    yield

    # Shutdown
    logger.info("Shutting down Repbook...")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="Repbook",
    description="Sales Commission Tracker",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# Include routers
app.include_router(api_router)  # /api/* endpoints


# Root redirect
@app.get("/", include_in_schema=False)
async def root():
    """Redirect root to the API docs, or the health check in production."""
    if settings.is_production:
        return RedirectResponse(url="/api/health", status_code=302)
    return RedirectResponse(url="/docs", status_code=302)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "repbook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
