"""
Database engine and per-request sessions.

Ledger writes lock their commission rows, so a session lives exactly as
long as one request or one script step and never spans two.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from repbook.config import settings

logger = logging.getLogger(__name__)

# No pool on our side; the hosted database sits behind its own pooler
engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    echo=not settings.is_production,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session.

    Services only flush. An order edit, its commission recompute and any
    payment entries commit together here, or roll back together when the
    handler raises (HTTPException included).
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """Same commit-or-rollback scope as get_db, for work outside a request.

        async with get_db_context() as db:
            await update_company(db, company, {"commission_percent": 6})
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
