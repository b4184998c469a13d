"""Season (tracker) API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.db import get_db
from repbook.models import Season
from repbook.schemas.season import SeasonCreate, SeasonResponse, SeasonUpdate

router = APIRouter(prefix="/seasons", tags=["Seasons"])


@router.get("", response_model=List[SeasonResponse])
async def list_seasons(
    db: AsyncSession = Depends(get_db),
    company_id: Optional[int] = Query(None),
    include_archived: bool = Query(True),
):
    query = select(Season)

    if company_id is not None:
        query = query.where(Season.company_id == company_id)

    if not include_archived:
        query = query.where(Season.archived == False)  # noqa: E712

    result = await db.execute(query.order_by(Season.created_at, Season.id))
    return result.scalars().all()


@router.post("", response_model=SeasonResponse, status_code=status.HTTP_201_CREATED)
async def create_season(data: SeasonCreate, db: AsyncSession = Depends(get_db)):
    season = Season(**data.model_dump(), archived=False)
    db.add(season)
    await db.flush()
    return season


@router.patch("/{season_id}", response_model=SeasonResponse)
async def update_season(
    season_id: int,
    data: SeasonUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edit a season; send archived to move it in or out of the archive."""
    season = await db.get(Season, season_id)
    if not season:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Season not found",
        )

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(season, field, value)

    await db.flush()
    return season
