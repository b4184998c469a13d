"""Company (brand) API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.api.errors import http_error
from repbook.db import get_db
from repbook.models import Company
from repbook.schemas.company import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    SortOrderItem,
)
from repbook.services.exceptions import CommissionError
from repbook.services.orders import update_company

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=List[CompanyResponse])
async def list_companies(db: AsyncSession = Depends(get_db)):
    """List brands in display order."""
    result = await db.execute(select(Company).order_by(Company.sort_order, Company.id))
    return result.scalars().all()


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(data: CompanyCreate, db: AsyncSession = Depends(get_db)):
    """Create a brand."""
    company = Company(**data.model_dump())
    db.add(company)
    await db.flush()
    return company


@router.put("/sort-order")
async def reorder_companies(
    items: List[SortOrderItem],
    db: AsyncSession = Depends(get_db),
):
    """Persist a new display order."""
    for item in items:
        company = await db.get(Company, item.id)
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Company {item.id} not found",
            )
        company.sort_order = item.sort_order

    await db.flush()
    return {"success": True}


@router.patch("/{company_id}")
async def patch_company(
    company_id: int,
    data: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edit a brand. Changing the rate recomputes commissions that use it."""
    company = await db.get(Company, company_id)
    if not company:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company not found",
        )

    try:
        recomputed = await update_company(db, company, data.model_dump(exclude_unset=True))
    except CommissionError as e:
        raise http_error(e) from e

    return {
        "company": CompanyResponse.model_validate(company),
        "commissions_recomputed": recomputed,
    }
