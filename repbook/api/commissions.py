"""Commission and payment ledger API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.api.errors import http_error
from repbook.db import get_db
from repbook.models import Commission, Order
from repbook.schemas.commission import (
    BulkPaymentRequest,
    CommissionResponse,
    PaymentRequest,
)
from repbook.services.exceptions import CommissionError
from repbook.services.payments import (
    add_payment,
    add_payments_bulk,
    edit_payment,
    get_commission,
    remove_payment,
)

router = APIRouter(prefix="/commissions", tags=["Commissions"])


async def _locked_commission(db: AsyncSession, commission_id: int) -> Commission:
    commission = await get_commission(db, commission_id, lock=True)
    if not commission:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Commission not found",
        )
    return commission


@router.get("", response_model=List[CommissionResponse])
async def list_commissions(
    db: AsyncSession = Depends(get_db),
    company_id: Optional[int] = Query(None),
    season_id: Optional[int] = Query(None),
):
    """List commissions whose order matches the filter, largest balance first."""
    query = select(Commission).join(Order, Order.id == Commission.order_id)

    if company_id is not None:
        query = query.where(Order.company_id == company_id)

    if season_id is not None:
        query = query.where(Order.season_id == season_id)

    result = await db.execute(
        query.order_by(Commission.amount_remaining.desc(), Commission.id)
    )
    return [CommissionResponse.from_commission(c) for c in result.scalars().all()]


@router.post(
    "/payments/bulk",
    response_model=List[CommissionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def post_bulk_payments(
    data: BulkPaymentRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Record one payment on each listed commission, all on one date.

    Either every entry is applied or none is; a rejected entry rolls back
    the whole request.
    """
    try:
        commissions = await add_payments_bulk(
            db,
            [(item.commission_id, item.amount) for item in data.payments],
            data.date,
        )
    except CommissionError as e:
        raise http_error(e) from e
    return [CommissionResponse.from_commission(c) for c in commissions]


@router.get("/{commission_id}", response_model=CommissionResponse)
async def get_commission_detail(commission_id: int, db: AsyncSession = Depends(get_db)):
    commission = await get_commission(db, commission_id)
    if not commission:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Commission not found",
        )
    return CommissionResponse.from_commission(commission)


@router.post(
    "/{commission_id}/payments",
    response_model=CommissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_payment(
    commission_id: int,
    data: PaymentRequest,
    db: AsyncSession = Depends(get_db),
):
    """Append a payment to the ledger."""
    commission = await _locked_commission(db, commission_id)
    try:
        await add_payment(db, commission, data.amount, data.date)
    except CommissionError as e:
        raise http_error(e) from e
    return CommissionResponse.from_commission(commission)


@router.put("/{commission_id}/payments/{index}", response_model=CommissionResponse)
async def put_payment(
    commission_id: int,
    index: int,
    data: PaymentRequest,
    db: AsyncSession = Depends(get_db),
):
    """Replace the payment at a ledger position."""
    commission = await _locked_commission(db, commission_id)
    try:
        await edit_payment(db, commission, index, data.amount, data.date)
    except CommissionError as e:
        raise http_error(e) from e
    return CommissionResponse.from_commission(commission)


@router.delete("/{commission_id}/payments/{index}", response_model=CommissionResponse)
async def delete_payment(
    commission_id: int,
    index: int,
    db: AsyncSession = Depends(get_db),
):
    """Remove the payment at a ledger position."""
    commission = await _locked_commission(db, commission_id)
    try:
        await remove_payment(db, commission, index)
    except CommissionError as e:
        raise http_error(e) from e
    return CommissionResponse.from_commission(commission)
