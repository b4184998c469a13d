"""Order API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.api.errors import http_error
from repbook.config import Settings, get_settings
from repbook.db import get_db
from repbook.models import Account, Commission, Order
from repbook.schemas.commission import CommissionResponse
from repbook.schemas.order import (
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderUpdate,
)
from repbook.services.exceptions import CommissionError
from repbook.services.orders import (
    create_order,
    delete_order,
    get_commission_for_order,
    update_order,
)

router = APIRouter(prefix="/orders", tags=["Orders"])


def _order_response(order: Order, commission: Optional[Commission]) -> OrderResponse:
    resp = OrderResponse.model_validate(order)
    if commission is not None:
        resp.commission = CommissionResponse.from_commission(commission)
    return resp


@router.get("", response_model=OrderListResponse)
async def list_orders(
    db: AsyncSession = Depends(get_db),
    company_id: Optional[int] = Query(None),
    season_id: Optional[int] = Query(None),
    stage: Optional[str] = Query(None),
):
    """List orders with their commissions."""
    query = (
        select(Order, Commission)
        .outerjoin(Commission, Commission.order_id == Order.id)
    )

    if company_id is not None:
        query = query.where(Order.company_id == company_id)

    if season_id is not None:
        query = query.where(Order.season_id == season_id)

    if stage:
        query = query.where(Order.stage == stage)

    result = await db.execute(query.order_by(Order.created_at.desc(), Order.id.desc()))
    rows = result.all()

    return OrderListResponse(
        items=[_order_response(order, commission) for order, commission in rows],
        total=len(rows),
    )


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def post_order(
    data: OrderCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Record a sale; a commissionable stage also creates its commission."""
    if not await db.get(Account, data.account_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown account: {data.account_id}",
        )

    try:
        order = await create_order(
            db,
            data.model_dump(),
            excluded_stages=settings.excluded_stages,
            pipeline_stages=settings.pipeline_stages,
        )
    except CommissionError as e:
        raise http_error(e) from e

    commission = await get_commission_for_order(db, order.id)
    return _order_response(order, commission)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    order = await db.get(Order, order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )

    commission = await get_commission_for_order(db, order.id)
    return _order_response(order, commission)


@router.patch("/{order_id}", response_model=OrderResponse)
async def patch_order(
    order_id: int,
    data: OrderUpdate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Edit a sale. Total, override, brand and stage edits update the commission."""
    order = await db.get(Order, order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )

    changes = data.model_dump(exclude_unset=True)
    if "account_id" in changes and not await db.get(Account, changes["account_id"]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown account: {changes['account_id']}",
        )

    try:
        commission = await update_order(
            db,
            order,
            changes,
            excluded_stages=settings.excluded_stages,
            pipeline_stages=settings.pipeline_stages,
        )
    except CommissionError as e:
        raise http_error(e) from e

    return _order_response(order, commission)


@router.delete("/{order_id}")
async def remove_order(order_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an order and its commission."""
    order = await db.get(Order, order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )

    await delete_order(db, order)
    return {"success": True}
