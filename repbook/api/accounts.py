"""Account API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.db import get_db
from repbook.models import Account, Order, Todo
from repbook.schemas.account import AccountCreate, AccountResponse, AccountUpdate

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.get("", response_model=List[AccountResponse])
async def list_accounts(
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None),
    region: Optional[str] = Query(None),
):
    """List accounts, optionally filtered by name or region."""
    query = select(Account)

    if search:
        query = query.where(Account.name.ilike(f"%{search}%"))

    if region:
        query = query.where(Account.region == region)

    result = await db.execute(query.order_by(Account.name))
    return result.scalars().all()


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(data: AccountCreate, db: AsyncSession = Depends(get_db)):
    account = Account(**data.model_dump())
    db.add(account)
    await db.flush()
    return account


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: int,
    data: AccountUpdate,
    db: AsyncSession = Depends(get_db),
):
    account = await db.get(Account, account_id)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(account, field, value)

    await db.flush()
    return account


@router.delete("/{account_id}")
async def delete_account(account_id: int, db: AsyncSession = Depends(get_db)):
    """Delete an account. Fails if it still has orders or todos."""
    account = await db.get(Account, account_id)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )

    linked = await db.execute(
        select(Order.id).where(Order.account_id == account_id).limit(1)
    )
    if linked.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Account has orders. Delete them first.",
        )

    todo = await db.execute(
        select(Todo.id).where(Todo.account_id == account_id).limit(1)
    )
    if todo.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Account has todos. Reassign or delete them first.",
        )

    await db.delete(account)
    await db.flush()
    return {"success": True}
