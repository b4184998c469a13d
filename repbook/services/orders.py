"""
Order workflows that keep the linked commission in step.

These functions flush but never commit. The caller's session scope
(get_db / get_db_context) commits once, so an order edit and its
commission recompute land in the same transaction.

Policy when an order leaves a commissionable stage: its commission row
is deleted, payments included. Moving it back creates a fresh one.
"""

import logging
from typing import Any, Collection, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.models import Commission, Company, Order
from repbook.services.commission import (
    is_commissionable,
    new_commission_state,
    recompute_due,
    validate_order_fields,
)
from repbook.services.exceptions import CommissionValidationError
from repbook.services.ledger import apply_state, verify_ledger
from repbook.services.rates import validate_percent

logger = logging.getLogger(__name__)


async def get_commission_for_order(
    db: AsyncSession,
    order_id: int,
    lock: bool = False,
) -> Optional[Commission]:
    """Fetch the commission row of an order, optionally row-locked."""
    query = select(Commission).where(Commission.order_id == order_id)
    if lock:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def _get_company(db: AsyncSession, company_id: Any) -> Company:
    company = await db.get(Company, company_id) if company_id is not None else None
    if company is None:
        raise CommissionValidationError(f"Unknown company: {company_id}")
    return company


async def _create_commission(db: AsyncSession, order: Order, company: Company) -> Commission:
    commission = Commission(order_id=order.id)
    apply_state(commission, new_commission_state(order, company))
    db.add(commission)
    await db.flush()

    logger.info(
        "Commission created for order %s: due %s at %s%%",
        order.id, commission.commission_due,
        order.commission_override if order.commission_override is not None
        else company.commission_percent,
    )
    return commission


async def create_order(
    db: AsyncSession,
    data: Dict[str, Any],
    excluded_stages: Collection[str],
    pipeline_stages: Collection[str] = (),
) -> Order:
    """
    Insert an order and, in a commissionable stage, its commission.

    Args:
        db: Database session
        data: Order column values
        excluded_stages: Stages that earn no commission
        pipeline_stages: Known stages, empty to accept any

    Returns:
        The flushed Order

    Raises:
        CommissionValidationError: invalid total, stage, override or company
    """
    validate_order_fields(
        data.get("total"),
        data.get("stage"),
        data.get("commission_override"),
        pipeline_stages,
    )
    company = await _get_company(db, data.get("company_id"))

    order = Order(**data)
    db.add(order)
    await db.flush()

    if is_commissionable(order.stage, excluded_stages):
        await _create_commission(db, order, company)

    return order


async def update_order(
    db: AsyncSession,
    order: Order,
    changes: Dict[str, Any],
    excluded_stages: Collection[str],
    pipeline_stages: Collection[str] = (),
) -> Optional[Commission]:
    """
    Apply edits to an order and bring its commission in line.

    Everything is validated before the first attribute is set, so a
    rejected edit leaves the order untouched. A commission that will be
    recomputed is checked against its ledger first; a drifted row raises
    LedgerInvariantError instead of being rewritten.

    Returns:
        The order's commission after the edit, or None if it has none
    """
    validate_order_fields(
        changes.get("total", order.total),
        changes.get("stage", order.stage),
        changes.get("commission_override", order.commission_override),
        pipeline_stages,
    )
    company = await _get_company(db, changes.get("company_id", order.company_id))

    commission = await get_commission_for_order(db, order.id, lock=True)
    stays_commissionable = is_commissionable(
        changes.get("stage", order.stage), excluded_stages
    )
    if commission is not None and stays_commissionable:
        verify_ledger(commission)

    for field, value in changes.items():
        setattr(order, field, value)

    if not stays_commissionable:
        if commission is not None:
            commission_id = commission.id
            await db.delete(commission)
            logger.info(
                "Order %s moved to excluded stage %r; commission %s deleted",
                order.id, order.stage, commission_id,
            )
        await db.flush()
        return None

    if commission is None:
        await db.flush()
        return await _create_commission(db, order, company)

    apply_state(commission, recompute_due(commission, order, company))
    await db.flush()
    return commission


async def delete_order(db: AsyncSession, order: Order) -> None:
    """Delete an order, removing its commission first (no cascade)."""
    commission = await get_commission_for_order(db, order.id, lock=True)
    if commission is not None:
        commission_id = commission.id
        await db.delete(commission)
        await db.flush()
        logger.info("Commission %s deleted with order %s", commission_id, order.id)

    await db.delete(order)
    await db.flush()


async def update_company(
    db: AsyncSession,
    company: Company,
    changes: Dict[str, Any],
) -> int:
    """
    Apply edits to a company; a rate change recomputes its commissions.

    Orders with their own override are unaffected by the company rate.
    Every affected commission is checked against its ledger before the
    company is touched.

    Returns:
        Number of commissions recomputed
    """
    if "commission_percent" in changes:
        if changes["commission_percent"] is None:
            raise CommissionValidationError("Company commission percentage is required")
        validate_percent(changes["commission_percent"], "Company commission percentage")

    rate_changed = (
        "commission_percent" in changes
        and changes["commission_percent"] != company.commission_percent
    )

    affected = []
    if rate_changed:
        result = await db.execute(
            select(Order, Commission)
            .join(Commission, Commission.order_id == Order.id)
            .where(
                Order.company_id == company.id,
                Order.commission_override.is_(None),
            )
            .with_for_update()
        )
        affected = result.all()
        for _, commission in affected:
            verify_ledger(commission)

    for field, value in changes.items():
        setattr(company, field, value)

    if not rate_changed:
        await db.flush()
        return 0

    count = 0
    for order, commission in affected:
        apply_state(commission, recompute_due(commission, order, company))
        count += 1

    await db.flush()
    logger.info(
        "Company %s rate set to %s%%; %d commissions recomputed",
        company.id, company.commission_percent, count,
    )
    return count
