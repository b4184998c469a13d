"""
Payment ledger workflows on stored commissions.

Each call verifies the stored row against its ledger, computes the new
state in full, then writes every derived field together. Nothing is
written when validation fails.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.models import Commission
from repbook.services.exceptions import CommissionValidationError
from repbook.services.ledger import (
    AddPayment,
    EditPayment,
    LedgerState,
    LegacyScalarLedger,
    PaymentOp,
    RemovePayment,
    apply_payment,
    apply_state,
    read_ledger,
    validate_payment_amount,
    verify_ledger,
)

logger = logging.getLogger(__name__)


async def get_commission(
    db: AsyncSession,
    commission_id: int,
    lock: bool = False,
) -> Optional[Commission]:
    """Fetch a commission by id, optionally row-locked for a ledger edit."""
    query = select(Commission).where(Commission.id == commission_id)
    if lock:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def apply_ledger_operation(
    db: AsyncSession,
    commission: Commission,
    op: PaymentOp,
) -> LedgerState:
    """Run one ledger operation against a stored commission."""
    verify_ledger(commission)
    was_legacy = isinstance(read_ledger(commission), LegacyScalarLedger)

    state = apply_payment(commission, op)
    apply_state(commission, state)
    await db.flush()

    if was_legacy:
        logger.info("Commission %s: legacy scalar payment moved into ledger", commission.id)
    logger.info(
        "Commission %s: %s -> paid %s, remaining %s, %s",
        commission.id, type(op).__name__,
        state.amount_paid, state.amount_remaining, state.pay_status.value,
    )
    return state


async def add_payment(
    db: AsyncSession,
    commission: Commission,
    amount: Any,
    paid_on: Any = None,
) -> LedgerState:
    return await apply_ledger_operation(db, commission, AddPayment(amount, paid_on))


async def edit_payment(
    db: AsyncSession,
    commission: Commission,
    index: int,
    amount: Any,
    paid_on: Any = None,
) -> LedgerState:
    return await apply_ledger_operation(db, commission, EditPayment(index, amount, paid_on))


async def remove_payment(
    db: AsyncSession,
    commission: Commission,
    index: int,
) -> LedgerState:
    return await apply_ledger_operation(db, commission, RemovePayment(index))


async def add_payments_bulk(
    db: AsyncSession,
    entries: Sequence[Tuple[int, Any]],
    paid_on: Any = None,
) -> List[Commission]:
    """
    Record several payments sharing one date.

    Args:
        db: Database session
        entries: (commission_id, amount) pairs, applied in order. The same
            commission may appear more than once.
        paid_on: Date given to every payment

    Returns:
        The touched commissions, in order of first appearance

    Raises:
        CommissionValidationError: empty batch, unknown commission or bad
            amount; nothing is written
        LedgerInvariantError: a touched commission disagrees with its ledger
    """
    if not entries:
        raise CommissionValidationError("No payments to record")

    for _, amount in entries:
        validate_payment_amount(amount)

    ids = list(dict.fromkeys(commission_id for commission_id, _ in entries))
    result = await db.execute(
        select(Commission).where(Commission.id.in_(ids)).with_for_update()
    )
    by_id: Dict[int, Commission] = {c.id: c for c in result.scalars().all()}

    missing = [commission_id for commission_id in ids if commission_id not in by_id]
    if missing:
        raise CommissionValidationError(
            f"Unknown commission(s): {', '.join(str(m) for m in missing)}"
        )

    for commission_id in ids:
        verify_ledger(by_id[commission_id])

    for commission_id, amount in entries:
        await apply_ledger_operation(db, by_id[commission_id], AddPayment(amount, paid_on))

    logger.info("Bulk payment: %d entries across %d commissions", len(entries), len(ids))
    return [by_id[commission_id] for commission_id in ids]
