"""
Commission derivation.

commission_due = round2(order.total * rate / 100), where rate comes from
resolve_rate(). This module is the only place that computes a due amount.
"""

import logging
from decimal import Decimal
from typing import Any, Collection, Optional

from repbook.services.exceptions import CommissionValidationError
from repbook.services.ledger import LedgerState, StructuredLedger, derive_state, read_ledger
from repbook.services.money import round2, to_decimal
from repbook.services.rates import resolve_rate, validate_percent

logger = logging.getLogger(__name__)


def validate_total(value: Any) -> Decimal:
    total = to_decimal(value)
    if total is None:
        raise CommissionValidationError("Order total is required")
    if total < 0:
        raise CommissionValidationError(f"Order total cannot be negative, got {total}")
    if round2(total) != total:
        raise CommissionValidationError(f"Order total has sub-cent precision: {total}")
    return total


def validate_stage(stage: Optional[str], pipeline_stages: Collection[str] = ()) -> str:
    """Reject a missing stage, or one outside the known pipeline when given."""
    if not stage or not stage.strip():
        raise CommissionValidationError("Pipeline stage is required")
    if pipeline_stages and stage not in pipeline_stages:
        raise CommissionValidationError(f"Unknown pipeline stage: {stage!r}")
    return stage


def validate_order_fields(
    total: Any,
    stage: Optional[str],
    commission_override: Any = None,
    pipeline_stages: Collection[str] = (),
) -> None:
    """Validate the order fields that feed commission derivation."""
    validate_total(total)
    validate_stage(stage, pipeline_stages)
    validate_percent(commission_override, "Commission override")


def is_commissionable(stage: Optional[str], excluded_stages: Collection[str]) -> bool:
    """A stage earns commission unless it is in the excluded set."""
    return stage not in excluded_stages


def derive_commission_due(order: Any, rate: Any) -> Decimal:
    """Compute the commission due on an order at the given percentage.

    Raises:
        CommissionValidationError: if the total is missing or negative, or
            the rate is outside [0, 100]
    """
    total = validate_total(getattr(order, "total", None))
    percent = validate_percent(rate, "Commission rate")
    if percent is None:
        raise CommissionValidationError("Commission rate is required")
    return round2(total * percent / Decimal("100"))


def new_commission_state(order: Any, company: Any) -> LedgerState:
    """State of a freshly created commission: nothing paid yet."""
    due = derive_commission_due(order, resolve_rate(order, company))
    return derive_state(due, StructuredLedger())


def recompute_due(commission: Any, order: Any, company: Any) -> LedgerState:
    """Re-derive commission_due after an order or rate edit.

    The ledger is kept as is; only the due amount and what depends on it
    (remaining, status) change.
    """
    due = derive_commission_due(order, resolve_rate(order, company))
    state = derive_state(due, read_ledger(commission))
    if state.commission_due != to_decimal(commission.commission_due):
        logger.info(
            "Commission %s for order %s: due %s -> %s",
            getattr(commission, "id", None), getattr(order, "id", None),
            commission.commission_due, state.commission_due,
        )
    return state
