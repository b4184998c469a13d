"""
Effective commission rate resolution.

Rules:
- An order-level override wins, including an explicit 0
- Otherwise the company's default percentage
- No company, or no percentage on it, means 0
"""

from decimal import Decimal
from typing import Any, Optional

from repbook.services.exceptions import CommissionValidationError
from repbook.services.money import to_decimal

MIN_PERCENT = Decimal("0")
MAX_PERCENT = Decimal("100")


def validate_percent(value: Any, field: str = "commission percentage") -> Optional[Decimal]:
    """Return value as a Decimal, rejecting anything outside [0, 100]."""
    percent = to_decimal(value)
    if percent is None:
        return None
    if percent < MIN_PERCENT or percent > MAX_PERCENT:
        raise CommissionValidationError(
            f"{field} must be between 0 and 100, got {percent}"
        )
    return percent


def company_rate(company: Any) -> Decimal:
    """The company's default percentage, 0 when unknown."""
    if company is None:
        return Decimal("0")
    percent = getattr(company, "commission_percent", None)
    if percent is None:
        return Decimal("0")
    return to_decimal(percent)


def resolve_rate(order: Any, company: Any) -> Decimal:
    """Return the percentage that applies to this order.

    Args:
        order: Anything with a ``commission_override`` attribute
        company: The order's company, or None if it cannot be found

    Returns:
        Percentage as a Decimal (e.g. 5 = 5%)
    """
    override = getattr(order, "commission_override", None)
    if override is not None:
        return to_decimal(override)
    return company_rate(company)
