"""
Money helpers.

Every monetary value that is rounded anywhere in the application goes
through round2, so summaries, listings and stored rows all agree on how a
half cent is resolved.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from repbook.services.exceptions import CommissionValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce int/str/float/Decimal to Decimal. None stays None.

    Floats go through str() so 36178.2 becomes Decimal("36178.2") rather
    than its binary expansion.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise CommissionValidationError(f"Not a monetary value: {value!r}")
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise CommissionValidationError(f"Not a monetary value: {value!r}")


def round2(value: Any) -> Decimal:
    """Round to cents, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_date(value: Any) -> Optional[date]:
    """Coerce an ISO string or date to a date. Empty values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise CommissionValidationError(f"Not a calendar date: {value!r}")
