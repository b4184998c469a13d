"""
Payment ledger and pay-status classification for commissions.

A commission's payments are an ordered list of {amount, date} entries.
After every add / edit / remove the derived fields are rebuilt from the
whole list, never adjusted incrementally:

- amount_paid      = sum of payment amounts
- amount_remaining = max(commission_due - amount_paid, 0)
- pay_status       = classify_status(amount_paid, commission_due)
- paid_date        = latest dated payment (None if no payment has a date)

Older rows may have no ledger, only a scalar amount_paid / paid_date.
read_ledger() resolves that once into LegacyScalarLedger, which reads as a
single synthetic payment everywhere.
"""

import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Tuple, Union

from repbook.models.commission import PayStatus
from repbook.services.exceptions import CommissionValidationError, LedgerInvariantError
from repbook.services.money import ZERO, round2, to_date, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Payment:
    """One disbursement against a commission."""

    amount: Decimal
    date: Optional[datetime.date] = None

    @classmethod
    def from_json(cls, data: dict) -> "Payment":
        return cls(
            amount=to_decimal(data.get("amount")) or ZERO,
            date=to_date(data.get("date")),
        )

    def to_json(self) -> dict:
        return {
            "amount": str(self.amount),
            "date": self.date.isoformat() if self.date else None,
        }


# ── Ledger representations ────────────────────────────────


@dataclass(frozen=True)
class StructuredLedger:
    payments: Tuple[Payment, ...] = ()

    @property
    def entries(self) -> Tuple[Payment, ...]:
        return self.payments

    @property
    def total(self) -> Decimal:
        return sum((p.amount for p in self.payments), ZERO)


@dataclass(frozen=True)
class LegacyScalarLedger:
    amount: Decimal
    paid_date: Optional[datetime.date] = None

    @property
    def entries(self) -> Tuple[Payment, ...]:
        return (Payment(amount=self.amount, date=self.paid_date),)

    @property
    def total(self) -> Decimal:
        return self.amount


LedgerRepresentation = Union[StructuredLedger, LegacyScalarLedger]


def read_ledger(commission: Any) -> LedgerRepresentation:
    """Resolve a stored commission into its ledger representation."""
    raw = getattr(commission, "payments", None) or []
    if raw:
        return StructuredLedger(tuple(Payment.from_json(p) for p in raw))

    legacy_amount = to_decimal(getattr(commission, "amount_paid", None))
    if legacy_amount is not None and legacy_amount > 0:
        return LegacyScalarLedger(
            amount=legacy_amount,
            paid_date=to_date(getattr(commission, "paid_date", None)),
        )

    return StructuredLedger()


# ── Operations ────────────────────────────────────────────


@dataclass(frozen=True)
class AddPayment:
    amount: Any
    date: Any = None


@dataclass(frozen=True)
class EditPayment:
    index: int
    amount: Any
    date: Any = None


@dataclass(frozen=True)
class RemovePayment:
    index: int


PaymentOp = Union[AddPayment, EditPayment, RemovePayment]


@dataclass(frozen=True)
class LedgerState:
    """Every derived field of a commission, computed together."""

    commission_due: Decimal
    ledger: LedgerRepresentation
    amount_paid: Decimal
    amount_remaining: Decimal
    pay_status: PayStatus
    paid_date: Optional[datetime.date]


def classify_status(amount_paid: Decimal, commission_due: Decimal) -> PayStatus:
    """Map paid vs due to a pay status.

    Zero paid is always unpaid, even when nothing is due.
    Overpayment is paid.
    """
    if amount_paid <= 0:
        return PayStatus.UNPAID
    if amount_paid < commission_due:
        return PayStatus.PARTIAL
    return PayStatus.PAID


def derive_state(commission_due: Any, ledger: LedgerRepresentation) -> LedgerState:
    """Rebuild the derived fields from a due amount and a ledger."""
    due = to_decimal(commission_due)
    if due is None:
        raise CommissionValidationError("commission_due is required")

    paid = ledger.total
    remaining = max(due - paid, ZERO)

    if isinstance(ledger, LegacyScalarLedger):
        paid_date = ledger.paid_date
    else:
        dated = [p.date for p in ledger.payments if p.date is not None]
        paid_date = max(dated) if dated else None

    return LedgerState(
        commission_due=due,
        ledger=ledger,
        amount_paid=paid,
        amount_remaining=remaining,
        pay_status=classify_status(paid, due),
        paid_date=paid_date,
    )


def validate_payment_amount(value: Any) -> Decimal:
    amount = to_decimal(value)
    if amount is None:
        raise CommissionValidationError("Payment amount is required")
    if amount <= 0:
        raise CommissionValidationError(f"Payment amount must be positive, got {amount}")
    if round2(amount) != amount:
        raise CommissionValidationError(f"Payment amount has sub-cent precision: {amount}")
    return amount


def _check_index(index: int, size: int) -> None:
    if not isinstance(index, int) or index < 0 or index >= size:
        raise CommissionValidationError(
            f"No payment at position {index} (ledger has {size})"
        )


def apply_payment(commission: Any, op: PaymentOp) -> LedgerState:
    """Compute the state after one ledger operation.

    The commission itself is not touched; pass the result to apply_state.
    A legacy scalar ledger becomes a structured one holding the synthetic
    entry followed by the change.
    """
    entries = list(read_ledger(commission).entries)

    if isinstance(op, AddPayment):
        entries.append(Payment(validate_payment_amount(op.amount), to_date(op.date)))
    elif isinstance(op, EditPayment):
        _check_index(op.index, len(entries))
        entries[op.index] = Payment(validate_payment_amount(op.amount), to_date(op.date))
    elif isinstance(op, RemovePayment):
        _check_index(op.index, len(entries))
        del entries[op.index]
    else:
        raise TypeError(f"Unknown payment operation: {op!r}")

    return derive_state(commission.commission_due, StructuredLedger(tuple(entries)))


def apply_state(commission: Any, state: LedgerState) -> None:
    """Write every derived field of state onto the commission at once."""
    if isinstance(state.ledger, StructuredLedger):
        commission.payments = [p.to_json() for p in state.ledger.payments]
    else:
        commission.payments = []
    commission.commission_due = state.commission_due
    commission.amount_paid = state.amount_paid
    commission.amount_remaining = state.amount_remaining
    commission.pay_status = state.pay_status
    commission.paid_date = state.paid_date


def verify_ledger(commission: Any) -> LedgerState:
    """Check the stored derived fields against the ledger.

    Raises:
        LedgerInvariantError: if amount_paid, amount_remaining or
            pay_status differ from what the ledger implies
    """
    expected = derive_state(commission.commission_due, read_ledger(commission))
    stored_status = getattr(commission, "pay_status", None)
    if stored_status is not None:
        stored_status = PayStatus(stored_status)

    mismatches = []
    if to_decimal(commission.amount_paid) != expected.amount_paid:
        mismatches.append(f"amount_paid={commission.amount_paid} ledger={expected.amount_paid}")
    if to_decimal(commission.amount_remaining) != expected.amount_remaining:
        mismatches.append(
            f"amount_remaining={commission.amount_remaining} expected={expected.amount_remaining}"
        )
    if stored_status != expected.pay_status:
        mismatches.append(f"pay_status={stored_status} expected={expected.pay_status}")

    if mismatches:
        commission_id = getattr(commission, "id", None)
        logger.error(
            "Ledger invariant violated on commission %s: %s",
            commission_id, "; ".join(mismatches),
        )
        raise LedgerInvariantError(
            f"Commission {commission_id} is inconsistent with its ledger: "
            + "; ".join(mismatches),
            commission_id=commission_id,
        )

    return expected
