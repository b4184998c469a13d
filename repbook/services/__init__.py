"""Business logic services."""

from repbook.services.commission import derive_commission_due, is_commissionable
from repbook.services.exceptions import (
    CommissionError,
    CommissionValidationError,
    LedgerInvariantError,
)
from repbook.services.ledger import apply_payment, classify_status, read_ledger
from repbook.services.rates import resolve_rate
from repbook.services.reporting import ReportFilter, list_payments, summarize

__all__ = [
    "CommissionError",
    "CommissionValidationError",
    "LedgerInvariantError",
    "ReportFilter",
    "apply_payment",
    "classify_status",
    "derive_commission_due",
    "is_commissionable",
    "list_payments",
    "read_ledger",
    "resolve_rate",
    "summarize",
]
