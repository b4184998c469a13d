"""
Domain exceptions for commission and payment handling.
"""


class CommissionError(Exception):
    """Base class for commission domain errors."""


class CommissionValidationError(CommissionError, ValueError):
    """Input rejected before anything was written."""


class LedgerInvariantError(CommissionError):
    """Stored derived fields disagree with the payment ledger.

    This means some code path wrote a commission without going through the
    ledger. The operation that found it must fail.
    """

    def __init__(self, message: str, commission_id=None):
        super().__init__(message)
        self.commission_id = commission_id
