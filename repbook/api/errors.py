"""Mapping of domain errors to HTTP errors."""

from fastapi import HTTPException, status

from repbook.services.exceptions import (
    CommissionError,
    CommissionValidationError,
    LedgerInvariantError,
)


def http_error(exc: CommissionError) -> HTTPException:
    """Translate a commission domain error into an HTTPException."""
    if isinstance(exc, CommissionValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    if isinstance(exc, LedgerInvariantError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Commission data is inconsistent: {exc}",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )
