"""Commission and payment schemas."""

from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from repbook.models.commission import Commission, PayStatus
from repbook.services.ledger import read_ledger


class PaymentRequest(BaseModel):
    """Add or replace one ledger entry."""

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    date: Optional[date_type] = None


class BulkPaymentItem(BaseModel):
    commission_id: int
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class BulkPaymentRequest(BaseModel):
    """Payments against several commissions, all dated the same day."""

    date: Optional[date_type] = None
    payments: List[BulkPaymentItem] = Field(..., min_length=1)


class PaymentEntry(BaseModel):
    amount: Decimal
    date: Optional[date_type]


class CommissionResponse(BaseModel):
    """Commission with its ledger.

    A legacy scalar payment is shown as a single ledger entry.
    """

    id: int
    order_id: int
    commission_due: Decimal
    payments: List[PaymentEntry]
    amount_paid: Decimal
    amount_remaining: Decimal
    paid_date: Optional[date_type]
    pay_status: PayStatus

    @classmethod
    def from_commission(cls, commission: Commission) -> "CommissionResponse":
        return cls(
            id=commission.id,
            order_id=commission.order_id,
            commission_due=commission.commission_due,
            payments=[
                PaymentEntry(amount=p.amount, date=p.date)
                for p in read_ledger(commission).entries
            ],
            amount_paid=commission.amount_paid,
            amount_remaining=commission.amount_remaining,
            paid_date=commission.paid_date,
            pay_status=commission.pay_status,
        )
