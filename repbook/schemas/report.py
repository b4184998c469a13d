"""Report schemas."""

from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from repbook.models.commission import PayStatus


class SummaryResponse(BaseModel):
    """Dashboard totals for a brand / season selection."""

    total_sales: Decimal
    commission_earned: Decimal
    commission_paid: Decimal
    commission_outstanding: Decimal
    order_count: int

    model_config = {"from_attributes": True}


class PaymentLineResponse(BaseModel):
    commission_id: Optional[int]
    order_id: int
    company_id: Optional[int]
    season_id: Optional[int]
    account_id: Optional[int]
    account_name: str
    order_number: Optional[str]
    date: Optional[date_type]
    amount: Decimal

    model_config = {"from_attributes": True}


class PaymentGroupResponse(BaseModel):
    date: Optional[date_type]
    unscheduled: bool
    subtotal: Decimal
    lines: List[PaymentLineResponse]

    model_config = {"from_attributes": True}


class PaymentReportResponse(BaseModel):
    groups: List[PaymentGroupResponse]
    total: Decimal
    count: int

    model_config = {"from_attributes": True}


class CommissionRowResponse(BaseModel):
    commission_id: Optional[int]
    order_id: int
    company_id: Optional[int]
    company_name: str
    account_name: str
    order_number: Optional[str]
    order_total: Decimal
    rate: Decimal
    commission_due: Decimal
    amount_paid: Decimal
    amount_remaining: Decimal
    pay_status: PayStatus

    model_config = {"from_attributes": True}
