"""Reporting API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.api.errors import http_error
from repbook.config import Settings, get_settings
from repbook.db import get_db
from repbook.schemas.report import (
    CommissionRowResponse,
    PaymentReportResponse,
    SummaryResponse,
)
from repbook.services.exceptions import CommissionError
from repbook.services.report_data import load_report_inputs
from repbook.services.reporting import (
    ReportFilter,
    check_payment_consistency,
    commission_rows,
    list_payments,
    summarize,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


def _report_filter(
    company_id: Optional[int],
    season_ids: Optional[List[int]],
    settings: Settings,
) -> ReportFilter:
    return ReportFilter(
        company_id=company_id,
        season_ids=frozenset(season_ids) if season_ids else None,
        excluded_stages=frozenset(settings.excluded_stages),
    )


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    company_id: Optional[int] = Query(None),
    season_id: Optional[List[int]] = Query(None),
):
    """Total sales, commission earned / paid / outstanding."""
    inputs = await load_report_inputs(db, company_id)
    criteria = _report_filter(company_id, season_id, settings)
    return summarize(inputs.orders, inputs.commissions, inputs.companies, criteria)


@router.get("/payments", response_model=PaymentReportResponse)
async def get_payments(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    company_id: Optional[int] = Query(None),
    season_id: Optional[List[int]] = Query(None),
    search: Optional[str] = Query(None, max_length=255),
):
    """Payments grouped by date, unscheduled payments last."""
    inputs = await load_report_inputs(db, company_id)
    criteria = _report_filter(company_id, season_id, settings)

    report = list_payments(
        inputs.orders,
        inputs.commissions,
        criteria,
        account_names=inputs.account_names,
        search=search,
    )

    if not search:
        summary = summarize(inputs.orders, inputs.commissions, inputs.companies, criteria)
        try:
            check_payment_consistency(summary, report)
        except CommissionError as e:
            raise http_error(e) from e

    return report


@router.get("/commissions", response_model=List[CommissionRowResponse])
async def get_commission_rows(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    company_id: Optional[int] = Query(None),
    season_id: Optional[List[int]] = Query(None),
):
    """Per-order commission listing with each order's own rate and due."""
    inputs = await load_report_inputs(db, company_id)
    criteria = _report_filter(company_id, season_id, settings)
    return commission_rows(
        inputs.orders,
        inputs.commissions,
        inputs.companies,
        criteria,
        account_names=inputs.account_names,
    )
