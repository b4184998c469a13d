"""
Commission reporting and aggregation.

Everything here works on collections that were already loaded; no I/O.

Two views of "earned" commission exist on purpose:
- summarize() applies each company's rate to its total sales, then rounds
  once per company (dashboard numbers)
- commission_rows() lists each order with its own stored commission_due
  and effective rate (per-order reports)

They can differ by a few cents across many orders. Each is internally
consistent.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from repbook.models.commission import PayStatus
from repbook.services.exceptions import LedgerInvariantError
from repbook.services.ledger import read_ledger
from repbook.services.money import ZERO, round2, to_decimal
from repbook.services.rates import company_rate, resolve_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportFilter:
    """Which orders a report covers.

    company_id / season_ids of None mean "all". Orders in an excluded stage
    are always left out.
    """

    company_id: Optional[int] = None
    season_ids: Optional[FrozenSet[int]] = None
    excluded_stages: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class CommissionSummary:
    total_sales: Decimal
    commission_earned: Decimal
    commission_paid: Decimal
    commission_outstanding: Decimal
    order_count: int


@dataclass(frozen=True)
class PaymentLine:
    commission_id: Optional[int]
    order_id: int
    company_id: Optional[int]
    season_id: Optional[int]
    account_id: Optional[int]
    account_name: str
    order_number: Optional[str]
    date: Optional[date]
    amount: Decimal


@dataclass(frozen=True)
class PaymentGroup:
    """Payments sharing a date. date is None for the unscheduled group."""

    date: Optional[date]
    unscheduled: bool
    lines: Tuple[PaymentLine, ...]
    subtotal: Decimal


@dataclass(frozen=True)
class PaymentReport:
    groups: Tuple[PaymentGroup, ...]
    total: Decimal
    count: int


@dataclass(frozen=True)
class CommissionRow:
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


def filter_orders(orders: Iterable[Any], criteria: ReportFilter) -> List[Any]:
    """Orders matching the brand / season filter, excluded stages removed."""
    selected = []
    for order in orders:
        if order.stage in criteria.excluded_stages:
            continue
        if criteria.company_id is not None and order.company_id != criteria.company_id:
            continue
        if criteria.season_ids is not None and order.season_id not in criteria.season_ids:
            continue
        selected.append(order)
    return selected


def _index_companies(companies: Iterable[Any]) -> Dict[int, Any]:
    if isinstance(companies, Mapping):
        return dict(companies)
    return {c.id: c for c in companies}


def _commissions_for(
    orders: Iterable[Any],
    commissions: Iterable[Any],
    criteria: ReportFilter,
) -> List[Tuple[Any, Any]]:
    """Pair commissions with their filtered orders.

    A commission whose order no longer exists is logged and skipped.
    """
    all_orders = {o.id: o for o in orders}
    selected = {o.id: o for o in filter_orders(all_orders.values(), criteria)}

    pairs = []
    for commission in commissions:
        if commission.order_id not in all_orders:
            logger.warning(
                "Skipping orphaned commission %s: order %s not found",
                getattr(commission, "id", None), commission.order_id,
            )
            continue
        order = selected.get(commission.order_id)
        if order is not None:
            pairs.append((order, commission))
    return pairs


def summarize(
    orders: Iterable[Any],
    commissions: Iterable[Any],
    companies: Iterable[Any],
    criteria: ReportFilter,
) -> CommissionSummary:
    """Roll up sales and commission totals for the filtered orders."""
    orders = list(orders)
    companies_by_id = _index_companies(companies)
    selected = filter_orders(orders, criteria)

    sales_by_company: Dict[Any, Decimal] = defaultdict(lambda: ZERO)
    for order in selected:
        sales_by_company[order.company_id] += to_decimal(order.total) or ZERO

    total_sales = sum(sales_by_company.values(), ZERO)
    earned = sum(
        (
            round2(sales * company_rate(companies_by_id.get(company_id)) / Decimal("100"))
            for company_id, sales in sales_by_company.items()
        ),
        ZERO,
    )

    paid = sum(
        (read_ledger(c).total for _, c in _commissions_for(orders, commissions, criteria)),
        ZERO,
    )

    return CommissionSummary(
        total_sales=total_sales,
        commission_earned=earned,
        commission_paid=paid,
        commission_outstanding=max(earned - paid, ZERO),
        order_count=len(selected),
    )


def list_payments(
    orders: Iterable[Any],
    commissions: Iterable[Any],
    criteria: ReportFilter,
    account_names: Optional[Mapping[int, str]] = None,
    search: Optional[str] = None,
) -> PaymentReport:
    """Every payment on the filtered commissions, grouped by date.

    Dated groups come newest first; payments without a date form one
    unscheduled group placed last. A legacy scalar payment is listed as a
    single entry.
    """
    account_names = account_names or {}
    query = search.strip().lower() if search else ""

    lines = []
    for order, commission in _commissions_for(orders, commissions, criteria):
        account_name = account_names.get(order.account_id, "Unknown")
        if query and query not in account_name.lower():
            continue
        for payment in read_ledger(commission).entries:
            lines.append(PaymentLine(
                commission_id=getattr(commission, "id", None),
                order_id=order.id,
                company_id=order.company_id,
                season_id=order.season_id,
                account_id=order.account_id,
                account_name=account_name,
                order_number=getattr(order, "order_number", None),
                date=payment.date,
                amount=payment.amount,
            ))

    by_date: Dict[Optional[date], List[PaymentLine]] = defaultdict(list)
    for line in lines:
        by_date[line.date].append(line)

    ordered_dates = sorted((d for d in by_date if d is not None), reverse=True)
    if None in by_date:
        ordered_dates.append(None)

    groups = tuple(
        PaymentGroup(
            date=d,
            unscheduled=d is None,
            lines=tuple(sorted(by_date[d], key=lambda line: line.account_name)),
            subtotal=sum((line.amount for line in by_date[d]), ZERO),
        )
        for d in ordered_dates
    )

    return PaymentReport(
        groups=groups,
        total=sum((g.subtotal for g in groups), ZERO),
        count=len(lines),
    )


def check_payment_consistency(summary: CommissionSummary, report: PaymentReport) -> None:
    """The payment listing must add up to the summary's paid total.

    Only meaningful for an unsearched listing over the same filter.
    """
    if report.total != summary.commission_paid:
        logger.error(
            "Payment report total %s differs from commission paid %s",
            report.total, summary.commission_paid,
        )
        raise LedgerInvariantError(
            f"Payment groups sum to {report.total} but commission paid is "
            f"{summary.commission_paid}"
        )


def commission_rows(
    orders: Iterable[Any],
    commissions: Iterable[Any],
    companies: Iterable[Any],
    criteria: ReportFilter,
    account_names: Optional[Mapping[int, str]] = None,
) -> List[CommissionRow]:
    """Per-order commission listing, largest remaining balance first."""
    account_names = account_names or {}
    companies_by_id = _index_companies(companies)

    rows = []
    for order, commission in _commissions_for(orders, commissions, criteria):
        company = companies_by_id.get(order.company_id)
        ledger = read_ledger(commission)
        rows.append(CommissionRow(
            commission_id=getattr(commission, "id", None),
            order_id=order.id,
            company_id=order.company_id,
            company_name=company.name if company else "Unknown",
            account_name=account_names.get(order.account_id, "Unknown"),
            order_number=getattr(order, "order_number", None),
            order_total=to_decimal(order.total),
            rate=resolve_rate(order, company),
            commission_due=to_decimal(commission.commission_due),
            amount_paid=ledger.total,
            amount_remaining=to_decimal(commission.amount_remaining),
            pay_status=PayStatus(commission.pay_status),
        ))

    rows.sort(key=lambda r: r.amount_remaining, reverse=True)
    return rows
