"""
Loading report inputs from the database.

The reporting module itself does no I/O; this is the one place that
fetches the orders, commissions, companies and account names it needs.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repbook.models import Account, Commission, Company, Order


@dataclass
class ReportInputs:
    orders: List[Order] = field(default_factory=list)
    commissions: List[Commission] = field(default_factory=list)
    companies: List[Company] = field(default_factory=list)
    account_names: Dict[int, str] = field(default_factory=dict)


async def load_report_inputs(
    db: AsyncSession,
    company_id: Optional[int] = None,
) -> ReportInputs:
    """
    Load what a report over one company (or all of them) needs.

    With a company filter, commissions are joined to that company's
    orders. Without one, every commission is loaded so orphans can be
    detected and logged by the reporting layer.
    """
    order_query = select(Order)
    commission_query = select(Commission)
    company_query = select(Company).order_by(Company.sort_order, Company.id)

    if company_id is not None:
        order_query = order_query.where(Order.company_id == company_id)
        commission_query = (
            commission_query
            .join(Order, Order.id == Commission.order_id)
            .where(Order.company_id == company_id)
        )
        company_query = company_query.where(Company.id == company_id)

    orders = (await db.execute(order_query)).scalars().all()
    commissions = (await db.execute(commission_query)).scalars().all()
    companies = (await db.execute(company_query)).scalars().all()

    account_ids = {o.account_id for o in orders}
    account_names = {}
    if account_ids:
        rows = await db.execute(
            select(Account.id, Account.name).where(Account.id.in_(account_ids))
        )
        account_names = {row.id: row.name for row in rows}

    return ReportInputs(
        orders=list(orders),
        commissions=list(commissions),
        companies=list(companies),
        account_names=account_names,
    )
