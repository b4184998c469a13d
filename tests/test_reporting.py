"""
Tests for commission reporting and aggregation.

Covers:
- summarize() totals, per-company rounding and filters
- Orphaned commissions are skipped, not raised
- Payment listing grouped by date, unscheduled last
- Payment listing total matches commission paid
- Per-order rows vs company-level earned stay within rounding bounds
"""

import logging
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from repbook.models.commission import PayStatus
from repbook.services.commission import new_commission_state
from repbook.services.exceptions import LedgerInvariantError
from repbook.services.ledger import AddPayment, apply_payment, apply_state
from repbook.services.reporting import (
    ReportFilter,
    check_payment_consistency,
    commission_rows,
    filter_orders,
    list_payments,
    summarize,
)

EXCLUDED = frozenset({"Cancelled", "Short Shipped", "Closed - Lost"})

ACME = SimpleNamespace(id=1, name="Acme", commission_percent=Decimal("5"))
GLOBEX = SimpleNamespace(id=2, name="Globex", commission_percent=Decimal("8"))
COMPANIES = [ACME, GLOBEX]
ACCOUNTS = {10: "Alpine Outfitters", 11: "Bayside Rentals"}


def _order(id, company, total, stage="Closed - Won", season_id=100, account_id=10, override=None):
    return SimpleNamespace(
        id=id,
        company_id=company.id,
        season_id=season_id,
        account_id=account_id,
        order_number=f"SO-{id}",
        stage=stage,
        total=Decimal(total),
        commission_override=None if override is None else Decimal(override),
    )


def _commission(id, order, company, payments=()):
    commission = SimpleNamespace(id=id, order_id=order.id, payments=[])
    apply_state(commission, new_commission_state(order, company))
    for amount, paid_on in payments:
        apply_state(commission, apply_payment(commission, AddPayment(amount, paid_on)))
    return commission


@pytest.fixture
def book():
    """Three Acme orders, one Globex order, one cancelled Acme order."""
    o1 = _order(1, ACME, "36178.20")
    o2 = _order(2, ACME, "1000.00", account_id=11)
    o3 = _order(3, ACME, "500.00", season_id=200, override="10")
    o4 = _order(4, GLOBEX, "2500.00")
    o5 = _order(5, ACME, "9999.00", stage="Cancelled")

    commissions = [
        _commission(1, o1, ACME, [("900.00", "2025-02-01"), ("100.00", None)]),
        _commission(2, o2, ACME, [("25.00", "2025-02-01")]),
        _commission(3, o3, ACME, [("50.00", "2025-03-15")]),
        _commission(4, o4, GLOBEX),
    ]
    return SimpleNamespace(orders=[o1, o2, o3, o4, o5], commissions=commissions)


# ── filter_orders ─────────────────────────────────────────


class TestFilterOrders:
    def test_excluded_stage_removed(self, book):
        selected = filter_orders(book.orders, ReportFilter(excluded_stages=EXCLUDED))
        assert [o.id for o in selected] == [1, 2, 3, 4]

    def test_company_filter(self, book):
        criteria = ReportFilter(company_id=2, excluded_stages=EXCLUDED)
        assert [o.id for o in filter_orders(book.orders, criteria)] == [4]

    def test_season_filter(self, book):
        criteria = ReportFilter(season_ids=frozenset({200}), excluded_stages=EXCLUDED)
        assert [o.id for o in filter_orders(book.orders, criteria)] == [3]

    def test_empty_season_set_selects_nothing(self, book):
        criteria = ReportFilter(season_ids=frozenset(), excluded_stages=EXCLUDED)
        assert filter_orders(book.orders, criteria) == []


# ── summarize ─────────────────────────────────────────────


class TestSummarize:
    def test_totals(self, book):
        summary = summarize(
            book.orders, book.commissions, COMPANIES, ReportFilter(excluded_stages=EXCLUDED)
        )
        # Acme sales 37678.20 at 5% = 1883.91; Globex 2500 at 8% = 200.00
        assert summary.total_sales == Decimal("40178.20")
        assert summary.commission_earned == Decimal("2083.91")
        assert summary.commission_paid == Decimal("1075.00")
        assert summary.commission_outstanding == Decimal("1008.91")
        assert summary.order_count == 4

    def test_earned_uses_company_rate_not_override(self, book):
        """Order 3 carries a 10% override; the dashboard figure uses 5%."""
        criteria = ReportFilter(season_ids=frozenset({200}), excluded_stages=EXCLUDED)
        summary = summarize(book.orders, book.commissions, COMPANIES, criteria)
        assert summary.commission_earned == Decimal("25.00")
        assert summary.commission_paid == Decimal("50.00")
        assert summary.commission_outstanding == Decimal("0")

    def test_company_filter(self, book):
        criteria = ReportFilter(company_id=2, excluded_stages=EXCLUDED)
        summary = summarize(book.orders, book.commissions, COMPANIES, criteria)
        assert summary.total_sales == Decimal("2500.00")
        assert summary.commission_earned == Decimal("200.00")
        assert summary.commission_paid == Decimal("0")

    def test_excluded_stage_commission_not_counted(self, book):
        stray = _commission(99, book.orders[4], ACME, [("10.00", "2025-01-01")])
        criteria = ReportFilter(excluded_stages=EXCLUDED)
        summary = summarize(book.orders, book.commissions + [stray], COMPANIES, criteria)
        assert summary.commission_paid == Decimal("1075.00")

    def test_companies_as_mapping(self, book):
        criteria = ReportFilter(excluded_stages=EXCLUDED)
        by_list = summarize(book.orders, book.commissions, COMPANIES, criteria)
        by_map = summarize(
            book.orders, book.commissions, {c.id: c for c in COMPANIES}, criteria
        )
        assert by_list == by_map

    def test_unknown_company_earns_zero(self):
        order = _order(1, SimpleNamespace(id=42), "1000.00")
        summary = summarize([order], [], COMPANIES, ReportFilter())
        assert summary.total_sales == Decimal("1000.00")
        assert summary.commission_earned == Decimal("0")

    def test_empty_inputs(self):
        summary = summarize([], [], [], ReportFilter())
        assert summary.total_sales == Decimal("0")
        assert summary.commission_outstanding == Decimal("0")
        assert summary.order_count == 0


# ── orphans ───────────────────────────────────────────────


class TestOrphanedCommissions:
    def test_orphan_skipped_in_summary(self, book, caplog):
        ghost_order = _order(404, ACME, "100.00")
        orphan = _commission(50, ghost_order, ACME, [("5.00", "2025-01-01")])
        criteria = ReportFilter(excluded_stages=EXCLUDED)

        with caplog.at_level(logging.WARNING, logger="repbook.services.reporting"):
            summary = summarize(book.orders, book.commissions + [orphan], COMPANIES, criteria)

        assert summary.commission_paid == Decimal("1075.00")
        assert "orphaned commission 50" in caplog.text

    def test_orphan_skipped_in_payments(self, book):
        ghost_order = _order(404, ACME, "100.00")
        orphan = _commission(50, ghost_order, ACME, [("5.00", "2025-01-01")])
        report = list_payments(
            book.orders, book.commissions + [orphan], ReportFilter(excluded_stages=EXCLUDED)
        )
        assert all(line.commission_id != 50 for g in report.groups for line in g.lines)

    def test_orphan_skipped_in_rows(self, book):
        ghost_order = _order(404, ACME, "100.00")
        orphan = _commission(50, ghost_order, ACME)
        rows = commission_rows(
            book.orders, book.commissions + [orphan], COMPANIES, ReportFilter()
        )
        assert 50 not in [r.commission_id for r in rows]


# ── list_payments ─────────────────────────────────────────


class TestListPayments:
    def test_grouped_newest_first_unscheduled_last(self, book):
        report = list_payments(
            book.orders, book.commissions, ReportFilter(excluded_stages=EXCLUDED), ACCOUNTS
        )
        assert [g.date for g in report.groups] == [
            date(2025, 3, 15),
            date(2025, 2, 1),
            None,
        ]
        assert report.groups[-1].unscheduled
        assert not report.groups[0].unscheduled

    def test_group_subtotals(self, book):
        report = list_payments(
            book.orders, book.commissions, ReportFilter(excluded_stages=EXCLUDED), ACCOUNTS
        )
        feb = report.groups[1]
        assert feb.subtotal == Decimal("925.00")
        assert [line.account_name for line in feb.lines] == [
            "Alpine Outfitters",
            "Bayside Rentals",
        ]
        assert report.total == Decimal("1075.00")
        assert report.count == 4

    def test_no_unscheduled_group_when_all_dated(self, book):
        criteria = ReportFilter(season_ids=frozenset({200}), excluded_stages=EXCLUDED)
        report = list_payments(book.orders, book.commissions, criteria)
        assert [g.unscheduled for g in report.groups] == [False]

    def test_search_by_account_name(self, book):
        report = list_payments(
            book.orders,
            book.commissions,
            ReportFilter(excluded_stages=EXCLUDED),
            ACCOUNTS,
            search="  BAYSIDE ",
        )
        assert report.count == 1
        assert report.total == Decimal("25.00")

    def test_unknown_account_name(self, book):
        report = list_payments(book.orders, book.commissions, ReportFilter(excluded_stages=EXCLUDED))
        names = {line.account_name for g in report.groups for line in g.lines}
        assert names == {"Unknown"}

    def test_legacy_scalar_listed_once(self):
        order = _order(1, ACME, "1000.00")
        legacy = SimpleNamespace(
            id=1,
            order_id=1,
            commission_due=Decimal("50.00"),
            payments=[],
            amount_paid=Decimal("30.00"),
            amount_remaining=Decimal("20.00"),
            pay_status=PayStatus.PARTIAL,
            paid_date=date(2024, 12, 1),
        )
        report = list_payments([order], [legacy], ReportFilter())
        assert report.count == 1
        assert report.groups[0].date == date(2024, 12, 1)
        assert report.total == Decimal("30.00")

    def test_empty_report(self):
        report = list_payments([], [], ReportFilter())
        assert report.groups == ()
        assert report.total == Decimal("0")
        assert report.count == 0


# ── consistency ───────────────────────────────────────────


class TestPaymentConsistency:
    @pytest.mark.parametrize(
        "criteria",
        [
            ReportFilter(excluded_stages=EXCLUDED),
            ReportFilter(company_id=1, excluded_stages=EXCLUDED),
            ReportFilter(season_ids=frozenset({100}), excluded_stages=EXCLUDED),
            ReportFilter(),
        ],
    )
    def test_payment_total_matches_paid(self, book, criteria):
        summary = summarize(book.orders, book.commissions, COMPANIES, criteria)
        report = list_payments(book.orders, book.commissions, criteria)
        check_payment_consistency(summary, report)
        assert report.total == summary.commission_paid

    def test_mismatch_raises(self, book):
        criteria = ReportFilter(excluded_stages=EXCLUDED)
        summary = summarize(book.orders, book.commissions, COMPANIES, criteria)
        report = list_payments(book.orders, book.commissions[:1], criteria)
        with pytest.raises(LedgerInvariantError):
            check_payment_consistency(summary, report)


# ── commission_rows ───────────────────────────────────────


class TestCommissionRows:
    def test_rows_use_order_rate(self, book):
        rows = commission_rows(
            book.orders, book.commissions, COMPANIES, ReportFilter(excluded_stages=EXCLUDED), ACCOUNTS
        )
        by_order = {r.order_id: r for r in rows}
        assert by_order[3].rate == Decimal("10")
        assert by_order[3].commission_due == Decimal("50.00")
        assert by_order[3].pay_status == PayStatus.PAID
        assert by_order[1].company_name == "Acme"
        assert by_order[2].account_name == "Bayside Rentals"

    def test_sorted_by_remaining(self, book):
        rows = commission_rows(
            book.orders, book.commissions, COMPANIES, ReportFilter(excluded_stages=EXCLUDED)
        )
        remaining = [r.amount_remaining for r in rows]
        assert remaining == sorted(remaining, reverse=True)
        assert rows[0].order_id == 1

    def test_rounding_drift_is_bounded(self):
        """Per-order dues and the company-level figure differ by at most half a cent per order."""
        company = SimpleNamespace(id=1, name="Acme", commission_percent=Decimal("7.25"))
        totals = ["10.01", "33.33", "0.07", "1234.57", "99.99", "18.18", "7.77", "5000.03"]
        orders = [_order(i, company, t) for i, t in enumerate(totals, start=1)]
        commissions = [_commission(i, o, company) for i, o in enumerate(orders, start=1)]

        criteria = ReportFilter()
        summary = summarize(orders, commissions, [company], criteria)
        rows = commission_rows(orders, commissions, [company], criteria)
        per_order = sum((r.commission_due for r in rows), Decimal("0"))

        bound = Decimal("0.005") * (len(orders) + 1)
        assert abs(per_order - summary.commission_earned) <= bound
