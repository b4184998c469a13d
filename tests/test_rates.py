"""
Tests for effective commission rate resolution.

Covers:
- Order override precedence over the company default
- Explicit 0 override
- Missing company / missing percentage
- Percentage range validation
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from repbook.services.exceptions import CommissionValidationError
from repbook.services.rates import company_rate, resolve_rate, validate_percent


def _make_order(**kwargs):
    defaults = {"commission_override": None, "total": Decimal("1000.00")}
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _make_company(**kwargs):
    defaults = {"id": 1, "name": "Acme", "commission_percent": Decimal("5")}
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# ── resolve_rate ──────────────────────────────────────────


class TestResolveRate:
    def test_company_default_when_no_override(self):
        assert resolve_rate(_make_order(), _make_company()) == Decimal("5")

    def test_override_wins_over_company(self):
        order = _make_order(commission_override=Decimal("10"))
        assert resolve_rate(order, _make_company()) == Decimal("10")

    def test_zero_override_is_not_ignored(self):
        """An explicit 0% override means no commission, not "use default"."""
        order = _make_order(commission_override=Decimal("0"))
        assert resolve_rate(order, _make_company()) == Decimal("0")

    def test_missing_company_is_zero(self):
        assert resolve_rate(_make_order(), None) == Decimal("0")

    def test_override_used_even_without_company(self):
        order = _make_order(commission_override=Decimal("7.5"))
        assert resolve_rate(order, None) == Decimal("7.5")

    def test_company_without_percent_is_zero(self):
        company = _make_company(commission_percent=None)
        assert resolve_rate(_make_order(), company) == Decimal("0")

    def test_rate_is_decimal(self):
        company = _make_company(commission_percent=5)
        rate = resolve_rate(_make_order(), company)
        assert isinstance(rate, Decimal)

    def test_order_without_override_attribute(self):
        order = SimpleNamespace(total=Decimal("100"))
        assert resolve_rate(order, _make_company()) == Decimal("5")


class TestCompanyRate:
    def test_float_percent_goes_through_str(self):
        assert company_rate(_make_company(commission_percent=5.1)) == Decimal("5.1")

    def test_none_company(self):
        assert company_rate(None) == Decimal("0")


# ── validate_percent ──────────────────────────────────────


class TestValidatePercent:
    @pytest.mark.parametrize("value", [0, "0", Decimal("12.5"), 100])
    def test_accepts_range(self, value):
        assert validate_percent(value) == Decimal(str(value))

    def test_none_passes_through(self):
        assert validate_percent(None) is None

    @pytest.mark.parametrize("value", [-1, Decimal("-0.01"), Decimal("100.01"), 250])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(CommissionValidationError):
            validate_percent(value)

    def test_error_names_the_field(self):
        with pytest.raises(CommissionValidationError, match="Commission override"):
            validate_percent(101, "Commission override")

    def test_rejects_non_numeric(self):
        with pytest.raises(CommissionValidationError):
            validate_percent("five")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_percent(-5)
