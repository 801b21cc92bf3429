"""
Tests for currency conversion, drawdown and net equity aggregation.
"""

import math
from datetime import datetime, timezone

import pytest

from aot_monitor.accounts import (
    Account,
    build_view,
    convert_account,
    drawdown_pct,
    net_equity_usd,
    to_standard,
)

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestCurrencyConversion:
    """Test cent-account normalization."""

    def test_cent_account_divides_by_hundred(self):
        account = Account(id="1", equity=10000, balance=5000, is_cent=True)

        assert convert_account(account) == (100.0, 50.0)

    def test_standard_account_passes_through(self):
        account = Account(id="1", equity=10000, balance=5000)

        assert convert_account(account) == (10000, 5000)

    def test_to_standard_zero(self):
        assert to_standard(0.0, True) == 0.0


class TestDrawdown:
    """Test drawdown percentage."""

    def test_loss(self):
        assert drawdown_pct(900.0, 1000.0) == pytest.approx(-10.0)

    def test_gain(self):
        assert drawdown_pct(1050.0, 1000.0) == pytest.approx(5.0)

    @pytest.mark.parametrize("equity", [0.0, 500.0, -20.0])
    def test_zero_balance_yields_zero(self, equity):
        result = drawdown_pct(equity, 0.0)

        assert result == 0.0
        assert not math.isnan(result)

    def test_negative_balance_yields_zero(self):
        assert drawdown_pct(100.0, -50.0) == 0.0

    def test_cent_account_drawdown_unchanged_by_conversion(self):
        view = build_view(Account(id="1", equity=9000, balance=10000, is_cent=True), NOW)

        assert view.drawdown_pct == pytest.approx(-10.0)


class TestNetEquity:
    """Test the non-demo equity aggregate."""

    def test_demo_only_set_is_zero(self):
        accounts = [
            Account(id="1", equity=5000, is_demo=True),
            Account(id="2", equity=10000, is_demo=True, is_cent=True),
        ]

        assert net_equity_usd(accounts) == 0.0

    def test_empty_set_is_zero(self):
        assert net_equity_usd([]) == 0.0

    def test_mixed_set_converts_and_excludes_demo(self):
        accounts = [
            Account(id="1", equity=1000),
            Account(id="2", equity=25000, is_cent=True),
            Account(id="3", equity=777, is_demo=True),
        ]

        assert net_equity_usd(accounts) == pytest.approx(1250.0)

    def test_accepts_views(self):
        views = [
            build_view(Account(id="1", equity=1000), NOW),
            build_view(Account(id="2", equity=10000, is_cent=True), NOW),
            build_view(Account(id="3", equity=5, is_demo=True), NOW),
        ]

        assert net_equity_usd(views) == pytest.approx(1100.0)
