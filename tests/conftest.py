"""
Shared fixtures for account monitor tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_row(account_id, seconds_ago=None, **overrides):
    """Build a raw store row stamped ``seconds_ago`` before NOW."""
    row = {
        "account_id": account_id,
        "account_name": f"Account {account_id}",
        "equity": 1000.0,
        "balance": 1000.0,
        "is_usc": False,
        "is_demo": False,
        "updated_at": None,
        "total_lots": 0.0,
    }
    if seconds_ago is not None:
        row["updated_at"] = (NOW - timedelta(seconds=seconds_ago)).isoformat()
    row.update(overrides)
    return row


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_rows():
    """A realistic batch: a duplicate, a cent account and a demo account."""
    return [
        make_row("10", 30, account_name="Gold Scalper", equity=5200.0, balance=5000.0),
        make_row("2", 60, account_name="alpha", equity=150000.0, balance=160000.0, is_usc=True),
        make_row("10", 10, account_name="Gold Scalper", equity=5300.0, balance=5000.0),
        make_row("7", 5, account_name="Practice", equity=99999.0, balance=100000.0, is_demo=True),
    ]


@pytest.fixture
def row_factory():
    """Factory for raw rows relative to NOW."""
    return make_row
