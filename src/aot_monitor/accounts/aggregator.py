"""
Portfolio-level aggregates over a canonical account set.
"""

from typing import Iterable, Union

from .currency import to_standard
from .models import Account, AccountView


def net_equity_usd(accounts: Iterable[Union[Account, AccountView]]) -> float:
    """Sum standard-currency equity over real (non-demo) accounts.

    Accepts raw Accounts (converted here) or AccountViews (already converted).
    """
    total = 0.0
    for item in accounts:
        if isinstance(item, AccountView):
            if not item.is_demo:
                total += item.equity_usd
        elif not item.is_demo:
            total += to_standard(item.equity, item.is_cent)
    return total
