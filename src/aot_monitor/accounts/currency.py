"""
Cent-account conversion into the standard currency.
"""

from .models import Account

CENTS_PER_UNIT = 100.0


def to_standard(amount: float, is_cent: bool) -> float:
    """Express ``amount`` in standard currency units."""
    return amount / CENTS_PER_UNIT if is_cent else amount


def convert_account(account: Account) -> tuple[float, float]:
    """Return ``(equity_usd, balance_usd)`` for an account."""
    return (
        to_standard(account.equity, account.is_cent),
        to_standard(account.balance, account.is_cent),
    )
