"""
Account data structures.

All three types are frozen: a canonical set is rebuilt on every refresh and
replaced wholesale, never patched in place.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Account:
    """Canonical trading account record, amounts in native denomination."""

    id: str
    name: str = ""
    equity: float = 0.0
    balance: float = 0.0
    is_cent: bool = False
    is_demo: bool = False
    updated_at: Optional[datetime] = None
    total_lots: float = 0.0
    updated_at_raw: Optional[str] = field(default=None, compare=False)

    @property
    def currency_label(self) -> str:
        return "USC" if self.is_cent else "USD"


@dataclass(frozen=True)
class AccountView:
    """An account with its derived, display-ready figures."""

    account: Account
    equity_usd: float
    balance_usd: float
    drawdown_pct: float
    offline: bool

    @property
    def id(self) -> str:
        return self.account.id

    @property
    def name(self) -> str:
        return self.account.name

    @property
    def is_demo(self) -> bool:
        return self.account.is_demo

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        acc = self.account
        return {
            "account_id": acc.id,
            "account_name": acc.name,
            "currency": acc.currency_label,
            "is_usc": acc.is_cent,
            "is_demo": acc.is_demo,
            "equity": acc.equity,
            "balance": acc.balance,
            "equity_usd": self.equity_usd,
            "balance_usd": self.balance_usd,
            "drawdown_pct": self.drawdown_pct,
            "total_lots": acc.total_lots,
            "updated_at": acc.updated_at.isoformat() if acc.updated_at else None,
            "offline": self.offline,
        }


@dataclass(frozen=True)
class AccountSnapshot:
    """Immutable reconciled view published by the state cell."""

    version: int
    views: tuple[AccountView, ...]
    net_equity_usd: float
    refreshed_at: Optional[datetime]
    evaluated_at: Optional[datetime]
    sort: Any = None

    @property
    def offline_count(self) -> int:
        return sum(1 for view in self.views if view.offline)

    def __len__(self) -> int:
        return len(self.views)

    def get(self, account_id: str) -> Optional[AccountView]:
        """Look up a view by account id."""
        for view in self.views:
            if view.id == account_id:
                return view
        return None


EMPTY_SNAPSHOT = AccountSnapshot(
    version=0, views=(), net_equity_usd=0.0, refreshed_at=None, evaluated_at=None
)
