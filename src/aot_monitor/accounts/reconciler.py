"""
End-to-end reconciliation pipeline.

raw rows -> normalize -> deduplicate -> convert + drawdown + staleness
         -> net equity -> sort -> AccountSnapshot
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from ..core.utils import utc_now
from .aggregator import net_equity_usd
from .currency import convert_account
from .dedup import deduplicate
from .metrics import drawdown_pct
from .models import Account, AccountSnapshot, AccountView
from .normalizer import normalize_records
from .sorter import DEFAULT_SORT, SortConfig, sort_views
from .staleness import DEFAULT_POLICY, StalenessPolicy, is_offline


def build_view(
    account: Account, now: datetime, policy: StalenessPolicy = DEFAULT_POLICY
) -> AccountView:
    """Derive the display figures for one canonical account."""
    equity_usd, balance_usd = convert_account(account)
    return AccountView(
        account=account,
        equity_usd=equity_usd,
        balance_usd=balance_usd,
        drawdown_pct=drawdown_pct(equity_usd, balance_usd),
        offline=is_offline(account.updated_at, now, policy),
    )


def reconcile(
    rows: Iterable[Mapping[str, Any]],
    now: Optional[datetime] = None,
    sort: SortConfig = DEFAULT_SORT,
    policy: StalenessPolicy = DEFAULT_POLICY,
    version: int = 0,
) -> AccountSnapshot:
    """Turn a raw batch into a canonical, sorted snapshot.

    Args:
        rows: Raw account rows as returned by the store
        now: Clock used for staleness (defaults to current UTC time)
        sort: Ordering to apply
        policy: Staleness thresholds
        version: Version number stamped on the snapshot

    Returns:
        Immutable AccountSnapshot
    """
    now = now or utc_now()
    accounts = deduplicate(normalize_records(rows))
    views = [build_view(account, now, policy) for account in accounts]
    return AccountSnapshot(
        version=version,
        views=tuple(sort_views(views, sort)),
        net_equity_usd=net_equity_usd(views),
        refreshed_at=now,
        evaluated_at=now,
        sort=sort,
    )


def reevaluate_staleness(
    snapshot: AccountSnapshot,
    now: Optional[datetime] = None,
    policy: StalenessPolicy = DEFAULT_POLICY,
) -> AccountSnapshot:
    """Recompute offline flags against ``now`` without touching the data.

    Order, totals and version are kept; only ``offline`` and ``evaluated_at``
    change.
    """
    now = now or utc_now()
    views = tuple(
        replace(view, offline=is_offline(view.account.updated_at, now, policy))
        for view in snapshot.views
    )
    return replace(snapshot, views=views, evaluated_at=now)


def resort(snapshot: AccountSnapshot, sort: SortConfig) -> AccountSnapshot:
    """Reorder an existing snapshot without refetching."""
    return replace(snapshot, views=tuple(sort_views(snapshot.views, sort)), sort=sort)
