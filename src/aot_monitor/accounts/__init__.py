"""
Account reconciliation and metrics engine.
"""

from .aggregator import net_equity_usd
from .currency import convert_account, to_standard
from .dedup import deduplicate
from .metrics import drawdown_pct
from .models import EMPTY_SNAPSHOT, Account, AccountSnapshot, AccountView
from .normalizer import normalize_record, normalize_records
from .reconciler import build_view, reconcile, reevaluate_staleness, resort
from .sorter import DEFAULT_SORT, SortConfig, sort_views
from .staleness import DEFAULT_POLICY, StalenessPolicy, is_offline

__all__ = [
    "Account",
    "AccountView",
    "AccountSnapshot",
    "EMPTY_SNAPSHOT",
    "normalize_record",
    "normalize_records",
    "deduplicate",
    "to_standard",
    "convert_account",
    "drawdown_pct",
    "net_equity_usd",
    "is_offline",
    "StalenessPolicy",
    "DEFAULT_POLICY",
    "SortConfig",
    "DEFAULT_SORT",
    "sort_views",
    "build_view",
    "reconcile",
    "reevaluate_staleness",
    "resort",
]
