"""
AOT Monitor - live reconciliation of trading account state.

This package reconciles raw trading account records into a canonical,
currency-normalized, sorted and staleness-annotated view.
"""

__version__ = "0.1.0"

from .accounts import Account, AccountSnapshot, AccountView, SortConfig, reconcile
from .core.config_manager import ConfigManager
from .core.logging_utils import setup_logging

__all__ = [
    "Account",
    "AccountView",
    "AccountSnapshot",
    "SortConfig",
    "reconcile",
    "ConfigManager",
    "setup_logging",
]
