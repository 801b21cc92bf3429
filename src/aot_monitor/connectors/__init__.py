"""
Account source connectors package.
"""

from .base_connector import BaseAccountSource, SourceFetchError
from .notifier import ChangeNotifier
from .supabase_connector import SupabaseConnector

__all__ = [
    "BaseAccountSource",
    "SourceFetchError",
    "ChangeNotifier",
    "SupabaseConnector",
]
