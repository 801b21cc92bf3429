"""
Base interface for account collection sources.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from ..core.logging_utils import LoggerMixin
from .notifier import ChangeNotifier


class SourceFetchError(Exception):
    """Raised when the account collection cannot be read."""


class BaseAccountSource(ABC, LoggerMixin):
    """
    Base interface for account collection sources.

    A source returns the full raw collection on every fetch and lets callers
    subscribe to a payload-less "something changed" signal. Subscriptions go
    through a ChangeNotifier, which the transport (webhook endpoint, realtime
    client, test) fires.
    """

    def __init__(
        self, config: Dict[str, Any], notifier: Optional[ChangeNotifier] = None
    ):
        """Initialize the source.

        Args:
            config: Source configuration dictionary
            notifier: Change notifier to subscribe through (created if omitted)
        """
        super().__init__()
        self.config = config
        self.notifier = notifier or ChangeNotifier()

    @abstractmethod
    def fetch_accounts(self) -> List[Dict[str, Any]]:
        """Fetch every raw account row.

        Returns:
            List of raw row dictionaries

        Raises:
            SourceFetchError: If the collection cannot be read
        """

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register for change notifications.

        Args:
            callback: Called with no arguments on any insert/update/delete

        Returns:
            Function that removes the subscription
        """
        return self.notifier.subscribe(callback)

    def close(self) -> None:
        """Release transport resources."""
