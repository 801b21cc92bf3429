"""
Payload-less change notification hub.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ChangeNotifier:
    """Fan a "collection changed" signal out to subscribers.

    Notifications carry no payload; subscribers are expected to refetch.
    """

    def __init__(self):
        self._subscribers: list[Callable[[], None]] = []
        self.notifications = 0

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Add a subscriber and return its unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def notify(self, event: str = "*") -> int:
        """Signal a change to every subscriber.

        A failing subscriber is logged and does not stop the others.

        Args:
            event: Event label for logging only (INSERT, UPDATE, DELETE, *)

        Returns:
            Number of subscribers notified
        """
        self.notifications += 1
        logger.debug(f"Change notification #{self.notifications}: event={event}")
        delivered = 0
        for callback in list(self._subscribers):
            try:
                callback()
                delivered += 1
            except Exception as e:
                logger.error(f"Change subscriber {callback!r} failed: {e}")
        return delivered
