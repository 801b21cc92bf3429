"""
In-memory state cell holding the current reconciled account snapshot.
"""

from dataclasses import replace
from typing import Callable, Optional

from ..accounts.models import EMPTY_SNAPSHOT, AccountSnapshot
from ..core.logging_utils import LoggerMixin


class AccountStateCell(LoggerMixin):
    """
    Owned, versioned holder of the current AccountSnapshot.

    Each refresh takes a ticket from begin_refresh() before fetching. When it
    completes, publish() swaps the snapshot in by reference only if no refresh
    with a later ticket has already been published, so an overlapping slow
    fetch can never overwrite newer data. Readers always get a complete,
    immutable snapshot.
    """

    def __init__(self, initial: Optional[AccountSnapshot] = None):
        """Initialize the state cell.

        Args:
            initial: Snapshot to start from (defaults to an empty snapshot)
        """
        super().__init__()
        self._snapshot: AccountSnapshot = initial or EMPTY_SNAPSHOT
        self._next_ticket = 0
        self._published_ticket = 0
        self._discarded = 0

    @property
    def snapshot(self) -> AccountSnapshot:
        """Current snapshot."""
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version

    @property
    def discarded_count(self) -> int:
        """Number of refresh results dropped because a newer one had landed."""
        return self._discarded

    @property
    def has_data(self) -> bool:
        """True once at least one refresh has been published."""
        return self._published_ticket > 0

    def begin_refresh(self) -> int:
        """Reserve a monotonically increasing refresh ticket."""
        self._next_ticket += 1
        return self._next_ticket

    def publish(self, ticket: int, snapshot: AccountSnapshot) -> bool:
        """Swap in a refresh result.

        Args:
            ticket: Ticket obtained from begin_refresh() before fetching
            snapshot: Reconciled snapshot from that fetch

        Returns:
            True if the snapshot became current, False if it was stale
        """
        if ticket <= self._published_ticket:
            self._discarded += 1
            self.logger.debug(
                f"Discarding stale refresh result: ticket={ticket} "
                f"published={self._published_ticket}"
            )
            return False

        self._published_ticket = ticket
        self._snapshot = replace(snapshot, version=self._snapshot.version + 1)
        return True

    def transform(
        self, func: Callable[[AccountSnapshot], AccountSnapshot]
    ) -> AccountSnapshot:
        """Replace the current snapshot with ``func(current)``.

        Used for derived updates (staleness ticks, re-sorting) that do not
        come from a fetch. The version number is kept.
        """
        updated = func(self._snapshot)
        self._snapshot = replace(updated, version=self._snapshot.version)
        return self._snapshot
