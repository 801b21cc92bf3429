"""
Collapse duplicate account rows into one canonical record per id.
"""

from typing import Iterable

from .models import Account


def _supersedes(incoming: Account, existing: Account) -> bool:
    """True when ``incoming`` should replace ``existing``.

    A timestamped record beats an untimestamped one; otherwise only a strictly
    later timestamp wins, so ties and missing timestamps keep the first seen.
    """
    if incoming.updated_at is None:
        return False
    if existing.updated_at is None:
        return True
    return incoming.updated_at > existing.updated_at


def deduplicate(accounts: Iterable[Account]) -> list[Account]:
    """Return one account per id, keeping the most recently updated.

    Output keeps the order in which ids were first seen. The input is not
    modified.
    """
    canonical: dict[str, Account] = {}
    for account in accounts:
        existing = canonical.get(account.id)
        if existing is None or _supersedes(account, existing):
            canonical[account.id] = account
    return list(canonical.values())
