"""
In-memory state for the reconciled account view.
"""

from .store import AccountStateCell

__all__ = [
    "AccountStateCell",
]
