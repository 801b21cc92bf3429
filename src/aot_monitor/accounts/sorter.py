"""
Ordering of reconciled account views.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Union

from ..core.config_schema import SortDirection, SortKey
from ..core.utils import natural_key
from .models import AccountView


@dataclass(frozen=True)
class SortConfig:
    """Immutable view ordering. ``key=None`` selects the default ordering."""

    key: Optional[SortKey] = None
    direction: SortDirection = SortDirection.ASCENDING

    @classmethod
    def parse(
        cls,
        key: Union[str, SortKey, None] = None,
        direction: Union[str, SortDirection, None] = None,
    ) -> "SortConfig":
        """Build from loose string values.

        Raises:
            ValueError: If the key or direction is unknown
        """
        if isinstance(key, str):
            key = key.strip().lower() or None
        if isinstance(direction, str):
            direction = direction.strip().lower()
            direction = {"asc": "ascending", "desc": "descending"}.get(direction, direction)
        return cls(
            key=SortKey(key) if key is not None else None,
            direction=SortDirection(direction) if direction else SortDirection.ASCENDING,
        )

    @classmethod
    def from_config(cls, view_config) -> "SortConfig":
        """Build from a ViewConfig model."""
        return cls(key=view_config.sort_key, direction=view_config.sort_direction)

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESCENDING


DEFAULT_SORT = SortConfig()

_KEY_FUNCS: dict[SortKey, Callable[[AccountView], Any]] = {
    SortKey.EQUITY: lambda view: view.equity_usd,
    SortKey.DRAWDOWN: lambda view: view.drawdown_pct,
    SortKey.NAME: lambda view: view.name.casefold(),
}


def default_order_key(view: AccountView) -> tuple:
    """Real accounts first, then numeric-aware id."""
    return (view.is_demo, natural_key(view.id))


def sort_views(
    views: Iterable[AccountView], config: SortConfig = DEFAULT_SORT
) -> list[AccountView]:
    """Return views ordered per ``config``.

    Explicit keys use a stable sort, so equal keys keep their input order in
    both directions. The default ordering ignores ``direction``.
    """
    if config.key is None:
        return sorted(views, key=default_order_key)
    return sorted(views, key=_KEY_FUNCS[config.key], reverse=config.descending)
