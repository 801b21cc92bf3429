"""
Poll-and-cache price reading for a single fixed symbol.

The feed is independent of the account pipeline: a failed poll is logged and
the previous reading (or "unavailable") is kept.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from ..core.logging_utils import LoggerMixin
from ..core.utils import safe_float, utc_now

UNAVAILABLE = "N/A"


@dataclass(frozen=True)
class PriceReading:
    """A single cached quote."""

    symbol: str
    price: float
    fetched_at: datetime


class PriceFeed(LoggerMixin):
    """Polls one price endpoint and caches the last good reading."""

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None):
        """Initialize the price feed.

        Args:
            config: Price feed configuration with url, symbol, price_field, timeout
            session: Optional HTTP session
        """
        super().__init__()
        self.config = config
        self.url = config.get("url")
        self.symbol = config.get("symbol")
        self.price_field = config.get("price_field", "price")
        self.timeout = config.get("timeout", 10)
        self.session = session or requests.Session()
        self._reading: Optional[PriceReading] = None
        self.failures = 0

    @property
    def reading(self) -> Optional[PriceReading]:
        """Last good reading, or None if none has succeeded yet."""
        return self._reading

    @property
    def price(self) -> Optional[float]:
        return self._reading.price if self._reading else None

    def _extract_price(self, payload: Any) -> Optional[float]:
        """Pull the configured field out of a JSON object (dotted path allowed)."""
        value = payload
        for part in self.price_field.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        price = safe_float(value, default=-1.0)
        return price if price > 0 else None

    def poll(self) -> Optional[PriceReading]:
        """Fetch a fresh quote, keeping the cached one on any failure.

        Returns:
            The reading now cached (fresh or previous), or None
        """
        try:
            response = self.session.get(
                self.url, params={"symbol": self.symbol}, timeout=self.timeout
            )
            response.raise_for_status()
            price = self._extract_price(response.json())
        except (requests.RequestException, ValueError) as e:
            self.failures += 1
            self.logger.warning(f"Price poll failed for {self.symbol}: {e}")
            return self._reading

        if price is None:
            self.failures += 1
            self.logger.warning(
                f"Price poll for {self.symbol} returned no usable '{self.price_field}'"
            )
            return self._reading

        self._reading = PriceReading(symbol=self.symbol, price=price, fetched_at=utc_now())
        self.logger.debug(f"Price updated: {self.symbol} = {price}")
        return self._reading

    def display(self) -> str:
        """Formatted price or the unavailable placeholder."""
        if self._reading is None:
            return UNAVAILABLE
        return f"{self._reading.price:,.2f}"

    def close(self) -> None:
        self.session.close()
