"""
External market data.
"""

from .price_feed import UNAVAILABLE, PriceFeed, PriceReading

__all__ = [
    "PriceFeed",
    "PriceReading",
    "UNAVAILABLE",
]
