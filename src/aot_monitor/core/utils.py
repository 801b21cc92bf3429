"""
Shared helpers: safe numeric coercion, timestamp parsing and formatting.
"""

import math
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional, Union

_DIGITS = re.compile(r"(\d+)")


def safe_float(value: Any, default: float = 0.0) -> float:
    """Safely convert value to a finite float.

    Booleans, NaN and infinities are rejected along with anything ``float()``
    cannot parse.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Float value or default
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (ValueError, TypeError):
        return default
    if not math.isfinite(result):
        return default
    return result


def safe_bool(value: Any) -> bool:
    """Interpret database-style truthy values ("true", "t", 1) as True."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes", "y")
    return bool(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are taken as UTC. Numeric epoch values are not accepted;
    the source column is a timestamptz and always arrives as text. Returns None
    for anything unparsable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def natural_key(text: Any) -> tuple:
    """Numeric-aware sort key: ``"2"`` sorts before ``"10"``.

    Digit runs compare as integers, other runs compare case-insensitively.
    """
    parts = _DIGITS.split(str(text))
    key = []
    for part in parts:
        if part.isdigit():
            key.append((0, int(part), ""))
        elif part:
            key.append((1, 0, part.casefold()))
    return tuple(key)


def format_currency(
    amount: Union[float, Decimal, str], currency: str = "$", precision: int = 2
) -> str:
    """Format amount as currency with thousands separators.

    Args:
        amount: Amount to format
        currency: Currency prefix
        precision: Decimal precision

    Returns:
        Formatted currency string
    """
    if isinstance(amount, str):
        amount = Decimal(amount)
    if isinstance(amount, float):
        amount = Decimal(str(amount))

    quantum = Decimal(1).scaleb(-precision)
    with localcontext() as ctx:
        ctx.prec = max(28, amount.adjusted() + precision + 2)
        amount = amount.quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if amount < 0 else ""
        magnitude = abs(amount)
    return f"{sign}{currency}{magnitude:,.{precision}f}"


def format_percentage(value: Union[float, Decimal], precision: int = 2) -> str:
    """Format an already-scaled percentage value (12.5 -> '12.50%')."""
    return f"{float(value):.{precision}f}%"
