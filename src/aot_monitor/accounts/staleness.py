"""
Connectivity classification from the last-update timestamp.

The upstream writer sometimes stamps rows in a UTC offset seven hours away
from the viewer's clock. Rather than flag every such row as long dead, a raw
difference above ``skew_trigger_seconds`` is assumed to carry that fixed
offset and is corrected before the threshold is applied.

This is an approximation tied to one deployment's clock setup, not a real
timezone resolution: a row that is genuinely stale for about seven hours will
read as online.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.utils import parse_timestamp


@dataclass(frozen=True)
class StalenessPolicy:
    """Thresholds, in seconds."""

    threshold_seconds: float = 180
    skew_trigger_seconds: float = 20000
    skew_offset_seconds: float = 25200

    @classmethod
    def from_config(cls, config) -> "StalenessPolicy":
        """Build from a StalenessConfig model."""
        return cls(
            threshold_seconds=config.threshold_seconds,
            skew_trigger_seconds=config.skew_trigger_seconds,
            skew_offset_seconds=config.skew_offset_seconds,
        )


DEFAULT_POLICY = StalenessPolicy()


def effective_age_seconds(
    updated_at: datetime, now: datetime, policy: StalenessPolicy = DEFAULT_POLICY
) -> float:
    """Seconds between ``updated_at`` and ``now`` after skew correction."""
    diff = abs((now - updated_at).total_seconds())
    if diff > policy.skew_trigger_seconds:
        diff = abs(diff - policy.skew_offset_seconds)
    return diff


def is_offline(
    updated_at, now: datetime, policy: StalenessPolicy = DEFAULT_POLICY
) -> bool:
    """Classify a record as offline.

    Args:
        updated_at: datetime, ISO string or None
        now: current time (aware)
        policy: thresholds

    Returns:
        True when the timestamp is missing, unparsable or too old
    """
    parsed: Optional[datetime] = parse_timestamp(updated_at)
    if parsed is None:
        return True
    # Naive clocks are read as UTC, same as naive stored timestamps
    now = parse_timestamp(now) or now
    return effective_age_seconds(parsed, now, policy) > policy.threshold_seconds
