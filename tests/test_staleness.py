"""
Tests for the staleness classifier.
"""

from datetime import datetime, timedelta, timezone

import pytest

from aot_monitor.accounts import StalenessPolicy, is_offline
from aot_monitor.accounts.staleness import effective_age_seconds

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestIsOffline:
    """Test connectivity classification."""

    def test_missing_timestamp_is_offline(self):
        assert is_offline(None, NOW) is True

    def test_unparsable_timestamp_is_offline(self):
        assert is_offline("not a date", NOW) is True

    def test_numeric_epoch_is_offline(self):
        assert is_offline(NOW.timestamp(), NOW) is True

    def test_exactly_threshold_is_online(self):
        assert is_offline(NOW - timedelta(seconds=180), NOW) is False

    def test_one_second_past_threshold_is_offline(self):
        assert is_offline(NOW - timedelta(seconds=181), NOW) is True

    def test_future_timestamp_uses_absolute_difference(self):
        assert is_offline(NOW + timedelta(seconds=60), NOW) is False
        assert is_offline(NOW + timedelta(seconds=600), NOW) is True

    def test_iso_string_input(self):
        assert is_offline((NOW - timedelta(seconds=30)).isoformat(), NOW) is False

    def test_naive_clock_is_treated_as_utc(self):
        naive_now = NOW.replace(tzinfo=None)

        assert is_offline(NOW - timedelta(seconds=30), naive_now) is False


class TestSkewCorrection:
    """Test the fixed seven-hour writer offset correction."""

    def test_seven_hours_plus_a_minute_is_online(self):
        updated_at = NOW - timedelta(seconds=25200 + 60)

        assert effective_age_seconds(updated_at, NOW) == pytest.approx(60)
        assert is_offline(updated_at, NOW) is False

    def test_seven_hours_ahead_is_online(self):
        assert is_offline(NOW + timedelta(seconds=25200 - 30), NOW) is False

    def test_below_trigger_is_not_corrected(self):
        updated_at = NOW - timedelta(seconds=19999)

        assert effective_age_seconds(updated_at, NOW) == pytest.approx(19999)
        assert is_offline(updated_at, NOW) is True

    def test_correction_far_from_offset_stays_offline(self):
        assert is_offline(NOW - timedelta(days=2), NOW) is True

    def test_custom_policy(self):
        policy = StalenessPolicy(threshold_seconds=30, skew_trigger_seconds=3000, skew_offset_seconds=3600)

        assert is_offline(NOW - timedelta(seconds=45), NOW, policy) is True
        assert is_offline(NOW - timedelta(seconds=3610), NOW, policy) is False
