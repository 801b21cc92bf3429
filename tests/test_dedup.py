"""
Tests for account deduplication.
"""

from datetime import datetime, timedelta, timezone

from aot_monitor.accounts import Account, deduplicate

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def acc(account_id, updated_at=None, name=""):
    return Account(id=account_id, name=name, updated_at=updated_at)


class TestDeduplicate:
    """Test the one-record-per-id invariant."""

    def test_later_timestamp_wins_regardless_of_order(self):
        older = acc("1", T0, name="older")
        newer = acc("1", T0 + timedelta(seconds=5), name="newer")

        assert deduplicate([older, newer]) == [newer]
        assert deduplicate([newer, older]) == [newer]

    def test_equal_timestamps_keep_first_seen(self):
        first = acc("1", T0, name="first")
        second = acc("1", T0, name="second")

        assert deduplicate([first, second])[0].name == "first"

    def test_missing_timestamps_keep_first_seen(self):
        first = acc("1", name="first")
        second = acc("1", name="second")

        assert deduplicate([first, second])[0].name == "first"

    def test_untimestamped_record_never_replaces_timestamped(self):
        stamped = acc("1", T0, name="stamped")
        unstamped = acc("1", name="unstamped")

        assert deduplicate([stamped, unstamped])[0].name == "stamped"

    def test_timestamped_record_replaces_untimestamped(self):
        unstamped = acc("1", name="unstamped")
        stamped = acc("1", T0, name="stamped")

        assert deduplicate([unstamped, stamped])[0].name == "stamped"

    def test_one_record_per_id_in_first_seen_order(self):
        accounts = [acc("b", T0), acc("a", T0), acc("b", T0 + timedelta(1)), acc("c")]

        result = deduplicate(accounts)

        assert [a.id for a in result] == ["b", "a", "c"]
        assert len({a.id for a in result}) == len(result)

    def test_idempotent_on_canonical_set(self):
        canonical = deduplicate([acc("1", T0), acc("2"), acc("1", T0 + timedelta(1))])

        assert deduplicate(canonical) == canonical

    def test_input_not_mutated(self):
        accounts = [acc("1", T0), acc("1", T0 + timedelta(1))]
        snapshot = list(accounts)

        deduplicate(accounts)

        assert accounts == snapshot

    def test_empty(self):
        assert deduplicate([]) == []
