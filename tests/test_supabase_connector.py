"""
Tests for the Supabase account source.
"""

from unittest.mock import Mock

import pytest
import requests
from urllib3.util.retry import Retry

from aot_monitor.connectors import ChangeNotifier, SourceFetchError, SupabaseConnector
from aot_monitor.connectors.supabase_connector import make_session


def make_connector(session, **overrides):
    config = {
        "url": "https://example.supabase.co",
        "api_key": "anon-key",
        "table": "trading_accounts",
        "timeout": 5,
    }
    config.update(overrides)
    return SupabaseConnector(config, session=session)


class TestFetchAccounts:
    """Test REST fetch and error mapping."""

    def setup_method(self):
        self.session = Mock(spec=requests.Session)
        self.response = Mock()
        self.response.raise_for_status.return_value = None
        self.session.get.return_value = self.response

    def test_fetch_success(self):
        rows = [{"account_id": "1"}, {"account_id": "2"}]
        self.response.json.return_value = rows
        connector = make_connector(self.session)

        assert connector.fetch_accounts() == rows

        args, kwargs = self.session.get.call_args
        assert args[0] == "https://example.supabase.co/rest/v1/trading_accounts"
        assert kwargs["params"] == {"select": "*"}
        assert kwargs["headers"]["apikey"] == "anon-key"
        assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
        assert kwargs["timeout"] == 5

    def test_connection_error(self):
        self.session.get.side_effect = requests.ConnectionError("down")
        connector = make_connector(self.session)

        with pytest.raises(SourceFetchError):
            connector.fetch_accounts()

    def test_http_error(self):
        self.response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
        connector = make_connector(self.session)

        with pytest.raises(SourceFetchError):
            connector.fetch_accounts()

    def test_invalid_json(self):
        self.response.json.side_effect = ValueError("Expecting value")
        connector = make_connector(self.session)

        with pytest.raises(SourceFetchError):
            connector.fetch_accounts()

    def test_non_list_payload(self):
        self.response.json.return_value = {"message": "error"}
        connector = make_connector(self.session)

        with pytest.raises(SourceFetchError):
            connector.fetch_accounts()

    def test_missing_url(self):
        connector = make_connector(self.session, url=None)

        with pytest.raises(SourceFetchError):
            connector.fetch_accounts()
        self.session.get.assert_not_called()

    def test_no_api_key_sends_no_auth_headers(self):
        self.response.json.return_value = []
        connector = make_connector(self.session, api_key=None)

        connector.fetch_accounts()

        assert self.session.get.call_args.kwargs["headers"] == {}


class TestMakeSession:
    """Test the retrying HTTP session."""

    def test_retry_policy_mounted(self):
        session = make_session(total_retries=5)

        retry = session.get_adapter("https://example.supabase.co").max_retries

        assert isinstance(retry, Retry)
        assert retry.total == 5
        assert 503 in retry.status_forcelist
        assert session.headers["Accept"] == "application/json"

class TestChangeNotifier:
    """Test payload-less change fan-out."""

    def test_subscribe_and_notify(self):
        notifier = ChangeNotifier()
        calls = []
        notifier.subscribe(lambda: calls.append("a"))
        notifier.subscribe(lambda: calls.append("b"))

        assert notifier.notify("UPDATE") == 2
        assert calls == ["a", "b"]

    def test_unsubscribe(self):
        notifier = ChangeNotifier()
        callback = Mock()
        unsubscribe = notifier.subscribe(callback)

        unsubscribe()
        unsubscribe()
        notifier.notify()

        callback.assert_not_called()
        assert notifier.subscriber_count == 0

    def test_failing_subscriber_does_not_block_others(self):
        notifier = ChangeNotifier()
        good = Mock()
        notifier.subscribe(Mock(side_effect=RuntimeError("boom")))
        notifier.subscribe(good)

        assert notifier.notify() == 1
        good.assert_called_once()

    def test_connector_subscribes_through_notifier(self):
        notifier = ChangeNotifier()
        connector = SupabaseConnector({"url": "https://x.supabase.co"}, notifier=notifier)
        callback = Mock()

        unsubscribe = connector.subscribe(callback)
        notifier.notify("INSERT")
        unsubscribe()
        notifier.notify("DELETE")

        callback.assert_called_once()
