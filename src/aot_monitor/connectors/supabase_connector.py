"""
Supabase (PostgREST) account source.
"""

from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base_connector import BaseAccountSource, SourceFetchError
from .notifier import ChangeNotifier


def make_session(total_retries: int = 3, backoff: float = 0.25) -> requests.Session:
    """Create a keep-alive session that retries transient GET failures."""
    session = requests.Session()
    retry = Retry(
        total=total_retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    session.headers.update({"Accept": "application/json"})
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.mount("http://", HTTPAdapter(max_retries=retry))
    return session


class SupabaseConnector(BaseAccountSource):
    """
    Reads the trading account table through Supabase's REST endpoint.

    Change notifications are not pulled from Supabase here; a database webhook
    posting to the monitor's /webhook/accounts endpoint fires the notifier.
    """

    SELECT_COLUMNS = "*"

    def __init__(
        self,
        config: Dict[str, Any],
        notifier: Optional[ChangeNotifier] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the Supabase connector.

        Args:
            config: Source configuration with url, api_key, table, timeout
            notifier: Change notifier shared with the webhook endpoint
            session: Optional preconfigured HTTP session
        """
        super().__init__(config, notifier)
        self.url = config.get("url")
        self.api_key = config.get("api_key")
        self.table = config.get("table", "trading_accounts")
        self.timeout = config.get("timeout", 15)
        self.session = session or make_session()

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def fetch_accounts(self) -> List[Dict[str, Any]]:
        """Fetch every row of the account table.

        Raises:
            SourceFetchError: On transport errors, non-2xx responses or a
                body that is not a JSON array
        """
        if not self.url:
            raise SourceFetchError("Account source url is not configured")

        try:
            response = self.session.get(
                self.endpoint,
                params={"select": self.SELECT_COLUMNS},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except requests.RequestException as e:
            raise SourceFetchError(f"Failed to fetch {self.table}: {e}") from e
        except ValueError as e:
            raise SourceFetchError(f"Invalid JSON from {self.table}: {e}") from e

        if not isinstance(rows, list):
            raise SourceFetchError(
                f"Unexpected payload from {self.table}: {type(rows).__name__}"
            )

        self.logger.debug(f"Fetched {len(rows)} rows from {self.table}")
        return rows

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
