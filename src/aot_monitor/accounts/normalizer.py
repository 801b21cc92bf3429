"""
Raw record normalization.

Raw rows arrive with the store's column names (account_id, account_name,
equity, balance, is_usc, is_demo, updated_at, total_lots). Missing or
non-numeric amounts become 0; bad timestamps become None.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from ..core.utils import parse_timestamp, safe_bool, safe_float
from .models import Account

logger = logging.getLogger(__name__)


def normalize_record(raw: Mapping[str, Any]) -> Optional[Account]:
    """Coerce one raw row into an Account.

    Returns None when the row has no usable account_id.
    """
    account_id = raw.get("account_id")
    if account_id is None or str(account_id).strip() == "":
        return None

    raw_ts = raw.get("updated_at")
    if isinstance(raw_ts, datetime):
        raw_ts_text: Optional[str] = raw_ts.isoformat()
    else:
        raw_ts_text = raw_ts if isinstance(raw_ts, str) else None

    name = raw.get("account_name")
    return Account(
        id=str(account_id).strip(),
        name="" if name is None else str(name),
        equity=safe_float(raw.get("equity")),
        balance=safe_float(raw.get("balance")),
        is_cent=safe_bool(raw.get("is_usc")),
        is_demo=safe_bool(raw.get("is_demo")),
        updated_at=parse_timestamp(raw_ts),
        total_lots=safe_float(raw.get("total_lots")),
        updated_at_raw=raw_ts_text,
    )


def normalize_records(rows: Iterable[Mapping[str, Any]]) -> list[Account]:
    """Normalize a raw batch, dropping rows that cannot be keyed."""
    accounts = []
    for row in rows:
        if not isinstance(row, Mapping):
            logger.debug(f"Skipping non-mapping account row: {row!r}")
            continue
        account = normalize_record(row)
        if account is None:
            logger.debug(f"Skipping account row without account_id: {dict(row)}")
            continue
        accounts.append(account)
    return accounts
