"""
Plain-text panels for the account terminal.

Shared by the /status endpoint and the `snapshot` CLI command so both render
the same figures.
"""

from datetime import datetime
from typing import Optional

import pytz

from .accounts import AccountSnapshot, AccountView
from .core.utils import format_currency, format_percentage
from .market import UNAVAILABLE

NO_TIME = "--:--:--"


def format_sync_time(updated_at: Optional[datetime], tz: str = "Asia/Bangkok") -> str:
    """Render a last-update time as HH:MM:SS in the display timezone."""
    if updated_at is None:
        return NO_TIME
    return updated_at.astimezone(pytz.timezone(tz)).strftime("%H:%M:%S")


def format_account_line(view: AccountView, tz: str = "Asia/Bangkok") -> str:
    """One-line summary of an account card."""
    acc = view.account
    tags = []
    if acc.is_demo:
        tags.append("DEMO")
    if view.offline:
        tags.append("OFFLINE")
    tag_text = f" [{' '.join(tags)}]" if tags else ""

    return (
        f"{acc.name or '-'} (ID: {acc.id} | {acc.currency_label}){tag_text}\n"
        f"    Equity: {format_currency(acc.equity)}  "
        f"Balance: {format_currency(acc.balance)}  "
        f"Drawdown: {format_percentage(view.drawdown_pct)}\n"
        f"    Vol: {acc.total_lots:.2f} L  Sync: {format_sync_time(acc.updated_at, tz)}"
    )


def format_status_panel(
    snapshot: AccountSnapshot,
    price: Optional[str] = None,
    tz: str = "Asia/Bangkok",
) -> str:
    """Full terminal-style status text."""
    lines = [
        "AOT TERMINAL",
        "============",
        f"NET REAL EQUITY (USD): {format_currency(snapshot.net_equity_usd)}",
        f"Accounts: {len(snapshot)}  Offline: {snapshot.offline_count}  "
        f"Version: {snapshot.version}",
        f"Price: {price or UNAVAILABLE}",
    ]
    if snapshot.refreshed_at is not None:
        lines.append(f"Last refresh: {format_sync_time(snapshot.refreshed_at, tz)}")
    lines.append("")

    if not snapshot.views:
        lines.append("No accounts loaded")
    for view in snapshot.views:
        lines.append(format_account_line(view, tz))

    return "\n".join(lines)
