"""
FastAPI server exposing the reconciled account view and change webhook.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from . import __version__
from .accounts import SortConfig
from .connectors import ChangeNotifier
from .core.logging_utils import get_logger
from .monitor import AccountMonitor
from .ui_panels import format_status_panel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: float
    uptime: float
    snapshot_version: int
    has_data: bool
    version: str = __version__


class SummaryResponse(BaseModel):
    """Portfolio summary response model."""

    net_equity_usd: float
    accounts: int
    offline: int
    demo: int
    snapshot_version: int
    refreshed_at: Optional[str] = None
    price_symbol: Optional[str] = None
    price: Optional[float] = None


class MonitorServer:
    """FastAPI server wrapping an AccountMonitor."""

    def __init__(
        self,
        monitor: AccountMonitor,
        notifier: Optional[ChangeNotifier] = None,
        host: str = "127.0.0.1",
        port: int = 8000,
        display_timezone: str = "Asia/Bangkok",
        manage_monitor: bool = True,
    ):
        """Initialize the server.

        Args:
            monitor: Monitor whose snapshot is served
            notifier: Notifier fired by the webhook (defaults to the source's)
            host: Server host address
            port: Server port
            display_timezone: Timezone for sync times in /status
            manage_monitor: Start/stop the monitor with the app lifespan
        """
        self.monitor = monitor
        self.notifier = notifier or monitor.source.notifier
        self.host = host
        self.port = port
        self.display_timezone = display_timezone
        self.manage_monitor = manage_monitor
        self.logger = get_logger("monitor_server")
        self._start_time = time.time()
        self.app: Optional[FastAPI] = None

    def _parse_sort(self, sort: Optional[str], direction: Optional[str]) -> Optional[SortConfig]:
        if sort is None and direction is None:
            return None
        try:
            return SortConfig.parse(sort, direction)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=f"Invalid sort: {e}")

    def _require_running(self) -> None:
        if not self.monitor.running:
            raise HTTPException(status_code=503, detail="Monitor is not running")

    def create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            self.logger.info(f"Starting monitor server on {self.host}:{self.port}")
            if self.manage_monitor:
                await self.monitor.start()
            try:
                yield
            finally:
                if self.manage_monitor:
                    await self.monitor.stop()
                self.logger.info("Shutting down monitor server")

        app = FastAPI(
            title="AOT Monitor",
            description="Reconciled trading account view",
            version=__version__,
            lifespan=lifespan,
        )

        @app.get("/", response_class=PlainTextResponse)
        async def root():
            return f"""AOT Monitor
===========

Available endpoints:
- /health - Health check
- /accounts - Reconciled accounts (JSON, ?sort=equity|drawdown|name&direction=ascending|descending)
- /summary - Net equity and counts
- /status - Terminal-style status
- POST /webhook/accounts - Change notification
- POST /refresh - Manual refresh

Version: {__version__}
"""

        @app.get("/health", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(
                status="healthy",
                timestamp=time.time(),
                uptime=time.time() - self._start_time,
                snapshot_version=self.monitor.state.version,
                has_data=self.monitor.state.has_data,
            )

        @app.get("/accounts")
        async def get_accounts(
            sort: Optional[str] = Query(default=None),
            direction: Optional[str] = Query(default=None),
        ) -> dict[str, Any]:
            snapshot = self.monitor.snapshot(self._parse_sort(sort, direction))
            return {
                "version": snapshot.version,
                "net_equity_usd": snapshot.net_equity_usd,
                "accounts": [view.to_dict() for view in snapshot.views],
            }

        @app.get("/summary", response_model=SummaryResponse)
        async def get_summary():
            snapshot = self.monitor.snapshot()
            feed = self.monitor.price_feed
            return SummaryResponse(
                net_equity_usd=snapshot.net_equity_usd,
                accounts=len(snapshot),
                offline=snapshot.offline_count,
                demo=sum(1 for view in snapshot.views if view.is_demo),
                snapshot_version=snapshot.version,
                refreshed_at=(
                    snapshot.refreshed_at.isoformat() if snapshot.refreshed_at else None
                ),
                price_symbol=feed.symbol if feed else None,
                price=feed.price if feed else None,
            )

        @app.get("/status", response_class=PlainTextResponse)
        async def get_status():
            feed = self.monitor.price_feed
            return format_status_panel(
                self.monitor.snapshot(),
                price=feed.display() if feed else None,
                tz=self.display_timezone,
            )

        @app.post("/webhook/accounts", status_code=202)
        async def account_webhook(payload: Optional[dict[str, Any]] = Body(default=None)):
            self._require_running()
            event = (payload or {}).get("type", "*")
            delivered = self.notifier.notify(str(event))
            return {"accepted": True, "subscribers": delivered}

        @app.post("/refresh", status_code=202)
        async def manual_refresh():
            self._require_running()
            self.monitor.request_refresh()
            return {"accepted": True}

        self.app = app
        return app

    async def serve(self) -> None:
        """Run the server (and, through the lifespan, the monitor)."""
        import uvicorn

        if self.app is None:
            self.create_app()

        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            log_level="info",
            access_log=False,
        )
        server = uvicorn.Server(config)
        try:
            await server.serve()
        except Exception as e:
            self.logger.error(f"Monitor server failed: {e}")
            raise
