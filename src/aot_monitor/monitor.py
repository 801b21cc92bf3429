"""
Account monitor: drives refresh, staleness and price triggers on one event loop.
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional

from .accounts import (
    DEFAULT_POLICY,
    DEFAULT_SORT,
    AccountSnapshot,
    SortConfig,
    StalenessPolicy,
    reconcile,
    reevaluate_staleness,
    resort,
)
from .connectors import BaseAccountSource, ChangeNotifier, SourceFetchError, SupabaseConnector
from .core.config_manager import ConfigManager
from .core.logging_utils import LoggerMixin
from .core.utils import utc_now
from .market import PriceFeed
from .state import AccountStateCell


class AccountMonitor(LoggerMixin):
    """
    Keeps the reconciled account view current.

    Three independent triggers feed the state cell:
    - change notifications (and the initial load) start a full refetch and
      reconcile; overlapping refreshes are allowed and the state cell drops
      any result older than one already published
    - a clock tick re-evaluates staleness on the held snapshot, no fetch
    - a price poll refreshes the cached quote, failures are swallowed

    start() brings all three up and stop() tears all three down.
    """

    def __init__(
        self,
        source: BaseAccountSource,
        price_feed: Optional[PriceFeed] = None,
        policy: StalenessPolicy = DEFAULT_POLICY,
        sort: SortConfig = DEFAULT_SORT,
        tick_interval: float = 10,
        price_interval: float = 30,
        state: Optional[AccountStateCell] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the monitor.

        Args:
            source: Account collection source
            price_feed: Optional price poller
            policy: Staleness thresholds
            sort: Initial view ordering
            tick_interval: Seconds between staleness re-evaluations
            price_interval: Seconds between price polls
            state: State cell (created if omitted)
            clock: Wall-clock provider, injectable for tests
        """
        super().__init__()
        self.source = source
        self.price_feed = price_feed
        self.policy = policy
        self.sort = sort
        self.tick_interval = tick_interval
        self.price_interval = price_interval
        self.state = state or AccountStateCell()
        self.clock = clock

        self.fetch_failures = 0
        self.refresh_count = 0
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._loop_tasks: list[asyncio.Task] = []
        self._refresh_tasks: set[asyncio.Task] = set()

    @classmethod
    def from_config(
        cls, config_manager: ConfigManager, notifier: Optional[ChangeNotifier] = None
    ) -> "AccountMonitor":
        """Build a monitor wired to the configured Supabase source and price feed."""
        config = config_manager.get_validated_config()
        source = SupabaseConnector(config.source.model_dump(), notifier=notifier)
        price_feed = (
            PriceFeed(config.price_feed.model_dump()) if config.price_feed.enabled else None
        )
        return cls(
            source=source,
            price_feed=price_feed,
            policy=StalenessPolicy.from_config(config.staleness),
            sort=SortConfig.from_config(config.view),
            tick_interval=config.monitor.tick_interval,
            price_interval=config.price_feed.interval,
        )

    @property
    def running(self) -> bool:
        return bool(self._loop_tasks)

    def snapshot(self, sort: Optional[SortConfig] = None) -> AccountSnapshot:
        """Current snapshot, optionally reordered without refetching."""
        current = self.state.snapshot
        if sort is None or sort == current.sort:
            return current
        return resort(current, sort)

    def set_sort(self, sort: SortConfig) -> AccountSnapshot:
        """Change the default ordering and reorder the held snapshot."""
        self.sort = sort
        return self.state.transform(lambda snap: resort(snap, sort))

    async def refresh(self) -> bool:
        """Fetch the full collection and publish a fresh snapshot.

        A fetch failure keeps the previous snapshot; nothing is raised.

        Returns:
            True if the result became the current snapshot
        """
        ticket = self.state.begin_refresh()
        try:
            rows = await asyncio.to_thread(self.source.fetch_accounts)
        except SourceFetchError as e:
            self.fetch_failures += 1
            self.logger.warning(f"Refresh #{ticket} failed, keeping previous view: {e}")
            return False

        snapshot = reconcile(rows, now=self.clock(), sort=self.sort, policy=self.policy)
        published = self.state.publish(ticket, snapshot)
        if published:
            self.refresh_count += 1
            current = self.state.snapshot
            self.logger.info(
                f"Refresh #{ticket}: {len(rows)} rows -> {len(current)} accounts, "
                f"net equity ${current.net_equity_usd:,.2f}, "
                f"{current.offline_count} offline (v{current.version})"
            )
        return published

    def request_refresh(self) -> None:
        """Schedule a refresh; safe to call from the loop or another thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            self.logger.debug("Refresh requested while monitor is not running; ignored")
            return
        try:
            running_loop = asyncio.get_running_loop()
        except RuntimeError:
            running_loop = None

        if running_loop is loop:
            self._spawn_refresh()
        else:
            loop.call_soon_threadsafe(self._spawn_refresh)

    def _spawn_refresh(self) -> None:
        task = asyncio.ensure_future(self.refresh())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._on_refresh_done)

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        self._refresh_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error(f"Unexpected refresh error: {error!r}")

    def tick(self) -> AccountSnapshot:
        """Re-evaluate staleness of the held snapshot against the clock."""
        now = self.clock()
        return self.state.transform(
            lambda snap: reevaluate_staleness(snap, now, self.policy)
        )

    async def poll_price(self) -> None:
        """Poll the price feed once (failures are handled inside the feed)."""
        if self.price_feed is not None:
            await asyncio.to_thread(self.price_feed.poll)

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            self.tick()

    async def _price_loop(self) -> None:
        while True:
            await self.poll_price()
            await asyncio.sleep(self.price_interval)

    async def start(self) -> None:
        """Subscribe to changes, start the clock and price loops, load once."""
        if self.running:
            return

        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self.source.subscribe(self.request_refresh)
        self._loop_tasks = [asyncio.create_task(self._tick_loop(), name="staleness-tick")]
        if self.price_feed is not None:
            self._loop_tasks.append(
                asyncio.create_task(self._price_loop(), name="price-poll")
            )
        self.logger.info(
            f"Account monitor started (tick={self.tick_interval}s, "
            f"price={'on' if self.price_feed else 'off'})"
        )
        self.request_refresh()

    async def stop(self) -> None:
        """Tear down the subscription, both loops and any in-flight refresh."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        tasks = self._loop_tasks + list(self._refresh_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._loop_tasks = []
        self._refresh_tasks.clear()
        self._loop = None
        self.logger.info("Account monitor stopped")
