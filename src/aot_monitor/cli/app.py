"""
Command-line interface for the AOT account monitor.
"""

import argparse
import asyncio
import sys
from typing import Optional

from ..accounts import SortConfig, reconcile
from ..connectors import SourceFetchError
from ..core.config_manager import ConfigManager
from ..core.logging_utils import setup_logging
from ..monitor import AccountMonitor
from ..serve import MonitorServer
from ..ui_panels import format_status_panel


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="aot-monitor",
        description="AOT Monitor - live reconciled trading account view",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (default: config/monitor.yaml or $AOT_MONITOR_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the monitor and HTTP server (default)")
    serve.add_argument("--host", type=str, help="Bind address (overrides config)")
    serve.add_argument("--port", type=int, help="Bind port (overrides config)")

    snapshot = subparsers.add_parser("snapshot", help="Fetch once and print the account panel")
    snapshot.add_argument(
        "--sort", type=str, choices=["equity", "drawdown", "name"], help="Sort key"
    )
    snapshot.add_argument(
        "--direction",
        type=str,
        choices=["ascending", "descending"],
        default="ascending",
        help="Sort direction",
    )

    return parser


def _load_config(args: argparse.Namespace) -> ConfigManager:
    config_manager = ConfigManager(args.config)
    if args.log_level:
        config_manager.set("logging.level", args.log_level)
    config = config_manager.get_validated_config()
    setup_logging(
        level=config.logging.level.value,
        log_file=config.logging.file,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
        format_string=config.logging.format,
    )
    return config_manager


def run_snapshot(args: argparse.Namespace, config_manager: ConfigManager) -> int:
    """Fetch, reconcile and print once.

    Returns:
        Process exit code
    """
    config = config_manager.get_validated_config()
    monitor = AccountMonitor.from_config(config_manager)
    sort = SortConfig.parse(args.sort, args.direction) if args.sort else monitor.sort

    try:
        rows = monitor.source.fetch_accounts()
    except SourceFetchError as e:
        print(f"❌ Could not fetch accounts: {e}")
        return 1
    finally:
        monitor.source.close()

    snapshot = reconcile(rows, sort=sort, policy=monitor.policy)
    price = None
    if monitor.price_feed is not None:
        monitor.price_feed.poll()
        price = monitor.price_feed.display()
        monitor.price_feed.close()

    print(format_status_panel(snapshot, price=price, tz=config.monitor.display_timezone))
    return 0


async def run_server(args: argparse.Namespace, config_manager: ConfigManager) -> None:
    """Run the monitor behind the HTTP server until interrupted."""
    config = config_manager.get_validated_config()
    monitor = AccountMonitor.from_config(config_manager)
    server = MonitorServer(
        monitor,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
        display_timezone=config.monitor.display_timezone,
    )
    try:
        await server.serve()
    finally:
        monitor.source.close()
        if monitor.price_feed is not None:
            monitor.price_feed.close()


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    command = args.command or "serve"
    if command == "serve" and not hasattr(args, "host"):
        args.host = None
        args.port = None

    try:
        config_manager = _load_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Configuration error: {e}")
        sys.exit(2)

    try:
        if command == "snapshot":
            sys.exit(run_snapshot(args, config_manager))
        asyncio.run(run_server(args, config_manager))
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
