"""CLI entry point for vpnservers.

Runs the [Updater][vpnservers.services.updater.Updater] once (``--once``)
or continuously with an optional Prometheus metrics server.

Examples:
    ```bash
    python -m vpnservers --once --stdout
    python -m vpnservers --config config/updater.yaml --log-level DEBUG
    python -m vpnservers --once --servers-file data/servers.json
    ```
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import Any

from vpnservers.core import ServerStore, start_metrics_server
from vpnservers.core.logger import Logger, StructuredFormatter
from vpnservers.core.yaml import load_yaml
from vpnservers.services.updater import Updater


DEFAULT_CONFIG = Path("config") / "updater.yaml"

logger = Logger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the updater runner."""
    parser = argparse.ArgumentParser(
        prog="vpnservers",
        description="Build VPN server lists from provider configuration archives",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Updater config path (default: {DEFAULT_CONFIG})",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run once and exit (default: run continuously)",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the server list as Python source after each run",
    )

    parser.add_argument(
        "--servers-file",
        type=Path,
        help="Load the store from and save it to this JSON file",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Install ``StructuredFormatter`` on the root handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def load_config(args: argparse.Namespace) -> dict[str, Any]:
    """Read the YAML config (if any) and apply command-line overrides."""
    if args.config.exists():
        config = load_yaml(args.config)
    else:
        logger.warning("config_not_found", path=str(args.config))
        config = {}

    output = dict(config.get("output") or {})
    if args.stdout:
        output["stdout"] = True
    if args.servers_file:
        output["servers_file"] = str(args.servers_file)
    config["output"] = output
    return config


async def run_updater(updater: Updater, *, once: bool) -> int:
    """Run the updater in one-shot or continuous mode.

    Returns:
        Exit code: 0 for success, 1 for failure.
    """
    if once:
        try:
            async with updater:
                await updater.run()
            logger.info("updater_completed")
            return 0
        except Exception as e:  # CLI error boundary for one-shot mode
            logger.error("updater_failed", error=str(e), error_type=type(e).__name__)
            return 1

    metrics_config = updater.config.metrics
    metrics_server = await start_metrics_server(metrics_config)
    if metrics_config.enabled:
        logger.info(
            "metrics_server_started",
            host=metrics_config.host,
            port=metrics_config.port,
            path=metrics_config.path,
        )

    def handle_signal(sig: signal.Signals) -> None:
        logger.info("shutdown_signal", signal=sig.name)
        updater.request_shutdown()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal, sig)

    try:
        async with updater:
            await updater.run_forever()
        return 0
    except Exception as e:  # CLI error boundary for continuous mode
        logger.error("updater_failed", error=str(e), error_type=type(e).__name__)
        return 1
    finally:
        await metrics_server.stop()


async def _main(args: argparse.Namespace) -> int:
    try:
        config = load_config(args)
        servers_file = config["output"].get("servers_file")
        store = ServerStore.load(servers_file) if servers_file else ServerStore()
        updater = Updater.from_dict(config, store=store)
    except Exception as e:  # CLI error boundary for configuration
        logger.error("config_invalid", error=str(e), error_type=type(e).__name__)
        return 1
    return await run_updater(updater, once=args.once)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, configure logging and run the updater."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        return asyncio.run(_main(args))
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
