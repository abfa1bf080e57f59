# src/fwcatalog/cli.py

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from fwcatalog import log_utils
from fwcatalog.config import apply_overrides, load_config
from fwcatalog.constants import (
    APP_NAME,
    CONFIG_KEY_BASE_URL,
    CONFIG_KEY_LOG_DIR,
    CONFIG_KEY_LOG_LEVEL,
    CONFIG_KEY_MAX_DEVICE_ID,
    CONFIG_KEY_REQUEST_DELAY,
    CONFIG_KEY_START_DEVICE_ID,
    CONFIG_KEY_STORE_PATH,
)
from fwcatalog.exceptions import ConfigurationError, StoreError
from fwcatalog.scrape import DeviceStore, ScrapeOrchestrator


def get_version() -> str:
    """Return the installed fwcatalog version, or "unknown" outside an install."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(APP_NAME)
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="fwcatalog - firmware catalog scraper",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Command to run a scrape
    scrape_parser = subparsers.add_parser(
        "scrape", help="Scrape device firmware data into the store"
    )
    scrape_parser.add_argument(
        "--start", type=int, dest="start", help="First device id to scrape"
    )
    scrape_parser.add_argument(
        "--end",
        type=int,
        dest="end",
        help="Device id bound (exclusive)",
    )
    scrape_parser.add_argument(
        "--output", "-o", dest="output", help="Path of the JSON store file"
    )
    scrape_parser.add_argument("--base-url", dest="base_url", help="Catalog origin")
    scrape_parser.add_argument(
        "--delay",
        type=float,
        dest="delay",
        help="Seconds to wait before each request",
    )
    _add_common_arguments(scrape_parser)
    scrape_parser.add_argument(
        "--log-level", dest="log_level", help="Console log level (e.g. DEBUG)"
    )
    scrape_parser.add_argument(
        "--log-dir", dest="log_dir", help="Directory for a rotating log file"
    )

    # Command to summarize the store
    stats_parser = subparsers.add_parser("stats", help="Summarize the store file")
    stats_parser.add_argument(
        "--output", "-o", dest="output", help="Path of the JSON store file"
    )
    _add_common_arguments(stats_parser)

    # Command to display version
    subparsers.add_parser("version", help="Display fwcatalog version")

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", dest="config", help="Configuration file (YAML) to load"
    )


def _load_config(args: argparse.Namespace) -> Optional[Dict[str, Any]]:
    overrides = {
        CONFIG_KEY_START_DEVICE_ID: getattr(args, "start", None),
        CONFIG_KEY_MAX_DEVICE_ID: getattr(args, "end", None),
        CONFIG_KEY_STORE_PATH: getattr(args, "output", None),
        CONFIG_KEY_BASE_URL: getattr(args, "base_url", None),
        CONFIG_KEY_REQUEST_DELAY: getattr(args, "delay", None),
        CONFIG_KEY_LOG_LEVEL: getattr(args, "log_level", None),
        CONFIG_KEY_LOG_DIR: getattr(args, "log_dir", None),
    }
    try:
        return apply_overrides(load_config(args.config), overrides)
    except ConfigurationError as error:
        log_utils.logger.error(f"Invalid configuration: {error}")
        return None


def _configure_logging(config: Dict[str, Any]) -> None:
    level = config.get(CONFIG_KEY_LOG_LEVEL)
    if level:
        log_utils.set_log_level(level)
    log_dir = config.get(CONFIG_KEY_LOG_DIR)
    if log_dir:
        log_utils.add_file_logging(Path(log_dir), level or "INFO")


def run_scrape(args: argparse.Namespace) -> int:
    """
    Run a scrape with the resolved configuration.

    Returns:
        int: 0 when the run completes (skipped devices included), 1 on a configuration or store failure.
    """
    config = _load_config(args)
    if config is None:
        return 1
    _configure_logging(config)

    orchestrator = ScrapeOrchestrator(config)
    try:
        asyncio.run(orchestrator.run())
    except StoreError as error:
        log_utils.logger.error(f"Store failure, aborting scrape: {error}")
        return 1
    return 0


def run_stats(args: argparse.Namespace) -> int:
    config = _load_config(args)
    if config is None:
        return 1

    store = DeviceStore(config[CONFIG_KEY_STORE_PATH])
    if not store.exists():
        log_utils.logger.info(f"No store found at {store.path}")
        return 0
    try:
        summary = store.summarize()
    except StoreError as error:
        log_utils.logger.error(f"Could not read store: {error}")
        return 1

    log_utils.logger.info(f"Store: {summary['path']}")
    log_utils.logger.info(
        f"Records: {summary['records']} across {summary['devices']} devices"
    )
    if summary["first_device_id"] is not None:
        log_utils.logger.info(
            f"Device ids: {summary['first_device_id']}..{summary['last_device_id']}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the fwcatalog command-line interface.

    Dispatches the `scrape`, `stats` and `version` subcommands; prints help when
    no command is given. Exits with the subcommand's status code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "scrape":
        sys.exit(run_scrape(args))
    elif args.command == "stats":
        sys.exit(run_stats(args))
    elif args.command == "version":
        log_utils.logger.info(f"fwcatalog v{get_version()}")
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
