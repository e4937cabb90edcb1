"""Command line entry point for the autoresize service."""

import argparse
import asyncio
import logging
import os
from typing import List, Optional

from rdb_autoresize import __version__
from rdb_autoresize.provider import load_provider
from rdb_autoresize.shared.config import getenv_bool
from rdb_autoresize.shared.logging import log_event, setup_logging
from rdb_autoresize.shared.units import format_size
from .config import REJECTION_POLICIES, load_config
from .errors import ConfigError, FatalError
from .service import AutoResizeService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdb-autoresize",
        description="Grow a managed database volume before it runs out of space.",
    )
    parser.add_argument("--config", help="path to YAML config file")
    parser.add_argument(
        "--trigger-percentage",
        dest="trigger_percent",
        help="disk usage percentage above which the volume is grown (80-100)",
    )
    parser.add_argument(
        "--volume-size-limit",
        dest="size_limit_bytes",
        help="maximum volume size, e.g. 100GB",
    )
    parser.add_argument("--poll-interval", help="time between cycles, e.g. 5m")
    parser.add_argument("--query-timeout", help="timeout for each provider call, e.g. 1m")
    parser.add_argument(
        "--rejection-policy",
        choices=REJECTION_POLICIES,
        help="skip the cycle or exit when a resize is refused",
    )
    parser.add_argument("--provider", help="provider name or module:Class")
    parser.add_argument("--log-json", action="store_true", help="use json format for logging")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the service and return the process exit status."""
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.debug else os.getenv("LOG_LEVEL", "INFO")
    setup_logging(level, json_format=args.log_json or getenv_bool("RDB_LOG_JSON"))

    try:
        config = load_config(
            args.config,
            overrides={
                "trigger_percent": args.trigger_percent,
                "size_limit_bytes": args.size_limit_bytes,
                "poll_interval": args.poll_interval,
                "query_timeout": args.query_timeout,
                "rejection_policy": args.rejection_policy,
                "provider": args.provider,
            },
        )
    except ConfigError as e:
        log_event(logger, logging.ERROR, "error parsing options", error=str(e))
        return 1

    log_event(
        logger,
        logging.INFO,
        "rdb autoresizer started",
        volume_size_limit=format_size(config.size_limit_bytes),
        trigger_percentage=config.trigger_percent,
        increment=format_size(config.increment_bytes),
        interval=config.poll_interval,
        rejection_policy=config.rejection_policy,
        version=__version__,
    )

    try:
        provider = load_provider(config.provider, dict(config.provider_options))
    except (ImportError, ValueError) as e:
        log_event(logger, logging.ERROR, "error creating provider", error=str(e))
        return 1

    service = AutoResizeService(config, provider)
    try:
        asyncio.run(service.run())
    except FatalError as e:
        log_event(logger, logging.ERROR, "autoresizer stopped", error=str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    return 0
