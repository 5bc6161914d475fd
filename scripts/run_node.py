#!/usr/bin/env python3
"""Run the rollup node against a coordinating server."""

import argparse
import logging
import os
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rollup.client import RollupClient
from rollup.config import SERVER_URL_ENV, RollupConfig
from rollup.errors import ConfigurationError, TransportFailure

logger = logging.getLogger(__name__)


def build_node(config: RollupConfig, session=None) -> RollupClient:
    """Create a fully wired client.

    This is the testable entry point -- no signals, no loop.
    """
    return RollupClient.from_config(config, session=session)


def _load_config(args: argparse.Namespace) -> RollupConfig:
    config = RollupConfig.from_env()
    if args.read_timeout is not None:
        config.read_timeout = args.read_timeout
    if args.max_retries is not None:
        config.max_retries = args.max_retries
    if args.poll_interval is not None:
        config.poll_interval = args.poll_interval
    return config


def main(argv: Optional[list] = None) -> int:
    """CLI entry point: load config, install signal handlers, run the loop."""
    load_dotenv()
    parser = argparse.ArgumentParser(description="Run the city rollup node.")
    _env = os.environ.get
    parser.add_argument("--server-url", type=str, default=None, help=f"Overrides {SERVER_URL_ENV}")
    parser.add_argument("--read-timeout", type=float, default=None)
    parser.add_argument("--max-retries", type=int, default=None)
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=None,
        help="Seconds to wait after a 202 (0 = busy-poll)",
    )
    parser.add_argument("--cycles", type=int, default=0, help="0 = run forever")
    parser.add_argument("--log-level", type=str, default=_env("ROLLUP_LOG_LEVEL", "INFO"))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.server_url:
        os.environ[SERVER_URL_ENV] = args.server_url
    try:
        config = _load_config(args)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    node = build_node(config)
    stop_event = threading.Event()

    def _shutdown(signum, frame):
        logger.info("Received signal %s, shutting down", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    logger.info("Polling %s", config.server_url)
    try:
        node.run(max_cycles=args.cycles, stop_event=stop_event)
    except TransportFailure as exc:
        logger.error("Coordinating server unavailable (%s): %s", exc.tag, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
