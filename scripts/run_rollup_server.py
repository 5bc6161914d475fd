#!/usr/bin/env python3
"""Run the mock rollup server for host-mode development."""

import argparse
import logging
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point: build the app and serve it with uvicorn."""
    parser = argparse.ArgumentParser(description="Run the mock rollup server.")
    _env = os.environ.get
    parser.add_argument("--host", type=str, default=_env("ROLLUP_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(_env("PORT", _env("ROLLUP_PORT", "5004"))))
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    app = create_app()

    import uvicorn

    logger.info("Serving mock rollup server on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
