#!/usr/bin/env python
"""Entry point for the Dash threshold explorer.

Usage
-----
    python run_app.py --data path/to/samples.tsv

Or start empty and upload a file from the browser:
    python run_app.py
"""

from __future__ import annotations

import argparse
import logging

from threshold_explorer.config import (
    DEFAULT_HISTOGRAM_BUCKETS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SWEEP_BUCKETS,
    ExplorerSettings,
)
from threshold_explorer.io import read_samples
from threshold_explorer.logging_config import setup_logging

logger = logging.getLogger("threshold_explorer.run_app")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Launch the threshold explorer web app")
    parser.add_argument(
        "--data", default=None,
        help="Optional TSV file with name, cpm, intensity and state columns",
    )
    parser.add_argument(
        "--drop-invalid", action="store_true",
        help="Drop rows whose cpm or intensity is not a number",
    )
    parser.add_argument(
        "--sweep-buckets", type=int, default=DEFAULT_SWEEP_BUCKETS,
        help=f"Buckets per rate curve (default: {DEFAULT_SWEEP_BUCKETS})",
    )
    parser.add_argument(
        "--histogram-buckets", type=int, default=DEFAULT_HISTOGRAM_BUCKETS,
        help=f"Buckets per density sparkline (default: {DEFAULT_HISTOGRAM_BUCKETS})",
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST,
        help=f"Host to bind to (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help=f"Port to serve on (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Run Dash in debug mode",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        settings = ExplorerSettings(
            sweep_buckets=args.sweep_buckets,
            histogram_buckets=args.histogram_buckets,
        )
    except ValueError as exc:
        parser.error(str(exc))

    store = None
    if args.data:
        logger.info("Loading samples from %s...", args.data)
        store = read_samples(args.data, drop_invalid=args.drop_invalid)

    logger.info("Starting Dash app on http://%s:%s/", args.host, args.port)

    from threshold_explorer.app import create_app
    app = create_app(store, settings)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
