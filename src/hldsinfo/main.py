from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from .config.config_parser import build_config
from .config.config_schema import logging_settings
from .config.logging_config import init_logging
from .fetcher import Fetcher
from .render import render_infos, render_mapping


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hldsinfo",
        description="Query game servers for A2S_INFO and print the results as JSON",
    )
    parser.add_argument("servers", nargs="*", metavar="ip:port", help="Server address")
    parser.add_argument("--config", default=None, help="Path to YAML config")
    parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=None,
        help="Per-server timeout in milliseconds (default 4000, <= 0 disables)",
    )
    parser.add_argument(
        "--by-address",
        action="store_true",
        help="Print an object keyed by address instead of an array",
    )
    parser.add_argument(
        "--log-level", default=None, help="debug, info, warn, error or crit"
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    """
    Main entry point for the hldsinfo CLI.

    Args:
        argv: Command-line arguments.

    Returns:
        0 on success (even when every server failed), 1 on usage or config
        errors, 2 when the report could not be rendered.

    Example use:
        CLI:
            hldsinfo 127.0.0.1:27015 10.0.0.2:27016 -t 2000
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = build_config(
            args.config,
            servers=args.servers,
            timeout_ms=args.timeout,
            log_level=args.log_level,
        )
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if not cfg.servers:
        print(f"usage: {parser.prog} <ip:port> ... [-t <timeout (ms)>]")
        return 1

    init_logging(logging_settings(cfg))
    logger = logging.getLogger("hldsinfo.main")
    logger.info(
        "Querying %d servers (timeout %d ms)", len(cfg.servers), cfg.timeout_ms
    )

    with Fetcher(timeout_ms=cfg.timeout_ms) as fetcher:
        for address in cfg.servers:
            fetcher.submit(address)
        infos = fetcher.collect()

    try:
        out = render_mapping(infos) if args.by_address else render_infos(infos)
    except (TypeError, ValueError) as exc:
        logger.error("Failed to render results: %s", exc)
        print(str(exc), file=sys.stderr)
        return 2

    print(out)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
