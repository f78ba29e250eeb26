# wgtest/main.py
from __future__ import annotations

"""
Command-line entrypoint.

    wgtest [configs_directory] [-v]

This module depends on:
- wgtest.config.get_settings for configuration
- wgtest.services.tester for preconditions and the batch runner
- wgtest.services.tools for the real wg-quick driver

Exit status:
- 0  every configuration passed (or there were none)
- 1  a precondition failed (not root, WireGuard tools missing)
- 2  usage error or the configs directory does not exist
- 3  at least one configuration failed
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from wgtest import __version__
from wgtest.config import Settings, get_settings
from wgtest.services.tester import (
    BatchRunner,
    PreconditionError,
    RunLayout,
    check_preconditions,
)
from wgtest.services.tools import get_default_interface_driver
from wgtest.services.tools.base import detect_tool_version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PRECONDITION = 1
EXIT_USAGE = 2
EXIT_CONFIG_FAILURES = 3


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wgtest",
        description="Bring up every WireGuard config in a directory and record which ones work.",
        epilog=(
            f"If configs_directory is not specified, {settings.default_configs_dir} will be used. "
            f"A configs_directory that does not exist is a usage error (exit {EXIT_USAGE}); "
            "nothing is created or tested."
        ),
    )
    parser.add_argument(
        "configs_directory",
        nargs="?",
        default=settings.default_configs_dir,
        help="directory containing *.conf files (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    settings = settings or get_settings()
    args = build_parser(settings).parse_args(argv)
    _configure_logging(settings, args.verbose)

    try:
        check_preconditions(settings)
    except PreconditionError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_PRECONDITION

    configs_dir = Path(args.configs_directory)
    if not configs_dir.is_dir():
        print(f"Configs directory not found: {configs_dir}", file=sys.stderr)
        return EXIT_USAGE

    logger.debug("wg version: %s", detect_tool_version(settings.wg_binary) or "unknown")

    layout = RunLayout.from_settings(configs_dir, settings)
    runner = BatchRunner(layout, get_default_interface_driver(settings), settings=settings)
    batch = runner.run()
    return EXIT_OK if batch.all_passed else EXIT_CONFIG_FAILURES


def cli() -> None:
    sys.exit(main())
