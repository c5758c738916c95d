"""Command-line front door for lazynote.

Parses CLI options, loads configuration, prepares the notes directories,
and dispatches into the interactive runtime. Startup failures exit with a
message and a non-zero status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import __version__
from .errors import ConfigError, TreeBuildError
from .logs import setup_logging
from .runtime import build_initial_state, run_app
from .runtime import config

logger = logging.getLogger(__name__)


def print_config() -> None:
    """Print the config file location followed by its contents."""
    print(config.CONFIG_PATH)
    try:
        print(config.CONFIG_PATH.read_text(encoding="utf-8"), end="")
    except OSError as exc:
        raise SystemExit(f"Error reading config file: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the note browser.

    Returns ``0`` after a normal quit; startup errors raise ``SystemExit``
    with a diagnostic message.
    """
    parser = argparse.ArgumentParser(
        prog="lazynote",
        description="Browse, create, rename, and archive markdown notes in the terminal.",
    )
    parser.add_argument("--notes-dir", metavar="PATH", default=None, help="Notes directory (overrides config).")
    parser.add_argument("--version", action="store_true", help="Print version information and exit.")
    parser.add_argument("--config", action="store_true", help="Print config file location and contents and exit.")
    args = parser.parse_args(argv)

    if args.version:
        print(f"note version {__version__}")
        return 0

    setup_logging()

    try:
        settings = config.load_settings()
    except ConfigError as exc:
        logger.error("config load failed: %s", exc)
        raise SystemExit(f"Failed to load configuration: {exc}") from exc

    if args.config:
        print_config()
        return 0

    if args.notes_dir is not None:
        notes_dir = Path(args.notes_dir).expanduser()
        settings = replace(settings, notes_dir=notes_dir, archive_dir=notes_dir / "archive")

    try:
        config.prepare_directories(settings)
        state, selection = build_initial_state(settings)
    except (ConfigError, TreeBuildError) as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(f"Failed to initialize: {exc}") from exc

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazynote needs an interactive terminal.")

    run_app(settings, state, selection)
    return 0


if __name__ == "__main__":
    main()
