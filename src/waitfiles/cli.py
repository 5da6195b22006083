"""Command-line interface for waitfiles."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from waitfiles import __version__

# Exit codes
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_FATAL = 3
EXIT_INTERRUPTED = 130


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="waitfiles",
        description="Wait for files to exist. Prints '<path> exists!' as each "
        "one becomes readable and exits once all of them have.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be repeated)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file path (merged over system, user and project config)",
    )
    parser.add_argument(
        "--poll-interval",
        type=_positive_float,
        metavar="SECONDS",
        help="Seconds between existence checks",
    )
    parser.add_argument(
        "--max-workers",
        type=_positive_int,
        metavar="N",
        help="Wait on at most N paths at once (default: one thread per path)",
    )
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="The file paths to wait to exist.",
    )
    return parser


def cli_overrides(parsed: argparse.Namespace) -> dict[str, Any]:
    """Turn parsed flags into a config dict that overrides every other source."""
    from waitfiles.logging import DEFAULT_VERBOSITY

    overrides: dict[str, Any] = {}
    if parsed.quiet:
        overrides["logging"] = {"verbose": 0}
    elif parsed.verbose:
        overrides["logging"] = {"verbose": DEFAULT_VERBOSITY + parsed.verbose}
    if parsed.poll_interval is not None:
        overrides["probe"] = {"poll_interval": parsed.poll_interval}
    if parsed.max_workers is not None:
        overrides["coordinator"] = {"max_workers": parsed.max_workers}
    return overrides


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments and return the exit code."""
    from waitfiles.config import load_config
    from waitfiles.coordinator import CompletionCoordinator
    from waitfiles.errors import ConfigError, CoordinatorError
    from waitfiles.logging import get_logger, setup_logging
    from waitfiles.probe import create_probe

    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        config = load_config(
            project_root=".",
            config_path=parsed.config,
            overrides=cli_overrides(parsed),
        )
    except ConfigError as e:
        parser.exit(EXIT_USAGE, f"{parser.prog}: error: {e}\n")

    setup_logging(config.logging)
    log = get_logger()

    coordinator = CompletionCoordinator(
        create_probe(config.probe),
        max_workers=config.coordinator.max_workers,
    )
    try:
        summary = coordinator.run(parsed.files)
    except CoordinatorError as e:
        log.critical("%s", e)
        return EXIT_FATAL

    return EXIT_OK if summary.all_resolved else EXIT_FAILED
