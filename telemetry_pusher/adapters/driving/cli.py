"""Command-line interface definition."""

import argparse
import logging
from collections.abc import Sequence

from telemetry_pusher.adapters.driven.payload.loader import DEFAULT_PAYLOAD_FILE
from telemetry_pusher.ports.run import RunPlan

__all__ = ["__version__", "build_parser", "parse_args", "run_plan_from_args", "log_level_from_args"]

__version__ = "1.0.0"

DEFAULT_INTERVAL_SEC = 5
DEFAULT_ROUND_COUNT = 1


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telemetry-pusher",
        description=(
            "Publish a JSON payload to a ThingsBoard device telemetry endpoint, "
            "repeatedly at a fixed interval. The endpoint comes from the 'server' "
            "and 'device_token' environment variables (a .env file is read too)."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=_non_negative_int,
        default=DEFAULT_INTERVAL_SEC,
        metavar="SECONDS",
        help="Seconds to wait between rounds",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=_non_negative_int,
        default=DEFAULT_ROUND_COUNT,
        metavar="NUMBER",
        help="Number of rounds to send, 0 means until interrupted",
    )
    parser.add_argument(
        "-f",
        "--file",
        default=DEFAULT_PAYLOAD_FILE,
        metavar="FILE",
        help="JSON payload file",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        metavar="FILE",
        help="Dotenv file with server/device_token (default: .env in the working directory)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate configuration and payload file, then exit without sending",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    ``--help``, ``--version`` and usage errors exit through SystemExit here,
    before anything else runs.
    """
    return build_parser().parse_args(argv)


def run_plan_from_args(args: argparse.Namespace) -> RunPlan:
    return RunPlan(interval_sec=args.interval, round_count=args.count)


def log_level_from_args(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return logging.INFO
