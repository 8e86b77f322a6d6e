"""Application entrypoint."""

import asyncio
import logging
from collections.abc import Sequence

from telemetry_pusher.adapters.driven.config import health_check
from telemetry_pusher.adapters.driven.config.settings import load_settings
from telemetry_pusher.adapters.driven.http.client import TelemetryPublisher
from telemetry_pusher.adapters.driven.logging.logging_config import configure_logs
from telemetry_pusher.adapters.driven.metrics.publish_metrics import PublishMetrics
from telemetry_pusher.adapters.driven.payload.loader import load_payload
from telemetry_pusher.adapters.driving.cli import log_level_from_args, parse_args, run_plan_from_args
from telemetry_pusher.adapters.driving.signals import make_stop_on_sigterm
from telemetry_pusher.core.errors import StartupError
from telemetry_pusher.core.send_loop import start_send_loop
from telemetry_pusher.ports.run import RunSummary

__all__ = ["main", "run", "exit_code_for", "EXIT_OK", "EXIT_STARTUP_FAILED", "EXIT_ROUNDS_FAILED"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STARTUP_FAILED = 1
# 2 is what argparse uses for usage errors.
EXIT_ROUNDS_FAILED = 3


def exit_code_for(summary: RunSummary) -> int:
    """Map a finished run to the process exit code."""
    return EXIT_OK if summary.ok else EXIT_ROUNDS_FAILED


async def main(argv: Sequence[str] | None = None) -> int:
    """Start the telemetry pusher.

    Startup sequence:
    1. Parse arguments and configure logging.
    2. Resolve the endpoint and load the payload (fatal on error).
    3. Run the send loop until its plan is exhausted or a signal arrives.
    4. Turn the run summary into an exit code.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    configure_logs(log_level_from_args(args))

    if args.check:
        return health_check.main(payload_path=args.file, env_file=args.env_file)

    logger.info("Starting telemetry pusher...")
    plan = run_plan_from_args(args)

    try:
        settings = load_settings(args.env_file)
        payload = load_payload(args.file)
    except StartupError as exc:
        logger.error(
            "Startup error: %s\n"
            "Hint: check the 'server' and 'device_token' variables (environment or .env) "
            "and that the payload file exists and is valid JSON.",
            exc,
        )
        return EXIT_STARTUP_FAILED

    endpoint = settings.endpoint()
    metrics = PublishMetrics()

    async with TelemetryPublisher(timeout_sec=settings.request_timeout_sec, metrics=metrics) as publisher:
        stop = make_stop_on_sigterm()
        summary = await start_send_loop(
            plan=plan,
            endpoint=endpoint,
            payload=payload,
            publish_fn=publisher.publish,
            stop_fn=stop,
            sleep_fn=stop.wait,
        )

    if summary.ok:
        logger.info(f"Telemetry pusher finished: {summary}")
    else:
        logger.warning(f"Telemetry pusher finished with {summary.failed} failed round(s): {summary}")
    return exit_code_for(summary)


def run() -> None:
    """Console script entrypoint."""
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")
        code = 130
    raise SystemExit(code)


if __name__ == "__main__":
    run()
