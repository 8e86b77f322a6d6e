"""Startup validation without sending anything."""

import logging

from telemetry_pusher.adapters.driven.config.settings import load_settings
from telemetry_pusher.adapters.driven.logging.logging_config import configure_logs
from telemetry_pusher.adapters.driven.payload.loader import DEFAULT_PAYLOAD_FILE, load_payload
from telemetry_pusher.core.errors import StartupError

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main(payload_path: str = DEFAULT_PAYLOAD_FILE, env_file: str | None = None) -> int:
    """Check that a run could start.

    Validates:
    - server and device_token are configured.
    - request_timeout, if set, is a positive number.
    - Payload file exists and is valid JSON.

    No network request is made.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    try:
        settings = load_settings(env_file)
        payload = load_payload(payload_path)
    except StartupError as exc:
        logger.error(f"Pusher check FAILED: {exc}")
        return 1

    logger.info(
        f"Pusher check OK: url={settings.server}, payload={payload.source} "
        f"({len(payload.body)} bytes)"
    )
    return 0


if __name__ == "__main__":
    configure_logs()
    raise SystemExit(main())
