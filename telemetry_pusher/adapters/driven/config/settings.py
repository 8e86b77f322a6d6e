"""Configuration loading from environment variables and dotenv files."""

import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from telemetry_pusher.core.errors import InvalidConfigError, MissingConfigError
from telemetry_pusher.ports.endpoint import Endpoint

__all__ = ["Settings", "load_settings"]

logger = logging.getLogger(__name__)

SERVER_KEY = "server"
DEVICE_TOKEN_KEY = "device_token"
REQUEST_TIMEOUT_KEY = "request_timeout"
DEFAULT_REQUEST_TIMEOUT_SEC = 10.0


class Settings(BaseModel):
    """Runtime configuration for the pusher.

    Attributes:
        server: Base URL of the telemetry server.
        device_token: Device access token.
        request_timeout_sec: Total timeout of one publish request.
    """

    model_config = ConfigDict(frozen=True)

    server: str = Field(..., min_length=1, description="Base URL of the telemetry server.")
    device_token: str = Field(..., min_length=1, description="Device access token.")
    request_timeout_sec: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SEC,
        gt=0,
        allow_inf_nan=False,
        description="Total timeout of one publish request in seconds.",
    )

    @field_validator("server", "device_token")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Drop surrounding whitespace left over from dotenv files.

        Args:
            v: Raw value.

        Returns:
            The stripped value.
        """
        return v.strip()

    def endpoint(self) -> Endpoint:
        """Build the immutable endpoint used by the send loop."""
        return Endpoint(base_url=self.server, auth_token=self.device_token)


def _load_env_file(env_file: str | None) -> None:
    path = env_file if env_file is not None else find_dotenv(usecwd=True)
    if path and load_dotenv(path):
        logger.debug(f"Loaded environment from {path}")
    elif env_file is not None:
        logger.warning(f"Env file {env_file} not found or empty, using process environment only")


def _require(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise MissingConfigError(name)
    return value


def load_settings(env_file: str | None = None) -> Settings:
    """Load and validate settings from the environment.

    A dotenv file is loaded first; variables already present in the process
    environment are not overridden.

    Required variables:
    - server: Base URL of the telemetry server.
    - device_token: Device access token.

    Optional:
    - request_timeout: Positive number of seconds (default 10).

    Args:
        env_file: Dotenv file to load. Defaults to a ``.env`` found from the
            current working directory.

    Returns:
        Validated Settings object.

    Raises:
        MissingConfigError: If server or device_token is absent or blank.
        InvalidConfigError: If request_timeout is not a positive number.
    """
    _load_env_file(env_file)

    server = _require(SERVER_KEY)
    device_token = _require(DEVICE_TOKEN_KEY)

    timeout_raw = os.getenv(REQUEST_TIMEOUT_KEY)
    try:
        settings = Settings(
            server=server,
            device_token=device_token,
            request_timeout_sec=(
                timeout_raw if timeout_raw not in (None, "") else DEFAULT_REQUEST_TIMEOUT_SEC
            ),
        )
    except ValidationError as e:
        raise InvalidConfigError(
            REQUEST_TIMEOUT_KEY, timeout_raw or "", "must be a positive number of seconds"
        ) from e

    logger.info(
        f"Pusher configured: server={settings.server}, "
        f"token={settings.endpoint().masked_token}, "
        f"timeout={settings.request_timeout_sec}s"
    )

    return settings
