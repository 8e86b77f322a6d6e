"""Endpoint port definition (DTO)."""

from dataclasses import dataclass, field

__all__ = ["Endpoint"]

TELEMETRY_PATH = "/api/v1/{token}/telemetry"
MASK_PREFIX_LEN = 8


@dataclass(slots=True, frozen=True)
class Endpoint:
    """Resolved telemetry target.

    The device token is part of the request path, following the
    ThingsBoard device HTTP API, and is kept out of ``repr``.

    Attributes:
        base_url: Server base URL, e.g. ``http://localhost:8080``.
        auth_token: Device access token.
    """

    base_url: str
    auth_token: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.auth_token:
            raise ValueError("auth_token must not be empty")

    @property
    def telemetry_url(self) -> str:
        """Full URL the telemetry POST goes to."""
        return self.base_url.rstrip("/") + TELEMETRY_PATH.format(token=self.auth_token)

    @property
    def masked_token(self) -> str:
        """Token prefix safe to print in logs.

        At most 8 characters and never more than half the token are shown.
        """
        shown = min(MASK_PREFIX_LEN, len(self.auth_token) // 2)
        return f"{self.auth_token[:shown]}..."
