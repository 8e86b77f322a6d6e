"""Publish port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from telemetry_pusher.ports.endpoint import Endpoint
from telemetry_pusher.ports.payload import PayloadDocument

__all__ = ["PublishResult", "PublisherPort"]


@dataclass(slots=True, frozen=True)
class PublishResult:
    """Classified outcome of one publish attempt.

    Attributes:
        ok: True when the transport completed with a 2xx status.
        status_code: HTTP status when a response arrived; None otherwise.
        reason: Human-readable description of the outcome.
    """

    ok: bool
    status_code: int | None = None
    reason: str = ""

    @classmethod
    def success(cls, status_code: int) -> PublishResult:
        return cls(ok=True, status_code=status_code, reason=f"HTTP {status_code}")

    @classmethod
    def failure(cls, reason: str, status_code: int | None = None) -> PublishResult:
        return cls(ok=False, status_code=status_code, reason=reason)


class PublisherPort(Protocol):
    """Anything able to send one payload to one endpoint."""

    async def publish(self, endpoint: Endpoint, payload: PayloadDocument, /) -> PublishResult:
        """Send the payload once.

        Transport problems must come back as a failed result, not an exception.
        """
        ...
