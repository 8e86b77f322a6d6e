"""HTTP publisher adapter with metrics integration."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout

from telemetry_pusher.ports.endpoint import Endpoint
from telemetry_pusher.ports.metrics import MetricsPort, PublishAttemptDto
from telemetry_pusher.ports.payload import PayloadDocument
from telemetry_pusher.ports.publish import PublisherPort, PublishResult

__all__ = ["TelemetryPublisher"]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 10.0
ERROR_BODY_EXCERPT = 200
JSON_HEADERS = {"Content-Type": "application/json"}


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class TelemetryPublisher(PublisherPort):
    """HTTP publisher for device telemetry.

    Features:
    - One POST per publish() call, no retry.
    - Transport errors and timeouts become failed results.
    - Metrics collection (latency, failure rate).
    - Context manager for proper resource cleanup.
    """

    def __init__(
        self,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        metrics: MetricsPort | None = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            timeout_sec: Total timeout of one request (connect + response).
            metrics: Optional metrics collector to track attempts.
        """
        self.timeout_sec = timeout_sec
        self.metrics = metrics
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "TelemetryPublisher":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(timeout=ClientTimeout(total=self.timeout_sec))
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session)."""
        if self.session:
            await self.session.close()
            self.session = None

    async def _post(self, url: str, body: bytes) -> PublishResult:
        """Single HTTP POST, classified.

        Raises:
            RuntimeError: If session not initialized.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        try:
            resp = await self.session.post(
                url,
                data=body,
                headers=JSON_HEADERS,
                timeout=ClientTimeout(total=self.timeout_sec),
            )
            async with resp:
                if _is_success(resp.status):
                    return PublishResult.success(resp.status)
                text = await self._read_excerpt(resp)
                return PublishResult.failure(f"HTTP {resp.status}: {text}", resp.status)
        except asyncio.TimeoutError:
            return PublishResult.failure(f"request timed out after {self.timeout_sec}s")
        except aiohttp.ClientError as e:
            return PublishResult.failure(f"transport error: {e.__class__.__name__}: {e}")

    @staticmethod
    async def _read_excerpt(resp: aiohttp.ClientResponse) -> str:
        try:
            text = await resp.text()
        except (aiohttp.ClientError, UnicodeDecodeError):
            return "<unreadable body>"
        text = text.strip()
        if len(text) > ERROR_BODY_EXCERPT:
            text = text[:ERROR_BODY_EXCERPT] + "..."
        return text or "<empty body>"

    async def publish(self, endpoint: Endpoint, payload: PayloadDocument) -> PublishResult:
        """Send the payload once and record metrics.

        Args:
            endpoint: Telemetry target.
            payload: Document whose serialized body is sent verbatim.

        Returns:
            Success for 2xx, failure for anything else.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()

        result = await self._post(endpoint.telemetry_url, payload.body)

        if self.metrics:
            self.metrics.update(
                PublishAttemptDto(
                    started_at_sec=started,
                    finished_at_sec=loop.time(),
                    is_failed=not result.ok,
                    status_code=result.status_code,
                )
            )
            logger.info(f"Publish metrics: {self.metrics}")

        return result
