"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["PublishAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class PublishAttemptDto:
    """Immutable snapshot of a single publish attempt.

    Attributes:
        started_at_sec: Monotonic seconds when the request left the process.
        finished_at_sec: Monotonic seconds when the outcome was known.
        is_failed: True if considered failed (network error, non-2xx).
        status_code: HTTP status code when response arrived; None otherwise.
    """

    started_at_sec: float
    finished_at_sec: float
    is_failed: bool = False
    status_code: int | None = None


class MetricsPort(Protocol):
    """Interface for recording publish attempt metrics.

    The publisher calls update() after each attempt; presentation layers call
    __str__() to render summaries.
    """

    def update(self, attempt: PublishAttemptDto, /) -> None:
        """Record a finished publish attempt.

        Args:
            attempt: The attempt to record.
        """
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans.

        Returns:
            Formatted metrics string.
        """
        ...
