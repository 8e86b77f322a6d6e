"""Run plan and run accounting DTOs."""

from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ["LoopState", "RoundOutcome", "RunPlan", "RunSummary"]


class LoopState(enum.Enum):
    """Lifecycle of one send loop."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(slots=True, frozen=True)
class RunPlan:
    """Shape of a run.

    Attributes:
        interval_sec: Seconds to wait between rounds (0 = no wait).
        round_count: Number of rounds to attempt (0 = until stopped).
    """

    interval_sec: int = 5
    round_count: int = 1

    def __post_init__(self) -> None:
        if self.interval_sec < 0:
            raise ValueError(f"interval_sec must be >= 0 (got: {self.interval_sec})")
        if self.round_count < 0:
            raise ValueError(f"round_count must be >= 0 (got: {self.round_count})")

    @property
    def unbounded(self) -> bool:
        return self.round_count == 0

    def is_last_round(self, round_index: int) -> bool:
        """Return True when no round should follow ``round_index``."""
        return not self.unbounded and round_index >= self.round_count


@dataclass(slots=True, frozen=True)
class RoundOutcome:
    """Result of one attempted round."""

    round_index: int
    succeeded: bool
    detail: str = ""


@dataclass(slots=True)
class RunSummary:
    """Running counters for a send loop.

    ``attempted == succeeded + failed`` holds after every ``record``.
    """

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    state: LoopState = LoopState.IDLE
    interrupted: bool = False

    def record(self, outcome: RoundOutcome) -> None:
        self.attempted += 1
        if outcome.succeeded:
            self.succeeded += 1
        else:
            self.failed += 1

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def __str__(self) -> str:
        return (
            f"attempted={self.attempted} succeeded={self.succeeded} "
            f"failed={self.failed} state={self.state.value}"
            + (" (interrupted)" if self.interrupted else "")
        )
