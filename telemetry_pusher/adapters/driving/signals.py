"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal

__all__ = ["StopSignal", "make_stop_on_sigterm"]

logger = logging.getLogger(__name__)


class StopSignal:
    """Stop flag shared between signal handlers and the send loop.

    Calling the instance returns True once a stop was requested, so it can be
    passed as the loop's ``stop_fn``. ``wait`` is an interruptible sleep
    suitable as the loop's ``sleep_fn``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def __call__(self) -> bool:
        return self._event.is_set()

    def set(self) -> None:
        self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds, returning early on a stop request.

        Returns:
            True if a stop was requested.
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            pass
        return self._event.is_set()


def make_stop_on_sigterm() -> StopSignal:
    """Create a SIGTERM/SIGINT-based stop flag for the send loop.

    Registers handlers on the running event loop. Platforms without
    ``loop.add_signal_handler`` (Windows) keep the default behaviour, where
    Ctrl+C cancels the run.

    Returns:
        StopSignal that turns True when a termination signal is received.
    """
    stop = StopSignal()
    loop = asyncio.get_running_loop()

    def handle_signal() -> None:
        """Signal handler that sets the stop flag on SIGTERM/SIGINT."""
        logger.info("Termination signal received, stopping after the current round...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, handle_signal)
        except NotImplementedError:
            logger.debug(f"Signal handler for {sig.name} not supported on this platform")

    return stop
