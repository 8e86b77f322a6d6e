"""Send loop that publishes the payload once per round."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from telemetry_pusher.ports.endpoint import Endpoint
from telemetry_pusher.ports.payload import PayloadDocument
from telemetry_pusher.ports.publish import PublishResult
from telemetry_pusher.ports.run import LoopState, RoundOutcome, RunPlan, RunSummary

__all__ = ["start_send_loop"]

logger = logging.getLogger(__name__)

PublishFn = Callable[[Endpoint, PayloadDocument], Awaitable[PublishResult]]
SleepFn = Callable[[float], Awaitable[object]]


def _never_stop() -> bool:
    return False


async def start_send_loop(
    plan: RunPlan,
    endpoint: Endpoint,
    payload: PayloadDocument,
    publish_fn: PublishFn,
    stop_fn: Callable[[], bool] = _never_stop,
    sleep_fn: SleepFn = asyncio.sleep,
) -> RunSummary:
    """Run the send loop until the plan is exhausted or a stop is requested.

    Each round:
    1. Publish the payload once (awaited, never concurrent with another round).
    2. Record the outcome in the run summary.
    3. Stop if this was the last planned round.
    4. Otherwise wait ``plan.interval_sec`` (skipped when 0) and go again.

    A failed round is counted and the loop carries on; the next scheduled
    round is the only "retry". With ``plan.round_count == 0`` the loop only
    ends through ``stop_fn`` or task cancellation.

    Args:
        plan: Interval and round count.
        endpoint: Resolved telemetry target.
        payload: Document sent unchanged on every round.
        publish_fn: Async function performing one publish attempt.
        stop_fn: Callable returning True once the run should end early.
        sleep_fn: Async function used for the inter-round wait.

    Returns:
        Final run summary in state COMPLETED.

    Raises:
        asyncio.CancelledError: If the task is cancelled; the summary is
            marked ABORTED and logged before re-raising.
    """
    summary = RunSummary(state=LoopState.RUNNING)
    round_index = 1

    if plan.unbounded and plan.interval_sec == 0:
        logger.warning("Unbounded run with no interval: publishing in a tight loop.")

    logger.info(
        f"Send loop started: url={endpoint.base_url}, interval={plan.interval_sec}s, "
        f"rounds={'unbounded' if plan.unbounded else plan.round_count}"
    )

    try:
        while True:
            if stop_fn():
                summary.interrupted = True
                break

            outcome = await _run_round(round_index, endpoint, payload, publish_fn)
            summary.record(outcome)
            _log_outcome(outcome, plan)

            if plan.is_last_round(round_index):
                break

            if plan.interval_sec > 0:
                logger.debug(f"Waiting {plan.interval_sec}s before round {round_index + 1}")
                await sleep_fn(plan.interval_sec)

            round_index += 1
    except asyncio.CancelledError:
        summary.state = LoopState.ABORTED
        logger.warning(f"Send loop cancelled: {summary}")
        raise

    summary.state = LoopState.COMPLETED
    logger.info(f"Send loop finished: {summary}")
    return summary


async def _run_round(
    round_index: int,
    endpoint: Endpoint,
    payload: PayloadDocument,
    publish_fn: PublishFn,
) -> RoundOutcome:
    """Run one publish attempt and turn it into an outcome."""
    try:
        result = await publish_fn(endpoint, payload)
    except asyncio.CancelledError:
        raise
    except Exception as e:  # noqa: BLE001
        logger.error(f"Unexpected error in round {round_index}: {e}", exc_info=True)
        return RoundOutcome(round_index=round_index, succeeded=False, detail=f"unexpected error: {e}")

    return RoundOutcome(round_index=round_index, succeeded=result.ok, detail=result.reason)


def _log_outcome(outcome: RoundOutcome, plan: RunPlan) -> None:
    total = "∞" if plan.unbounded else str(plan.round_count)
    if outcome.succeeded:
        logger.info(f"Round {outcome.round_index}/{total} sent: {outcome.detail}")
    else:
        logger.warning(f"Round {outcome.round_index}/{total} failed: {outcome.detail}")
