"""Wait for a newly created index to become ready.

Index creation is eventually consistent: the create call returns before the
index can serve traffic. ``wait_until_ready`` re-runs a readiness check until
it passes or a deadline elapses, sleeping at most five seconds between checks.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

import structlog
from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_result

from pinecone_sdk.errors import PineconeTimeoutError

logger = structlog.get_logger()

DEFAULT_WAIT = timedelta(seconds=300)
MAX_POLL_INTERVAL_SECONDS = 5.0

ReadinessCheck = Callable[[], Awaitable[bool]]
Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class WaitPolicy:
    """How long a create call waits for the index to become ready.

    ``timeout`` of ``None`` means return immediately without polling.
    """

    timeout: timedelta | None = DEFAULT_WAIT

    @classmethod
    def wait_for(cls, timeout: timedelta | float) -> "WaitPolicy":
        """Wait up to ``timeout`` (a timedelta or a number of seconds)."""
        if not isinstance(timeout, timedelta):
            timeout = timedelta(seconds=timeout)
        if timeout < timedelta(0):
            raise ValueError("timeout must not be negative")
        return cls(timeout=timeout)

    @classmethod
    def no_wait(cls) -> "WaitPolicy":
        """Return as soon as the create call succeeds."""
        return cls(timeout=None)


async def wait_until_ready(
    resource_name: str,
    policy: WaitPolicy,
    readiness_check: ReadinessCheck,
    *,
    sleep: Sleep = asyncio.sleep,
    clock: Clock = time.monotonic,
) -> None:
    """Poll ``readiness_check`` until it returns True or the policy's deadline.

    The check must not raise for transient failures; callers wrap their
    status query so that errors count as "not ready yet". The deadline is
    checked once per attempt, after the check, so the final sleep can overrun
    it by at most one poll interval.

    Args:
        resource_name: Name used in logs and in the timeout error.
        policy: Wait policy; ``WaitPolicy.no_wait()`` returns immediately.
        readiness_check: Async predicate, True once the resource is usable.
        sleep: Awaitable sleep, cancellable with the enclosing task.
        clock: Monotonic clock in seconds.

    Raises:
        PineconeTimeoutError: If the resource is not ready when
            ``elapsed >= timeout``.
    """
    if policy.timeout is None:
        logger.debug("index_poll_skipped", index=resource_name)
        return

    deadline = policy.timeout.total_seconds()
    started = clock()

    def elapsed() -> float:
        return clock() - started

    def deadline_reached(_state: RetryCallState) -> bool:
        return elapsed() >= deadline

    def next_interval(_state: RetryCallState) -> float:
        return max(0.0, min(deadline - elapsed(), MAX_POLL_INTERVAL_SECONDS))

    def log_not_ready(state: RetryCallState) -> None:
        logger.debug(
            "index_poll_not_ready",
            index=resource_name,
            attempt=state.attempt_number,
            elapsed_seconds=round(elapsed(), 3),
        )

    retrying = AsyncRetrying(
        retry=retry_if_result(lambda ready: not ready),
        stop=deadline_reached,
        wait=next_interval,
        sleep=sleep,
        before_sleep=log_not_ready,
    )

    try:
        await retrying(readiness_check)
    except RetryError as e:
        logger.warning(
            "index_poll_timeout",
            index=resource_name,
            timeout_seconds=deadline,
            attempts=e.last_attempt.attempt_number,
        )
        raise PineconeTimeoutError(resource_name, deadline) from e

    logger.info(
        "index_ready", index=resource_name, elapsed_seconds=round(elapsed(), 3)
    )
