"""Run status polling.

A run is driven to completion by asking the gateway for its status at a
fixed interval until it reaches a terminal state or the attempt budget is
spent. Only "still running" states are retried. A failed status request
aborts the loop at once.

The wait between attempts is an ``asyncio.sleep``, so cancelling the task
that awaits ``poll`` stops the loop at the next wait.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from src.assistant.errors import PollError, RemoteCallError, RunTerminatedError, RunTimeoutError
from src.models.remote import RunState, RunStatus

logger = logging.getLogger(__name__)

FAILURE_STATUSES = frozenset({RunStatus.FAILED, RunStatus.CANCELLED})


class RunStatusSource(Protocol):
    """Anything that can report a run's status (the gateway, or a test fake)."""

    async def get_run_status(self, thread_id: str, run_id: str) -> RunState: ...


class RunPoller:
    """Bounded polling loop for a single assistant run."""

    def __init__(
        self,
        gateway: RunStatusSource,
        *,
        interval: float = 1.0,
        max_attempts: int = 30,
        expired_is_terminal: bool = False,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize the poller.

        Args:
            gateway: Source of run status snapshots.
            interval: Seconds to wait between attempts.
            max_attempts: Number of status checks before giving up.
            expired_is_terminal: Fail on "expired" instead of polling on.
            sleep: Awaitable delay, replaceable in tests.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._gateway = gateway
        self._interval = interval
        self._max_attempts = max_attempts
        self._sleep = sleep
        self._failure_statuses = FAILURE_STATUSES
        if expired_is_terminal:
            self._failure_statuses = FAILURE_STATUSES | {RunStatus.EXPIRED}

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def poll(self, thread_id: str, run_id: str) -> RunStatus:
        """Wait for a run to complete.

        Args:
            thread_id: Thread the run belongs to.
            run_id: Run to watch.

        Returns:
            RunStatus.COMPLETED once the run completes.

        Raises:
            ValueError: If either identifier is empty.
            RunTerminatedError: If the run reports a failure status.
            PollError: If a status request fails.
            RunTimeoutError: If the run is still going after the last attempt.
        """
        if not thread_id or not run_id:
            raise ValueError("thread_id and run_id are required")

        for attempt in range(1, self._max_attempts + 1):
            try:
                run = await self._gateway.get_run_status(thread_id, run_id)
            except RemoteCallError as e:
                logger.warning(f"Status check {attempt} for run {run_id} failed: {e}")
                raise PollError(e) from e

            logger.debug(f"Run {run_id} attempt {attempt}/{self._max_attempts}: {run.status.value}")

            if run.status == RunStatus.COMPLETED:
                logger.info(f"Run {run_id} completed after {attempt} status checks")
                return run.status
            if run.status in self._failure_statuses:
                logger.info(f"Run {run_id} ended with status {run.status.value}")
                raise RunTerminatedError(run.status)

            if attempt < self._max_attempts:
                await self._sleep(self._interval)

        logger.warning(f"Run {run_id} timed out after {self._max_attempts} status checks")
        raise RunTimeoutError(self._max_attempts)
