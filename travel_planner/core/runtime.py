"""Per-run runtime helpers: progress reporting and cooperative cancellation."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from travel_planner.core.errors import WorkflowCancelledError
from travel_planner.core.schemas import TravelPlanRequest, WorkflowProgress

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressSink = Callable[[WorkflowProgress], Any]


class ProgressReporter:
    """Push progress notifications to a caller-supplied sink.

    Reporting is fire-and-forget: a failing sink is logged and never breaks
    the run. Percentages are clamped to the highest value already reported so
    the stream stays non-decreasing while the gatherers tick concurrently.
    """

    def __init__(self, sink: Optional[ProgressSink] = None) -> None:
        self._sink = sink
        self._high_water = 0

    @property
    def last_percentage(self) -> int:
        return self._high_water

    def report(self, percentage: int, step: str, agent_name: Optional[str] = None) -> WorkflowProgress:
        percentage = max(percentage, self._high_water)
        self._high_water = percentage
        update = WorkflowProgress(percentage=percentage, step=step, agent_name=agent_name)
        logger.debug(f"Progress {update.percentage}%: {update.render()}")

        if self._sink is not None:
            try:
                self._sink(update)
            except Exception as e:
                logger.warning(f"Progress sink failed for '{update.render()}': {e}")
        return update


class QueueProgressSink:
    """Sink that forwards progress into an ``asyncio.Queue`` drained by the caller."""

    def __init__(self, queue: Optional["asyncio.Queue[WorkflowProgress]"] = None) -> None:
        self.queue: "asyncio.Queue[WorkflowProgress]" = queue if queue is not None else asyncio.Queue()

    def __call__(self, update: WorkflowProgress) -> None:
        self.queue.put_nowait(update)


class CancellationToken:
    """Cooperative cancellation signal threaded through every phase of a run."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str:
        return self._reason or "Cancellation requested"

    def cancel(self, reason: Optional[str] = None) -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise WorkflowCancelledError(self.reason)

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` but abandon it as soon as cancellation is requested."""

        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise WorkflowCancelledError(self.reason)

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            waiter.cancel()

        if work in done:
            return work.result()

        work.cancel()
        try:
            await work
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.debug(f"Abandoned call failed after cancellation: {e}")
        raise WorkflowCancelledError(self.reason)


@dataclass(slots=True)
class RunContext:
    """Runtime context for a single workflow run, never shared across runs."""

    request: TravelPlanRequest
    task_id: str
    progress: ProgressReporter
    cancellation: CancellationToken
