"""Tests for progress reporting and cooperative cancellation."""
from __future__ import annotations

import asyncio
import logging

import pytest

from travel_planner.core.errors import WorkflowCancelledError
from travel_planner.core.runtime import CancellationToken, ProgressReporter, QueueProgressSink


def test_progress_reporter_forwards_to_sink():
    received = []
    reporter = ProgressReporter(received.append)

    reporter.report(10, "Gathering destination information...", "Workflow")
    reporter.report(15, "Converting budget to local currency...", "CurrencyConverter")

    assert [(p.percentage, p.agent_name) for p in received] == [(10, "Workflow"), (15, "CurrencyConverter")]
    assert reporter.last_percentage == 15


def test_progress_reporter_clamps_to_high_water_mark():
    received = []
    reporter = ProgressReporter(received.append)

    reporter.report(25, "Gathering local knowledge and tips...", "LocalKnowledge")
    update = reporter.report(15, "Converting budget to local currency...", "CurrencyConverter")

    assert update.percentage == 25
    assert update.step == "Converting budget to local currency..."
    assert [p.percentage for p in received] == [25, 25]


def test_progress_reporter_without_sink():
    reporter = ProgressReporter()
    assert reporter.report(40, "Creating personalized itinerary...").percentage == 40


def test_failing_sink_does_not_break_reporting(caplog):
    def broken_sink(update):
        raise RuntimeError("socket closed")

    reporter = ProgressReporter(broken_sink)
    with caplog.at_level(logging.WARNING):
        update = reporter.report(70, "Optimizing budget allocation...", "BudgetOptimizer")

    assert update.percentage == 70
    assert "socket closed" in caplog.text


@pytest.mark.asyncio
async def test_queue_sink_collects_updates():
    sink = QueueProgressSink()
    reporter = ProgressReporter(sink)

    reporter.report(85, "Assembling complete travel plan...", "Workflow")
    reporter.report(100, "Travel plan complete!", "Workflow")

    first = await sink.queue.get()
    second = await sink.queue.get()
    assert (first.percentage, second.percentage) == (85, 100)


def test_cancellation_token_state():
    token = CancellationToken()
    assert not token.cancelled
    token.raise_if_cancelled()

    token.cancel("user asked")
    token.cancel("second reason is ignored")

    assert token.cancelled
    assert token.reason == "user asked"
    with pytest.raises(WorkflowCancelledError) as excinfo:
        token.raise_if_cancelled()
    assert excinfo.value.reason == "user asked"


@pytest.mark.asyncio
async def test_run_returns_result_when_not_cancelled():
    token = CancellationToken()

    async def work():
        await asyncio.sleep(0)
        return "done"

    assert await token.run(work()) == "done"


@pytest.mark.asyncio
async def test_run_propagates_work_errors():
    token = CancellationToken()

    async def work():
        raise ValueError("bad payload")

    with pytest.raises(ValueError):
        await token.run(work())


@pytest.mark.asyncio
async def test_run_aborts_in_flight_call_on_cancel():
    token = CancellationToken()
    finished = False

    async def slow():
        nonlocal finished
        await asyncio.sleep(10)
        finished = True

    async def cancel_soon():
        await asyncio.sleep(0.01)
        token.cancel("stop")

    canceller = asyncio.create_task(cancel_soon())
    with pytest.raises(WorkflowCancelledError):
        await asyncio.wait_for(token.run(slow()), timeout=2)
    await canceller
    assert not finished


@pytest.mark.asyncio
async def test_run_refuses_to_start_after_cancel():
    token = CancellationToken()
    token.cancel()
    started = False

    async def work():
        nonlocal started
        started = True

    coro = work()
    with pytest.raises(WorkflowCancelledError):
        await token.run(coro)
    coro.close()
    assert not started
