import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional, Sequence
from uuid import uuid4

from langchain_xai import ChatXAI

from travel_planner.core.agents_builder import build_travel_agents
from travel_planner.core.config import ApiSettings
from travel_planner.core.destinations import (
    DestinationLookup,
    GeocodingDestinationLookup,
    KeywordDestinationLookup,
)
from travel_planner.core.errors import WorkflowCancelledError
from travel_planner.core.runtime import CancellationToken
from travel_planner.core.schemas import TravelItinerary, TravelPlanRequest, WorkflowProgress
from travel_planner.services import create_currency_service, create_weather_service
from travel_planner.workflows.planner import TravelPlanningWorkflow

logger = logging.getLogger(__name__)

TaskStatus = Literal["queued", "running", "completed", "failed", "cancelled"]
FINISHED_STATUSES = ("completed", "failed", "cancelled")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PlanningTask:
    """In-memory record of one background planning run."""

    task_id: str
    request: TravelPlanRequest
    status: TaskStatus = "queued"
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    progress: Optional[WorkflowProgress] = None
    itinerary: Optional[TravelItinerary] = None
    error: Optional[str] = None
    cancellation: CancellationToken = field(default_factory=CancellationToken)
    runner: Optional["asyncio.Task[None]"] = field(default=None, repr=False)

    @property
    def finished(self) -> bool:
        return self.status in FINISHED_STATUSES

    def touch(self, status: Optional[TaskStatus] = None) -> None:
        if status is not None:
            self.status = status
        self.updated_at = _utcnow()


class PlanningService:
    """Runs planning workflows and keeps track of background tasks.

    Task records live in process memory only; they are lost on restart.

    Attributes:
        workflow: Workflow facade executing one run per request
        llm_name: Model identifier reported by ``/workflow/info``
        _tasks: Task records keyed by task id
        _resources: Clients closed on shutdown
    """

    def __init__(
        self,
        workflow: TravelPlanningWorkflow,
        *,
        llm_name: str = "unknown",
        resources: Sequence[Any] = (),
    ) -> None:
        self.workflow = workflow
        self.llm_name = llm_name
        self._resources = list(resources)
        self._tasks: Dict[str, PlanningTask] = {}

    def __repr__(self) -> str:
        return (
            f"PlanningService(llm='{self.llm_name}', "
            f"lookup={type(self.workflow.lookup).__name__}, "
            f"tasks={len(self._tasks)}, active={len(self.active_tasks())})"
        )

    @staticmethod
    def new_task_id() -> str:
        return f"trip_{uuid4()}"

    async def plan(self, request: TravelPlanRequest) -> TravelItinerary:
        """Run one workflow to completion in the caller's request."""

        task_id = self.new_task_id()
        logger.info(f"Planning trip to {request.destination} as {task_id}")
        return await self.workflow.execute(request, task_id)

    def start_task(self, request: TravelPlanRequest) -> PlanningTask:
        """Queue a background run and return its record immediately."""

        task = PlanningTask(task_id=self.new_task_id(), request=request)
        self._tasks[task.task_id] = task
        task.runner = asyncio.create_task(self._run(task))
        logger.info(f"Queued planning task {task.task_id} for {request.destination}")
        return task

    async def _run(self, task: PlanningTask) -> None:
        def on_progress(update: WorkflowProgress) -> None:
            task.progress = update
            task.touch()

        task.touch("running")
        try:
            task.itinerary = await self.workflow.execute(
                task.request,
                task.task_id,
                progress_sink=on_progress,
                cancellation=task.cancellation,
            )
        except WorkflowCancelledError as e:
            task.error = e.reason
            task.touch("cancelled")
        except asyncio.CancelledError:
            task.error = task.cancellation.reason if task.cancellation.cancelled else "Task cancelled"
            task.touch("cancelled")
            raise
        except Exception as e:
            logger.error(f"Planning task {task.task_id} failed: {e}")
            task.error = str(e) or type(e).__name__
            task.touch("failed")
        else:
            task.touch("completed")

    def get_task(self, task_id: str) -> Optional[PlanningTask]:
        return self._tasks.get(task_id)

    def active_tasks(self) -> List[PlanningTask]:
        return [task for task in self._tasks.values() if not task.finished]

    def cancel_task(self, task_id: str) -> Optional[PlanningTask]:
        """Request cancellation; finished tasks are returned unchanged."""

        task = self._tasks.get(task_id)
        if task is None:
            return None
        if not task.finished:
            logger.info(f"Cancelling planning task {task_id}")
            task.cancellation.cancel("Cancelled by user")
        return task

    def cleanup_old_tasks(self, max_age_minutes: int = 60) -> int:
        """Drop finished tasks not updated for ``max_age_minutes``; returns how many."""

        cutoff = _utcnow() - timedelta(minutes=max_age_minutes)
        stale = [
            task_id
            for task_id, task in self._tasks.items()
            if task.finished and task.updated_at < cutoff
        ]
        for task_id in stale:
            self._tasks.pop(task_id, None)

        logger.info(f"Cleaned up {len(stale)} planning tasks")
        return len(stale)

    async def close(self) -> None:
        """Cancel active runs, wait for them to settle, then close shared clients."""

        active = self.active_tasks()
        runners = []
        for task in active:
            task.cancellation.cancel("Service shutting down")
            if task.runner is not None:
                task.runner.cancel()
                runners.append(task.runner)

        if runners:
            await asyncio.gather(*runners, return_exceptions=True)

        # A runner cancelled before its first step never reaches _run's handlers
        for task in active:
            if not task.finished:
                task.error = task.error or "Service shutting down"
                task.touch("cancelled")

        for resource in self._resources:
            await resource.aclose()


def _build_lookup(settings: ApiSettings) -> DestinationLookup:
    if settings.use_geocoding:
        return GeocodingDestinationLookup(
            base_url=settings.geocoding_url,
            user_agent=settings.user_agent,
            timeout_s=settings.http_timeout_s,
        )
    return KeywordDestinationLookup()


def create_planning_service(settings: ApiSettings) -> PlanningService:
    """Wire the model, data services and workflow from configuration."""

    settings.apply_langsmith_tracing()

    llm = ChatXAI(
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        api_key=settings.ensure("xai_api_key"),
    )
    currency_service = create_currency_service(settings)
    weather_service = create_weather_service(settings)

    agents = build_travel_agents(llm, currency_service, weather_service)
    workflow = TravelPlanningWorkflow(agents, _build_lookup(settings))

    return PlanningService(
        workflow,
        llm_name=settings.llm_model,
        resources=[currency_service, weather_service],
    )
