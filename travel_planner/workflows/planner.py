"""Public entry point for running one travel planning workflow.

``TravelPlanningWorkflow`` wraps the compiled LangGraph graph from
``travel_planner.core.graph_builder`` and exposes a single ``execute`` call. The
builders are re-exported so callers can assemble the pieces themselves.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from travel_planner.core.agents import TravelAgents
from travel_planner.core.agents_builder import build_travel_agents
from travel_planner.core.destinations import DestinationLookup, KeywordDestinationLookup
from travel_planner.core.errors import WorkflowCancelledError, WorkflowError
from travel_planner.core.graph_builder import build_planning_graph
from travel_planner.core.runtime import (
    CancellationToken,
    ProgressReporter,
    ProgressSink,
    QueueProgressSink,
    RunContext,
)
from travel_planner.core.schemas import TravelItinerary, TravelPlanRequest, WorkflowState

logger = logging.getLogger(__name__)


class TravelPlanningWorkflow:
    """Runs the multi-agent planning graph for one request at a time.

    The compiled graph is shared; every ``execute`` call gets its own state,
    progress reporter and cancellation token.
    """

    def __init__(self, agents: TravelAgents, lookup: Optional[DestinationLookup] = None) -> None:
        self.agents = agents
        self.lookup = lookup or KeywordDestinationLookup()
        self.graph = build_planning_graph(agents=agents, lookup=self.lookup)

    async def execute(
        self,
        request: TravelPlanRequest,
        task_id: str,
        progress_sink: Optional[ProgressSink] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> TravelItinerary:
        """Run the workflow to completion and return the assembled itinerary.

        Raises:
            InvalidRequestError: the request or task id is missing.
            WorkflowCancelledError: ``cancellation`` was triggered before the run finished.
            Exception: any failure after the gathering phase, unchanged.
        """

        context = RunContext(
            request=request,
            task_id=task_id,
            progress=ProgressReporter(progress_sink),
            cancellation=cancellation or CancellationToken(),
        )
        logger.info(f"Starting multi-agent workflow for task {task_id}")

        try:
            result: Dict[str, Any] = await self.graph.ainvoke(
                WorkflowState(task_id=task_id or "unassigned"),
                context=context,
            )
        except WorkflowCancelledError as e:
            logger.warning(f"Workflow for task {task_id} cancelled: {e.reason}")
            raise
        except Exception:
            logger.error(f"Error in multi-agent workflow for task {task_id}", exc_info=True)
            raise

        itinerary = result.get("final_itinerary")
        if itinerary is None:
            raise WorkflowError(f"Workflow for task {task_id} finished without an itinerary")

        logger.info(f"Multi-agent workflow completed for task {task_id}")
        return itinerary


__all__ = [
    "CancellationToken",
    "QueueProgressSink",
    "TravelPlanningWorkflow",
    "build_planning_graph",
    "build_travel_agents",
]
