"""FastAPI surface for the multi-agent travel planning workflow."""
from __future__ import annotations

import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Any, Dict

import sentry_sdk
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from travel_planner.api.dependencies import get_planning_service, lifespan
from travel_planner.api.response_builder import _task_to_created, _task_to_response
from travel_planner.api.schemas import (
    CleanupResponse,
    PlanRequest,
    TaskCreatedResponse,
    TaskStatusResponse,
)
from travel_planner.core.errors import WorkflowCancelledError
from travel_planner.core.graph_builder import GATHERERS
from travel_planner.core.schemas import TravelItinerary

logger = logging.getLogger(__name__)

if os.getenv("SENTRY_DSN"):  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        enable_logs=True,
        send_default_pii=True,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="Travel Planner API", version="0.1.0", lifespan=lifespan)

origins = [
    "http://localhost:3000",
    "http://localhost:3001"
]


app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/plan", response_model=TravelItinerary)
async def plan(payload: PlanRequest) -> TravelItinerary:
    """Run the multi-agent planning workflow and return the finished itinerary.

    The workflow gathers currency, weather and local knowledge in parallel,
    then drafts the itinerary, allocates the budget and assembles tips,
    packing list and emergency information.

    Args:
        payload: Destination, travel dates, budget (USD), interests, travel
                style and optional special requests.

    Returns:
        The assembled TravelItinerary.

    Raises:
        HTTPException: 400 for invalid input, 409 when cancelled, 500 for workflow errors

    Example JSON payload:
        ```json
        {
            "destination": "Paris, France",
            "start_date": "2025-10-01",
            "end_date": "2025-10-05",
            "budget": 3000,
            "interests": ["museums", "hiking"],
            "travel_style": "luxury"
        }
        ```
    """

    logger.info("Starting new travel planning request")
    logger.info(f"Destination: {payload.destination}")
    logger.info(f"Budget: {payload.budget} USD ({payload.travel_style})")
    logger.info(f"Travel dates: {payload.start_date} to {payload.end_date}")

    service = get_planning_service()
    try:
        itinerary = await service.plan(payload)
        logger.info("Planning workflow completed successfully")
    except WorkflowCancelledError as exc:
        logger.warning(f"Planning cancelled: {exc.reason}")
        raise HTTPException(status_code=409, detail=exc.reason) from exc
    except ValueError as exc:
        logger.error(f"Value error during plan: {str(exc)}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unexpected error during plan: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return itinerary


@app.post("/plan/tasks", response_model=TaskCreatedResponse, status_code=202)
async def start_task(payload: PlanRequest) -> TaskCreatedResponse:
    """Queue a background planning run; poll ``/plan/tasks/{task_id}`` for progress."""

    service = get_planning_service()
    task = service.start_task(payload)
    return _task_to_created(task)


@app.get("/plan/tasks/{task_id}", response_model=TaskStatusResponse)
async def get_task(task_id: str) -> TaskStatusResponse:
    task = get_planning_service().get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Unknown planning task '{task_id}'")
    return _task_to_response(task)


@app.delete("/plan/tasks/{task_id}", response_model=TaskStatusResponse)
async def cancel_task(task_id: str) -> TaskStatusResponse:
    """Request cancellation of a running task."""

    task = get_planning_service().cancel_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Unknown planning task '{task_id}'")
    return _task_to_response(task)


@app.post("/plan/tasks/cleanup", response_model=CleanupResponse)
async def cleanup_tasks(max_age_minutes: int = 60) -> CleanupResponse:
    """Drop finished tasks older than ``max_age_minutes``."""

    logger.info("Cleanup tasks request received")
    try:
        removed = get_planning_service().cleanup_old_tasks(max_age_minutes)
    except Exception as exc:
        logger.error(f"Unexpected error during cleanup tasks: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return CleanupResponse(removed=removed)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "travel-planner-api"}


@app.get("/workflow/info")
async def get_workflow_info() -> Dict[str, Any]:
    """Get detailed information about the workflow configuration."""
    service = get_planning_service()

    return {
        'workflow_info': {
            'llm_model': service.llm_name,
            'destination_lookup': type(service.workflow.lookup).__name__,
            'gatherers': list(GATHERERS),
            'active_tasks': len(service.active_tasks()),
        }
    }
