from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from travel_planner.core.schemas import TravelItinerary, TravelPlanRequest


class PlanRequest(TravelPlanRequest):
    """Request payload used to start a new planning run."""
    pass


class TaskCreatedResponse(BaseModel):
    """Returned when a background planning task is queued."""

    task_id: str = Field(..., description="Identifier used to poll or cancel the task")
    status: Literal["queued", "running", "completed", "failed", "cancelled"] = Field(
        default="queued", description="Task status at creation time"
    )


class TaskStatusResponse(BaseModel):
    """Snapshot of a background planning task."""

    task_id: str = Field(..., description="Task identifier")
    status: Literal["queued", "running", "completed", "failed", "cancelled"] = Field(
        ..., description="Current task status"
    )
    progress_percentage: int = Field(
        default=0, description="Last reported progress percentage (0-100)"
    )
    current_step: Optional[str] = Field(
        default=None, description="Last reported step, rendered as '[Agent] Step'"
    )
    itinerary: Optional[TravelItinerary] = Field(
        default=None, description="Completed travel plan when status is 'completed'"
    )
    error: Optional[str] = Field(
        default=None, description="Failure or cancellation reason"
    )
    created_at: datetime = Field(..., description="When the task was queued (UTC)")
    updated_at: datetime = Field(..., description="Last status or progress change (UTC)")


class CleanupResponse(BaseModel):
    removed: int = Field(..., description="Number of finished tasks dropped")
