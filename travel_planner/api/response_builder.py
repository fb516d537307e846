from travel_planner.api.schemas import TaskCreatedResponse, TaskStatusResponse
from travel_planner.api.workflow_service import PlanningTask


def _task_to_created(task: PlanningTask) -> TaskCreatedResponse:
    return TaskCreatedResponse(task_id=task.task_id, status=task.status)


def _task_to_response(task: PlanningTask) -> TaskStatusResponse:
    progress = task.progress

    return TaskStatusResponse(
        task_id=task.task_id,
        status=task.status,
        progress_percentage=progress.percentage if progress else 0,
        current_step=progress.render() if progress else None,
        itinerary=task.itinerary if task.status == "completed" else None,
        error=task.error,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )
