"""Integration-focused tests for the Travel Planner FastAPI surface."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from conftest import StubCurrencyService, StubGenerator, StubWeatherService
from travel_planner.api import app as api_app
from travel_planner.api.workflow_service import PlanningService
from travel_planner.core.agents_builder import build_travel_agents
from travel_planner.core.errors import InvalidRequestError
from travel_planner.workflows.planner import TravelPlanningWorkflow


def _make_plan_payload(**overrides: Any) -> Dict[str, Any]:
    """Return a representative planning request payload."""

    payload = {
        "destination": "Paris, France",
        "start_date": "2025-03-10",
        "end_date": "2025-03-14",
        "budget": 3000,
        "interests": ["hiking", "museums"],
        "travel_style": "luxury",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def planning_service(monkeypatch) -> PlanningService:
    """Patch the API's service factory with a service backed by stub collaborators."""

    agents = build_travel_agents(StubGenerator("Day 1: Seine walk."), StubCurrencyService(), StubWeatherService())
    service = PlanningService(TravelPlanningWorkflow(agents), llm_name="stub-model")
    monkeypatch.setattr(api_app, "get_planning_service", lambda: service)
    return service


@pytest.fixture
def client(planning_service: PlanningService) -> TestClient:
    """Yield a TestClient that uses the stubbed planning service."""

    with TestClient(api_app.app) as test_client:
        yield test_client


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "travel-planner-api"}


def test_plan_returns_complete_itinerary(client: TestClient) -> None:
    response = client.post("/plan", json=_make_plan_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["destination"] == "Paris, France"
    assert Decimal(str(body["budget"]["accommodation"])) == Decimal("1200.00")
    assert "Hiking boots and daypack" in body["packing_list"]
    assert body["daily_plans"][0]["morning"]["description"] == "Day 1: Seine walk."
    assert body["emergency_contacts"]["nearest_embassy"] == "Contact your embassy in Paris, France"


def test_plan_rejects_reversed_dates(client: TestClient) -> None:
    response = client.post("/plan", json=_make_plan_payload(start_date="2025-03-20"))
    assert response.status_code == 422


def test_plan_rejects_unknown_fields(client: TestClient) -> None:
    response = client.post("/plan", json=_make_plan_payload(currency="EUR"))
    assert response.status_code == 422


def test_plan_maps_value_errors_to_400(client: TestClient, planning_service, monkeypatch) -> None:
    async def invalid(request):
        raise InvalidRequestError("A task id is required")

    monkeypatch.setattr(planning_service, "plan", invalid)

    response = client.post("/plan", json=_make_plan_payload())
    assert response.status_code == 400
    assert response.json()["detail"] == "A task id is required"


def test_plan_maps_workflow_failures_to_500(client: TestClient, planning_service, monkeypatch) -> None:
    async def broken(request):
        raise RuntimeError("model quota exceeded")

    monkeypatch.setattr(planning_service, "plan", broken)

    response = client.post("/plan", json=_make_plan_payload())
    assert response.status_code == 500
    assert response.json()["detail"] == "model quota exceeded"


def test_task_lifecycle(client: TestClient) -> None:
    created = client.post("/plan/tasks", json=_make_plan_payload())

    assert created.status_code == 202
    task_id = created.json()["task_id"]
    assert task_id.startswith("trip_")
    assert created.json()["status"] == "queued"

    status = client.get(f"/plan/tasks/{task_id}")
    assert status.status_code == 200
    assert status.json()["task_id"] == task_id
    assert status.json()["status"] in {"queued", "running", "completed"}


def test_unknown_task_returns_404(client: TestClient) -> None:
    assert client.get("/plan/tasks/missing").status_code == 404
    assert client.delete("/plan/tasks/missing").status_code == 404


def test_cleanup_endpoint_reports_removed_tasks(client: TestClient) -> None:
    response = client.post("/plan/tasks/cleanup", params={"max_age_minutes": 30})
    assert response.status_code == 200
    assert response.json() == {"removed": 0}


def test_workflow_info(client: TestClient) -> None:
    info = client.get("/workflow/info").json()["workflow_info"]

    assert info["llm_model"] == "stub-model"
    assert info["destination_lookup"] == "KeywordDestinationLookup"
    assert info["gatherers"] == ["gather_currency", "gather_weather", "gather_local_knowledge"]
    assert info["active_tasks"] == 0
