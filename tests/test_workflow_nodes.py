"""Unit tests for the workflow nodes and assembly helpers."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from conftest import StubCurrencyService, StubGenerator, StubWeatherService, make_forecast
from travel_planner.core import nodes
from travel_planner.core.agents_builder import build_travel_agents
from travel_planner.core.assembly import (
    BASE_PACKING_LIST,
    GENERAL_TIPS,
    build_day_plans,
    build_packing_list,
    build_weather_summary,
    derive_travel_tips,
    emergency_info,
    summarize_itinerary,
)
from travel_planner.core.budget import allocate_budget
from travel_planner.core.destinations import KeywordDestinationLookup
from travel_planner.core.errors import InvalidRequestError, WorkflowCancelledError
from travel_planner.core.runtime import CancellationToken, ProgressReporter, RunContext
from travel_planner.core.schemas import ContextKey, CurrencyConversion, WorkflowState


@pytest.fixture
def progress_log():
    return []


@pytest.fixture
def make_runtime(make_request, progress_log):
    """Build a runtime stand-in exposing only ``context``, as the nodes use it."""

    def _make(**overrides):
        context = RunContext(
            request=overrides.pop("request", None) or make_request(**overrides),
            task_id="task-1",
            progress=ProgressReporter(progress_log.append),
            cancellation=CancellationToken(),
        )
        return SimpleNamespace(context=context)

    return _make


@pytest.fixture
def base_state():
    return WorkflowState(task_id="task-1")


# ---------------------------------------------------------------------------
# Init and gathering
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_start_node_reports_ten_percent(base_state, make_runtime, progress_log):
    update = await nodes.make_start_node()(base_state, make_runtime())

    assert update == {}
    assert progress_log[0].percentage == 10
    assert progress_log[0].render() == "[Workflow] Gathering destination information..."


@pytest.mark.asyncio
async def test_start_node_requires_task_id(base_state, make_runtime):
    runtime = make_runtime()
    runtime.context.task_id = ""

    with pytest.raises(InvalidRequestError):
        await nodes.make_start_node()(base_state, runtime)


@pytest.mark.asyncio
async def test_currency_node_stores_conversion(base_state, make_runtime, progress_log, agents, currency_service):
    node = nodes.make_currency_node(agents.currency, KeywordDestinationLookup())

    update = await node(base_state, make_runtime(destination="Tokyo, Japan"))

    assert currency_service.calls == [(Decimal("3000"), "USD", "JPY")]
    assert isinstance(update["currency_conversion"], CurrencyConversion)
    assert update["completed_steps"] == ["CurrencyGathering"]
    assert update["gathering_outcomes"][0].status == "succeeded"
    assert progress_log[0].percentage == 15
    assert progress_log[0].agent_name == "CurrencyConverter"


@pytest.mark.asyncio
async def test_currency_node_skips_usd_destinations(base_state, make_runtime, agents, currency_service):
    node = nodes.make_currency_node(agents.currency, KeywordDestinationLookup())

    update = await node(base_state, make_runtime(destination="Chicago"))

    assert currency_service.calls == []
    assert "currency_conversion" not in update
    assert update["completed_steps"] == ["CurrencyGathering"]
    assert update["gathering_outcomes"][0].status == "skipped"


@pytest.mark.asyncio
async def test_currency_node_failure_is_recorded_not_raised(base_state, make_runtime):
    failing = build_travel_agents(
        StubGenerator(), StubCurrencyService(error=RuntimeError("rates offline")), StubWeatherService()
    )
    node = nodes.make_currency_node(failing.currency, KeywordDestinationLookup())

    update = await node(base_state, make_runtime())

    assert set(update) == {"gathering_outcomes"}
    outcome = update["gathering_outcomes"][0]
    assert (outcome.step, outcome.status, outcome.reason) == ("CurrencyGathering", "failed", "rates offline")


@pytest.mark.asyncio
async def test_weather_node_skips_unknown_coordinates(base_state, make_runtime, agents, weather_service, progress_log):
    node = nodes.make_weather_node(agents.weather, KeywordDestinationLookup())

    update = await node(base_state, make_runtime(destination="Paris"))

    assert weather_service.calls == []
    assert "weather_forecasts" not in update
    assert update["gathering_outcomes"][0].status == "skipped"
    assert progress_log[0].percentage == 20


@pytest.mark.asyncio
async def test_weather_node_fetches_trip_length(base_state, make_runtime, agents, weather_service):
    weather_service.forecasts = [make_forecast(52)]
    node = nodes.make_weather_node(agents.weather, KeywordDestinationLookup())
    runtime = make_runtime(destination="Seattle, WA")

    update = await node(base_state, runtime)

    latitude, longitude, start, days = weather_service.calls[0]
    assert (latitude, longitude) == (47.6062, -122.3321)
    assert start == runtime.context.request.start_date
    assert days == 5
    assert update["weather_forecasts"] == weather_service.forecasts


@pytest.mark.asyncio
async def test_weather_node_failure_is_recorded(base_state, make_runtime):
    failing = build_travel_agents(
        StubGenerator(), StubCurrencyService(), StubWeatherService(error=ValueError("bad grid"))
    )
    node = nodes.make_weather_node(failing.weather, KeywordDestinationLookup())

    update = await node(base_state, make_runtime(destination="Boston"))

    assert update["gathering_outcomes"][0].status == "failed"
    assert "weather_forecasts" not in update


@pytest.mark.asyncio
async def test_local_knowledge_node_stores_text(base_state, make_runtime, agents, generator, progress_log):
    update = await nodes.make_local_knowledge_node(agents.local_knowledge)(base_state, make_runtime())

    assert update["local_knowledge"] == generator.answer
    assert update["completed_steps"] == ["LocalKnowledgeGathering"]
    assert progress_log[0].percentage == 25


@pytest.mark.asyncio
async def test_gatherer_reraises_cancellation(base_state, make_runtime, agents, generator):
    runtime = make_runtime()
    runtime.context.cancellation.cancel("stop")

    with pytest.raises(WorkflowCancelledError):
        await nodes.make_local_knowledge_node(agents.local_knowledge)(base_state, runtime)
    assert generator.prompts == []


@pytest.mark.asyncio
async def test_finish_gathering_advances_phase(make_runtime):
    state = WorkflowState(task_id="task-1", completed_steps=["CurrencyGathering"])

    update = await nodes.make_finish_gathering_node()(state, make_runtime())

    assert update == {"completed_steps": ["InformationGathering"], "current_phase": 1}


@pytest.mark.asyncio
async def test_finish_gathering_stops_when_cancelled(base_state, make_runtime):
    runtime = make_runtime()
    runtime.context.cancellation.cancel()

    with pytest.raises(WorkflowCancelledError):
        await nodes.make_finish_gathering_node()(base_state, runtime)


# ---------------------------------------------------------------------------
# Itinerary, budget and assembly
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_itinerary_node_defaults_missing_context(base_state, make_runtime, agents, generator, progress_log):
    update = await nodes.make_itinerary_node(agents.itinerary)(base_state, make_runtime())

    assert update["itinerary"] == generator.answer
    assert update["current_phase"] == 2
    assert update["completed_steps"] == ["ItineraryPlanning"]
    assert "Weather forecast not available" in generator.prompts[0]
    assert progress_log[0].render() == "[ItineraryPlanner] Creating personalized itinerary..."


@pytest.mark.asyncio
async def test_itinerary_node_errors_propagate(base_state, make_runtime):
    class ExplodingGenerator:
        async def generate(self, prompt, *, instructions=None):
            raise RuntimeError("model unavailable")

    failing = build_travel_agents(ExplodingGenerator(), StubCurrencyService(), StubWeatherService())

    with pytest.raises(RuntimeError, match="model unavailable"):
        await nodes.make_itinerary_node(failing.itinerary)(base_state, make_runtime())


@pytest.mark.asyncio
async def test_budget_node_truncates_itinerary(make_runtime, agents, generator):
    state = WorkflowState(task_id="task-1", itinerary="x" * 800)

    update = await nodes.make_budget_node(agents.budget)(state, make_runtime(travel_style="budget", budget=1000))

    assert "x" * 500 + "..." in generator.prompts[0]
    assert "x" * 501 not in generator.prompts[0]
    assert update["budget"].emergency == Decimal("50.00")
    assert update["current_phase"] == 3


@pytest.mark.asyncio
async def test_assembly_node_builds_itinerary(make_runtime, progress_log):
    conversion = CurrencyConversion.identity(Decimal("3000"), "USD", "EUR")
    state = WorkflowState(
        task_id="task-1",
        currency_conversion=conversion,
        itinerary="Day 1: Louvre",
        budget=allocate_budget(Decimal("3000"), "luxury"),
    )

    update = await nodes.make_assembly_node()(state, make_runtime(interests=["Hiking"]))

    result = update["final_itinerary"]
    assert result.task_id == "task-1"
    assert result.travel_tips[0] == conversion.summary()
    assert "Hiking boots and daypack" in result.packing_list
    assert result.daily_plans[0].morning.description == "Day 1: Louvre"
    assert update["current_phase"] == 4
    assert [p.percentage for p in progress_log] == [85, 100]
    assert progress_log[-1].render() == "[Workflow] Travel plan complete!"


@pytest.mark.asyncio
async def test_assembly_node_requires_budget(base_state, make_runtime):
    with pytest.raises(RuntimeError):
        await nodes.make_assembly_node()(base_state, make_runtime())


def test_weather_summary_uses_first_period_per_day():
    forecasts = [
        make_forecast(55, "Sunny", when=datetime(2025, 3, 10, 6, tzinfo=timezone.utc)),
        make_forecast(40, "Clear", when=datetime(2025, 3, 10, 18, tzinfo=timezone.utc)),
        make_forecast(50, "Rain", when=datetime(2025, 3, 11, 6, tzinfo=timezone.utc)),
    ]

    assert build_weather_summary(forecasts) == "Mar 10: 55°F, Sunny\nMar 11: 50°F, Rain"
    assert build_weather_summary([]) == "Weather forecast not available"


def test_summarize_itinerary():
    assert summarize_itinerary("short") == "short"
    assert summarize_itinerary("a" * 500) == "a" * 500
    assert summarize_itinerary("a" * 501) == "a" * 500 + "..."


def test_travel_tips_without_context():
    assert derive_travel_tips(None, []) == list(GENERAL_TIPS)


def test_travel_tips_keep_three_distinct_weather_hints():
    forecasts = [make_forecast(35, "Snow"), make_forecast(35, "Rain"), make_forecast(90, "Sunny")]

    tips = derive_travel_tips(None, forecasts)

    assert tips[:3] == [
        "Pack warm layers and a heavy jacket",
        "Waterproof boots and winter gear recommended",
        "Don't forget an umbrella or rain jacket",
    ]
    assert tips[3:] == list(GENERAL_TIPS)


def test_packing_list_base_items_only():
    assert build_packing_list([], ["museums"]) == list(BASE_PACKING_LIST)


def test_packing_list_cold_and_rainy():
    packing = build_packing_list([make_forecast(40, "Light Rain"), make_forecast(45, "Cloudy")], [])

    assert packing[5:] == [
        "Warm jacket and layers",
        "Cold weather accessories (hat, gloves)",
        "Umbrella or rain jacket",
    ]


def test_packing_list_hot_weather_and_hiking():
    packing = build_packing_list([make_forecast(80, "Sunny"), make_forecast(90, "Sunny")], ["Day HIKING trips"])

    assert packing[5:] == [
        "Sunscreen and sunglasses",
        "Light, breathable clothing",
        "Hiking boots and daypack",
    ]


def test_packing_list_mild_weather_adds_nothing():
    assert build_packing_list([make_forecast(50), make_forecast(75)], []) == list(BASE_PACKING_LIST)


def test_day_plan_holds_whole_itinerary(make_request):
    request = make_request(destination="Rome")

    plans = build_day_plans(request, "Full itinerary text")

    assert len(plans) == 1
    plan = plans[0]
    assert plan.day_number == 1
    assert plan.day_date == request.start_date
    assert plan.theme == "5-Day Rome Itinerary"
    assert plan.morning.location == "Rome"
    assert plan.morning.estimated_cost == Decimal("0")
    assert plan.lunch is None


def test_emergency_info_mentions_destination():
    info = emergency_info("Tokyo")
    assert info.local_emergency_number == "112 (EU) or 911 (US/Canada)"
    assert info.nearest_embassy == "Contact your embassy in Tokyo"
    assert info.healthcare_info == "Travel with comprehensive health insurance."


def test_context_keys_match_node_updates():
    assert WorkflowState.context_update(ContextKey.BUDGET, None) == {"budget": None}
