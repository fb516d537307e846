"""LangGraph nodes for the travel planning workflow.

Every node is created by a ``make_*_node`` factory that binds the agent (and,
for the gatherers, the destination lookup) it needs. Nodes read the immutable
request, progress reporter and cancellation token from the run context and
return partial state updates; LangGraph merges concurrent updates with the
reducers declared on :class:`WorkflowState`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from langgraph.runtime import Runtime

from travel_planner.core.agents import (
    BudgetOptimizerAgent,
    CurrencyConverterAgent,
    ItineraryPlannerAgent,
    LocalKnowledgeAgent,
    WeatherAdvisorAgent,
)
from travel_planner.core.assembly import (
    build_day_plans,
    build_packing_list,
    build_weather_summary,
    derive_travel_tips,
    emergency_info,
    summarize_itinerary,
)
from travel_planner.core.destinations import DEFAULT_CURRENCY, UNKNOWN_COORDINATES, DestinationLookup
from travel_planner.core.errors import InvalidRequestError, WorkflowCancelledError
from travel_planner.core.runtime import RunContext
from travel_planner.core.schemas import (
    ContextKey,
    CurrencyConversion,
    GatherOutcome,
    TravelItinerary,
    WorkflowState,
)

logger = logging.getLogger(__name__)

WORKFLOW_AGENT = "Workflow"

CURRENCY_STEP = "CurrencyGathering"
WEATHER_STEP = "WeatherGathering"
LOCAL_KNOWLEDGE_STEP = "LocalKnowledgeGathering"
GATHERING_STEP = "InformationGathering"
ITINERARY_STEP = "ItineraryPlanning"
BUDGET_STEP = "BudgetOptimization"
ASSEMBLY_STEP = "FinalAssembly"


def _gathered(step: str, outcome: GatherOutcome, **updates: Any) -> Dict[str, Any]:
    """Node update for a gatherer that succeeded or skipped its lookup."""

    return {**updates, **WorkflowState.step_completed(step), "gathering_outcomes": [outcome]}


def _gather_failed(step: str, task_id: str, error: Exception) -> Dict[str, Any]:
    logger.warning(f"[{task_id}] {step} failed, continuing without it: {error}")
    return {"gathering_outcomes": [GatherOutcome(step=step, status="failed", reason=str(error) or type(error).__name__)]}


def make_start_node():
    """Return the Init node: checks the run inputs and announces gathering."""

    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        if ctx.request is None:
            raise InvalidRequestError("A travel plan request is required")
        if not ctx.task_id:
            raise InvalidRequestError("A task id is required")

        ctx.cancellation.raise_if_cancelled()
        logger.info(f"[{ctx.task_id}] Starting travel planning workflow for {ctx.request.destination}")
        ctx.progress.report(10, "Gathering destination information...", WORKFLOW_AGENT)
        return {}

    return node


def make_currency_node(agent: CurrencyConverterAgent, lookup: DestinationLookup):
    """Return the gatherer converting the budget into the destination currency."""

    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        request = ctx.request
        try:
            ctx.progress.report(15, "Converting budget to local currency...", agent.agent_type)
            target = await ctx.cancellation.run(lookup.currency_for(request.destination))
            if target == DEFAULT_CURRENCY:
                logger.info(f"[{ctx.task_id}] Destination uses {target}, skipping conversion")
                return _gathered(
                    CURRENCY_STEP,
                    GatherOutcome(step=CURRENCY_STEP, status="skipped", reason=f"destination uses {target}"),
                )

            conversion = await ctx.cancellation.run(agent.convert_budget(request.budget, DEFAULT_CURRENCY, target))
        except WorkflowCancelledError:
            raise
        except Exception as e:
            return _gather_failed(CURRENCY_STEP, ctx.task_id, e)

        logger.info(f"[{ctx.task_id}] Currency conversion: {conversion.summary()}")
        return _gathered(
            CURRENCY_STEP,
            GatherOutcome(step=CURRENCY_STEP, status="succeeded"),
            **WorkflowState.context_update(ContextKey.CURRENCY_CONVERSION, conversion),
        )

    return node


def make_weather_node(agent: WeatherAdvisorAgent, lookup: DestinationLookup):
    """Return the gatherer fetching the forecast for the trip dates."""

    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        request = ctx.request
        try:
            ctx.progress.report(20, "Fetching weather forecast...", agent.agent_type)
            latitude, longitude = await ctx.cancellation.run(lookup.coordinates_for(request.destination))
            if (latitude, longitude) == UNKNOWN_COORDINATES:
                logger.info(f"[{ctx.task_id}] No coordinates for {request.destination}, skipping forecast")
                return _gathered(
                    WEATHER_STEP,
                    GatherOutcome(step=WEATHER_STEP, status="skipped", reason="unknown coordinates"),
                )

            forecasts = await ctx.cancellation.run(
                agent.get_forecast(latitude, longitude, request.start_date, request.days_number)
            )
        except WorkflowCancelledError:
            raise
        except Exception as e:
            return _gather_failed(WEATHER_STEP, ctx.task_id, e)

        logger.info(f"[{ctx.task_id}] Retrieved {len(forecasts)} weather forecast periods")
        return _gathered(
            WEATHER_STEP,
            GatherOutcome(step=WEATHER_STEP, status="succeeded"),
            **WorkflowState.context_update(ContextKey.WEATHER_FORECASTS, list(forecasts)),
        )

    return node


def make_local_knowledge_node(agent: LocalKnowledgeAgent):
    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        request = ctx.request
        try:
            ctx.progress.report(25, "Gathering local knowledge and tips...", agent.agent_type)
            knowledge = await ctx.cancellation.run(
                agent.get_local_knowledge(request.destination, request.interests, request.special_requests)
            )
        except WorkflowCancelledError:
            raise
        except Exception as e:
            return _gather_failed(LOCAL_KNOWLEDGE_STEP, ctx.task_id, e)

        logger.info(f"[{ctx.task_id}] Retrieved local knowledge for {request.destination}")
        return _gathered(
            LOCAL_KNOWLEDGE_STEP,
            GatherOutcome(step=LOCAL_KNOWLEDGE_STEP, status="succeeded"),
            **WorkflowState.context_update(ContextKey.LOCAL_KNOWLEDGE, knowledge),
        )

    return node


def make_finish_gathering_node():
    """Return the join node that runs once all three gatherers have finished."""

    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        for outcome in state.gathering_outcomes:
            logger.info(f"[{ctx.task_id}] {outcome.render()}")

        ctx.cancellation.raise_if_cancelled()
        return {**WorkflowState.step_completed(GATHERING_STEP), "current_phase": 1}

    return node


def make_itinerary_node(agent: ItineraryPlannerAgent):
    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        ctx.cancellation.raise_if_cancelled()
        ctx.progress.report(40, "Creating personalized itinerary...", agent.agent_type)

        forecasts = state.get_context(ContextKey.WEATHER_FORECASTS, list) or []
        local_knowledge = state.get_context(ContextKey.LOCAL_KNOWLEDGE, str) or ""

        itinerary = await ctx.cancellation.run(
            agent.create_itinerary(ctx.request, forecasts, local_knowledge, build_weather_summary(forecasts))
        )

        return {
            **WorkflowState.context_update(ContextKey.ITINERARY, itinerary),
            **WorkflowState.step_completed(ITINERARY_STEP),
            "current_phase": 2,
        }

    return node


def make_budget_node(agent: BudgetOptimizerAgent):
    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        request = ctx.request
        ctx.cancellation.raise_if_cancelled()
        ctx.progress.report(70, "Optimizing budget allocation...", agent.agent_type)

        itinerary = state.get_context(ContextKey.ITINERARY, str) or ""
        budget = await ctx.cancellation.run(
            agent.optimize_budget(
                request.budget,
                request.days_number,
                request.destination,
                request.travel_style,
                summarize_itinerary(itinerary),
            )
        )

        return {
            **WorkflowState.context_update(ContextKey.BUDGET, budget),
            **WorkflowState.step_completed(BUDGET_STEP),
            "current_phase": 3,
        }

    return node


def make_assembly_node():
    """Return the node that assembles tips, packing list and day plans into the result."""

    async def node(state: WorkflowState, runtime: Runtime[RunContext]) -> Dict[str, Any]:
        ctx = runtime.context
        request = ctx.request
        ctx.cancellation.raise_if_cancelled()
        ctx.progress.report(85, "Assembling complete travel plan...", WORKFLOW_AGENT)

        forecasts = state.get_context(ContextKey.WEATHER_FORECASTS, list) or []
        conversion = state.get_context(ContextKey.CURRENCY_CONVERSION, CurrencyConversion)
        itinerary = state.get_context(ContextKey.ITINERARY, str) or ""
        budget = state.get_context(ContextKey.BUDGET)
        if budget is None:
            raise RuntimeError("Budget allocation missing at assembly")

        result = TravelItinerary(
            task_id=ctx.task_id,
            destination=request.destination,
            start_date=request.start_date,
            end_date=request.end_date,
            daily_plans=build_day_plans(request, itinerary),
            budget=budget,
            travel_tips=derive_travel_tips(conversion, forecasts),
            packing_list=build_packing_list(forecasts, request.interests),
            emergency_contacts=emergency_info(request.destination),
        )

        ctx.progress.report(100, "Travel plan complete!", WORKFLOW_AGENT)
        logger.info(f"[{ctx.task_id}] Travel planning workflow completed")

        return {
            "final_itinerary": result,
            **WorkflowState.step_completed(ASSEMBLY_STEP),
            "current_phase": 4,
        }

    return node
