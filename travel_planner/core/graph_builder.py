from typing import Any, Optional

from langgraph.graph import END, START, StateGraph

from travel_planner.core.agents import TravelAgents
from travel_planner.core.destinations import DestinationLookup, KeywordDestinationLookup
from travel_planner.core.nodes import (
    make_assembly_node,
    make_budget_node,
    make_currency_node,
    make_finish_gathering_node,
    make_itinerary_node,
    make_local_knowledge_node,
    make_start_node,
    make_weather_node,
)
from travel_planner.core.runtime import RunContext
from travel_planner.core.schemas import WorkflowState

GATHERERS = ("gather_currency", "gather_weather", "gather_local_knowledge")


def build_planning_graph(
    *,
    agents: TravelAgents,
    lookup: Optional[DestinationLookup] = None,
) -> Any:
    """Wire all nodes into a compiled LangGraph state machine."""

    lookup = lookup or KeywordDestinationLookup()

    graph_builder = StateGraph(state_schema=WorkflowState, context_schema=RunContext)

    graph_builder.add_node("start_workflow", make_start_node())
    graph_builder.add_node("gather_currency", make_currency_node(agents.currency, lookup))
    graph_builder.add_node("gather_weather", make_weather_node(agents.weather, lookup))
    graph_builder.add_node("gather_local_knowledge", make_local_knowledge_node(agents.local_knowledge))
    graph_builder.add_node("finish_gathering", make_finish_gathering_node())
    graph_builder.add_node("plan_itinerary", make_itinerary_node(agents.itinerary))
    graph_builder.add_node("optimize_budget", make_budget_node(agents.budget))
    graph_builder.add_node("assemble_itinerary", make_assembly_node())

    graph_builder.add_edge(START, "start_workflow")

    # Parallel information gathering
    for gatherer in GATHERERS:
        graph_builder.add_edge("start_workflow", gatherer)

    # Waits for all three gatherers
    graph_builder.add_edge(list(GATHERERS), "finish_gathering")

    graph_builder.add_edge("finish_gathering", "plan_itinerary")
    graph_builder.add_edge("plan_itinerary", "optimize_budget")
    graph_builder.add_edge("optimize_budget", "assemble_itinerary")
    graph_builder.add_edge("assemble_itinerary", END)

    return graph_builder.compile()
