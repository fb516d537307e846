from typing import Union

from langchain_core.language_models.chat_models import BaseChatModel

from travel_planner.core.agents import (
    BudgetOptimizerAgent,
    CurrencyConverterAgent,
    ItineraryPlannerAgent,
    LLMTextGenerator,
    LocalKnowledgeAgent,
    TextGenerator,
    TravelAgents,
    WeatherAdvisorAgent,
)
from travel_planner.services.currency import CurrencyService
from travel_planner.services.weather import WeatherService


def build_travel_agents(
    llm: Union[BaseChatModel, TextGenerator],
    currency_service: CurrencyService,
    weather_service: WeatherService,
) -> TravelAgents:
    """Instantiate the specialist agents required by the workflow."""

    generator = LLMTextGenerator(llm) if isinstance(llm, BaseChatModel) else llm

    return TravelAgents(
        currency=CurrencyConverterAgent(generator, currency_service),
        weather=WeatherAdvisorAgent(generator, weather_service),
        local_knowledge=LocalKnowledgeAgent(generator),
        itinerary=ItineraryPlannerAgent(generator),
        budget=BudgetOptimizerAgent(generator),
    )
