"""Specialist agents used by the planning workflow.

Each agent owns one prompt (and a system instruction) and, where relevant, one
external data collaborator. Agents hold no per-run state; the workflow nodes
decide when to call them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from travel_planner.core.budget import allocate_budget
from travel_planner.core.prompts import (
    budget_optimizer_instructions,
    budget_prompt,
    currency_advice_prompt,
    currency_converter_instructions,
    itinerary_planner_instructions,
    itinerary_prompt,
    local_knowledge_instructions,
    local_knowledge_prompt,
    weather_advice_prompt,
    weather_advisor_instructions,
)
from travel_planner.core.schemas import (
    BudgetBreakdown,
    CurrencyConversion,
    TravelPlanRequest,
    WeatherForecast,
)
from travel_planner.services.currency import CurrencyService
from travel_planner.services.weather import WeatherService

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """One prompt in, one answer out; ``None`` means the model gave no answer."""

    async def generate(self, prompt: str, *, instructions: Optional[str] = None) -> Optional[str]:
        ...


def _message_text(content) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                chunks.append(chunk)
        return "\n".join(chunks)
    return "" if content is None else str(content)


class LLMTextGenerator:
    """Adapter turning a LangChain chat model into a :class:`TextGenerator`."""

    def __init__(self, llm: BaseChatModel) -> None:
        self.llm = llm

    async def generate(self, prompt: str, *, instructions: Optional[str] = None) -> Optional[str]:
        messages = []
        if instructions:
            messages.append(SystemMessage(content=instructions))
        messages.append(HumanMessage(content=prompt.strip()))

        response = await self.llm.ainvoke(messages)
        text = _message_text(getattr(response, "content", response)).strip()
        logger.debug(f"LLM response ({len(text)} chars)")
        return text or None


def _special_requests_line(label: str, special_requests: Optional[str]) -> str:
    return f"{label}: {special_requests}" if special_requests else ""


class BaseAgent:
    agent_type: str = ""
    agent_name: str = ""
    instructions: str = ""

    def __init__(self, generator: TextGenerator) -> None:
        self.generator = generator

    async def _generate(self, prompt: str, fallback: str) -> str:
        logger.info(f"Running {self.agent_type} agent ({self.agent_name})")
        text = await self.generator.generate(prompt, instructions=self.instructions)
        if not text:
            logger.warning(f"{self.agent_type} agent returned no answer")
            return fallback
        return text


class CurrencyConverterAgent(BaseAgent):
    """Converts the budget into the destination currency and explains the rate."""

    agent_type = "CurrencyConverter"
    agent_name = "Currency Conversion Specialist"
    instructions = currency_converter_instructions

    def __init__(self, generator: TextGenerator, currency_service: CurrencyService) -> None:
        super().__init__(generator)
        self.currency_service = currency_service

    async def convert_budget(self, amount: Decimal, from_currency: str, to_currency: str) -> CurrencyConversion:
        logger.info(f"Converting budget: {amount} {from_currency} to {to_currency}")
        return await self.currency_service.convert(amount, from_currency, to_currency)

    async def currency_advice(
        self,
        amount: Decimal,
        from_currency: str,
        to_currency: str,
        destination: str,
    ) -> str:
        conversion = await self.convert_budget(amount, from_currency, to_currency)
        prompt = currency_advice_prompt.format(
            destination=destination,
            conversion_summary=conversion.summary(),
        )
        return await self._generate(prompt, "Unable to generate currency advice.")


class WeatherAdvisorAgent(BaseAgent):
    """Fetches forecasts and turns them into packing and activity advice."""

    agent_type = "WeatherAdvisor"
    agent_name = "Weather & Packing Advisor"
    instructions = weather_advisor_instructions

    def __init__(self, generator: TextGenerator, weather_service: WeatherService) -> None:
        super().__init__(generator)
        self.weather_service = weather_service

    async def get_forecast(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        days: int,
    ) -> List[WeatherForecast]:
        logger.info(f"Getting weather forecast for {latitude}, {longitude} for {days} days")
        return await self.weather_service.forecast(latitude, longitude, start_date, days)

    async def weather_advice(
        self,
        forecasts: Sequence[WeatherForecast],
        destination: str,
        interests: Sequence[str],
    ) -> str:
        weather_details = "\n\n".join(
            f"{f.name}: {f.temperature}°{f.temperature_unit}, {f.short_forecast}\n"
            f"Details: {f.detailed_forecast}\n"
            f"Wind: {f.wind_speed} {f.wind_direction}"
            for f in forecasts
        )
        prompt = weather_advice_prompt.format(
            destination=destination,
            weather_details=weather_details,
            interests=", ".join(interests),
        )
        return await self._generate(prompt, "Unable to generate weather advice.")


class LocalKnowledgeAgent(BaseAgent):
    agent_type = "LocalKnowledge"
    agent_name = "Local Expert & Cultural Guide"
    instructions = local_knowledge_instructions

    async def get_local_knowledge(
        self,
        destination: str,
        interests: Sequence[str],
        special_requests: Optional[str] = None,
    ) -> str:
        prompt = local_knowledge_prompt.format(
            destination=destination,
            interests=", ".join(interests),
            special_requests=_special_requests_line("SPECIAL REQUESTS", special_requests),
        )
        return await self._generate(prompt, "Unable to generate local knowledge.")


class ItineraryPlannerAgent(BaseAgent):
    agent_type = "ItineraryPlanner"
    agent_name = "Itinerary Planning Expert"
    instructions = itinerary_planner_instructions

    async def create_itinerary(
        self,
        request: TravelPlanRequest,
        forecasts: Sequence[WeatherForecast],
        local_knowledge: str,
        weather_summary: str,
    ) -> str:
        """Return the generated day-by-day itinerary as a single block of text."""

        logger.info(
            f"Creating itinerary for {request.destination} "
            f"({request.days_number} days, {len(forecasts)} forecast periods)"
        )
        prompt = itinerary_prompt.format(
            days_number=request.days_number,
            destination=request.destination,
            start_date=f"{request.start_date:%b %d}",
            end_date=f"{request.end_date:%b %d}",
            budget=f"{request.budget:,.2f}",
            interests=", ".join(request.interests),
            travel_style=request.travel_style,
            special_requests=_special_requests_line("- Special Requests", request.special_requests),
            weather_summary=weather_summary,
            local_knowledge=local_knowledge,
        )
        return await self._generate(prompt, "Unable to generate itinerary.")


class BudgetOptimizerAgent(BaseAgent):
    agent_type = "BudgetOptimizer"
    agent_name = "Budget Optimization Specialist"
    instructions = budget_optimizer_instructions

    async def optimize_budget(
        self,
        total_budget: Decimal,
        days: int,
        destination: str,
        travel_style: str,
        itinerary_summary: str,
    ) -> BudgetBreakdown:
        """Ask the model for budget advice, then return the fixed style allocation.

        The advice text is not parsed; only the deterministic table is used.
        """

        prompt = budget_prompt.format(
            days_number=days,
            destination=destination,
            total_budget=f"{total_budget:,.2f}",
            travel_style=travel_style,
            itinerary_summary=itinerary_summary,
        )
        advice = await self._generate(prompt, "Unable to generate budget advice.")
        logger.debug(f"Discarding {len(advice)} chars of budget advice in favour of the {travel_style} table")
        return allocate_budget(total_budget, travel_style)


@dataclass(slots=True)
class TravelAgents:
    """Container for the specialist agents wired into the workflow."""

    currency: CurrencyConverterAgent
    weather: WeatherAdvisorAgent
    local_knowledge: LocalKnowledgeAgent
    itinerary: ItineraryPlannerAgent
    budget: BudgetOptimizerAgent
