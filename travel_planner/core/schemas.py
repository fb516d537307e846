"""Pydantic data models for the multi-agent travel planning workflow.

This module contains the data models used throughout the planning run: the
incoming request, the typed results of each gatherer, the budget allocation,
the final itinerary, and the LangGraph state that carries them between nodes.

Key model categories:
- TravelPlanRequest: the immutable input to one workflow run
- CurrencyConversion / WeatherForecast: results of the external lookups
- BudgetBreakdown: deterministic per-category budget allocation
- TravelItinerary: the assembled plan returned to the caller
- WorkflowState: LangGraph workflow state shared by all nodes
"""
from __future__ import annotations

import operator
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from travel_planner.core.reducer import advance_phase, merge_steps
from travel_planner.core.types import (
    ISO4217,
    Money,
    Percentage,
    PositiveMoney,
    WorkflowPhase,
)


class TravelPlanRequest(BaseModel):
    """Trip being planned; the sole input to a workflow run.

    Attributes:
        destination: Free-text destination, e.g. "Paris, France"
        start_date/end_date: Inclusive travel dates
        budget: Total budget in USD
        interests: Interest tags used to tailor suggestions (may be empty)
        travel_style: "luxury", "budget" or "moderate" (anything else is moderate)
        special_requests: Optional free-text notes from the traveller
    """
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    budget: PositiveMoney
    interests: List[str] = Field(default_factory=list)
    travel_style: str = Field(default="moderate")
    special_requests: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def validate_dates(self) -> "TravelPlanRequest":
        if self.start_date > self.end_date:
            raise ValueError("start_date must be before or equal to end_date")
        return self

    @computed_field(return_type=int)
    @property
    def days_number(self) -> int:
        return (self.end_date - self.start_date).days + 1


class CurrencyConversion(BaseModel):
    """Result of converting the trip budget into the destination currency."""
    original_amount: Money
    original_currency: ISO4217
    converted_amount: Money
    target_currency: ISO4217
    exchange_rate: Decimal
    rate_date: date

    model_config = ConfigDict(frozen=True)

    @classmethod
    def identity(cls, amount: Decimal, from_currency: str, to_currency: str) -> "CurrencyConversion":
        """Fallback used whenever a real rate cannot be obtained."""

        return cls(
            original_amount=amount,
            original_currency=from_currency.upper(),
            converted_amount=amount,
            target_currency=to_currency.upper(),
            exchange_rate=Decimal("1.0"),
            rate_date=datetime.now(timezone.utc).date(),
        )

    def summary(self) -> str:
        return (
            f"{self.original_amount:,.2f} {self.original_currency} = "
            f"{self.converted_amount:,.2f} {self.target_currency} "
            f"(Rate: {self.exchange_rate:.4f} as of {self.rate_date:%Y-%m-%d})"
        )


class WeatherForecast(BaseModel):
    """One forecast period (day or night) for the destination."""
    date: datetime
    name: str = "Unknown"
    temperature: int = 0
    temperature_unit: str = "F"
    short_forecast: str = ""
    detailed_forecast: str = ""
    wind_speed: str = ""
    wind_direction: str = ""
    is_daytime: bool = True

    model_config = ConfigDict(frozen=True)

    def recommendations(self) -> List[str]:
        """Derive packing and activity hints from temperature and forecast text."""

        recommendations: List[str] = []

        if self.temperature < 40:
            recommendations.append("Pack warm layers and a heavy jacket")
        elif self.temperature < 60:
            recommendations.append("Bring a light jacket or sweater")
        elif self.temperature > 85:
            recommendations.append("Dress in light, breathable clothing")

        forecast = self.short_forecast.lower()
        if "rain" in forecast or "shower" in forecast:
            recommendations.append("Don't forget an umbrella or rain jacket")
        if "snow" in forecast:
            recommendations.append("Waterproof boots and winter gear recommended")
        if "sunny" in forecast or "clear" in forecast:
            recommendations.append("Sunscreen and sunglasses recommended")

        return recommendations


class BudgetBreakdown(BaseModel):
    """Per-category split of the total budget for the selected travel style.

    Each category equals ``total_budget * percentage`` computed with
    :class:`~decimal.Decimal` arithmetic, so the categories always add back up
    to the total.
    """
    total_budget: Money
    accommodation: Money
    food: Money
    activities: Money
    transportation: Money
    shopping: Money
    emergency: Money

    model_config = ConfigDict(extra="forbid", frozen=True)

    @computed_field(return_type=Decimal)
    @property
    def allocated(self) -> Decimal:
        """Return the sum of all category allocations."""

        return (
            self.accommodation
            + self.food
            + self.activities
            + self.transportation
            + self.shopping
            + self.emergency
        )


class Activity(BaseModel):
    """A single scheduled slot inside a day plan."""
    name: Optional[str] = None
    location: str
    description: str
    estimated_cost: Money = Decimal("0")

    model_config = ConfigDict(extra="forbid", frozen=True)


class DayPlan(BaseModel):
    """Represents a single day in the itinerary with its activity slots."""
    day_number: int = Field(ge=1)
    day_date: date
    theme: str
    morning: Optional[Activity] = None
    lunch: Optional[Activity] = None
    afternoon: Optional[Activity] = None
    dinner: Optional[Activity] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class EmergencyInfo(BaseModel):
    local_emergency_number: str
    nearest_embassy: str
    healthcare_info: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class TravelItinerary(BaseModel):
    """Completed travel plan returned at the end of a workflow run."""
    task_id: str
    destination: str
    start_date: date
    end_date: date
    daily_plans: List[DayPlan] = Field(default_factory=list)
    budget: BudgetBreakdown
    travel_tips: List[str] = Field(default_factory=list)
    packing_list: List[str] = Field(default_factory=list)
    emergency_contacts: EmergencyInfo

    model_config = ConfigDict(extra="forbid", frozen=True)


class WorkflowProgress(BaseModel):
    """Progress notification pushed to the caller's sink; never stored in state."""
    percentage: Percentage
    step: str
    agent_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        if self.agent_name:
            return f"[{self.agent_name}] {self.step}"
        return self.step


class GatherOutcome(BaseModel):
    """Explicit result of one information-gathering step."""
    step: str
    status: Literal["succeeded", "skipped", "failed"]
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        if self.reason:
            return f"{self.step}: {self.status} ({self.reason})"
        return f"{self.step}: {self.status}"


class ContextKey(str, Enum):
    """Fixed identifiers for the intermediate data a run produces."""

    CURRENCY_CONVERSION = "CurrencyConversion"
    WEATHER_FORECASTS = "WeatherForecasts"
    LOCAL_KNOWLEDGE = "LocalKnowledge"
    ITINERARY = "Itinerary"
    BUDGET = "Budget"

    @property
    def field_name(self) -> str:
        return _CONTEXT_FIELDS[self]


_CONTEXT_FIELDS: Dict[ContextKey, str] = {
    ContextKey.CURRENCY_CONVERSION: "currency_conversion",
    ContextKey.WEATHER_FORECASTS: "weather_forecasts",
    ContextKey.LOCAL_KNOWLEDGE: "local_knowledge",
    ContextKey.ITINERARY: "itinerary",
    ContextKey.BUDGET: "budget",
}


class WorkflowState(BaseModel):
    """LangGraph workflow state that flows between nodes during one run.

    The state replaces a free-form key/value context with a fixed set of
    optional, typed fields. A field that is ``None`` means "no data" and is
    never an error; downstream nodes substitute explicit defaults.

    The state evolves through these phases:
    0. Init / Gathering: currency, weather and local knowledge filled in parallel
    1. Itinerary: ``itinerary`` text produced from the gathered context
    2. Budget: ``budget`` allocation computed
    3. Assembly: ``final_itinerary`` assembled
    4. Done

    Attributes:
        task_id: Identifier of the run (one per request)
        started_at: UTC timestamp at which the run started
        current_phase: Phase counter, never decreases (see ``advance_phase``)
        completed_steps: Ordered, de-duplicated step names (see ``merge_steps``)
        gathering_outcomes: One record per gathering step, success or not
        currency_conversion: Budget converted to the destination currency
        weather_forecasts: Forecast periods for the trip dates
        local_knowledge: Generated local knowledge text
        itinerary: Generated itinerary text (kept whole)
        budget: Deterministic budget allocation
        final_itinerary: Assembled result
    """
    task_id: str
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    current_phase: Annotated[WorkflowPhase, advance_phase] = 0
    completed_steps: Annotated[List[str], merge_steps] = Field(default_factory=list)
    gathering_outcomes: Annotated[List[GatherOutcome], operator.add] = Field(default_factory=list)

    currency_conversion: Optional[CurrencyConversion] = None
    weather_forecasts: Optional[List[WeatherForecast]] = None
    local_knowledge: Optional[str] = None
    itinerary: Optional[str] = None
    budget: Optional[BudgetBreakdown] = None
    final_itinerary: Optional[TravelItinerary] = None

    model_config = ConfigDict(extra="forbid")

    def get_context(self, key: ContextKey, expected_type: Optional[Type[Any]] = None) -> Any:
        """Return the value stored under ``key``, or ``None`` if absent or of another type."""

        value = getattr(self, key.field_name)
        if value is None:
            return None
        if expected_type is not None and not isinstance(value, expected_type):
            return None
        return value

    def is_step_complete(self, step: str) -> bool:
        return step in self.completed_steps

    @staticmethod
    def context_update(key: ContextKey, value: Any) -> Dict[str, Any]:
        """Build the node update that stores ``value`` under ``key`` (last write wins)."""

        return {key.field_name: value}

    @staticmethod
    def step_completed(*steps: str) -> Dict[str, Any]:
        """Build the node update that marks ``steps`` complete; repeats are ignored."""

        return {"completed_steps": list(steps)}



__all__ = [
    "TravelPlanRequest",
    "CurrencyConversion",
    "WeatherForecast",
    "BudgetBreakdown",
    "Activity",
    "DayPlan",
    "EmergencyInfo",
    "TravelItinerary",
    "WorkflowProgress",
    "GatherOutcome",
    "ContextKey",
    "WorkflowState",
]
