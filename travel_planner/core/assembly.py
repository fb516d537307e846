"""Pure helpers that turn gathered context into the final itinerary pieces."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from travel_planner.core.schemas import (
    Activity,
    CurrencyConversion,
    DayPlan,
    EmergencyInfo,
    TravelPlanRequest,
    WeatherForecast,
)

ITINERARY_SUMMARY_LIMIT = 500
MAX_WEATHER_TIPS = 3

GENERAL_TIPS = (
    "Download offline maps of your destination",
    "Notify your bank of travel dates to avoid card issues",
    "Keep copies of important documents (passport, insurance)",
)

BASE_PACKING_LIST = (
    "Passport and travel documents",
    "Phone charger and power adapter",
    "Comfortable walking shoes",
    "Reusable water bottle",
    "Basic first aid kit",
)

COLD_THRESHOLD = 50
HOT_THRESHOLD = 75


def build_weather_summary(forecasts: Sequence[WeatherForecast]) -> str:
    """One line per calendar date, taken from that date's first period."""

    if not forecasts:
        return "Weather forecast not available"

    first_by_day: Dict[date, WeatherForecast] = {}
    for forecast in forecasts:
        first_by_day.setdefault(forecast.date.date(), forecast)

    return "\n".join(
        f"{day:%b %d}: {first.temperature}°{first.temperature_unit}, {first.short_forecast}"
        for day, first in first_by_day.items()
    )


def summarize_itinerary(itinerary: str, limit: int = ITINERARY_SUMMARY_LIMIT) -> str:
    if len(itinerary) > limit:
        return itinerary[:limit] + "..."
    return itinerary


def derive_travel_tips(
    conversion: Optional[CurrencyConversion],
    forecasts: Sequence[WeatherForecast],
) -> List[str]:
    tips: List[str] = []
    if conversion is not None:
        tips.append(conversion.summary())

    weather_tips: List[str] = []
    for forecast in forecasts:
        for recommendation in forecast.recommendations():
            if recommendation not in weather_tips:
                weather_tips.append(recommendation)
    tips.extend(weather_tips[:MAX_WEATHER_TIPS])

    tips.extend(GENERAL_TIPS)
    return tips


def build_packing_list(forecasts: Sequence[WeatherForecast], interests: Sequence[str]) -> List[str]:
    """Base items plus weather and interest driven additions.

    Temperature thresholds apply to the forecasts' own unit.
    """

    packing = list(BASE_PACKING_LIST)

    if forecasts:
        average = sum(f.temperature for f in forecasts) / len(forecasts)
        if average < COLD_THRESHOLD:
            packing += ["Warm jacket and layers", "Cold weather accessories (hat, gloves)"]
        elif average > HOT_THRESHOLD:
            packing += ["Sunscreen and sunglasses", "Light, breathable clothing"]

        if any("rain" in f.short_forecast.lower() for f in forecasts):
            packing.append("Umbrella or rain jacket")

    if any("hiking" in interest.lower() for interest in interests):
        packing.append("Hiking boots and daypack")

    return packing


def build_day_plans(request: TravelPlanRequest, itinerary: str) -> List[DayPlan]:
    # The generated text is kept whole as the first morning slot; it is not parsed into days.
    return [
        DayPlan(
            day_number=1,
            day_date=request.start_date,
            theme=f"{request.days_number}-Day {request.destination} Itinerary",
            morning=Activity(
                location=request.destination,
                description=itinerary,
                estimated_cost=Decimal("0"),
            ),
        )
    ]


def emergency_info(destination: str) -> EmergencyInfo:
    return EmergencyInfo(
        local_emergency_number="112 (EU) or 911 (US/Canada)",
        nearest_embassy=f"Contact your embassy in {destination}",
        healthcare_info="Travel with comprehensive health insurance.",
    )
