"""Pytest configuration and shared test doubles for the travel planner project."""
from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pytest

# Ensure the project root is on sys.path so that import travel_planner works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from travel_planner.core.agents_builder import build_travel_agents  # noqa: E402
from travel_planner.core.schemas import (  # noqa: E402
    CurrencyConversion,
    TravelPlanRequest,
    WeatherForecast,
)


class StubGenerator:
    """Text generator returning a canned answer and recording every prompt."""

    def __init__(self, answer: Optional[str] = "Generated text") -> None:
        self.answer = answer
        self.prompts: List[str] = []
        self.instructions: List[Optional[str]] = []

    async def generate(self, prompt: str, *, instructions: Optional[str] = None) -> Optional[str]:
        self.prompts.append(prompt)
        self.instructions.append(instructions)
        return self.answer


class StubCurrencyService:
    """Currency collaborator with a fixed rate; can be told to fail."""

    def __init__(self, rate: Decimal = Decimal("0.9"), error: Optional[Exception] = None) -> None:
        self.rate = rate
        self.error = error
        self.calls: List[Tuple[Decimal, str, str]] = []

    async def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> CurrencyConversion:
        self.calls.append((amount, from_currency, to_currency))
        if self.error is not None:
            raise self.error
        return CurrencyConversion(
            original_amount=amount,
            original_currency=from_currency,
            converted_amount=amount * self.rate,
            target_currency=to_currency,
            exchange_rate=self.rate,
            rate_date=date(2025, 1, 2),
        )


class StubWeatherService:
    """Weather collaborator returning preconfigured forecast periods."""

    def __init__(self, forecasts: Optional[List[WeatherForecast]] = None, error: Optional[Exception] = None) -> None:
        self.forecasts = forecasts or []
        self.error = error
        self.calls: List[Tuple[float, float, date, int]] = []

    async def forecast(self, latitude: float, longitude: float, start_date: date, days: int) -> List[WeatherForecast]:
        self.calls.append((latitude, longitude, start_date, days))
        if self.error is not None:
            raise self.error
        return list(self.forecasts)


def make_forecast(
    temperature: int,
    short_forecast: str = "Partly Cloudy",
    when: Optional[datetime] = None,
    name: str = "Today",
) -> WeatherForecast:
    return WeatherForecast(
        date=when or datetime(2025, 3, 10, 6, tzinfo=timezone.utc),
        name=name,
        temperature=temperature,
        temperature_unit="F",
        short_forecast=short_forecast,
        detailed_forecast=f"{short_forecast}, high near {temperature}.",
        wind_speed="5 mph",
        wind_direction="NW",
    )


@pytest.fixture
def make_request() -> Callable[..., TravelPlanRequest]:
    """Factory for valid requests; keyword overrides replace the defaults."""

    def _make(**overrides: Any) -> TravelPlanRequest:
        payload = {
            "destination": "Paris, France",
            "start_date": date(2025, 3, 10),
            "end_date": date(2025, 3, 14),
            "budget": Decimal("3000"),
            "interests": ["museums"],
            "travel_style": "moderate",
        }
        payload.update(overrides)
        return TravelPlanRequest(**payload)

    return _make


@pytest.fixture
def generator() -> StubGenerator:
    return StubGenerator("Day 1: Explore the old town.")


@pytest.fixture
def currency_service() -> StubCurrencyService:
    return StubCurrencyService()


@pytest.fixture
def weather_service() -> StubWeatherService:
    return StubWeatherService()


@pytest.fixture
def agents(generator, currency_service, weather_service):
    return build_travel_agents(generator, currency_service, weather_service)
