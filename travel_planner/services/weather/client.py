from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

import httpx

from travel_planner.core.config import ApiSettings
from travel_planner.core.schemas import WeatherForecast
from travel_planner.services.weather.schemas import NWSForecastResponse, NWSPeriod, NWSPointsResponse

logger = logging.getLogger(__name__)


class WeatherService(Protocol):
    """Returns forecast periods for a location; an empty list on any failure."""

    async def forecast(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        days: int,
    ) -> List[WeatherForecast]:
        ...


def _parse_start_time(value: Optional[str]) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.debug(f"Unparsable forecast start time: {value}")
    return datetime.now(timezone.utc)


def _to_forecast(period: NWSPeriod) -> WeatherForecast:
    return WeatherForecast(
        date=_parse_start_time(period.start_time),
        name=period.name or "Unknown",
        temperature=period.temperature if period.temperature is not None else 0,
        temperature_unit=period.temperature_unit or "F",
        short_forecast=period.short_forecast or "",
        detailed_forecast=period.detailed_forecast or "",
        wind_speed=period.wind_speed or "",
        wind_direction=period.wind_direction or "",
        is_daytime=period.is_daytime if period.is_daytime is not None else True,
    )


class NWSWeatherService:
    """Async client for the National Weather Service API (US locations, no API key)."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.weather.gov",
        user_agent: str = "TravelPlanner/1.0",
        timeout_s: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"User-Agent": user_agent, "Accept": "application/geo+json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "NWSWeatherService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, url: str) -> Dict[str, Any]:
        response = await self._client.get(url)
        response.raise_for_status()
        return response.json()

    async def forecast(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        days: int,
    ) -> List[WeatherForecast]:
        """Fetch up to ``days * 2`` day/night forecast periods for the location."""

        logger.info(f"Fetching NWS forecast for {latitude}, {longitude} from {start_date} ({days} days)")

        try:
            points = NWSPointsResponse.model_validate(
                await self._aget(f"/points/{latitude:.4f},{longitude:.4f}")
            )
            forecast_url = points.properties.forecast if points.properties else None
            if not forecast_url:
                logger.warning("No forecast URL found for location")
                return []

            forecast = NWSForecastResponse.model_validate(await self._aget(forecast_url))
            periods = forecast.properties.periods if forecast.properties else None
            if not periods:
                logger.warning("No forecast periods found")
                return []

            forecasts = [_to_forecast(period) for period in periods[: max(days, 0) * 2]]
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching NWS forecast: {e}")
            return []
        except Exception as e:
            logger.error(f"Error fetching NWS forecast: {e}")
            return []

        logger.info(f"Successfully fetched {len(forecasts)} forecast periods")
        return forecasts


def create_weather_service(settings: ApiSettings) -> NWSWeatherService:
    """Instantiate the weather service using project configuration."""

    return NWSWeatherService(
        base_url=settings.weather_api_url,
        user_agent=settings.user_agent,
        timeout_s=settings.http_timeout_s,
    )
