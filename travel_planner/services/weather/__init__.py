"""Weather forecasts from the US National Weather Service API.

Public API:
    - WeatherService: Protocol implemented by forecast collaborators
    - NWSWeatherService: httpx-based implementation (US locations only)
    - create_weather_service: Factory building the service from settings
"""
from travel_planner.services.weather.client import (
    NWSWeatherService,
    WeatherService,
    create_weather_service,
)

__all__ = [
    "NWSWeatherService",
    "WeatherService",
    "create_weather_service",
]
