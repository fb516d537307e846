"""External service integrations for travel planning.

This package provides async httpx clients for the public data APIs consulted
while gathering destination information:

- Currency: Frankfurter exchange rates
- Weather: US National Weather Service forecasts
- Geocoding: Nominatim place name resolution

Each service module exports:
    - create_*_service: Factory to create the client from ``ApiSettings``
    - A Protocol describing what the workflow needs from the collaborator

Example Usage:
    >>> from travel_planner.services.currency import create_currency_service
    >>> from travel_planner.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> currency = create_currency_service(settings)
    >>> conversion = await currency.convert(Decimal("100"), "USD", "EUR")
"""

# Currency conversion
from travel_planner.services.currency import (
    CurrencyService,
    FrankfurterCurrencyService,
    create_currency_service,
)

# Weather forecasts
from travel_planner.services.weather import (
    NWSWeatherService,
    WeatherService,
    create_weather_service,
)

# Geocoding
from travel_planner.services.geocoding import get_coordinates_nominatim

__all__ = [
    # Currency
    "CurrencyService",
    "FrankfurterCurrencyService",
    "create_currency_service",
    # Weather
    "NWSWeatherService",
    "WeatherService",
    "create_weather_service",
    # Geocoding
    "get_coordinates_nominatim",
]
