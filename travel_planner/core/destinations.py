"""Destination lookups: which currency a destination uses and where it is."""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence, Tuple

import httpx

from travel_planner.services.geocoding import get_coordinates_nominatim

logger = logging.getLogger(__name__)

Coordinates = Tuple[float, float]

DEFAULT_CURRENCY = "USD"
UNKNOWN_COORDINATES: Coordinates = (0.0, 0.0)

# Ordered; the first keyword contained in the destination wins.
CURRENCY_KEYWORDS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("paris", "france"), "EUR"),
    (("london", "uk", "england"), "GBP"),
    (("tokyo", "japan"), "JPY"),
    (("mexico",), "MXN"),
    (("canada",), "CAD"),
)

COORDINATE_KEYWORDS: Sequence[Tuple[Tuple[str, ...], Coordinates]] = (
    (("new york",), (40.7128, -74.0060)),
    (("los angeles",), (34.0522, -118.2437)),
    (("chicago",), (41.8781, -87.6298)),
    (("san francisco",), (37.7749, -122.4194)),
    (("miami",), (25.7617, -80.1918)),
    (("seattle",), (47.6062, -122.3321)),
    (("boston",), (42.3601, -71.0589)),
    (("washington", "dc"), (38.9072, -77.0369)),
)


def _match(destination: str, table, default):
    lowered = (destination or "").lower()
    for keywords, value in table:
        if any(keyword in lowered for keyword in keywords):
            return value
    return default


def currency_for_destination(destination: str) -> str:
    return _match(destination, CURRENCY_KEYWORDS, DEFAULT_CURRENCY)


def coordinates_for_destination(destination: str) -> Coordinates:
    return _match(destination, COORDINATE_KEYWORDS, UNKNOWN_COORDINATES)


class DestinationLookup(Protocol):
    """Resolves the lookup parameters the gatherers derive from a destination."""

    async def currency_for(self, destination: str) -> str:
        ...

    async def coordinates_for(self, destination: str) -> Coordinates:
        ...


class KeywordDestinationLookup:
    """Substring-match tables; case-insensitive, first match wins.

    Unknown destinations resolve to ``USD`` and ``(0, 0)``, which the workflow
    treats as "nothing to look up".
    """

    async def currency_for(self, destination: str) -> str:
        return currency_for_destination(destination)

    async def coordinates_for(self, destination: str) -> Coordinates:
        return coordinates_for_destination(destination)


class GeocodingDestinationLookup(KeywordDestinationLookup):
    """Resolve coordinates with Nominatim, falling back to the keyword table."""

    def __init__(
        self,
        *,
        base_url: str = "https://nominatim.openstreetmap.org/search",
        user_agent: str = "TravelPlanner/1.0",
        timeout_s: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout_s = timeout_s
        self._client = client

    async def coordinates_for(self, destination: str) -> Coordinates:
        coordinates = await get_coordinates_nominatim(
            destination,
            base_url=self.base_url,
            user_agent=self.user_agent,
            timeout=self.timeout_s,
            client=self._client,
        )
        if coordinates is None:
            logger.info(f"No geocoding result for '{destination}', using keyword table")
            return coordinates_for_destination(destination)
        return coordinates
