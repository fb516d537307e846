"""Small helpers for using the public Nominatim geocoding service."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


async def get_coordinates_nominatim(
    location: str,
    *,
    base_url: str = NOMINATIM_SEARCH_URL,
    user_agent: str = "TravelPlanner/1.0",
    timeout: float = 10.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Tuple[float, float]]:
    """Return ``(lat, lon)`` for the requested location or ``None``."""

    if not location:
        return None

    params = {"q": location, "format": "json", "limit": 1}
    try:
        if client is not None:
            response = await client.get(base_url, params=params, headers={"User-Agent": user_agent})
        else:
            async with httpx.AsyncClient(timeout=timeout, headers={"User-Agent": user_agent}) as owned:
                response = await owned.get(base_url, params=params)
        response.raise_for_status()
        data = response.json()
    except Exception as e:
        logger.warning(f"Geocoding failed for '{location}': {e}")
        return None

    if not data:
        return None

    first = data[0]
    try:
        return float(first["lat"]), float(first["lon"])
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Malformed geocoding result for '{location}': {e}")
        return None
