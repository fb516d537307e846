from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Protocol

import httpx

from travel_planner.core.config import ApiSettings
from travel_planner.core.schemas import CurrencyConversion
from travel_planner.services.currency.schemas import FrankfurterResponse

logger = logging.getLogger(__name__)


class CurrencyService(Protocol):
    """Converts an amount between currencies; never raises on lookup failures."""

    async def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> CurrencyConversion:
        ...


class FrankfurterCurrencyService:
    """Thin async wrapper around the Frankfurter API (ECB rates, no API key required)."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.frankfurter.app",
        timeout_s: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "FrankfurterCurrencyService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def get_exchange_rate(self, from_currency: str, to_currency: str) -> CurrencyConversion:
        """Return the conversion of one unit, i.e. the bare exchange rate."""

        return await self.convert(Decimal("1"), from_currency, to_currency)

    async def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> CurrencyConversion:
        """Convert ``amount``; falls back to a 1:1 conversion when no rate is available."""

        source = from_currency.upper()
        target = to_currency.upper()
        logger.info(f"Converting {amount} {source} to {target}")

        try:
            data = await self._aget("/latest", {"amount": str(amount), "from": source, "to": target})
            payload = FrankfurterResponse.model_validate(data)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error during currency conversion: {e}")
            return CurrencyConversion.identity(amount, source, target)
        except Exception as e:
            logger.error(f"Error during currency conversion: {e}")
            return CurrencyConversion.identity(amount, source, target)

        converted = payload.rates.get(target)
        if converted is None:
            logger.warning(f"No exchange rate found for {source} to {target}")
            return CurrencyConversion.identity(amount, source, target)

        exchange_rate = converted / amount if amount > 0 else Decimal("0")
        logger.info(f"Conversion successful: {amount} {source} = {converted} {target}")

        return CurrencyConversion(
            original_amount=amount,
            original_currency=source,
            converted_amount=converted,
            target_currency=target,
            exchange_rate=exchange_rate,
            rate_date=payload.rate_date or datetime.now(timezone.utc).date(),
        )


def create_currency_service(settings: ApiSettings) -> FrankfurterCurrencyService:
    """Instantiate the currency service using project configuration."""

    return FrankfurterCurrencyService(
        base_url=settings.currency_api_url,
        timeout_s=settings.http_timeout_s,
    )
