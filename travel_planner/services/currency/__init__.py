"""Currency conversion backed by the Frankfurter (ECB) exchange rate API.

Public API:
    - CurrencyService: Protocol implemented by currency collaborators
    - FrankfurterCurrencyService: httpx-based implementation
    - create_currency_service: Factory building the service from settings
"""
from travel_planner.services.currency.client import (
    CurrencyService,
    FrankfurterCurrencyService,
    create_currency_service,
)

__all__ = [
    "CurrencyService",
    "FrankfurterCurrencyService",
    "create_currency_service",
]
