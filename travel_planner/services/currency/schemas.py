from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field


class FrankfurterResponse(BaseModel):
    """Payload returned by the Frankfurter ``/latest`` endpoint."""

    amount: Decimal
    base: str
    rate_date: Optional[date] = Field(default=None, alias="date")
    rates: Dict[str, Decimal] = Field(default_factory=dict)
