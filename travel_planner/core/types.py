"""Shared type aliases used across the planner modules."""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import Field

Money = Annotated[Decimal, Field(ge=0)]
PositiveMoney = Annotated[Decimal, Field(gt=0)]
Percentage = Annotated[int, Field(ge=0, le=100)]
ISO4217 = Annotated[str, Field(pattern=r"^[A-Z]{3}$")]
WorkflowPhase = Annotated[int, Field(ge=0, le=4)]
