"""Deterministic budget allocation by travel style."""
from __future__ import annotations

from decimal import Decimal
from typing import Dict, NamedTuple, Union

from travel_planner.core.schemas import BudgetBreakdown


class AllocationTable(NamedTuple):
    """Share of the total budget given to each category; shares sum to 1.00."""

    accommodation: Decimal
    food: Decimal
    activities: Decimal
    transportation: Decimal
    shopping: Decimal
    emergency: Decimal


DEFAULT_STYLE = "moderate"

STYLE_ALLOCATIONS: Dict[str, AllocationTable] = {
    "luxury": AllocationTable(
        Decimal("0.40"), Decimal("0.25"), Decimal("0.20"), Decimal("0.08"), Decimal("0.05"), Decimal("0.02")
    ),
    "budget": AllocationTable(
        Decimal("0.25"), Decimal("0.30"), Decimal("0.25"), Decimal("0.10"), Decimal("0.05"), Decimal("0.05")
    ),
    "moderate": AllocationTable(
        Decimal("0.35"), Decimal("0.25"), Decimal("0.20"), Decimal("0.10"), Decimal("0.05"), Decimal("0.05")
    ),
}


def allocation_for(travel_style: str) -> AllocationTable:
    """Return the percentage table for ``travel_style``; unknown styles are moderate."""

    return STYLE_ALLOCATIONS.get((travel_style or "").strip().lower(), STYLE_ALLOCATIONS[DEFAULT_STYLE])


def allocate_budget(total_budget: Union[Decimal, int, str], travel_style: str) -> BudgetBreakdown:
    """Split ``total_budget`` across the six categories for ``travel_style``."""

    total = total_budget if isinstance(total_budget, Decimal) else Decimal(str(total_budget))
    table = allocation_for(travel_style)

    return BudgetBreakdown(
        total_budget=total,
        accommodation=total * table.accommodation,
        food=total * table.food,
        activities=total * table.activities,
        transportation=total * table.transportation,
        shopping=total * table.shopping,
        emergency=total * table.emergency,
    )
