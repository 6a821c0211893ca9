from __future__ import annotations

import re

from app.api.models.schemas import BudgetSummary, Trip

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")


def extract_number(value: str) -> float:
    """First number in a display string: ``"₹10,000"`` -> 10000, ``"₹200–400"`` -> 200."""
    match = _NUMBER_RE.search(value.replace(",", ""))
    return float(match.group(1)) if match else 0.0


def summarize_budget(trip: Trip) -> BudgetSummary:
    planned = extract_number(trip.totalBudget)
    spend = sum(extract_number(activity.cost) for day in trip.days for activity in day.activities)
    over_by = spend - planned

    if planned == 0:
        status = "Flexible budget"
    elif over_by > 0:
        status = "Slightly over planned"
    else:
        status = "Within planned budget"

    return BudgetSummary(
        plannedBudget=planned,
        estimatedSpend=spend,
        overBy=over_by,
        status=status,
        travelBreakdown=trip.travelBreakdown,
    )
