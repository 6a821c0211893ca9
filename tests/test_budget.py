import pytest
from conftest import make_trip

from app.ai.itinerary_engine import build_trip
from app.domain.budget import extract_number, summarize_budget


@pytest.mark.parametrize(
    "text,expected",
    [("₹10,000", 10000), ("₹200–400", 200), ("₹0–1k", 0), ("Flexible Budget", 0), ("$12.50", 12.5), ("", 0)],
)
def test_extract_number(text, expected):
    assert extract_number(text) == expected


def test_within_budget():
    summary = summarize_budget(make_trip("a", "2025-01-01T00:00:00.000Z"))

    assert summary.plannedBudget == 5000
    assert summary.estimatedSpend == 200
    assert summary.overBy == -4800
    assert summary.status == "Within planned budget"


def test_over_budget_and_flexible():
    over = summarize_budget(build_trip("3 days in mumbai under 1000"))
    assert over.status == "Slightly over planned"
    assert over.overBy > 0
    assert over.travelBreakdown is not None

    assert summarize_budget(build_trip("3 days in mumbai")).status == "Flexible budget"
