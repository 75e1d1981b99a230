from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from core.aggregation import day_bounds, macro_totals, weight_chart, weight_progress


@dataclass
class Meal:
    calories: int
    protein: float
    carbs: float
    fat: float


@dataclass
class Weight:
    weight_kg: float
    created_at: datetime


def test_macro_totals_sum():
    meals = [Meal(500, 30, 50, 20), Meal(300, 10.5, 40, 5.25)]
    assert macro_totals(meals) == {"calories": 800, "protein": 40.5, "carbs": 90, "fat": 25.2}


def test_macro_totals_empty():
    assert macro_totals([]) == {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0}


def test_day_bounds_in_zone():
    start, end = day_bounds(date(2024, 1, 15), "Europe/Berlin")
    assert start == datetime(2024, 1, 14, 23, 0, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 15, 23, 0, tzinfo=timezone.utc)


WEIGHTS = [
    Weight(77.0, datetime(2024, 3, 5, 8, tzinfo=timezone.utc)),
    Weight(80.0, datetime(2024, 3, 1, 8, tzinfo=timezone.utc)),
    Weight(76.0, datetime(2024, 3, 12, 8, tzinfo=timezone.utc)),
]


def test_weight_chart_sorted_with_labels():
    chart = weight_chart(WEIGHTS)
    assert chart == {"labels": ["Mar 1", "Mar 5", "Mar 12"], "data": [80.0, 77.0, 76.0]}


def test_weight_progress_loss():
    p = weight_progress(WEIGHTS)
    assert p["difference_kg"] == 4.0
    assert p["percentage_change"] == -5.0
    assert p["is_gain"] is False


def test_weight_progress_needs_two_entries():
    assert weight_progress(WEIGHTS[:1]) is None
