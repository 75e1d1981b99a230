"""
Rule tests for core/achievements.py – no DB, plain records.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from core.achievements import Milestone, evaluate_achievements, logging_days

DAY1 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@dataclass
class Meal:
    created_at: datetime


@dataclass
class Weight:
    weight_kg: float
    created_at: datetime


def _meals(n: int, days: int = 1) -> list[Meal]:
    return [Meal(DAY1 + timedelta(days=i % days, minutes=i)) for i in range(n)]


def _weights(*kgs: float, gaps=None) -> list[Weight]:
    gaps = gaps or range(len(kgs))
    return [Weight(kg, DAY1 + timedelta(days=d)) for kg, d in zip(kgs, gaps)]


# ── meal counts ─────────────────────────────────────────────────────
def test_first_meal_on_first_entry():
    assert evaluate_achievements("u1", _meals(1), []) == {Milestone.first_meal}


def test_first_meal_not_repeated():
    assert evaluate_achievements("u1", _meals(1), [], {"first_meal"}) == set()


def test_first_meal_only_on_exact_count():
    # history grew before the rule ever ran -> no badge
    assert Milestone.first_meal not in evaluate_achievements("u1", _meals(2), [])


def test_ten_meals_exact():
    assert Milestone.ten_meals in evaluate_achievements("u1", _meals(10), [])
    assert Milestone.ten_meals not in evaluate_achievements("u1", _meals(11), [])


# ── distinct days ───────────────────────────────────────────────────
def test_week_streak_counts_distinct_days_not_consecutive():
    meals = [Meal(DAY1 + timedelta(days=2 * i)) for i in range(7)]   # every other day
    assert Milestone.week_streak in evaluate_achievements("u1", meals, [])


def test_week_streak_needs_seven_days():
    assert Milestone.week_streak not in evaluate_achievements("u1", _meals(12, days=6), [])


def test_day_boundary_follows_time_zone():
    late = [Meal(datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)),
            Meal(datetime(2024, 3, 2, 0, 30, tzinfo=timezone.utc))]
    assert len(logging_days(late, "UTC")) == 2
    assert len(logging_days(late, "America/New_York")) == 1


def test_naive_timestamps_read_as_utc():
    naive = [Meal(datetime(2024, 3, 1, 23, 30)), Meal(datetime(2024, 3, 1, 23, 45))]
    assert len(logging_days(naive)) == 1


# ── weight loss ─────────────────────────────────────────────────────
def test_weight_loss_unlocks_over_five_kg():
    ws = _weights(80, 77, 74.9, gaps=[0, 4, 9])
    assert evaluate_achievements("u1", [], ws) == {Milestone.weight_loss_5kg}


def test_weight_loss_under_five_kg():
    assert evaluate_achievements("u1", [], _weights(80, 77, 76)) == set()


def test_weight_loss_exactly_five_kg():
    assert Milestone.weight_loss_5kg in evaluate_achievements("u1", [], _weights(85.3, 80.3))


def test_weight_loss_uses_time_order_not_input_order():
    ws = list(reversed(_weights(80, 74)))
    assert Milestone.weight_loss_5kg in evaluate_achievements("u1", [], ws)


def test_weight_gain_never_unlocks():
    assert evaluate_achievements("u1", [], _weights(70, 76)) == set()


# ── combined / idempotent ───────────────────────────────────────────
def test_several_milestones_from_one_event():
    got = evaluate_achievements("u1", _meals(1), _weights(90, 84))
    assert got == {Milestone.first_meal, Milestone.weight_loss_5kg}


def test_same_history_twice_no_duplicates():
    meals, weights = _meals(10, days=7), _weights(90, 84)
    first = evaluate_achievements("u1", meals, weights)
    second = evaluate_achievements("u1", meals, weights, first)
    assert first == {Milestone.ten_meals, Milestone.week_streak, Milestone.weight_loss_5kg}
    assert second == set()
