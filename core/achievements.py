"""
core/achievements.py
────────────────────────────────────────────────────────────────────────
Milestone rules re-evaluated after every new meal or weight entry.

Each rule looks at the owner's *full* history and is checked only for
kinds that are not unlocked yet, so running the evaluator twice over the
same history never yields the same kind twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, Protocol, Sequence
from zoneinfo import ZoneInfo

_LOG = logging.getLogger(__name__)

WEIGHT_LOSS_MILESTONE_KG = Decimal(5)


class Milestone(str, Enum):
    first_meal = "first_meal"
    ten_meals = "ten_meals"
    week_streak = "week_streak"
    weight_loss_5kg = "weight_loss_5kg"


@dataclass(frozen=True)
class Badge:
    title: str
    description: str
    icon: str


BADGES: dict[Milestone, Badge] = {
    Milestone.first_meal: Badge("First Meal", "Logged your first meal!", "🍽️"),
    Milestone.ten_meals: Badge("Getting Started", "Logged 10 meals!", "📝"),
    Milestone.week_streak: Badge("Week Warrior", "Logged meals for 7 days!", "📅"),
    Milestone.weight_loss_5kg: Badge("Weight Loss Champion", "Lost 5kg!", "⭐"),
}


class _Timestamped(Protocol):
    created_at: datetime


class _Weighed(Protocol):
    created_at: datetime
    weight_kg: float


# ───────────────────────── helpers ──────────────────────────
def as_utc(ts: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def logging_days(meals: Iterable[_Timestamped], tz: str | ZoneInfo = "UTC") -> set[date]:
    zone = tz if isinstance(tz, ZoneInfo) else ZoneInfo(tz)
    return {as_utc(m.created_at).astimezone(zone).date() for m in meals}


def _lost_five_kg(weights: Sequence[_Weighed]) -> bool:
    if not weights:
        return False
    ordered = sorted(weights, key=lambda w: as_utc(w.created_at))
    first = Decimal(str(ordered[0].weight_kg))
    latest = Decimal(str(ordered[-1].weight_kg))
    return first > latest and first - latest >= WEIGHT_LOSS_MILESTONE_KG


# ───────────────────────── evaluator ────────────────────────
def evaluate_achievements(
    owner_id: str,
    meals: Sequence[_Timestamped],
    weights: Sequence[_Weighed],
    already_unlocked: Iterable[Milestone | str] = (),
    tz: str | ZoneInfo = "UTC",
) -> set[Milestone]:
    """Return the milestone kinds that qualify now and are not unlocked yet.

    ``first_meal`` and ``ten_meals`` fire on the exact count only.
    ``week_streak`` counts distinct calendar days in ``tz`` with at least
    one meal; the days do not have to be consecutive.
    """
    unlocked = {Milestone(k) for k in already_unlocked}
    qualifying: set[Milestone] = set()

    meal_count = len(meals)
    if meal_count == 1:
        qualifying.add(Milestone.first_meal)
    if meal_count == 10:
        qualifying.add(Milestone.ten_meals)
    if meal_count and len(logging_days(meals, tz)) == 7:
        qualifying.add(Milestone.week_streak)
    if _lost_five_kg(weights):
        qualifying.add(Milestone.weight_loss_5kg)

    new = qualifying - unlocked
    if new:
        _LOG.debug("owner %s qualifies for %s", owner_id, sorted(k.value for k in new))
    return new
