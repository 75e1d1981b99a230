"""
core/energy.py
────────────────────────────────────────────────────────────────────────
Energy-expenditure targets stored on every profile:

1. BMR  (Mifflin–St Jeor, rounded)
2. TDEE (activity multiplier, rounded)
3. Target calories (goal offset)

The three numbers are always derived together from the biometric inputs;
callers validate ranges before calling.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

Logger = logging.getLogger(__name__)

GENDERS = ("male", "female", "other")
GOALS = ("lose", "maintain", "gain")

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_OFFSETS: dict[str, int] = {
    "lose": -500,
    "maintain": 0,
    "gain": 500,
}


# ──────────────────────────────────────────────────────────────────────
#  Input / output dataclasses
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Biometrics:
    age: int
    gender: str             # "male" | "female" | "other"
    weight_kg: float
    height_cm: float
    activity_level: str     # key of ACTIVITY_MULTIPLIERS
    goal: str = "maintain"  # "lose" | "maintain" | "gain"


@dataclass(frozen=True)
class EnergyTargets:
    bmr: int
    tdee: int
    target_calories: int


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (1642.5 -> 1643)."""
    return int(math.floor(value + 0.5))


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class EnergyCalculator:
    """Source-of-truth for bmr / tdee / target_calories.

    Accepts anything exposing the :class:`Biometrics` attributes: the
    dataclass itself, the ORM ``Profile`` row or the API payload.
    """

    # --------------- BMR / TDEE -------------------------------------
    def bmr(self, p) -> int:
        # "other" shares the female constant
        s = 5 if p.gender == "male" else -161
        return round_half_up(10 * p.weight_kg + 6.25 * p.height_cm - 5 * p.age + s)

    def tdee(self, bmr: int, activity_level: str) -> int:
        return round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level])

    def target_calories(self, tdee: int, goal: str) -> int:
        return tdee + GOAL_OFFSETS[goal]

    # --------------- public entrypoint ------------------------------
    def targets(self, p) -> EnergyTargets:
        bmr = self.bmr(p)
        tdee = self.tdee(bmr, p.activity_level)
        result = EnergyTargets(
            bmr=bmr, tdee=tdee, target_calories=self.target_calories(tdee, p.goal)
        )
        Logger.debug("energy targets computed: %s", result)
        return result


_calc = EnergyCalculator()


def compute_energy_targets(profile) -> EnergyTargets:
    return _calc.targets(profile)
