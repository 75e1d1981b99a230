"""Contract of the external meal-nutrition estimator."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, Field


class EstimationFailure(Exception):
    """Provider unavailable, malformed provider output or unusable input."""


class NutritionEstimate(BaseModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)   # grams
    carbs: float = Field(..., ge=0)     # grams
    fat: float = Field(..., ge=0)       # grams


class MealEstimator(Protocol):
    async def estimate(self, meal_text: str) -> NutritionEstimate:
        """Estimate macros for a free-text meal or raise EstimationFailure."""
        ...
