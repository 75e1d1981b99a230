from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.achievement import AchievementOut


class MealIn(BaseModel):
    meal_text: str = Field(..., min_length=1, max_length=2000)

    @field_validator("meal_text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Meal text is required")
        return v


class NutritionOut(BaseModel):
    calories: float
    protein: float
    carbs: float
    fat: float


class MealOut(BaseModel):
    id: int
    meal_text: str
    calories: int
    protein: float
    carbs: float
    fat: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MealLogged(BaseModel):
    meal: MealOut
    new_achievements: list[AchievementOut] = []
