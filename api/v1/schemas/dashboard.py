from __future__ import annotations
from datetime import date

from pydantic import BaseModel

from api.v1.schemas.meal import MealOut, NutritionOut


class DashboardOut(BaseModel):
    day: date
    name: str | None = None
    target_calories: int
    totals: NutritionOut
    remaining_calories: float
    meals: list[MealOut]
