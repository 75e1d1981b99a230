from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.achievement import AchievementOut


class WeightIn(BaseModel):
    weight_kg: float = Field(..., ge=30, le=300)


class WeightOut(BaseModel):
    id: int
    weight_kg: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WeightLogged(BaseModel):
    entry: WeightOut
    new_achievements: list[AchievementOut] = []


class WeightChart(BaseModel):
    labels: list[str]
    data: list[float]


class WeightDelta(BaseModel):
    first_kg: float
    latest_kg: float
    difference_kg: float
    percentage_change: float
    is_gain: bool


class WeightProgress(BaseModel):
    entries: list[WeightOut]
    chart: WeightChart
    progress: WeightDelta | None = None
