from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AchievementOut(BaseModel):
    id: int
    kind: str
    title: str
    description: str
    icon: str
    unlocked_at: datetime

    model_config = ConfigDict(from_attributes=True)
