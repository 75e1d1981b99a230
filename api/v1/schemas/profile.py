from __future__ import annotations
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


class Goal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class ProfileIn(BaseModel):
    """Onboarding / profile-edit form. Derived targets are never accepted."""
    name: str = Field(..., min_length=1, max_length=200)
    gender: Gender
    age: int = Field(..., ge=15, le=100)
    height_cm: float = Field(..., ge=120, le=250)
    weight_kg: float = Field(..., ge=30, le=300)
    activity_level: ActivityLevel
    goal: Goal

    model_config = ConfigDict(use_enum_values=True)


class ProfilePatch(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    gender: Gender | None = None
    age: int | None = Field(None, ge=15, le=100)
    height_cm: float | None = Field(None, ge=120, le=250)
    weight_kg: float | None = Field(None, ge=30, le=300)
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None

    model_config = ConfigDict(use_enum_values=True)


class ProfileOut(ProfileIn):
    id: str
    bmr: int
    tdee: int
    target_calories: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
