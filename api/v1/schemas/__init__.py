"""Re-export individual schema modules for easy imports."""

from .profile import ProfileIn, ProfilePatch, ProfileOut
from .achievement import AchievementOut
from .meal import MealIn, MealLogged, MealOut, NutritionOut
from .weight import WeightIn, WeightLogged, WeightOut, WeightProgress
from .dashboard import DashboardOut

__all__ = [
    "ProfileIn",
    "ProfilePatch",
    "ProfileOut",
    "AchievementOut",
    "MealIn",
    "MealLogged",
    "MealOut",
    "NutritionOut",
    "WeightIn",
    "WeightLogged",
    "WeightOut",
    "WeightProgress",
    "DashboardOut",
]
