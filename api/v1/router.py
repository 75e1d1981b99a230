# api/v1/router.py
from fastapi import APIRouter

from . import achievements, dashboard, meals, profiles, weights

api_router = APIRouter()

api_router.include_router(profiles.router, prefix="/profile", tags=["Profile"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(weights.router, prefix="/weights", tags=["Weights"])
api_router.include_router(achievements.router, prefix="/achievements", tags=["Achievements"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
