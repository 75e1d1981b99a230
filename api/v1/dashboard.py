from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.aggregation import local_today, macro_totals
from services.auth import SessionContext, get_current_session
from services.db import Profile, get_session
from api.v1.meals import meals_for_day
from api.v1.schemas import DashboardOut, MealOut, NutritionOut

router = APIRouter()


@router.get("", response_model=DashboardOut, summary="Day totals against the calorie target")
async def get_dashboard(
    day: date | None = Query(None, description="YYYY-MM-DD, defaults to today"),
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> DashboardOut:
    day = day or local_today(settings.timezone)
    profile = await db.get(Profile, session.user_id)
    meals = await meals_for_day(db, session.user_id, day)

    # no profile yet → generic target
    target = profile.target_calories if profile else settings.default_target_calories
    totals = macro_totals(meals)
    return DashboardOut(
        day=day,
        name=profile.name if profile else None,
        target_calories=target,
        totals=NutritionOut(**totals),
        remaining_calories=round(target - totals["calories"], 1),
        meals=[MealOut.model_validate(m, from_attributes=True) for m in meals],
    )
