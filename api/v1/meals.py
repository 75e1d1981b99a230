# api/v1/meals.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status, Response
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.aggregation import day_bounds, local_today
from core.energy import round_half_up
from core.estimation import EstimationFailure, MealEstimator, NutritionEstimate
from services.achievements import run_achievement_hook
from services.auth import SessionContext, get_current_session
from services.db import MealEntry, get_session
from services.gemini import get_estimator
from api.v1.schemas import AchievementOut, MealIn, MealLogged, MealOut, NutritionOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _estimate(estimator: MealEstimator, meal_text: str) -> NutritionEstimate:
    try:
        return await estimator.estimate(meal_text)
    except EstimationFailure as exc:
        _LOG.warning("meal analysis failed: %s", exc)
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, "Failed to analyze meal") from exc


async def meals_for_day(db: AsyncSession, user_id: str, day: date) -> list[MealEntry]:
    start, end = day_bounds(day, settings.timezone)
    result = await db.execute(
        select(MealEntry)
        .where(
            MealEntry.user_id == user_id,
            MealEntry.created_at >= start,
            MealEntry.created_at < end,
        )
        .order_by(MealEntry.created_at.desc(), MealEntry.id.desc())
    )
    return list(result.scalars().all())


@router.post(
    "/analyze",
    response_model=NutritionOut,
    summary="Estimate macros for a meal description without logging it",
)
async def analyze_meal(
    body: MealIn,
    session: SessionContext = Depends(get_current_session),
    estimator: MealEstimator = Depends(get_estimator),
) -> NutritionOut:
    est = await _estimate(estimator, body.meal_text)
    return NutritionOut(**est.model_dump())


@router.post(
    "",
    response_model=MealLogged,
    status_code=status.HTTP_201_CREATED,
    summary="Analyze and log a meal",
)
async def log_meal(
    body: MealIn,
    session: SessionContext = Depends(get_current_session),
    estimator: MealEstimator = Depends(get_estimator),
    db: AsyncSession = Depends(get_session),
) -> MealLogged:
    # nothing is written unless the estimate succeeded
    est = await _estimate(estimator, body.meal_text)

    meal = MealEntry(
        user_id=session.user_id,
        meal_text=body.meal_text,
        calories=round_half_up(est.calories),
        protein=est.protein,
        carbs=est.carbs,
        fat=est.fat,
    )
    db.add(meal)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        _LOG.exception("meal insert failed for %s", session.user_id)
        raise HTTPException(500, "Failed to log meal") from exc
    out = MealOut.model_validate(meal, from_attributes=True)

    unlocked = await run_achievement_hook(db, session.user_id)
    return MealLogged(
        meal=out,
        new_achievements=[AchievementOut.model_validate(a, from_attributes=True) for a in unlocked],
    )


@router.get(
    "",
    response_model=list[MealOut],
    summary="List meals logged on a day (default today), newest first",
)
async def list_meals(
    day: date | None = Query(None, description="YYYY-MM-DD"),
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> list[MealOut]:
    meals = await meals_for_day(db, session.user_id, day or local_today(settings.timezone))
    return [MealOut.model_validate(m, from_attributes=True) for m in meals]


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of the caller's meals",
)
async def delete_meal(
    meal_id: int,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> Response:
    meal = await db.get(MealEntry, meal_id)
    if not meal or meal.user_id != session.user_id:
        raise HTTPException(status_code=404, detail="Meal not found")
    await db.delete(meal)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
