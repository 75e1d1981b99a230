from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.aggregation import weight_chart, weight_progress
from services.achievements import run_achievement_hook
from services.auth import SessionContext, get_current_session
from services.db import WeightEntry, get_session
from api.v1.schemas import AchievementOut, WeightIn, WeightLogged, WeightOut, WeightProgress

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _history(db: AsyncSession, user_id: str) -> list[WeightEntry]:
    result = await db.execute(
        select(WeightEntry)
        .where(WeightEntry.user_id == user_id)
        .order_by(WeightEntry.created_at, WeightEntry.id)
    )
    return list(result.scalars().all())


@router.post("", response_model=WeightLogged, status_code=status.HTTP_201_CREATED)
async def log_weight(
    body: WeightIn,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> WeightLogged:
    entry = WeightEntry(user_id=session.user_id, weight_kg=body.weight_kg)
    db.add(entry)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        _LOG.exception("weight insert failed for %s", session.user_id)
        raise HTTPException(500, "Failed to log weight") from exc
    out = WeightOut.model_validate(entry, from_attributes=True)

    unlocked = await run_achievement_hook(db, session.user_id)
    return WeightLogged(
        entry=out,
        new_achievements=[AchievementOut.model_validate(a, from_attributes=True) for a in unlocked],
    )


@router.get("", response_model=list[WeightOut])
async def list_weights(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> list[WeightOut]:
    return [WeightOut.model_validate(w, from_attributes=True) for w in await _history(db, session.user_id)]


@router.get("/progress", response_model=WeightProgress)
async def get_progress(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> WeightProgress:
    entries = await _history(db, session.user_id)
    return WeightProgress(
        entries=[WeightOut.model_validate(w, from_attributes=True) for w in entries],
        chart=weight_chart(entries, settings.timezone),
        progress=weight_progress(entries, settings.timezone),
    )
