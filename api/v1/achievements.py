from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth import SessionContext, get_current_session
from services.db import Achievement, get_session
from api.v1.schemas import AchievementOut

router = APIRouter()


@router.get("", response_model=list[AchievementOut], summary="Unlocked badges, newest first")
async def list_achievements(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> list[AchievementOut]:
    rows = (
        await db.execute(
            select(Achievement)
            .where(Achievement.user_id == session.user_id)
            .order_by(Achievement.unlocked_at.desc(), Achievement.id.desc())
        )
    ).scalars().all()
    return [AchievementOut.model_validate(a, from_attributes=True) for a in rows]
