"""
services/achievements.py
────────────────────────────────────────────────────────────────────────
Post-insert hook run by the meal / weight routers right after their entry
is committed. Loads the owner's full history, asks the evaluator which
milestones are new and stores one Achievement row per kind.

Each unlock is committed on its own; a unique-constraint hit means a
concurrent request already stored that kind and is ignored.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.achievements import BADGES, Milestone, evaluate_achievements
from services.db import Achievement, MealEntry, WeightEntry

_LOG = logging.getLogger(__name__)


async def _unlock(db: AsyncSession, user_id: str, kind: Milestone) -> Achievement | None:
    badge = BADGES[kind]
    row = Achievement(
        user_id=user_id,
        kind=kind.value,
        title=badge.title,
        description=badge.description,
        icon=badge.icon,
    )
    db.add(row)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        _LOG.info("achievement %s already unlocked for %s", kind.value, user_id)
        return None
    db.expunge(row)  # keep loaded state through later rollbacks
    _LOG.info("achievement %s unlocked for %s", kind.value, user_id)
    return row


async def award_achievements(db: AsyncSession, user_id: str) -> List[Achievement]:
    """Evaluate and persist newly qualifying milestones for ``user_id``."""
    meals = (
        await db.execute(select(MealEntry).where(MealEntry.user_id == user_id))
    ).scalars().all()
    weights = (
        await db.execute(
            select(WeightEntry)
            .where(WeightEntry.user_id == user_id)
            .order_by(WeightEntry.created_at, WeightEntry.id)
        )
    ).scalars().all()
    unlocked = (
        await db.execute(select(Achievement.kind).where(Achievement.user_id == user_id))
    ).scalars().all()

    kinds = evaluate_achievements(user_id, meals, weights, unlocked, tz=settings.timezone)

    new: List[Achievement] = []
    for kind in sorted(kinds, key=lambda k: k.value):
        row = await _unlock(db, user_id, kind)
        if row is not None:
            new.append(row)
    return new


async def run_achievement_hook(db: AsyncSession, user_id: str) -> List[Achievement]:
    """Like :func:`award_achievements` but never fails the triggering request."""
    try:
        return await award_achievements(db, user_id)
    except Exception:
        await db.rollback()
        _LOG.exception("achievement evaluation failed for %s", user_id)
        return []
