from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.energy import compute_energy_targets
from services.auth import SessionContext, get_current_session
from services.db import Achievement, MealEntry, Profile, WeightEntry, get_session
from api.v1.schemas import ProfileIn, ProfileOut, ProfilePatch

router = APIRouter()
_LOG = logging.getLogger(__name__)

_INPUT_FIELDS = tuple(ProfileIn.model_fields)


# ───────────────────────── helpers ──────────────────────────
def _apply(row: Profile, fields: dict) -> None:
    """Write inputs, then re-derive bmr / tdee / target_calories from the row."""
    for key, value in fields.items():
        setattr(row, key, value)
    targets = compute_energy_targets(row)
    row.bmr = targets.bmr
    row.tdee = targets.tdee
    row.target_calories = targets.target_calories


async def _save(db: AsyncSession, row: Profile) -> ProfileOut:
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        _LOG.exception("profile save failed for %s", row.id)
        raise HTTPException(500, "Failed to save profile") from exc
    await db.refresh(row)
    return ProfileOut.model_validate(row, from_attributes=True)


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=ProfileOut)
async def get_profile(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> ProfileOut:
    row = await db.get(Profile, session.user_id)
    if row is None:
        raise HTTPException(404, "profile not set")
    return ProfileOut.model_validate(row, from_attributes=True)


# ───────────────────────── upsert ───────────────────────────
@router.put("", response_model=ProfileOut)
async def upsert_profile(
    body: ProfileIn,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> ProfileOut:
    row = await db.get(Profile, session.user_id)
    if row is None:                            # onboarding
        row = Profile(id=session.user_id)
        db.add(row)
    _apply(row, body.model_dump())
    return await _save(db, row)


@router.patch("", response_model=ProfileOut)
async def edit_profile(
    body: ProfilePatch,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> ProfileOut:
    row = await db.get(Profile, session.user_id)
    if row is None:
        raise HTTPException(404, "profile not set")
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    _apply(row, {k: changes[k] for k in _INPUT_FIELDS if k in changes})
    return await _save(db, row)


# ───────────────────────── delete ───────────────────────────
@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_profile(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_session),
) -> Response:
    """Remove the profile and every entry owned by the caller.

    Entries are purged even when onboarding never happened; 404 only when
    the caller owns nothing at all.
    """
    removed = 0
    for model in (MealEntry, WeightEntry, Achievement):
        res = await db.execute(delete(model).where(model.user_id == session.user_id))
        removed += res.rowcount or 0
    row = await db.get(Profile, session.user_id)
    if row is not None:
        await db.delete(row)
        removed += 1
    if not removed:
        await db.rollback()
        raise HTTPException(404, "nothing to delete")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
