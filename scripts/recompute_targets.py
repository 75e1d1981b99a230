"""
scripts/recompute_targets.py
────────────────────────────────────────────────────────────────────────
Re-derive bmr / tdee / target_calories for stored profiles, e.g. after a
change to the activity multipliers:

    python -m scripts.recompute_targets                 # all profiles
    python -m scripts.recompute_targets --user <uuid>   # one profile
"""
from __future__ import annotations

import asyncio
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select

from core.energy import compute_energy_targets
from services.db import Profile, dispose_engine, session_scope


def _refresh(profile: Profile) -> bool:
    targets = compute_energy_targets(profile)
    changed = (profile.bmr, profile.tdee, profile.target_calories) != (
        targets.bmr, targets.tdee, targets.target_calories
    )
    if changed:
        profile.bmr = targets.bmr
        profile.tdee = targets.tdee
        profile.target_calories = targets.target_calories
    return changed


async def recompute(user_id: str | None = None) -> int:
    async with session_scope() as db:
        stmt = select(Profile)
        if user_id:
            stmt = stmt.where(Profile.id == user_id)
        profiles = (await db.execute(stmt)).scalars().all()

        updated = 0
        for p in profiles:
            if _refresh(p):
                updated += 1
        await db.commit()
    print(f"✓ targets updated for {updated} of {len(profiles)} profile(s)")
    return updated


async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--user", help="update only this profile id")
    args = ap.parse_args()
    try:
        await recompute(args.user)
    finally:
        await dispose_engine()


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(_async_main())
