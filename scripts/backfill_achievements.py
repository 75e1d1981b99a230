#!/usr/bin/env python3
"""
Re-run the achievement rules over existing meal / weight history.
Usage:
    python -m scripts.backfill_achievements            # every owner
    python -m scripts.backfill_achievements <user_id>  # one owner
"""
import sys
import asyncio

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select, union
from services.achievements import award_achievements
from services.db import MealEntry, WeightEntry, dispose_engine, session_scope


async def backfill_achievements(user_id: str | None = None) -> int:
    async with session_scope() as db:
        if user_id:
            owners = [user_id]
        else:
            owners = (
                await db.execute(union(select(MealEntry.user_id), select(WeightEntry.user_id)))
            ).scalars().all()

        total = 0
        for owner in owners:
            new = await award_achievements(db, owner)
            if new:
                print(f"✓ {owner}: unlocked {', '.join(a.kind for a in new)}")
            total += len(new)
    print(f"✓ back-filled {total} achievement(s) across {len(owners)} owner(s)")
    return total


async def _run(user_id: str | None) -> None:
    try:
        await backfill_achievements(user_id)
    finally:
        await dispose_engine()


def main():
    if len(sys.argv) > 2:
        print("Usage: python -m scripts.backfill_achievements [user_id]")
        sys.exit(1)
    asyncio.run(_run(sys.argv[1] if len(sys.argv) == 2 else None))

if __name__ == "__main__":
    main()
