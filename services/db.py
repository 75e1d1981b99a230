"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for profiles, meal / weight logs and achievements
* Session dependency + create / dispose helpers used by main.py
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncAttrs,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


async def _create_engine() -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("Set the DATABASE_URL env var")
    return create_async_engine(settings.database_url, pool_pre_ping=True)


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = await _create_engine()
    return _ENGINE


async def dispose_engine() -> None:
    global _ENGINE
    if _ENGINE is not None:
        await _ENGINE.dispose()
        _ENGINE = None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # identity
    name: Mapped[str] = mapped_column(String)
    gender: Mapped[str] = mapped_column(String(16))
    age: Mapped[int] = mapped_column(Integer)
    height_cm: Mapped[float] = mapped_column(Float)
    weight_kg: Mapped[float] = mapped_column(Float)
    activity_level: Mapped[str] = mapped_column(String(16))
    goal: Mapped[str] = mapped_column(String(16))
    # derived – written only together, from the fields above
    bmr: Mapped[int] = mapped_column(Integer)
    tdee: Mapped[int] = mapped_column(Integer)
    target_calories: Mapped[int] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class MealEntry(Base):
    __tablename__ = "meal_entries"

    id:         Mapped[int]   = mapped_column(primary_key=True)
    user_id:    Mapped[str]   = mapped_column(String(36), index=True)
    meal_text:  Mapped[str]   = mapped_column(Text)
    calories:   Mapped[int]   = mapped_column(Integer)
    protein:    Mapped[float] = mapped_column(Float)
    carbs:      Mapped[float] = mapped_column(Float)
    fat:        Mapped[float] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )


class WeightEntry(Base):
    __tablename__ = "weight_entries"

    id:         Mapped[int]   = mapped_column(primary_key=True)
    user_id:    Mapped[str]   = mapped_column(String(36), index=True)
    weight_kg:  Mapped[float] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )


class Achievement(Base):
    __tablename__ = "achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "kind", name="uq_achievement_user_kind"),
    )

    id:          Mapped[int] = mapped_column(primary_key=True)
    user_id:     Mapped[str] = mapped_column(String(36), index=True)
    kind:        Mapped[str] = mapped_column(String(32))
    title:       Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text)
    icon:        Mapped[str] = mapped_column(String(16))
    unlocked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


# ───────── schema / session helpers ──────────────────────────────────

async def init_models() -> None:
    eng = await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    eng = await engine()
    async_session = async_sessionmaker(eng, expire_on_commit=False)
    async with async_session() as session:
        yield session


# scripts: ``async with session_scope() as db``
session_scope = asynccontextmanager(get_session)
