"""
Centralised settings loader.

Every field maps to the upper-cased env var of the same name
(``DATABASE_URL``, ``GEMINI_API_KEY`` …) and may also come from ``.env``.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = "local"
    database_url: str | None = None
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # ─── auth / session ─────────────────────────────────────────────
    jwt_secret: str = "changeme"
    jwt_ttl_minutes: int = 60
    session_cookie: str = "access_token"

    # ─── Gemini meal estimator ──────────────────────────────────────
    gemini_api_key: str | None = None
    gemini_model: str = "models/gemini-2.0-flash"
    estimator_temperature: float = 0.3

    # ─── tracking ───────────────────────────────────────────────────
    timezone: str = "UTC"               # calendar-day boundary
    default_target_calories: int = 2000

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
