"""
Shared fixtures: an app bound to a throw-away SQLite file and a fake
estimator in place of Gemini.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from config import settings
from core.estimation import EstimationFailure, NutritionEstimate
from services import db as db_module
from services.auth import create_token
from services.gemini import get_estimator


class FakeEstimator:
    def __init__(self, result: NutritionEstimate | None = None, fail: bool = False) -> None:
        self.result = result or NutritionEstimate(calories=450.5, protein=30, carbs=40, fat=15)
        self.fail = fail
        self.calls: list[str] = []

    async def estimate(self, meal_text: str) -> NutritionEstimate:
        self.calls.append(meal_text)
        if self.fail:
            raise EstimationFailure("provider down")
        return self.result


@pytest.fixture
def estimator() -> FakeEstimator:
    return FakeEstimator()


@pytest.fixture
def client(tmp_path, monkeypatch, estimator):
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(db_module, "_ENGINE", None)

    from main import app

    app.dependency_overrides[get_estimator] = lambda: estimator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(user_id: str = "11111111-1111-1111-1111-111111111111") -> dict[str, str]:
    return {"Authorization": f"Bearer {create_token(user_id)}"}


@pytest.fixture
def headers() -> dict[str, str]:
    return auth_headers()
