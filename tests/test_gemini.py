"""
GeminiEstimator against a stand-in client: every provider problem must
surface as EstimationFailure.
"""
from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as gerrors

from config import settings
from core.estimation import EstimationFailure
from services.gemini import GeminiEstimator, get_estimator


def _client(reply=None, exc: Exception | None = None):
    calls = []

    async def generate_content(**kwargs):
        calls.append(kwargs)
        if exc is not None:
            raise exc
        return SimpleNamespace(text=reply)

    client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
    return client, calls


def _estimate(estimator: GeminiEstimator, text: str = "two eggs on toast"):
    return asyncio.run(estimator.estimate(text))


# ── success ─────────────────────────────────────────────────────────
def test_plain_json_reply():
    client, calls = _client('{"calories": 320, "protein": 18, "carbs": 25, "fat": 14}')
    est = _estimate(GeminiEstimator(client, model="m", temperature=0.1))
    assert (est.calories, est.protein, est.carbs, est.fat) == (320, 18, 25, 14)
    assert calls[0]["model"] == "m"
    assert "two eggs on toast" in calls[0]["contents"][0]


def test_fenced_reply():
    client, _ = _client('```json\n{"calories": 300, "protein": 1, "carbs": 2, "fat": 3}\n```')
    assert _estimate(GeminiEstimator(client)).calories == 300.0


# ── failures ────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "reply",
    [
        None,
        "",
        "nope",
        "[1]",
        '{"calories": 300, "protein": 10}',
        '{"calories": -5, "protein": 1, "carbs": 1, "fat": 1}',
    ],
)
def test_bad_reply_raises(reply):
    client, _ = _client(reply)
    with pytest.raises(EstimationFailure):
        _estimate(GeminiEstimator(client))


@pytest.mark.parametrize(
    "exc",
    [
        gerrors.ServerError(503, {"error": {"code": 503, "message": "down", "status": "UNAVAILABLE"}}),
        httpx.ConnectTimeout("timed out"),
    ],
)
def test_provider_error_raises(exc):
    client, _ = _client(exc=exc)
    with pytest.raises(EstimationFailure):
        _estimate(GeminiEstimator(client))


def test_blank_text_never_reaches_provider():
    client, calls = _client('{"calories": 1, "protein": 1, "carbs": 1, "fat": 1}')
    with pytest.raises(EstimationFailure):
        _estimate(GeminiEstimator(client), "   ")
    assert calls == []


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)
    with pytest.raises(EstimationFailure):
        _estimate(get_estimator())


# ── settings read at construction ───────────────────────────────────
def test_defaults_follow_current_settings(monkeypatch):
    monkeypatch.setattr(settings, "gemini_model", "models/other")
    monkeypatch.setattr(settings, "estimator_temperature", 0.0)
    est = GeminiEstimator(None)
    assert est.model == "models/other"
    assert est.temperature == 0.0
