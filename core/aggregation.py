"""
core/aggregation.py
────────────────────────────────────────────────────────────────────────
Thin presentation helpers for the dashboard and the progress page:

* day boundaries in the configured time zone
* macro totals over a set of meals
* weight chart series + first/last delta
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Iterable, List
from zoneinfo import ZoneInfo

import pandas as pd

from core.achievements import as_utc

MACROS = ["calories", "protein", "carbs", "fat"]


def day_bounds(day: date, tz: str = "UTC") -> tuple[datetime, datetime]:
    """UTC ``[start, end)`` of the calendar ``day`` in ``tz``."""
    zone = ZoneInfo(tz)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def local_today(tz: str = "UTC") -> date:
    return datetime.now(ZoneInfo(tz)).date()


def macro_totals(meals: Iterable[Any]) -> Dict[str, float]:
    df = pd.DataFrame([{k: getattr(m, k) for k in MACROS} for m in meals], columns=MACROS)
    if df.empty:
        return {k: 0.0 for k in MACROS}
    sums = df.sum()
    return {k: round(float(sums[k]), 1) for k in MACROS}


def _weights_frame(weights: Iterable[Any], tz: str) -> pd.DataFrame:
    zone = ZoneInfo(tz)
    rows = [
        {"at": as_utc(w.created_at).astimezone(zone), "weight_kg": float(w.weight_kg)}
        for w in weights
    ]
    df = pd.DataFrame(rows, columns=["at", "weight_kg"])
    return df.sort_values("at", kind="stable").reset_index(drop=True)


def weight_chart(weights: Iterable[Any], tz: str = "UTC") -> Dict[str, List[Any]]:
    """Line-chart series: ``labels`` like "Mar 4" and the matching weights."""
    df = _weights_frame(weights, tz)
    labels = [f"{ts:%b} {ts.day}" for ts in df["at"]]
    return {"labels": labels, "data": df["weight_kg"].tolist()}


def weight_progress(weights: Iterable[Any], tz: str = "UTC") -> Dict[str, Any] | None:
    """Change between the first and the latest entry; None below two entries."""
    df = _weights_frame(weights, tz)
    if len(df) < 2:
        return None
    first = df["weight_kg"].iloc[0]
    last = df["weight_kg"].iloc[-1]
    diff = last - first
    return {
        "first_kg": float(first),
        "latest_kg": float(last),
        "difference_kg": round(abs(float(diff)), 1),
        "percentage_change": round(float(diff / first * 100), 1),
        "is_gain": bool(diff > 0),
    }
