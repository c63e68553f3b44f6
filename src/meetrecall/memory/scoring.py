"""Similarity and recency math used to rank facts."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime

SECONDS_PER_DAY = 24 * 60 * 60


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between a and b, in [-1, 1].

    Vectors of different length are compared up to the shorter one. Returns 0
    when either vector has zero magnitude.
    """
    dot = 0.0
    na = 0.0
    nb = 0.0
    for x, y in zip(a, b):
        dot += x * y
        na += x * x
        nb += y * y
    denom = math.sqrt(na) * math.sqrt(nb)
    if denom == 0:
        return 0.0
    return dot / denom


def age_days(meeting_date: datetime, now: datetime) -> float | None:
    """Days elapsed since meeting_date, or None if the dates can't be compared."""
    try:
        return (now - meeting_date).total_seconds() / SECONDS_PER_DAY
    except (TypeError, AttributeError, OverflowError):
        return None


def recency_boost(meeting_date: datetime, now: datetime, half_life_days: float) -> float:
    """Exponential decay `2^(-age/half_life)`. Future dates count as age 0.

    An uninterpretable date yields 1.0: recency is ignored, not penalized.
    """
    age = age_days(meeting_date, now)
    if age is None:
        return 1.0
    return 0.5 ** (max(0.0, age) / half_life_days)


def combine(score: float, boost: float) -> float:
    """Recency dampens between 0.5x and 1x of the raw score, never more."""
    return score * (0.5 + 0.5 * boost)
