"""Fact, query and hit types shared by the store and the orchestrator."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

DEFAULT_FACT_TYPE = "fact"
DEFAULT_LIMIT = 8
DEFAULT_MIN_SCORE = 0.25
DEFAULT_SINCE_DAYS = 120


@dataclass(frozen=True)
class MemoryFact:
    """A single stored statement tied to a meeting. Immutable once inserted."""

    fact_id: str
    meeting_id: str
    fact_text: str
    fact_type: str
    meeting_date: datetime
    participants: frozenset[str]
    topics: frozenset[str]
    tags: frozenset[str]
    source_turn: int | None
    # Read-only view, left out of __hash__
    metadata: Mapping[str, Any] = field(hash=False)
    embedding: tuple[float, ...]
    created_at: datetime


@dataclass
class FactInput:
    """Insert request for `MeetingMemoryStore.add`."""

    meeting_id: str
    fact_text: str
    fact_type: str = DEFAULT_FACT_TYPE
    meeting_date: datetime | date | None = None
    participants: Iterable[str] = ()
    topics: Iterable[str] = ()
    tags: Iterable[str] = ()
    source_turn: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchOptions:
    """Filters and limits for a similarity query.

    Set filters match when the fact's set intersects the given one; None or an
    empty collection disables that filter. `since_days=None` disables the
    recency cutoff. `min_score` applies to the final (recency-weighted) score.
    """

    participants: Iterable[str] | None = None
    topics: Iterable[str] | None = None
    tags: Iterable[str] | None = None
    since_days: float | None = DEFAULT_SINCE_DAYS
    limit: int = DEFAULT_LIMIT
    min_score: float = DEFAULT_MIN_SCORE


@dataclass(frozen=True)
class SearchHit:
    """One ranked result. Derived per query, never stored."""

    fact_id: str
    meeting_id: str
    fact_type: str
    fact_text: str
    participants: frozenset[str]
    topics: frozenset[str]
    tags: frozenset[str]
    meeting_date: datetime
    source_turn: int | None
    score: float
    recency_boost: float
    final_score: float

    @classmethod
    def from_fact(
        cls, fact: MemoryFact, score: float, recency_boost: float, final_score: float
    ) -> SearchHit:
        return cls(
            fact_id=fact.fact_id,
            meeting_id=fact.meeting_id,
            fact_type=fact.fact_type,
            fact_text=fact.fact_text,
            participants=fact.participants,
            topics=fact.topics,
            tags=fact.tags,
            meeting_date=fact.meeting_date,
            source_turn=fact.source_turn,
            score=score,
            recency_boost=recency_boost,
            final_score=final_score,
        )
