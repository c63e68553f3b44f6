"""Meeting fact store — embedded facts with filtered, recency-weighted search.

Facts live in an insertion-ordered dict keyed by fact_id. Search is a full
scan: fine at the volumes a meeting assistant accumulates, and the ranking
contract (filters, cosine, recency) stays the same if an ANN index replaces
the scan later.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from types import MappingProxyType
from typing import Any

from meetrecall.embedders.base import Embedder, EmbedderError
from meetrecall.embedders.hashing import DEFAULT_DIM, HashEmbedder
from meetrecall.memory.scoring import combine, cosine_similarity, recency_boost
from meetrecall.memory.types import (
    DEFAULT_FACT_TYPE,
    FactInput,
    MemoryFact,
    SearchHit,
    SearchOptions,
)

logger = logging.getLogger(__name__)

DEFAULT_HALF_LIFE_DAYS = 30.0

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_datetime(value: datetime | date | None, now: datetime) -> datetime:
    """Coerce a meeting date to a tz-aware datetime. Naive values are UTC."""
    if value is None:
        return now
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _intersects(wanted: Iterable[str] | None, have: frozenset[str]) -> bool:
    """Empty or missing filter matches everything."""
    if not wanted:
        return True
    return not have.isdisjoint(wanted)


class MeetingMemoryStore:
    """In-process fact collection owned by its creator. No global state."""

    def __init__(
        self,
        embedder: Embedder | None = None,
        hash_embedding_dim: int = DEFAULT_DIM,
        recency_half_life_days: float = DEFAULT_HALF_LIFE_DAYS,
        clock: Clock | None = None,
    ) -> None:
        self.embedder: Embedder = (
            embedder if embedder is not None else HashEmbedder(dim=hash_embedding_dim)
        )
        self.recency_half_life_days = max(1.0, float(recency_half_life_days))
        self._clock = clock or utc_now
        self._facts: dict[str, MemoryFact] = {}
        # Guards _facts for insert and snapshot only; never held across an await.
        self._lock = threading.Lock()

    # ── Introspection ─────────────────────────────────────────

    def __len__(self) -> int:
        with self._lock:
            return len(self._facts)

    def __contains__(self, fact_id: object) -> bool:
        with self._lock:
            return fact_id in self._facts

    def get(self, fact_id: str) -> MemoryFact | None:
        with self._lock:
            return self._facts.get(fact_id)

    def facts(self) -> list[MemoryFact]:
        """Snapshot of all facts in insertion order."""
        with self._lock:
            return list(self._facts.values())

    # ── Insert ────────────────────────────────────────────────

    async def add_fact(
        self,
        meeting_id: str,
        fact_text: str,
        *,
        fact_type: str = DEFAULT_FACT_TYPE,
        meeting_date: datetime | date | None = None,
        participants: Iterable[str] = (),
        topics: Iterable[str] = (),
        tags: Iterable[str] = (),
        source_turn: int | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> str:
        """Embed and insert one fact. Returns its new fact_id."""
        if not meeting_id or not meeting_id.strip():
            raise ValueError("meeting_id must be a non-empty string")
        if not fact_text or not fact_text.strip():
            raise ValueError("fact_text must be a non-empty string")

        embedding = await self.embedder.embed(fact_text)
        if not embedding:
            raise EmbedderError("embedder returned an empty vector")

        now = self._clock()
        fact_id = f"mtg::{meeting_id}::{uuid.uuid4()}"
        fact = MemoryFact(
            fact_id=fact_id,
            meeting_id=meeting_id,
            fact_text=fact_text,
            fact_type=fact_type or DEFAULT_FACT_TYPE,
            meeting_date=_as_datetime(meeting_date, now),
            participants=frozenset(participants),
            topics=frozenset(topics),
            tags=frozenset(tags),
            source_turn=source_turn,
            metadata=MappingProxyType(dict(metadata or {})),
            embedding=tuple(float(v) for v in embedding),
            created_at=now,
        )
        with self._lock:
            self._facts[fact_id] = fact
        logger.info("Added fact %s (%s, %d dims)", fact_id, fact.fact_type, len(fact.embedding))
        return fact_id

    async def add(self, fact: FactInput) -> str:
        return await self.add_fact(
            fact.meeting_id,
            fact.fact_text,
            fact_type=fact.fact_type,
            meeting_date=fact.meeting_date,
            participants=fact.participants,
            topics=fact.topics,
            tags=fact.tags,
            source_turn=fact.source_turn,
            metadata=fact.metadata,
        )

    async def bulk_add(self, facts: Iterable[FactInput | Mapping[str, Any]]) -> list[str]:
        """Insert facts in order, one embedding call at a time.

        The first failure propagates; facts inserted before it stay.
        """
        ids: list[str] = []
        for f in facts:
            if isinstance(f, Mapping):
                f = FactInput(**f)
            ids.append(await self.add(f))
        return ids

    # ── Search ────────────────────────────────────────────────

    async def search(
        self,
        query: str,
        options: SearchOptions | None = None,
        **overrides: Any,
    ) -> list[SearchHit]:
        """Rank stored facts against query. Empty list when nothing qualifies."""
        opts = options or SearchOptions()
        if overrides:
            opts = replace(opts, **overrides)

        with self._lock:
            if not self._facts:
                return []

        qvec = await self.embedder.embed(query)
        if not qvec:
            raise EmbedderError("embedder returned an empty query vector")

        now = self._clock()
        cutoff = now - timedelta(days=opts.since_days) if opts.since_days is not None else None
        filters = (
            frozenset(opts.participants or ()),
            frozenset(opts.topics or ()),
            frozenset(opts.tags or ()),
        )
        with self._lock:
            snapshot = list(self._facts.values())

        hits: list[SearchHit] = []
        for fact in snapshot:
            if not self._passes_filters(fact, filters, cutoff):
                continue

            score = cosine_similarity(qvec, fact.embedding)
            if score <= 0:
                continue
            boost = recency_boost(fact.meeting_date, now, self.recency_half_life_days)
            final = combine(score, boost)
            if final < opts.min_score:
                continue
            hits.append(SearchHit.from_fact(fact, score, boost, final))

        # list.sort is stable with reverse=True: ties keep scan order.
        hits.sort(key=lambda h: h.final_score, reverse=True)
        result = hits[: max(0, int(opts.limit))]
        logger.debug(
            "search scanned=%d matched=%d returned=%d", len(snapshot), len(hits), len(result)
        )
        return result

    def _passes_filters(
        self,
        fact: MemoryFact,
        filters: tuple[frozenset[str], frozenset[str], frozenset[str]],
        cutoff: datetime | None,
    ) -> bool:
        if cutoff is not None:
            try:
                if fact.meeting_date < cutoff:
                    return False
            except TypeError:
                pass  # incomparable date: keep the fact
        participants, topics, tags = filters
        return (
            _intersects(participants, fact.participants)
            and _intersects(topics, fact.topics)
            and _intersects(tags, fact.tags)
        )
