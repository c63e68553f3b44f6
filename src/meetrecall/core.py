"""Real-time recall orchestrator — turns live utterances into HUD/voice decisions.

Responsibilities:
1. Query the fact store once per utterance (filters passed straight through)
2. Surface — show the top hit passively when it clears surface_threshold
3. Interject — speak the top hit when it clears interject_threshold
4. Cooldown — suppress interjections for cooldown_seconds after one is granted
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from meetrecall.memory.store import Clock, MeetingMemoryStore, utc_now
from meetrecall.memory.types import SearchHit

logger = logging.getLogger(__name__)

DecisionReason = Literal["no_hits", "surface_only", "cooldown", "interject"]


@dataclass(frozen=True)
class RecallDecision:
    """Outcome for one utterance, with the ranked hits that were considered."""

    should_surface: bool
    should_interject: bool
    reason: DecisionReason
    hits: list[SearchHit] = field(default_factory=list)
    decided_at: datetime | None = None

    @property
    def top_hit(self) -> SearchHit | None:
        return self.hits[0] if self.hits else None


class RealtimeRecallOrchestrator:
    """Core decision loop — one instance per conversation, no shared state."""

    def __init__(
        self,
        store: MeetingMemoryStore | None = None,
        *,
        surface_threshold: float = 0.35,
        interject_threshold: float = 0.55,
        cooldown_seconds: float = 30,
        max_hits: int = 6,
        clock: Clock | None = None,
    ) -> None:
        self.store = store if store is not None else MeetingMemoryStore()
        self.surface_threshold = surface_threshold
        self.interject_threshold = interject_threshold
        self.cooldown_seconds = cooldown_seconds
        self.max_hits = max_hits
        self._clock = clock or utc_now
        self._last_interject_at: datetime | None = None
        self._cooldown_lock = threading.Lock()

        if interject_threshold < surface_threshold:
            logger.warning(
                "interject_threshold (%.2f) < surface_threshold (%.2f): "
                "facts may be spoken without being shown",
                interject_threshold,
                surface_threshold,
            )

    @property
    def last_interject_at(self) -> datetime | None:
        return self._last_interject_at

    async def process_utterance(
        self,
        utterance: str,
        *,
        participants: Iterable[str] | None = None,
        topics: Iterable[str] | None = None,
        tags: Iterable[str] | None = None,
    ) -> RecallDecision:
        """Decide whether to surface and/or interject for one utterance."""
        if not utterance or not utterance.strip():
            raise ValueError("utterance must be a non-empty string")

        now = self._clock()

        # 1. Single query serves both thresholds
        hits = await self.store.search(
            utterance,
            participants=participants,
            topics=topics,
            tags=tags,
            limit=self.max_hits,
            min_score=min(self.surface_threshold, self.interject_threshold),
        )

        if not hits:
            return RecallDecision(
                should_surface=False,
                should_interject=False,
                reason="no_hits",
                hits=[],
                decided_at=now,
            )

        # 2. Only the top hit drives the decision
        top_score = hits[0].final_score
        should_surface = top_score >= self.surface_threshold

        # 3. Cooldown check-and-set must be atomic across concurrent callers
        with self._cooldown_lock:
            on_cooldown = (
                self._last_interject_at is not None
                and (now - self._last_interject_at).total_seconds() < self.cooldown_seconds
            )
            should_interject = top_score >= self.interject_threshold and not on_cooldown
            if should_interject:
                self._last_interject_at = now

        reason: DecisionReason
        if should_interject:
            reason = "interject"
            logger.info("Interjecting %s (score=%.3f)", hits[0].fact_id, top_score)
        elif on_cooldown:
            reason = "cooldown"
            logger.debug("Interjection suppressed by cooldown (score=%.3f)", top_score)
        else:
            reason = "surface_only"

        return RecallDecision(
            should_surface=should_surface,
            should_interject=should_interject,
            reason=reason,
            hits=hits,
            decided_at=now,
        )
