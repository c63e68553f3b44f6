"""Wire embedder, store and orchestrator from a MeetRecallConfig."""

from __future__ import annotations

import logging

from meetrecall.config import MeetRecallConfig
from meetrecall.core import RealtimeRecallOrchestrator
from meetrecall.embedders.base import Embedder
from meetrecall.embedders.hashing import HashEmbedder
from meetrecall.memory.store import MeetingMemoryStore

logger = logging.getLogger(__name__)


def build_embedder(config: MeetRecallConfig) -> Embedder:
    name = config.embedder.name
    if name == "hash":
        return HashEmbedder(dim=config.embedder.dim)
    elif name == "openai":
        from meetrecall.embedders.openai_api import OpenAIEmbedder

        return OpenAIEmbedder(
            model=config.embedder.model,
            api_key=config.embedder.api_key,
            timeout=config.embedder.timeout,
        )
    else:
        raise ValueError(f"Unknown embedder: {name}")


def build_store(config: MeetRecallConfig, embedder: Embedder | None = None) -> MeetingMemoryStore:
    embedder = embedder if embedder is not None else build_embedder(config)
    logger.info("Using %s embedder", config.embedder.name)
    return MeetingMemoryStore(
        embedder=embedder,
        hash_embedding_dim=config.embedder.dim,
        recency_half_life_days=config.store.recency_half_life_days,
    )


def build_orchestrator(
    config: MeetRecallConfig, store: MeetingMemoryStore | None = None
) -> RealtimeRecallOrchestrator:
    return RealtimeRecallOrchestrator(
        store if store is not None else build_store(config),
        surface_threshold=config.recall.surface_threshold,
        interject_threshold=config.recall.interject_threshold,
        cooldown_seconds=config.recall.cooldown_seconds,
        max_hits=config.recall.max_hits,
    )
