"""Configuration loading from environment variables and meetrecall.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "meetrecall.toml"


@dataclass
class EmbedderConfig:
    """Which embedding backend to use and how to reach it."""

    name: str = "hash"
    model: str = "text-embedding-3-small"
    dim: int = 256
    api_key: str | None = None
    timeout: float = 30.0


@dataclass
class StoreConfig:
    """Fact store tuning."""

    recency_half_life_days: float = 30.0


@dataclass
class RecallConfig:
    """Orchestrator thresholds and cooldown."""

    surface_threshold: float = 0.35
    interject_threshold: float = 0.55
    cooldown_seconds: float = 30.0
    max_hits: int = 6


@dataclass
class MeetRecallConfig:
    """Top-level configuration."""

    embedder: EmbedderConfig = field(default_factory=EmbedderConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    recall: RecallConfig = field(default_factory=RecallConfig)
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> MeetRecallConfig:
    """Load configuration from environment variables and optional meetrecall.toml.

    Priority: environment variables > meetrecall.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.meetrecall/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".meetrecall" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    embedder_data = file_data.get("embedder", {})
    store_data = file_data.get("store", {})
    recall_data = file_data.get("recall", {})

    config = MeetRecallConfig(
        embedder=EmbedderConfig(
            name=os.getenv("MEETRECALL_EMBEDDER", embedder_data.get("name", "hash")),
            model=os.getenv(
                "MEETRECALL_EMBEDDING_MODEL",
                embedder_data.get("model", "text-embedding-3-small"),
            ),
            dim=int(os.getenv("MEETRECALL_EMBEDDING_DIM", embedder_data.get("dim", 256))),
            api_key=os.getenv("OPENAI_API_KEY", embedder_data.get("api_key")),
            timeout=float(
                os.getenv("MEETRECALL_EMBEDDER_TIMEOUT", embedder_data.get("timeout", 30.0))
            ),
        ),
        store=StoreConfig(
            recency_half_life_days=float(
                os.getenv(
                    "MEETRECALL_HALF_LIFE_DAYS", store_data.get("recency_half_life_days", 30.0)
                )
            ),
        ),
        recall=RecallConfig(
            surface_threshold=float(
                os.getenv(
                    "MEETRECALL_SURFACE_THRESHOLD", recall_data.get("surface_threshold", 0.35)
                )
            ),
            interject_threshold=float(
                os.getenv(
                    "MEETRECALL_INTERJECT_THRESHOLD", recall_data.get("interject_threshold", 0.55)
                )
            ),
            cooldown_seconds=float(
                os.getenv("MEETRECALL_COOLDOWN", recall_data.get("cooldown_seconds", 30.0))
            ),
            max_hits=int(os.getenv("MEETRECALL_MAX_HITS", recall_data.get("max_hits", 6))),
        ),
        log_level=os.getenv("MEETRECALL_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
