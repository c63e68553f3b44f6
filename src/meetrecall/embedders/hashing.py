"""Deterministic hash embedder — offline, no network, for tests and dev."""

from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass

DEFAULT_DIM = 256


def hash_embed(text: str, dim: int = DEFAULT_DIM) -> list[float]:
    """Fold the SHA-256 digest of text into a normalized dim-length vector."""
    if dim < 1:
        raise ValueError(f"dim must be positive, got {dim}")
    vec = [0.0] * dim
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    for i, byte in enumerate(digest):
        vec[i % dim] += byte / 255

    norm = math.sqrt(sum(v * v for v in vec))
    if norm > 0:
        vec = [v / norm for v in vec]
    return vec


@dataclass
class HashEmbedder:
    """Cheap stand-in for a semantic embedder. Same text, same vector."""

    dim: int = DEFAULT_DIM

    def __post_init__(self) -> None:
        if self.dim < 1:
            raise ValueError(f"dim must be positive, got {self.dim}")

    async def embed(self, text: str) -> list[float]:
        return hash_embed(text, self.dim)
