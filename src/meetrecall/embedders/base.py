"""Embedder protocol and shared errors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class EmbedderError(RuntimeError):
    """Raised when an embedder produces no usable vector."""


@runtime_checkable
class Embedder(Protocol):
    """Protocol that all embedding backends must implement."""

    async def embed(self, text: str) -> list[float]:
        """Map text to a fixed-length vector. May suspend or raise."""
        ...
