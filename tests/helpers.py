"""Deterministic embedders and a controllable clock shared by the tests."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_WORD = re.compile(r"\w+")

VOCAB = [
    "api", "cutoff", "date", "mobile", "beta", "ship", "owns", "bob",
    "march", "april", "budget", "hiring", "launch", "confirm",
]


class KeywordEmbedder:
    """Bag-of-words over a fixed vocabulary. Unknown words contribute nothing."""

    def __init__(self, vocab: list[str] | None = None) -> None:
        self.vocab = vocab or VOCAB
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        tokens = [t.lower() for t in _WORD.findall(text)]
        return [float(tokens.count(w)) for w in self.vocab]


class VectorEmbedder:
    """Returns preset vectors by exact text."""

    def __init__(self, vectors: dict[str, list[float]]) -> None:
        self.vectors = vectors
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        return list(self.vectors[text])


class FailingEmbedder:
    """Fails on any text containing `poison`."""

    def __init__(self, inner, poison: str = "boom") -> None:
        self.inner = inner
        self.poison = poison
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.poison in text:
            raise ConnectionError("embedding service unavailable")
        return await self.inner.embed(text)


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 0, days: float = 0) -> None:
        self.now += timedelta(seconds=seconds, days=days)


T0 = datetime(2025, 3, 3, 12, 0, tzinfo=timezone.utc)
