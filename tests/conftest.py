"""Shared fixtures."""

import pytest

from helpers import T0, FakeClock, KeywordEmbedder


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(T0)


@pytest.fixture
def keyword_embedder() -> KeywordEmbedder:
    return KeywordEmbedder()
