"""OpenAI embeddings backend — semantic vectors over the network."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from meetrecall.embedders.base import EmbedderError

logger = logging.getLogger(__name__)


@dataclass
class OpenAIEmbedder:
    """Embeddings via the `openai` SDK. Blocking calls run in a worker thread."""

    model: str = "text-embedding-3-small"
    api_key: str | None = None
    timeout: float = 30.0
    client: Any = None

    def __post_init__(self) -> None:
        if self.client is not None:
            return
        try:
            import openai

            self.client = openai.OpenAI(api_key=self.api_key, timeout=self.timeout)
        except ImportError:
            raise ImportError(
                "openai package required. Install with: pip install 'meetrecall[openai]'"
            )

    async def embed(self, text: str) -> list[float]:
        try:
            response = await asyncio.to_thread(
                self.client.embeddings.create,
                model=self.model,
                input=text,
            )
        except Exception as e:
            logger.error("OpenAI embeddings error (model=%s): %s", self.model, e)
            raise

        if not response.data or not response.data[0].embedding:
            raise EmbedderError(f"OpenAI returned no embedding (model={self.model})")
        return list(response.data[0].embedding)
