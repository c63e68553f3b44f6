from meetrecall.embedders.base import Embedder, EmbedderError
from meetrecall.embedders.hashing import HashEmbedder

__all__ = ["Embedder", "EmbedderError", "HashEmbedder"]
