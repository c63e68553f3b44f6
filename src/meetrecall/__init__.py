"""Meeting fact recall — embedded fact store + real-time surface/interject decisions."""

from meetrecall.core import RealtimeRecallOrchestrator, RecallDecision
from meetrecall.embedders import Embedder, EmbedderError, HashEmbedder
from meetrecall.memory import FactInput, MeetingMemoryStore, MemoryFact, SearchHit, SearchOptions

__version__ = "0.1.0"

__all__ = [
    "Embedder",
    "EmbedderError",
    "FactInput",
    "HashEmbedder",
    "MeetingMemoryStore",
    "MemoryFact",
    "RealtimeRecallOrchestrator",
    "RecallDecision",
    "SearchHit",
    "SearchOptions",
]
