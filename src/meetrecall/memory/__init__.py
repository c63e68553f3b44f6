"""Meeting fact memory — embedded facts + filtered, recency-weighted search.

Layout:
    types.py     MemoryFact / FactInput / SearchOptions / SearchHit
    scoring.py   cosine similarity, half-life recency boost, score combination
    store.py     MeetingMemoryStore (owns facts, embeds on insert, answers queries)

Ranking:
    final_score = cosine * (0.5 + 0.5 * 2^(-age_days / half_life_days))
"""

from meetrecall.memory.store import MeetingMemoryStore
from meetrecall.memory.types import FactInput, MemoryFact, SearchHit, SearchOptions

__all__ = ["FactInput", "MeetingMemoryStore", "MemoryFact", "SearchHit", "SearchOptions"]
