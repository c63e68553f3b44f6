"""Seed facts for the demo and REPL: built-in samples or a TOML file.

File format:

    [[facts]]
    meeting_id = "mtg_001"
    fact_text = "Bob owns the API cutoff for March 5."
    fact_type = "action"
    meeting_date = 2025-03-01
    participants = ["bob@example.com"]
    topics = ["api", "cutoff"]
    tags = ["deadline"]
"""

from __future__ import annotations

import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from meetrecall.memory.types import FactInput

_FACT_FIELDS = {
    "meeting_id",
    "fact_text",
    "fact_type",
    "meeting_date",
    "participants",
    "topics",
    "tags",
    "source_turn",
    "metadata",
}


def demo_facts(now: datetime | None = None) -> list[FactInput]:
    """Two sample facts from recent meetings."""
    now = now or datetime.now(timezone.utc)
    return [
        FactInput(
            meeting_id="mtg_001",
            fact_text="Bob owns the API cutoff for March 5.",
            fact_type="action",
            meeting_date=now - timedelta(days=4),
            participants=["bob@example.com", "alice@example.com"],
            topics=["api", "cutoff"],
            tags=["deadline"],
        ),
        FactInput(
            meeting_id="mtg_002",
            fact_text="We agreed to ship the mobile beta by April 10.",
            fact_type="decision",
            meeting_date=now - timedelta(days=2),
            participants=["alice@example.com"],
            topics=["mobile", "beta"],
            tags=["shipdate"],
        ),
    ]


def _parse_date(value: object) -> datetime | date | None:
    if value is None or isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"meeting_date must be a date or ISO string, got {value!r}")


def load_facts(path: Path) -> list[FactInput]:
    """Parse `[[facts]]` tables from a TOML file."""
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    facts: list[FactInput] = []
    for i, entry in enumerate(data.get("facts", [])):
        unknown = set(entry) - _FACT_FIELDS
        if unknown:
            raise ValueError(f"facts[{i}]: unknown fields {sorted(unknown)}")
        if not entry.get("meeting_id") or not entry.get("fact_text"):
            raise ValueError(f"facts[{i}]: meeting_id and fact_text are required")
        entry = dict(entry)
        entry["meeting_date"] = _parse_date(entry.get("meeting_date"))
        facts.append(FactInput(**entry))
    return facts
