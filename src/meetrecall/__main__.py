"""Entry point: python -m meetrecall [demo|chat] [facts.toml]

- No args / "demo": Seed facts (samples or TOML file) and replay sample utterances
- "chat":           Interactive REPL over seeded facts (demo or TOML file)
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from meetrecall.config import MeetRecallConfig, load_config

DEMO_UTTERANCES = [
    "Can we confirm the API cutoff date?",
    "Also what is the mobile beta ship date?",
    "Random small talk unrelated to work.",
    "Remind me who owns the API workstream?",
]
DEMO_PARTICIPANTS = ["bob@example.com"]
DEMO_TOPICS = ["api", "mobile"]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


async def _seeded_orchestrator(config: MeetRecallConfig, facts_path: Path | None = None):
    from meetrecall.builder import build_orchestrator
    from meetrecall.seed import demo_facts, load_facts

    orchestrator = build_orchestrator(config)
    facts = load_facts(facts_path) if facts_path else demo_facts()
    await orchestrator.store.bulk_add(facts)
    return orchestrator


async def run_demo(config: MeetRecallConfig, facts_path: Path | None = None) -> None:
    from meetrecall.connectors.cli import render_decision

    orchestrator = await _seeded_orchestrator(config, facts_path)
    for utterance in DEMO_UTTERANCES:
        decision = await orchestrator.process_utterance(
            utterance,
            participants=DEMO_PARTICIPANTS,
            topics=DEMO_TOPICS,
        )
        print(f"> {utterance}")
        for line in render_decision(decision):
            print(line)


async def run_chat(config: MeetRecallConfig, facts_path: Path | None = None) -> None:
    from meetrecall.connectors.cli import CLIConnector

    orchestrator = await _seeded_orchestrator(config, facts_path)
    cli = CLIConnector(show_scores=config.log_level.upper() == "DEBUG")
    await cli.start(orchestrator.process_utterance)


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "demo"
    facts_path = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    if cmd not in ("demo", "chat"):
        print("Usage: python -m meetrecall [demo|chat] [facts.toml]")
        print("  demo   — Replay sample utterances; facts from facts.toml or the samples (default)")
        print("  chat   — Interactive REPL; facts from facts.toml or the samples")
        sys.exit(1)

    config = load_config()
    _setup_logging(config.log_level)

    try:
        if cmd == "demo":
            asyncio.run(run_demo(config, facts_path))
        else:
            asyncio.run(run_chat(config, facts_path))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
