"""Local REPL connector — type utterances, see HUD/TTS decisions."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from meetrecall.core import RecallDecision

logger = logging.getLogger(__name__)

# Callback type: bound RealtimeRecallOrchestrator.process_utterance
UtteranceHandler = Callable[[str], Awaitable["RecallDecision"]]


def render_decision(decision: RecallDecision) -> list[str]:
    """HUD line when surfaced, TTS line when interjected."""
    top = decision.top_hit
    if top is None:
        return []
    lines = []
    if decision.should_surface:
        lines.append(f"[HUD] {top.fact_text} (from {top.meeting_date.date().isoformat()})")
    if decision.should_interject:
        lines.append(f"[TTS] {top.fact_text}")
    return lines


class CLIConnector:
    """Interactive REPL — reads utterances from stdin, writes decisions to stdout."""

    def __init__(self, show_scores: bool = False) -> None:
        self._running = False
        self.show_scores = show_scores

    @property
    def name(self) -> str:
        return "cli"

    async def start(self, handler: UtteranceHandler) -> None:
        self._running = True
        loop = asyncio.get_event_loop()

        print("Meeting recall (type an utterance; 'exit' or Ctrl+C to quit)")
        print("-" * 48)

        while self._running:
            try:
                line = await loop.run_in_executor(None, self._read_input)
            except (EOFError, KeyboardInterrupt):
                print("\nBye!")
                break

            if line is None or line.strip().lower() in ("exit", "quit"):
                print("Bye!")
                break

            text = line.strip()
            if not text:
                continue

            decision = await handler(text)
            await self.reply(decision)

    def _read_input(self) -> str | None:
        try:
            sys.stdout.write("\n> ")
            sys.stdout.flush()
            raw = sys.stdin.buffer.readline()
            if not raw:
                return None
            return raw.decode("utf-8", errors="replace").rstrip("\n")
        except EOFError:
            return None

    async def stop(self) -> None:
        self._running = False

    async def reply(self, decision: RecallDecision) -> None:
        lines = render_decision(decision)
        for line in lines:
            print(line)
        if not lines:
            print(f"  ({decision.reason})")
        if self.show_scores:
            for hit in decision.hits:
                print(
                    f"  {hit.final_score:.3f} (cos={hit.score:.3f}, "
                    f"recency={hit.recency_boost:.2f}) {hit.fact_text}",
                    file=sys.stderr,
                )
