"""Tests for the CLI connector, builder wiring and the demo entry point."""

from __future__ import annotations

import io
import sys
import pytest
from datetime import datetime, timezone

from meetrecall.__main__ import DEMO_UTTERANCES, main, run_chat, run_demo
from meetrecall.builder import build_embedder, build_orchestrator, build_store
from meetrecall.config import MeetRecallConfig
from meetrecall.connectors.cli import CLIConnector, render_decision
from meetrecall.core import RecallDecision
from meetrecall.embedders.hashing import HashEmbedder
from meetrecall.memory.types import SearchHit

WHEN = datetime(2025, 3, 1, tzinfo=timezone.utc)


def _hit(text: str = "Bob owns the API cutoff") -> SearchHit:
    return SearchHit(
        fact_id="mtg::m1::x",
        meeting_id="m1",
        fact_type="action",
        fact_text=text,
        participants=frozenset(),
        topics=frozenset(),
        tags=frozenset(),
        meeting_date=WHEN,
        source_turn=None,
        score=0.8,
        recency_boost=1.0,
        final_score=0.8,
    )


class TestRenderDecision:
    def test_surface_and_interject(self):
        decision = RecallDecision(True, True, "interject", [_hit()], WHEN)
        assert render_decision(decision) == [
            "[HUD] Bob owns the API cutoff (from 2025-03-01)",
            "[TTS] Bob owns the API cutoff",
        ]

    def test_surface_only(self):
        decision = RecallDecision(True, False, "cooldown", [_hit()], WHEN)
        assert render_decision(decision) == ["[HUD] Bob owns the API cutoff (from 2025-03-01)"]

    def test_no_hits(self):
        assert render_decision(RecallDecision(False, False, "no_hits", [], WHEN)) == []


class TestCLIConnector:
    def test_name(self):
        assert CLIConnector().name == "cli"

    @pytest.mark.asyncio
    async def test_reply_prints_reason_without_hits(self, capsys):
        await CLIConnector().reply(RecallDecision(False, False, "no_hits", [], WHEN))
        assert "(no_hits)" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_repl_until_exit(self, monkeypatch, capsys):
        stdin = io.TextIOWrapper(io.BytesIO(b"api cutoff?\n\nexit\n"))
        monkeypatch.setattr(sys, "stdin", stdin)
        seen: list[str] = []

        async def handler(text: str) -> RecallDecision:
            seen.append(text)
            return RecallDecision(True, False, "surface_only", [_hit()], WHEN)

        await CLIConnector().start(handler)
        out = capsys.readouterr().out
        assert seen == ["api cutoff?"]
        assert "[HUD] Bob owns the API cutoff" in out
        assert "Bye!" in out


class TestBuilder:
    def test_hash_embedder(self):
        config = MeetRecallConfig()
        config.embedder.dim = 16
        embedder = build_embedder(config)
        assert isinstance(embedder, HashEmbedder)
        assert embedder.dim == 16

    def test_unknown_embedder(self):
        config = MeetRecallConfig()
        config.embedder.name = "word2vec"
        with pytest.raises(ValueError, match="Unknown embedder"):
            build_embedder(config)

    def test_openai_embedder(self):
        pytest.importorskip("openai")
        from meetrecall.embedders.openai_api import OpenAIEmbedder

        config = MeetRecallConfig()
        config.embedder.name = "openai"
        config.embedder.api_key = "sk-test"
        config.embedder.model = "text-embedding-3-large"
        embedder = build_embedder(config)
        assert isinstance(embedder, OpenAIEmbedder)
        assert embedder.model == "text-embedding-3-large"

    def test_orchestrator_uses_config(self):
        config = MeetRecallConfig()
        config.store.recency_half_life_days = 7
        config.recall.cooldown_seconds = 5
        config.recall.max_hits = 2
        orchestrator = build_orchestrator(config)
        assert orchestrator.store.recency_half_life_days == 7
        assert orchestrator.cooldown_seconds == 5
        assert orchestrator.max_hits == 2

    def test_orchestrator_reuses_store(self):
        config = MeetRecallConfig()
        store = build_store(config)
        assert build_orchestrator(config, store).store is store

    @pytest.mark.asyncio
    async def test_facts_added_after_build_are_recalled(self):
        config = MeetRecallConfig()
        store = build_store(config)
        orchestrator = build_orchestrator(config, store)
        await store.add_fact("m1", "Budget review moved to Friday")

        decision = await orchestrator.process_utterance("Budget review moved to Friday")
        assert decision.reason == "interject"
        assert decision.top_hit.fact_text == "Budget review moved to Friday"

    def test_store_uses_given_embedder(self):
        embedder = HashEmbedder(dim=8)
        assert build_store(MeetRecallConfig(), embedder).embedder is embedder


class TestMain:
    @pytest.mark.asyncio
    async def test_demo_prints_each_utterance(self, capsys):
        await run_demo(MeetRecallConfig())
        out = capsys.readouterr().out
        for utterance in DEMO_UTTERANCES:
            assert f"> {utterance}" in out

    @pytest.mark.asyncio
    async def test_chat_with_facts_file(self, tmp_path, monkeypatch, capsys):
        facts = tmp_path / "facts.toml"
        facts.write_text(
            '[[facts]]\nmeeting_id = "m1"\nfact_text = "Budget review moved to Friday"\n',
            encoding="utf-8",
        )
        # Same text as the fact: cosine 1 with the hash embedder
        stdin = io.TextIOWrapper(io.BytesIO(b"Budget review moved to Friday\n"))
        monkeypatch.setattr(sys, "stdin", stdin)

        await run_chat(MeetRecallConfig(), facts)
        out = capsys.readouterr().out
        assert "[TTS] Budget review moved to Friday" in out

    def test_demo_uses_facts_file(self, tmp_path, monkeypatch, capsys):
        facts = tmp_path / "facts.toml"
        facts.write_text(
            "[[facts]]\n"
            'meeting_id = "m9"\n'
            f'fact_text = "{DEMO_UTTERANCES[0]}"\n'
            'participants = ["bob@example.com"]\n'
            'topics = ["api"]\n',
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setattr(sys, "argv", ["meetrecall", "demo", str(facts)])

        main()
        out = capsys.readouterr().out
        assert f"[TTS] {DEMO_UTTERANCES[0]}" in out
        assert "Bob owns" not in out

    def test_unknown_command_exits(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["meetrecall", "serve"])
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "Usage" in capsys.readouterr().out
