import json

from portfolio_bot.search.profiles import load_profiles, normalize_profiles
from portfolio_bot.search.prompts import (
    DEFAULT_TONE,
    KNOWLEDGE_SEPARATOR,
    build_assistant_instructions,
    build_grounding,
    default_system_prompt,
)
from portfolio_bot.search.types import KnowledgeChunk, Snapshot


def make_snapshot(profiles_doc, chunks, legacy=None):
    return Snapshot(
        profiles=normalize_profiles(profiles_doc),
        chunks=tuple(chunks),
        legacy_profile=legacy or {},
        loaded_at="2026-01-01T00:00:00+00:00",
        version=1,
    )


CHUNKS = [
    KnowledgeChunk("public.md", "Rates are seventy five dollars per hour for web work."),
    KnowledgeChunk("public.md", "Based in Dallas, Texas."),
    KnowledgeChunk("private.md", "Private rates rates: the secret hourly rates for family and friends."),
]


def test_no_hits_asks_instead_of_guessing():
    snap = make_snapshot({"default": "pub", "pub": {"name": "Sam Public"}}, CHUNKS)
    g = build_grounding(snap, "hello!", None)
    assert g.chunks == []
    assert g.text.startswith(default_system_prompt())
    assert "ACTIVE PROFILE:" in g.text
    assert "I don't want to guess" in g.text
    assert "KNOWLEDGE (most relevant excerpts)" not in g.text
    assert f"- {DEFAULT_TONE}" in g.text


def test_hits_are_quoted_with_source_and_separator():
    snap = make_snapshot({"default": "pub", "pub": {"name": "Sam Public"}}, CHUNKS[:2])
    g = build_grounding(snap, "where are you based, what rates?", None)
    assert [c.source for c in g.chunks] == ["public.md", "public.md"]
    assert "[public.md]\nRates are seventy five dollars per hour for web work." in g.text
    assert "[public.md]\nBased in Dallas, Texas." in g.text
    assert KNOWLEDGE_SEPARATOR in g.text
    assert "You are speaking as the assistant for: Sam Public" in g.text
    assert "Use the KNOWLEDGE excerpts as source of truth." in g.text
    assert "Do not invent details or memories." in g.text


def test_profile_block_only_has_public_fields():
    doc = {
        "default": "pub",
        "pub": {
            "name": "Sam Public",
            "tone": "dry",
            "rules": "no gossip",
            "notes": ["likes tea"],
            "aliases": ["sammy"],
            "apiKey": "sk-live-123",
            "password": "hunter2",
            "knowledgeFiles": ["public.md"],
        },
    }
    text = build_assistant_instructions(make_snapshot(doc, CHUNKS), "rates?", None)
    assert "sk-live-123" not in text
    assert "hunter2" not in text
    block = text.split("ACTIVE PROFILE:\n", 1)[1].split("\n\nVOICE:", 1)[0]
    assert json.loads(block) == {
        "id": "pub",
        "name": "Sam Public",
        "tone": "dry",
        "rules": "no gossip",
        "notes": ["likes tea"],
    }


def test_allow_list_keeps_private_chunks_out():
    doc = {
        "default": "pub",
        "pub": {"knowledgeFiles": ["public.md"]},
        "fam": {"aliases": ["family"], "knowledgeFiles": ["private.md"]},
    }
    snap = make_snapshot(doc, CHUNKS)
    g = build_grounding(snap, "what are the hourly rates", "pub")
    assert g.persona.id == "pub"
    assert g.chunks and all(c.source == "public.md" for c in g.chunks)
    assert "secret hourly rates" not in g.text

    g = build_grounding(snap, "what are the hourly rates for family", None)
    assert g.persona.id == "fam"
    assert [c.source for c in g.chunks] == ["private.md"]


def test_persona_system_prompt_overrides_default():
    doc = {"default": "pub", "pub": {"systemPrompt": "You are a pirate."}}
    text = build_assistant_instructions(make_snapshot(doc, []), "hi", None)
    assert text.startswith("You are a pirate.")
    assert default_system_prompt() not in text


def test_owner_name_in_default_prompt():
    text = build_assistant_instructions(make_snapshot({}, []), "hi", None, owner_name="Jane Doe")
    assert "You are the AI assistant for Jane Doe" in text


def test_legacy_profile_fills_name_and_tone():
    snap = make_snapshot({}, [KnowledgeChunk("bio.md", "Loves building react apps")], legacy={"preferredName": "Sanky", "tone": "laid back"})
    g = build_grounding(snap, "react experience?", None)
    assert g.persona.id == "default"
    assert "You are speaking as the assistant for: Sanky" in g.text
    assert "- laid back" in g.text


def test_persona_tone_beats_legacy_tone():
    snap = make_snapshot({"default": "p", "p": {"tone": "crisp"}}, [], legacy={"tone": "laid back"})
    text = build_assistant_instructions(snap, "hi", None)
    assert "- crisp" in text
    assert "laid back" not in text


def test_top_k_limits_excerpts():
    chunks = [KnowledgeChunk(f"n{i}.md", f"django note {i}") for i in range(10)]
    snap = make_snapshot({}, chunks)
    assert len(build_grounding(snap, "django", None).chunks) == 6
    assert len(build_grounding(snap, "django", None, top_k=2).chunks) == 2


def test_yaml_persona_with_date_notes_renders(tmp_path):
    path = tmp_path / "profiles.yaml"
    path.write_text("default: ana\nana:\n  name: Ana\n  notes: 2024-05-01\n", encoding="utf-8")
    snap = Snapshot(
        profiles=load_profiles(str(path)),
        chunks=(),
        legacy_profile={},
        loaded_at="2026-01-01T00:00:00+00:00",
        version=1,
    )
    text = build_assistant_instructions(snap, "hello", None)
    assert '"notes": "2024-05-01"' in text
