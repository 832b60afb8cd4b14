# Data models for the search layer.
# Chunks, scored results, personas and the loaded snapshot are all immutable;
# a reload builds new values instead of editing old ones.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class KnowledgeChunk:
    """A bounded excerpt of one knowledge document."""
    source: str
    text: str


@dataclass(frozen=True)
class ContextChunk:
    """A knowledge chunk scored against one query."""
    source: str
    text: str
    score: int


@dataclass(frozen=True)
class Persona:
    """Tone, instructions and knowledge visibility for one profile."""
    id: str
    name: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    tone: Optional[str] = None
    system_prompt: Optional[str] = None
    rules: Any = None
    notes: Any = None
    knowledge_files: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_record(cls, pid: str, record: Mapping[str, Any]) -> "Persona":
        name = record.get("name")
        aliases = record.get("aliases")
        files = record.get("knowledgeFiles", record.get("knowledge_files"))
        return cls(
            id=pid,
            name=name if isinstance(name, str) and name.strip() else None,
            aliases=tuple(
                a.strip().lower()
                for a in (aliases if isinstance(aliases, list) else [])
                if isinstance(a, str) and a.strip()
            ),
            tone=record.get("tone") or None,
            system_prompt=record.get("systemPrompt") or record.get("system_prompt") or None,
            rules=record.get("rules"),
            notes=record.get("notes"),
            knowledge_files=tuple(str(f) for f in files) if isinstance(files, list) else None,
        )

    def public_fields(self) -> Dict[str, Any]:
        """Fields that are safe to show the model. Unset ones are left out."""
        out = {
            "id": self.id,
            "name": self.name,
            "tone": self.tone,
            "rules": self.rules,
            "notes": self.notes,
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass(frozen=True)
class ProfileSet:
    """Canonical personas document: default pointer + ordered personas."""
    default: str = "default"
    profiles: Mapping[str, Persona] = field(default_factory=dict)


@dataclass(frozen=True)
class Snapshot:
    """Everything a request reads, as of the last reload."""
    profiles: ProfileSet
    chunks: Tuple[KnowledgeChunk, ...]
    legacy_profile: Mapping[str, Any]
    loaded_at: str
    version: int
