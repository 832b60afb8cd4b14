"""Load markdown knowledge files into tagged chunks."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from portfolio_bot.logger import get_logger
from .chunker import DEFAULT_MAX_LEN, chunk_text
from .types import KnowledgeChunk, Persona

logger = get_logger(__name__)

KNOWLEDGE_EXT = ".md"


def load_knowledge(directory: str, max_len: int = DEFAULT_MAX_LEN) -> List[KnowledgeChunk]:
    """
    Chunk every *.md file under `directory` (not recursive), sorted by name.
    Any read failure drops the whole pool: knowledge is best-effort.
    """
    try:
        files = sorted(
            p for p in Path(directory).iterdir()
            if p.name.endswith(KNOWLEDGE_EXT) and p.is_file()
        )
        out: List[KnowledgeChunk] = []
        for p in files:
            text = p.read_text(encoding="utf-8")
            out.extend(KnowledgeChunk(source=p.name, text=c) for c in chunk_text(text, max_len))
        return out
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Knowledge not loaded from {directory}: {e}")
        return []


def knowledge_pool_for(persona: Persona, chunks: Sequence[KnowledgeChunk]) -> List[KnowledgeChunk]:
    # an allow-list keeps private files (e.g. one persona's notes) out of other personas
    if persona.knowledge_files is not None:
        allow = set(persona.knowledge_files)
        return [c for c in chunks if c.source in allow]
    return list(chunks)
