# Makes the folder importable as a package.
# Exports the retrieval / prompt-assembly surface for convenience.

from .chunker import chunk_text
from .knowledge import knowledge_pool_for, load_knowledge
from .matching import contains_term
from .profiles import load_profiles, normalize_profiles, resolve_profile
from .prompts import Grounding, build_assistant_instructions, build_grounding
from .retriever import Retriever, retrieve_by_keywords
from .snapshot import KnowledgeBase
from .types import ContextChunk, KnowledgeChunk, Persona, ProfileSet, Snapshot

__all__ = [
    "chunk_text",
    "contains_term",
    "load_knowledge",
    "knowledge_pool_for",
    "load_profiles",
    "normalize_profiles",
    "resolve_profile",
    "Retriever",
    "retrieve_by_keywords",
    "Grounding",
    "build_grounding",
    "build_assistant_instructions",
    "KnowledgeBase",
    "ContextChunk",
    "KnowledgeChunk",
    "Persona",
    "ProfileSet",
    "Snapshot",
]
