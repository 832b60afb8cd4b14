# Keyword retriever over in-memory knowledge chunks.
#
# A bag-of-substrings heuristic: +1 for every distinct query term (3+ chars)
# found anywhere in a chunk, plus a flat bonus when the query mentions the
# chunk's file name. No tf-idf, no stemming, no embeddings.

from __future__ import annotations

import os
import re
from typing import List, Sequence

from .rank import rank_and_clip
from .types import ContextChunk, KnowledgeChunk

DEFAULT_TOP_K = 6
FILENAME_BONUS = 2
MIN_TERM_LEN = 3

_NON_WORD = re.compile(r"\W+")


def query_terms(query: str) -> List[str]:
    q = (query or "").lower()
    terms = [t for t in _NON_WORD.split(q) if len(t) >= MIN_TERM_LEN]
    return list(dict.fromkeys(terms))


def source_hint(source: str) -> str:
    """File name without extension, lowercased ("Rates.md" -> "rates")."""
    return os.path.splitext(source)[0].lower()


class Retriever:
    def __init__(self, top_k: int = DEFAULT_TOP_K, filename_bonus: int = FILENAME_BONUS):
        self.top_k = top_k
        self.filename_bonus = filename_bonus

    def _score(self, q: str, terms: Sequence[str], chunk: KnowledgeChunk) -> int:
        text = chunk.text.lower()
        score = sum(1 for term in terms if term in text)
        if source_hint(chunk.source) in q:
            score += self.filename_bonus
        return score

    def score(self, query: str, chunk: KnowledgeChunk) -> int:
        q = (query or "").lower()
        return self._score(q, query_terms(q), chunk)

    def retrieve(self, query: str, chunks: Sequence[KnowledgeChunk]) -> List[ContextChunk]:
        q = (query or "").lower()
        terms = query_terms(q)
        scored = [
            ContextChunk(source=ch.source, text=ch.text, score=self._score(q, terms, ch))
            for ch in chunks
        ]
        return rank_and_clip(scored, top_k=self.top_k)


def retrieve_by_keywords(query: str, chunks: Sequence[KnowledgeChunk], k: int = DEFAULT_TOP_K) -> List[ContextChunk]:
    return Retriever(top_k=k).retrieve(query, chunks)
