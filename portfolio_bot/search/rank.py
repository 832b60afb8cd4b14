# Ranking helper for scored chunks.
# Stateless: drop non-positive scores, order by score (stable), clip to top_k.

from __future__ import annotations
from typing import Iterable, List
from .types import ContextChunk


def rank_and_clip(results: Iterable[ContextChunk], top_k: int = 6) -> List[ContextChunk]:
    kept = [r for r in results if r.score > 0]
    # sorted() is stable, so equal scores keep their pool order
    ranked = sorted(kept, key=lambda x: x.score, reverse=True)
    return ranked[:max(top_k, 0)]
