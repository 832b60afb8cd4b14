# Paragraph-packing chunker for knowledge documents.

from __future__ import annotations
import re
from typing import List

DEFAULT_MAX_LEN = 900

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_SEP = "\n\n"


def split_paragraphs(text: str) -> List[str]:
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text or "") if p.strip()]


def chunk_text(text: str, max_len: int = DEFAULT_MAX_LEN) -> List[str]:
    """
    Greedily pack paragraphs into chunks of at most max_len characters.
    A paragraph that is longer than max_len on its own becomes a chunk by
    itself; it is never split or merged with a neighbour.
    """
    chunks: List[str] = []
    buf = ""
    for p in split_paragraphs(text):
        if len(buf + _SEP + p) > max_len:
            if buf:
                chunks.append(buf)
            buf = p
        else:
            buf = buf + _SEP + p if buf else p
    if buf:
        chunks.append(buf)
    return chunks
