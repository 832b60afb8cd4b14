# Simple, typed dataclasses shared across generator modules.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

CHAT_ROLES = ("user", "assistant")


@dataclass
class Message:
    """Single chat turn: system, user, or assistant."""
    role: str
    content: str


@dataclass
class ModelParams:
    """LLM parameters per request."""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class ChatResponse:
    """Final response from the generator."""
    text: str
    meta: Dict[str, Any] = field(default_factory=dict)
