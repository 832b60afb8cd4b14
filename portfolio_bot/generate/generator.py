# ChatGenerator: trims caller-supplied history, wraps it with the grounding
# instructions and the new user message, and hands everything to whichever
# model client is configured (OpenAI, Ollama, Echo).

from __future__ import annotations
import os
from typing import Any, Iterable, List, Optional

import yaml

from portfolio_bot.logger import get_logger
from .types import CHAT_ROLES, Message, ChatResponse, ModelParams

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 20
DEFAULT_TEMPERATURE = 0.6
DEFAULT_MAX_TOKENS = 700


def _as_message(turn: Any) -> Optional[Message]:
    if isinstance(turn, Message):
        role, content = turn.role, turn.content
    elif isinstance(turn, dict):
        role, content = turn.get("role"), turn.get("content")
    else:
        role, content = getattr(turn, "role", None), getattr(turn, "content", None)
    if role in CHAT_ROLES and isinstance(content, str):
        return Message(role=role, content=content)
    return None


def trim_history(history: Optional[Iterable[Any]], limit: int = DEFAULT_HISTORY_LIMIT) -> List[Message]:
    """Keep well-formed user/assistant turns, most recent `limit` of them."""
    if not history or limit <= 0:
        return []
    turns = [m for m in (_as_message(t) for t in history) if m is not None]
    return turns[-limit:]


class ChatGenerator:
    def __init__(self, model_client, config_path: Optional[str] = None, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self.model_client = model_client
        self.config_path = config_path
        self.history_limit = history_limit
        self.cfg = self._load_config()

    def _load_config(self):
        if not self.config_path or not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def build_messages(self, user_message: str, history: Optional[Iterable[Any]], instructions: str) -> List[Message]:
        trimmed = trim_history(history, self.history_limit)
        return [
            Message(role="system", content=instructions),
            *trimmed,
            Message(role="user", content=user_message),
        ]

    def chat(
        self,
        user_message: str,
        history: Optional[Iterable[Any]],
        instructions: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> ChatResponse:
        """Main entry point for generation."""
        messages = self.build_messages(user_message, history, instructions)

        params = ModelParams(
            temperature=temperature if temperature is not None else self.cfg.get("temperature", DEFAULT_TEMPERATURE),
            max_tokens=max_tokens or self.cfg.get("max_tokens", DEFAULT_MAX_TOKENS),
        )

        logger.debug(f"Generating with {len(messages) - 2} history turns, {len(instructions)} chars of instructions")
        response_text, meta = self.model_client.generate(messages, params)
        return ChatResponse(text=(response_text or "").strip(), meta=meta)
