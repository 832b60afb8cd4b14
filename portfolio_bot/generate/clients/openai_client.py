# Client for the OpenAI Chat Completions API.
# Same interface as OllamaClient: generate(messages, params) -> (text, meta).

import os
from typing import List, Tuple, Dict, Any, Optional
from openai import OpenAI
from ..types import Message, ModelParams


class OpenAIClient:
    def __init__(self, model: str = "gpt-4o-mini", api_key: Optional[str] = None):
        self.model = model
        self.client = OpenAI(api_key=api_key or os.getenv("OPENAI_API_KEY"))

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        formatted = [{"role": m.role, "content": m.content} for m in messages]
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=formatted,
            temperature=params.temperature if params.temperature is not None else 0.6,
            max_tokens=params.max_tokens or 700,
        )
        text = (resp.choices[0].message.content or "").strip()
        meta = {"engine": "openai", "model": self.model}
        return text, meta
