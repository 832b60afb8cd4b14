# Client for Ollama local inference.
# Flattens the chat into one prompt and calls /api/generate.

import requests
from typing import List, Tuple, Dict, Any, Optional
from ..types import Message, ModelParams


class OllamaClient:
    def __init__(self, model: str = "mistral:7b-instruct", host: Optional[str] = None):
        self.model = model
        self.host = host or "http://localhost:11434"

    def generate(self, messages: List[Message], params: ModelParams) -> Tuple[str, Dict[str, Any]]:
        prompt = self._compose_prompt(messages)
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": float(params.temperature if params.temperature is not None else 0.6),
                "num_predict": int(params.max_tokens or 700),
            },
        }
        url = f"{self.host}/api/generate"
        resp = requests.post(url, json=payload, timeout=180)
        resp.raise_for_status()
        data = resp.json()
        return data.get("response", "").strip(), {"engine": "ollama", "model": self.model}

    def _compose_prompt(self, messages: List[Message]) -> str:
        parts = []
        for m in messages:
            parts.append(f"{m.role.upper()}:\n{m.content.strip()}\n")
        return "\n".join(parts)
