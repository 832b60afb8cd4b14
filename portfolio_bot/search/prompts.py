# Prompt fragments and the grounding-text assembler.
# The assembled text goes to the model as its system instructions; the user's
# message and history are sent separately by the generator.

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional

from .knowledge import knowledge_pool_for
from .profiles import resolve_profile
from .retriever import DEFAULT_TOP_K, Retriever
from .types import ContextChunk, Persona, Snapshot

DEFAULT_OWNER_NAME = "Sankalp Singh"
DEFAULT_TONE = "professional, confident, concise"
KNOWLEDGE_SEPARATOR = "\n\n---\n\n"

SYSTEM_PROMPT_TEMPLATE = """\
You are the AI assistant for {owner}, a Full Stack Developer based in Dallas, Texas.

Your role is to:
1. Answer questions about {owner}'s experience, skills, and services professionally
2. Provide information about availability and rates
3. Help schedule meetings with potential clients
4. Maintain a highly professional, helpful, and knowledgeable tone

IMPORTANT GUIDELINES:
- Always be professional, courteous, and helpful
- Provide accurate information about {owner}'s skills and experience
- When asked about rates, provide the info but suggest a consultation for detailed quotes
- For meeting requests, guide the user to provide: name, email, preferred date/time, and brief project description
- Never make up information - if you don't know something, say you'll have {owner} follow up
- Keep responses concise but informative (2-4 paragraphs max)
- Use proper business communication style
- Do NOT use markdown headers (##). Use plain text with line breaks.

If user asks something personal/biographical and it is not in the knowledge base, do NOT guess."""

NO_KNOWLEDGE_TEMPLATE = """\
{system_prompt}

ACTIVE PROFILE:
{profile_json}

VOICE:
- {tone}
- Be specific. Avoid generic filler.
- Ask ONE follow-up question if the user's question is missing detail.
- Max 6-10 sentences unless user asks for more.

RULES:
- Use the PROFILE + KNOWLEDGE as the only source of truth.
- If missing, say: "I don't want to guess. If you share a bit more detail, I'll answer accurately."
- Do NOT invent personal facts or memories.
- No markdown headers like "##". Plain text with line breaks."""

WITH_KNOWLEDGE_TEMPLATE = """\
{system_prompt}

You are speaking as the assistant for: {name}

ACTIVE PROFILE:
{profile_json}

VOICE:
- {tone}
- Be specific. Avoid generic filler.
- Max 6-10 sentences unless user asks for more.
- Ask ONE follow-up question if needed.

RULES:
- Use the KNOWLEDGE excerpts as source of truth.
- Do not invent details or memories.
- No markdown headers like "##". Plain text with line breaks.

KNOWLEDGE (most relevant excerpts):
{knowledge}"""


def default_system_prompt(owner_name: str = DEFAULT_OWNER_NAME) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(owner=owner_name)


def render_profile(persona: Persona) -> str:
    # only id/name/tone/rules/notes ever reach the model
    # YAML personas can carry dates and other non-JSON scalars
    return json.dumps(persona.public_fields(), indent=2, ensure_ascii=False, default=str)


def render_knowledge(chunks: List[ContextChunk]) -> str:
    return KNOWLEDGE_SEPARATOR.join(f"[{c.source}]\n{c.text}" for c in chunks)


@dataclass
class Grounding:
    text: str
    persona: Persona
    chunks: List[ContextChunk] = field(default_factory=list)


def build_grounding(
    snapshot: Snapshot,
    user_message: str,
    profile_id: Optional[str] = None,
    top_k: int = DEFAULT_TOP_K,
    owner_name: str = DEFAULT_OWNER_NAME,
    retriever: Optional[Retriever] = None,
) -> Grounding:
    active = resolve_profile(snapshot.profiles, profile_id, user_message)
    legacy = snapshot.legacy_profile

    name = active.name or legacy.get("preferredName") or legacy.get("name") or owner_name
    tone = active.tone or legacy.get("tone") or DEFAULT_TONE
    system_prompt = active.system_prompt or default_system_prompt(owner_name)

    pool = knowledge_pool_for(active, snapshot.chunks)
    top = (retriever or Retriever(top_k=top_k)).retrieve(user_message, pool)

    if not top:
        text = NO_KNOWLEDGE_TEMPLATE.format(
            system_prompt=system_prompt,
            profile_json=render_profile(active),
            tone=tone,
        )
    else:
        text = WITH_KNOWLEDGE_TEMPLATE.format(
            system_prompt=system_prompt,
            name=name,
            profile_json=render_profile(active),
            tone=tone,
            knowledge=render_knowledge(top),
        )
    return Grounding(text=text.strip(), persona=active, chunks=top)


def build_assistant_instructions(
    snapshot: Snapshot,
    user_message: str,
    profile_id: Optional[str] = None,
    **kwargs,
) -> str:
    return build_grounding(snapshot, user_message, profile_id, **kwargs).text
