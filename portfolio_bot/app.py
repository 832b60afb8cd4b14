# ============================================================
# Portfolio Bot FastAPI App
# ------------------------------------------------------------
# This app wires everything together:
#   - Knowledge snapshot (personas + markdown chunks) with reload
#   - Keyword retrieval + grounding prompt per request
#   - Support for Ollama, OpenAI, or Echo clients
#   - Mailgun-backed contact form and meeting requests
# ============================================================

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

# --- Local imports ---
from portfolio_bot.settings import settings
from portfolio_bot.logger import get_logger
from portfolio_bot.search import KnowledgeBase, build_grounding, knowledge_pool_for, resolve_profile, Retriever
from portfolio_bot.generate import ChatGenerator, ChatResponse
from portfolio_bot.generate.clients.echo_dev_client import EchoDevClient
from portfolio_bot.mail import build_mailer

logger = get_logger("portfolio_bot.app")

# ------------------------------------------------------------
# 🔧 Model client selection
# ------------------------------------------------------------
if settings.USE_OLLAMA:
    from portfolio_bot.generate.clients.ollama_client import OllamaClient
    model_client = OllamaClient(model=settings.OLLAMA_MODEL, host=settings.OLLAMA_HOST)
elif settings.OPENAI_API_KEY:
    from portfolio_bot.generate.clients.openai_client import OpenAIClient
    model_client = OpenAIClient(model=settings.OPENAI_MODEL, api_key=settings.OPENAI_API_KEY)
else:
    logger.warning("No OPENAI_API_KEY and USE_OLLAMA is off; replies will be echoed")
    model_client = EchoDevClient()

chat_gen = ChatGenerator(
    model_client=model_client,
    config_path=settings.GENERATOR_CONFIG,
    history_limit=settings.HISTORY_LIMIT,
)

# ------------------------------------------------------------
# 🧠 Knowledge + mail
# ------------------------------------------------------------
knowledge_base = KnowledgeBase(
    profiles_path=settings.PROFILES_PATH,
    knowledge_dir=settings.KNOWLEDGE_DIR,
    legacy_profile_path=settings.LEGACY_PROFILE_PATH,
    chunk_max_len=settings.CHUNK_MAX_LEN,
)

mailer = build_mailer(settings)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    kb = knowledge_base
    kb.reload()
    kb.start_auto_reload(settings.KNOWLEDGE_RELOAD_SECONDS)
    try:
        yield
    finally:
        kb.stop_auto_reload()

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title="Portfolio Bot API", version="1.0", lifespan=lifespan)

# the site front-end is hosted on a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # non-string messages get the same 400 as a missing one
    message: Optional[Any] = None
    # malformed turns (or a non-list history) are dropped, not rejected
    history: Optional[Any] = None
    profile_id: Optional[str] = Field(default=None, alias="profileId")


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class MeetingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    preferred_date_time: Optional[str] = Field(default=None, alias="preferredDateTime")
    project_description: Optional[str] = Field(default=None, alias="projectDescription")


def _all_present(*values: Optional[str]) -> bool:
    return all(isinstance(v, str) and v.strip() for v in values)


def _require_mailer():
    if mailer is None:
        raise HTTPException(
            status_code=500,
            detail={
                "error": "Mailgun is not configured",
                "message": "Missing MAILGUN_API_KEY / MAILGUN_DOMAIN / OWNER_EMAIL in server environment.",
            },
        )
    return mailer

# ------------------------------------------------------------
# 💬 Main chat route
# ------------------------------------------------------------
@app.post("/api/chat")
def chat(req: ChatRequest):
    if not isinstance(req.message, str) or not req.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    # one snapshot for the whole request, even if a reload lands mid-way
    snap = knowledge_base.current()
    try:
        grounding = build_grounding(
            snap,
            req.message,
            req.profile_id,
            top_k=settings.RETRIEVAL_TOP_K,
            owner_name=settings.OWNER_NAME,
        )
        out: ChatResponse = chat_gen.chat(
            user_message=req.message,
            history=req.history if isinstance(req.history, list) else None,
            instructions=grounding.text,
            temperature=settings.TEMPERATURE,
            max_tokens=settings.MAX_OUTPUT_TOKENS,
        )
    except Exception as e:
        logger.exception("Chat API Error")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to process chat message", "message": str(e)},
        )

    return {
        "response": out.text,
        "success": True,
        "meta": {
            "activeProfileId": grounding.persona.id,
            "knowledgeLoadedAt": snap.loaded_at,
            "chunks": len(snap.chunks),
            "sources": [c.source for c in grounding.chunks],
            "engine": out.meta.get("engine") if out.meta else None,
        },
    }

# ------------------------------------------------------------
# 🔎 Retrieval-only route (debug)
# ------------------------------------------------------------
@app.get("/api/retrieve")
def retrieve_endpoint(
    q: str = Query(..., description="Search query"),
    profileId: Optional[str] = None,
    top_k: int = 6,
):
    snap = knowledge_base.current()
    persona = resolve_profile(snap.profiles, profileId, q)
    pool = knowledge_pool_for(persona, snap.chunks)
    hits = Retriever(top_k=top_k).retrieve(q, pool)
    return {
        "query": q,
        "activeProfileId": persona.id,
        "docs": [{"source": c.source, "score": c.score, "text": c.text} for c in hits],
    }

# ------------------------------------------------------------
# 👤 Personas + reload
# ------------------------------------------------------------
@app.get("/api/profiles")
def list_profiles():
    snap = knowledge_base.current()
    return {
        "success": True,
        "default": snap.profiles.default or "default",
        "profiles": list(snap.profiles.profiles.keys()),
    }


@app.get("/api/reload-knowledge")
def reload_knowledge():
    try:
        snap = knowledge_base.reload()
    except Exception as e:
        logger.exception("Knowledge reload failed")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to reload knowledge", "message": str(e)},
        )
    return {
        "success": True,
        "message": "Knowledge reloaded",
        "meta": {
            "defaultProfile": snap.profiles.default or "default",
            "profiles": len(snap.profiles.profiles),
            "knowledgeLoadedAt": snap.loaded_at,
            "chunks": len(snap.chunks),
        },
    }

# ------------------------------------------------------------
# ✉️ Contact form + meetings
# ------------------------------------------------------------
@app.post("/api/contact")
def contact(req: ContactRequest):
    m = _require_mailer()
    if not _all_present(req.name, req.email, req.subject, req.message):
        raise HTTPException(status_code=400, detail="All fields are required")
    try:
        m.send_contact_notification(req.name, req.email, req.subject, req.message)
    except Exception as e:
        logger.exception("Contact Form Error")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to send message", "message": str(e)},
        )
    return {"success": True, "message": "Message sent successfully"}


@app.post("/api/schedule-meeting")
def schedule_meeting(req: MeetingRequest):
    m = _require_mailer()
    if not _all_present(req.name, req.email, req.preferred_date_time, req.project_description):
        raise HTTPException(status_code=400, detail="All fields are required")
    try:
        m.send_meeting_request(req.name, req.email, req.preferred_date_time, req.project_description)
    except Exception as e:
        logger.exception("Meeting Scheduling Error")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to schedule meeting", "message": str(e)},
        )
    return {"success": True, "message": "Meeting request submitted successfully"}

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/api/health")
def api_health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.APP_NAME,
    }


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}


@app.get("/")
def hello():
    return {"message": "Portfolio Bot service running."}
