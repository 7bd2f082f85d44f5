import logging
import os
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

# Load .env from project root before anything reads credentials
ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / ".env")

from interviewprep_router.core.config import CFG, all_key_envs, routing_settings  # noqa: E402
from interviewprep_router.core.logging import setup_logging  # noqa: E402
from interviewprep_router.core.route import Router, build_router  # noqa: E402
from interviewprep_router.models import (  # noqa: E402
    ChatRequest,
    QuestionGenerateRequest,
    SessionCreateRequest,
)
from interviewprep_router.services.chat import run_chat, stream_chunks  # noqa: E402
from interviewprep_router.services.questions import generate_questions  # noqa: E402
from interviewprep_router.sessions.store import ChatSessionStore  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="InterviewPrep AI Router", version="0.1")

# CORS so the router can be called from the Next.js dev server (3000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Dependencies (overridden in tests) ---------------------------------------

@lru_cache(maxsize=1)
def get_router() -> Router:
    return build_router(CFG)


@lru_cache(maxsize=1)
def get_store() -> ChatSessionStore:
    return ChatSessionStore()


# --- Routes --------------------------------------------------------------------

@app.get("/healthz")
def health():
    return {"status": "ok"}


@app.get("/v1/debug/env-check")
def env_check(router: Router = Depends(get_router)) -> Dict[str, Any]:
    """
    Which credential env vars are set. Never echoes values.
    """
    environment = {
        name: "SET" if (os.getenv(name) or "").strip() else "NOT_SET"
        for name in all_key_envs(CFG)
    }
    available = [p.value for p in router.available_providers()]

    issues: List[str] = []
    if not len(router.key_pool):
        issues.append(f"No {router.fallback_provider.value} API keys set; fallback is unavailable")
    for pid in router.adapters:
        if pid.value not in available and pid != router.fallback_provider:
            issues.append(f"{pid.value} has no API key; calls will fall back to {router.fallback_provider.value}")

    return {
        "status": "Environment Check",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": environment,
        "providers_available": available,
        "key_pool_size": len(router.key_pool),
        "timeout_s": routing_settings(CFG)["timeout_s"],
        "issues": issues,
    }


@app.post("/v1/sessions", status_code=201)
def create_session(req: SessionCreateRequest, store: ChatSessionStore = Depends(get_store)):
    return store.create_session(user_id=req.user_id, title=req.title, category=req.category)


@app.get("/v1/sessions/{session_id}")
def get_session(session_id: str, store: ChatSessionStore = Depends(get_store)):
    session = store.get_session(session_id, with_messages=True)
    if session is None:
        raise HTTPException(status_code=404, detail="Chat session not found")
    return session


@app.post("/v1/chat")
def chat(
    req: ChatRequest,
    router: Router = Depends(get_router),
    store: ChatSessionStore = Depends(get_store),
):
    if not req.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    # 1) Find or create the session
    if req.session_id:
        session = store.get_session(req.session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Chat session not found")
        session_id = session["id"]
    else:
        session_id = store.create_session(user_id=req.user_id, category=req.category)["id"]

    # 2) Route + persist
    settings = routing_settings(CFG)
    body = run_chat(
        router,
        store,
        req,
        session_id,
        history_limit=settings["history_limit"],
        default_provider=settings["default_provider"],
    )

    # 3) Plain JSON or simulated streaming
    if req.stream:
        return StreamingResponse(
            stream_chunks(body["response"]),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Session-Id": session_id},
        )
    return body


@app.post("/v1/questions/generate", status_code=201)
def questions_generate(req: QuestionGenerateRequest, router: Router = Depends(get_router)):
    questions, source = generate_questions(
        router,
        domain=req.domain,
        difficulty=req.difficulty,
        qtype=req.type,
        count=req.count,
        sub_domain=req.sub_domain,
        tags=req.tags,
        companies=req.companies,
    )
    return {
        "success": True,
        "message": f"Generated {len(questions)} practice questions",
        "source": source,
        "generated": len(questions),
        "questions": questions,
    }
