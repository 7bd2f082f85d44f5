# src/interviewprep_router/services/chat.py
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Iterator, List

import requests

from interviewprep_router.core.errors import RouterError
from interviewprep_router.core.fallback import fallback_reply
from interviewprep_router.core.logging import redact
from interviewprep_router.core.prompts import auto_category_for_messages, system_prompt_for
from interviewprep_router.core.route import Router
from interviewprep_router.models import ChatRequest, ProviderId
from interviewprep_router.sessions.store import ChatSessionStore

logger = logging.getLogger(__name__)


def run_chat(
    router: Router,
    store: ChatSessionStore,
    req: ChatRequest,
    session_id: str,
    history_limit: int = 10,
    default_provider: ProviderId = ProviderId.gemini,
) -> Dict[str, Any]:
    """
    One chat turn against an existing session.

    1) history (last `history_limit` messages) + new user message
    2) category → system prompt
    3) router call; if every provider fails, a canned fallback reply
    4) persist user + assistant messages with call metadata
    """
    history = store.get_messages(session_id, limit=history_limit)
    messages: List[Dict[str, str]] = [
        {"role": m["role"], "content": m["content"]} for m in history
    ]
    messages.append({"role": "user", "content": req.message})

    category = auto_category_for_messages(messages, explicit=req.category)
    system_prompt = system_prompt_for(category)

    t0 = time.time()
    try:
        result = router.call(req.provider or default_provider, messages, system_prompt)
        meta = {
            "provider": result.provider_used.value,
            "model": result.model,
            "tokens": result.tokens,
            "cost_usd": result.cost_usd,
            "response_time_ms": result.response_time_ms,
        }
        content = result.content
        fallback_used = result.fallback_used
    except (RouterError, requests.RequestException) as ex:
        logger.error("All providers failed for session %s: %s", session_id, redact(ex))
        content = fallback_reply(req.message)
        meta = {
            "provider": "fallback",
            "model": "fallback",
            "tokens": 0,
            "cost_usd": 0.0,
            "response_time_ms": int((time.time() - t0) * 1000),
        }
        fallback_used = True

    store.add_message(session_id, "user", req.message)
    store.add_message(session_id, "assistant", content, **meta)

    return {
        "success": True,
        "session_id": session_id,
        "category": category,
        "response": content,
        "fallback_used": fallback_used,
        **meta,
    }


def stream_chunks(content: str, words_per_chunk: int = 3) -> Iterator[str]:
    """Server-sent events: a few words per event, then {"done": true}."""
    words = content.split(" ")
    for i in range(0, len(words), words_per_chunk):
        chunk = " ".join(words[i:i + words_per_chunk]) + " "
        yield f"data: {json.dumps({'content': chunk})}\n\n"
    yield f"data: {json.dumps({'done': True})}\n\n"
