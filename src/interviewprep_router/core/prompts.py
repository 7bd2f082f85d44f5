# src/interviewprep_router/core/prompts.py
from __future__ import annotations
from typing import Dict, List, Mapping

from interviewprep_router.core.config import category_prompts

DEFAULT_CATEGORY = "general"


def auto_category_for_messages(messages: List[Dict], explicit: str | None) -> str:
    """
    Decide which chat category to use.

    - If explicit and not "auto" → respect it.
    - Else look at user text and pick: coding_help / interview_prep /
      career_advice / technical_questions / general
    """
    if explicit and explicit != "auto":
        return explicit

    # Concatenate last user message(s)
    user_texts = [m.get("content", "") for m in messages if m.get("role") == "user"]
    text = " ".join(user_texts)[-512:].lower()

    if any(k in text for k in ["bug", "stack trace", "exception", "debug", "my code", "code review"]):
        return "coding_help"
    if any(k in text for k in ["interview", "mock", "behavioral", "star method"]):
        return "interview_prep"
    if any(k in text for k in ["career", "resume", "salary", "job offer", "promotion"]):
        return "career_advice"
    if any(k in text for k in ["algorithm", "complexity", "system design", "data structure"]):
        return "technical_questions"
    return DEFAULT_CATEGORY


def system_prompt_for(category: str, prompts: Mapping[str, str] | None = None) -> str:
    """System prompt for a category; unknown categories get the general one."""
    if prompts is None:
        prompts = category_prompts()
    return prompts.get(category) or prompts.get(DEFAULT_CATEGORY, "")
