# src/interviewprep_router/adapters/gemini.py
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from interviewprep_router.adapters.base import ProviderAdapter, first
from interviewprep_router.models import Credential


def flatten_transcript(messages: List[Dict[str, str]], system_prompt: str) -> str:
    """
    Gemini gets one text part: system prompt, blank line, then `role: content`
    lines for the conversation.
    """
    transcript = "\n".join(f"{m['role']}: {m['content']}" for m in messages)
    if system_prompt:
        return f"{system_prompt}\n\n{transcript}"
    return transcript


class GeminiAdapter(ProviderAdapter):
    """Google Generative Language `:generateContent`, key passed as ?key=."""

    def build_request(
        self,
        messages: List[Dict[str, str]],
        system_prompt: str,
        credential: Credential,
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        url = f"{self.cfg.endpoint}?key={credential.secret}"
        payload = {
            "contents": [
                {"parts": [{"text": flatten_transcript(messages, system_prompt)}]}
            ],
            "generationConfig": {
                "temperature": self.cfg.temperature,
                "topK": self.cfg.top_k,
                "topP": self.cfg.top_p,
                "maxOutputTokens": self.cfg.max_tokens,
            },
        }
        headers = {"Content-Type": "application/json"}
        return url, payload, headers

    def parse_response(self, data: Dict[str, Any]) -> Tuple[str, int]:
        candidate = first(data.get("candidates"))
        if not isinstance(candidate, dict):
            raise self._malformed("response w/o candidates", data)

        part = first((candidate.get("content") or {}).get("parts"))
        text = part.get("text") if isinstance(part, dict) else None
        if not isinstance(text, str) or not text:
            raise self._malformed("candidate w/o text", candidate)

        usage = data.get("usageMetadata") or {}
        return text, int(usage.get("totalTokenCount") or 0)
